"""resume_parse_framework.py
Holds framework to orchestrate FileValidator, ContentExtractor, SectionSegmenter,
ContentMapper and ResumeValidator and return a ParseResult per uploaded file.
"""
import warnings
import multiprocessing
from concurrent.futures import ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Dict, Iterable, List, Optional, Union

from resume_importer.config import SCANNER_DEFAULTS
from resume_importer.exceptions import (
    ExtractionFailureError,
    FileValidationError,
    UnsupportedFileTypeError,
)
from resume_importer.logging import LoggerFactory
from resume_importer.models import (
    FieldError,
    FileUpload,
    ParseOptions,
    ParseResult,
    ParsingStats,
)

from resume_importer.parse_classes.file_validator.file_validator import FileValidator
from resume_importer.parse_classes.content_extractor.content_extractor import ContentExtractor
from resume_importer.parse_classes.section_segmenter.section_segmenter import SectionSegmenter
from resume_importer.parse_classes.content_mapper.content_mapper import ContentMapper
from resume_importer.parse_classes.resume_validator.resume_validator import (
    ResumeValidator,
    field_completeness,
)
from resume_importer.parse_classes.scoring.confidence_scorer import (
    ConfidenceScorer,
    WeightedConfidenceScorer,
)

logger_factory = LoggerFactory()
framework_logger = logger_factory.get_logger(
    name="resume_parser_framework",
    logger_type="default",
    console=False,
)
parser_error_logger = logger_factory.get_logger(
    name="parser_errors",
    logger_type="parser_error",
    console=False,
)

OptionsInput = Union[ParseOptions, Dict[str, Any], None]


class ResumeParserFramework:
    """
    Orchestrates the complete resume parsing process, from uploaded file to
    a ParseResult.

    Each file moves through: Uploaded -> Validated -> Extracted -> Segmented ->
    Mapped -> Succeeded / Failed. Every expected failure becomes a ParseResult
    with `success=False`; only malformed ParseOptions raise
    (ParseOptionsConfigError).

    All collaborators can be injected, which keeps tests free of real files and
    spaCy models.

    Parameters
    ----------
    file_validator : FileValidator, optional
        Enforces mimetype, size and filename rules.
    content_extractor : ContentExtractor, optional
        Turns the file buffer into raw text.
    section_segmenter : SectionSegmenter, optional
        Splits raw text into a header region and sections.
    content_mapper : ContentMapper, optional
        Builds ResumeData and the mapping confidence.
    resume_validator : ResumeValidator, optional
        Checks ResumeData and computes the validation confidence.
    scorer : ConfidenceScorer, optional
        Shared by the default mapper/validator and used for the final confidence.
    max_threads : int, optional
        Thread cap for batch parsing. Defaults to
        ``min(SCANNER_DEFAULTS.MAX_THREADS, cpu count)``.
    parse_timeout_seconds : float, optional
        Wall-clock limit for one file inside a batch.

    Example
    -------
    >>> framework = ResumeParserFramework()
    >>> result = framework.parse_resume(FileUpload.from_path("path/to/resume.pdf"))
    >>> result.success, result.data.personal_info.full_name
    """

    def __init__(
        self,
        file_validator: Optional[FileValidator] = None,
        content_extractor: Optional[ContentExtractor] = None,
        section_segmenter: Optional[SectionSegmenter] = None,
        content_mapper: Optional[ContentMapper] = None,
        resume_validator: Optional[ResumeValidator] = None,
        scorer: Optional[ConfidenceScorer] = None,
        max_threads: Optional[int] = None,
        parse_timeout_seconds: float = SCANNER_DEFAULTS.PARSE_TIMEOUT_SECONDS,
    ):
        self.scorer = scorer or WeightedConfidenceScorer()
        self.file_validator = file_validator or FileValidator()
        self.content_extractor = content_extractor or ContentExtractor()
        self.section_segmenter = section_segmenter or SectionSegmenter()
        self.content_mapper = content_mapper or ContentMapper(scorer=self.scorer)
        self.resume_validator = resume_validator or ResumeValidator(scorer=self.scorer)
        self.parse_timeout_seconds = parse_timeout_seconds

        # Determine and set max available threads (to parallelize batch parsing)
        self._determine_max_threads(max_threads)

    def _determine_max_threads(self, max_threads: Optional[int]) -> None:
        """
        Validate and set `self.max_threads` for batch parsing.

        Args:
            max_threads (int | None): The requested maximum number of concurrent
                threads. None selects `min(SCANNER_DEFAULTS.MAX_THREADS, cpu count)`.

        Warnings:
            - Issues a warning if `max_threads` is not positive.
            - Issues a warning if `max_threads` exceeds the available CPU cores.
        """
        available_cores = multiprocessing.cpu_count()

        if max_threads is None:
            self.max_threads = max(1, min(SCANNER_DEFAULTS.MAX_THREADS, available_cores))
            return

        if max_threads <= 0:
            warnings.warn(f"Requested max_threads={max_threads} is invalid. Defaulting to 1 thread.")
            max_threads = 1

        # Don't exceed available core amount
        if max_threads > available_cores:
            warnings.warn(
                f"Requested max_threads={max_threads} exceeds available cores "
                f"({available_cores}). Using {available_cores} instead."
            )
            max_threads = available_cores

        self.max_threads = max_threads

    # ----------------------
    # Public interface
    # ----------------------
    def parse_resume(self, file: FileUpload, options: OptionsInput = None) -> ParseResult:
        """
        Full pipeline: validate -> extract text -> segment -> map -> validate -> score.

        Args:
            file (FileUpload): The uploaded resume.
            options (ParseOptions | dict | None): Parse options. Dicts are converted
                with ParseOptions.from_dict().

        Returns:
            ParseResult: Never raises for bad files; failures are reported in `errors`.

        Raises:
            ParseOptionsConfigError: If `options` is malformed.
        """
        parse_options = self._resolve_options(options)
        filename = getattr(file, "filename", None) or "<unnamed>"

        try:
            return self._run_pipeline(file, parse_options)
        except Exception as e:
            parser_error_logger.error(f"[{filename}] Unexpected parsing failure: {e}", exc_info=True)
            return ParseResult(
                success=False,
                confidence=0.0,
                errors=[FieldError(field="file", message=f"Resume parsing failed: {e}")],
            )

    def parse_multiple_resumes(
        self,
        files: Iterable[FileUpload],
        options: OptionsInput = None,
    ) -> List[ParseResult]:
        """
        Parse several files concurrently. Results are returned in input order and
        one failing (or timed out) file never affects the others.

        Args:
            files (Iterable[FileUpload]): Uploaded resumes.
            options (ParseOptions | dict | None): Options applied to every file.

        Returns:
            List[ParseResult]: One result per file, same positions as `files`.

        Raises:
            ParseOptionsConfigError: If `options` is malformed.
        """
        files = list(files)
        if not files:
            return []
        parse_options = self._resolve_options(options)

        results: List[Optional[ParseResult]] = [None] * len(files)
        with ThreadPoolExecutor(max_workers=min(len(files), self.max_threads)) as executor:
            # Map each returned Future to its position in `files`
            future_to_index = {
                executor.submit(self._parse_with_timeout, file, parse_options): index
                for index, file in enumerate(files)
            }
            for future in as_completed(future_to_index):
                results[future_to_index[future]] = future.result()

        return results

    def get_parsing_stats(self, result: ParseResult) -> ParsingStats:
        """Summarize a ParseResult for reporting."""
        data = result.data
        return ParsingStats(
            confidence=result.confidence,
            sections_found=len(data.sections) if data else 0,
            errors_count=len(result.errors),
            warnings_count=len(result.warnings),
            completeness=round(field_completeness(data), 4) if data else 0.0,
        )

    @staticmethod
    def get_supported_file_types() -> List[str]:
        return FileValidator().get_supported_file_types()

    @staticmethod
    def is_supported_file_type(mimetype: str) -> bool:
        return FileValidator().is_supported_file_type(mimetype)

    @staticmethod
    def get_default_parse_options() -> ParseOptions:
        return ParseOptions()

    # ----------------------
    # Pipeline
    # ----------------------
    def _run_pipeline(self, file: FileUpload, parse_options: ParseOptions) -> ParseResult:
        filename = file.filename or "<unnamed>"
        self._log_transition(filename, "Uploaded")

        try:
            self.file_validator.validate(file)
        except FileValidationError as e:
            self._log_failure(filename, "validation", e)
            return ParseResult(success=False, errors=[FieldError(field="file", message=str(e))])
        self._log_transition(filename, "Validated")

        try:
            extracted = self.content_extractor.extract_content(file)
        except (ExtractionFailureError, UnsupportedFileTypeError) as e:
            self._log_failure(filename, "extraction", e)
            return ParseResult(
                success=False,
                errors=[FieldError(field="file", message=f"Content extraction failed: {e}")],
            )
        self._log_transition(filename, "Extracted")

        document = self.section_segmenter.segment_document(
            extracted.text, parse_options.section_mapping
        )
        self._log_transition(filename, "Segmented", f"{len(document.sections)} sections")

        mapping = self.content_mapper.map(document.header_text, document.sections, extracted.text)
        self._log_transition(filename, "Mapped", f"mapping confidence {mapping.confidence:.2f}")

        validation = self.resume_validator.validate_resume_data(mapping.resume_data)

        errors = _dedupe(mapping.errors + validation.errors)
        result_warnings = _dedupe(mapping.warnings + validation.warnings)
        confidence = round(self.scorer.combine(mapping.confidence, validation.confidence), 4)

        threshold = parse_options.confidence_threshold
        meets_threshold = confidence >= threshold
        if not meets_threshold:
            errors.append(
                FieldError(
                    field="confidence",
                    message=f"Parsing confidence ({confidence:.2f}) below threshold ({threshold})",
                )
            )
        success = meets_threshold and not (parse_options.strict_validation and errors)

        if success:
            self._log_transition(filename, "Succeeded", f"confidence {confidence:.2f}")
        else:
            framework_logger.warning(
                f"[{filename}] Failed: confidence {confidence:.2f}, {len(errors)} error(s)"
            )

        return ParseResult(
            success=success,
            confidence=confidence,
            data=mapping.resume_data,
            parsed={"raw_text": extracted.text} if parse_options.include_raw_text else None,
            errors=errors,
            warnings=result_warnings,
        )

    def _parse_with_timeout(self, file: FileUpload, parse_options: ParseOptions) -> ParseResult:
        """
        Run parse_resume() on its own worker thread and give up after
        `self.parse_timeout_seconds`. A timed out parse keeps running in the
        background; its result is discarded.
        """
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self.parse_resume, file, parse_options)
        try:
            return future.result(timeout=self.parse_timeout_seconds)
        except FutureTimeoutError:
            filename = getattr(file, "filename", None) or "<unnamed>"
            framework_logger.warning(
                f"[{filename}] Failed: timed out after {self.parse_timeout_seconds:g}s"
            )
            return ParseResult(
                success=False,
                errors=[
                    FieldError(
                        field="file",
                        message=f"Parsing timed out after {self.parse_timeout_seconds:g}s",
                    )
                ],
            )
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    # ----------------------
    # Helpers
    # ----------------------
    @staticmethod
    def _resolve_options(options: OptionsInput) -> ParseOptions:
        if isinstance(options, ParseOptions):
            return options
        return ParseOptions.from_dict(options)

    @staticmethod
    def _log_transition(filename: str, state: str, detail: str = "") -> None:
        message = f"[{filename}] -> {state}"
        if detail:
            message += f" ({detail})"
        framework_logger.debug(message)

    @staticmethod
    def _log_failure(filename: str, stage: str, error: Exception) -> None:
        framework_logger.warning(f"[{filename}] Failed during {stage}: {error}")


def _dedupe(values: List) -> List:
    """Drop exact duplicates, keeping first occurrence order."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result
