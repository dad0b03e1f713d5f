"""config.py
Holds various defaults for different resume importer settings.
"""

import os
from dataclasses import dataclass, field
from typing import Dict, List

from dotenv import load_dotenv

load_dotenv()  # load .env

# --------------------------------------------------------------
# MIMETYPES
# --------------------------------------------------------------
PDF_MIMETYPE = "application/pdf"
DOCX_MIMETYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIMETYPE = "application/msword"


# --------------------------------------------------------------
# SETUP DEFAULT VALUES
# --------------------------------------------------------------
@dataclass
class ScannerDefaults:
    """
    Default settings for parameters used across the resume_importer repo.
    """
    # ---- FileValidator settings ----
    MAX_FILE_SIZE_MB: float = field(
        default = 10.0,
        metadata = {
            "description": "Maximum allowed upload size in MB (MiB)"
    })
    SUPPORTED_MIMETYPES: List[str] = field(
        default_factory = lambda: [PDF_MIMETYPE, DOCX_MIMETYPE, DOC_MIMETYPE],
        metadata = {
            "description": "Mimetypes accepted by the parsing pipeline"
    })
    EXTENSION_MIMETYPES: Dict[str, str] = field(
        default_factory = lambda: {
            ".pdf": PDF_MIMETYPE,
            ".docx": DOCX_MIMETYPE,
            ".doc": DOC_MIMETYPE,
        },
        metadata = {
            "description": "File extension to mimetype lookup used for local files"
    })

    # ---- SectionSegmenter settings ----
    HEADING_MAX_LENGTH: int = field(
        default = 40,
        metadata = {
            "description": "Longest line (in characters) treated as an unlabelled heading"
    })
    HEADING_MAX_WORDS: int = field(
        default = 5,
        metadata = {
            "description": "Most words an unlabelled heading may contain"
    })

    # ---- ParseOptions settings ----
    DEFAULT_CONFIDENCE_THRESHOLD: float = field(
        default = 0.3,
        metadata = {
            "description": "Minimum confidence for a parse to be reported as successful"
    })

    # ---- ConfidenceScorer settings ----
    MIN_FIELD_WEIGHT: int = field(
        default = 20,
        metadata = {
            "description": "Floor for the content-length weight of a single extracted field"
    })
    VALIDATION_WEIGHTS: Dict[str, float] = field(
        default_factory = lambda: {
            "completeness": 0.5,
            "recognized_sections": 0.3,
            "content_richness": 0.2,
        },
        metadata = {
            "description": "Weights of the validator confidence formula"
    })
    MAPPING_CONFIDENCE_WEIGHT: float = field(
        default = 0.5,
        metadata = {
            "description": "Share of the mapping confidence in the final confidence"
    })

    # ---- ResumeParserFramework settings ----
    MAX_THREADS: int = field(
        default = int(os.getenv("RESUME_IMPORTER_MAX_THREADS", "4")),
        metadata = {
            "description": "Maximum number of threads used for batch parsing"
    })
    PARSE_TIMEOUT_SECONDS: float = field(
        default = float(os.getenv("RESUME_IMPORTER_PARSE_TIMEOUT", "5.0")),
        metadata = {
            "description": "Wall-clock timeout for a single file inside a batch"
    })
    MAX_BATCH_SIZE: int = field(
        default = 5,
        metadata = {
            "description": "Maximum number of files accepted by one batch request"
    })

    # ---- NameExtractor settings ----
    SPACY_MODEL_NAME: str = field(
        default = "en_core_web_sm",
        metadata = {
            "description": "spaCy model used by the optional `ner` name extraction method"
    })


# Import this where needed
SCANNER_DEFAULTS = ScannerDefaults()
