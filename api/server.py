"""server.py
Server to launch a FastAPI / Swagger UI instance for the resume import pipeline.
"""
import json
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from resume_importer.config import SCANNER_DEFAULTS
from resume_importer.exceptions import BatchSizeExceededError, ParseOptionsConfigError
from resume_importer.models import FileUpload, ParseOptions, ParseResult
from resume_importer.parse_classes.resume_parse_framework import ResumeParserFramework


app = FastAPI(title="Resume Importer API", version="1.0")

# Initiate ResumeParserFramework for use when server calls
resume_parse_framework = ResumeParserFramework()


# ----------------------
# Request helpers
# ----------------------
def check_batch_size(file_count: int, max_batch_size: int = SCANNER_DEFAULTS.MAX_BATCH_SIZE) -> None:
    """
    Raises:
        BatchSizeExceededError: If more than `max_batch_size` files were sent.
    """
    if file_count > max_batch_size:
        raise BatchSizeExceededError(max_batch_size=max_batch_size, actual_size=file_count)


def parse_options_form(options: Optional[str]) -> ParseOptions:
    """Decode the optional `options` form field (a JSON object) into ParseOptions."""
    if not options:
        return ParseOptions()
    try:
        decoded = json.loads(options)
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail=f"Invalid options JSON: {e.msg}")
    try:
        return ParseOptions.from_dict(decoded)
    except ParseOptionsConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))


async def to_file_upload(file: UploadFile) -> FileUpload:
    buffer = await file.read()
    return FileUpload(
        filename=file.filename or "",
        mimetype=file.content_type or "application/octet-stream",
        buffer=buffer,
        size=len(buffer),
    )


def result_payload(result: ParseResult) -> Dict[str, Any]:
    payload = result.to_dict()
    payload["stats"] = resume_parse_framework.get_parsing_stats(result).to_dict()
    return payload


# ----------------------
# Routes
# ----------------------
@app.post(
    "/parse_resume",
    summary="Parse a resume file and extract structured data",
    description=(
        "Uploads a resume (PDF, DOCX or DOC), processes it, and returns a ParseResult "
        "with structured resume data, confidence, errors, warnings and stats."
    ),
)
async def parse_resume(
    file: UploadFile = File(...),
    options: Optional[str] = Form(None),
) -> Dict[str, Any]:
    parse_options = parse_options_form(options)
    upload = await to_file_upload(file)
    result = resume_parse_framework.parse_resume(upload, parse_options)
    return result_payload(result)


@app.post(
    "/parse_resumes",
    summary="Parse a batch of resume files",
    description=f"Parses up to {SCANNER_DEFAULTS.MAX_BATCH_SIZE} resumes concurrently. Results keep upload order.",
)
async def parse_resumes(
    files: Optional[List[UploadFile]] = File(None),
    options: Optional[str] = Form(None),
) -> Dict[str, Any]:
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")
    try:
        check_batch_size(len(files))
    except BatchSizeExceededError as e:
        raise HTTPException(status_code=400, detail=str(e))

    parse_options = parse_options_form(options)
    uploads = [await to_file_upload(file) for file in files]
    results = resume_parse_framework.parse_multiple_resumes(uploads, parse_options)
    return {"results": [result_payload(result) for result in results]}


@app.get(
    "/supported_file_types",
    summary="List accepted mimetypes",
)
async def supported_file_types() -> Dict[str, List[str]]:
    return {"supportedFileTypes": ResumeParserFramework.get_supported_file_types()}
