"""dummy_resumes.py
Dummy resume texts, generators and uploads to use for testing.
"""
from resume_importer.models import FileUpload
from resume_importer.config import PDF_MIMETYPE
from resume_importer.test_helpers.mock_resume_generator import (
    MockResumeGenerator,
    ResumeValues,
    ResumeTemplates,
    DUMMY_RESUME_BLOCKS,
    DEFAULT_SECTION_ORDER,
)

# ---------------------------------------------------------------------------
# Setup dummy examples for testing
# ---------------------------------------------------------------------------

# Minimal resume every pipeline stage must handle
EXAMPLE_RESUME_TEXT = (
    "John Doe\n"
    "john@example.com\n"
    "\n"
    "EXPERIENCE\n"
    "Software Engineer at Tech Corp\n"
    "2020-2023\n"
    "• Led team of 5 developers"
)

# Resume with no recognizable heading at all
NO_HEADING_RESUME_TEXT = (
    "Jane Smith\n"
    "jane.smith@example.com\n"
    "Experienced nurse with a passion for patient care."
)

# Basic Resume with default values (0 for all options in DUMMY_RESUME_BLOCKS)
MOCK_RESUME_GENERATOR_0 = MockResumeGenerator(
    values=ResumeValues(
        name="John Doe",
        email="john.doe@example.com",
        phone="555-123-4567",
        location="San Diego, CA",
        linkedin_name="john-doe23",
        github_name="johndoe",
        company_name="Comcast",
    ),
    templates=ResumeTemplates(
        contact_info=DUMMY_RESUME_BLOCKS["contact_info"][0],
        summary=DUMMY_RESUME_BLOCKS["summary"][0],
        work_experience=DUMMY_RESUME_BLOCKS["work_experience"][0],
        education=DUMMY_RESUME_BLOCKS["education"][0],
        projects=DUMMY_RESUME_BLOCKS["projects"][0],
        skills=DUMMY_RESUME_BLOCKS["skills"][0],
        certifications=DUMMY_RESUME_BLOCKS["certifications"][0],
    ),
    section_order=DEFAULT_SECTION_ORDER,
)

# Alternate layouts (1 for all DUMMY_RESUME_BLOCKS options) and a different order
MOCK_RESUME_GENERATOR_1 = MockResumeGenerator(
    values=ResumeValues(
        name="Carlos Mendez",
        email="c.mendez@company.net",
        phone="(619) 555-0182",
        company_name="Qualcomm",
    ),
    templates=ResumeTemplates(
        contact_info=DUMMY_RESUME_BLOCKS["contact_info"][1],
        summary=DUMMY_RESUME_BLOCKS["summary"][1],
        work_experience=DUMMY_RESUME_BLOCKS["work_experience"][1],
        education=DUMMY_RESUME_BLOCKS["education"][1],
        projects=DUMMY_RESUME_BLOCKS["projects"][1],
        skills=DUMMY_RESUME_BLOCKS["skills"][1],
    ),
    section_order=[
        "contact_info",
        "work_experience",
        "skills",
        "education",
        "projects",
    ],
)

# Third layout variant (2 for all DUMMY_RESUME_BLOCKS options)
MOCK_RESUME_GENERATOR_2 = MockResumeGenerator(
    values=ResumeValues(
        name="Alice Lee",
        email="alice.lee@example.co.uk",
        company_name="Tech Corp",
    ),
    templates=ResumeTemplates(
        contact_info=DUMMY_RESUME_BLOCKS["contact_info"][2],
        work_experience=DUMMY_RESUME_BLOCKS["work_experience"][2],
        education=DUMMY_RESUME_BLOCKS["education"][2],
        skills=DUMMY_RESUME_BLOCKS["skills"][2],
    ),
    section_order=[
        "contact_info",
        "work_experience",
        "education",
        "skills",
    ],
)

# Uploads that never reach a decoder
TEXT_PLAIN_UPLOAD = FileUpload(
    filename="resume.txt",
    mimetype="text/plain",
    buffer=EXAMPLE_RESUME_TEXT.encode("utf-8"),
    size=len(EXAMPLE_RESUME_TEXT.encode("utf-8")),
)
OVERSIZED_PDF_UPLOAD = FileUpload(
    filename="huge.pdf",
    mimetype=PDF_MIMETYPE,
    buffer=b"%PDF-1.4",
    size=11 * 1024 * 1024,
)
