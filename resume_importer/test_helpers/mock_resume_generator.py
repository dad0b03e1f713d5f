"""mock_resume_generator.py
Renders mock resumes as raw text, PDF or DOCX FileUploads that simulate what a
user would upload.
"""
from dataclasses import dataclass
from typing import List, Optional
import copy
import io

from docx import Document
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from resume_importer.config import DOC_MIMETYPE, DOCX_MIMETYPE, PDF_MIMETYPE
from resume_importer.models import FileUpload

DEFAULT_SECTION_ORDER = [
    "contact_info",
    "summary",
    "work_experience",
    "education",
    "projects",
    "skills",
    "certifications",
]

# -------------------------------------------------------------------------
# DUMMY RESUME BLOCKS (to construct resumes from)
# -------------------------------------------------------------------------

DUMMY_RESUME_BLOCKS = {
    # ---------------------------------------------------------
    # CONTACT INFO BLOCKS
    # First example is the default used
    # ---------------------------------------------------------
    "contact_info": [
        "{name}\n"
        "{location} | {phone} | {email}\n"
        "linkedin.com/in/{linkedin_name} | github.com/{github_name}",

        "{name}\n"
        "{email} • {phone}",

        "{name} – {location} – {phone} – {email} – linkedin.com/in/{linkedin_name}",
    ],

    # ---------------------------------------------------------
    # SUMMARY BLOCKS
    # ---------------------------------------------------------
    "summary": [
        "SUMMARY\n"
        "Product leader with ten years of experience shipping analytics tools.",

        "Professional Summary\n"
        "Four years experience in early childhood development and program design.",
    ],

    # ---------------------------------------------------------
    # WORK EXPERIENCE BLOCKS
    # ---------------------------------------------------------
    "work_experience": [
        "WORK EXPERIENCE\n"
        "Director of Product Management\n"
        "{company_name}\n"
        "May 2018 - current Colorado Springs, CO\n"
        "• Streamlined customer support process by using SysAid for ticket\n"
        "management, boosting satisfaction ratings by 27%.\n"
        "• Upsold products and services to 20% of inbound callers,\n"
        "contributing to a 7% increase in quarterly sales.",

        "WORK EXPERIENCE\n"
        "MARCH 2021 - CURRENT\n"
        "Data Scientist | {company_name} | San Diego, CA\n"
        "● Pioneered segmentation in Google Analytics 4, leading to 3 successful campaigns.\n"
        "● Built churn models in Python.",

        "EXPERIENCE\n"
        "Software Engineer at {company_name}\n"
        "2020-2023\n"
        "• Led team of 5 developers",
    ],

    # ---------------------------------------------------------
    # EDUCATION BLOCKS
    # ---------------------------------------------------------
    "education": [
        "EDUCATION\n"
        "M.S. Computer Science, San Diego State University\n"
        "February 2016 - June 2018",

        "EDUCATION\n"
        "The Collegiate School – High school diploma\n"
        "2020 - current Richmond, VA",

        "EDUCATION\n"
        "Bachelor of Arts in English\n"
        "University of Texas at San Antonio\n"
        "May 2015 | GPA: 3.8/4.0\n"
        "• Dean's List",
    ],

    # ---------------------------------------------------------
    # PROJECTS BLOCKS
    # ---------------------------------------------------------
    "projects": [
        "PROJECTS\n"
        "h2oFiltration – Water filtration system for rural communities\n"
        "• Designed a gravity fed filter prototype\n"
        "• Tested flow rates across three designs\n"
        "Technologies: Python, Arduino\n"
        "github.com/{github_name}/h2o-filtration",

        "PROJECTS\n"
        "Resume Parser\n"
        "A command line tool that turns resumes into JSON.",
    ],

    # ---------------------------------------------------------
    # SKILLS BLOCKS (FILLABLE)
    # ---------------------------------------------------------
    "skills": [
        "SKILLS\n"
        "{skills}",

        "TECHNICAL SKILLS\n"
        "Languages: Python, SQL, Java\n"
        "Tools: Power BI, Tableau; Git",

        "Skills:\n"
        "• Zendesk\n"
        "• Intercom\n"
        "• Skype",
    ],

    # ---------------------------------------------------------
    # CERTIFICATIONS BLOCKS
    # ---------------------------------------------------------
    "certifications": [
        "CERTIFICATIONS\n"
        "AWS Certified Solutions Architect - Amazon Web Services (2022)\n"
        "Certified Scrum Master, Scrum Alliance, 2019",
    ],
}


# -------------------------------------------------------------------------
# MockResumeGenerator INPUT DATA MODELS
# -------------------------------------------------------------------------
@dataclass
class ResumeValues:
    """
    Holds fillable field values that can be overridden when generating a mock
    resume. These are the variable parts of the block templates.
    """
    name: str = "John Doe"
    email: str = "john.doe@example.com"
    phone: str = "555-123-4567"
    location: str = "San Diego, CA"
    linkedin_name: str = "john-doe23"
    github_name: str = "johndoe"
    skills: str = "Python, SQL, Google Analytics, Power BI, Data Cleaning"
    company_name: str = "Comcast"


@dataclass
class ResumeTemplates:
    """
    Text templates used to render each resume block. Templates may include
    `str.format()` placeholders matching ResumeValues fields, such as `{name}`.
    """
    contact_info: str = DUMMY_RESUME_BLOCKS["contact_info"][0]
    summary: str = DUMMY_RESUME_BLOCKS["summary"][0]
    work_experience: str = DUMMY_RESUME_BLOCKS["work_experience"][0]
    education: str = DUMMY_RESUME_BLOCKS["education"][0]
    projects: str = DUMMY_RESUME_BLOCKS["projects"][0]
    skills: str = DUMMY_RESUME_BLOCKS["skills"][0]
    certifications: str = DUMMY_RESUME_BLOCKS["certifications"][0]
    other: Optional[str] = None  # optional, only used if provided


# -------------------------------------------------------------------------
# Main generator class
# -------------------------------------------------------------------------
class MockResumeGenerator:
    """
    Generate realistic mock resumes for testing purposes.

    Builds resume text from block templates and values, then renders it as raw
    text, a PDF (reportlab) or a DOCX (python-docx) FileUpload.

    Attributes:
        values (ResumeValues): Fillable field values for substitution.
        templates (ResumeTemplates): Templates for each resume block.
        section_order (List[str]): The sequence of blocks to include.
    """

    def __init__(
        self,
        values: Optional[ResumeValues] = None,
        templates: Optional[ResumeTemplates] = None,
        section_order: Optional[List[str]] = None,
    ):
        self.values = values or ResumeValues()
        self.templates = templates or ResumeTemplates()
        self.section_order = DEFAULT_SECTION_ORDER if section_order is None else section_order

    # ----------------------
    # Text rendering
    # ----------------------
    def _render_block(self, block_name: str) -> str:
        template = getattr(self.templates, block_name, None)
        if not template:
            return ""
        try:
            return template.format(**vars(self.values))
        except (KeyError, IndexError):
            # Unknown placeholders: use the raw template
            return template

    def generate_text(self) -> str:
        """Assemble the resume text, one blank line between blocks."""
        parts = [self._render_block(name) for name in self.section_order]
        return "\n\n".join(part for part in parts if part)

    # ----------------------
    # File rendering
    # ----------------------
    def generate_pdf_bytes(self) -> bytes:
        """Render the resume text onto letter-sized PDF pages, one text line per row."""
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=letter)
        _, page_height = letter
        margin, line_height = 54, 14
        y = page_height - margin

        for line in self.generate_text().split("\n"):
            if y < margin:
                pdf.showPage()
                y = page_height - margin
            if line:
                pdf.setFont("Helvetica", 10)
                pdf.drawString(margin, y, line)
            y -= line_height

        pdf.save()
        return buffer.getvalue()

    def generate_docx_bytes(self) -> bytes:
        """Render the resume text as a DOCX document, one paragraph per line."""
        document = Document()
        for line in self.generate_text().split("\n"):
            document.add_paragraph(line)
        buffer = io.BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    def generate_file_upload(
        self,
        file_format: str = "pdf",
        filename: Optional[str] = None,
    ) -> FileUpload:
        """
        Render the resume as an uploaded file.

        Args:
            file_format (str): "pdf", "docx", "doc" (DOCX bytes declared as
                application/msword) or "txt" (plain text, unsupported by the pipeline).
            filename (str | None): Defaults to `resume.<file_format>`.
        """
        if file_format == "pdf":
            buffer, mimetype = self.generate_pdf_bytes(), PDF_MIMETYPE
        elif file_format == "docx":
            buffer, mimetype = self.generate_docx_bytes(), DOCX_MIMETYPE
        elif file_format == "doc":
            buffer, mimetype = self.generate_docx_bytes(), DOC_MIMETYPE
        elif file_format == "txt":
            buffer, mimetype = self.generate_text().encode("utf-8"), "text/plain"
        else:
            raise ValueError(f"Unknown mock file format `{file_format}`")

        return FileUpload(
            filename=filename if filename is not None else f"resume.{file_format}",
            mimetype=mimetype,
            buffer=buffer,
            size=len(buffer),
        )

    def clone(
        self,
        values: Optional[ResumeValues] = None,
        templates: Optional[ResumeTemplates] = None,
        section_order: Optional[List[str]] = None,
    ) -> "MockResumeGenerator":
        """
        Create a copy of this generator, optionally overriding specific attributes.

        Returns:
            MockResumeGenerator: A new generator with the requested overrides.
        """
        new_gen = copy.deepcopy(self)
        if values is not None:
            new_gen.values = values
        if templates is not None:
            new_gen.templates = templates
        if section_order is not None:
            new_gen.section_order = section_order
        return new_gen
