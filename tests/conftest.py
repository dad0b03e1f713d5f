"""conftest.py
Shared pytest hooks (session logging) and fixtures.
"""

import pytest
from resume_importer.logging import LoggerFactory
from resume_importer.parse_classes.resume_parse_framework import ResumeParserFramework
from resume_importer.test_helpers.dummy_variables.dummy_resumes import (
    EXAMPLE_RESUME_TEXT,
    MOCK_RESUME_GENERATOR_0,
)

# --------------------------------------------------------------
# SETUP TEST LOGGING
# --------------------------------------------------------------

# Integrate logger with pytest
logger = LoggerFactory().get_logger(
    name="pytest_logger",
    logger_type="pytest",
    console=True
)
current_class = None

@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session):
    """Session start header."""
    logger.info("==== PYTEST SESSION START ====")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logstart(nodeid, location):
    """Called at the start of each test."""
    global current_class
    class_name = location[0]
    if class_name != current_class:
        current_class = class_name
        logger.info(f"\n---- TestClass: {current_class} ----")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logreport(report):
    """Called at the end of each test phase (setup/call/teardown)."""
    if report.when != "call":
        return  # only care about the main call, not setup/teardown

    status = report.outcome.upper()  # PASSED / FAILED / SKIPPED
    if status == "PASSED":
        logger.info(f"PASSED: {report.nodeid}")
    elif status == "FAILED":
        logger.error(f"FAILED: {report.nodeid}\n{report.longreprtext}")
    elif status == "SKIPPED":
        logger.warning(f"SKIPPED: {report.nodeid}\n{report.longreprtext}")

@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    """Session finish footer."""
    logger.info(f"==== PYTEST SESSION END: exitstatus={exitstatus} ====")


# --------------------------------------------------------------
# SHARED FIXTURES
# --------------------------------------------------------------
@pytest.fixture(scope="session")
def framework():
    """
    One ResumeParserFramework for the whole session. The default wiring never
    loads spaCy models, so building it is cheap.
    """
    return ResumeParserFramework()


@pytest.fixture
def example_resume_text():
    return EXAMPLE_RESUME_TEXT


@pytest.fixture(scope="session")
def mock_resume_pdf():
    """Default mock resume rendered as a PDF FileUpload."""
    return MOCK_RESUME_GENERATOR_0.generate_file_upload("pdf")


@pytest.fixture(scope="session")
def mock_resume_docx():
    """Default mock resume rendered as a DOCX FileUpload."""
    return MOCK_RESUME_GENERATOR_0.generate_file_upload("docx")
