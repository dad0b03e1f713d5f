"""logging.py
Logger setup for the resume importer: one logger per purpose, one failure log
per resume field, console output and optional CloudWatch shipping.
"""
from typing import Dict, List, Literal, Optional
import logging
import os
import sys
from datetime import datetime
from dotenv import load_dotenv

load_dotenv()  # load .env

ENV = os.getenv("ENV", "development")  # e.g., development, test, staging, production

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LoggerType = Literal["default", "pytest", "parser", "parser_error"]

# Environments that write log files locally / ship them to CloudWatch
FILE_LOGGING_ENVS = ("development", "local", "test")
CLOUD_LOGGING_ENVS = ("staging", "production")

# Folder (under the base log folder) each logger type writes to
LOG_SUBFOLDERS: Dict[str, str] = {
    "default": "",
    "pytest": "",
    "parser": "parse_failures",
    "parser_error": "parser_errors",
}

CLOUDWATCH_LOG_GROUPS: Dict[str, str] = {
    "default": "resume_importer_logs",
    "pytest": "resume_importer_logs",
    "parser": "resume_importer_parser_logs",
    "parser_error": "resume_importer_parser_error_logs",
}


class LoggerFactory:
    """
    Builds configured loggers for the parsing pipeline.

    - `get_logger` gives a named logger for one purpose (framework events,
      parser errors, test session output).
    - `get_field_logger` gives the logger that records extraction failures
      for a single resume field (e.g. `logs/parse_failures/email/`).

    A logger is configured the first time it is requested; later requests
    return it untouched. Under pytest every log file lands in `<base>/tests`.
    """

    def __init__(self, env: str = ENV, base_log_folder: str = "logs"):
        self.env = env
        self.base_log_folder = base_log_folder
        self._field_loggers: Dict[str, logging.Logger] = {}

    def get_logger(
        self,
        name: str,
        logger_type: LoggerType = "default",
        console: bool = True,
    ) -> logging.Logger:
        return self._build_logger(
            name=name,
            logger_type=logger_type,
            console=console,
            log_folder=self._log_folder(logger_type),
        )

    def get_field_logger(self, field_name: str) -> logging.Logger:
        """
        Args:
            field_name (str): Resume field as reported to API consumers, e.g.
                `fullName`. Empty names are logged under `other`.
        """
        field_name = field_name or "other"
        if field_name not in self._field_loggers:
            self._field_loggers[field_name] = self._build_logger(
                name=f"parse_failures.{field_name}",
                logger_type="parser",
                console=False,
                log_folder=self._log_folder("parser", field_name),
            )
        return self._field_loggers[field_name]

    # ----------------------
    # Internals
    # ----------------------
    def _build_logger(
        self,
        name: str,
        logger_type: LoggerType,
        console: bool,
        log_folder: str,
    ) -> logging.Logger:
        logger = logging.getLogger(name)
        if logger.handlers:
            return logger

        logger.propagate = False
        logger.setLevel(logging.DEBUG if logger_type in ("default", "pytest") else logging.INFO)

        handlers: List[logging.Handler] = []
        if console:
            handlers.append(logging.StreamHandler())

        if self.env in FILE_LOGGING_ENVS:
            handlers.append(self._file_handler(log_folder, name))
        elif self.env in CLOUD_LOGGING_ENVS:
            cloud_handler = self._cloudwatch_handler(logger_type)
            if cloud_handler is not None:
                handlers.append(cloud_handler)

        # Never leave a logger silent
        if not handlers:
            handlers.append(logging.StreamHandler())

        formatter = logging.Formatter(LOG_FORMAT)
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)
        return logger

    def _log_folder(self, logger_type: LoggerType, field_name: Optional[str] = None) -> str:
        root = self.base_log_folder
        if logger_type == "pytest" or running_under_pytest():
            root = os.path.join(root, "tests")

        parts = [root, LOG_SUBFOLDERS.get(logger_type, ""), field_name or ""]
        return os.path.join(*[part for part in parts if part])

    @staticmethod
    def _file_handler(log_folder: str, name: str) -> logging.Handler:
        os.makedirs(log_folder, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        file_name = f"{name.replace('.', '_')}_{timestamp}.log"
        return logging.FileHandler(os.path.join(log_folder, file_name), mode="a", encoding="utf-8")

    @staticmethod
    def _cloudwatch_handler(logger_type: LoggerType) -> Optional[logging.Handler]:
        """CloudWatch handler for staging/production; None when watchtower is not installed."""
        try:
            import watchtower
        except ImportError:
            logging.getLogger(__name__).warning("watchtower not installed, skipping cloud logging.")
            return None
        return watchtower.CloudWatchLogHandler(log_group=CLOUDWATCH_LOG_GROUPS[logger_type])


def running_under_pytest() -> bool:
    """True when the current process was launched by pytest."""
    return any("pytest" in arg for arg in sys.argv)
