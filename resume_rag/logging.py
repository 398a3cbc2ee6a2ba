"""logging.py
Holds configured loggers.
"""
from typing import Literal
import logging
import os
import sys
from datetime import datetime
from functools import lru_cache
from dotenv import load_dotenv

load_dotenv()  # load .env

ENV = os.getenv("ENV", "development")  # e.g., development, staging, production

LoggerType = Literal["default", "pytest", "analysis", "analysis_error"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class LoggerFactory:
    """
    Factory to create configured loggers for the analyzer.

    Logging behavior depends on environment (ENV):
      - Console logging is optional.
      - Local file logging in development/test (one folder per logger type).
      - CloudWatch logging in staging/production when watchtower is installed.
      - Handlers are only attached once per logger name.
    """

    def __init__(self, env: str = ENV, base_log_folder: str = "logs"):
        self.env = env
        self.base_log_folder = base_log_folder

    def get_logger(
        self,
        name: str,
        logger_type: LoggerType = "default",
        console: bool = True
    ) -> logging.Logger:
        """
        Create and return a configured logger based on type.
        """
        logger = logging.getLogger(name)

        if logger.hasHandlers():
            return logger

        logger.propagate = False
        level = logging.DEBUG if logger_type in ["default", "pytest"] else logging.INFO
        logger.setLevel(level)

        formatter = logging.Formatter(LOG_FORMAT)

        if console:
            ch = logging.StreamHandler()
            ch.setFormatter(formatter)
            logger.addHandler(ch)

        if self.env in ["development", "local", "test"]:
            logger.addHandler(
                self._file_handler(self._get_log_folder_for_type(logger_type), name, formatter)
            )
        elif self.env in ["staging", "production"]:
            self._add_cloudwatch_handler(logger, logger_type, formatter)

        # Never leave a logger without somewhere to write
        if not logger.handlers:
            ch = logging.StreamHandler()
            ch.setFormatter(formatter)
            logger.addHandler(ch)

        return logger

    @lru_cache(maxsize=None)
    def get_analysis_failure_logger(self, analysis_name: str) -> logging.Logger:
        """
        Return a logger dedicated to failures of one analysis type, writing to
        its own subfolder. Example:
            logs/analysis_failures/rating/rating_20251028_103022.log
            logs/analysis_failures/summary/summary_20251028_103022.log
        """
        safe_name = analysis_name or "other"
        logger = logging.getLogger(f"analysis_{safe_name}")

        if logger.hasHandlers():
            return logger

        logger.setLevel(logging.INFO)
        logger.propagate = False  # file only

        log_folder = os.path.join(self.base_log_folder, "analysis_failures", safe_name)
        logger.addHandler(
            self._file_handler(log_folder, safe_name, logging.Formatter(LOG_FORMAT))
        )
        return logger

    def _file_handler(
        self,
        log_folder: str,
        name: str,
        formatter: logging.Formatter,
    ) -> logging.FileHandler:
        """Timestamped file handler inside `log_folder` (created if missing)."""
        os.makedirs(log_folder, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file_path = os.path.join(log_folder, f"{name}_{timestamp}.log")
        fh = logging.FileHandler(log_file_path, mode="a", encoding="utf-8")
        fh.setFormatter(formatter)
        return fh

    def _get_log_folder_for_type(self, logger_type: LoggerType) -> str:
        """Return folder path based on logger type."""
        if any("pytest" in arg for arg in sys.argv):
            return os.path.join(self.base_log_folder, "tests")

        mapping = {
            "default": self.base_log_folder,
            "pytest": os.path.join(self.base_log_folder, "tests"),
            "analysis": os.path.join(self.base_log_folder, "analysis"),
            "analysis_error": os.path.join(self.base_log_folder, "analysis_errors"),
        }
        return mapping.get(logger_type, self.base_log_folder)

    def _add_cloudwatch_handler(
        self,
        logger: logging.Logger,
        logger_type: LoggerType,
        formatter: logging.Formatter,
    ):
        """Optional AWS CloudWatch logging for staging/production."""
        try:
            import watchtower
        except ImportError:
            logger.warning("watchtower not installed, skipping cloud logging.")
            return

        log_group = {
            "default": "resume_rag_logs",
            "analysis": "resume_rag_analysis_logs",
            "analysis_error": "resume_rag_analysis_error_logs",
        }.get(logger_type, "resume_rag_logs")

        aws_handler = watchtower.CloudWatchLogHandler(log_group=log_group)
        aws_handler.setFormatter(formatter)
        logger.addHandler(aws_handler)
