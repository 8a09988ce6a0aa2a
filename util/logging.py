"""
Structured operation logging for the similarity search core.
Logs identifiers and sizes only; vector contents are never written out.
"""

import logging
import os
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv


def resolve_log_level(dotenv_path: Optional[str] = None) -> int:
    """
    Level named by LOG_LEVEL, after loading the .env file the way the
    configuration module does. Unknown names fall back to INFO.
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True))
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), None)
    return level if isinstance(level, int) else logging.INFO


class StructuredLogger:
    """Structured logger for collection, vector and search operations."""

    def __init__(self, name: str = "simsearch"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(resolve_log_level())

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Optional[Dict[str, Any]] = None,
                      level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_collection_operation(self, operation: str, name: str, details: Optional[Dict[str, Any]] = None,
                                 status: str = "success", level: int = logging.INFO):
        """Log a registry-level operation on a named collection."""
        log_details = {"collection": name}
        if details:
            log_details.update(details)

        self.log_operation(f"collection.{operation}", status, log_details, level)

    def log_vector_operation(self, operation: str, record_id: Any, details: Optional[Dict[str, Any]] = None,
                             status: str = "success", level: int = logging.DEBUG):
        """Log a vector operation."""
        log_details = {"record_id": str(record_id)}
        if details:
            log_details.update(details)

        self.log_operation(f"vector.{operation}", status, log_details, level)

    def log_search(self, collection: Optional[str], dimension: int, top_k: int, returned: int,
                   duration_ms: float, level: int = logging.DEBUG):
        """Log a completed search pass."""
        log_details = {
            "dimension": dimension,
            "top_k": top_k,
            "returned": returned,
            "duration_ms": round(duration_ms, 3),
        }
        if collection is not None:
            log_details["collection"] = collection

        self.log_operation("search", "success", log_details, level)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
