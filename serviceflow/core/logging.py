"""Structured logging configuration."""

import logging
import sys

from serviceflow.core.config import settings


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured log output."""

    EXTRA_FIELDS = ("request_id", "question_id", "rule_id", "outcome", "error_code")

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured data."""
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for name in self.EXTRA_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Simple key=value format for readability
        parts = [f"{k}={v}" for k, v in log_data.items()]
        return " ".join(parts)


def setup_logging() -> None:
    """Configure application logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if settings.is_dev:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = StructuredFormatter()

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


class DecisionLogger:
    """Logger for routing decisions taken by the flow orchestrator."""

    def __init__(self) -> None:
        self.logger = get_logger("decision")

    def log(
        self,
        question_id: str,
        outcome: str,
        rule_id: str | None = None,
        candidates: int = 0,
    ) -> None:
        """Log a single routing decision."""
        self.logger.info(
            f"DECISION: question={question_id} rule={rule_id or '-'} "
            f"outcome={outcome} candidates={candidates}",
            extra={"question_id": question_id, "rule_id": rule_id, "outcome": outcome},
        )


decision_logger = DecisionLogger()
