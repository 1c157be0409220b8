"""Structured logging configuration for the IVR Flow Studio backend.

This module provides:
- JSON structured logging for production environments
- Coloured console output for development
- Rotating file handler (10MB max, 5 backups)
- Redaction of credentials and caller PII (SSN, PIN, DOB, card and
  account numbers) before any handler writes a record
- Scoped structured context via LogContext

Services attach context through the ``extra`` argument:

    logger.info("Flow saved", extra={"context": {"flow_id": str(flow.id)}})
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, ClassVar

from ivrflow.core.config import settings


class SensitiveDataFilter(logging.Filter):
    """Redact credentials and caller PII from log records.

    Two kinds of redaction are applied to the message, string args and the
    structured context:

    - keyed values such as ``password=...`` or ``ssn: ...``
    - bare values that look like an SSN or a card number

    Examples:
        >>> logger = logging.getLogger("ivrflow")
        >>> logger.addFilter(SensitiveDataFilter())
        >>> logger.info("caller ssn: 123-45-6789")
        # Logs: "caller ssn: [REDACTED]"
    """

    SENSITIVE_KEYS: ClassVar[list[str]] = [
        "password",
        "passwd",
        "secret",
        "token",
        "authorization",
        "bearer",
        "api_key",
        "ssn",
        "pin",
        "dob",
        "account_number",
        "card_number",
    ]

    VALUE_PATTERNS: ClassVar[list[re.Pattern[str]]] = [
        re.compile(r"\b\d{3}-\d{2}-\d{4}\b"),  # SSN
        re.compile(r"\b(?:\d[ -]?){13,19}\b"),  # card / account numbers
    ]

    def __init__(self) -> None:
        super().__init__()
        self._keyed = [
            (key, re.compile(rf"\b{key}\b[\"']?\s*[:=]\s*[\"']?[^\s\"',]+", re.IGNORECASE))
            for key in self.SENSITIVE_KEYS
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact the record in place. Always lets the record through."""
        record.msg = self.redact(str(record.msg))

        if record.args:
            if isinstance(record.args, dict):
                record.args = {
                    k: self.redact(v) if isinstance(v, str) else v
                    for k, v in record.args.items()
                }
            else:
                record.args = tuple(
                    self.redact(arg) if isinstance(arg, str) else arg
                    for arg in record.args
                )

        for attr in ("context", "scope"):
            value = getattr(record, attr, None)
            if isinstance(value, dict):
                setattr(record, attr, self._redact_mapping(value))

        return True

    def redact(self, text: str) -> str:
        """Return ``text`` with sensitive values replaced by ``[REDACTED]``."""
        for key, regex in self._keyed:
            text = regex.sub(f"{key}: [REDACTED]", text)
        for pattern in self.VALUE_PATTERNS:
            text = pattern.sub("[REDACTED]", text)
        return text

    def _redact_mapping(self, data: dict[str, Any]) -> dict[str, Any]:
        redacted: dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in self.SENSITIVE_KEYS:
                redacted[key] = "[REDACTED]"
            elif isinstance(value, str):
                redacted[key] = self.redact(value)
            elif isinstance(value, dict):
                redacted[key] = self._redact_mapping(value)
            else:
                redacted[key] = value
        return redacted


def merged_context(record: logging.LogRecord) -> dict[str, Any]:
    """Combine LogContext scope with the per-call ``extra`` context."""
    scope = getattr(record, "scope", None) or {}
    context = getattr(record, "context", None) or {}
    return {**scope, **context}


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Format:
        {
            "timestamp": "2026-01-12T10:30:45.123Z",
            "level": "INFO",
            "logger": "ivrflow.services.flow_service",
            "message": "Flow created",
            "service": "IVR Flow Studio API",
            "context": {"flow_id": "...", "action": "create_flow"}
        }
    """

    def __init__(
        self,
        service_name: str = "IVRFlowStudio",
        service_version: str = "0.1.0",
    ) -> None:
        super().__init__()
        self.service_name = service_name
        self.service_version = service_version

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "version": self.service_version,
        }

        context = merged_context(record)
        if context:
            log_entry["context"] = context

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        if record.levelno >= logging.ERROR:
            log_entry["source"] = {
                "function": record.funcName,
                "line": record.lineno,
                "file": record.pathname,
            }

        return json.dumps(log_entry, default=str, ensure_ascii=False)


class ColoredConsoleFormatter(logging.Formatter):
    """Coloured, human-readable console formatter for development."""

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy so other handlers see the unmodified record
        record = logging.makeLogRecord(record.__dict__)
        log_color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{log_color}{record.levelname}{self.RESET}"

        context = merged_context(record)
        if context:
            record.msg = f"{record.msg} | Context: {json.dumps(context, default=str)}"

        return super().format(record)


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    service_name: str = "IVRFlowStudio",
    enable_json: bool = True,
    enable_console: bool = True,
    enable_sensitive_filter: bool = True,
) -> logging.Logger:
    """Configure the root logger with file and console handlers.

    Args:
        log_level: Logging level name. Defaults to settings.LOG_LEVEL.
        log_file: Path to the log file. Defaults to logs/app.log.
        service_name: Service name stamped on JSON records.
        enable_json: Use JSONFormatter for the file handler.
        enable_console: Attach a stdout handler.
        enable_sensitive_filter: Attach SensitiveDataFilter to every handler.

    Returns:
        The configured root logger.
    """
    if log_level is None:
        log_level = settings.LOG_LEVEL.value
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_file is None:
        log_file_path = Path("logs") / "app.log"
    else:
        log_file_path = Path(log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    sensitive_filter = SensitiveDataFilter() if enable_sensitive_filter else None

    file_handler = RotatingFileHandler(
        filename=str(log_file_path),
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    if enable_json:
        file_handler.setFormatter(JSONFormatter(service_name=service_name))
    else:
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    if sensitive_filter is not None:
        file_handler.addFilter(sensitive_filter)
    logger.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        if settings.DEBUG:
            console_handler.setFormatter(ColoredConsoleFormatter())
        else:
            console_handler.setFormatter(JSONFormatter(service_name=service_name))
        if sensitive_filter is not None:
            console_handler.addFilter(sensitive_filter)
        logger.addHandler(console_handler)

    logger.info(
        f"Logging initialized - Level: {log_level}, File: {log_file_path}",
        extra={
            "context": {
                "log_level": log_level,
                "log_file": str(log_file_path),
                "service": service_name,
            }
        },
    )

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance; configuration is inherited from setup_logging()."""
    return logging.getLogger(name)


class LogContext:
    """Attach structured context to every record created inside a block.

    The scoped values live on ``record.scope`` so that per-call
    ``extra={"context": ...}`` can still be passed inside the block.

    Examples:
        >>> logger = get_logger(__name__)
        >>> with LogContext(user_id="123", action="save_flow"):
        ...     logger.info("Saving node set")
    """

    def __init__(self, **context: Any) -> None:
        self.context = context
        self.old_factory = logging.getLogRecordFactory()

    def __enter__(self) -> LogContext:
        old_factory = self.old_factory
        context = self.context

        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = old_factory(*args, **kwargs)
            existing = getattr(record, "scope", None) or {}
            record.scope = {**existing, **context}
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, *args: Any) -> None:
        logging.setLogRecordFactory(self.old_factory)


__all__ = [
    "ColoredConsoleFormatter",
    "JSONFormatter",
    "LogContext",
    "SensitiveDataFilter",
    "get_logger",
    "setup_logging",
]
