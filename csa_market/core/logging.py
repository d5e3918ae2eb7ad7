import json
import logging
import os
import re
import sys
import traceback
from datetime import UTC, datetime
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

from csa_market.core.settings import get_settings

_STANDARD_LOG_RECORD_KEYS = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys())
_STANDARD_LOG_RECORD_KEYS.update({"message", "asctime"})
_STRUCTURED_LOG_KEYS = {"component", "operation", "item_id", "context_data", "http_details"}
_SENSITIVE_KEY_PARTS = (
    "authorization",
    "cookie",
    "token",
    "password",
    "secret",
    "jwt",
    "api-key",
    "apikey",
)
_BEARER_PATTERN = re.compile(r"(?i)\bbearer\s+[a-z0-9\-._~+/]+=*")


def _sanitize_filename(value: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9._-]+", "_", value.strip().lower())
    return cleaned.strip("._-") or "csa_market"


def _redact_value(value: Any) -> Any:
    if isinstance(value, dict):
        out: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if any(part in key.lower() for part in _SENSITIVE_KEY_PARTS):
                out[key] = "<redacted>"
            else:
                out[key] = _redact_value(v)
        return out

    if isinstance(value, (list, tuple)):
        return type(value)(_redact_value(v) for v in value)

    if isinstance(value, str):
        return _BEARER_PATTERN.sub("Bearer <redacted>", value)

    return value


def _extract_extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_LOG_RECORD_KEYS and key not in _STRUCTURED_LOG_KEYS
    }


def _build_json_payload(record: logging.LogRecord, *, include_error: bool) -> dict[str, Any]:
    context_data = getattr(record, "context_data", None)
    extra_fields = _extract_extra_fields(record)
    if extra_fields:
        if isinstance(context_data, dict):
            context_data = {**extra_fields, **context_data}
        elif context_data is None:
            context_data = extra_fields
        else:
            context_data = {"context_data": context_data, **extra_fields}

    payload: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "component": getattr(record, "component", None) or record.name,
        "operation": getattr(record, "operation", None),
        "message": _redact_value(record.getMessage()),
        "context_data": _redact_value(context_data) if context_data is not None else None,
        "http_details": _redact_value(getattr(record, "http_details", None)),
        "item_id": getattr(record, "item_id", None),
        "source_file": record.filename,
        "source_line": record.lineno,
        "source_function": record.funcName,
        "process": record.process,
    }

    if include_error:
        exc_type, exc_value, exc_tb = record.exc_info or (None, None, None)
        payload["error_type"] = exc_type.__name__ if exc_type else "LogError"
        payload["error_message"] = str(exc_value) if exc_value else payload["message"]
        if exc_type and exc_tb:
            payload["stack_trace"] = "".join(
                traceback.format_exception(exc_type, exc_value, exc_tb)
            )

    return {k: v for k, v in payload.items() if v is not None}


class _JsonLineFormatter(logging.Formatter):
    def __init__(self, *, include_error: bool):
        super().__init__()
        self.include_error = include_error

    def format(self, record: logging.LogRecord) -> str:
        payload = _build_json_payload(record, include_error=self.include_error)
        return json.dumps(payload, ensure_ascii=False, default=str)


class _StructuredLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for key in ("context_data", "http_details", "item_id", "operation"):
            if getattr(record, key, None) is not None:
                return True
        return bool(_extract_extra_fields(record))


def _rotate_jsonl_namer(default_name: str) -> str:
    marker = ".jsonl."
    if marker not in default_name:
        return default_name
    before, after = default_name.split(marker, 1)
    return f"{before}_{after}.jsonl"


def _create_jsonl_handler(
    *, directory: Path, logger_name: str, kind: str, level: int
) -> logging.Handler:
    directory.mkdir(parents=True, exist_ok=True)
    prefix = _sanitize_filename(logger_name)
    base_file = directory / f"{prefix}_{kind}_{os.getpid()}.jsonl"

    handler = TimedRotatingFileHandler(
        filename=str(base_file),
        when="D",
        interval=1,
        backupCount=0,
        encoding="utf-8",
        delay=True,
        utc=True,
    )
    handler.setLevel(level)
    handler.setFormatter(_JsonLineFormatter(include_error=kind == "errors"))
    if kind == "structured":
        handler.addFilter(_StructuredLogFilter())
    handler.suffix = "%Y%m%d_%H%M%S"
    handler.namer = _rotate_jsonl_namer
    return handler


@lru_cache
def setup_logging(name: str | None = None, level: str | None = None) -> logging.Logger:
    """
    Configure the root logger for the service.

    Console output goes to stdout; errors and records carrying structured
    extras are also written as JSON lines under ``settings.logs_dir``.

    Args:
        name: Logger name (defaults to app name from settings)
        level: Log level (defaults to settings.log_level)

    Returns:
        The service logger
    """
    settings = get_settings()
    logger_name = name or settings.app_name
    log_level = getattr(logging, (level or settings.log_level).upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    root_logger.addHandler(
        _create_jsonl_handler(
            directory=settings.logs_dir / "errors",
            logger_name=logger_name,
            kind="errors",
            level=logging.ERROR,
        )
    )
    root_logger.addHandler(
        _create_jsonl_handler(
            directory=settings.logs_dir / "structured",
            logger_name=logger_name,
            kind="structured",
            level=logging.NOTSET,
        )
    )

    app_logger = logging.getLogger(logger_name)
    app_logger.setLevel(log_level)
    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
