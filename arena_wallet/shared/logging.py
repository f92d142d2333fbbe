"""Centralized logging configuration for the ArenaX wallet core.

This module provides:
- Configurable log levels (DEBUG for dev, INFO for prod)
- Redaction of Stellar secret seeds and passwords
- User-friendly error message mapping for ledger and transport failures
- Structured logging with context fields
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

ENV_PREFIX = "ARENA_WALLET_"


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LoggingConfig:
    log_level: LogLevel = LogLevel.INFO
    log_to_file: bool = True
    log_to_stdout: bool = False
    log_dir: Path | None = None
    log_filename: str = "wallet.log"
    json_format: bool = False
    sanitize_sensitive: bool = True
    include_context: bool = True

    @classmethod
    def from_environment(cls) -> "LoggingConfig":
        env_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO").upper()
        try:
            log_level = LogLevel(env_level)
        except ValueError:
            log_level = LogLevel.INFO

        log_to_stdout = os.getenv(f"{ENV_PREFIX}LOG_STDOUT", "").lower() in (
            "1",
            "true",
            "yes",
        )
        json_format = os.getenv(f"{ENV_PREFIX}LOG_FORMAT", "human").lower() == "json"

        log_dir_env = os.getenv(f"{ENV_PREFIX}DIR")
        log_dir = Path(log_dir_env).expanduser() if log_dir_env else None

        return cls(
            log_level=log_level,
            log_to_stdout=log_to_stdout,
            log_dir=log_dir,
            json_format=json_format,
        )


SENSITIVE_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(
            r"(secret(?:[_-]?key|[_-]?seed)?['\"]?\s*[:=]\s*['\"]?)([^\s'\",}]+)",
            re.IGNORECASE,
        ),
        r"\1[REDACTED]",
    ),
    (
        re.compile(
            r"(password['\"]?\s*[:=]\s*['\"]?)([^\s'\"]+)",
            re.IGNORECASE,
        ),
        r"\1[REDACTED]",
    ),
    (
        re.compile(r"\bS[A-Z2-7]{55}\b"),
        "[SEED_REDACTED]",
    ),
]

PUBLIC_KEY_PATTERN = re.compile(r"\bG[A-Z2-7]{55}\b")


def sanitize_message(message: str, preserve_addresses: bool = True) -> str:
    if not message:
        return message

    sanitized = message
    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    if not preserve_addresses:
        sanitized = PUBLIC_KEY_PATTERN.sub("[ADDRESS_REDACTED]", sanitized)

    return sanitized


def sanitize_dict(
    data: dict[str, Any], preserve_addresses: bool = True
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sensitive in key_lower for sensitive in ("secret", "password", "seed")):
            result[key] = "[REDACTED]"
        elif isinstance(value, str):
            result[key] = sanitize_message(value, preserve_addresses)
        elif isinstance(value, dict):
            result[key] = sanitize_dict(value, preserve_addresses)
        elif isinstance(value, list):
            result[key] = [
                sanitize_dict(item, preserve_addresses)
                if isinstance(item, dict)
                else sanitize_message(item, preserve_addresses)
                if isinstance(item, str)
                else item
                for item in value
            ]
        else:
            result[key] = value
    return result


@dataclass
class ErrorMapping:
    error_pattern: str
    user_message: str
    ledger_specific: bool = False


ERROR_MAPPINGS: list[ErrorMapping] = [
    ErrorMapping(
        error_pattern="denied|rejected|declined",
        user_message="Transaction was rejected in your wallet.",
        ledger_specific=True,
    ),
    ErrorMapping(
        error_pattern="op_no_trust",
        user_message="Destination account does not trust the selected asset.",
        ledger_specific=True,
    ),
    ErrorMapping(
        error_pattern="op_underfunded|insufficient",
        user_message="Insufficient balance for this transfer.",
        ledger_specific=True,
    ),
    ErrorMapping(
        error_pattern="op_no_destination",
        user_message="Destination account does not exist on Stellar.",
        ledger_specific=True,
    ),
    ErrorMapping(
        error_pattern="timeout|timed out",
        user_message="Connection timed out. The server may be slow or unavailable.",
    ),
    ErrorMapping(
        error_pattern="connection refused|cannot connect|connection error",
        user_message="Unable to connect to the server.",
    ),
    ErrorMapping(
        error_pattern="rate limit|too many requests|429",
        user_message="Too many requests. Please slow down.",
    ),
    ErrorMapping(
        error_pattern="tx_bad_seq",
        user_message="Transaction sequence number is out of date.",
    ),
    ErrorMapping(
        error_pattern="tx_insufficient_fee|fee.*too low",
        user_message="Transaction fee is too low.",
    ),
]


def find_error_mapping(error: Exception | str) -> ErrorMapping | None:
    error_message = str(error) if isinstance(error, Exception) else error
    error_lower = error_message.lower()

    for mapping in ERROR_MAPPINGS:
        if re.search(mapping.error_pattern, error_lower):
            return mapping
    return None


class StructuredFormatter(logging.Formatter):
    def __init__(
        self,
        sanitize: bool = True,
        include_context: bool = True,
        preserve_addresses: bool = True,
    ):
        super().__init__()
        self.sanitize = sanitize
        self.include_context = include_context
        self.preserve_addresses = preserve_addresses

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            log_data["module"] = record.module
            log_data["function"] = record.funcName
            log_data["line"] = record.lineno

        extra_data = getattr(record, "context", None)
        if extra_data and isinstance(extra_data, dict):
            if self.sanitize:
                extra_data = sanitize_dict(extra_data, self.preserve_addresses)
            log_data["context"] = extra_data

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            if self.sanitize:
                exc_text = sanitize_message(exc_text, self.preserve_addresses)
            log_data["exception"] = exc_text

        if self.sanitize:
            log_data["message"] = sanitize_message(
                log_data["message"], self.preserve_addresses
            )

        try:
            return json.dumps(log_data)
        except (TypeError, ValueError):
            return f"{log_data['timestamp']} - {log_data['logger']} - {log_data['level']} - {log_data['message']}"


class HumanReadableFormatter(logging.Formatter):
    def __init__(
        self,
        sanitize: bool = True,
        preserve_addresses: bool = True,
    ):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.sanitize = sanitize
        self.preserve_addresses = preserve_addresses

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if self.sanitize:
            formatted = sanitize_message(formatted, self.preserve_addresses)
        return formatted


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter that carries a ``context`` dict into every record."""

    def __init__(
        self,
        logger: logging.Logger,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(logger, context or {})

    def process(
        self,
        msg: str,
        kwargs: dict[str, Any],
    ) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        if self.extra:
            extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **kwargs: Any) -> "ContextAdapter":
        return ContextAdapter(self.logger, {**self.extra, **kwargs})


_logging_initialized = False


def _build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.json_format:
        return StructuredFormatter(
            sanitize=config.sanitize_sensitive,
            include_context=config.include_context,
        )
    return HumanReadableFormatter(sanitize=config.sanitize_sensitive)


def setup_logging(config: LoggingConfig | None = None, force: bool = False) -> None:
    """Install handlers on the package logger once per process."""
    global _logging_initialized

    if _logging_initialized and not force:
        return

    if config is None:
        config = LoggingConfig.from_environment()

    package_logger = logging.getLogger("arena_wallet")
    package_logger.setLevel(getattr(logging, config.log_level.value))

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = []

    if config.log_to_file:
        if config.log_dir is None:
            config.log_dir = Path.home() / ".config" / "arena-wallet"
        config.log_dir.mkdir(parents=True, exist_ok=True)
        log_file = config.log_dir / config.log_filename
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    if config.log_to_stdout:
        handlers.append(logging.StreamHandler(sys.stdout))

    formatter = _build_formatter(config)
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    _logging_initialized = True


def get_logger(
    name: str,
    context: dict[str, Any] | None = None,
) -> ContextAdapter:
    """Return a context-aware logger.

    Handler installation is left to ``setup_logging`` so that importing the
    package never touches the filesystem.
    """
    return ContextAdapter(logging.getLogger(name), context)


__all__ = [
    "LogLevel",
    "LoggingConfig",
    "ContextAdapter",
    "ErrorMapping",
    "StructuredFormatter",
    "HumanReadableFormatter",
    "sanitize_message",
    "sanitize_dict",
    "find_error_mapping",
    "setup_logging",
    "get_logger",
]
