"""Shared utilities for the ArenaX wallet core."""

from arena_wallet.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    LogLevel,
    get_logger,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)
from arena_wallet.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    RetryConfig,
    TimeoutConfig,
)
from arena_wallet.shared.storage import JsonFileStorage, KeyValueStorage, MemoryStorage
from arena_wallet.shared.validation import (
    AddressValidator,
    ValidationResult,
)

__all__ = [
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "RetryConfig",
    "TimeoutConfig",
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "AddressValidator",
    "ValidationResult",
    "ContextAdapter",
    "LoggingConfig",
    "LogLevel",
    "get_logger",
    "sanitize_dict",
    "sanitize_message",
    "setup_logging",
]
