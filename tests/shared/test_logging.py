import json
import logging

import pytest

from arena_wallet.shared.logging import (
    ContextAdapter,
    HumanReadableFormatter,
    LoggingConfig,
    LogLevel,
    StructuredFormatter,
    find_error_mapping,
    get_logger,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)

SECRET_SEED = "S" + "A" * 55


def make_record(message, context=None):
    record = logging.LogRecord(
        name="arena_wallet.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    if context is not None:
        record.context = context
    return record


class TestLoggingConfig:
    def test_from_environment_defaults(self, monkeypatch):
        monkeypatch.delenv("ARENA_WALLET_LOG_LEVEL", raising=False)
        monkeypatch.delenv("ARENA_WALLET_LOG_STDOUT", raising=False)
        monkeypatch.delenv("ARENA_WALLET_LOG_FORMAT", raising=False)

        config = LoggingConfig.from_environment()

        assert config.log_level == LogLevel.INFO
        assert config.log_to_stdout is False
        assert config.json_format is False

    def test_from_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("ARENA_WALLET_LOG_LEVEL", "debug")
        monkeypatch.setenv("ARENA_WALLET_LOG_STDOUT", "true")
        monkeypatch.setenv("ARENA_WALLET_LOG_FORMAT", "json")

        config = LoggingConfig.from_environment()

        assert config.log_level == LogLevel.DEBUG
        assert config.log_to_stdout is True
        assert config.json_format is True

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("ARENA_WALLET_LOG_LEVEL", "chatty")
        assert LoggingConfig.from_environment().log_level == LogLevel.INFO


class TestSanitizeMessage:
    def test_redacts_secret_seed(self):
        sanitized = sanitize_message(f"signing with {SECRET_SEED}")
        assert SECRET_SEED not in sanitized
        assert "[SEED_REDACTED]" in sanitized

    def test_redacts_key_value_secrets(self):
        assert "hunter2" not in sanitize_message("password=hunter2")
        assert "abc123" not in sanitize_message("secret_key: abc123")

    def test_preserves_addresses_by_default(self, public_key):
        assert public_key in sanitize_message(f"account {public_key}")

    def test_can_redact_addresses(self, public_key):
        sanitized = sanitize_message(f"account {public_key}", preserve_addresses=False)
        assert public_key not in sanitized
        assert "[ADDRESS_REDACTED]" in sanitized

    def test_sanitize_dict_redacts_sensitive_keys(self):
        data = sanitize_dict(
            {"seed": "x", "nested": {"password": "y"}, "items": [SECRET_SEED], "n": 1}
        )
        assert data["seed"] == "[REDACTED]"
        assert data["nested"]["password"] == "[REDACTED]"
        assert data["items"] == ["[SEED_REDACTED]"]
        assert data["n"] == 1


class TestErrorMappings:
    @pytest.mark.parametrize(
        "message,expected",
        [
            ("User declined access", "Transaction was rejected in your wallet."),
            ("op_no_trust", "Destination account does not trust the selected asset."),
            ("op_underfunded", "Insufficient balance for this transfer."),
            ("op_no_destination", "Destination account does not exist on Stellar."),
            ("tx_bad_seq", "Transaction sequence number is out of date."),
        ],
    )
    def test_find_error_mapping(self, message, expected):
        mapping = find_error_mapping(message)
        assert mapping is not None
        assert mapping.user_message == expected

    def test_unknown_error(self):
        assert find_error_mapping(RuntimeError("something odd")) is None

    def test_ledger_specific_mappings(self):
        assert find_error_mapping("op_no_trust").ledger_specific is True
        assert find_error_mapping("Request timed out").ledger_specific is False


class TestFormatters:
    def test_structured_formatter_includes_sanitized_context(self):
        formatter = StructuredFormatter()
        record = make_record(f"seed {SECRET_SEED}", context={"secret": "x", "asset": "USDC"})

        data = json.loads(formatter.format(record))

        assert data["level"] == "INFO"
        assert SECRET_SEED not in data["message"]
        assert data["context"] == {"secret": "[REDACTED]", "asset": "USDC"}

    def test_human_formatter_sanitizes_output(self):
        formatted = HumanReadableFormatter().format(make_record(f"seed {SECRET_SEED}"))
        assert SECRET_SEED not in formatted
        assert "arena_wallet.test" in formatted


class TestContextAdapter:
    def test_get_logger_returns_adapter(self):
        assert isinstance(get_logger("arena_wallet.test"), ContextAdapter)

    def test_with_context_merges_fields(self):
        adapter = get_logger("arena_wallet.test", {"toast_id": "t1"}).with_context(asset="XLM")
        msg, kwargs = adapter.process("hello", {})
        assert msg == "hello"
        assert kwargs["extra"]["context"] == {"toast_id": "t1", "asset": "XLM"}

    def test_without_context_leaves_extra_empty(self):
        _, kwargs = get_logger("arena_wallet.test").process("hello", {})
        assert "context" not in kwargs["extra"]


class TestSetupLogging:
    def test_writes_to_log_file(self, tmp_path):
        setup_logging(
            LoggingConfig(log_level=LogLevel.DEBUG, log_dir=tmp_path),
            force=True,
        )
        try:
            get_logger("arena_wallet.test").info("hello from the wallet")
            for handler in logging.getLogger("arena_wallet").handlers:
                handler.flush()

            assert "hello from the wallet" in (tmp_path / "wallet.log").read_text()
        finally:
            package_logger = logging.getLogger("arena_wallet")
            for handler in package_logger.handlers[:]:
                package_logger.removeHandler(handler)
                handler.close()
