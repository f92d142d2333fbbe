import pytest

from arena_wallet.features.transactions.errors import (
    TransactionError,
    parse_horizon_failure,
    sanitize_tx_error,
)
from arena_wallet.shared.network import NetworkError, NetworkErrorType


def horizon_failure(operations=None, title=None):
    payload = {"extras": {"result_codes": {"transaction": "tx_failed"}}}
    if operations is not None:
        payload["extras"]["result_codes"]["operations"] = operations
    if title is not None:
        payload["title"] = title
    return payload


class TestParseHorizonFailure:
    @pytest.mark.parametrize(
        "op_code,expected",
        [
            ("op_no_trust", "Destination account does not trust the selected asset."),
            ("op_underfunded", "Insufficient balance for this transfer."),
            ("op_no_destination", "Destination account does not exist on Stellar."),
            ("op_line_full", "Operation failed: op_line_full."),
        ],
    )
    def test_operation_codes(self, op_code, expected):
        assert parse_horizon_failure(horizon_failure([op_code])) == expected

    def test_falls_back_to_title(self):
        assert parse_horizon_failure(horizon_failure(title="Transaction Failed")) == "Transaction Failed"

    def test_default_message(self):
        assert parse_horizon_failure({}) == "Transaction failed on Stellar network."
        assert parse_horizon_failure("oops") == "Transaction failed on Stellar network."
        assert parse_horizon_failure(horizon_failure([""])) == "Transaction failed on Stellar network."


class TestSanitizeTxError:
    def test_missing_error(self):
        assert sanitize_tx_error(None) == "Transaction failed."

    def test_wallet_rejection(self):
        assert (
            sanitize_tx_error(RuntimeError("User declined access"))
            == "Transaction was rejected in your wallet."
        )

    def test_ledger_codes(self):
        assert (
            sanitize_tx_error(Exception("tx_failed: op_underfunded"))
            == "Insufficient balance for this transfer."
        )
        assert (
            sanitize_tx_error(Exception("op_no_trust"))
            == "Destination account does not trust the selected asset."
        )

    def test_transaction_error_keeps_reason(self):
        assert sanitize_tx_error(TransactionError("Already explained.")) == "Already explained."

    def test_network_error(self):
        error = NetworkError(
            error_type=NetworkErrorType.TIMEOUT,
            message="Check Horizon transaction: Request timed out: https://h/tx",
        )
        assert sanitize_tx_error(error).startswith("Connection timed out.")

    def test_unmapped_network_error(self):
        error = NetworkError(error_type=NetworkErrorType.HTTP_ERROR, message="HTTP error 418")
        assert (
            sanitize_tx_error(error)
            == "A network error occurred while processing the transaction."
        )

    def test_generic_error_first_line_only(self):
        assert sanitize_tx_error(ValueError("first line\nsecond line")) == "first line"

    def test_long_error_is_truncated(self):
        reason = sanitize_tx_error(RuntimeError("x" * 500))
        assert len(reason) <= 160
        assert reason.endswith("...")

    def test_secret_seed_is_redacted(self):
        seed = "S" + "B" * 55
        assert seed not in sanitize_tx_error(RuntimeError(f"bad signer {seed}"))

    def test_empty_message(self):
        assert sanitize_tx_error(RuntimeError("")) == "Transaction failed."

    def test_dict_payloads(self):
        assert sanitize_tx_error({"message": "Wallet closed"}) == "Wallet closed"
        assert (
            sanitize_tx_error({"response": horizon_failure(["op_no_destination"])})
            == "Destination account does not exist on Stellar."
        )
        assert sanitize_tx_error({"unexpected": True}) == "Transaction failed."

    @pytest.mark.parametrize("op_code", ["op_no_trust", "op_underfunded", "op_no_destination"])
    def test_operation_codes_match_horizon_reasons(self, op_code):
        assert sanitize_tx_error(RuntimeError(f"tx_failed: {op_code}")) == parse_horizon_failure(
            horizon_failure([op_code])
        )
