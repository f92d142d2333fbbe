import tempfile
from pathlib import Path

import pytest

from arena_wallet.config import ConfirmationConfig, WalletConfig, build_asset_configs
from arena_wallet.shared.network import RetryConfig
from arena_wallet.shared.storage import MemoryStorage
from arena_wallet.types import StellarNetwork
from tests.helpers import (
    ARENAX_CONTRACT_ID,
    ESCROW_ENDPOINT,
    USDC_ISSUER,
    encode_public_key,
)


@pytest.fixture
def public_key():
    """Fixture providing a valid Stellar account id"""
    return encode_public_key(bytes(range(32)))


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def fast_confirmation():
    """Confirmation policy without real waiting"""
    return ConfirmationConfig(
        horizon_max_attempts=3,
        horizon_not_found_delay=0,
        horizon_pending_delay=0,
        soroban_max_attempts=3,
        soroban_poll_delay=0,
    )


@pytest.fixture
def wallet_config(fast_confirmation):
    """Testnet configuration with escrow endpoint and classic ARENAX"""
    return WalletConfig.for_network(
        StellarNetwork.TESTNET,
        escrow_balances_endpoint=ESCROW_ENDPOINT,
        assets=build_asset_configs(usdc_issuer=USDC_ISSUER),
        retry_config=RetryConfig(max_retries=0),
        confirmation_config=fast_confirmation,
    )


@pytest.fixture
def contract_wallet_config(fast_confirmation):
    """Configuration with ARENAX held by a Soroban contract"""
    return WalletConfig.for_network(
        StellarNetwork.TESTNET,
        escrow_balances_endpoint=ESCROW_ENDPOINT,
        arenax_balance_endpoint="/api/arenax/balance",
        origin="https://app.arenax.test",
        assets=build_asset_configs(
            usdc_issuer=USDC_ISSUER, arenax_contract_id=ARENAX_CONTRACT_ID
        ),
        retry_config=RetryConfig(max_retries=0),
        confirmation_config=fast_confirmation,
    )


@pytest.fixture(autouse=True)
def isolate_wallet_storage(monkeypatch):
    """Run tests with isolated wallet storage and logging directory."""
    with tempfile.TemporaryDirectory(prefix="arena-wallet-test-") as tmp_dir:
        monkeypatch.setenv("ARENA_WALLET_DIR", str(Path(tmp_dir)))
        yield
