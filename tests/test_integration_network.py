"""Integration tests against the public Stellar testnet.

These tests hit real Horizon and Soroban RPC endpoints and are deselected by
default; run them with ``pytest -m integration``.
"""

import asyncio

import pytest

from arena_wallet.config import WalletConfig
from arena_wallet.features.balances import BalanceAggregator
from arena_wallet.features.transactions import ConfirmationError, ConfirmationWaiter
from arena_wallet.shared.network import NetworkClient, RetryConfig, TimeoutConfig
from arena_wallet.types import AssetCode, StellarNetwork, TxKind
from tests.helpers import HORIZON_TESTNET, encode_public_key


@pytest.fixture
def testnet_config():
    return WalletConfig.for_network(
        StellarNetwork.TESTNET,
        timeout_config=TimeoutConfig(connect_timeout=10.0, read_timeout=30.0),
        retry_config=RetryConfig(max_retries=2, base_delay=1.0),
    )


@pytest.mark.integration
class TestHorizonTestnet:
    def test_root_endpoint(self):
        client = NetworkClient(HORIZON_TESTNET)
        result = client.get("", context="Horizon root")
        assert "network_passphrase" in result

    def test_unfunded_account_balances(self, testnet_config):
        unfunded = encode_public_key(b"arena-wallet-unfunded-account-01")
        balances = asyncio.run(BalanceAggregator(testnet_config).get_balances(unfunded))

        assert balances[AssetCode.XLM].available == 0
        assert balances[AssetCode.USDC].has_trustline is False

    def test_unknown_transaction_times_out(self, testnet_config):
        testnet_config.confirmation_config.horizon_max_attempts = 2
        testnet_config.confirmation_config.horizon_not_found_delay = 0.1
        waiter = ConfirmationWaiter(testnet_config)

        with pytest.raises(ConfirmationError):
            asyncio.run(waiter("0" * 64, TxKind.CLASSIC))
