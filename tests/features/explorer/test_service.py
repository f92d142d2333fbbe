import pytest

from arena_wallet.config import ConfigurationError, WalletConfig
from arena_wallet.features.explorer import ExplorerLinkBuilder, build_explorer_link
from arena_wallet.types import StellarNetwork, TxKind


class TestExplorerLinkBuilder:
    def test_classic_link_on_testnet(self):
        builder = ExplorerLinkBuilder.from_config(WalletConfig.for_network(StellarNetwork.TESTNET))
        assert (
            builder.build_link("abcd")
            == "https://stellar.expert/explorer/testnet/tx/abcd"
        )

    def test_mainnet_uses_public_segment(self):
        builder = ExplorerLinkBuilder.from_config(WalletConfig.for_network(StellarNetwork.MAINNET))
        assert builder.build_link("abcd").startswith("https://stellar.expert/explorer/public/tx/")

    def test_kind_selects_base(self):
        builder = ExplorerLinkBuilder(
            "https://classic.example/tx/", "https://soroban.example/tx"
        )
        assert builder.build_link("h1", TxKind.CLASSIC) == "https://classic.example/tx/h1"
        assert builder.build_link("h1", TxKind.SOROBAN) == "https://soroban.example/tx/h1"

    def test_hash_is_url_encoded(self):
        builder = ExplorerLinkBuilder("https://x.example/tx", "https://x.example/tx")
        assert builder.build_link("a/b c") == "https://x.example/tx/a%2Fb%20c"

    @pytest.mark.parametrize("base", ["", "stellar.expert/tx", "ftp://x.example/tx", "/tx"])
    def test_invalid_base_is_configuration_error(self, base):
        with pytest.raises(ConfigurationError):
            ExplorerLinkBuilder(base, "https://soroban.example/tx")

    def test_invalid_soroban_base_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            ExplorerLinkBuilder("https://classic.example/tx", "not a url")


class TestBuildExplorerLink:
    def test_defaults_to_testnet_configuration(self):
        assert (
            build_explorer_link("abcd", TxKind.SOROBAN)
            == "https://stellar.expert/explorer/testnet/tx/abcd"
        )

    def test_uses_given_configuration(self):
        config = WalletConfig.for_network(
            StellarNetwork.TESTNET, soroban_explorer_base="https://soroban.example/tx"
        )
        assert (
            build_explorer_link("abcd", TxKind.SOROBAN, config)
            == "https://soroban.example/tx/abcd"
        )
