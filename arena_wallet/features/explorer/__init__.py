"""Explorer link feature."""

from arena_wallet.features.explorer.service import ExplorerLinkBuilder, build_explorer_link

__all__ = ["ExplorerLinkBuilder", "build_explorer_link"]
