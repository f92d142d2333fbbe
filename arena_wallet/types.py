"""Enumerations shared across the wallet core."""

from enum import Enum


class StellarNetwork(Enum):
    TESTNET = "testnet"
    MAINNET = "mainnet"


class SignerKind(Enum):
    FREIGHTER = "freighter"
    ALBEDO = "albedo"


class AssetCode(Enum):
    XLM = "XLM"
    USDC = "USDC"
    ARENAX = "ARENAX"


ASSET_CODES: tuple[AssetCode, ...] = (AssetCode.XLM, AssetCode.USDC, AssetCode.ARENAX)


class AssetSource(Enum):
    NATIVE = "native"
    CLASSIC = "classic"
    SOROBAN = "soroban"


class TxKind(Enum):
    CLASSIC = "classic"
    SOROBAN = "soroban"


class TxDirection(Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"


class TxStatus(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class TxPhase(Enum):
    SIGNING = "signing"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"

    @property
    def rank(self) -> int:
        return _PHASE_ORDER.index(self)

    def __lt__(self, other: "TxPhase") -> bool:
        if not isinstance(other, TxPhase):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "TxPhase") -> bool:
        if not isinstance(other, TxPhase):
            return NotImplemented
        return self.rank <= other.rank


_PHASE_ORDER = (TxPhase.SIGNING, TxPhase.SUBMITTED, TxPhase.CONFIRMED)
