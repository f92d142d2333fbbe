"""Input validation for Stellar account public keys."""

import base64
import binascii
from dataclasses import dataclass
from typing import Any

ED25519_PUBLIC_KEY_VERSION = 6 << 3


@dataclass
class ValidationResult:
    is_valid: bool
    error_message: str | None = None
    normalized_value: Any = None


def crc16_xmodem(data: bytes) -> int:
    crc = 0x0000
    for byte in data:
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ 0x1021) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return crc


class AddressValidator:
    ADDRESS_LENGTH = 56

    @staticmethod
    def validate(value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Address is required",
            )

        normalized = value.strip().upper()

        if len(normalized) != AddressValidator.ADDRESS_LENGTH:
            return ValidationResult(
                is_valid=False,
                error_message=f"Address must be {AddressValidator.ADDRESS_LENGTH} characters",
            )

        if normalized[0] != "G":
            return ValidationResult(
                is_valid=False,
                error_message="Address must start with 'G'",
            )

        try:
            decoded = base64.b32decode(normalized)
        except (binascii.Error, ValueError):
            return ValidationResult(
                is_valid=False,
                error_message="Address contains invalid characters",
            )

        version, payload, checksum = decoded[0], decoded[:-2], decoded[-2:]
        if version != ED25519_PUBLIC_KEY_VERSION:
            return ValidationResult(
                is_valid=False,
                error_message="Address is not an account public key",
            )

        if crc16_xmodem(payload) != int.from_bytes(checksum, "little"):
            return ValidationResult(
                is_valid=False,
                error_message="Address checksum is invalid",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value=normalized,
        )
