"""Constants and builders shared by the test modules."""

import base64
from unittest.mock import Mock

from requests.exceptions import HTTPError

from arena_wallet.shared.validation import ED25519_PUBLIC_KEY_VERSION, crc16_xmodem

USDC_ISSUER = "GA5ZSEJYB37JRC5AVCIA5MOP4RHTM335X2KGX3IHOJAPP5RE34K4KZVN"
OTHER_ISSUER = "GOTHERISSUER0000000000000000000000000000000000000000000"
ARENAX_CONTRACT_ID = "CARENAXCONTRACT0000000000000000000000000000000000000000"
HORIZON_TESTNET = "https://horizon-testnet.stellar.org"
SOROBAN_TESTNET = "https://soroban-testnet.stellar.org"
ESCROW_ENDPOINT = "https://api.arenax.test/escrow/balances"


def encode_public_key(raw: bytes) -> str:
    """Encode 32 raw bytes as a G... account id."""
    payload = bytes([ED25519_PUBLIC_KEY_VERSION]) + raw
    checksum = crc16_xmodem(payload).to_bytes(2, "little")
    return base64.b32encode(payload + checksum).decode("ascii")


def json_response(payload, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    if status_code >= 400:
        response.raise_for_status.side_effect = HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response
