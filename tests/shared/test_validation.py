from arena_wallet.shared.validation import (
    AddressValidator,
    ValidationResult,
    crc16_xmodem,
)
from tests.helpers import encode_public_key

ZERO_ACCOUNT = "GAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAWHF"


class TestValidationResult:
    def test_valid_result(self):
        result = ValidationResult(is_valid=True, normalized_value="G")
        assert result.is_valid is True
        assert result.error_message is None
        assert result.normalized_value == "G"

    def test_invalid_result(self):
        result = ValidationResult(is_valid=False, error_message="Test error")
        assert result.is_valid is False
        assert result.error_message == "Test error"
        assert result.normalized_value is None


class TestCrc16:
    def test_known_check_value(self):
        assert crc16_xmodem(b"123456789") == 0x31C3

    def test_empty_input(self):
        assert crc16_xmodem(b"") == 0


class TestAddressValidator:
    def test_zero_account(self):
        result = AddressValidator.validate(ZERO_ACCOUNT)
        assert result.is_valid is True
        assert result.normalized_value == ZERO_ACCOUNT

    def test_encoded_account(self, public_key):
        assert AddressValidator.validate(public_key).is_valid is True

    def test_lowercase_and_whitespace_are_normalized(self, public_key):
        result = AddressValidator.validate(f"  {public_key.lower()}  ")
        assert result.is_valid is True
        assert result.normalized_value == public_key

    def test_empty(self):
        result = AddressValidator.validate("")
        assert result.is_valid is False
        assert "required" in result.error_message.lower()

    def test_wrong_length(self):
        result = AddressValidator.validate("GABC")
        assert result.is_valid is False
        assert "56" in result.error_message

    def test_wrong_prefix(self, public_key):
        result = AddressValidator.validate("S" + public_key[1:])
        assert result.is_valid is False
        assert "'G'" in result.error_message

    def test_invalid_characters(self, public_key):
        result = AddressValidator.validate(public_key[:-1] + "1")
        assert result.is_valid is False

    def test_bad_checksum(self):
        address = encode_public_key(bytes(32))
        tampered = address[:10] + ("B" if address[10] != "B" else "C") + address[11:]
        result = AddressValidator.validate(tampered)
        assert result.is_valid is False
        assert "checksum" in result.error_message.lower()
