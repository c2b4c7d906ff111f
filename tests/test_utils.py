"""Tests for utility functions."""

from decimal import Decimal

import pytest
from hexbytes import HexBytes

from dsa_connect.exceptions import ValidationError
from dsa_connect.utils import from_raw_amount, serialise_receipt, to_checksum, to_raw_amount


class TestAmountConversion:
    """Test raw token unit conversion functions."""

    def test_to_raw_amount_string(self):
        assert to_raw_amount("1.25", 6) == 1_250_000

    def test_to_raw_amount_float(self):
        assert to_raw_amount(0.1, 18) == 10**17

    def test_to_raw_amount_int(self):
        assert to_raw_amount(3, 8) == 300_000_000

    def test_to_raw_amount_negative_raises_error(self):
        with pytest.raises(ValidationError):
            to_raw_amount(-1, 6)

    def test_to_raw_amount_non_numeric_raises_error(self):
        with pytest.raises(ValidationError):
            to_raw_amount("lots", 6)

    def test_from_raw_amount(self):
        assert from_raw_amount(1_250_000, 6) == Decimal("1.25")

    def test_from_raw_amount_string(self):
        assert from_raw_amount("100000000", 8) == Decimal("1")


class TestChecksum:
    def test_normalises_lowercase(self):
        address = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
        assert to_checksum(address) == "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"

    def test_invalid_address_raises_validation_error(self):
        with pytest.raises(ValidationError) as excinfo:
            to_checksum("0x1234", field="origin")
        assert excinfo.value.field == "origin"


def test_serialise_receipt_converts_bytes():
    receipt = {
        "transactionHash": HexBytes("0x" + "ab" * 32),
        "logs": [{"data": b"\x01\x02", "topics": [HexBytes("0x01")]}],
        "status": 1,
    }

    assert serialise_receipt(receipt) == {
        "transactionHash": "0x" + "ab" * 32,
        "logs": [{"data": "0x0102", "topics": ["0x01"]}],
        "status": 1,
    }


def test_serialise_receipt_none():
    assert serialise_receipt(None) is None
