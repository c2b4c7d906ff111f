"""Utility helpers for amounts, addresses and receipts."""

from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from hexbytes import HexBytes
from web3 import Web3

from .exceptions import ValidationError


def to_checksum(address: str, field: str = "address") -> str:
    """Checksum-normalise an address, raising ``ValidationError`` when malformed."""
    try:
        return Web3.to_checksum_address(address)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid address: {address}", field=field, value=address) from exc


def to_raw_amount(amount: float | int | str | Decimal, decimals: int) -> int:
    """Convert a human readable amount to integer token units (truncating)."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError("Amount must be numeric", field="amount", value=amount) from exc

    if value < 0:
        raise ValidationError("Amount cannot be negative", field="amount", value=amount)

    return int(value * (Decimal(10) ** decimals))


def from_raw_amount(raw: int | str, decimals: int) -> Decimal:
    """Convert integer token units to a Decimal amount."""
    return Decimal(int(raw)) / (Decimal(10) ** decimals)


def serialise_receipt(receipt: Any) -> Any:
    """Serialise web3 receipt objects into JSON-friendly structures."""
    if receipt is None:
        return None
    if isinstance(receipt, Mapping):
        return {key: serialise_receipt(value) for key, value in receipt.items()}
    if isinstance(receipt, Sequence) and not isinstance(
        receipt, str | bytes | bytearray | HexBytes
    ):
        return [serialise_receipt(item) for item in receipt]
    if isinstance(receipt, bytes | bytearray | HexBytes):
        return HexBytes(receipt).to_0x_hex()
    return receipt
