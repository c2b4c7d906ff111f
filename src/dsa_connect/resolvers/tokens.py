"""Token metadata lookups and decimal conversions."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from ..constants import TOKENS
from ..exceptions import ValidationError
from ..utils import from_raw_amount, to_raw_amount


class TokenResolver:
    """Resolve tokens by symbol or address from a static token table."""

    def __init__(self, tokens: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._tokens = {key.lower(): dict(value) for key, value in (tokens or TOKENS).items()}
        self._by_address = {value["address"].lower(): key for key, value in self._tokens.items()}

    def info(self, token: str) -> dict[str, Any]:
        key = token.lower()
        if key.startswith("0x"):
            key = self._by_address.get(key, "")
        info = self._tokens.get(key)
        if info is None:
            raise ValidationError(f"Unknown token: {token}", field="token", value=token)
        return dict(info)

    def address(self, token: str) -> str:
        return self.info(token)["address"]

    def decimals(self, token: str) -> int:
        return int(self.info(token)["decimals"])

    def to_decimal(self, raw: int | str, token: str) -> Decimal:
        """Convert raw token units to a human readable amount."""
        return from_raw_amount(raw, self.decimals(token))

    def from_decimal(self, amount: float | int | str | Decimal, token: str) -> int:
        """Convert a human readable amount to raw token units."""
        return to_raw_amount(amount, self.decimals(token))
