"""Type definitions and data models for the DSA client."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from eth_typing import HexStr

from .constants import GENESIS_ADDRESS
from .exceptions import ValidationError

Address = str  # Ethereum address
Wei = int


class TxRouting(IntEnum):
    """How a cast transaction reaches the chain."""

    DIRECT = 0  # signed and sent by the session signer
    GNOSIS_SAFE = 1  # proposed to a Gnosis Safe owning the DSA


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating user input before any network call."""

    ok: bool
    errors: tuple[str, ...] = ()

    @classmethod
    def success(cls) -> ValidationResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, *errors: str) -> ValidationResult:
        return cls(ok=False, errors=tuple(errors))

    def raise_for_errors(self, field: str | None = None, value: Any | None = None) -> None:
        if not self.ok:
            raise ValidationError(
                "; ".join(self.errors), field=field, value=value, details={"errors": list(self.errors)}
            )


@dataclass(frozen=True)
class SpellEntry:
    """A single connector call inside a cast."""

    connector: str | None
    method: str | None
    args: Sequence[Any] | None

    def validate(self) -> ValidationResult:
        errors = []
        if not self.connector or not isinstance(self.connector, str):
            errors.append("connector not defined")
        if not self.method or not isinstance(self.method, str):
            errors.append("method not defined")
        if self.args is None:
            errors.append("args not defined")
        elif isinstance(self.args, str | bytes) or not isinstance(self.args, Sequence):
            errors.append("args must be a list")
        return ValidationResult(ok=not errors, errors=tuple(errors))


class Spell:
    """Ordered list of spells; order is the on-chain execution order."""

    def __init__(self) -> None:
        self.data: list[SpellEntry] = []

    def add(
        self,
        connector: str | Mapping[str, Any] | SpellEntry | None = None,
        method: str | None = None,
        args: Sequence[Any] | None = None,
    ) -> Spell:
        """Append a spell, raising ``ValidationError`` if a field is missing."""
        if isinstance(connector, SpellEntry):
            entry = connector
        elif isinstance(connector, Mapping):
            entry = SpellEntry(connector.get("connector"), connector.get("method"), connector.get("args"))
        else:
            entry = SpellEntry(connector, method, args)

        entry.validate().raise_for_errors(
            field="spell", value={"connector": entry.connector, "method": entry.method}
        )
        self.data.append(SpellEntry(entry.connector, entry.method, list(entry.args or [])))
        return self

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[SpellEntry]:
        return iter(self.data)

    def __repr__(self) -> str:
        return f"Spell({self.data!r})"


@dataclass
class Instance:
    """The currently selected DSA."""

    id: int = 0
    address: Address = GENESIS_ADDRESS
    version: int = 1


@dataclass
class DSASession:
    """Mutable per-caller state: selected DSA, origin tag and routing."""

    instance: Instance = field(default_factory=Instance)
    origin: Address = GENESIS_ADDRESS
    routing: TxRouting = TxRouting.DIRECT
    safe_address: Address | None = None


@dataclass
class AccountDetails:
    id: int
    address: Address
    version: int


@dataclass(frozen=True)
class EncodedSpells:
    """Parallel target and calldata arrays expected by ``cast``."""

    targets: list[str]
    datas: list[HexStr]

    def __post_init__(self) -> None:
        if len(self.targets) != len(self.datas):
            raise ValidationError(
                "Encoded spell arrays must have equal length",
                details={"targets": len(self.targets), "datas": len(self.datas)},
            )

    def as_args(self) -> tuple[list[str], list[HexStr]]:
        return self.targets, self.datas


@dataclass
class TxObject:
    """Transaction fields assembled before signing."""

    from_address: Address
    to: Address
    data: HexStr
    value: Wei = 0
    gas: int | None = None
    gas_price: Wei | None = None
    nonce: int | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the transaction in web3's dict format, omitting unset fields."""
        tx: dict[str, Any] = {
            "from": self.from_address,
            "to": self.to,
            "data": self.data,
            "value": int(self.value),
        }
        if self.gas is not None:
            tx["gas"] = int(self.gas)
        if self.gas_price is not None:
            tx["gasPrice"] = int(self.gas_price)
        if self.nonce is not None:
            tx["nonce"] = int(self.nonce)
        return tx


@dataclass
class TxResult:
    """Result of submitting a transaction."""

    tx_hash: str | None
    routing: TxRouting = TxRouting.DIRECT
    receipt: dict[str, Any] | None = None
    block_number: int | None = None
    status: bool | None = None
    safe_tx_hash: str | None = None
    raw_response: dict[str, Any] | None = None
