"""Shared helpers: signer resolution, transaction assembly and spell encoding."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from eth_typing import HexStr

from .config import DSAConfig
from .connections import Web3Connections
from .constants import DEFAULT_ACCOUNT_VERSION, Mode
from .exceptions import NetworkError, ValidationError
from .registry import Registry
from .types import EncodedSpells, Spell, SpellEntry, TxObject, ValidationResult
from .utils import to_checksum

logger = logging.getLogger(__name__)


class Internal:
    def __init__(self, config: DSAConfig, connections: Web3Connections, registry: Registry) -> None:
        self._config = config
        self._connections = connections
        self._registry = registry

    def get_address(self) -> str:
        """Return the address transactions are sent from in this session."""

        if self._config.mode is Mode.NODE:
            return self._connections.account.address

        web3 = self._connections.web3
        default_account = web3.eth.default_account
        if default_account:
            return to_checksum(str(default_account))

        try:
            accounts = web3.eth.accounts
        except Exception as exc:
            raise NetworkError(
                "Failed to query wallet accounts",
                endpoint=self._connections.endpoint,
                details={"error": str(exc)},
            ) from exc

        if not accounts:
            raise ValidationError(
                "No account available: set web3.eth.default_account or use node mode with a private key",
                field="from",
            )
        return to_checksum(accounts[0])

    def get_tx_obj(
        self,
        *,
        from_address: str | None,
        to: str | None,
        call_data: str | None,
        value: int = 0,
        gas: int | None = None,
        gas_price: int | None = None,
        nonce: int | None = None,
    ) -> TxObject:
        """Fill in gas, gas price and nonce defaults for a partial transaction."""

        if not from_address:
            raise ValidationError("'from' is not defined.", field="from")
        if not to:
            raise ValidationError("'to' is not defined.", field="to")
        if not call_data:
            raise ValidationError("'callData' is not defined.", field="call_data")

        tx = TxObject(
            from_address=to_checksum(from_address, "from"),
            to=to_checksum(to, "to"),
            data=HexStr(call_data),
            value=int(value or 0),
            gas_price=gas_price,
            nonce=nonce,
        )

        web3 = self._connections.web3
        if gas is None:
            tx.gas = self.estimate_gas(tx.as_dict())
            logger.debug("Estimated gas %s for call to %s", tx.gas, tx.to)
        else:
            tx.gas = int(gas)

        if self._config.mode is Mode.NODE:
            if tx.gas_price is None:
                tx.gas_price = int(web3.eth.gas_price)
                logger.debug("Defaulted gas price to %s", tx.gas_price)
            if tx.nonce is None:
                tx.nonce = int(web3.eth.get_transaction_count(tx.from_address, "pending"))
                logger.debug("Defaulted nonce to %s for %s", tx.nonce, tx.from_address)

        return tx

    def estimate_gas(self, tx: dict[str, Any]) -> int:
        """Estimate gas for a transaction dict and apply the configured buffer."""

        try:
            estimate = self._connections.web3.eth.estimate_gas(tx)  # type: ignore[arg-type]
        except Exception as exc:
            raise NetworkError(
                "Gas estimation failed",
                endpoint=self._connections.endpoint,
                details={"to": tx.get("to"), "error": str(exc)},
            ) from exc
        return math.ceil(Decimal(int(estimate)) * Decimal(str(self._config.gas_buffer)))

    def encode_spells(
        self, spells: Spell | Iterable[SpellEntry], version: int = DEFAULT_ACCOUNT_VERSION
    ) -> EncodedSpells:
        """Encode spells into the ``(targets, datas)`` arrays ``cast`` takes.

        Every entry is validated before anything is encoded. Version 2 accounts
        address connectors by name, version 1 accounts by connector address.
        The output keeps the spell order.
        """

        entries = list(spells)
        if not entries:
            raise ValidationError("At least one spell is required", field="spells")

        errors = []
        for position, entry in enumerate(entries):
            result = entry.validate()
            if not result.ok:
                errors.extend(f"spell {position}: {message}" for message in result.errors)
        ValidationResult(ok=not errors, errors=tuple(errors)).raise_for_errors(field="spells")

        targets: list[str] = []
        datas: list[HexStr] = []
        for entry in entries:
            connector = str(entry.connector)
            method = str(entry.method)
            abi = self._registry.connector_abi(connector)
            if self._registry.find_function(abi, method) is None:
                raise ValidationError(
                    f"{method} is an invalid method of connector {connector}",
                    field="method",
                    value=method,
                )

            if int(version) == 1:
                targets.append(to_checksum(self._registry.connector_address(connector), "connector"))
            else:
                targets.append(connector)
            datas.append(HexStr(self._connections.encode_call(abi, method, list(entry.args or []))))

        return EncodedSpells(targets=targets, datas=datas)
