"""Lookup of contract addresses and ABIs by protocol or connector name."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .abi import ABIS
from .constants import ADDRESSES
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class Registry:
    """Resolve ``(address, abi)`` pairs for read protocols, connectors and core contracts."""

    def __init__(
        self,
        addresses: Mapping[str, Any] | None = None,
        abis: Mapping[str, Any] | None = None,
    ) -> None:
        self.addresses: dict[str, Any] = copy.deepcopy(dict(addresses or ADDRESSES))
        self.abis: dict[str, Any] = copy.deepcopy(dict(abis or ABIS))

    # ------------------------------------------------------------------
    # Core contracts
    # ------------------------------------------------------------------
    def core_address(self, name: str) -> str:
        address = self.addresses.get("core", {}).get(name)
        if not address:
            raise ValidationError(f"Unknown core contract '{name}'", field="core", value=name)
        return address

    def core_abi(self, name: str) -> list[dict[str, Any]]:
        abi = self.abis.get("core", {}).get(name)
        if not abi:
            raise ValidationError(f"Unknown core contract '{name}'", field="core", value=name)
        return abi

    def account_abi(self, version: int) -> list[dict[str, Any]]:
        abi = self.abis["core"]["account"].get(int(version))
        if abi is None:
            raise ValidationError(
                f"Unsupported DSA version {version}", field="version", value=version
            )
        return abi

    # ------------------------------------------------------------------
    # Read resolvers
    # ------------------------------------------------------------------
    def read_target(self, protocol: str) -> tuple[str, list[dict[str, Any]]]:
        address = self.addresses.get("read", {}).get(protocol)
        abi = self.abis.get("read", {}).get(protocol)
        if not address or not abi:
            raise ValidationError(
                f"'{protocol}' is not a registered read protocol",
                field="protocol",
                value=protocol,
                details={"known": sorted(self.addresses.get("read", {}))},
            )
        return address, abi

    def register_read(self, protocol: str, address: str, abi: Sequence[Mapping[str, Any]]) -> None:
        self.addresses.setdefault("read", {})[protocol] = address
        self.abis.setdefault("read", {})[protocol] = list(abi)
        logger.debug("Registered read protocol %s at %s", protocol, address)

    # ------------------------------------------------------------------
    # Connectors
    # ------------------------------------------------------------------
    def connector_abi(self, name: str) -> list[dict[str, Any]]:
        abi = self.abis.get("connectors", {}).get(name)
        if not abi:
            raise ValidationError(f"{name} is an invalid connector", field="connector", value=name)
        return abi

    def connector_address(self, name: str) -> str:
        address = self.addresses.get("connectors", {}).get(name)
        if not address:
            raise ValidationError(
                f"{name} has no registered address (required by version 1 accounts)",
                field="connector",
                value=name,
            )
        return address

    def register_connector(
        self, name: str, abi: Sequence[Mapping[str, Any]], address: str | None = None
    ) -> None:
        self.abis.setdefault("connectors", {})[name] = list(abi)
        if address is not None:
            self.addresses.setdefault("connectors", {})[name] = address
        logger.debug("Registered connector %s", name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def basic_abi(self, name: str) -> list[dict[str, Any]]:
        return self.abis["basic"][name]

    @staticmethod
    def find_function(abi: Sequence[Mapping[str, Any]], method: str) -> Mapping[str, Any] | None:
        for entry in abi:
            if entry.get("type") == "function" and entry.get("name") == method:
                return entry
        return None
