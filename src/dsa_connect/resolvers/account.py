"""Account lookups against the DSA core resolver and list contracts."""

from __future__ import annotations

from typing import Any

from ..connections import Web3Connections
from ..registry import Registry
from ..types import AccountDetails
from ..utils import to_checksum


class AccountResolver:
    def __init__(self, connections: Web3Connections, registry: Registry) -> None:
        self._connections = connections
        self._registry = registry

    def count(self) -> int:
        """Total number of DSAs created so far."""
        return int(
            self._connections.call(
                self._registry.core_abi("list"), self._registry.core_address("list"), "accounts"
            )
        )

    def get_accounts(self, authority: str) -> list[AccountDetails]:
        """DSAs on which ``authority`` is an authorised signer."""
        ids, addresses, versions = self._read("getAuthorityDetails", to_checksum(authority, "authority"))
        return [
            AccountDetails(id=int(account_id), address=address, version=int(version))
            for account_id, address, version in zip(ids, addresses, versions)
        ]

    def get_auth_by_id(self, account_id: int) -> list[str]:
        return list(self._read("getIDAuthorities", int(account_id)))

    def get_auth_by_address(self, address: str) -> list[str]:
        return list(self._read("getAccountAuthorities", to_checksum(address)))

    def _read(self, method: str, *args: Any) -> Any:
        address, abi = self._registry.read_target("core")
        return self._connections.call(abi, address, method, args)
