"""Transaction routing strategies for cast transactions."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests
from hexbytes import HexBytes

from .config import DSAConfig
from .connections import Web3Connections
from .constants import GENESIS_ADDRESS, Mode
from .exceptions import NetworkError, RoutingError
from .registry import Registry
from .transactions import TransactionDispatcher
from .types import DSASession, TxObject, TxResult, TxRouting
from .utils import to_checksum

logger = logging.getLogger(__name__)

SAFE_TX_TYPES = {
    "EIP712Domain": [
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    "SafeTx": [
        {"name": "to", "type": "address"},
        {"name": "value", "type": "uint256"},
        {"name": "data", "type": "bytes"},
        {"name": "operation", "type": "uint8"},
        {"name": "safeTxGas", "type": "uint256"},
        {"name": "baseGas", "type": "uint256"},
        {"name": "gasPrice", "type": "uint256"},
        {"name": "gasToken", "type": "address"},
        {"name": "refundReceiver", "type": "address"},
        {"name": "nonce", "type": "uint256"},
    ],
}


def resolve_routing(value: TxRouting | int | str | None) -> TxRouting:
    """Map a routing member, its integer code or its name onto ``TxRouting``."""

    if value is None:
        return TxRouting.DIRECT
    if isinstance(value, TxRouting):
        return value
    if isinstance(value, bool):
        raise RoutingError(f"Invalid routing type: {value!r}", routing=value)
    if isinstance(value, int):
        try:
            return TxRouting(value)
        except ValueError as exc:
            raise RoutingError(f"Invalid routing type: {value!r}", routing=value) from exc
    if isinstance(value, str):
        name = value.strip().upper().replace("-", "_")
        if name in TxRouting.__members__:
            return TxRouting[name]
        if name.isdigit():
            return resolve_routing(int(name))
    raise RoutingError(
        f"Invalid routing type: {value!r}",
        routing=value,
        details={"allowed": [member.name.lower() for member in TxRouting]},
    )


class TransactionRouter(ABC):
    """Submit an assembled cast transaction."""

    routing: TxRouting

    @abstractmethod
    def submit(self, tx: TxObject, session: DSASession) -> TxResult:
        pass


class DirectRouter(TransactionRouter):
    routing = TxRouting.DIRECT

    def __init__(self, dispatcher: TransactionDispatcher) -> None:
        self._dispatcher = dispatcher

    def submit(self, tx: TxObject, session: DSASession) -> TxResult:
        logger.info("Casting spells to DSA %s", tx.to)
        return self._dispatcher.send(tx)


class SafeRouter(TransactionRouter):
    """Propose the cast to a Gnosis Safe transaction service for its owners to confirm."""

    routing = TxRouting.GNOSIS_SAFE

    def __init__(
        self,
        config: DSAConfig,
        connections: Web3Connections,
        registry: Registry,
        http: requests.Session,
    ) -> None:
        self._config = config
        self._connections = connections
        self._registry = registry
        self._http = http

    def check(self, session: DSASession) -> None:
        """Fail before any encoding if this session cannot route through a Safe."""

        if self._config.mode is not Mode.NODE:
            raise RoutingError(
                "Gnosis Safe routing requires node mode with a private key",
                routing=self.routing,
            )
        if not session.safe_address:
            raise RoutingError(
                "`safe_address` is not defined. Run `dsa.set_instance(dsa_id, safe_address=...)`",
                routing=self.routing,
            )
        if not self._config.safe_tx_service_url:
            raise RoutingError(
                "No Safe transaction service URL configured",
                routing=self.routing,
            )

    def submit(self, tx: TxObject, session: DSASession) -> TxResult:
        self.check(session)
        safe_address = to_checksum(str(session.safe_address), "safe_address")
        account = self._connections.account
        logger.info("Casting spells to Gnosis Safe %s", safe_address)

        nonce = int(
            self._connections.call(self._registry.basic_abi("gnosisSafe"), safe_address, "nonce")
        )
        message = {
            "to": tx.to,
            "value": int(tx.value),
            "data": HexBytes(tx.data),
            "operation": 0,
            "safeTxGas": 0,
            "baseGas": 0,
            "gasPrice": 0,
            "gasToken": GENESIS_ADDRESS,
            "refundReceiver": GENESIS_ADDRESS,
            "nonce": nonce,
        }
        typed_data = {
            "types": SAFE_TX_TYPES,
            "primaryType": "SafeTx",
            "domain": {
                "chainId": self._connections.chain_id,
                "verifyingContract": safe_address,
            },
            "message": message,
        }
        signed = account.sign_typed_data(full_message=typed_data)
        safe_tx_hash = HexBytes(signed.message_hash).to_0x_hex()

        payload: dict[str, Any] = {
            **message,
            "value": str(message["value"]),
            "data": HexBytes(tx.data).to_0x_hex(),
            "safeTxGas": "0",
            "baseGas": "0",
            "gasPrice": "0",
            "contractTransactionHash": safe_tx_hash,
            "sender": account.address,
            "signature": HexBytes(signed.signature).to_0x_hex(),
            "origin": "dsa-connect",
        }
        url = f"{self._config.safe_tx_service_url}/api/v1/safes/{safe_address}/multisig-transactions/"

        try:
            response = self._http.post(url, json=payload, timeout=self._config.request_timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise NetworkError(
                "Failed to propose transaction to Safe service",
                endpoint=url,
                details={"safe_tx_hash": safe_tx_hash, "error": str(exc)},
            ) from exc

        logger.info("Proposed Safe transaction %s (nonce %s)", safe_tx_hash, nonce)
        return TxResult(
            tx_hash=None,
            routing=self.routing,
            safe_tx_hash=safe_tx_hash,
            raw_response=payload,
        )
