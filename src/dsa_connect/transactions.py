"""Transaction signing, submission and receipt handling."""

from __future__ import annotations

import logging
from typing import Any

from hexbytes import HexBytes

from .config import DSAConfig
from .connections import Web3Connections
from .constants import Mode
from .exceptions import NetworkError
from .types import TxObject, TxResult, TxRouting
from .utils import serialise_receipt, to_checksum

logger = logging.getLogger(__name__)


class TransactionDispatcher:
    """Sign with the local key in node mode, otherwise let the wallet sign and send."""

    def __init__(self, config: DSAConfig, connections: Web3Connections) -> None:
        self._config = config
        self._connections = connections

    def send(self, tx: TxObject | dict[str, Any]) -> TxResult:
        web3 = self._connections.web3
        tx_dict = tx.as_dict() if isinstance(tx, TxObject) else dict(tx)
        logger.info("Dispatching transaction to %s", tx_dict.get("to"))

        try:
            if self._config.mode is Mode.NODE:
                tx_dict.setdefault("chainId", self._connections.chain_id)
                signed = self._connections.account.sign_transaction(tx_dict)
                tx_hash = web3.eth.send_raw_transaction(signed.raw_transaction)
            else:
                tx_hash = web3.eth.send_transaction(tx_dict)  # type: ignore[arg-type]
        except Exception as exc:
            raise NetworkError(
                "Failed to submit transaction",
                endpoint=self._connections.endpoint,
                details={"to": tx_dict.get("to"), "error": str(exc)},
            ) from exc

        tx_hex = HexBytes(tx_hash).to_0x_hex()
        logger.info("Transaction sent hash=%s", tx_hex)

        if not self._config.wait_for_receipt:
            return TxResult(tx_hash=tx_hex, routing=TxRouting.DIRECT)

        receipt = self.get_tx_receipt(tx_hash)
        block_number = receipt.get("blockNumber") if receipt else None
        status = bool(receipt.get("status", 0) == 1) if receipt else None
        logger.info("Transaction confirmed hash=%s block=%s status=%s", tx_hex, block_number, status)
        return TxResult(
            tx_hash=tx_hex,
            routing=TxRouting.DIRECT,
            receipt=receipt,
            block_number=block_number,
            status=status,
        )

    def get_tx_receipt(self, tx_hash: str | bytes) -> dict[str, Any] | None:
        """Wait for and return the serialised receipt of ``tx_hash``."""

        try:
            receipt = self._connections.web3.eth.wait_for_transaction_receipt(
                HexBytes(tx_hash), timeout=self._config.receipt_timeout
            )
        except Exception as exc:
            raise NetworkError(
                "Failed waiting for transaction receipt",
                endpoint=self._connections.endpoint,
                details={"tx_hash": HexBytes(tx_hash).to_0x_hex(), "error": str(exc)},
            ) from exc
        return serialise_receipt(receipt)

    def get_tx_count(self, address: str) -> int:
        return int(
            self._connections.web3.eth.get_transaction_count(to_checksum(address), "pending")
        )
