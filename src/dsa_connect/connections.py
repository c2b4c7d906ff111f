"""Web3 handle, signer account and contract helpers for the DSA client."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, cast

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import HTTPProvider, Web3
from web3.contract import Contract

from .config import DSAConfig
from .constants import Mode
from .exceptions import NetworkError, ValidationError

logger = logging.getLogger(__name__)


class Web3Connections:
    """Own the Web3 provider and, in node mode, the local signer."""

    def __init__(self, config: DSAConfig, web3: Web3 | None = None):
        self.config = config
        self._web3: Web3 | None = web3
        self._account: LocalAccount | None = None
        self._chain_id: int | None = None

        if config.mode is Mode.NODE:
            try:
                self._account = cast(LocalAccount, Account.from_key(config.private_key))  # type: ignore[arg-type]
            except Exception as exc:
                raise ValidationError(
                    "Failed to derive signer account from provided private key",
                    field="private_key",
                    details={"error": str(exc)},
                ) from exc
        elif config.private_key:
            logger.warning("Private key ignored outside of node mode")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> Web3:
        """Create the HTTP provider from the configured RPC URL if no handle was given."""

        if self._web3 is not None:
            return self._web3

        if not self.config.rpc_url:
            raise NetworkError("No web3 instance or RPC URL configured")

        provider = HTTPProvider(
            self.config.rpc_url, request_kwargs={"timeout": self.config.request_timeout}
        )
        web3 = Web3(provider)
        if not web3.is_connected():
            raise NetworkError("Unable to connect to RPC", endpoint=self.config.rpc_url)

        self._web3 = web3
        logger.info("Connected to RPC at %s", self.config.rpc_url)
        return web3

    def disconnect(self) -> None:
        self._web3 = None
        self._chain_id = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def web3(self) -> Web3:
        if self._web3 is None:
            return self.connect()
        return self._web3

    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            raise ValidationError(
                "No local signer; a private key is only held in node mode", field="private_key"
            )
        return self._account

    @property
    def has_signer(self) -> bool:
        return self._account is not None

    @property
    def endpoint(self) -> str | None:
        return self.config.rpc_url

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = int(self.web3.eth.chain_id)
        return self._chain_id

    # ------------------------------------------------------------------
    # Contract helpers
    # ------------------------------------------------------------------
    def contract(self, abi: Sequence[Mapping[str, Any]], address: str | None = None) -> Contract:
        if address is None:
            return self.web3.eth.contract(abi=abi)
        return self.web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def encode_call(
        self,
        abi: Sequence[Mapping[str, Any]],
        method: str,
        args: Sequence[Any],
        address: str | None = None,
    ) -> str:
        """ABI-encode a function call, including its selector."""

        try:
            return self.contract(abi, address).encode_abi(method, args=list(args))
        except Exception as exc:
            raise ValidationError(
                f"Failed to encode {method} call",
                field="args",
                value=list(args),
                details={"method": method, "error": str(exc)},
            ) from exc

    def call(
        self,
        abi: Sequence[Mapping[str, Any]],
        address: str,
        method: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """Invoke a read-only contract method and return the decoded result."""

        contract = self.contract(abi, address)
        try:
            function = getattr(contract.functions, method)(*args)
        except Exception as exc:
            raise ValidationError(
                f"Invalid arguments for {method}",
                field="args",
                value=list(args),
                details={"error": str(exc)},
            ) from exc

        try:
            return function.call()
        except Exception as exc:
            raise NetworkError(
                f"Read call {method} failed",
                endpoint=self.endpoint,
                details={"address": address, "args": list(args), "error": str(exc)},
            ) from exc
