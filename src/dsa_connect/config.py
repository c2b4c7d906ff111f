"""Configuration container for the DSA client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from .constants import DEFAULT_GAS_BUFFER, GENESIS_ADDRESS, Mode
from .exceptions import ValidationError
from .utils import to_checksum

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_RECEIPT_TIMEOUT = 120.0
DEFAULT_RPC_URL = "http://127.0.0.1:8545"


@dataclass(frozen=True)
class DSAConfig:
    """Settings fixed for the lifetime of a ``DSA`` client."""

    mode: Mode = Mode.BROWSER
    private_key: str | None = None
    rpc_url: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    wait_for_receipt: bool = True
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    gas_buffer: float = DEFAULT_GAS_BUFFER
    safe_tx_service_url: str | None = None
    default_origin: str = GENESIS_ADDRESS

    def validated(self) -> DSAConfig:
        """Return a copy with a normalised mode and private key, failing on bad combinations."""

        try:
            mode = Mode(str(self.mode.value if isinstance(self.mode, Mode) else self.mode).lower())
        except ValueError as exc:
            raise ValidationError(
                "Mode must be either 'node' or 'browser'", field="mode", value=self.mode
            ) from exc

        private_key = self.private_key
        if mode is Mode.NODE:
            if not private_key:
                raise ValidationError("Private key is not defined.", field="private_key")
            if not private_key.startswith("0x"):
                private_key = "0x" + private_key

        if self.gas_buffer < 1:
            raise ValidationError(
                "Gas buffer must be at least 1", field="gas_buffer", value=self.gas_buffer
            )

        safe_url = self.safe_tx_service_url.rstrip("/") if self.safe_tx_service_url else None
        return replace(
            self,
            mode=mode,
            private_key=private_key,
            safe_tx_service_url=safe_url,
            default_origin=to_checksum(self.default_origin, "default_origin"),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DSAConfig:
        """Build a configuration from ``DSA_*`` environment variables."""

        env = os.environ if environ is None else environ
        timeout = env.get("DSA_REQUEST_TIMEOUT")
        return cls(
            mode=env.get("DSA_MODE", Mode.BROWSER.value),  # type: ignore[arg-type]
            private_key=env.get("DSA_PRIVATE_KEY") or None,
            rpc_url=env.get("DSA_RPC_URL", DEFAULT_RPC_URL),
            request_timeout=float(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT,
            wait_for_receipt=env.get("DSA_WAIT_FOR_RECEIPT", "true").lower() not in ("0", "false", "no"),
            safe_tx_service_url=env.get("DSA_SAFE_TX_SERVICE_URL") or None,
            default_origin=env.get("DSA_ORIGIN", GENESIS_ADDRESS),
        )
