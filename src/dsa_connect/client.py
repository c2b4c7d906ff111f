"""DSA client: build accounts, cast spells and read account state."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import requests
from web3 import Web3

from .cast import CastUtil
from .config import DEFAULT_RECEIPT_TIMEOUT, DEFAULT_REQUEST_TIMEOUT, DSAConfig
from .connections import Web3Connections
from .constants import (
    DEFAULT_BUILD_VERSION,
    DEFAULT_GAS_BUFFER,
    GENESIS_ADDRESS,
    MAX_VALUE,
    Mode,
)
from .erc20 import Erc20
from .exceptions import AccountNotFoundError, NetworkError, ValidationError
from .internal import Internal
from .registry import Registry
from .resolvers import AccountResolver, TokenResolver
from .routing import DirectRouter, SafeRouter, TransactionRouter, resolve_routing
from .transactions import TransactionDispatcher
from .types import DSASession, Instance, Spell, SpellEntry, TxObject, TxResult, TxRouting
from .utils import to_checksum

logger = logging.getLogger(__name__)


class DSA:
    """Entry point for DSA operations.

    ``mode="node"`` signs transactions locally with ``private_key``;
    ``mode="browser"`` leaves signing to the accounts managed by the connected
    node or wallet. Either pass a ready ``web3`` handle or an ``rpc_url``.

    Mutable state (selected DSA, origin, routing) lives in ``DSASession``
    objects. The client owns a default session in ``self.session``; every
    operation also accepts ``session=`` so independent callers can share one
    client.
    """

    def __init__(
        self,
        web3: Web3 | None = None,
        *,
        mode: Mode | str = Mode.BROWSER,
        private_key: str | None = None,
        rpc_url: str | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        wait_for_receipt: bool = True,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        gas_buffer: float = DEFAULT_GAS_BUFFER,
        safe_tx_service_url: str | None = None,
        origin: str = GENESIS_ADDRESS,
        registry: Registry | None = None,
        http_session: requests.Session | None = None,
    ) -> None:
        config = DSAConfig(
            mode=mode,  # type: ignore[arg-type]
            private_key=private_key,
            rpc_url=rpc_url,
            request_timeout=request_timeout,
            wait_for_receipt=wait_for_receipt,
            receipt_timeout=receipt_timeout,
            gas_buffer=gas_buffer,
            safe_tx_service_url=safe_tx_service_url,
            default_origin=origin,
        ).validated()

        self.config = config
        self.registry = registry or Registry()
        self.session = self.new_session()

        self._connections = Web3Connections(config, web3)
        self.internal = Internal(config, self._connections, self.registry)
        self.cast_util = CastUtil(
            self._connections, self.registry, self.internal, lambda: self.session
        )
        self.txn_util = TransactionDispatcher(config, self._connections)
        self.account = AccountResolver(self._connections, self.registry)
        self.tokens = TokenResolver()
        self.erc20 = Erc20(
            self._connections, self.registry, self.internal, self.txn_util, self.tokens
        )

        self._http = http_session or requests.Session()
        self._routers: dict[TxRouting, TransactionRouter] = {
            TxRouting.DIRECT: DirectRouter(self.txn_util),
            TxRouting.GNOSIS_SAFE: SafeRouter(config, self._connections, self.registry, self._http),
        }

        # Shortcuts kept flat for callers used to the JS client.
        self.send_txn = self.txn_util.send
        self.transfer = self.erc20.transfer
        self.cast_encoded = self.cast_util.encoded
        self.encode_cast_abi = self.cast_util.encode_abi
        self.estimate_cast_gas = self.cast_util.estimate_gas
        self.count = self.account.count
        self.get_accounts = self.account.get_accounts
        self.get_auth_by_id = self.account.get_auth_by_id
        self.get_auth_by_address = self.account.get_auth_by_address

        self.max_value = MAX_VALUE

    @classmethod
    def from_config(cls, config: DSAConfig, web3: Web3 | None = None, **kwargs: Any) -> DSA:
        return cls(
            web3,
            mode=config.mode,
            private_key=config.private_key,
            rpc_url=config.rpc_url,
            request_timeout=config.request_timeout,
            wait_for_receipt=config.wait_for_receipt,
            receipt_timeout=config.receipt_timeout,
            gas_buffer=config.gas_buffer,
            safe_tx_service_url=config.safe_tx_service_url,
            origin=config.default_origin,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------
    def new_session(self) -> DSASession:
        return DSASession(instance=Instance(), origin=self.config.default_origin)

    @property
    def web3(self) -> Web3:
        return self._connections.web3

    @property
    def instance(self) -> Instance:
        return self.session.instance

    @property
    def origin(self) -> str:
        return self.session.origin

    @property
    def address(self) -> dict[str, Any]:
        return self.registry.addresses

    @property
    def abi(self) -> dict[str, Any]:
        return self.registry.abis

    def set_origin(self, origin: str, session: DSASession | None = None) -> None:
        """Set the origin address attached to later builds and casts for affiliation."""
        session = session or self.session
        session.origin = to_checksum(origin, "origin")

    def set_instance(
        self,
        account: int | str | Mapping[str, Any] | Instance,
        routing: TxRouting | int | str | None = None,
        safe_address: str | None = None,
        session: DSASession | None = None,
    ) -> Instance:
        """Select the DSA subsequent casts go to, looked up by id on-chain."""

        session = session or self.session
        account_id = self._parse_account_id(account)
        new_routing = resolve_routing(routing) if routing is not None else None

        try:
            details = self.read("core", "getAccountIdDetails", [account_id])
        except NetworkError as exc:
            count = self.account.count()
            if account_id > count:
                raise AccountNotFoundError(account_id, count) from exc
            raise NetworkError(
                f"Failed to look up dsaId {account_id}",
                endpoint=self._connections.endpoint,
                details={"count": count, "error": exc.message},
            ) from exc

        found_id, found_address, found_version = details
        if int(str(found_address), 16) == 0:
            raise AccountNotFoundError(account_id)

        session.instance.id = int(found_id)
        session.instance.address = to_checksum(found_address)
        session.instance.version = int(found_version)
        if new_routing is not None:
            session.routing = new_routing
        if safe_address is not None:
            session.safe_address = to_checksum(safe_address, "safe_address")

        logger.info(
            "Selected dsaId %s at %s (version %s)",
            session.instance.id,
            session.instance.address,
            session.instance.version,
        )
        return session.instance

    def set_account(
        self,
        account: int | str | Mapping[str, Any] | Instance,
        routing: TxRouting | int | str | None = None,
        safe_address: str | None = None,
        session: DSASession | None = None,
    ) -> Instance:
        return self.set_instance(account, routing=routing, safe_address=safe_address, session=session)

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------
    def build(
        self,
        authority: str | None = None,
        version: int | None = None,
        origin: str | None = None,
        from_address: str | None = None,
        gas: int | None = None,
        gas_price: int | None = None,
        nonce: int | None = None,
        session: DSASession | None = None,
    ) -> TxResult:
        """Create a new DSA owned by ``authority`` (the signer by default)."""

        tx = self.build_tx_obj(
            authority=authority,
            version=version,
            origin=origin,
            from_address=from_address,
            gas=gas,
            gas_price=gas_price,
            nonce=nonce,
            session=session,
        )
        logger.info("Building DSA for %s", tx.from_address)
        return self.txn_util.send(tx)

    def build_tx_obj(
        self,
        authority: str | None = None,
        version: int | None = None,
        origin: str | None = None,
        from_address: str | None = None,
        gas: int | None = None,
        gas_price: int | None = None,
        nonce: int | None = None,
        session: DSASession | None = None,
    ) -> TxObject:
        """Return the unsigned transaction ``build`` would send."""

        session = session or self.session
        signer = self.internal.get_address()
        authority = authority or signer
        version = version or DEFAULT_BUILD_VERSION
        origin = origin or session.origin
        from_address = from_address or signer

        index_address = self.registry.core_address("index")
        call_data = self._connections.encode_call(
            self.registry.core_abi("index"),
            "build",
            [to_checksum(authority, "authority"), int(version), to_checksum(origin, "origin")],
            address=index_address,
        )
        return self.internal.get_tx_obj(
            from_address=from_address,
            to=index_address,
            call_data=call_data,
            gas=gas,
            gas_price=gas_price,
            nonce=nonce,
        )

    # ------------------------------------------------------------------
    # Cast
    # ------------------------------------------------------------------
    def cast(
        self,
        spells: Spell | Iterable[SpellEntry],
        origin: str | None = None,
        to: str | None = None,
        from_address: str | None = None,
        value: int = 0,
        gas: int | None = None,
        gas_price: int | None = None,
        nonce: int | None = None,
        routing: TxRouting | int | str | None = None,
        session: DSASession | None = None,
    ) -> TxResult:
        """Execute ``spells`` atomically on the selected DSA."""

        session = session or self.session
        resolved = resolve_routing(session.routing if routing is None else routing)
        router = self._routers[resolved]
        if isinstance(router, SafeRouter):
            router.check(session)

        tx = self.cast_tx_obj(
            spells,
            origin=origin,
            to=to,
            from_address=from_address or self.cast_util.sender(session, resolved),
            value=value,
            gas=gas,
            gas_price=gas_price,
            nonce=nonce,
            session=session,
        )
        return router.submit(tx, session)

    def cast_tx_obj(
        self,
        spells: Spell | Iterable[SpellEntry],
        origin: str | None = None,
        to: str | None = None,
        from_address: str | None = None,
        value: int = 0,
        gas: int | None = None,
        gas_price: int | None = None,
        nonce: int | None = None,
        session: DSASession | None = None,
    ) -> TxObject:
        """Return the unsigned transaction ``cast`` would send."""

        session = session or self.session
        to = to_checksum(to or session.instance.address, "to")
        if int(to, 16) == 0:
            raise ValidationError(
                "No DSA selected. Run `dsa.set_instance(dsa_id)` first.", field="to", value=to
            )

        call_data = self.cast_util.encode_abi(spells, to=to, origin=origin, session=session)
        return self.internal.get_tx_obj(
            from_address=from_address or self.cast_util.sender(session),
            to=to,
            call_data=call_data,
            value=value,
            gas=gas,
            gas_price=gas_price,
            nonce=nonce,
        )

    @staticmethod
    def spell() -> Spell:
        return Spell()

    Spell = spell

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------
    def read(self, protocol: str, method: str, args: Sequence[Any] = ()) -> Any:
        """Call a read-only method on a registered resolver and return the raw result."""

        address, abi = self.registry.read_target(protocol)
        if self.registry.find_function(abi, method) is None:
            raise ValidationError(
                f"'{method}' is not a method of read protocol '{protocol}'",
                field="method",
                value=method,
            )
        return self._connections.call(abi, address, method, list(args))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _parse_account_id(account: int | str | Mapping[str, Any] | Instance) -> int:
        if isinstance(account, Mapping):
            raw = account.get("id")
        elif isinstance(account, int | str):
            raw = account
        else:
            raw = getattr(account, "id", None)

        if raw is None or raw == "":
            raise ValidationError("`dsaId` is not defined.", field="id", value=account)
        if isinstance(raw, bool):
            raise ValidationError("Invalid `dsaId`.", field="id", value=raw)

        try:
            account_id = int(raw)
        except (TypeError, ValueError) as exc:
            raise ValidationError("Invalid `dsaId`.", field="id", value=raw) from exc

        if account_id <= 0:
            raise ValidationError("Invalid `dsaId`.", field="id", value=raw)
        return account_id
