"""Encoding and gas estimation for ``cast`` calls."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from .connections import Web3Connections
from .internal import Internal
from .registry import Registry
from .types import DSASession, EncodedSpells, Spell, SpellEntry, TxRouting
from .utils import to_checksum

logger = logging.getLogger(__name__)


class CastUtil:
    def __init__(
        self,
        connections: Web3Connections,
        registry: Registry,
        internal: Internal,
        default_session: Callable[[], DSASession],
    ) -> None:
        self._connections = connections
        self._registry = registry
        self._internal = internal
        self._default_session = default_session

    def sender(self, session: DSASession | None = None, routing: TxRouting | None = None) -> str:
        """Address a cast is sent from: the Safe when routed through one, else the signer."""

        session = session or self._default_session()
        routing = session.routing if routing is None else routing
        if routing is TxRouting.GNOSIS_SAFE and session.safe_address:
            return to_checksum(session.safe_address, "safe_address")
        return self._internal.get_address()

    def encoded(self, spells: Spell | Iterable[SpellEntry], version: int | None = None) -> EncodedSpells:
        """Return the ``(targets, datas)`` arrays for the spells."""

        if version is None:
            version = self._default_session().instance.version
        return self._internal.encode_spells(spells, version=version)

    def encode_abi(
        self,
        spells: Spell | Iterable[SpellEntry],
        to: str | None = None,
        origin: str | None = None,
        session: DSASession | None = None,
    ) -> str:
        """Return the calldata of ``cast(targets, datas, origin)`` on the DSA."""

        session = session or self._default_session()
        version = session.instance.version
        encoded = self._internal.encode_spells(spells, version=version)
        return self._connections.encode_call(
            self._registry.account_abi(version),
            "cast",
            [*encoded.as_args(), to_checksum(origin or session.origin, "origin")],
            address=to or session.instance.address,
        )

    def estimate_gas(
        self,
        spells: Spell | Iterable[SpellEntry],
        from_address: str | None = None,
        to: str | None = None,
        value: int = 0,
        origin: str | None = None,
        session: DSASession | None = None,
    ) -> int:
        """Estimate the gas a cast would use, including the configured buffer."""

        session = session or self._default_session()
        to = to or session.instance.address
        call_data = self.encode_abi(spells, to=to, origin=origin, session=session)
        tx = {
            "from": from_address or self.sender(session),
            "to": to,
            "data": call_data,
            "value": int(value or 0),
        }
        gas = self._internal.estimate_gas(tx)
        logger.debug("Estimated cast gas %s for DSA %s", gas, to)
        return gas
