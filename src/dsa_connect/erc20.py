"""ERC20 transfers and approvals from the session signer."""

from __future__ import annotations

import logging

from .connections import Web3Connections
from .constants import ETH_ADDRESS
from .exceptions import ValidationError
from .internal import Internal
from .registry import Registry
from .resolvers.tokens import TokenResolver
from .transactions import TransactionDispatcher
from .types import TxResult
from .utils import to_checksum

logger = logging.getLogger(__name__)


class Erc20:
    def __init__(
        self,
        connections: Web3Connections,
        registry: Registry,
        internal: Internal,
        dispatcher: TransactionDispatcher,
        tokens: TokenResolver,
    ) -> None:
        self._connections = connections
        self._registry = registry
        self._internal = internal
        self._dispatcher = dispatcher
        self._tokens = tokens

    def transfer(
        self,
        token: str,
        amount: int,
        to: str,
        from_address: str | None = None,
        gas: int | None = None,
        gas_price: int | None = None,
        nonce: int | None = None,
    ) -> TxResult:
        """Send ``amount`` raw units of ``token`` (symbol or address) to ``to``.

        The ETH pseudo-token is sent as transaction value.
        """
        amount = self._check_amount(amount)
        token_address = self._resolve_token(token)
        recipient = to_checksum(to, "to")
        from_address = from_address or self._internal.get_address()

        if token_address.lower() == ETH_ADDRESS.lower():
            tx = self._internal.get_tx_obj(
                from_address=from_address,
                to=recipient,
                call_data="0x",
                value=amount,
                gas=gas,
                gas_price=gas_price,
                nonce=nonce,
            )
        else:
            call_data = self._connections.encode_call(
                self._registry.basic_abi("erc20"), "transfer", [recipient, amount], token_address
            )
            tx = self._internal.get_tx_obj(
                from_address=from_address,
                to=token_address,
                call_data=call_data,
                gas=gas,
                gas_price=gas_price,
                nonce=nonce,
            )

        logger.info("Transferring %s units of %s to %s", amount, token, recipient)
        return self._dispatcher.send(tx)

    def approve(
        self,
        token: str,
        spender: str,
        amount: int,
        from_address: str | None = None,
        gas: int | None = None,
        gas_price: int | None = None,
        nonce: int | None = None,
    ) -> TxResult:
        amount = self._check_amount(amount)
        token_address = self._resolve_token(token)
        if token_address.lower() == ETH_ADDRESS.lower():
            raise ValidationError("ETH does not need an approval", field="token", value=token)

        call_data = self._connections.encode_call(
            self._registry.basic_abi("erc20"),
            "approve",
            [to_checksum(spender, "spender"), amount],
            token_address,
        )
        tx = self._internal.get_tx_obj(
            from_address=from_address or self._internal.get_address(),
            to=token_address,
            call_data=call_data,
            gas=gas,
            gas_price=gas_price,
            nonce=nonce,
        )
        logger.info("Approving %s for %s units of %s", spender, amount, token)
        return self._dispatcher.send(tx)

    def _resolve_token(self, token: str) -> str:
        if token.lower().startswith("0x"):
            return to_checksum(token, "token")
        return to_checksum(self._tokens.address(token), "token")

    @staticmethod
    def _check_amount(amount: int) -> int:
        if isinstance(amount, bool) or not isinstance(amount, int | str):
            raise ValidationError("Amount must be an integer number of units", field="amount", value=amount)
        try:
            value = int(amount)
        except ValueError as exc:
            raise ValidationError("Amount must be an integer number of units", field="amount", value=amount) from exc
        if value < 0:
            raise ValidationError("Amount cannot be negative", field="amount", value=amount)
        return value
