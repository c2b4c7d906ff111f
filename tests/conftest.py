from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest
from eth_account import Account
from hexbytes import HexBytes
from web3 import Web3

from dsa_connect import DSA

WALLET_ADDRESS = "0x1111111111111111111111111111111111111111"
DSA_ADDRESS = "0x2222222222222222222222222222222222222222"
OTHER_ADDRESS = "0x3333333333333333333333333333333333333333"
PRIVATE_KEY = "0x" + "01" * 32
TX_HASH = HexBytes("0x" + "ab" * 32)


class FakeCall:
    def __init__(self, eth: FakeEth, method: str, args: tuple[Any, ...]) -> None:
        self._eth = eth
        self._method = method
        self._args = args

    def call(self) -> Any:
        self._eth.read_calls.append((self._method, self._args))
        result = self._eth.read_results.get(self._method)
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(*self._args)
        return result


class FakeFunctions:
    def __init__(self, eth: FakeEth) -> None:
        self._eth = eth

    def __getattr__(self, method: str) -> Callable[..., FakeCall]:
        return lambda *args: FakeCall(self._eth, method, args)


class FakeContract:
    """Encodes with a real offline web3 contract, answers reads from ``FakeEth``."""

    def __init__(self, eth: FakeEth, address: str | None, abi: Any) -> None:
        codec = Web3()
        if address is None:
            self._real = codec.eth.contract(abi=abi)
        else:
            self._real = codec.eth.contract(address=address, abi=abi)
        self.address = address
        self.functions = FakeFunctions(eth)

    def encode_abi(self, abi_element_identifier: str, args: Any = None) -> str:
        return self._real.encode_abi(abi_element_identifier, args=args)


class FakeEth:
    def __init__(self) -> None:
        self.default_account: str | None = None
        self.accounts = [WALLET_ADDRESS]
        self.gas_price = 20_000_000_000
        self.chain_id = 1
        self.read_results: dict[str, Any] = {}
        self.read_calls: list[tuple[str, tuple[Any, ...]]] = []
        self.estimate_gas = MagicMock(return_value=100_000)
        self.get_transaction_count = MagicMock(return_value=7)
        self.send_transaction = MagicMock(return_value=TX_HASH)
        self.send_raw_transaction = MagicMock(return_value=TX_HASH)
        self.wait_for_transaction_receipt = MagicMock(
            return_value={"status": 1, "blockNumber": 123, "transactionHash": TX_HASH}
        )

    def contract(self, address: str | None = None, abi: Any = None) -> FakeContract:
        return FakeContract(self, address, abi)


class FakeWeb3:
    def __init__(self) -> None:
        self.eth = FakeEth()


@pytest.fixture
def fake_web3() -> FakeWeb3:
    return FakeWeb3()


@pytest.fixture
def browser_dsa(fake_web3: FakeWeb3) -> DSA:
    return DSA(fake_web3)  # type: ignore[arg-type]


@pytest.fixture
def node_dsa(fake_web3: FakeWeb3) -> DSA:
    return DSA(fake_web3, mode="node", private_key=PRIVATE_KEY)  # type: ignore[arg-type]


@pytest.fixture
def signer_address() -> str:
    return Account.from_key(PRIVATE_KEY).address


@pytest.fixture
def selected_dsa(browser_dsa: DSA, fake_web3: FakeWeb3) -> DSA:
    fake_web3.eth.read_results["getAccountIdDetails"] = [42, DSA_ADDRESS, 2]
    browser_dsa.set_instance(42)
    return browser_dsa
