"""Tests for ERC20 transfers and approvals."""

import pytest
from web3 import Web3

from dsa_connect.abi import ERC20_abi
from dsa_connect.constants import TOKENS
from dsa_connect.exceptions import ValidationError

from tests.conftest import OTHER_ADDRESS, WALLET_ADDRESS


def _decode(data):
    function, params = Web3().eth.contract(abi=ERC20_abi).decode_function_input(data)
    return function.fn_name, params


def test_transfer_eth_sends_value(browser_dsa, fake_web3):
    browser_dsa.transfer("eth", 10**17, OTHER_ADDRESS)

    sent = fake_web3.eth.send_transaction.call_args.args[0]
    assert sent["to"] == OTHER_ADDRESS
    assert sent["value"] == 10**17
    assert sent["data"] == "0x"


def test_transfer_token_encodes_call(browser_dsa, fake_web3):
    browser_dsa.transfer("usdc", 5_000_000, OTHER_ADDRESS)

    sent = fake_web3.eth.send_transaction.call_args.args[0]
    assert sent["to"] == Web3.to_checksum_address(TOKENS["usdc"]["address"])
    assert sent["from"] == WALLET_ADDRESS
    assert sent["value"] == 0
    assert _decode(sent["data"]) == ("transfer", {"to": OTHER_ADDRESS, "amount": 5_000_000})


def test_approve(browser_dsa, fake_web3):
    browser_dsa.erc20.approve(TOKENS["dai"]["address"], OTHER_ADDRESS, browser_dsa.max_value)

    sent = fake_web3.eth.send_transaction.call_args.args[0]
    assert _decode(sent["data"]) == (
        "approve",
        {"spender": OTHER_ADDRESS, "amount": browser_dsa.max_value},
    )


@pytest.mark.parametrize("amount", [-1, 1.5, "abc", True])
def test_invalid_amounts(browser_dsa, fake_web3, amount):
    with pytest.raises(ValidationError):
        browser_dsa.transfer("usdc", amount, OTHER_ADDRESS)
    fake_web3.eth.send_transaction.assert_not_called()


def test_approve_eth_rejected(browser_dsa):
    with pytest.raises(ValidationError):
        browser_dsa.erc20.approve("eth", OTHER_ADDRESS, 1)
