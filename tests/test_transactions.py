"""Tests for transaction submission."""

import pytest

from dsa_connect import DSA
from dsa_connect.exceptions import NetworkError
from dsa_connect.types import TxObject

from tests.conftest import DSA_ADDRESS, PRIVATE_KEY, TX_HASH, WALLET_ADDRESS


def _tx(**overrides) -> TxObject:
    fields = {"from_address": WALLET_ADDRESS, "to": DSA_ADDRESS, "data": "0x1234", "gas": 21_000}
    fields.update(overrides)
    return TxObject(**fields)


def test_browser_send_uses_wallet(browser_dsa, fake_web3):
    result = browser_dsa.send_txn(_tx())

    fake_web3.eth.send_transaction.assert_called_once_with(
        {"from": WALLET_ADDRESS, "to": DSA_ADDRESS, "data": "0x1234", "value": 0, "gas": 21_000}
    )
    assert result.tx_hash == TX_HASH.to_0x_hex()
    assert result.receipt["transactionHash"] == TX_HASH.to_0x_hex()


def test_node_send_signs_with_chain_id(node_dsa, fake_web3, signer_address):
    fake_web3.eth.chain_id = 137

    node_dsa.send_txn(_tx(from_address=signer_address, gas_price=1, nonce=0))

    fake_web3.eth.send_raw_transaction.assert_called_once()
    fake_web3.eth.send_transaction.assert_not_called()


def test_no_receipt_wait_when_disabled(fake_web3):
    dsa = DSA(fake_web3, wait_for_receipt=False)  # type: ignore[arg-type]

    result = dsa.send_txn(_tx())

    fake_web3.eth.wait_for_transaction_receipt.assert_not_called()
    assert result.receipt is None
    assert result.status is None


def test_reverted_receipt_reports_failure(browser_dsa, fake_web3):
    fake_web3.eth.wait_for_transaction_receipt.return_value = {"status": 0, "blockNumber": 9}

    result = browser_dsa.send_txn(_tx())

    assert result.status is False
    assert result.block_number == 9


def test_receipt_timeout_is_wrapped(browser_dsa, fake_web3):
    fake_web3.eth.wait_for_transaction_receipt.side_effect = TimeoutError("slow")

    with pytest.raises(NetworkError):
        browser_dsa.send_txn(_tx())


def test_get_tx_count(node_dsa, fake_web3, signer_address):
    assert node_dsa.txn_util.get_tx_count(signer_address) == 7


def test_node_key_not_used_in_browser_mode(fake_web3):
    dsa = DSA(fake_web3, private_key=PRIVATE_KEY)  # type: ignore[arg-type]
    assert dsa.internal.get_address() == WALLET_ADDRESS


def test_get_tx_receipt_serialises(browser_dsa, fake_web3):
    receipt = browser_dsa.txn_util.get_tx_receipt(TX_HASH.to_0x_hex())

    assert receipt == {"status": 1, "blockNumber": 123, "transactionHash": TX_HASH.to_0x_hex()}
    assert fake_web3.eth.wait_for_transaction_receipt.call_args.args[0] == TX_HASH
