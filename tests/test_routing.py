"""Tests for cast routing strategies."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from dsa_connect import DSA
from dsa_connect.constants import ETH_ADDRESS
from dsa_connect.exceptions import NetworkError, RoutingError
from dsa_connect.routing import resolve_routing
from dsa_connect.types import Spell, TxRouting

from tests.conftest import DSA_ADDRESS, OTHER_ADDRESS, PRIVATE_KEY

SAFE_SERVICE = "https://safe-transaction.example.com"


class TestResolveRouting:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, TxRouting.DIRECT),
            (0, TxRouting.DIRECT),
            (1, TxRouting.GNOSIS_SAFE),
            ("direct", TxRouting.DIRECT),
            ("Gnosis-Safe", TxRouting.GNOSIS_SAFE),
            ("1", TxRouting.GNOSIS_SAFE),
            (TxRouting.GNOSIS_SAFE, TxRouting.GNOSIS_SAFE),
        ],
    )
    def test_accepts_known_values(self, value, expected):
        assert resolve_routing(value) is expected

    @pytest.mark.parametrize("value", [2, -1, "relay", "", 1.0, False])
    def test_rejects_unknown_values(self, value):
        with pytest.raises(RoutingError, match="Invalid routing type"):
            resolve_routing(value)


@pytest.fixture
def http_session() -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.post.return_value = MagicMock()
    return session


@pytest.fixture
def safe_dsa(fake_web3, http_session) -> DSA:
    dsa = DSA(
        fake_web3,  # type: ignore[arg-type]
        mode="node",
        private_key=PRIVATE_KEY,
        safe_tx_service_url=SAFE_SERVICE + "/",
        http_session=http_session,
    )
    fake_web3.eth.read_results["getAccountIdDetails"] = [42, DSA_ADDRESS, 2]
    fake_web3.eth.read_results["nonce"] = 5
    dsa.set_instance(42, routing=TxRouting.GNOSIS_SAFE, safe_address=OTHER_ADDRESS)
    return dsa


def _spell() -> Spell:
    return Spell().add("basic", "deposit", [ETH_ADDRESS, 1, 0, 0])


class TestSafeRouter:
    def test_proposes_cast_to_safe_service(self, safe_dsa, fake_web3, http_session, signer_address):
        result = safe_dsa.cast(_spell())

        fake_web3.eth.send_raw_transaction.assert_not_called()
        url = http_session.post.call_args.args[0]
        payload = http_session.post.call_args.kwargs["json"]
        assert url == f"{SAFE_SERVICE}/api/v1/safes/{OTHER_ADDRESS}/multisig-transactions/"
        assert payload["to"] == DSA_ADDRESS
        assert payload["nonce"] == 5
        assert payload["sender"] == signer_address
        assert payload["operation"] == 0
        assert payload["contractTransactionHash"] == result.safe_tx_hash
        assert len(result.safe_tx_hash) == 66
        assert result.routing is TxRouting.GNOSIS_SAFE
        assert result.tx_hash is None

    def test_gas_is_estimated_from_the_safe(self, safe_dsa, fake_web3, http_session):
        def estimate(tx):
            if tx["from"] != OTHER_ADDRESS:
                raise ValueError("execution reverted: not an authority")
            return 100_000

        fake_web3.eth.estimate_gas.side_effect = estimate

        result = safe_dsa.cast(_spell())

        assert fake_web3.eth.estimate_gas.call_args.args[0]["from"] == OTHER_ADDRESS
        assert result.safe_tx_hash == http_session.post.call_args.kwargs["json"]["contractTransactionHash"]
        assert safe_dsa.estimate_cast_gas(_spell()) == 110_000

    def test_service_failure_is_wrapped(self, safe_dsa, http_session):
        http_session.post.return_value.raise_for_status.side_effect = requests.HTTPError("422")

        with pytest.raises(NetworkError) as excinfo:
            safe_dsa.cast(_spell())

        assert excinfo.value.endpoint.endswith("/multisig-transactions/")

    def test_requires_node_mode(self, browser_dsa, fake_web3):
        fake_web3.eth.read_results["getAccountIdDetails"] = [42, DSA_ADDRESS, 2]
        browser_dsa.set_instance(42, safe_address=OTHER_ADDRESS)

        with pytest.raises(RoutingError, match="node mode"):
            browser_dsa.cast(_spell(), routing="gnosis_safe")

        fake_web3.eth.send_transaction.assert_not_called()

    def test_requires_service_url(self, node_dsa, fake_web3):
        fake_web3.eth.read_results["getAccountIdDetails"] = [42, DSA_ADDRESS, 2]
        node_dsa.set_instance(42, safe_address=OTHER_ADDRESS)

        with pytest.raises(RoutingError, match="service URL"):
            node_dsa.cast(_spell(), routing=1)

    def test_direct_override_bypasses_session_routing(self, safe_dsa, fake_web3, http_session):
        result = safe_dsa.cast(_spell(), routing="direct")

        http_session.post.assert_not_called()
        fake_web3.eth.send_raw_transaction.assert_called_once()
        assert result.routing is TxRouting.DIRECT
