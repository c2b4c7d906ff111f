"""ABI fragments for the DSA core contracts, resolvers and connectors."""

from collections.abc import Sequence
from typing import Any


def _params(items: Sequence[tuple[str, str]]) -> list[dict[str, str]]:
    return [{"internalType": kind, "name": name, "type": kind} for kind, name in items]


def _function(
    name: str,
    inputs: Sequence[tuple[str, str]] = (),
    outputs: Sequence[tuple[str, str]] = (),
    mutability: str = "nonpayable",
) -> dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": _params(inputs),
        "outputs": _params(outputs),
        "stateMutability": mutability,
    }


_SPELL_IDS = (("uint256", "getId"), ("uint256", "setId"))

InstaIndex_abi = [
    _function(
        "build",
        [("address", "_owner"), ("uint256", "accountVersion"), ("address", "_origin")],
        [("address", "_account")],
    ),
    _function("list", outputs=[("address", "")], mutability="view"),
    _function("versionCount", outputs=[("uint256", "")], mutability="view"),
]

InstaList_abi = [
    _function("accounts", outputs=[("uint64", "")], mutability="view"),
    _function("accountID", [("address", "")], [("uint64", "")], mutability="view"),
    _function("accountAddr", [("uint64", "")], [("address", "")], mutability="view"),
]

# Version 1 accounts cast to connector addresses.
InstaAccountV1_abi = [
    _function(
        "cast",
        [("address[]", "_targets"), ("bytes[]", "_datas"), ("address", "_origin")],
        mutability="payable",
    ),
    _function("isAuth", [("address", "user")], [("bool", "")], mutability="view"),
    _function("version", outputs=[("uint256", "")], mutability="view"),
]

# Version 2 accounts cast to connector names.
InstaAccountV2_abi = [
    _function(
        "cast",
        [("string[]", "_targetNames"), ("bytes[]", "_datas"), ("address", "_origin")],
        [("bytes32", "")],
        mutability="payable",
    ),
    _function("isAuth", [("address", "user")], [("bool", "")], mutability="view"),
    _function("version", outputs=[("uint256", "")], mutability="view"),
]

InstaCoreResolver_abi = [
    _function(
        "getAccountIdDetails",
        [("uint256", "id")],
        [("uint256", "ID"), ("address", "account"), ("uint256", "version")],
        mutability="view",
    ),
    _function(
        "getAuthorityDetails",
        [("address", "authority")],
        [("uint64[]", "IDs"), ("address[]", "accounts"), ("uint256[]", "versions")],
        mutability="view",
    ),
    _function("getIDAuthorities", [("uint256", "id")], [("address[]", "")], mutability="view"),
    _function(
        "getAccountAuthorities", [("address", "account")], [("address[]", "")], mutability="view"
    ),
    _function("getAuthorityIDs", [("address", "authority")], [("uint64[]", "")], mutability="view"),
    _function(
        "getAuthorityAccounts", [("address", "authority")], [("address[]", "")], mutability="view"
    ),
    _function("getAccountVersions", [("address[]", "accounts")], [("uint256[]", "")], mutability="view"),
]

ConnectBasic_abi = [
    _function(
        "deposit",
        [("address", "erc20"), ("uint256", "tokenAmt"), *_SPELL_IDS],
        mutability="payable",
    ),
    _function(
        "withdraw",
        [("address", "erc20"), ("uint256", "tokenAmt"), ("address", "to"), *_SPELL_IDS],
        mutability="payable",
    ),
]

ConnectAuth_abi = [
    _function("add", [("address", "authority")], mutability="payable"),
    _function("remove", [("address", "authority")], mutability="payable"),
]

ConnectCompound_abi = [
    _function("deposit", [("address", "token"), ("uint256", "amt"), *_SPELL_IDS], mutability="payable"),
    _function("withdraw", [("address", "token"), ("uint256", "amt"), *_SPELL_IDS], mutability="payable"),
    _function("borrow", [("address", "token"), ("uint256", "amt"), *_SPELL_IDS], mutability="payable"),
    _function("payback", [("address", "token"), ("uint256", "amt"), *_SPELL_IDS], mutability="payable"),
]

ConnectMaker_abi = [
    _function("open", [("string", "colType")], mutability="payable"),
    _function("close", [("uint256", "vault")], mutability="payable"),
    _function("deposit", [("uint256", "vault"), ("uint256", "amt"), *_SPELL_IDS], mutability="payable"),
    _function("withdraw", [("uint256", "vault"), ("uint256", "amt"), *_SPELL_IDS], mutability="payable"),
    _function("borrow", [("uint256", "vault"), ("uint256", "amt"), *_SPELL_IDS], mutability="payable"),
    _function("payback", [("uint256", "vault"), ("uint256", "amt"), *_SPELL_IDS], mutability="payable"),
]

ERC20_abi = [
    _function("transfer", [("address", "to"), ("uint256", "amount")], [("bool", "")]),
    _function("approve", [("address", "spender"), ("uint256", "amount")], [("bool", "")]),
    _function("balanceOf", [("address", "owner")], [("uint256", "")], mutability="view"),
    _function(
        "allowance", [("address", "owner"), ("address", "spender")], [("uint256", "")], mutability="view"
    ),
    _function("decimals", outputs=[("uint8", "")], mutability="view"),
]

GnosisSafe_abi = [
    _function("nonce", outputs=[("uint256", "")], mutability="view"),
    _function("getOwners", outputs=[("address[]", "")], mutability="view"),
    _function("getThreshold", outputs=[("uint256", "")], mutability="view"),
]

ABIS: dict = {
    "core": {
        "index": InstaIndex_abi,
        "list": InstaList_abi,
        "account": {1: InstaAccountV1_abi, 2: InstaAccountV2_abi},
    },
    "read": {
        "core": InstaCoreResolver_abi,
    },
    "connectors": {
        "basic": ConnectBasic_abi,
        "auth": ConnectAuth_abi,
        "compound": ConnectCompound_abi,
        "maker": ConnectMaker_abi,
    },
    "basic": {
        "erc20": ERC20_abi,
        "gnosisSafe": GnosisSafe_abi,
    },
}
