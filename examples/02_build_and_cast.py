"""Example: Build a new DSA, then deposit ETH into Compound through it."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from dsa_connect import DSA, DSAConfig
from dsa_connect.constants import ETH_ADDRESS

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

DEPOSIT_AMOUNT = "0.01"


def main() -> None:
    """Build a DSA owned by the node signer and cast a Compound deposit."""

    if not os.getenv("DSA_PRIVATE_KEY"):
        raise ValueError("DSA_PRIVATE_KEY not found in environment variables")

    dsa = DSA.from_config(DSAConfig.from_env())

    build_result = dsa.build()
    logging.info("Build tx %s included in block %s", build_result.tx_hash, build_result.block_number)

    accounts = dsa.get_accounts(dsa.internal.get_address())
    if not accounts:
        raise RuntimeError("No DSA found for the signer after build")
    latest = max(accounts, key=lambda account: account.id)
    dsa.set_instance(latest.id)
    logging.info("Using dsaId %s at %s", latest.id, latest.address)

    amount = dsa.tokens.from_decimal(DEPOSIT_AMOUNT, "eth")
    spells = dsa.spell()
    spells.add("compound", "deposit", [ETH_ADDRESS, amount, 0, 0])

    result = dsa.cast(spells, value=amount)
    if result.status:
        print(f"Cast succeeded: {result.tx_hash}")
    else:
        print(f"Cast reverted: {result.tx_hash}")


if __name__ == "__main__":
    main()
