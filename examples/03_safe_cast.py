"""Example: Propose a DSA cast to a Gnosis Safe instead of sending it directly."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from dsa_connect import DSA, DSAConfig, TxRouting

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def main() -> None:
    """Queue a basic withdraw through the Safe transaction service."""

    safe_address = os.getenv("SAFE_ADDRESS")
    dsa_id = os.getenv("DSA_ID")
    if not safe_address or not dsa_id:
        raise ValueError("SAFE_ADDRESS and DSA_ID must be set in environment variables")

    dsa = DSA.from_config(DSAConfig.from_env())
    dsa.set_instance(int(dsa_id), routing=TxRouting.GNOSIS_SAFE, safe_address=safe_address)

    usdc = dsa.tokens.info("usdc")
    spells = dsa.spell().add(
        "basic",
        "withdraw",
        [usdc["address"], dsa.tokens.from_decimal("10", "usdc"), safe_address, 0, 0],
    )

    result = dsa.cast(spells)
    print(f"Proposed Safe transaction: {result.safe_tx_hash}")


if __name__ == "__main__":
    main()
