"""Example: List the DSAs owned by an address and their authorities."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from dsa_connect import DSA, DSAConfig

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def main() -> None:
    """Print every DSA owned by ``OWNER_ADDRESS``."""

    owner = os.getenv("OWNER_ADDRESS")
    if not owner:
        raise ValueError("OWNER_ADDRESS not found in environment variables")

    dsa = DSA.from_config(DSAConfig.from_env())
    logging.info("Total DSAs on chain: %s", dsa.count())

    for account in dsa.get_accounts(owner):
        authorities = dsa.get_auth_by_id(account.id)
        print(f"dsaId={account.id} address={account.address} version={account.version}")
        print(f"  authorities: {', '.join(authorities)}")


if __name__ == "__main__":
    main()
