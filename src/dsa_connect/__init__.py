"""DSA Connect - Python client for DSA smart accounts.

Build new accounts, cast batches of connector spells through them and read
account state from the DSA resolvers.
"""

from .client import DSA
from .config import DSAConfig
from .constants import ADDRESSES, GENESIS_ADDRESS, MAX_VALUE, Mode
from .exceptions import (
    AccountNotFoundError,
    DSAError,
    NetworkError,
    RoutingError,
    ValidationError,
)
from .registry import Registry
from .types import (
    AccountDetails,
    DSASession,
    EncodedSpells,
    Instance,
    Spell,
    SpellEntry,
    TxObject,
    TxResult,
    TxRouting,
    ValidationResult,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "DSA",
    "DSAConfig",
    "Registry",
    # Types
    "AccountDetails",
    "DSASession",
    "EncodedSpells",
    "Instance",
    "Spell",
    "SpellEntry",
    "TxObject",
    "TxResult",
    "TxRouting",
    "ValidationResult",
    # Constants
    "ADDRESSES",
    "GENESIS_ADDRESS",
    "MAX_VALUE",
    "Mode",
    # Exceptions
    "DSAError",
    "AccountNotFoundError",
    "NetworkError",
    "RoutingError",
    "ValidationError",
]
