"""Read-only resolvers over DSA on-chain state."""

from .account import AccountResolver
from .tokens import TokenResolver

__all__ = ["AccountResolver", "TokenResolver"]
