"""Exception hierarchy for the DSA client."""

from typing import Any


class DSAError(Exception):
    """Base exception for all DSA client errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NetworkError(DSAError):
    """Raised when an RPC call or transaction submission fails."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class ValidationError(DSAError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class AccountNotFoundError(ValidationError):
    """Raised when a DSA id has not been created on-chain yet."""

    def __init__(self, account_id: int, count: int | None = None):
        super().__init__(
            f"dsaId {account_id} does not exist. Run `dsa.build()` to create a new DSA.",
            field="id",
            value=account_id,
            details={"count": count},
        )
        self.account_id = account_id
        self.count = count


class RoutingError(ValidationError):
    """Raised when a transaction routing type is invalid or cannot be used."""

    def __init__(self, message: str, routing: Any | None = None, details: dict | None = None):
        super().__init__(message, field="routing", value=routing, details=details)
