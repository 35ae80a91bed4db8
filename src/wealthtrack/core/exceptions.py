"""Application-level exceptions.

Errors are typed by kind. Adapters map the kind, not the concrete class:

- ``ValidationError``: raised before any persistence, never retried.
- ``NotFoundError``: the requested resource does not exist.
- ``ConflictError``: the resource already exists.
- ``UpstreamError``: a price oracle request failed, timed out or was rate limited.
"""

from decimal import Decimal
from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


# Validation


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class InvalidDateError(ValidationError):
    """Raised when a date is not in YYYY-MM-DD format."""

    def __init__(self, date: str):
        self.date = date
        super().__init__(f"Invalid date format: {date}. Use YYYY-MM-DD", code="INVALID_DATE")


class InvalidAmountError(ValidationError):
    """Raised when an amount or price is not a positive number."""

    def __init__(self, amount):
        self.amount = amount
        super().__init__(
            f"Invalid amount: {amount}. Must be a positive number",
            code="INVALID_AMOUNT",
        )


class AllocationTargetsSumError(ValidationError):
    """Raised when allocation target percentages do not sum to 100."""

    def __init__(self, total: Decimal):
        self.sum = total
        super().__init__(
            f"Allocation targets sum to {total:.2f}%, must equal 100%",
            code="ALLOCATION_TARGETS_SUM_INVALID",
        )


class DuplicateAllocationTargetError(ValidationError):
    """Raised when two allocation targets share a key."""

    def __init__(self, target_key: str):
        self.target_key = target_key
        super().__init__(
            f"Duplicate allocation target: {target_key}",
            code="DUPLICATE_ALLOCATION_TARGET",
        )


# Not found


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str, code: str = "NOT_FOUND"):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code=code)


class SnapshotNotFoundError(NotFoundError):
    """Raised when no snapshot exists for a date."""

    def __init__(self, date: str):
        self.date = date
        super().__init__("Snapshot", date, code="SNAPSHOT_NOT_FOUND")


class AssetNotFoundError(NotFoundError):
    """Raised when an asset symbol is unknown."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__("Asset", symbol, code="ASSET_NOT_FOUND")


class HoldingNotFoundError(NotFoundError):
    """Raised when a snapshot has no holding for an asset."""

    def __init__(self, symbol: str, snapshot_date: str):
        self.symbol = symbol
        self.snapshot_date = snapshot_date
        super().__init__("Holding", f"{symbol} in snapshot {snapshot_date}", code="HOLDING_NOT_FOUND")


class LiabilityNotFoundError(NotFoundError):
    """Raised when a liability id is unknown."""

    def __init__(self, liability_id):
        self.liability_id = liability_id
        super().__init__("Liability", str(liability_id), code="LIABILITY_NOT_FOUND")


class PropertyNotFoundError(NotFoundError):
    """Raised when a symbol is not a real-estate property."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__("Property", symbol, code="PROPERTY_NOT_FOUND")


class NoAllocationTargetsError(NotFoundError):
    """Raised when an operation needs allocation targets and none are set."""

    def __init__(self):
        super().__init__("Allocation targets", "none set", code="NO_ALLOCATION_TARGETS")


class NoPortfolioDataError(NotFoundError):
    """Raised when no snapshot holds any data for the requested date."""

    def __init__(self, date: Optional[str] = None):
        self.date = date
        super().__init__("Portfolio data", date or "latest", code="NO_PORTFOLIO_DATA")


# Conflict


class ConflictError(AppError):
    """Raised when a resource already exists."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message, code=code)


class SnapshotAlreadyExistsError(ConflictError):
    """Raised when creating a snapshot for a date that already has one."""

    def __init__(self, date: str, holdings_count: int):
        self.date = date
        self.holdings_count = holdings_count
        super().__init__(
            f"Snapshot already exists for {date} with {holdings_count} holding(s)",
            code="SNAPSHOT_ALREADY_EXISTS",
        )


# Upstream price oracle failures


class UpstreamError(AppError):
    """Raised when a price could not be fetched from the oracle."""

    def __init__(self, symbol: str, reason: str, code: str = "PRICE_FETCH_FAILED"):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Could not fetch price for {symbol}: {reason}", code=code)


class PriceNotFoundError(UpstreamError):
    """Oracle has no quote for the symbol."""

    def __init__(self, symbol: str, reason: str = "no quote data"):
        super().__init__(symbol, reason, code="PRICE_NOT_FOUND")


class RateLimitedError(UpstreamError):
    """Oracle rejected the request because of rate limiting."""

    def __init__(self, symbol: str, reason: str = "rate limited"):
        super().__init__(symbol, reason, code="RATE_LIMITED")


class OracleNetworkError(UpstreamError):
    """Transport failure or timeout talking to the oracle."""

    def __init__(self, symbol: str, reason: str):
        super().__init__(symbol, reason, code="ORACLE_NETWORK_ERROR")
