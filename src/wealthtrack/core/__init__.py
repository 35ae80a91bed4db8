"""Core utilities and shared functionality."""

from wealthtrack.core.timeutils import (
    UTC,
    utc_now,
    to_utc,
    parse_date,
    parse_timestamp,
)
from wealthtrack.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ConflictError,
    UpstreamError,
)

__all__ = [
    "UTC",
    "utc_now",
    "to_utc",
    "parse_date",
    "parse_timestamp",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UpstreamError",
]
