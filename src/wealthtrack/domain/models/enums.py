"""Enumerations for domain models."""

from enum import Enum


class AssetClass(str, Enum):
    """Broad asset categories."""

    CRYPTO = "CRYPTO"
    FIAT = "FIAT"
    STOCK = "STOCK"
    REAL_ESTATE = "REAL_ESTATE"
    COMMODITY = "COMMODITY"
    OTHER = "OTHER"


class ValuationSource(str, Enum):
    """Where an asset's price comes from."""

    CMC = "CMC"
    MANUAL = "MANUAL"  # Never fetched; priced from recorded (manual) rates
    YAHOO = "YAHOO"
    CUSTOM_API = "CUSTOM_API"


class TargetType(str, Enum):
    """What an allocation target key refers to."""

    ASSET = "ASSET"
    ASSET_CLASS = "ASSET_CLASS"


class ValuationStatus(str, Enum):
    """How a holding's value was resolved."""

    RESOLVED = "RESOLVED"  # Live or historical price found
    STALE = "STALE"  # No price; last stored value used
    ABSENT = "ABSENT"  # No price and no stored value


class RebalanceAction(str, Enum):
    """Suggested action for one allocation row."""

    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


class LiabilityType(str, Enum):
    """Kinds of debt tracked against the portfolio."""

    LOAN = "LOAN"
    MORTGAGE = "MORTGAGE"
    CREDIT_LINE = "CREDIT_LINE"


class PropertyType(str, Enum):
    """Use of a real-estate property."""

    PRIMARY_RESIDENCE = "PRIMARY_RESIDENCE"
    RENTAL = "RENTAL"
    VACATION = "VACATION"
    COMMERCIAL = "COMMERCIAL"
    LAND = "LAND"
    OTHER = "OTHER"
