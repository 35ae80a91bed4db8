"""Rate domain models: historical price facts and the current-price cache."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class HistoricalRate:
    """Immutable fact: asset priced at ``price`` in ``base_currency`` at ``timestamp``."""

    asset_symbol: str
    base_currency: str
    price: Decimal
    timestamp: datetime
    source: str = "coinmarketcap"
    volume_24h: Optional[Decimal] = None
    market_cap: Optional[Decimal] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class CachedRate:
    """Current price for (asset, currency); only valid within the cache TTL."""

    asset_symbol: str
    base_currency: str
    price: Decimal
    last_updated: datetime


@dataclass
class SaveRateInput:
    """Input for recording a historical rate."""

    asset_symbol: str
    price: Decimal
    timestamp: datetime
    base_currency: str = "EUR"
    source: str = "coinmarketcap"
    volume_24h: Optional[Decimal] = None
    market_cap: Optional[Decimal] = None
