"""Stub price oracle for offline/testing use."""

from decimal import Decimal
from typing import Optional

from wealthtrack.core.exceptions import PriceNotFoundError


# Deterministic fake EUR prices for common symbols
_STUB_PRICES: dict[str, Decimal] = {
    "BTC": Decimal("45000.00"),
    "ETH": Decimal("2500.00"),
    "SOL": Decimal("95.00"),
    "ADA": Decimal("0.45"),
    "DOT": Decimal("6.80"),
    "USDC": Decimal("0.92"),
    "AAPL": Decimal("172.40"),
    "VWCE": Decimal("112.30"),
}


class StubPriceOracle:
    """
    Stub oracle with deterministic prices.

    Unknown symbols are reported as not found, like a real provider.
    """

    def __init__(self, prices: Optional[dict[str, Decimal]] = None):
        self._prices = dict(_STUB_PRICES if prices is None else prices)
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    @property
    def provider_name(self) -> str:
        return "stub"

    def get_price(self, symbol: str, currency: str = "EUR") -> Decimal:
        """Return the stub price for one symbol."""
        symbol = symbol.upper()
        self.calls.append(("get_price", (symbol,)))
        if symbol not in self._prices:
            raise PriceNotFoundError(symbol)
        return self._prices[symbol]

    def get_prices(self, symbols: list[str], currency: str = "EUR") -> dict[str, Decimal]:
        """Return stub prices for known symbols."""
        upper = tuple(s.upper() for s in symbols)
        self.calls.append(("get_prices", upper))
        return {s: self._prices[s] for s in upper if s in self._prices}
