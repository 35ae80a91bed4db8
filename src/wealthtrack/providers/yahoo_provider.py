"""Yahoo Finance price oracle for stocks and ETFs (YAHOO valuation source)."""

import logging
from concurrent.futures import TimeoutError as FuturesTimeoutError
from decimal import Decimal
from typing import Optional

from wealthtrack.core.exceptions import OracleNetworkError, PriceNotFoundError
from wealthtrack.providers.request_queue import RequestQueue

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _price_from_info(info, currency: str) -> Optional[Decimal]:
    """
    Price from a yfinance ``info`` dict, or None.

    Quotes in a currency other than the requested one are rejected; there is
    no FX conversion.
    """
    if not isinstance(info, dict):
        return None
    quote_currency = (info.get("currency") or currency).upper()
    if quote_currency != currency.upper():
        return None
    price = info.get("currentPrice")
    if price is None:
        price = info.get("regularMarketPrice")
    if price is None:
        return None
    try:
        return Decimal(str(float(price)))
    except (TypeError, ValueError):
        return None


class YahooFinanceOracle:
    """Price oracle backed by yfinance."""

    def __init__(self, queue: Optional[RequestQueue] = None):
        self._queue = queue or RequestQueue()

    @property
    def provider_name(self) -> str:
        return "yahoo"

    def get_price(self, symbol: str, currency: str = "EUR") -> Decimal:
        """Fetch the current price of one symbol."""
        symbol = symbol.upper()
        price = self._queued_fetch([symbol], currency).get(symbol)
        if price is None:
            raise PriceNotFoundError(symbol, f"no {currency} quote from Yahoo Finance")
        return price

    def get_prices(self, symbols: list[str], currency: str = "EUR") -> dict[str, Decimal]:
        """Fetch current prices for several symbols with one Tickers call."""
        symbols = list(dict.fromkeys(s.upper() for s in symbols if s))
        if not symbols:
            return {}
        return self._queued_fetch(symbols, currency)

    def _queued_fetch(self, symbols: list[str], currency: str) -> dict[str, Decimal]:
        label = ",".join(symbols)
        try:
            return self._queue.run(self._fetch_quotes, symbols, currency)
        except FuturesTimeoutError:
            raise OracleNetworkError(label, "request timed out in queue")

    def _fetch_quotes(self, symbols: list[str], currency: str) -> dict[str, Decimal]:
        yf = _get_yf()
        try:
            tickers = yf.Tickers(" ".join(symbols))
        except Exception as e:
            raise OracleNetworkError(",".join(symbols), str(e))

        prices: dict[str, Decimal] = {}
        for symbol in symbols:
            try:
                ticker = tickers.tickers.get(symbol)
                info = ticker.info if ticker is not None else None
            except Exception:
                logger.warning("Yahoo Finance: failed to load quote for %s", symbol, exc_info=True)
                continue
            price = _price_from_info(info, currency)
            if price is not None:
                prices[symbol] = price
        return prices
