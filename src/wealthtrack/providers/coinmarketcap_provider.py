"""CoinMarketCap price oracle for cryptocurrency quotes."""

import logging
from concurrent.futures import TimeoutError as FuturesTimeoutError
from decimal import Decimal
from typing import Optional

import httpx

from wealthtrack.core.exceptions import (
    OracleNetworkError,
    PriceNotFoundError,
    RateLimitedError,
)
from wealthtrack.providers.request_queue import RequestQueue

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://pro-api.coinmarketcap.com"
QUOTES_LATEST_PATH = "/v2/cryptocurrency/quotes/latest"


def _extract_price(entry, currency: str) -> Optional[Decimal]:
    """Pull the price out of one ``data[symbol]`` entry (object or list of objects)."""
    if isinstance(entry, list):
        entry = entry[0] if entry else None
    if not isinstance(entry, dict):
        return None
    quote = (entry.get("quote") or {}).get(currency)
    if not quote or quote.get("price") is None:
        return None
    return Decimal(str(quote["price"]))


class CoinMarketCapOracle:
    """Price oracle backed by the CoinMarketCap Pro API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30.0,
        queue: Optional[RequestQueue] = None,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            api_key: CoinMarketCap Pro API key (sent as X-CMC_PRO_API_KEY).
            base_url: API root, overridable for the sandbox.
            timeout_seconds: Per-request HTTP timeout.
            queue: Shared request queue; a 1s-paced queue is created if omitted.
            client: Preconfigured httpx client (tests).
        """
        self._client = client or httpx.Client(
            base_url=base_url,
            headers={
                "X-CMC_PRO_API_KEY": api_key,
                "Accept": "application/json",
            },
            timeout=timeout_seconds,
        )
        self._queue = queue or RequestQueue(timeout_seconds=timeout_seconds * 2)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    @property
    def provider_name(self) -> str:
        return "coinmarketcap"

    def get_price(self, symbol: str, currency: str = "EUR") -> Decimal:
        """Fetch the current price of one symbol."""
        symbol = symbol.upper()
        prices = self._queued_fetch([symbol], currency)
        price = prices.get(symbol)
        if price is None:
            raise PriceNotFoundError(symbol, f"no quote data available in {currency}")
        return price

    def get_prices(self, symbols: list[str], currency: str = "EUR") -> dict[str, Decimal]:
        """Fetch current prices for several symbols in one request."""
        symbols = list(dict.fromkeys(s.upper() for s in symbols if s))
        if not symbols:
            return {}
        prices = self._queued_fetch(symbols, currency)
        missing = [s for s in symbols if s not in prices]
        if missing:
            logger.warning("CoinMarketCap: no quote for %s", ", ".join(missing))
        return prices

    def _queued_fetch(self, symbols: list[str], currency: str) -> dict[str, Decimal]:
        label = ",".join(symbols)
        try:
            return self._queue.run(self._fetch_quotes, symbols, currency)
        except FuturesTimeoutError:
            raise OracleNetworkError(label, "request timed out in queue")

    def _fetch_quotes(self, symbols: list[str], currency: str) -> dict[str, Decimal]:
        label = ",".join(symbols)
        try:
            response = self._client.get(
                QUOTES_LATEST_PATH,
                params={"symbol": label, "convert": currency},
            )
        except httpx.TimeoutException:
            raise OracleNetworkError(label, "request timed out")
        except httpx.HTTPError as e:
            raise OracleNetworkError(label, str(e))

        if response.status_code == 429:
            raise RateLimitedError(label)
        if response.status_code == 400:
            # CMC answers 400 for unknown symbols
            raise PriceNotFoundError(label, self._error_message(response))
        if response.status_code >= 400:
            raise OracleNetworkError(
                label, f"HTTP {response.status_code}: {self._error_message(response)}"
            )

        data = (response.json() or {}).get("data") or {}
        prices: dict[str, Decimal] = {}
        for symbol in symbols:
            price = _extract_price(data.get(symbol), currency)
            if price is not None:
                prices[symbol] = price
        return prices

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            status = response.json().get("status") or {}
            return status.get("error_message") or response.reason_phrase
        except ValueError:
            return response.reason_phrase
