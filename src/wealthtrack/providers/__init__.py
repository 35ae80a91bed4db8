"""Price oracle providers module."""

from wealthtrack.providers.price_oracle import PriceOracle
from wealthtrack.providers.request_queue import RequestQueue
from wealthtrack.providers.coinmarketcap_provider import CoinMarketCapOracle
from wealthtrack.providers.yahoo_provider import YahooFinanceOracle
from wealthtrack.providers.stub_provider import StubPriceOracle

__all__ = [
    "PriceOracle",
    "RequestQueue",
    "CoinMarketCapOracle",
    "YahooFinanceOracle",
    "StubPriceOracle",
]
