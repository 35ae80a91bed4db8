"""Price oracle protocol."""

from decimal import Decimal
from typing import Protocol


class PriceOracle(Protocol):
    """
    Protocol for remote price providers.

    Consumed only on cache miss. Implementations must pace their requests
    through a RequestQueue.
    """

    @property
    def provider_name(self) -> str:
        """Source tag recorded on historical rates (e.g. 'coinmarketcap')."""
        ...

    def get_price(self, symbol: str, currency: str = "EUR") -> Decimal:
        """
        Fetch the current price of one symbol.

        Raises an UpstreamError kind (PriceNotFoundError, RateLimitedError,
        OracleNetworkError) on failure.
        """
        ...

    def get_prices(self, symbols: list[str], currency: str = "EUR") -> dict[str, Decimal]:
        """
        Fetch current prices for several symbols in one request.

        Missing symbols are omitted from the result; only a failure of the
        whole request raises.
        """
        ...
