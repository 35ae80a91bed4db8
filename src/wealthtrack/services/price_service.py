"""Price lookups and manual overrides outside portfolio context."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from wealthtrack.core.exceptions import InvalidAmountError, UpstreamError
from wealthtrack.core.timeutils import noon_utc, parse_date
from wealthtrack.domain.models import HistoricalRate, SaveRateInput
from wealthtrack.domain.views import PriceLookupResult
from wealthtrack.providers.price_oracle import PriceOracle
from wealthtrack.services.rate_store import RateStore

logger = logging.getLogger(__name__)

MANUAL_SOURCE = "manual"


class PriceService:
    """
    Current prices for arbitrary symbols, plus manual price overrides.

    Oracle failures are reported per symbol in the results, never raised.
    """

    def __init__(self, rate_store: RateStore, oracle: PriceOracle):
        self._rates = rate_store
        self._oracle = oracle

    def get_current_prices(self, symbols: list[str]) -> list[PriceLookupResult]:
        """Cached prices where live, one oracle batch for the rest."""
        results: dict[str, PriceLookupResult] = {}
        misses = []
        for symbol in _unique_upper(symbols):
            cached = self._rates.get_cached_rate(symbol)
            if cached is not None:
                results[symbol] = PriceLookupResult(symbol=symbol, price=cached.price, from_cache=True)
            else:
                misses.append(symbol)

        if misses:
            for result in self.refresh_prices(misses):
                results[result.symbol] = result

        return [results[s] for s in _unique_upper(symbols)]

    def refresh_prices(self, symbols: list[str]) -> list[PriceLookupResult]:
        """Bypass the cache: fetch every symbol in one batch and write the prices back."""
        wanted = _unique_upper(symbols)
        if not wanted:
            return []

        currency = self._rates.base_currency
        try:
            fetched = self._oracle.get_prices(wanted, currency)
        except UpstreamError as e:
            logger.warning("Price refresh failed for %s: %s", ", ".join(wanted), e.message)
            return [PriceLookupResult(symbol=s, error=e.message) for s in wanted]
        except Exception as e:
            logger.exception("Unexpected error refreshing prices for %s", ", ".join(wanted))
            return [PriceLookupResult(symbol=s, error=str(e)) for s in wanted]

        results = []
        for symbol in wanted:
            price = fetched.get(symbol)
            if price is None:
                results.append(PriceLookupResult(symbol=symbol, error="no quote data"))
                continue
            self._rates.update_cached_rate(symbol, price, currency, source=self._oracle.provider_name)
            results.append(PriceLookupResult(symbol=symbol, price=price))

        failed = sum(1 for r in results if not r.ok)
        logger.info("Refreshed %d prices (%d failed)", len(results) - failed, failed)
        return results

    def set_manual_price(
        self,
        symbol: str,
        on_date: Union[str, date],
        price,
        currency: Optional[str] = None,
    ) -> HistoricalRate:
        """Record a manual rate at noon UTC of ``on_date``; replaces any earlier override for that day."""
        day = parse_date(on_date)
        try:
            value = Decimal(str(price))
        except (InvalidOperation, ValueError):
            raise InvalidAmountError(price)
        if not value.is_finite() or value <= 0:
            raise InvalidAmountError(price)

        rate = self._rates.save_historical_rate(
            SaveRateInput(
                asset_symbol=symbol.upper(),
                price=value,
                timestamp=noon_utc(day),
                base_currency=(currency or self._rates.base_currency).upper(),
                source=MANUAL_SOURCE,
            )
        )
        logger.info("Manual price for %s on %s: %s", rate.asset_symbol, day, value)
        return rate


def _unique_upper(symbols: list[str]) -> list[str]:
    seen: list[str] = []
    for symbol in symbols:
        upper = symbol.strip().upper()
        if upper and upper not in seen:
            seen.append(upper)
    return seen
