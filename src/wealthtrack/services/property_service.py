"""
Real-estate properties: REAL_ESTATE assets valued manually, with an
optional linked mortgage.

A property's value is its latest manual rate. Equity is that value minus
the mortgage balance, taken from the newest snapshot that records one, or
the mortgage's original amount when no snapshot does.
"""

import logging
import re
from dataclasses import fields, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from wealthtrack.core.exceptions import (
    InvalidAmountError,
    PropertyNotFoundError,
    ValidationError,
)
from wealthtrack.core.timeutils import noon_utc, parse_date
from wealthtrack.domain.models import (
    Asset,
    AssetClass,
    Liability,
    LiabilityBalance,
    LiabilityType,
    MortgageInput,
    PropertyDetails,
    PropertyType,
    SaveRateInput,
    ValuationSource,
)
from wealthtrack.domain.views import PropertyWithEquity, RealEstateSummary
from wealthtrack.repositories.protocols import LedgerRepository
from wealthtrack.services.rate_store import RateStore

logger = logging.getLogger(__name__)

MANUAL_SOURCE = "manual"
SYMBOL_PREFIX = "PROP"

_EDITABLE_FIELDS = {f.name for f in fields(PropertyDetails)} - {"asset_symbol"}


class PropertyService:
    """Create, describe, revalue and summarize real-estate properties."""

    def __init__(self, ledger_repo: LedgerRepository, rate_store: RateStore):
        self._repo = ledger_repo
        self._rates = rate_store

    def create_property(
        self,
        name: str,
        property_type: Union[str, PropertyType],
        current_value,
        valuation_date: Optional[Union[str, date]] = None,
        currency: Optional[str] = None,
        mortgage: Optional[MortgageInput] = None,
        **details,
    ) -> PropertyWithEquity:
        """
        Register a property and record its first valuation.

        The symbol is generated as ``PROP-<CITY or first word of name>-NNN``.
        With ``mortgage``, a linked MORTGAGE liability is created and, if a
        snapshot exists, its outstanding amount is recorded in the latest one.

        Raises:
            ValidationError: empty name, unknown property type or detail field.
            InvalidAmountError: non-positive value or mortgage amount.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Property name must not be empty", code="INVALID_PROPERTY")
        kind = _property_type(property_type)
        value = _positive(current_value)
        _check_fields(details)
        if mortgage is not None:
            _positive(mortgage.original_amount)
            _non_negative(mortgage.outstanding_amount)

        symbol = self._next_symbol(details.get("city") or name.split()[0])
        currency = (currency or self._rates.base_currency).upper()
        asset = self._repo.create_asset(
            Asset(
                symbol=symbol,
                name=name,
                asset_class=AssetClass.REAL_ESTATE,
                valuation_source=ValuationSource.MANUAL,
                currency=currency,
            )
        )
        self._repo.save_property_details(
            PropertyDetails(asset_symbol=asset.symbol, property_type=kind, **details)
        )
        self._record_value(asset.symbol, value, valuation_date)

        if mortgage is not None:
            self._create_mortgage(asset, mortgage)

        logger.info("Created property %s (%s)", asset.symbol, kind.value)
        return self.get_property(asset.symbol)

    def get_property(self, symbol: str) -> PropertyWithEquity:
        asset = self._repo.get_asset(symbol.upper())
        if asset is None or asset.asset_class != AssetClass.REAL_ESTATE:
            raise PropertyNotFoundError(symbol.upper())
        details = self._repo.get_property_details(asset.symbol)
        if details is None:
            raise PropertyNotFoundError(asset.symbol)
        return self._with_equity(asset, details)

    def list_properties(self) -> list[PropertyWithEquity]:
        """Active REAL_ESTATE assets that have property details."""
        properties = []
        for asset in self._repo.list_assets(asset_class=AssetClass.REAL_ESTATE, active_only=True):
            details = self._repo.get_property_details(asset.symbol)
            if details is not None:
                properties.append(self._with_equity(asset, details))
        return properties

    def update_property(self, symbol: str, name: Optional[str] = None, **changes) -> PropertyWithEquity:
        """Rename a property and/or change its details; unspecified fields are kept."""
        current = self.get_property(symbol)
        _check_fields(changes)
        if "property_type" in changes:
            changes["property_type"] = _property_type(changes["property_type"])

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Property name must not be empty", code="INVALID_PROPERTY")
            self._repo.update_asset_name(current.symbol, name)
        if changes:
            self._repo.save_property_details(replace(current.details, **changes))
        return self.get_property(current.symbol)

    def update_value(
        self,
        symbol: str,
        value,
        valuation_date: Optional[Union[str, date]] = None,
    ) -> PropertyWithEquity:
        """Record a new valuation; one per calendar day, a later one replaces it."""
        current = self.get_property(symbol)
        self._record_value(current.symbol, _positive(value), valuation_date)
        return self.get_property(current.symbol)

    def get_real_estate_summary(self) -> RealEstateSummary:
        return RealEstateSummary(properties=self.list_properties())

    def _with_equity(self, asset: Asset, details: PropertyDetails) -> PropertyWithEquity:
        rate = self._rates.get_latest_historical_rate(asset.symbol)
        mortgage = self._repo.find_linked_liability(asset.symbol, LiabilityType.MORTGAGE)

        balance = None
        if mortgage is not None:
            latest = self._repo.get_latest_liability_balance(mortgage.id)
            balance = latest.outstanding_amount if latest is not None else mortgage.original_amount

        return PropertyWithEquity(
            symbol=asset.symbol,
            name=asset.name,
            currency=asset.currency,
            details=details,
            current_value=rate.price if rate is not None else Decimal("0"),
            mortgage_id=mortgage.id if mortgage is not None else None,
            mortgage_balance=balance,
        )

    def _record_value(self, symbol: str, value: Decimal, valuation_date) -> None:
        day = parse_date(valuation_date) if valuation_date is not None else self._rates.today()
        self._rates.save_historical_rate(
            SaveRateInput(
                asset_symbol=symbol,
                price=value,
                timestamp=noon_utc(day),
                base_currency=self._rates.base_currency,
                source=MANUAL_SOURCE,
            )
        )

    def _create_mortgage(self, asset: Asset, mortgage: MortgageInput) -> None:
        liability = self._repo.create_liability(
            Liability(
                name=mortgage.name,
                liability_type=LiabilityType.MORTGAGE,
                original_amount=Decimal(str(mortgage.original_amount)),
                currency=asset.currency,
                linked_asset_symbol=asset.symbol,
                interest_rate=mortgage.interest_rate,
                start_date=mortgage.start_date,
                term_months=mortgage.term_months,
            )
        )
        snapshot = self._repo.get_latest_snapshot()
        if snapshot is None:
            return
        self._repo.add_liability_balance(
            LiabilityBalance(
                snapshot_id=snapshot.id,
                liability_id=liability.id,
                liability_name=liability.name,
                liability_type=liability.liability_type,
                outstanding_amount=Decimal(str(mortgage.outstanding_amount)),
            )
        )

    def _next_symbol(self, base_text: str) -> str:
        base = re.sub(r"[^A-Z0-9]", "", base_text.upper())[:10] or "PROPERTY"
        prefix = f"{SYMBOL_PREFIX}-{base}-"
        highest = 0
        for asset in self._repo.list_assets(asset_class=AssetClass.REAL_ESTATE):
            suffix = asset.symbol[len(prefix):] if asset.symbol.startswith(prefix) else ""
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        return f"{prefix}{highest + 1:03d}"


def _property_type(value) -> PropertyType:
    try:
        return PropertyType(value)
    except ValueError:
        raise ValidationError(f"Invalid property type: {value}", code="INVALID_PROPERTY_TYPE")


def _check_fields(details: dict) -> None:
    unknown = sorted(set(details) - _EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(
            f"Unknown property field(s): {', '.join(unknown)}", code="INVALID_PROPERTY"
        )


def _positive(amount) -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(amount)
    if not value.is_finite() or value <= 0:
        raise InvalidAmountError(amount)
    return value


def _non_negative(amount) -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(amount)
    if not value.is_finite() or value < 0:
        raise InvalidAmountError(amount)
    return value
