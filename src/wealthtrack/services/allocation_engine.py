"""
Allocation engine: compares a valuation against targets and derives
rebalancing actions.

Target precedence for a holding: an ASSET target on its symbol, then an
ASSET_CLASS target on its class, then the OTHER wildcard. A holding matched
by none is implicitly targeted at 0%.
"""

from decimal import Decimal
from typing import Optional

from wealthtrack.domain.models import (
    AllocationTarget,
    DEFAULT_TOLERANCE_PCT,
    RebalanceAction,
    TargetType,
)
from wealthtrack.domain.views import (
    AllocationComparison,
    AllocationSummary,
    RebalancingAction,
    RebalancingSuggestion,
    ValuationReport,
    ValuedHolding,
)
from wealthtrack.services.target_validator import check_target_sum

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def compare_allocations(
    report: ValuationReport,
    targets: list[AllocationTarget],
) -> Optional[AllocationSummary]:
    """
    Build one comparison row per targeted key.

    Row order: holdings in report order (explicit asset targets and
    untargeted holdings), then asset-class rows, then the OTHER row, then
    explicit asset targets with no holding. Returns None when there are no
    targets.
    """
    if not targets:
        return None

    total = report.total_value
    asset_targets = {
        t.target_key: t for t in targets if t.target_type == TargetType.ASSET and not t.is_wildcard
    }
    class_targets = {t.target_key: t for t in targets if t.target_type == TargetType.ASSET_CLASS}
    wildcard = next((t for t in targets if t.is_wildcard), None)

    rows: list[AllocationComparison] = []
    class_members: dict[str, list[ValuedHolding]] = {key: [] for key in class_targets}
    other_members: list[ValuedHolding] = []
    held_symbols: set[str] = set()

    for holding in report.holdings:
        held_symbols.add(holding.symbol)
        target = asset_targets.get(holding.symbol)
        if target is not None:
            rows.append(_compare(target, holding.name, _value_of(holding), total))
        elif holding.asset_class.value in class_members:
            class_members[holding.asset_class.value].append(holding)
        elif wildcard is not None:
            other_members.append(holding)
        else:
            rows.append(_untargeted(holding, total))

    for key, members in class_members.items():
        value = sum((_value_of(h) for h in members), ZERO)
        display = f"{key.replace('_', ' ').title()} ({len(members)})"
        rows.append(_compare(class_targets[key], display, value, total))

    if wildcard is not None:
        value = sum((_value_of(h) for h in other_members), ZERO)
        rows.append(_compare(wildcard, f"Other Assets ({len(other_members)})", value, total))

    for key, target in asset_targets.items():
        if key not in held_symbols:
            rows.append(_compare(target, key, ZERO, total))

    return AllocationSummary(
        date=report.date,
        total_value=total,
        currency=report.currency,
        allocations=rows,
        has_targets=True,
        targets_sum_valid=check_target_sum(targets).valid,
    )


def suggest_rebalancing(
    summary: Optional[AllocationSummary],
    tolerance_override: Optional[Decimal] = None,
) -> Optional[RebalancingSuggestion]:
    """
    Turn comparison rows into buy/sell/hold actions.

    Within tolerance (override if given, else the row's own) means hold.
    Underweight rows buy and overweight rows sell the drift value.
    """
    if summary is None or not summary.has_targets:
        return None

    actions = []
    for row in summary.allocations:
        tolerance = row.tolerance_pct if tolerance_override is None else tolerance_override
        if abs(row.drift_percentage) <= tolerance:
            action, amount = RebalanceAction.HOLD, ZERO
        elif row.drift_percentage < 0:
            action, amount = RebalanceAction.BUY, abs(row.drift_value)
        else:
            action, amount = RebalanceAction.SELL, row.drift_value

        actions.append(
            RebalancingAction(
                target_key=row.target_key,
                target_type=row.target_type,
                display_name=row.display_name,
                action=action,
                amount=amount,
                current_percentage=row.current_percentage,
                target_percentage=row.target_percentage,
            )
        )

    return RebalancingSuggestion(
        date=summary.date,
        total_value=summary.total_value,
        currency=summary.currency,
        actions=actions,
    )


def _value_of(holding: ValuedHolding) -> Decimal:
    return holding.value if holding.value is not None else ZERO


def _percentage(value: Decimal, total: Decimal) -> Decimal:
    if total == ZERO:
        return ZERO
    return value / total * HUNDRED


def _drift_value(drift: Decimal, total: Decimal) -> Decimal:
    if total == ZERO:
        return ZERO
    return drift / HUNDRED * total


def _compare(
    target: AllocationTarget,
    display_name: str,
    value: Decimal,
    total: Decimal,
) -> AllocationComparison:
    current = _percentage(value, total)
    drift = current - target.target_percentage
    tolerance = target.effective_tolerance
    return AllocationComparison(
        target_key=target.target_key,
        target_type=target.target_type,
        display_name=display_name,
        current_value=value,
        current_percentage=current,
        target_percentage=target.target_percentage,
        tolerance_pct=tolerance,
        drift_percentage=drift,
        drift_value=_drift_value(drift, total),
        is_within_tolerance=abs(drift) <= tolerance,
    )


def _untargeted(holding: ValuedHolding, total: Decimal) -> AllocationComparison:
    # Implicit 0% target; never within tolerance, but rebalancing allows the default slack
    value = _value_of(holding)
    current = _percentage(value, total)
    return AllocationComparison(
        target_key=holding.symbol,
        target_type=TargetType.ASSET,
        display_name=holding.name,
        current_value=value,
        current_percentage=current,
        target_percentage=ZERO,
        tolerance_pct=DEFAULT_TOLERANCE_PCT,
        drift_percentage=current,
        drift_value=_drift_value(current, total),
        is_within_tolerance=False,
    )
