"""
Profitability metrics pack.

Net earnings for the reporting period: an approximate monthly revenue share
of the quarter's earnings minus the period's recorded cost.
"""
import logging
import math
from typing import Tuple

from src.config import DEFAULT_REPORTING, ReportingSettings
from src.data.schema import (
    CostSource, CostsByMonth, Entity, MonthlyCost, PotentialEarningsByMonth, parse_number,
)

logger = logging.getLogger(__name__)


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def cost_entries(source: CostSource) -> Tuple[MonthlyCost, ...]:
    """Cost entries of either cost source variant."""
    if isinstance(source, (PotentialEarningsByMonth, CostsByMonth)):
        return source.entries
    raise TypeError(f"Unknown cost source: {type(source).__name__}")


def period_costs(entity: Entity, settings: ReportingSettings = DEFAULT_REPORTING) -> float:
    """
    Recorded cost for settings.target_period.

    Months are compared as plain strings. No entry, no cost source or an
    unparsable amount -> 0.
    """
    if entity.cost_source is None:
        return 0.0

    for entry in cost_entries(entity.cost_source):
        if entry.month == settings.target_period:
            return _finite_or_zero(parse_number(entry.costs))

    return 0.0


def period_revenue(entity: Entity, settings: ReportingSettings = DEFAULT_REPORTING) -> float:
    """
    Monthly share of the target quarter's earnings.

    Quarter earnings / months_per_quarter; missing quarter -> 0.
    """
    workforce = entity.workforce_utilisation
    if workforce is None:
        return 0.0

    for quarter in workforce.quarter_earnings:
        if quarter.name == settings.target_quarter:
            earnings = _finite_or_zero(parse_number(quarter.earnings))
            return earnings / settings.months_per_quarter

    return 0.0


def net_earnings(entity: Entity, settings: ReportingSettings = DEFAULT_REPORTING) -> float:
    """Revenue minus costs for the reporting period. Always finite."""
    revenue = period_revenue(entity, settings)
    costs = period_costs(entity, settings)
    logger.debug(
        "Net earnings %s %s for %s: revenue=%.2f costs=%.2f",
        settings.target_period, settings.target_quarter,
        entity.lastname, revenue, costs,
    )
    return revenue - costs
