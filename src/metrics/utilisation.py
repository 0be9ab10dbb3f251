"""
Utilisation metrics pack.

Month discovery across records and per-month utilisation lookup.
"""
from typing import Iterable, List, Optional

from src.config import DEFAULT_REPORTING, ReportingSettings
from src.data.schema import Entity, SourceRecord, parse_optional_number


def discover_months(records: Iterable[SourceRecord],
                    settings: ReportingSettings = DEFAULT_REPORTING) -> List[str]:
    """
    Distinct month labels found in any entity's individual-month history.

    Sorted by settings.month_order. Labels missing from the lookup get
    position 0 and therefore sort first; ties keep first-seen order.
    """
    seen = {}
    for record in records:
        entity = record.entity
        if entity is None or entity.workforce_utilisation is None:
            continue
        for item in entity.workforce_utilisation.last_three_months_individually:
            if item.month:
                seen.setdefault(item.month, None)

    return sorted(seen, key=lambda month: settings.month_order.get(month, 0))


def month_utilisation(entity: Entity, month: str) -> Optional[float]:
    """
    Utilisation ratio recorded for a month label (case-insensitive).

    The first matching entry wins; no match or an unparsable rate -> None.
    """
    workforce = entity.workforce_utilisation
    if workforce is None:
        return None

    target = month.lower()
    for item in workforce.last_three_months_individually:
        if item.month is not None and item.month.lower() == target:
            return parse_optional_number(item.utilisation_rate)
    return None
