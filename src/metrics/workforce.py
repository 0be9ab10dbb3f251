"""
Workforce utilisation table.

Builds one display row per active person: name, 12-month and YTD
utilisation, one column per discovered month, and net earnings for the
reporting period.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from src.config import (
    DEFAULT_REPORTING, ReportingSettings,
    PERSON_COL, PAST_12_MONTHS_COL, YTD_COL, NET_EARNINGS_COL,
)
from src.data.schema import SourceRecord, parse_optional_number
from src.metrics.profitability import net_earnings
from src.metrics.utilisation import discover_months, month_utilisation
from src.ui.formatting import fmt_currency, fmt_ratio

logger = logging.getLogger(__name__)

WorkforceRow = Dict[str, str]


@dataclass(frozen=True)
class WorkforceTable:
    """Discovered month labels plus the rows built against them."""
    months: List[str]
    rows: List[WorkforceRow]

    @property
    def columns(self) -> List[str]:
        return table_columns(self.months)


def table_columns(months: Sequence[str]) -> List[str]:
    """Column order: person, 12m, YTD, months..., net earnings."""
    return [PERSON_COL, PAST_12_MONTHS_COL, YTD_COL, *months, NET_EARNINGS_COL]


def active_records(records: Iterable[SourceRecord],
                   settings: ReportingSettings = DEFAULT_REPORTING) -> List[SourceRecord]:
    """Records whose resolved entity has exactly the active status."""
    kept = []
    for record in records:
        entity = record.entity
        if entity is None:
            logger.debug("Skipping record with no employee or external payload")
            continue
        if entity.status != settings.active_status:
            logger.debug("Skipping %s %s with status %r", entity.firstname, entity.lastname, entity.status)
            continue
        kept.append(record)
    return kept


def person_label(record: SourceRecord,
                 settings: ReportingSettings = DEFAULT_REPORTING) -> str:
    entity = record.entity
    name = f"{entity.firstname} {entity.lastname}"
    if record.is_external:
        name += settings.external_suffix
    return name


def build_row(record: SourceRecord, months: Sequence[str],
              settings: ReportingSettings = DEFAULT_REPORTING) -> WorkforceRow:
    """Build the display row for one active record."""
    entity = record.entity
    workforce = entity.workforce_utilisation

    past_12 = parse_optional_number(workforce.utilisation_rate_last_twelve_months) if workforce else None
    ytd = parse_optional_number(workforce.utilisation_rate_year_to_date) if workforce else None

    row = {
        PERSON_COL: person_label(record, settings),
        PAST_12_MONTHS_COL: fmt_ratio(past_12),
        YTD_COL: fmt_ratio(ytd),
    }

    for month in months:
        row[month] = fmt_ratio(month_utilisation(entity, month))

    row[NET_EARNINGS_COL] = fmt_currency(net_earnings(entity, settings), settings.currency)
    return row


def build_workforce_rows(records: Sequence[SourceRecord],
                         months: Optional[Sequence[str]] = None,
                         settings: ReportingSettings = DEFAULT_REPORTING) -> List[WorkforceRow]:
    """
    Build display rows for every active record, in input order.

    Args:
        records: Parsed source records
        months: Month columns to emit (None = discover from records)
        settings: Reporting period, thresholds and lookup tables

    Returns:
        List of {column key: display string}
    """
    if months is None:
        months = discover_months(records, settings)

    rows = [build_row(record, months, settings) for record in active_records(records, settings)]
    logger.debug("Built %d workforce rows from %d records", len(rows), len(records))
    return rows


def build_workforce_table(records: Sequence[SourceRecord],
                          settings: ReportingSettings = DEFAULT_REPORTING) -> WorkforceTable:
    """Discover months and build rows in one pass over the record set."""
    months = discover_months(records, settings)
    return WorkforceTable(months=months, rows=build_workforce_rows(records, months, settings))


def workforce_summary(records: Sequence[SourceRecord],
                      settings: ReportingSettings = DEFAULT_REPORTING) -> Dict[str, object]:
    """
    Headline figures over the active records.

    Returns dict with:
    - active_people, externals (counts)
    - avg_past_12_months (mean ratio of people with a value, None if nobody has one)
    - total_net_earnings (sum over active people)
    """
    active = active_records(records, settings)

    past_12 = pd.Series([
        parse_optional_number(r.entity.workforce_utilisation.utilisation_rate_last_twelve_months)
        if r.entity.workforce_utilisation else None
        for r in active
    ], dtype="float64")

    avg_past_12 = past_12.mean() if past_12.notna().any() else None

    return {
        "active_people": len(active),
        "externals": sum(1 for r in active if r.is_external),
        "avg_past_12_months": avg_past_12,
        "total_net_earnings": float(sum(net_earnings(r.entity, settings) for r in active)),
    }


def workforce_frame(table: WorkforceTable) -> pd.DataFrame:
    """Workforce table as a DataFrame with columns in display order."""
    return pd.DataFrame(table.rows, columns=table.columns)
