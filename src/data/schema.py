"""
Source record schema: typed workforce records and tolerant parsing.
"""
import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import streamlit as st

from src.config import ROLE_FIELDS, COST_SOURCE_FIELDS

logger = logging.getLogger(__name__)

# Numeric values arrive as strings in the source feed, occasionally as numbers
RawNumber = Union[str, int, float, None]

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class SchemaValidationError(Exception):
    """Raised when a record does not have the expected shape."""
    pass


def parse_number(value: Any) -> float:
    """
    Parse the leading numeric portion of a value.

    Returns NaN for None, booleans and strings without a leading number,
    so "0.85" -> 0.85, "12%" -> 12.0, "n/a" -> nan.
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.nan
    if not isinstance(value, str):
        return math.nan
    match = _LEADING_NUMBER.match(value)
    if not match:
        return math.nan
    return float(match.group(1))


def parse_optional_number(value: Any) -> Optional[float]:
    """Like parse_number but returns None instead of NaN."""
    number = parse_number(value)
    return None if math.isnan(number) else number


# =============================================================================
# RECORD TYPES
# =============================================================================

class Role(str, Enum):
    EMPLOYEE = "employee"
    EXTERNAL = "external"


@dataclass(frozen=True)
class MonthUtilisation:
    month: Optional[str]
    utilisation_rate: RawNumber = None


@dataclass(frozen=True)
class QuarterEarning:
    name: Optional[str]
    earnings: RawNumber = None


@dataclass(frozen=True)
class MonthlyCost:
    month: Optional[str]
    costs: RawNumber = None


@dataclass(frozen=True)
class PotentialEarningsByMonth:
    """Cost entries delivered under costsByMonth.potentialEarningsByMonth."""
    entries: Tuple[MonthlyCost, ...] = ()


@dataclass(frozen=True)
class CostsByMonth:
    """Cost entries delivered under costsByMonth.costsByMonth."""
    entries: Tuple[MonthlyCost, ...] = ()


CostSource = Union[PotentialEarningsByMonth, CostsByMonth]

_COST_VARIANTS = {
    "potentialEarningsByMonth": PotentialEarningsByMonth,
    "costsByMonth": CostsByMonth,
}


@dataclass(frozen=True)
class WorkforceUtilisation:
    utilisation_rate_last_twelve_months: RawNumber = None
    utilisation_rate_year_to_date: RawNumber = None
    last_three_months_individually: Tuple[MonthUtilisation, ...] = ()
    quarter_earnings: Tuple[QuarterEarning, ...] = ()


@dataclass(frozen=True)
class Entity:
    status: Optional[str]
    firstname: str = ""
    lastname: str = ""
    workforce_utilisation: Optional[WorkforceUtilisation] = None
    cost_source: Optional[CostSource] = None


@dataclass(frozen=True)
class SourceRecord:
    """One tracked individual; at most one role is populated."""
    employee: Optional[Entity] = None
    external: Optional[Entity] = None

    @property
    def entity(self) -> Optional[Entity]:
        return self.employee or self.external

    @property
    def role(self) -> Optional[Role]:
        # Both roles populated: the employee payload is shown, unsuffixed
        if self.employee is not None:
            return Role.EMPLOYEE
        if self.external is not None:
            return Role.EXTERNAL
        return None

    @property
    def is_external(self) -> bool:
        return self.role is Role.EXTERNAL


# =============================================================================
# PARSING
# =============================================================================

def _mapping(value: Any, path: str) -> Optional[Mapping[str, Any]]:
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise SchemaValidationError(f"{path}: expected an object, got {type(value).__name__}")
    return value


def _items(value: Any, path: str) -> List[Mapping[str, Any]]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise SchemaValidationError(f"{path}: expected an array, got {type(value).__name__}")
    return [_mapping(item, f"{path}[{i}]") or {} for i, item in enumerate(value)]


def _label(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _parse_cost_source(raw: Optional[Mapping[str, Any]], path: str) -> Optional[CostSource]:
    """Pick the first populated cost array, in COST_SOURCE_FIELDS order."""
    if raw is None:
        return None
    for field_name in COST_SOURCE_FIELDS:
        entries = raw.get(field_name)
        if entries is None:
            continue
        variant = _COST_VARIANTS[field_name]
        return variant(tuple(
            MonthlyCost(month=_label(item.get("month")), costs=item.get("costs"))
            for item in _items(entries, f"{path}.{field_name}")
        ))
    return None


def _parse_workforce(raw: Optional[Mapping[str, Any]], path: str) -> Optional[WorkforceUtilisation]:
    if raw is None:
        return None
    months = tuple(
        MonthUtilisation(month=_label(item.get("month")), utilisation_rate=item.get("utilisationRate"))
        for item in _items(raw.get("lastThreeMonthsIndividually"), f"{path}.lastThreeMonthsIndividually")
    )
    quarters = tuple(
        QuarterEarning(name=_label(item.get("name")), earnings=item.get("earnings"))
        for item in _items(raw.get("quarterEarnings"), f"{path}.quarterEarnings")
    )
    return WorkforceUtilisation(
        utilisation_rate_last_twelve_months=raw.get("utilisationRateLastTwelveMonths"),
        utilisation_rate_year_to_date=raw.get("utilisationRateYearToDate"),
        last_three_months_individually=months,
        quarter_earnings=quarters,
    )


def parse_entity(raw: Mapping[str, Any], path: str = "entity") -> Entity:
    """Parse one employee/external payload."""
    raw = _mapping(raw, path) or {}
    return Entity(
        status=_label(raw.get("status")),
        firstname=_label(raw.get("firstname")) or "",
        lastname=_label(raw.get("lastname")) or "",
        workforce_utilisation=_parse_workforce(
            _mapping(raw.get("workforceUtilisation"), f"{path}.workforceUtilisation"),
            f"{path}.workforceUtilisation",
        ),
        cost_source=_parse_cost_source(
            _mapping(raw.get("costsByMonth"), f"{path}.costsByMonth"),
            f"{path}.costsByMonth",
        ),
    )


def _role_payload(raw: Mapping[str, Any], role: str) -> Tuple[Optional[str], Any]:
    for key in ROLE_FIELDS[role]:
        if raw.get(key) is not None:
            return key, raw[key]
    return None, None


def parse_source_record(raw: Any, index: int = 0) -> SourceRecord:
    """
    Parse a raw JSON record into a SourceRecord.

    Absent or null fields become None/empty; a structurally wrong value
    (e.g. an array where an object belongs) raises SchemaValidationError.
    """
    path = f"records[{index}]"
    raw = _mapping(raw, path)
    if raw is None:
        raise SchemaValidationError(f"{path}: record is null")

    parsed = {}
    for role in ROLE_FIELDS:
        key, payload = _role_payload(raw, role)
        parsed[role] = parse_entity(payload, f"{path}.{key}") if key else None

    return SourceRecord(employee=parsed["employee"], external=parsed["external"])


def parse_source_records(raw_records: Any) -> List[SourceRecord]:
    """Parse a JSON array of records."""
    if isinstance(raw_records, Mapping) or not isinstance(raw_records, Sequence) or isinstance(raw_records, str):
        raise SchemaValidationError(
            f"Source data must be an array of records, got {type(raw_records).__name__}"
        )
    records = [parse_source_record(raw, i) for i, raw in enumerate(raw_records)]
    logger.debug("Parsed %d source records", len(records))
    return records


# =============================================================================
# VALIDATION REPORT
# =============================================================================

def validate_records(raw_records: Any, strict: bool = True,
                     active_status: str = "active") -> Dict:
    """
    Summarise the shape of raw source records.

    Args:
        raw_records: Parsed JSON (expected: array of record objects)
        strict: If True, raise on the first malformed record
        active_status: Status value counted as active

    Returns:
        Dict with validation results
    """
    result = {
        "is_valid": True,
        "total_records": 0,
        "active_records": 0,
        "inactive_records": 0,
        "missing_role": 0,
        "both_roles": 0,
        "missing_workforce": 0,
        "missing_costs": 0,
        "errors": [],
    }

    if isinstance(raw_records, Mapping) or not isinstance(raw_records, Sequence) or isinstance(raw_records, str):
        message = f"Source data must be an array of records, got {type(raw_records).__name__}"
        if strict:
            raise SchemaValidationError(message)
        result["is_valid"] = False
        result["errors"].append(message)
        return result

    result["total_records"] = len(raw_records)

    for i, raw in enumerate(raw_records):
        try:
            record = parse_source_record(raw, i)
        except SchemaValidationError as e:
            if strict:
                raise
            result["is_valid"] = False
            result["errors"].append(str(e))
            continue

        if record.employee is not None and record.external is not None:
            result["both_roles"] += 1

        entity = record.entity
        if entity is None:
            result["missing_role"] += 1
            continue

        if entity.status == active_status:
            result["active_records"] += 1
        else:
            result["inactive_records"] += 1

        if entity.workforce_utilisation is None:
            result["missing_workforce"] += 1
        if entity.cost_source is None:
            result["missing_costs"] += 1

    return result


def display_validation_result(result: Dict, source_name: str):
    """Display validation result in Streamlit."""
    if result["is_valid"]:
        st.success(
            f"{source_name}: {result['total_records']:,} records "
            f"({result['active_records']:,} active)"
        )
    else:
        st.error(f"{source_name}: {len(result['errors'])} malformed records")
        for error in result["errors"][:10]:
            st.caption(error)

    if result["missing_role"]:
        st.warning(f"{source_name}: {result['missing_role']} records have no employee or external payload")
    if result["both_roles"]:
        st.warning(f"{source_name}: {result['both_roles']} records carry both roles; the employee payload is used")
