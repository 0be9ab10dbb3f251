"""
Application configuration management.
"""
import os
import re
from pathlib import Path
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional


def _default_data_dir() -> Path:
    env_dir = os.getenv("DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path("./data")


@dataclass
class AppConfig:
    """Application configuration with environment overrides."""

    # Paths
    data_dir: Path = field(default_factory=_default_data_dir)
    source_file: str = field(default_factory=lambda: os.getenv("SOURCE_FILE", "source-data.json"))

    # Environment
    app_env: str = field(default_factory=lambda: os.getenv("APP_ENV", "dev"))

    # Cache settings
    cache_ttl_seconds: int = field(default_factory=lambda: int(os.getenv("CACHE_TTL_SECONDS", "3600")))

    # Table display
    page_size: int = field(default_factory=lambda: int(os.getenv("PAGE_SIZE", "20")))

    @property
    def source_path(self) -> Path:
        return self.data_dir / self.source_file

    @property
    def is_prod(self) -> bool:
        return self.app_env.lower() == "prod"


# Global config instance
config = AppConfig()


# Month name -> position in the year
MONTH_ORDER: Mapping[str, int] = MappingProxyType({
    "January": 1, "February": 2, "March": 3, "April": 4, "May": 5, "June": 6,
    "July": 7, "August": 8, "September": 9, "October": 10, "November": 11, "December": 12,
})

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{2})$")


def quarter_for_period(period: str) -> str:
    """Quarter label for a "YYYY-MM" period: "2024-07" -> "Q3"."""
    match = _PERIOD_RE.match(period.strip())
    if not match:
        raise ValueError(f"Reporting period must look like YYYY-MM, got {period!r}")
    month = int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Reporting period month out of range: {period!r}")
    return f"Q{(month - 1) // 3 + 1}"


@dataclass(frozen=True)
class ReportingSettings:
    """
    Immutable settings injected into the table pipeline.

    target_period is compared verbatim against cost entry months and
    target_quarter against quarter earnings names.
    """
    target_period: str = "2024-07"
    target_quarter: str = "Q3"
    months_per_quarter: int = 3

    # Utilisation tiers (percent)
    utilisation_high: float = 80.0
    utilisation_medium: float = 50.0

    month_order: Mapping[str, int] = field(default_factory=lambda: MONTH_ORDER, hash=False)
    active_status: str = "active"
    external_suffix: str = " (External)"
    currency: str = "EUR"

    @classmethod
    def for_period(cls, period: str, **overrides) -> "ReportingSettings":
        """Settings for a reporting period with its quarter derived."""
        return cls(target_period=period.strip(), target_quarter=quarter_for_period(period), **overrides)

    def with_period(self, period: str, quarter: Optional[str] = None) -> "ReportingSettings":
        return replace(
            self,
            target_period=period.strip(),
            target_quarter=quarter or quarter_for_period(period),
        )


DEFAULT_REPORTING = ReportingSettings()


def reporting_settings_from_env() -> ReportingSettings:
    """Build reporting settings from REPORTING_PERIOD / REPORTING_QUARTER."""
    period = os.getenv("REPORTING_PERIOD")
    quarter = os.getenv("REPORTING_QUARTER")
    if not period:
        if quarter:
            return replace(DEFAULT_REPORTING, target_quarter=quarter)
        return DEFAULT_REPORTING
    return DEFAULT_REPORTING.with_period(period, quarter)


# Accepted JSON keys per role, in resolution order
ROLE_FIELDS = {
    "employee": ("employees", "employee"),
    "external": ("externals", "external"),
}

# costsByMonth variants, in precedence order
COST_SOURCE_FIELDS = ("potentialEarningsByMonth", "costsByMonth")

# Output column keys
PERSON_COL = "person"
PAST_12_MONTHS_COL = "past12Months"
YTD_COL = "y2d"
NET_EARNINGS_COL = "netEarningsPrevMonth"

COLUMN_LABELS = {
    PERSON_COL: "Person",
    PAST_12_MONTHS_COL: "Past 12 Months",
    YTD_COL: "YTD",
    NET_EARNINGS_COL: "Net Earnings Prev Month",
}

# Display colours
TIER_COLORS = {
    "high": "#2e7d32",
    "medium": "#ed6c02",
    "low": "#d32f2f",
}

EARNINGS_COLORS = {
    "positive": "#2e7d32",
    "negative": "#d32f2f",
}

NEUTRAL_COLOR = "#666"
PRIMARY_COLOR = "#1976d2"
STRIPE_COLOR = "#f5f5f5"

# Sentinels
RATIO_SENTINEL = "0%"
