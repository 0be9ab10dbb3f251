"""
Consistent number and display formatting.

Every formatter is total: absent, NaN or non-finite input yields the
sentinel string rather than an error.
"""
import math
import re
from decimal import Context, Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Union, Optional

import pandas as pd

from src.config import (
    DEFAULT_REPORTING, ReportingSettings, RATIO_SENTINEL,
    TIER_COLORS, EARNINGS_COLORS, NEUTRAL_COLOR,
)
from src.data.schema import parse_number


# Wide enough to hold any finite float at two decimals
_FIXED_CONTEXT = Context(prec=350)


def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value)) or math.isinf(value)
    except TypeError:
        return True


def _to_fixed(value: float, decimals: int) -> str:
    """Fixed-point text with ties rounded away from zero."""
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    exponent = Decimal(1).scaleb(-decimals)
    return str(Decimal(float(value)).quantize(exponent, rounding=ROUND_HALF_UP, context=_FIXED_CONTEXT))


# =============================================================================
# NUMBER FORMATTERS
# =============================================================================

def fmt_ratio(value: Union[float, int, None]) -> str:
    """Format a 0-1 ratio as a whole percentage: 0.853 -> 85%"""
    if _is_missing(value):
        return RATIO_SENTINEL
    scaled = value * 100
    if _is_missing(scaled):
        return RATIO_SENTINEL
    return f"{_to_fixed(scaled, 0)}%"


def fmt_currency(value: Union[float, int, None], currency: str = DEFAULT_REPORTING.currency) -> str:
    """Format as currency: 1234.5 -> 1234.50 EUR

    Absent values render as 0.00, the same text as a real zero balance.
    """
    if _is_missing(value):
        return f"0.00 {currency}"
    return f"{_to_fixed(value, 2)} {currency}"


# =============================================================================
# CLASSIFIERS
# =============================================================================

class UtilisationTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NEUTRAL = "neutral"


class EarningsSign(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


_NON_AMOUNT_CHARS = re.compile(r"[^\d.+-]")


def utilisation_tier(display: Optional[str],
                     settings: ReportingSettings = DEFAULT_REPORTING) -> UtilisationTier:
    """
    Bucket a formatted percentage ("85%") into a utilisation tier.

    Unparsable text is neutral.
    """
    value = parse_number(display)
    if math.isnan(value):
        return UtilisationTier.NEUTRAL
    if value >= settings.utilisation_high:
        return UtilisationTier.HIGH
    if value >= settings.utilisation_medium:
        return UtilisationTier.MEDIUM
    return UtilisationTier.LOW


def earnings_sign(display: Optional[str]) -> EarningsSign:
    """Sign of a formatted amount ("-12.50 EUR"); zero counts as positive."""
    if not isinstance(display, str):
        return EarningsSign.NEUTRAL
    value = parse_number(_NON_AMOUNT_CHARS.sub("", display))
    if math.isnan(value):
        return EarningsSign.NEUTRAL
    return EarningsSign.POSITIVE if value >= 0 else EarningsSign.NEGATIVE


def utilisation_color(display: Optional[str],
                      settings: ReportingSettings = DEFAULT_REPORTING) -> str:
    """Text colour for a formatted utilisation cell."""
    return TIER_COLORS.get(utilisation_tier(display, settings).value, NEUTRAL_COLOR)


def earnings_color(display: Optional[str]) -> str:
    """Text colour for a formatted earnings cell."""
    return EARNINGS_COLORS.get(earnings_sign(display).value, NEUTRAL_COLOR)
