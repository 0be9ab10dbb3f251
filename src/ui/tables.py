"""
Workforce table rendering with conditional colouring and paging.
"""
import math
import streamlit as st
import pandas as pd
from typing import Any, List, Sequence, Tuple

from src.config import (
    COLUMN_LABELS, PRIMARY_COLOR, STRIPE_COLOR, ReportingSettings,
    PERSON_COL, PAST_12_MONTHS_COL, YTD_COL, NET_EARNINGS_COL,
)
from src.metrics.workforce import WorkforceTable, workforce_frame
from src.ui.formatting import earnings_color, utilisation_color

try:
    from pandas.io.formats.style import Styler
except Exception:
    Styler = Any  # type: ignore[misc]


def utilisation_columns(months: Sequence[str]) -> List[str]:
    """Display labels of every column coloured by utilisation tier."""
    return [COLUMN_LABELS[PAST_12_MONTHS_COL], COLUMN_LABELS[YTD_COL], *months]


def paginate(df: pd.DataFrame, page: int, page_size: int) -> Tuple[pd.DataFrame, int]:
    """
    Slice one page out of df.

    Returns (page_df, page_count); page is 1-based and clamped to range.
    """
    page_count = max(1, math.ceil(len(df) / page_size)) if page_size > 0 else 1
    if page_size <= 0:
        return df, page_count
    page = min(max(page, 1), page_count)
    start = (page - 1) * page_size
    return df.iloc[start:start + page_size], page_count


def style_workforce_df(df: pd.DataFrame, months: Sequence[str],
                       settings: ReportingSettings) -> "Styler":
    """
    Colour utilisation cells by tier and net earnings by sign.

    Expects display labels as column names (see COLUMN_LABELS).
    """
    util_cols = [c for c in utilisation_columns(months) if c in df.columns]
    person_col = COLUMN_LABELS[PERSON_COL]
    earnings_col = COLUMN_LABELS[NET_EARNINGS_COL]

    def stripe(row: pd.Series) -> List[str]:
        position = df.index.get_loc(row.name)
        background = STRIPE_COLOR if position % 2 == 0 else "white"
        return [f"background-color: {background}"] * len(row)

    styled = df.style.apply(stripe, axis=1)

    if util_cols:
        styled = styled.map(
            lambda v: f"color: {utilisation_color(v, settings)}; font-weight: 600",
            subset=util_cols,
        )
    if earnings_col in df.columns:
        styled = styled.map(
            lambda v: f"color: {earnings_color(v)}; font-weight: 600",
            subset=[earnings_col],
        )
    if person_col in df.columns:
        styled = styled.map(
            lambda v: f"color: {PRIMARY_COLOR}; font-weight: 600",
            subset=[person_col],
        )

    return styled


def workforce_table(table: WorkforceTable,
                    settings: ReportingSettings,
                    page: int = 1,
                    page_size: int = 20,
                    key: str = "workforce_table") -> int:
    """
    Render the workforce table, one page at a time.

    Returns the page count so callers can render a pager.
    """
    if not table.rows:
        st.info("No active people to display.")
        return 1

    df = workforce_frame(table).rename(columns=COLUMN_LABELS)
    df.index = pd.RangeIndex(start=1, stop=len(df) + 1, name="#")

    page_df, page_count = paginate(df, page, page_size)

    column_config = {
        COLUMN_LABELS[PERSON_COL]: st.column_config.TextColumn(width="medium"),
        COLUMN_LABELS[NET_EARNINGS_COL]: st.column_config.TextColumn(width="medium"),
    }
    for label in utilisation_columns(table.months):
        column_config[label] = st.column_config.TextColumn(width="small")

    st.dataframe(
        style_workforce_df(page_df, table.months, settings),
        use_container_width=True,
        column_config=column_config,
        key=key,
    )

    return page_count
