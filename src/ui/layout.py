"""
Layout components: header, sidebar controls, legends.
"""
import streamlit as st
from typing import Optional

from src.config import ReportingSettings, TIER_COLORS, EARNINGS_COLORS, NEUTRAL_COLOR, quarter_for_period
from src.ui.state import get_state, set_state


QUARTERS = ["Q1", "Q2", "Q3", "Q4"]


# =============================================================================
# HEADER
# =============================================================================

def render_header(settings: ReportingSettings):
    """Render app header with the reporting period."""
    col1, col2 = st.columns([3, 1])

    with col1:
        st.title("Workforce Utilisation")

    with col2:
        st.caption(f"Reporting period: {settings.target_period} ({settings.target_quarter})")


def section_header(title: str, description: Optional[str] = None):
    """Render section header with optional description."""
    st.subheader(title)
    if description:
        st.caption(description)


# =============================================================================
# SIDEBAR CONTROLS
# =============================================================================

def render_reporting_controls():
    """Sidebar inputs for the reporting period and its quarter."""
    st.sidebar.header("Reporting Period")

    period = st.sidebar.text_input(
        "Month (YYYY-MM)",
        value=get_state("reporting_period"),
        help="Cost entries are matched against this month exactly.",
    )

    try:
        derived_quarter = quarter_for_period(period)
    except ValueError as e:
        st.sidebar.error(str(e))
        return

    if period.strip() != get_state("reporting_period"):
        set_state("reporting_period", period.strip())
        set_state("reporting_quarter", derived_quarter)
        set_state("page", 1)

    current_quarter = get_state("reporting_quarter")
    quarter = st.sidebar.selectbox(
        "Revenue quarter",
        options=QUARTERS,
        index=QUARTERS.index(current_quarter) if current_quarter in QUARTERS else 0,
        help="Quarter earnings used for the monthly revenue share.",
    )
    set_state("reporting_quarter", quarter)


def render_tier_legend(settings: ReportingSettings):
    """Colour legend for utilisation tiers and earnings sign."""
    high = f"{settings.utilisation_high:g}"
    medium = f"{settings.utilisation_medium:g}"
    items = [
        (TIER_COLORS["high"], f"≥ {high}%"),
        (TIER_COLORS["medium"], f"{medium}–{high}%"),
        (TIER_COLORS["low"], f"< {medium}%"),
        (EARNINGS_COLORS["negative"], "Negative earnings"),
        (NEUTRAL_COLOR, "No value"),
    ]
    html = " &nbsp; ".join(
        f'<span style="color: {color}; font-size: 1.2em;">●</span> {label}'
        for color, label in items
    )
    st.markdown(html, unsafe_allow_html=True)
