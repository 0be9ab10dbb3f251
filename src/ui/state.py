"""
Session state management for Streamlit app.
"""
import streamlit as st
from typing import Any, Dict

from src.config import DEFAULT_REPORTING, ReportingSettings, reporting_settings_from_env


# =============================================================================
# DEFAULT VALUES
# =============================================================================

def env_reporting_settings() -> ReportingSettings:
    """Reporting settings from the environment; invalid values fall back to defaults."""
    try:
        return reporting_settings_from_env()
    except ValueError as e:
        st.sidebar.error(f"Ignoring REPORTING_PERIOD: {e}")
        return DEFAULT_REPORTING


def get_defaults() -> Dict[str, Any]:
    settings = env_reporting_settings()
    return {
        "reporting_period": settings.target_period,
        "reporting_quarter": settings.target_quarter,
        "page": 1,
    }


# =============================================================================
# STATE HELPERS
# =============================================================================

def init_state():
    """Initialize all session state keys with defaults."""
    missing = [key for key in ("reporting_period", "reporting_quarter", "page") if key not in st.session_state]
    if not missing:
        return
    defaults = get_defaults()
    for key in missing:
        st.session_state[key] = defaults[key]


def get_state(key: str) -> Any:
    """Get state value with default fallback."""
    init_state()
    return st.session_state.get(key)


def set_state(key: str, value: Any):
    """Set state value."""
    st.session_state[key] = value


def reset_state():
    """Reset all state to defaults."""
    for key, default in get_defaults().items():
        st.session_state[key] = default


def get_reporting_settings() -> ReportingSettings:
    """Reporting settings for the period selected in the sidebar."""
    return DEFAULT_REPORTING.with_period(
        get_state("reporting_period"),
        get_state("reporting_quarter"),
    )
