"""
Workforce Utilisation Table

Main entry point for Streamlit app.
"""
import streamlit as st
from pathlib import Path

# Page config must be first Streamlit command
st.set_page_config(
    page_title="Workforce Utilisation",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from src.ui.state import init_state, get_state, set_state, get_reporting_settings
from src.ui.layout import render_header, render_reporting_controls, render_tier_legend, section_header
from src.ui.tables import workforce_table
from src.ui.formatting import fmt_currency, fmt_ratio
from src.data.loader import load_source_records, get_data_status, read_raw_records
from src.data.schema import validate_records, display_validation_result
from src.metrics.workforce import build_workforce_table, workforce_summary
from src.exports import export_workforce_csv
from src.config import config


def main():
    """Main app entry point."""

    # Initialize session state
    init_state()

    render_reporting_controls()
    settings = get_reporting_settings()

    render_header(settings)
    st.caption("Active employees and externals: utilisation by month and net earnings for the reporting period")

    # Check data availability
    status = get_data_status()

    if not status["exists"]:
        st.error("No data found!")
        st.markdown(f"""
        ### Setup Required

        Please place the source data file at: `{status['path']}`

        The file is a JSON array of records, each with an `employees` or
        `externals` object. Override the location with `DATA_DIR` and
        `SOURCE_FILE`.
        """)

        st.info("Once data is in place, refresh this page.")
        return

    # Load data
    with st.spinner("Loading data..."):
        try:
            records = load_source_records()
        except Exception as e:
            st.error(f"Error loading data: {e}")
            return

    table = build_workforce_table(records, settings)
    summary = workforce_summary(records, settings)

    # KPI strip
    c1, c2, c3, c4 = st.columns(4)

    with c1:
        st.metric("Active People", f"{summary['active_people']:,}")

    with c2:
        st.metric("Externals", f"{summary['externals']:,}")

    with c3:
        st.metric("Avg. Utilisation (12m)", fmt_ratio(summary["avg_past_12_months"]))

    with c4:
        st.metric(
            f"Net Earnings {settings.target_period}",
            fmt_currency(summary["total_net_earnings"], settings.currency),
        )

    st.markdown("---")

    section_header(
        "Utilisation by Person",
        f"Net earnings = {settings.target_quarter} earnings / {settings.months_per_quarter} "
        f"minus {settings.target_period} costs",
    )
    render_tier_legend(settings)

    page_count = workforce_table(
        table,
        settings,
        page=get_state("page"),
        page_size=config.page_size,
    )

    if page_count > 1:
        page = st.number_input(
            f"Page (of {page_count})",
            min_value=1,
            max_value=page_count,
            value=min(get_state("page"), page_count),
            step=1,
        )
        if page != get_state("page"):
            set_state("page", int(page))
            st.rerun()

    csv_bytes, filename = export_workforce_csv(table, settings.target_period)
    st.download_button(
        label="Download CSV",
        data=csv_bytes,
        file_name=filename,
        mime="text/csv",
        key="download_workforce",
    )

    # Data status
    st.markdown("---")
    with st.expander("Data Status"):
        st.markdown(f"`{status['path']}` ({status['size_kb']} KB, modified {status['modified_utc']} UTC)")
        result = validate_records(read_raw_records(config.source_path), strict=False,
                                  active_status=settings.active_status)
        display_validation_result(result, config.source_file)


if __name__ == "__main__":
    main()
