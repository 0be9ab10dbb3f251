"""
Tests for table paging and conditional styling.
"""
import sys
from pathlib import Path

import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import COLUMN_LABELS, DEFAULT_REPORTING
from src.data.schema import parse_source_records
from src.metrics.workforce import build_workforce_table, workforce_frame
from src.ui.tables import paginate, style_workforce_df, utilisation_columns


class TestPaginate:
    """Tests for page slicing."""

    def test_pages(self):
        df = pd.DataFrame({"x": range(45)})

        page, count = paginate(df, page=3, page_size=20)

        assert count == 3
        assert page["x"].tolist() == list(range(40, 45))

    def test_page_clamped(self):
        df = pd.DataFrame({"x": range(5)})

        page, count = paginate(df, page=9, page_size=2)

        assert count == 3
        assert page["x"].tolist() == [4]

    def test_empty_frame_has_one_page(self):
        page, count = paginate(pd.DataFrame({"x": []}), page=1, page_size=20)
        assert count == 1
        assert page.empty

    def test_no_paging(self):
        df = pd.DataFrame({"x": range(5)})
        page, count = paginate(df, page=1, page_size=0)
        assert count == 1
        assert len(page) == 5


class TestStyleWorkforceDf:
    """Tests for cell colouring."""

    @pytest.fixture
    def display_df(self, raw_records):
        table = build_workforce_table(parse_source_records(raw_records))
        return table, workforce_frame(table).rename(columns=COLUMN_LABELS)

    def test_utilisation_columns(self):
        assert utilisation_columns(["May"]) == ["Past 12 Months", "YTD", "May"]

    def test_colours_applied(self, display_df):
        table, df = display_df

        html = style_workforce_df(df, table.months, DEFAULT_REPORTING).to_html()

        assert "#2e7d32" in html  # 85% and positive earnings
        assert "#d32f2f" in html  # 0% months and negative earnings
        assert "#1976d2" in html  # person column
        assert "#f5f5f5" in html  # striped rows
