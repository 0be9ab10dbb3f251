"""
Tests for the workforce table rows.
"""
import sys
from pathlib import Path

import pandas as pd
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import ReportingSettings
from src.data.schema import parse_source_records
from src.metrics.workforce import (
    active_records,
    build_workforce_rows,
    build_workforce_table,
    person_label,
    table_columns,
    workforce_frame,
    workforce_summary,
)


@pytest.fixture
def records(raw_records):
    return parse_source_records(raw_records)


class TestActiveRecords:
    """Tests for status filtering."""

    def test_only_active_entities_kept(self, records):
        kept = active_records(records)
        assert [r.entity.firstname for r in kept] == ["Ana", "Bo", "Di"]

    def test_status_match_is_exact(self, entity_factory):
        records = parse_source_records([
            {"employees": entity_factory(status="Active")},
            {"employees": entity_factory(status=" active")},
            {"employees": entity_factory(status=None)},
        ])
        assert active_records(records) == []


class TestPersonLabel:
    """Tests for the display name."""

    def test_external_suffix(self, entity_factory):
        external, employee = parse_source_records([
            {"externals": entity_factory("Ana", "Lee")},
            {"employees": entity_factory("Ana", "Lee")},
        ])
        assert person_label(external) == "Ana Lee (External)"
        assert person_label(employee) == "Ana Lee"


class TestBuildWorkforceRows:
    """Tests for row assembly."""

    def test_expected_rows(self, records):
        rows = build_workforce_rows(records)

        assert rows == [
            {
                "person": "Ana Lee",
                "past12Months": "85%",
                "y2d": "60%",
                "june": "90%",
                "March": "0%",
                "May": "70%",
                "June": "90%",
                "July": "45%",
                "netEarningsPrevMonth": "800.00 EUR",
            },
            {
                "person": "Bo Chen (External)",
                "past12Months": "40%",
                "y2d": "0%",
                "june": "55%",
                "March": "0%",
                "May": "0%",
                "June": "55%",
                "July": "0%",
                "netEarningsPrevMonth": "-1000.00 EUR",
            },
            {
                "person": "Di Eve",
                "past12Months": "85%",
                "y2d": "60%",
                "june": "0%",
                "March": "30%",
                "May": "0%",
                "June": "0%",
                "July": "0%",
                "netEarningsPrevMonth": "800.00 EUR",
            },
        ]

    def test_row_count_matches_active_records(self, records):
        assert len(build_workforce_rows(records)) == 3

    def test_every_row_has_every_month(self, records):
        table = build_workforce_table(records)
        fixed = {"person", "past12Months", "y2d", "netEarningsPrevMonth"}

        for row in table.rows:
            assert set(row) - fixed == set(table.months)

    def test_explicit_month_list(self, records):
        rows = build_workforce_rows(records, months=["July", "December"])

        assert rows[0]["July"] == "45%"
        assert rows[0]["December"] == "0%"
        assert "May" not in rows[0]

    def test_net_earnings_round_trip(self, entity_factory):
        records = parse_source_records([{"employees": entity_factory(
            costs=[{"month": "2024-07", "costs": "100"}],
            quarters=[{"name": "Q3", "earnings": "300"}],
        )}])
        assert build_workforce_rows(records)[0]["netEarningsPrevMonth"] == "0.00 EUR"

    def test_missing_workforce_block_uses_sentinels(self):
        records = parse_source_records([{"employees": {"status": "active", "firstname": "A", "lastname": "B"}}])

        row = build_workforce_rows(records, months=["July"])[0]

        assert row == {
            "person": "A B",
            "past12Months": "0%",
            "y2d": "0%",
            "July": "0%",
            "netEarningsPrevMonth": "0.00 EUR",
        }

    def test_unparsable_summary_ratios(self, entity_factory):
        records = parse_source_records([{"employees": entity_factory(past_12="n/a", ytd="")}])

        row = build_workforce_rows(records, months=[])[0]

        assert row["past12Months"] == "0%"
        assert row["y2d"] == "0%"

    def test_huge_ratio_uses_sentinel(self, entity_factory):
        records = parse_source_records([{"employees": entity_factory(ytd="1e307")}])

        row = build_workforce_rows(records, months=[])[0]

        assert row["y2d"] == "0%"

    def test_both_roles_row_has_no_suffix(self, entity_factory):
        records = parse_source_records([{
            "employees": entity_factory("Ana", "Lee"),
            "externals": entity_factory("Bo", "Chen"),
        }])

        assert build_workforce_rows(records, months=[])[0]["person"] == "Ana Lee"

    def test_column_order(self, records):
        row = build_workforce_rows(records)[0]
        assert list(row) == table_columns(["june", "March", "May", "June", "July"])

    def test_deterministic(self, raw_records):
        first = build_workforce_table(parse_source_records(raw_records))
        second = build_workforce_table(parse_source_records(raw_records))
        assert first == second

    def test_no_active_records(self, entity_factory):
        records = parse_source_records([{"employees": entity_factory(status="inactive")}])
        table = build_workforce_table(records)

        assert table.rows == []
        assert table.months == ["May", "June", "July"]

    def test_settings_drive_period_and_suffix(self, entity_factory):
        records = parse_source_records([{"externals": entity_factory(
            costs=[{"month": "2024-08", "costs": "500"}],
        )}])
        settings = ReportingSettings.for_period("2024-08", external_suffix=" [ext]", currency="USD")

        row = build_workforce_rows(records, months=[], settings=settings)[0]

        assert row["person"] == "Ana Lee [ext]"
        assert row["netEarningsPrevMonth"] == "1500.00 USD"


class TestWorkforceFrame:
    """Tests for DataFrame output."""

    def test_columns_in_display_order(self, records):
        table = build_workforce_table(records)
        df = workforce_frame(table)

        assert list(df.columns) == table.columns
        assert len(df) == 3
        assert df.iloc[1]["person"] == "Bo Chen (External)"

    def test_empty_table_keeps_columns(self):
        table = build_workforce_table([])
        df = workforce_frame(table)

        assert df.empty
        assert list(df.columns) == ["person", "past12Months", "y2d", "netEarningsPrevMonth"]


class TestWorkforceSummary:
    """Tests for headline figures."""

    def test_summary(self, records):
        summary = workforce_summary(records)

        assert summary["active_people"] == 3
        assert summary["externals"] == 1
        assert summary["avg_past_12_months"] == pytest.approx((0.85 + 0.4 + 0.85) / 3)
        assert summary["total_net_earnings"] == pytest.approx(800 - 1000 + 800)

    def test_no_ratios(self):
        records = parse_source_records([{"employees": {"status": "active"}}])
        summary = workforce_summary(records)

        assert summary["avg_past_12_months"] is None
        assert summary["total_net_earnings"] == 0
        assert not pd.isna(summary["total_net_earnings"])
