"""
Shared fixtures: raw source records shaped like the JSON feed.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


def make_entity(firstname="Ana", lastname="Lee", status="active",
                past_12="0.85", ytd="0.6", months=None, quarters=None,
                costs=None, cost_field="potentialEarningsByMonth"):
    """Raw employee/external payload with sensible defaults."""
    entity = {
        "status": status,
        "firstname": firstname,
        "lastname": lastname,
        "workforceUtilisation": {
            "utilisationRateLastTwelveMonths": past_12,
            "utilisationRateYearToDate": ytd,
            "lastThreeMonthsIndividually": months if months is not None else [
                {"month": "May", "utilisationRate": "0.7"},
                {"month": "June", "utilisationRate": "0.9"},
                {"month": "July", "utilisationRate": "0.45"},
            ],
            "quarterEarnings": quarters if quarters is not None else [
                {"name": "Q2", "earnings": "9000"},
                {"name": "Q3", "earnings": "6000"},
            ],
        },
    }
    if costs is not False:
        entity["costsByMonth"] = {
            cost_field: costs if costs is not None else [
                {"month": "2024-06", "costs": "1500"},
                {"month": "2024-07", "costs": "1200"},
            ],
        }
    return entity


@pytest.fixture
def entity_factory():
    return make_entity


@pytest.fixture
def raw_records():
    """Mixed feed: employees, an external, inactive and empty records."""
    return [
        {"employees": make_entity("Ana", "Lee")},
        {"externals": make_entity("Bo", "Chen", past_12="0.4", ytd=None,
                                  months=[{"month": "june", "utilisationRate": "0.55"}],
                                  costs=[{"month": "2024-07", "costs": "3000"}],
                                  cost_field="costsByMonth")},
        {"employees": make_entity("Cy", "Dorn", status="inactive")},
        {},
        {"employees": None, "externals": None},
        {"employees": make_entity("Di", "Eve", months=[{"month": "March", "utilisationRate": "0.3"}])},
    ]
