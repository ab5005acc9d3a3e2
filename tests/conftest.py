from __future__ import annotations

import pandas as pd
import pytest

from epidash.catalog import build_catalog
from epidash.paths import DEFAULT_IDENTIFIERS


@pytest.fixture
def catalog():
    return build_catalog(DEFAULT_IDENTIFIERS)


@pytest.fixture
def dynamics_rows():
    # deliberately out of day order; day 2 misses the child column
    return pd.DataFrame({
        "day_mean": [2.0, 0.0, 1.0],
        "covid_symptomatic_child_mean": [None, 5.0, 7.0],
        "covid_symptomatic_adult_mean": [3.0, 1.0, 2.0],
        "covid_symptomatic_child_p2_5": [0.0, 4.0, 6.0],
        "covid_symptomatic_child_p97_5": [0.0, 6.0, 9.0],
        "covid_symptomatic_adult_p2_5": [2.0, 0.5, 1.0],
        "covid_symptomatic_adult_p97_5": [4.0, 1.5, 3.0],
    })


@pytest.fixture
def weekly_rows():
    return pd.DataFrame({
        "covid_hospitalized_child_weekly_mean": [1.0, 4.0],
        "covid_hospitalized_child_weekly_ci_lower": [0.5, 5.0],
        "covid_hospitalized_child_weekly_ci_upper": [2.0, 6.0],
        "covid_hospitalized_senior_weekly_mean": [2.0, 3.0],
        "covid_hospitalized_senior_weekly_ci_lower": [1.0, 2.0],
        "covid_hospitalized_senior_weekly_ci_upper": [3.0, 2.5],
    })
