from __future__ import annotations

import math

import numpy as np
import pandas as pd

from epidash.columns import AGES, column_name, column_values
from epidash.series import (
    SummaryStats,
    build_age_series,
    build_ci_band,
    build_daily_hospital_series,
    build_weekly_hospital_series,
    latest_week_by_age,
    max_value,
    merge_by_day,
    prepare_time_series,
    share_by_age,
    summary_stats,
)


def test_prepare_time_series_offsets_day_and_fills_zero():
    rows = pd.DataFrame({"day_mean": [0], "covid_symptomatic_child_mean": [5]})
    ts = prepare_time_series(rows, "covid", "symptomatic")
    assert ts.to_dict("records") == [
        {"day": 1, "infant": 0, "preschool": 0, "child": 5, "adult": 0, "senior": 0}
    ]


def test_prepare_time_series_sorted_and_skips_rows_without_day(dynamics_rows):
    rows = pd.concat([dynamics_rows, pd.DataFrame({"day_mean": [None, "n/a"]})], ignore_index=True)
    ts = prepare_time_series(rows, "covid", "symptomatic")
    assert ts["day"].tolist() == [1, 2, 3]
    assert ts["child"].tolist() == [5.0, 7.0, 0.0]
    assert ts["adult"].tolist() == [1.0, 2.0, 3.0]
    assert not ts.isna().any().any()


def test_day_rounding_is_half_up():
    rows = pd.DataFrame({"day_mean": [0.5, 1.49], "flu_recovered_adult_mean": [1, 2]})
    assert prepare_time_series(rows, "flu", "recovered")["day"].tolist() == [2, 2]


def test_empty_inputs_return_empty_frames():
    for rows in (None, pd.DataFrame()):
        assert prepare_time_series(rows, "covid", "symptomatic").empty
        assert build_ci_band(rows, "covid", "symptomatic").empty
        assert build_age_series(rows, "covid", "symptomatic", "child").empty
        assert build_daily_hospital_series(rows, "covid", "child").empty
        assert build_weekly_hospital_series(rows, "covid").empty
        assert latest_week_by_age(rows, "covid").empty
        assert share_by_age(rows, "covid", "symptomatic").empty
        assert summary_stats(rows, "covid", "symptomatic") == SummaryStats(0, 0, 0)
        assert max_value(rows, "covid", "symptomatic") == 100


def test_max_value_headroom_and_floor(dynamics_rows):
    assert max_value(dynamics_rows, "covid", "symptomatic") == 100
    big = pd.DataFrame({"day_mean": [0, 1], "rsv_symptomatic_senior_mean": [150.0, 1000.0]})
    result = max_value(big, "rsv", "symptomatic")
    assert result == math.ceil(1000.0 * 1.1)
    assert result >= 1000.0


def test_summary_stats(dynamics_rows):
    stats = summary_stats(dynamics_rows, "covid", "symptomatic")
    # values present: child 5, 7; adult 3, 1, 2
    assert stats == SummaryStats(peak=7, total=18, avg=4)


def test_summary_stats_single_value():
    rows = pd.DataFrame({"day_mean": [0], "covid_symptomatic_infant_mean": [12.4]})
    stats = summary_stats(rows, "covid", "symptomatic")
    assert stats.peak == stats.avg == stats.total == 12


def test_ci_band_sums_across_ages(dynamics_rows):
    band = build_ci_band(dynamics_rows, "covid", "symptomatic")
    assert band.columns.tolist() == ["day", "mean", "lower", "upper"]
    first = band.iloc[0]
    assert first["day"] == 1
    assert first["mean"] == 6.0
    assert first["lower"] == 4.5
    assert first["upper"] == 7.5
    assert band["day"].tolist() == [1, 2, 3]


def test_age_series(dynamics_rows):
    s = build_age_series(dynamics_rows, "covid", "symptomatic", "child")
    assert s.to_dict("list") == {"day": [1, 2, 3], "value": [5.0, 7.0, 0.0]}


def test_daily_hospital_series_falls_back_to_ci_columns():
    rows = pd.DataFrame({
        "day_mean": [1, 0],
        "flu_hospitalized_infant_mean": [2.0, 1.0],
        "flu_hospitalized_infant_ci_lower": [1.0, 0.5],
        "flu_hospitalized_infant_ci_upper": [3.0, 1.5],
        "flu_hospitalized_adult_mean": [50.0, 60.0],
    })
    s = build_daily_hospital_series(rows, "flu", "infant")
    assert s.to_dict("list") == {
        "day": [1, 2],
        "mean": [1.0, 2.0],
        "lower": [0.5, 1.0],
        "upper": [1.5, 3.0],
    }


def test_weekly_hospital_series(weekly_rows):
    s = build_weekly_hospital_series(weekly_rows, "covid")
    assert s.to_dict("list") == {
        "week": [1, 2],
        "mean": [3.0, 7.0],
        "lower": [1.5, 7.0],
        "upper": [5.0, 8.5],
    }


def test_weekly_uses_week_column_when_present(weekly_rows):
    rows = weekly_rows.assign(week_mean=[1, 0])
    s = build_weekly_hospital_series(rows, "covid")
    assert s["week"].tolist() == [1, 2]
    assert s["mean"].tolist() == [7.0, 3.0]


def test_latest_week_by_age_error_floor(weekly_rows):
    latest = latest_week_by_age(weekly_rows, "covid").set_index("age")
    assert list(latest.index) == AGES
    child = latest.loc["child"]
    assert child["label"] == "Child"
    assert child["mean"] == 4.0
    assert child["error_minus"] == 0.0  # lower bound above the mean
    assert child["error_plus"] == 2.0
    senior = latest.loc["senior"]
    assert (senior["error_minus"], senior["error_plus"]) == (1.0, 0.0)
    assert latest.loc["infant", "mean"] == 0.0


def test_merge_by_day_outer_join():
    a = pd.DataFrame({"day": [1, 2, 3], "value": [10.0, 20.0, 30.0]})
    b = pd.DataFrame({"day": [4, 2, 3], "value": [4.0, 2.0, 3.0]})
    merged = merge_by_day([("a", a), ("b", b)])
    assert merged["day"].tolist() == [1, 2, 3, 4]
    assert merged.loc[0, "a"] == 10.0 and np.isnan(merged.loc[0, "b"])
    assert merged.loc[3, "b"] == 4.0 and np.isnan(merged.loc[3, "a"])
    assert merged.loc[1, ["a", "b"]].tolist() == [20.0, 2.0]


def test_merge_by_day_missing_series_is_absent():
    a = pd.DataFrame({"day": [1], "value": [1.0]})
    merged = merge_by_day([("a", a), ("b", None)])
    assert merged.columns.tolist() == ["day", "a", "b"]
    assert merged["b"].isna().all()
    assert merge_by_day([]).empty


def test_share_by_age_rows_sum_to_one_or_zero():
    rows = pd.DataFrame({
        "day_mean": [0, 1],
        "covid_symptomatic_child_mean": [3.0, 0.0],
        "covid_symptomatic_adult_mean": [1.0, 0.0],
    })
    shares = share_by_age(rows, "covid", "symptomatic")
    assert shares.loc[0, "child"] == 0.75
    assert shares.loc[0, AGES].sum() == 1.0
    assert shares.loc[1, AGES].sum() == 0.0


def test_column_accessor_treats_non_numeric_as_absent():
    rows = pd.DataFrame({column_name("covid", "infections", "adult", "mean"): ["3", "x", None]})
    values = column_values(rows, "covid", "infections", "adult")
    assert values.iloc[0] == 3.0
    assert values.iloc[1:].isna().all()
    assert column_values(rows, "covid", "infections", "child").isna().all()


def test_infinite_values_count_as_absent():
    rows = pd.DataFrame({
        "day_mean": [0.0, 1.0, np.inf],
        "covid_symptomatic_child_mean": [np.inf, 5.0, 9.0],
        "covid_symptomatic_child_p2_5": [-np.inf, 4.0, 8.0],
        "covid_symptomatic_child_p97_5": [np.inf, 6.0, 10.0],
    })
    assert max_value(rows, "covid", "symptomatic") == 100
    assert summary_stats(rows, "covid", "symptomatic") == SummaryStats(peak=5, total=5, avg=5)
    band = build_ci_band(rows, "covid", "symptomatic")
    assert band["day"].tolist() == [1, 2]
    assert np.isfinite(band[["mean", "lower", "upper"]].to_numpy()).all()
    assert band.iloc[0][["mean", "lower", "upper"]].tolist() == [0.0, 0.0, 0.0]


def test_latest_week_by_age_ignores_infinite_cells():
    weekly = pd.DataFrame({
        "week_mean": [0.0, np.inf],
        "covid_hospitalized_child_weekly_mean": [np.inf, 1.0],
        "covid_hospitalized_child_weekly_ci_lower": [np.inf, 0.5],
        "covid_hospitalized_child_weekly_ci_upper": [3.0, 2.0],
    })
    latest = latest_week_by_age(weekly, "covid").set_index("age")
    child = latest.loc["child"]
    assert (child["mean"], child["error_minus"], child["error_plus"]) == (0.0, 0.0, 3.0)
    assert not latest[["mean", "error_minus", "error_plus"]].isna().any().any()
    assert build_weekly_hospital_series(weekly, "covid")["week"].tolist() == [1]


def test_merge_by_day_later_series_replaces_same_name():
    first = pd.DataFrame({"day": [1, 2], "value": [1.0, 2.0]})
    other = pd.DataFrame({"day": [2], "value": [5.0]})
    second = pd.DataFrame({"day": [2, 3], "value": [20.0, 30.0]})
    merged = merge_by_day([("a", first), ("b", other), ("a", second)])
    assert merged.columns.tolist() == ["day", "a", "b"]
    assert merged["day"].tolist() == [2, 3]
    assert merged["a"].tolist() == [20.0, 30.0]
    assert merged.loc[0, "b"] == 5.0 and np.isnan(merged.loc[1, "b"])
