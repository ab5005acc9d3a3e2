"""Column naming convention of the simulation exports.

Every value column is named ``{disease}_{metric}_{age}_{statistic}``; all
string formatting of column names goes through :func:`column_name`.
"""

from __future__ import annotations

import math

import numpy as np
import pandas as pd

DISEASES = ["covid", "flu", "rsv"]
AGES = ["infant", "preschool", "child", "adult", "senior"]
METRICS = ["infections", "symptomatic", "recovered", "hospitalized", "new_hospitalizations"]

STAT_MEAN = "mean"
STAT_LOWER = "p2_5"
STAT_UPPER = "p97_5"
STAT_CI_LOWER = "ci_lower"
STAT_CI_UPPER = "ci_upper"
WEEKLY_MEAN = "weekly_mean"
WEEKLY_LOWER = "weekly_ci_lower"
WEEKLY_UPPER = "weekly_ci_upper"

DAY_COLUMN = "day_mean"
WEEK_COLUMN = "week_mean"


def column_name(disease: str, metric: str, age: str, statistic: str = STAT_MEAN) -> str:
    return f"{disease}_{metric}_{age}_{statistic}"


def column_values(
    frame: pd.DataFrame | None,
    disease: str,
    metric: str,
    age: str,
    statistic: str = STAT_MEAN,
) -> pd.Series:
    """Numeric values of one column, NaN where missing, non-numeric or infinite.

    A column absent from ``frame`` yields an all-NaN Series aligned to its index.
    """
    if frame is None:
        return pd.Series(dtype=float)
    col = column_name(disease, metric, age, statistic)
    if col not in frame.columns:
        return pd.Series(np.nan, index=frame.index, dtype=float)
    values = pd.to_numeric(frame[col], errors="coerce").astype(float)
    return values.replace([np.inf, -np.inf], np.nan)


def first_available(
    frame: pd.DataFrame | None,
    disease: str,
    metric: str,
    age: str,
    statistics: tuple[str, ...],
) -> pd.Series:
    """Values of the first statistic in ``statistics`` present as a column."""
    if frame is not None:
        for stat in statistics:
            if column_name(disease, metric, age, stat) in frame.columns:
                return column_values(frame, disease, metric, age, stat)
    return column_values(frame, disease, metric, age, statistics[-1])


def round_half_up(value: float) -> int:
    # builtin round() is banker's rounding; chart values round .5 upward
    return int(math.floor(float(value) + 0.5))


def age_label(age: str) -> str:
    return age[:1].upper() + age[1:]


__all__ = [
    "DISEASES",
    "AGES",
    "METRICS",
    "STAT_MEAN",
    "STAT_LOWER",
    "STAT_UPPER",
    "STAT_CI_LOWER",
    "STAT_CI_UPPER",
    "WEEKLY_MEAN",
    "WEEKLY_LOWER",
    "WEEKLY_UPPER",
    "DAY_COLUMN",
    "WEEK_COLUMN",
    "column_name",
    "column_values",
    "first_available",
    "round_half_up",
    "age_label",
]
