"""Chart-ready series derived from simulation rows.

All functions take the raw DataFrame of one scenario (or ``None``) plus the
(disease, metric, age) coordinates and return new DataFrames sorted by
``day`` / ``week``. Missing or non-numeric cells count as 0 in aggregates;
absent or empty input yields an empty frame (zeroed stats), never an error.

Days are presented 1-indexed: ``round(day_mean) + 1``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from .columns import (
    AGES,
    DAY_COLUMN,
    STAT_CI_LOWER,
    STAT_CI_UPPER,
    STAT_LOWER,
    STAT_MEAN,
    STAT_UPPER,
    WEEK_COLUMN,
    WEEKLY_LOWER,
    WEEKLY_MEAN,
    WEEKLY_UPPER,
    age_label,
    column_values,
    first_available,
    round_half_up,
)

DAY_OFFSET = 1
MIN_AXIS_MAX = 100
AXIS_HEADROOM = 1.10
HOSPITAL_METRIC = "hospitalized"


@dataclass(frozen=True)
class SummaryStats:
    peak: int = 0
    total: int = 0
    avg: int = 0


def _is_empty(rows: Optional[pd.DataFrame]) -> bool:
    return rows is None or rows.empty


def _dated(rows: Optional[pd.DataFrame]) -> tuple[pd.DataFrame, np.ndarray]:
    """Rows with a numeric day indicator and their 1-indexed day numbers."""
    if _is_empty(rows) or DAY_COLUMN not in rows.columns:  # type: ignore[union-attr]
        return pd.DataFrame(), np.array([], dtype=int)
    raw = pd.to_numeric(rows[DAY_COLUMN], errors="coerce")  # type: ignore[index]
    valid = raw.notna() & np.isfinite(raw)
    days = np.floor(raw[valid].to_numpy(dtype=float) + 0.5).astype(int) + DAY_OFFSET
    return rows[valid], days  # type: ignore[index]


def _by_day(data: dict, sort_col: str = "day") -> pd.DataFrame:
    out = pd.DataFrame(data)
    return out.sort_values(sort_col, kind="stable").reset_index(drop=True)


def _age_matrix(rows: pd.DataFrame, disease: str, metric: str, statistic: str = STAT_MEAN) -> pd.DataFrame:
    return pd.DataFrame({age: column_values(rows, disease, metric, age, statistic) for age in AGES})


def prepare_time_series(rows: Optional[pd.DataFrame], disease: str, metric: str) -> pd.DataFrame:
    """``day`` plus one column per age group (missing values -> 0)."""
    frame, days = _dated(rows)
    if frame.empty:
        return pd.DataFrame(columns=["day", *AGES])
    data: dict = {"day": days}
    for age in AGES:
        data[age] = column_values(frame, disease, metric, age).fillna(0.0).to_numpy()
    return _by_day(data)


def share_by_age(rows: Optional[pd.DataFrame], disease: str, metric: str) -> pd.DataFrame:
    """Per-day fraction contributed by each age group; days with no cases are all 0."""
    ts = prepare_time_series(rows, disease, metric)
    if ts.empty:
        return ts
    values = ts[AGES].astype(float)
    total = values.sum(axis=1)
    shares = values.div(total.where(total != 0), axis=0).fillna(0.0)
    return pd.concat([ts[["day"]], shares], axis=1)


def max_value(rows: Optional[pd.DataFrame], disease: str, metric: str) -> int:
    """Y-axis upper bound: 110% of the largest value, never below 100."""
    if _is_empty(rows):
        return MIN_AXIS_MAX
    values = _age_matrix(rows, disease, metric).fillna(0.0).to_numpy()  # type: ignore[arg-type]
    if values.size == 0:
        return MIN_AXIS_MAX
    peak = float(values.max())
    return max(MIN_AXIS_MAX, int(math.ceil(peak * AXIS_HEADROOM)))


def summary_stats(rows: Optional[pd.DataFrame], disease: str, metric: str) -> SummaryStats:
    """Peak, total and average over every (row, age group) value present."""
    if _is_empty(rows):
        return SummaryStats()
    matrix = _age_matrix(rows, disease, metric)  # type: ignore[arg-type]
    count = int(matrix.notna().to_numpy().sum())
    if count == 0:
        return SummaryStats()
    values = matrix.fillna(0.0).to_numpy()
    peak = max(0.0, float(values.max()))
    total = float(values.sum())
    return SummaryStats(
        peak=round_half_up(peak),
        total=round_half_up(total),
        avg=round_half_up(total / count),
    )


def build_ci_band(rows: Optional[pd.DataFrame], disease: str, metric: str) -> pd.DataFrame:
    """Cross-age sums of the mean, 2.5% and 97.5% columns per day.

    The bounds are summed as they are, not combined statistically.
    """
    frame, days = _dated(rows)
    if frame.empty:
        return pd.DataFrame(columns=["day", "mean", "lower", "upper"])
    return _by_day({
        "day": days,
        "mean": _age_matrix(frame, disease, metric, STAT_MEAN).fillna(0.0).sum(axis=1).to_numpy(),
        "lower": _age_matrix(frame, disease, metric, STAT_LOWER).fillna(0.0).sum(axis=1).to_numpy(),
        "upper": _age_matrix(frame, disease, metric, STAT_UPPER).fillna(0.0).sum(axis=1).to_numpy(),
    })


def build_age_series(rows: Optional[pd.DataFrame], disease: str, metric: str, age: str) -> pd.DataFrame:
    frame, days = _dated(rows)
    if frame.empty:
        return pd.DataFrame(columns=["day", "value"])
    return _by_day({
        "day": days,
        "value": column_values(frame, disease, metric, age).fillna(0.0).to_numpy(),
    })


def build_daily_hospital_series(
    rows: Optional[pd.DataFrame],
    disease: str,
    age: str,
    metric: str = HOSPITAL_METRIC,
) -> pd.DataFrame:
    """Mean and bounds of one age group's hospitalization columns per day."""
    frame, days = _dated(rows)
    if frame.empty:
        return pd.DataFrame(columns=["day", "mean", "lower", "upper"])
    lower = first_available(frame, disease, metric, age, (STAT_LOWER, STAT_CI_LOWER))
    upper = first_available(frame, disease, metric, age, (STAT_UPPER, STAT_CI_UPPER))
    return _by_day({
        "day": days,
        "mean": column_values(frame, disease, metric, age, STAT_MEAN).fillna(0.0).to_numpy(),
        "lower": lower.fillna(0.0).to_numpy(),
        "upper": upper.fillna(0.0).to_numpy(),
    })


def _weekly(rows: Optional[pd.DataFrame]) -> pd.DataFrame:
    """Weekly rows in week order with a 1-indexed ``week`` column.

    Without a ``week_mean`` column the file order defines the weeks.
    """
    if _is_empty(rows):
        return pd.DataFrame()
    out = rows.reset_index(drop=True).copy()  # type: ignore[union-attr]
    if WEEK_COLUMN in out.columns:
        raw = pd.to_numeric(out[WEEK_COLUMN], errors="coerce")
        valid = raw.notna() & np.isfinite(raw)
        out = out[valid].copy()
        out["week"] = np.floor(raw[valid].to_numpy(dtype=float) + 0.5).astype(int) + DAY_OFFSET
        return out.sort_values("week", kind="stable").reset_index(drop=True)
    out["week"] = np.arange(1, len(out) + 1)
    return out


def build_weekly_hospital_series(rows: Optional[pd.DataFrame], disease: str) -> pd.DataFrame:
    """Weekly hospitalizations summed across age groups."""
    weekly = _weekly(rows)
    if weekly.empty:
        return pd.DataFrame(columns=["week", "mean", "lower", "upper"])
    return pd.DataFrame({
        "week": weekly["week"].to_numpy(),
        "mean": _age_matrix(weekly, disease, HOSPITAL_METRIC, WEEKLY_MEAN).fillna(0.0).sum(axis=1).to_numpy(),
        "lower": _age_matrix(weekly, disease, HOSPITAL_METRIC, WEEKLY_LOWER).fillna(0.0).sum(axis=1).to_numpy(),
        "upper": _age_matrix(weekly, disease, HOSPITAL_METRIC, WEEKLY_UPPER).fillna(0.0).sum(axis=1).to_numpy(),
    })


def latest_week_by_age(rows: Optional[pd.DataFrame], disease: str) -> pd.DataFrame:
    """Most recent week per age group with asymmetric error magnitudes (>= 0)."""
    weekly = _weekly(rows)
    columns = ["age", "label", "mean", "lower", "upper", "error_minus", "error_plus"]
    if weekly.empty:
        return pd.DataFrame(columns=columns)
    latest = weekly.tail(1)
    records = []
    for age in AGES:
        mean = float(column_values(latest, disease, HOSPITAL_METRIC, age, WEEKLY_MEAN).fillna(0.0).iloc[0])
        lower = float(column_values(latest, disease, HOSPITAL_METRIC, age, WEEKLY_LOWER).fillna(0.0).iloc[0])
        upper = float(column_values(latest, disease, HOSPITAL_METRIC, age, WEEKLY_UPPER).fillna(0.0).iloc[0])
        records.append({
            "age": age,
            "label": age_label(age),
            "mean": mean,
            "lower": lower,
            "upper": upper,
            "error_minus": max(mean - lower, 0.0),
            "error_plus": max(upper - mean, 0.0),
        })
    return pd.DataFrame(records, columns=columns)


def merge_by_day(series: Iterable[tuple[str, Optional[pd.DataFrame]]]) -> pd.DataFrame:
    """Outer-join named ``day``/``value`` series into one row per day.

    A series without a given day leaves NaN (absent, not 0) in its column.
    When two series share a name the later one replaces the earlier.
    """
    parts: dict[str, Optional[pd.DataFrame]] = {}
    for name, frame in series:
        if _is_empty(frame) or "day" not in frame.columns:  # type: ignore[union-attr]
            parts[name] = None
            continue
        parts[name] = (
            frame[["day", "value"]]  # type: ignore[index]
            .drop_duplicates("day", keep="last")
            .rename(columns={"value": name})
        )
    names = list(parts)
    merged: Optional[pd.DataFrame] = None
    for part in parts.values():
        if part is None:
            continue
        merged = part if merged is None else merged.merge(part, on="day", how="outer")
    if merged is None:
        return pd.DataFrame(columns=["day", *names])
    for name in names:
        if name not in merged.columns:
            merged[name] = np.nan
    merged = merged[["day", *names]]
    return merged.sort_values("day", kind="stable").reset_index(drop=True)


__all__ = [
    "DAY_OFFSET",
    "SummaryStats",
    "prepare_time_series",
    "share_by_age",
    "max_value",
    "summary_stats",
    "build_ci_band",
    "build_age_series",
    "build_daily_hospital_series",
    "build_weekly_hospital_series",
    "latest_week_by_age",
    "merge_by_day",
]
