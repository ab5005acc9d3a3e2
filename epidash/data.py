from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Optional

import pandas as pd

from .catalog import ScenarioCatalog, ScenarioDescriptor


class SourceLoadError(RuntimeError):
    """A tabular source could not be fetched or parsed."""


def read_table(source: str) -> pd.DataFrame:
    """Fetch and parse one CSV export (local path or URL).

    Numeric columns are auto-detected by pandas; rows whose cells are all
    blank are dropped.
    """
    is_url = "://" in source
    if not is_url and not os.path.exists(source):
        raise SourceLoadError(f"Unable to load {source}")
    try:
        df = pd.read_csv(source)
    except Exception as exc:
        raise SourceLoadError(f"Unable to load {source}: {exc}") from exc
    if df.empty:
        return df
    # whitespace-only strings count as blank, like empty cells
    blank = df.apply(lambda s: s.isna() | s.astype(str).str.strip().eq(""))
    return df[~blank.all(axis=1)].reset_index(drop=True)


@dataclass
class ScenarioLoad:
    key: str
    dynamics: Optional[pd.DataFrame] = None
    weekly: Optional[pd.DataFrame] = None
    error: Optional[str] = None


def load_scenario(descriptor: ScenarioDescriptor) -> ScenarioLoad:
    """Load one scenario; failures are reported on the result, never raised."""
    log = logging.getLogger(__name__)
    try:
        dynamics = read_table(descriptor.dynamics_source)
    except SourceLoadError as exc:
        log.warning("Scenario %s excluded: %s", descriptor.key, exc)
        return ScenarioLoad(descriptor.key, error=f"{descriptor.short_label}: {exc}")

    weekly = None
    if descriptor.weekly_hosp_source:
        try:
            weekly = read_table(descriptor.weekly_hosp_source)
        except SourceLoadError as exc:
            log.info("No weekly hospitalization data for %s (%s)", descriptor.key, exc)
    return ScenarioLoad(descriptor.key, dynamics=dynamics, weekly=weekly)


class ScenarioStore:
    """Rows per scenario key, populated only by :meth:`load`."""

    def __init__(self) -> None:
        self.dynamics: dict[str, pd.DataFrame] = {}
        self.weekly: dict[str, Optional[pd.DataFrame]] = {}
        self.errors: list[str] = []
        self.loading = False

    def load(self, catalog: ScenarioCatalog, max_workers: int | None = None) -> "ScenarioStore":
        self.loading = True
        descriptors = list(catalog)
        dynamics: dict[str, pd.DataFrame] = {}
        weekly: dict[str, Optional[pd.DataFrame]] = {}
        errors: list[str] = []
        try:
            if descriptors:
                workers = max_workers or min(16, len(descriptors))
                with ThreadPoolExecutor(max_workers=workers) as pool:
                    results = list(pool.map(load_scenario, descriptors))
            else:
                results = []
            for res in results:
                if res.error is not None:
                    errors.append(res.error)
                    continue
                dynamics[res.key] = res.dynamics  # type: ignore[assignment]
                weekly[res.key] = res.weekly
            self.dynamics = dynamics
            self.weekly = weekly
            self.errors = errors
        finally:
            self.loading = False
        logging.getLogger(__name__).info(
            "Loaded %d/%d scenarios (%d errors)", len(dynamics), len(descriptors), len(errors)
        )
        return self

    def rows(self, key: Optional[str]) -> Optional[pd.DataFrame]:
        if key is None:
            return None
        return self.dynamics.get(key)

    def weekly_rows(self, key: Optional[str]) -> Optional[pd.DataFrame]:
        if key is None:
            return None
        return self.weekly.get(key)

    def available(self, keys: Iterable[str]) -> list[str]:
        """Keys with non-empty dynamics rows, in the given order."""
        return [k for k in keys if k in self.dynamics and not self.dynamics[k].empty]


__all__ = [
    "SourceLoadError",
    "ScenarioLoad",
    "ScenarioStore",
    "read_table",
    "load_scenario",
]
