"""Path utilities and scenario file discovery.

 - project_root(): return repo root (directory containing this file's parent)
 - default_data_dir(): directory holding the simulation CSV exports
 - discover_identifiers(data_dir): dynamics_df_*.csv files found on disk

Environment variable overrides:
  EPIDASH_DATA_DIR  explicit data directory
  DATA_ROOT         repo-style root; data is read from DATA_ROOT/data
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

DYNAMICS_PREFIX = "dynamics_df_"
WEEKLY_HOSP_PREFIX = "weekly_hosp_df_"

# Result sets shipped with the dashboard; used when nothing is found on disk.
DEFAULT_IDENTIFIERS = [
    "dynamics_df_base",
    "dynamics_df_contact_10",
    "dynamics_df_contact_20",
    "dynamics_df_contact_30",
    "dynamics_df_test_covid_1",
    "dynamics_df_test_covid_5",
    "dynamics_df_test_covid_10",
    "dynamics_df_test_flu_1",
    "dynamics_df_test_flu_5",
    "dynamics_df_test_flu_10",
]


def project_root() -> Path:
    # Assume this file is at <root>/epidash/paths.py
    return Path(__file__).resolve().parent.parent


def default_data_dir() -> Path:
    env = os.environ.get("EPIDASH_DATA_DIR")
    if env:
        return Path(env).expanduser()
    root = os.environ.get("DATA_ROOT")
    if root:
        return Path(root).expanduser() / "data"
    return project_root() / "data"


def discover_identifiers(data_dir: Optional[Path | str] = None) -> list[str]:
    """Return sorted dynamics CSV paths under ``data_dir`` (may be empty)."""
    base = Path(data_dir) if data_dir is not None else default_data_dir()
    if not base.is_dir():
        return []
    return [str(p) for p in sorted(base.glob(f"{DYNAMICS_PREFIX}*.csv"))]


__all__ = [
    "DYNAMICS_PREFIX",
    "WEEKLY_HOSP_PREFIX",
    "DEFAULT_IDENTIFIERS",
    "project_root",
    "default_data_dir",
    "discover_identifiers",
]
