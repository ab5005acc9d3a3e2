from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from .state import LoadedScenarios
from epidash.catalog import build_catalog
from epidash.data import ScenarioStore
from epidash.paths import DEFAULT_IDENTIFIERS, default_data_dir, discover_identifiers


def scenario_identifiers(data_dir: Path) -> list[str]:
    found = discover_identifiers(data_dir)
    if found:
        return found
    logging.getLogger(__name__).info("No dynamics files under %s; using default scenario list", data_dir)
    return list(DEFAULT_IDENTIFIERS)


def load_all(data_dir: Optional[str | Path] = None) -> LoadedScenarios:
    base = Path(data_dir) if data_dir is not None else default_data_dir()
    catalog = build_catalog(scenario_identifiers(base), data_dir=base)
    store = ScenarioStore().load(catalog)
    return LoadedScenarios(catalog=catalog, store=store, data_dir=str(base))


def reload_all(loaded: LoadedScenarios) -> LoadedScenarios:
    """Re-discover scenario files and reload them into the existing store."""
    base = Path(loaded.data_dir)
    catalog = build_catalog(scenario_identifiers(base), data_dir=base)
    loaded.store.load(catalog)
    loaded.catalog = catalog
    return loaded


__all__ = ["load_all", "reload_all", "scenario_identifiers"]
