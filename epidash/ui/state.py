from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from epidash.catalog import ScenarioCatalog
from epidash.data import ScenarioStore

__all__ = [
    "LoadedScenarios",
    "ViewControls",
]

@dataclass
class LoadedScenarios:
    catalog: ScenarioCatalog
    store: ScenarioStore
    data_dir: str

    @property
    def errors(self) -> list[str]:
        return self.store.errors

@dataclass
class ViewControls:
    disease: str
    view: str
    metric: str
    mode: str
    resolved_key: Optional[str]
    scenario_keys: list[str] = field(default_factory=list)
    hospital_age: str = "child"
