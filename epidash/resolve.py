"""Map intervention parameter selections onto one precomputed scenario.

Priority (first match wins):
  1. COVID-19 testing non-default  -> testing scenario (covid, percent)
  2. Influenza testing non-default -> testing scenario (flu, percent)
  3. contact reduction at baseline -> baseline scenario
  4. contact reduction level       -> contact reduction scenario (percent)
  5. nothing matched               -> baseline scenario
  6. no baseline in the catalog    -> first scenario in display order

Single-disease testing is treated as more specific than contact reduction.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional

from .catalog import CONTACT_REDUCTION, TESTING, ScenarioCatalog
from .selection import (
    CONTACT_BASE,
    CONTACT_PARAMETER,
    COVID_TESTING_PARAMETER,
    DEFAULT_PARAMETERS,
    FLU_TESTING_PARAMETER,
    ParameterDefinition,
)

TESTING_PERCENT = {"low": 1, "medium": 5, "high": 10}
CONTACT_PERCENT = {"low": 10, "medium": 20, "high": 30}

# (parameter id, disease) in resolution priority
TESTING_PRIORITY = (
    (COVID_TESTING_PARAMETER, "covid"),
    (FLU_TESTING_PARAMETER, "flu"),
)


def match_testing(catalog: ScenarioCatalog, disease: str, option: str) -> Optional[str]:
    percent = TESTING_PERCENT.get(option)
    if percent is None:
        return None
    for d in catalog:
        if d.kind == TESTING and d.testing.disease == disease and d.testing.percent == percent:
            return d.key
    return None


def match_contact(catalog: ScenarioCatalog, option: str) -> Optional[str]:
    percent = CONTACT_PERCENT.get(option)
    if percent is None:
        return None
    for d in catalog:
        if d.kind == CONTACT_REDUCTION and d.contact_reduction_percent == percent:
            return d.key
    return None


def fallback_key(catalog: ScenarioCatalog) -> Optional[str]:
    base = catalog.baseline()
    if base is not None:
        return base.key
    ordered = catalog.ordered()
    return ordered[0].key if ordered else None


def resolve_scenario(
    selections: Mapping[str, str],
    catalog: ScenarioCatalog,
    parameters: Iterable[ParameterDefinition] = DEFAULT_PARAMETERS,
) -> Optional[str]:
    defaults = {p.id: p.default for p in parameters}

    for param_id, disease in TESTING_PRIORITY:
        value = selections.get(param_id, defaults.get(param_id))
        if value is not None and value != defaults.get(param_id):
            key = match_testing(catalog, disease, value)
            break
    else:
        contact = selections.get(CONTACT_PARAMETER, defaults.get(CONTACT_PARAMETER, CONTACT_BASE))
        if contact == CONTACT_BASE:
            return fallback_key(catalog)
        key = match_contact(catalog, contact)

    if key is not None:
        return key
    logging.getLogger(__name__).debug("No scenario for selections %s; using baseline", dict(selections))
    return fallback_key(catalog)


__all__ = [
    "TESTING_PERCENT",
    "CONTACT_PERCENT",
    "match_testing",
    "match_contact",
    "fallback_key",
    "resolve_scenario",
]
