"""Intervention parameter definitions and the mutual-exclusivity controller.

Parameters are partitioned into exclusivity groups. Changing any parameter
resets every parameter of the other groups to its default, so at most one
intervention family is active at a time. A controller built with
``exclusive=False`` applies plain updates (deployments without exclusivity).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

CONTACT_PARAMETER = "contactReduction"
COVID_TESTING_PARAMETER = "covidTesting"
FLU_TESTING_PARAMETER = "fluTesting"

CONTACT_BASE = "base"
TESTING_NONE = "none"

CONTACT_OPTIONS = (
    ("Baseline", CONTACT_BASE),
    ("Low", "low"),
    ("Medium", "medium"),
    ("High", "high"),
)
COVERAGE_OPTIONS = (
    ("None", TESTING_NONE),
    ("Low", "low"),
    ("Medium", "medium"),
    ("High", "high"),
)


@dataclass(frozen=True)
class ParameterDefinition:
    id: str
    label: str
    description: str
    options: tuple[tuple[str, str], ...]
    default: str
    group: Optional[str] = None

    @property
    def values(self) -> list[str]:
        return [v for _, v in self.options]

    def option_label(self, value: str) -> str:
        for label, v in self.options:
            if v == value:
                return label
        return value

    @property
    def exclusivity_group(self) -> str:
        return self.group or self.id


DEFAULT_PARAMETERS: tuple[ParameterDefinition, ...] = (
    ParameterDefinition(
        id=CONTACT_PARAMETER,
        label="School contact reduction",
        description="Reduction of contact rates at school",
        options=CONTACT_OPTIONS,
        default=CONTACT_BASE,
        group="contact",
    ),
    ParameterDefinition(
        id=COVID_TESTING_PARAMETER,
        label="COVID-19 testing",
        description="Proportion of students tested daily",
        options=COVERAGE_OPTIONS,
        default=TESTING_NONE,
        group="testing-covid",
    ),
    ParameterDefinition(
        id=FLU_TESTING_PARAMETER,
        label="Influenza testing",
        description="Proportion of students tested daily",
        options=COVERAGE_OPTIONS,
        default=TESTING_NONE,
        group="testing-flu",
    ),
)


def default_selections(parameters: Iterable[ParameterDefinition] = DEFAULT_PARAMETERS) -> dict[str, str]:
    return {p.id: p.default for p in parameters}


class ExclusivityController:
    """Single owner of the parameter selection state."""

    def __init__(self, parameters: Iterable[ParameterDefinition] = DEFAULT_PARAMETERS, exclusive: bool = True):
        self.parameters = {p.id: p for p in parameters}
        self.exclusive = exclusive
        self._state: Mapping[str, str] = MappingProxyType(default_selections(self.parameters.values()))

    @property
    def state(self) -> Mapping[str, str]:
        return self._state

    def set_parameter(self, param_id: str, value: str) -> Mapping[str, str]:
        if param_id not in self.parameters:
            raise KeyError(f"Unknown parameter {param_id!r}")
        definition = self.parameters[param_id]
        if value not in definition.values:
            raise ValueError(f"{value!r} is not an option of {param_id!r} ({definition.values})")

        new_state = dict(self._state)
        new_state[param_id] = value
        if self.exclusive:
            group = definition.exclusivity_group
            for other in self.parameters.values():
                if other.exclusivity_group != group:
                    new_state[other.id] = other.default
        # single swap: readers never observe a half-applied update
        self._state = MappingProxyType(new_state)
        return self._state

    def reset(self) -> Mapping[str, str]:
        self._state = MappingProxyType(default_selections(self.parameters.values()))
        return self._state

    def is_default(self, param_id: str) -> bool:
        return self._state[param_id] == self.parameters[param_id].default

    def active_groups(self) -> list[str]:
        groups: list[str] = []
        for p in self.parameters.values():
            if self._state[p.id] != p.default and p.exclusivity_group not in groups:
                groups.append(p.exclusivity_group)
        return groups


__all__ = [
    "CONTACT_PARAMETER",
    "COVID_TESTING_PARAMETER",
    "FLU_TESTING_PARAMETER",
    "CONTACT_BASE",
    "TESTING_NONE",
    "ParameterDefinition",
    "DEFAULT_PARAMETERS",
    "default_selections",
    "ExclusivityController",
]
