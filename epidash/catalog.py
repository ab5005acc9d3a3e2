from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Iterator, Optional

from .paths import DYNAMICS_PREFIX, WEEKLY_HOSP_PREFIX

BASELINE = "baseline"
CONTACT_REDUCTION = "contactReduction"
TESTING = "testing"
UNKNOWN = "unknown"
CSV_SUFFIX = ".csv"

KIND_ORDER = {BASELINE: 0, CONTACT_REDUCTION: 1, TESTING: 2, UNKNOWN: 3}

DISEASE_NAMES = {"covid": "COVID-19", "flu": "Influenza"}
DISEASE_SHORT = {"covid": "COVID", "flu": "Flu"}

_PALETTE = {
    BASELINE: ["#0ea5e9"],
    CONTACT_REDUCTION: ["#10b981", "#059669", "#047857"],
    TESTING: ["#f97316", "#ea580c", "#c2410c", "#6366f1", "#4f46e5", "#4338ca"],
    UNKNOWN: ["#94a3b8"],
}


@dataclass(frozen=True)
class ParsedIdentifier:
    kind: str
    raw: str
    percent: Optional[int] = None
    disease: Optional[str] = None


@dataclass(frozen=True)
class TestingSpec:
    disease: Optional[str] = None
    percent: Optional[int] = None


@dataclass(frozen=True)
class DisplayMeta:
    label: str
    short_label: str
    badge: str
    color: str


@dataclass(frozen=True)
class ScenarioDescriptor:
    key: str
    kind: str
    display: DisplayMeta
    dynamics_source: str
    weekly_hosp_source: Optional[str] = None
    contact_reduction_percent: Optional[int] = None
    testing: TestingSpec = field(default_factory=TestingSpec)

    @property
    def label(self) -> str:
        return self.display.label

    @property
    def short_label(self) -> str:
        return self.display.short_label


def _strip(identifier: str) -> str:
    # identifiers may arrive as paths or URLs; only the stem is matched
    name = PurePosixPath(identifier.replace("\\", "/")).name
    if name.lower().endswith(CSV_SUFFIX):
        name = name[: -len(CSV_SUFFIX)]
    return name


# Ordered (pattern, builder) table: first match wins.
_PATTERNS: list[tuple[re.Pattern[str], Callable[[re.Match[str], str], ParsedIdentifier]]] = [
    (
        re.compile(r"^dynamics_df_base$"),
        lambda m, raw: ParsedIdentifier(BASELINE, raw),
    ),
    (
        re.compile(r"^dynamics_df_contact_(\d+)$"),
        lambda m, raw: ParsedIdentifier(CONTACT_REDUCTION, raw, percent=int(m.group(1))),
    ),
    (
        re.compile(r"^dynamics_df_test_(covid|flu)_(\d+)$"),
        lambda m, raw: ParsedIdentifier(TESTING, raw, percent=int(m.group(2)), disease=m.group(1)),
    ),
]


def parse_identifier(identifier: str) -> ParsedIdentifier:
    """Classify one result-set identifier; unrecognised names become ``unknown``."""
    stem = _strip(identifier)
    for pattern, build in _PATTERNS:
        m = pattern.match(stem)
        if m:
            return build(m, identifier)
    logging.getLogger(__name__).debug("Unrecognised scenario identifier %r", identifier)
    return ParsedIdentifier(UNKNOWN, identifier)


def derive_key(identifier: str) -> str:
    stem = _strip(identifier)
    if stem.startswith(DYNAMICS_PREFIX) and len(stem) > len(DYNAMICS_PREFIX):
        return stem[len(DYNAMICS_PREFIX):]
    return stem


def _display_meta(parsed: ParsedIdentifier, color: str) -> DisplayMeta:
    if parsed.kind == BASELINE:
        return DisplayMeta("Baseline (No Additional Mitigations)", "Baseline", "Base", color)
    if parsed.kind == CONTACT_REDUCTION:
        return DisplayMeta(
            f"Contact Reduction {parsed.percent}% at School",
            f"Contact -{parsed.percent}%",
            "Contact",
            color,
        )
    if parsed.kind == TESTING:
        name = DISEASE_NAMES.get(parsed.disease or "", str(parsed.disease))
        short = DISEASE_SHORT.get(parsed.disease or "", str(parsed.disease))
        return DisplayMeta(
            f"{name} Testing {parsed.percent}% of Students Daily",
            f"{short} Testing {parsed.percent}%",
            "Test",
            color,
        )
    return DisplayMeta(parsed.raw, parsed.raw, "?", color)


def _sources(identifier: str, key: str, data_dir: Optional[Path | str]) -> tuple[str, Optional[str]]:
    stem = _strip(identifier)
    name = PurePosixPath(identifier.replace("\\", "/")).name
    filename = name if name.lower().endswith(CSV_SUFFIX) else f"{name}{CSV_SUFFIX}"
    # weekly exports only exist alongside files following the dynamics naming
    weekly_name = f"{WEEKLY_HOSP_PREFIX}{key}.csv" if stem.startswith(DYNAMICS_PREFIX) else None
    if data_dir is not None:
        base = Path(data_dir)
        weekly = str(base / weekly_name) if weekly_name else None
        return str(base / filename), weekly
    # keep URLs intact: join on the identifier's own directory prefix
    norm = identifier.replace("\\", "/")
    prefix = norm.rsplit("/", 1)[0] + "/" if "/" in norm else ""
    weekly = f"{prefix}{weekly_name}" if weekly_name else None
    return f"{prefix}{filename}", weekly


def describe(identifier: str, data_dir: Optional[Path | str] = None, color_index: int = 0) -> ScenarioDescriptor:
    parsed = parse_identifier(identifier)
    key = derive_key(identifier)
    palette = _PALETTE[parsed.kind]
    display = _display_meta(parsed, palette[color_index % len(palette)])
    dynamics, weekly = _sources(identifier, key, data_dir)
    return ScenarioDescriptor(
        key=key,
        kind=parsed.kind,
        display=display,
        dynamics_source=dynamics,
        weekly_hosp_source=weekly,
        contact_reduction_percent=parsed.percent if parsed.kind == CONTACT_REDUCTION else None,
        testing=TestingSpec(parsed.disease, parsed.percent) if parsed.kind == TESTING else TestingSpec(),
    )


class ScenarioCatalog:
    """Immutable key -> ScenarioDescriptor mapping in catalog (input) order."""

    def __init__(self, descriptors: Iterable[ScenarioDescriptor]):
        entries: dict[str, ScenarioDescriptor] = {}
        for d in descriptors:
            if d.key in entries:
                logging.getLogger(__name__).warning(
                    "Duplicate scenario key %r (%s replaces %s)", d.key, d.label, entries[d.key].label
                )
                # last seen wins but keeps its new position
                del entries[d.key]
            entries[d.key] = d
        self._entries = entries
        self._ordered = tuple(
            sorted(entries.values(), key=lambda d: (KIND_ORDER.get(d.kind, len(KIND_ORDER)), d.label))
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScenarioDescriptor]:
        return iter(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[str]:
        return list(self._entries)

    def get(self, key: Optional[str]) -> Optional[ScenarioDescriptor]:
        if key is None:
            return None
        return self._entries.get(key)

    def ordered(self) -> list[ScenarioDescriptor]:
        """Display order: baseline, contact reduction, testing, unknown; ties by label."""
        return list(self._ordered)

    def baseline(self) -> Optional[ScenarioDescriptor]:
        for d in self._entries.values():
            if d.kind == BASELINE:
                return d
        return None

    def of_kind(self, kind: str) -> list[ScenarioDescriptor]:
        return [d for d in self._entries.values() if d.kind == kind]


def build_catalog(identifiers: Iterable[str], data_dir: Optional[Path | str] = None) -> ScenarioCatalog:
    counters: dict[str, int] = {}
    descriptors = []
    for ident in identifiers:
        kind = parse_identifier(ident).kind
        idx = counters.get(kind, 0)
        counters[kind] = idx + 1
        descriptors.append(describe(ident, data_dir, color_index=idx))
    return ScenarioCatalog(descriptors)


__all__ = [
    "BASELINE",
    "CONTACT_REDUCTION",
    "TESTING",
    "UNKNOWN",
    "ParsedIdentifier",
    "TestingSpec",
    "DisplayMeta",
    "ScenarioDescriptor",
    "ScenarioCatalog",
    "parse_identifier",
    "derive_key",
    "describe",
    "build_catalog",
]
