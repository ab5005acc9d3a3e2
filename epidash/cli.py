from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable

from epidash.columns import DISEASES
from epidash.paths import default_data_dir
from epidash.resolve import resolve_scenario
from epidash.selection import ExclusivityController
from epidash.series import summary_stats
from epidash.ui.data import load_all, scenario_identifiers
from epidash.catalog import build_catalog


def _parse_setting(text: str) -> tuple[str, str]:
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"Expected id=value, got {text!r}")
    key, value = text.split("=", 1)
    return key.strip(), value.strip()


def _catalog(data_dir: Path):
    return build_catalog(scenario_identifiers(data_dir), data_dir=data_dir)


def cmd_catalog(args: argparse.Namespace) -> int:
    for d in _catalog(args.data_dir).ordered():
        print(f"{d.key:<20} {d.kind:<17} {d.label}")
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    controller = ExclusivityController(exclusive=not args.no_exclusivity)
    for param_id, value in args.set or []:
        try:
            controller.set_parameter(param_id, value)
        except (KeyError, ValueError) as exc:
            logging.getLogger(__name__).error("Invalid setting %s=%s: %s", param_id, value, exc)
            return 2
    key = resolve_scenario(controller.state, _catalog(args.data_dir), controller.parameters.values())
    print(", ".join(f"{k}={v}" for k, v in controller.state.items()))
    print(key if key is not None else "<no scenario>")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    loaded = load_all(args.data_dir)
    for d in loaded.catalog.ordered():
        rows = loaded.store.rows(d.key)
        if rows is None:
            continue
        stats = summary_stats(rows, args.disease, args.metric)
        print(f"{d.short_label:<22} peak={stats.peak:<8} total={stats.total:<10} avg={stats.avg}")
    if loaded.errors:
        print("Some datasets did not load: " + " · ".join(loaded.errors))
        return 1
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect school disease simulation scenarios.")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory with dynamics_df_*.csv / weekly_hosp_df_*.csv exports (defaults to detected location).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_cat = sub.add_parser("catalog", help="List scenarios in display order.")
    p_cat.set_defaults(func=cmd_catalog)

    p_res = sub.add_parser("resolve", help="Resolve parameter settings to a scenario key.")
    p_res.add_argument("--set", action="append", type=_parse_setting, metavar="ID=VALUE",
                       help="Parameter setting, applied in order (e.g. covidTesting=high).")
    p_res.add_argument("--no-exclusivity", action="store_true",
                       help="Apply settings without resetting other intervention groups.")
    p_res.set_defaults(func=cmd_resolve)

    p_sum = sub.add_parser("summary", help="Load all scenarios and print peak/total/average.")
    p_sum.add_argument("--disease", default="covid", choices=DISEASES)
    p_sum.add_argument("--metric", default="symptomatic")
    p_sum.set_defaults(func=cmd_summary)

    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(level=getattr(logging, args.log_level.upper()))

    if args.data_dir is None:
        args.data_dir = default_data_dir()
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
