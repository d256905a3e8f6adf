from __future__ import annotations

import argparse
import json
import logging
import sys

from .analysis.frequency import FrequencyCheck, run_frequency_check
from .core import feature_flags
from .sampling.item_selector import pick, pick_multi_slice, pick_multiple, pick_multiple_multi_slice
from .ui.presenters import RichPresenter

logger = logging.getLogger(__name__)


def _parse_int_list(raw: str) -> tuple[int, ...]:
    try:
        return tuple(int(item) for item in raw.split(",") if item.strip())
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer list '{raw}'") from exc


def _parse_items(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--weights", type=_parse_int_list, required=True, help="Comma-separated non-negative weights")
    # If omitted, runs with a random seed. Pass an int to reproduce.
    p.add_argument("--seed", type=int, default=None, help="RNG seed (random if omitted)")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="randompick", description="Weighted random selection")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--features",
        type=str,
        default=None,
        help=f"Comma-separated feature flags to enable ({', '.join(sorted(feature_flags.KNOWN_FLAGS))})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log sampler diagnostics to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Measure observed frequencies against the weights")
    _add_common_args(check)
    check.add_argument("--high", type=int, default=None, help="Index range size (default: number of weights)")
    check.add_argument("--draws", type=int, default=1_000_000, help="Number of draws")
    check.add_argument("--tolerance", type=float, default=0.025, help="Allowed relative error per bucket")
    check.add_argument("--json", action="store_true", help="Print the report as JSON")

    pick_cmd = sub.add_parser("pick", help="Pick items by weight")
    _add_common_args(pick_cmd)
    pick_cmd.add_argument(
        "--items",
        type=_parse_items,
        action="append",
        required=True,
        help="Comma-separated items; repeat to pick across several groups",
    )
    pick_cmd.add_argument("--count", type=int, default=1, help="Number of picks (at least 1)")
    return parser


def _run_check(args: argparse.Namespace, presenter: RichPresenter) -> int:
    check = FrequencyCheck(
        weights=args.weights,
        high=args.high,
        draws=args.draws,
        seed=args.seed,
        tolerance=args.tolerance,
    )
    report = run_frequency_check(check)
    if args.json:
        json.dump(report.as_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        presenter.show_report(report)
    return 0 if report.within_tolerance else 1


def _run_pick(args: argparse.Namespace, presenter: RichPresenter) -> int:
    groups: list[list[str]] = args.items
    if args.count < 1:
        raise ValueError("count must be >= 1")
    if len(groups) == 1:
        items = groups[0]
        if args.count == 1:
            chosen = pick(items, args.weights, args.seed)
            picks = [] if chosen is None else [chosen]
        else:
            picks = pick_multiple(items, args.weights, args.count, args.seed)
    else:
        if args.count == 1:
            chosen = pick_multi_slice(groups, args.weights, args.seed)
            picks = [] if chosen is None else [chosen]
        else:
            picks = pick_multiple_multi_slice(groups, args.weights, args.count, args.seed)
    presenter.show_picks(picks)
    return 0 if picks else 1


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    presenter = RichPresenter(no_color=args.no_color)

    enable = [flag for flag in (args.features or "").split(",") if flag.strip()]
    try:
        with feature_flags.override(enable=enable):
            logger.debug("Enabled feature flags: %s", ", ".join(feature_flags.enabled_flags()) or "none")
            if args.command == "check":
                return _run_check(args, presenter)
            return _run_pick(args, presenter)
    except ValueError as exc:
        parser.error(str(exc))
    return 2  # pragma: no cover - parser.error exits


if __name__ == "__main__":
    raise SystemExit(main())
