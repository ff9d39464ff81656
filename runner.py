"""Boundary crossing runner: per-case solve, multi-case loop and CLI."""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from analysis import crossing_is_valid
from io_cases import CaseFormatError, format_result, load_cases, parse_cases
from io_unified_csv import CsvFormatError, load_unified_csv
from models import CrossingResult, SearchConfig, TestCase
from pair_search import find_crossing
from validation import apply_meta_to_config, validate_case

logger = logging.getLogger(__name__)


def solve_case(case: TestCase, cfg: Optional[SearchConfig] = None) -> Optional[CrossingResult]:
    """Validate one case and search it for a crossing."""

    cfg = cfg or SearchConfig()
    validate_case(case, cfg)
    result = find_crossing(case.p, case.r, cfg)
    logger.info(
        "%s: |P|=%d |R|=%d -> %s",
        case.label or "case",
        len(case.p),
        len(case.r),
        format_result(result),
    )
    return result


def run_cases(
    cases: Iterable[TestCase],
    cfg: Optional[SearchConfig] = None,
    *,
    verify: bool = False,
) -> List[str]:
    """Solve every case independently and return the output lines."""

    cfg = cfg or SearchConfig()
    lines: List[str] = []
    for case in cases:
        # fresh config per case so no state leaks between cases
        result = solve_case(case, replace(cfg))
        if verify and result is not None and not crossing_is_valid(result, case.p, case.r):
            raise RuntimeError(
                f"{case.label or 'case'}: reported crossing {result.format()} failed verification"
            )
        lines.append(format_result(result))
    return lines


def _parse_overrides(pairs: Sequence[str]) -> dict:
    overrides = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected key=value, got {pair!r}")
        overrides[key.strip()] = value.strip()
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find a segment of one survey point set crossing the other set's convex hull."
    )
    parser.add_argument("input", nargs="?", help="input file (default: stdin)")
    parser.add_argument(
        "--csv", action="store_true", help="input is a single unified sectioned CSV"
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for the random offsets")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="override a search setting, e.g. random_offsets=20",
    )
    parser.add_argument(
        "--verify", action="store_true", help="re-check every reported crossing"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None, stdin=None, stdout=None) -> int:
    args = build_parser().parse_args(argv)
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = SearchConfig()
    try:
        if args.csv:
            if not args.input:
                raise CsvFormatError("--csv requires an input path.")
            meta, case = load_unified_csv(args.input)
            cfg = apply_meta_to_config(meta, cfg)
            cases = [case]
        elif args.input:
            cases = load_cases(args.input)
        else:
            cases = parse_cases(stdin.read())
        if args.seed is not None:
            cfg.seed = args.seed
        cfg = apply_meta_to_config(_parse_overrides(args.overrides), cfg)
        lines = run_cases(cases, cfg, verify=args.verify)
    except (CaseFormatError, CsvFormatError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    for line in lines:
        stdout.write(line + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
