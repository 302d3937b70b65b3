#!/usr/bin/env python3
"""Run the birthday email sweep once, outside the daily schedule."""

from __future__ import annotations

import argparse
import sys
from datetime import date


def parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD (got {value!r})") from exc


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--date",
        type=parse_date,
        metavar="YYYY-MM-DD",
        help="Pretend today is this date. Defaults to the local date.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    from app.services.scheduler import run_sweep_now

    report = run_sweep_now(today=args.date)
    print(
        f"{report.date_key}: {report.users_matched} matched, "
        f"{report.emails_sent} sent, {report.emails_failed} failed"
    )
    if report.error:
        print(report.error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
