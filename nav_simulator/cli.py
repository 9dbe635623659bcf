"""Command-line entrypoint for NAV investment simulations."""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path

from nav_simulator.application.dto import HistoricalRequest, InvestmentType, ProjectionRequest
from nav_simulator.application.use_cases import (
    ProjectFutureUseCase,
    SimulateHistoricalUseCase,
    TrailingReturnsUseCase,
    load_series,
)
from nav_simulator.errors import NavSimulatorError
from nav_simulator.infrastructure.repositories.file_repositories import repository_for

TYPES = [item.value for item in InvestmentType]


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}") from exc


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _year_month(value: str) -> tuple[int, int]:
    try:
        year, month = (int(part) for part in value.split("-"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}") from exc
    return year, month


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate mutual fund investments against NAV history")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    history = sub.add_parser("history", help="What if I had invested")
    history.add_argument("feed", type=Path, help="Path to a JSON, Excel or CSV NAV feed")
    history.add_argument("--type", choices=TYPES, default=InvestmentType.SIP.value)
    history.add_argument("--amount", type=_decimal, required=True)
    history.add_argument("--from", dest="start", type=_year_month, required=True, help="Start month (YYYY-MM)")
    history.add_argument("--step-up", type=_decimal, default=Decimal("0"))
    history.add_argument("--as-of", type=_iso_date, help="Override today's date (YYYY-MM-DD)")

    project = sub.add_parser("project", help="Project a hypothetical future investment")
    project.add_argument("--type", choices=TYPES, default=InvestmentType.SIP.value)
    project.add_argument("--amount", type=_decimal, required=True)
    project.add_argument("--years", type=int, required=True)
    project.add_argument("--rate", type=_decimal, required=True, help="Expected annual return percent")
    project.add_argument("--step-up", type=_decimal, default=Decimal("0"))

    returns = sub.add_parser("returns", help="Trailing returns for every look-back window")
    returns.add_argument("feed", type=Path)
    returns.add_argument("--as-of", type=_iso_date, help="Override today's date (YYYY-MM-DD)")
    return parser.parse_args(argv)


def _run_history(args: argparse.Namespace) -> None:
    series = load_series(repository_for(args.feed))
    year, month = args.start
    request = HistoricalRequest(
        investment_type=InvestmentType(args.type),
        amount=args.amount,
        start_year=year,
        start_month=month,
        step_up_percent=args.step_up,
        as_of=args.as_of,
    )
    result = SimulateHistoricalUseCase(series).execute(request)

    print("Historical Simulation")
    print("=====================")
    print(f"Total invested: {result.total_invested:.2f}")
    print(f"Current value: {result.current_value:.2f}")
    print(f"Total units: {result.total_units:.4f}")
    print(f"Returns: {result.returns:.2f} ({result.returns_percentage:.2f}%)")
    if result.yearly_breakdown:
        print("\nYear  Invested  Value  Returns%")
        for item in result.yearly_breakdown:
            print(
                f"{item.year}  {item.cumulative_invested:.2f}  "
                f"{item.value_at_year_end:.2f}  {item.returns_percent_at_year_end:.2f}"
            )


def _run_project(args: argparse.Namespace) -> None:
    request = ProjectionRequest(
        investment_type=InvestmentType(args.type),
        amount=args.amount,
        years=args.years,
        annual_return=args.rate,
        step_up_percent=args.step_up,
    )
    result = ProjectFutureUseCase().execute(request)

    print("Projection")
    print("==========")
    print(f"Total invested: {result.total_invested:.2f}")
    print(f"Future value: {result.future_value:.2f}")
    print(f"Returns: {result.returns:.2f} ({result.returns_percentage:.2f}%)")


def _run_returns(args: argparse.Namespace) -> None:
    series = load_series(repository_for(args.feed))
    print("Trailing Returns")
    print("================")
    for window, trailing in TrailingReturnsUseCase(series).execute(args.as_of).items():
        if trailing is None:
            print(f"{window.value}: n/a")
        else:
            sign = "+" if trailing.is_positive else ""
            print(f"{window.value}: {sign}{trailing.change_percent:.2f}%")


COMMANDS = {
    "history": _run_history,
    "project": _run_project,
    "returns": _run_returns,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        COMMANDS[args.command](args)
    except NavSimulatorError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except (ValueError, OSError) as exc:
        print(f"Error: could not read feed: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
