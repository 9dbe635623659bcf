"""Chronologically ordered, immutable view over NAV records."""
from __future__ import annotations

from bisect import bisect_left
from collections import defaultdict
from datetime import date
from typing import Iterable, Iterator, Sequence

from .models import ValuationRecord


class ValuationSeries:
    """NAV records sorted ascending by date.

    Sorting is stable, so records sharing a date keep their input order and
    the first of them is the one every lookup returns.
    """

    __slots__ = ("_records", "_dates")

    def __init__(self, records: Iterable[ValuationRecord] = ()) -> None:
        ordered = tuple(sorted(records, key=lambda record: record.nav_date))
        self._records: tuple[ValuationRecord, ...] = ordered
        self._dates: tuple[date, ...] = tuple(record.nav_date for record in ordered)

    @property
    def records(self) -> Sequence[ValuationRecord]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ValuationRecord]:
        return iter(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def __repr__(self) -> str:
        if not self._records:
            return "ValuationSeries([])"
        return f"ValuationSeries({len(self)} records, {self._dates[0]} .. {self._dates[-1]})"

    def _first_on(self, nav_date: date) -> ValuationRecord:
        return self._records[bisect_left(self._dates, nav_date)]

    def nearest(self, target: date) -> ValuationRecord | None:
        """Record closest to ``target``; the earlier date wins a tie."""
        if not self._records:
            return None
        idx = bisect_left(self._dates, target)
        if idx == 0:
            return self._records[0]
        before = self._first_on(self._dates[idx - 1])
        if idx == len(self._records):
            return before
        after = self._records[idx]
        if (target - before.nav_date) <= (after.nav_date - target):
            return before
        return after

    def latest(self) -> ValuationRecord | None:
        if not self._records:
            return None
        return self._first_on(self._dates[-1])

    def earliest(self) -> ValuationRecord | None:
        if not self._records:
            return None
        return self._records[0]

    def since(self, cutoff: date) -> Sequence[ValuationRecord]:
        return self._records[bisect_left(self._dates, cutoff):]

    def months_by_year(self) -> dict[int, list[int]]:
        """Calendar months with at least one NAV, keyed by year."""
        months: dict[int, set[int]] = defaultdict(set)
        for nav_date in self._dates:
            months[nav_date.year].add(nav_date.month)
        return {year: sorted(months[year]) for year in sorted(months)}
