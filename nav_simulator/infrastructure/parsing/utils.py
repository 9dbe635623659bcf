"""Shared parsing utilities for NAV feed ingestion."""
from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from io import BytesIO
from pathlib import Path


def ensure_bytes(source: BytesIO | Path | bytes) -> bytes:
    if isinstance(source, bytes):
        return source
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def parse_nav_date(value: object) -> date | None:
    """Parse a ``DD-MM-YYYY`` feed date; always day-month-year, never locale based."""
    if value is None:
        return None
    parts = str(value).strip().split("-")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        return None
    day, month, year = (int(part) for part in parts)
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_nav_value(value: object) -> Decimal | None:
    if value is None:
        return None
    s = str(value).strip()
    for ch in [",", " "]:
        s = s.replace(ch, "")
    if not s:
        return None
    try:
        result = Decimal(s)
    except InvalidOperation:
        return None
    if not result.is_finite() or result <= 0:
        return None
    return result
