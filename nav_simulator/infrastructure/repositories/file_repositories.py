"""File-backed repositories for fund NAV histories."""
from __future__ import annotations

import json
import logging
from io import BytesIO
from pathlib import Path
from typing import Any

import pandas as pd

from nav_simulator.domain.models import FundDetails, FundMeta
from nav_simulator.domain.repositories import FundDetailsRepository
from nav_simulator.infrastructure.parsing.feed import parse_feed
from nav_simulator.infrastructure.parsing.utils import ensure_bytes

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = (".xlsx", ".xlsm")


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def meta_from_mapping(raw: dict[str, Any]) -> FundMeta:
    code = raw.get("scheme_code")
    try:
        scheme_code = int(code) if code is not None else None
    except (TypeError, ValueError):
        scheme_code = None
    return FundMeta(
        scheme_code=scheme_code,
        scheme_name=str(raw.get("scheme_name") or "").strip(),
        fund_house=str(raw.get("fund_house") or "").strip(),
        scheme_type=str(raw.get("scheme_type") or "").strip(),
        scheme_category=str(raw.get("scheme_category") or "").strip(),
        isin_growth=_optional_str(raw.get("isin_growth")),
        isin_div_reinvestment=_optional_str(raw.get("isin_div_reinvestment")),
    )


class JsonFundDetailsRepository(FundDetailsRepository):
    """Reads an mfapi-style ``{meta, data, status}`` fund details document."""

    def __init__(self, source: BytesIO | Path | bytes) -> None:
        self._source = ensure_bytes(source)

    def load_fund_details(self) -> FundDetails:
        try:
            document = json.loads(self._source.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ValueError(f"Fund details document is not valid JSON: {exc}") from exc
        if not isinstance(document, dict):
            raise ValueError("Fund details document must be a JSON object")
        rows = document.get("data")
        if not isinstance(rows, list):
            raise ValueError("Fund details document has no 'data' list")
        meta = meta_from_mapping(document.get("meta") or {})
        parsed = parse_feed(rows)
        logger.info("Loaded %d NAV records for %s", len(parsed.records), meta.scheme_name or "unnamed fund")
        return FundDetails(meta=meta, records=parsed.records, rejected=parsed.rejected)


def read_tabular_raw(source: BytesIO, filename: str) -> pd.DataFrame:
    if filename.lower().endswith(EXCEL_SUFFIXES):
        return pd.read_excel(source, engine="openpyxl", dtype=str, keep_default_na=False)
    return pd.read_csv(source, dtype=str, keep_default_na=False)


def normalize_tabular(df: pd.DataFrame) -> pd.DataFrame:
    work = df.copy()
    work.columns = [str(col).strip().lower() for col in work.columns]
    if "date" not in work.columns or not ({"nav", "value"} & set(work.columns)):
        raise ValueError("NAV sheet needs a 'date' column and a 'nav' or 'value' column")
    return work


class TabularValuationRepository(FundDetailsRepository):
    """Reads a two-column ``date``/``nav`` export from Excel or CSV."""

    def __init__(self, source: BytesIO | Path | bytes, filename: str | None = None) -> None:
        if filename is None:
            filename = source.name if isinstance(source, Path) else "upload.csv"
        self._source = ensure_bytes(source)
        self._filename = filename

    def load_fund_details(self) -> FundDetails:
        normalized = normalize_tabular(read_tabular_raw(BytesIO(self._source), self._filename))
        parsed = parse_feed(normalized.to_dict(orient="records"))
        meta = FundMeta(scheme_code=None, scheme_name=Path(self._filename).stem)
        logger.info("Loaded %d NAV records from %s", len(parsed.records), self._filename)
        return FundDetails(meta=meta, records=parsed.records, rejected=parsed.rejected)


def repository_for(source: BytesIO | Path | bytes, filename: str | None = None) -> FundDetailsRepository:
    name = filename or (source.name if isinstance(source, Path) else "")
    if name.lower().endswith(".json"):
        return JsonFundDetailsRepository(source)
    return TabularValuationRepository(source, filename=name or None)
