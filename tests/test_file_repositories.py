import json
from datetime import date
from decimal import Decimal
from pathlib import Path

import pandas as pd
import pytest

from nav_simulator.infrastructure.repositories.file_repositories import (
    JsonFundDetailsRepository,
    TabularValuationRepository,
    repository_for,
)


def make_document() -> dict:
    return {
        "meta": {
            "fund_house": "Example AMC",
            "scheme_type": "Open Ended Schemes",
            "scheme_category": "Equity Scheme - Large Cap Fund",
            "scheme_code": "119551",
            "scheme_name": "Example Bluechip Fund - Direct Growth",
            "isin_growth": "INF000000001",
            "isin_div_reinvestment": None,
        },
        "data": [
            {"date": "02-01-2024", "nav": "52.1034"},
            {"date": "01-01-2024", "nav": "51.8800"},
            {"date": "29-12-2023", "nav": "-"},
        ],
        "status": "SUCCESS",
    }


def test_json_repository_parses_meta_and_records():
    repo = JsonFundDetailsRepository(json.dumps(make_document()).encode("utf-8"))

    details = repo.load_fund_details()

    assert details.meta.scheme_code == 119551
    assert details.meta.scheme_name == "Example Bluechip Fund - Direct Growth"
    assert details.meta.isin_div_reinvestment is None
    assert [r.nav_date for r in details.records] == [date(2024, 1, 2), date(2024, 1, 1)]
    assert len(details.rejected) == 1


def test_json_repository_rejects_unreadable_documents():
    with pytest.raises(ValueError):
        JsonFundDetailsRepository(b"{not json").load_fund_details()
    with pytest.raises(ValueError):
        JsonFundDetailsRepository(b"[]").load_fund_details()
    with pytest.raises(ValueError):
        JsonFundDetailsRepository(b'{"meta": {}}').load_fund_details()


def test_csv_repository(tmp_path: Path):
    path = tmp_path / "bluechip.csv"
    path.write_text("Date,NAV\n01-01-2024,10.5\n02-01-2024,bad\n03-01-2024,10.7\n", encoding="utf-8")

    details = TabularValuationRepository(path).load_fund_details()

    assert details.meta.scheme_name == "bluechip"
    assert [r.value for r in details.records] == [Decimal("10.5"), Decimal("10.7")]
    assert len(details.rejected) == 1


def test_excel_repository(tmp_path: Path):
    path = tmp_path / "navs.xlsx"
    pd.DataFrame({"date": ["01-01-2024", "02-01-2024"], "nav": ["10.5", "10.6"]}).to_excel(path, index=False)

    details = TabularValuationRepository(path).load_fund_details()

    assert [r.nav_date for r in details.records] == [date(2024, 1, 1), date(2024, 1, 2)]


def test_tabular_repository_requires_date_and_nav_columns(tmp_path: Path):
    path = tmp_path / "wrong.csv"
    path.write_text("when,price\n01-01-2024,10\n", encoding="utf-8")

    with pytest.raises(ValueError):
        TabularValuationRepository(path).load_fund_details()


def test_repository_for_picks_by_extension(tmp_path: Path):
    path = tmp_path / "fund.json"
    path.write_text(json.dumps(make_document()), encoding="utf-8")

    assert isinstance(repository_for(path), JsonFundDetailsRepository)
    assert isinstance(repository_for(b"date,nav\n", filename="navs.csv"), TabularValuationRepository)
