import json
from pathlib import Path

import pytest

from nav_simulator.cli import main


def write_feed(tmp_path: Path) -> Path:
    path = tmp_path / "fund.json"
    document = {
        "meta": {"scheme_code": 1, "scheme_name": "Example Fund"},
        "data": [
            {"date": "01-03-2023", "nav": "40"},
            {"date": "01-02-2023", "nav": "20"},
            {"date": "02-01-2023", "nav": "10"},
        ],
        "status": "SUCCESS",
    }
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_project_command(capsys):
    exit_code = main(["project", "--amount", "5000", "--years", "10", "--rate", "12"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Total invested: 600000.00" in out


def test_project_command_rejects_invalid_amount(capsys):
    exit_code = main(["project", "--amount", "0", "--years", "10", "--rate", "12"])

    assert exit_code == 2
    assert "Invalid amount" in capsys.readouterr().err


def test_history_command(tmp_path: Path, capsys):
    feed = write_feed(tmp_path)

    exit_code = main(["history", str(feed), "--amount", "100", "--from", "2023-01", "--as-of", "2023-03-05"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "Total invested: 300.00" in out
    assert "Current value: 700.00" in out


def test_returns_command(tmp_path: Path, capsys):
    feed = write_feed(tmp_path)

    exit_code = main(["returns", str(feed), "--as-of", "2023-03-05"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "ALL: +300.00%" in out


def test_history_rejects_malformed_as_of(tmp_path: Path, capsys):
    feed = write_feed(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main(["history", str(feed), "--amount", "100", "--from", "2023-01", "--as-of", "2023/03/05"])

    assert excinfo.value.code == 2
    assert "expected YYYY-MM-DD" in capsys.readouterr().err


def test_returns_with_unreadable_json_exits_with_error(tmp_path: Path, capsys):
    feed = tmp_path / "fund.json"
    feed.write_text("{not json", encoding="utf-8")

    exit_code = main(["returns", str(feed)])

    assert exit_code == 2
    assert "not valid JSON" in capsys.readouterr().err


def test_history_with_missing_feed_exits_with_error(tmp_path: Path, capsys):
    exit_code = main(["history", str(tmp_path / "missing.csv"), "--amount", "100", "--from", "2023-01"])

    assert exit_code == 2
    assert "could not read feed" in capsys.readouterr().err
