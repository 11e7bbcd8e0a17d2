import logging

import pytest

from bordercross import cli
from bordercross.data import download
from tests.test_download import CSV_BYTES, FakeResponse


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)


def test_summary_prints_period_tables(dataset_csv, capsys):
    cli.main(["summary", "--csv", str(dataset_csv)])
    out = capsys.readouterr().out

    assert "Rows:   4" in out
    assert "=== US-Canada Border ===" in out
    assert "=== US-Mexico Border ===" in out
    assert "(no complete 4-year periods)" in out


def test_summary_single_border(dataset_csv, capsys):
    cli.main(["summary", "--csv", str(dataset_csv), "--border", "US-Mexico"])
    out = capsys.readouterr().out

    assert "US-Canada" not in out
    assert "Average Monthly" in out


def test_summary_reads_data_dir_from_env(dataset_csv, capsys, monkeypatch):
    monkeypatch.setenv("BORDERCROSS_DATA_DIR", str(dataset_csv.parent))
    cli.main(["summary"])
    assert str(dataset_csv) in capsys.readouterr().out


def test_unknown_border_exits(dataset_csv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["summary", "--csv", str(dataset_csv), "--border", "US-Atlantis"])
    assert excinfo.value.code == 1
    assert "US-Atlantis" in capsys.readouterr().err


def test_missing_dataset_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["summary", "--data-dir", str(tmp_path)])
    assert excinfo.value.code == 1
    assert "bordercross fetch" in capsys.readouterr().err


def test_empty_csv_exits(tmp_path, capsys):
    empty = tmp_path / "Border_Crossing_Entry_Data.csv"
    empty.write_bytes(b"")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["summary", "--csv", str(empty)])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "unreadable CSV" in err
    assert "Traceback" not in err


def test_verbose_prints_traceback(tmp_path, capsys):
    empty = tmp_path / "Border_Crossing_Entry_Data.csv"
    empty.write_bytes(b"")
    with pytest.raises(SystemExit):
        cli.main(["--verbose", "summary", "--csv", str(empty)])
    assert "Traceback" in capsys.readouterr().err


def test_csv_path_is_directory_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["summary", "--csv", str(tmp_path)])
    assert excinfo.value.code == 1


def test_report_writes_files(dataset_csv, tmp_path, capsys):
    out_dir = tmp_path / "out"
    cli.main(["report", "--csv", str(dataset_csv), "--output-dir", str(out_dir)])

    assert (out_dir / "period_summary.csv").exists()
    assert len(list(out_dir.glob("*.html"))) == 5
    assert "6/6 files written" in capsys.readouterr().out


def test_fetch_downloads_into_data_dir(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(
        download.requests, "get", lambda url, **kwargs: FakeResponse(CSV_BYTES)
    )
    cli.main(["fetch", "--data-dir", str(tmp_path), "--url", "https://example.org/download"])

    assert (tmp_path / "Border_Crossing_Entry_Data.csv").read_bytes() == CSV_BYTES
    assert "Dataset ready" in capsys.readouterr().out


def test_fetch_failure_exits(tmp_path, monkeypatch):
    monkeypatch.setattr(
        download.requests, "get", lambda url, **kwargs: FakeResponse(b"", status=500)
    )
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["fetch", "--data-dir", str(tmp_path), "--url", "https://example.org/x.csv"])
    assert excinfo.value.code == 1


def test_command_is_required():
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2
