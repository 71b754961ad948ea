import logging

import pytest

from mdb2sqlite import mdb_to_sqlite
from mdb2sqlite.errors import OpenError
from mdb2sqlite.exporter import ExportReport
from mdb2sqlite.mdb_to_sqlite import main, parse_args
from mdb2sqlite.source import DEFAULT_DRIVER


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    def fake_export(source, target, driver):
        recorded.append((source, target, driver))
        return ExportReport({"T": 1})

    monkeypatch.setattr(mdb_to_sqlite, "export", fake_export)
    monkeypatch.setattr(mdb_to_sqlite, "setup_logging", lambda config, verbose: None)
    return recorded


def test_positional_arguments(calls, capsys):
    assert main(["legacy.mdb", "legacy.sqlite"]) == 0
    assert calls == [("legacy.mdb", "legacy.sqlite", DEFAULT_DRIVER)]
    assert "Export completed" in capsys.readouterr().out


def test_driver_option(calls):
    assert main(["legacy.mdb", "legacy.sqlite", "--driver", "MDBTools"]) == 0
    assert calls == [("legacy.mdb", "legacy.sqlite", "MDBTools")]


def test_config_option(calls, tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("source: {path: a.mdb}\ntarget: {path: a.sqlite}\n", encoding="utf-8")
    assert main(["--config", str(path)]) == 0
    assert calls == [("a.mdb", "a.sqlite", DEFAULT_DRIVER)]


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["only-source.mdb"],
        ["a.mdb", "b.sqlite", "c"],
        ["a.mdb", "b.sqlite", "--bogus"],
        ["--config", "missing.yml"],
    ],
)
def test_usage_errors(calls, capsys, argv):
    assert main(argv) == 2
    assert "Error:" in capsys.readouterr().err
    assert calls == []


def test_export_failure_exit_code(monkeypatch, capsys):
    def failing_export(source, target, driver):
        raise OpenError("Destination 'b.sqlite' is not empty (1 schema objects)", target)

    monkeypatch.setattr(mdb_to_sqlite, "export", failing_export)
    monkeypatch.setattr(mdb_to_sqlite, "setup_logging", lambda config, verbose: None)

    assert main(["a.mdb", "b.sqlite"]) == 1
    err = capsys.readouterr().err
    assert "not empty" in err


def test_parse_args_verbose():
    config, verbose = parse_args(["a.mdb", "b.sqlite", "-v"])
    assert verbose
    assert (config.source, config.target) == ("a.mdb", "b.sqlite")


def test_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(["--help"])
    assert exc.value.code == 0
    assert "Usage" in capsys.readouterr().out


def test_setup_logging_levels(monkeypatch):
    levels = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: levels.append(kw["level"]))
    config, _ = parse_args(["a.mdb", "b.sqlite"])
    mdb_to_sqlite.setup_logging(config, verbose=True)
    mdb_to_sqlite.setup_logging(config, verbose=False)
    config.log_level = "info"
    mdb_to_sqlite.setup_logging(config, verbose=False)
    assert levels == [logging.DEBUG, logging.WARNING, logging.INFO]


def test_config_with_scalar_sections(calls, capsys, tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("source: a.mdb\ntarget: b.sqlite\n", encoding="utf-8")
    assert main(["--config", str(path)]) == 2
    assert "must be a mapping" in capsys.readouterr().err
    assert calls == []
