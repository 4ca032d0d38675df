from __future__ import annotations

import importlib
import logging
import runpy
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

import riskrate_cli.__main__ as app_main
import riskrate_cli.cli as cli
from riskrate_cli import __version__
from riskrate_cli.exceptions import RiskRateError


def test_version_is_defined() -> None:
    assert __version__ == "0.1.0"


def test_cli_main_no_args_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    with patch("sys.argv", ["riskrate-cli"]):
        cli.main()
    captured = capsys.readouterr()
    assert "usage:" in captured.out.lower()


@pytest.mark.parametrize(
    "module_name",
    [
        "riskrate_cli.config",
        "riskrate_cli.client",
        "riskrate_cli.loader",
        "riskrate_cli.reports",
        "riskrate_cli.scoring",
        "riskrate_cli.exporters",
        "riskrate_cli.formatters",
        "riskrate_cli.models",
    ],
)
def test_scaffolding_modules_are_importable(module_name: str) -> None:
    assert importlib.import_module(module_name) is not None


def test_scoring_package_exports() -> None:
    scoring = importlib.import_module("riskrate_cli.scoring")
    for name in ("classify", "compute_residual", "score", "build_grid", "trend", "resolve_factor"):
        assert hasattr(scoring, name)


def test_main_calls_cli_main(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {"value": False}

    def fake_cli_main() -> None:
        called["value"] = True

    monkeypatch.setattr(app_main, "cli_main", fake_cli_main)
    app_main.main()
    assert called["value"] is True


def test_main_exits_on_riskrate_error(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def raise_riskrate_error() -> None:
        raise RiskRateError("boom")

    monkeypatch.setattr(app_main, "cli_main", raise_riskrate_error)

    with pytest.raises(SystemExit) as raised:
        app_main.main()

    captured = capsys.readouterr()
    assert raised.value.code == 1
    assert captured.err.strip() == "Error: boom"


def test_main_logs_traceback_at_debug(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def raise_riskrate_error() -> None:
        raise RiskRateError("boom")

    monkeypatch.setattr(app_main, "cli_main", raise_riskrate_error)

    with caplog.at_level(logging.DEBUG, logger="riskrate_cli"):
        with pytest.raises(SystemExit):
            app_main.main()

    record = caplog.records[-1]
    assert record.levelno == logging.DEBUG
    assert record.exc_info is not None
    assert record.exc_info[0] is RiskRateError


def test_main_exits_on_keyboard_interrupt(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def raise_keyboard_interrupt() -> None:
        raise KeyboardInterrupt

    monkeypatch.setattr(app_main, "cli_main", raise_keyboard_interrupt)

    with pytest.raises(SystemExit) as raised:
        app_main.main()

    captured = capsys.readouterr()
    assert raised.value.code == 130
    assert captured.out == "\n"
    assert captured.err == ""


def test_python_m_entrypoint_executes_main(monkeypatch: pytest.MonkeyPatch) -> None:
    call_count = {"value": 0}

    def fake_cli_main() -> None:
        call_count["value"] += 1

    monkeypatch.setattr(cli, "main", fake_cli_main)
    module_path = Path(app_main.__file__).resolve()
    runpy.run_path(str(module_path), run_name="__main__")
    assert call_count["value"] == 1


def test_python_m_riskrate_cli_smoke() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    completed = subprocess.run(
        [sys.executable, "-m", "riskrate_cli"],
        cwd=repo_root,
        capture_output=True,
        text=True,
        check=False,
    )
    assert completed.returncode == 0
    assert "usage:" in completed.stdout.lower()
