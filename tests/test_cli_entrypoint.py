from __future__ import annotations

import importlib
import json
from pathlib import Path
from uuid import uuid4

import pytest


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("rooster_ranch.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_balance_and_market_commands_persist(monkeypatch, tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from rooster_ranch import main
    from rooster_ranch.config import Settings

    monkeypatch.setattr(main, "settings", Settings(data_dir=tmp_path, schematics_dir=tmp_path / "schematics"))
    runner = typer_testing.CliRunner()
    owner = str(uuid4())

    topped_up = runner.invoke(main.app, ["balance", owner, "--deposit", "10"], catch_exceptions=False)
    assert topped_up.exit_code == 0

    bought = runner.invoke(main.app, ["market", "buy", owner, "bread"], catch_exceptions=False)
    assert bought.exit_code == 0
    assert "Purchased bread" in bought.stdout

    economy = json.loads((tmp_path / "economy.json").read_text(encoding="utf-8"))
    assert economy == {owner: 6.0}

    broke = runner.invoke(main.app, ["market", "buy", owner, "cow_spawn_egg"], catch_exceptions=False)
    assert broke.exit_code == 1
    assert "insufficient-funds" in broke.stdout


def test_farm_create_without_schematic_fails_cleanly(monkeypatch, tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from rooster_ranch import main
    from rooster_ranch.config import Settings

    monkeypatch.setattr(main, "settings", Settings(data_dir=tmp_path, schematics_dir=tmp_path / "schematics"))
    result = typer_testing.CliRunner().invoke(main.app, ["farm", str(uuid4()), "create"], catch_exceptions=False)

    assert result.exit_code == 1
    assert "unavailable" in result.stdout


def test_balance_deposit_keeps_a_broken_economy_file(monkeypatch, tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from rooster_ranch import main
    from rooster_ranch.config import Settings

    monkeypatch.setattr(main, "settings", Settings(data_dir=tmp_path, schematics_dir=tmp_path / "schematics"))
    broken = '{"' + str(uuid4()) + '": 5000.0,}'
    (tmp_path / "economy.json").write_text(broken, encoding="utf-8")

    runner = typer_testing.CliRunner()
    result = runner.invoke(main.app, ["balance", str(uuid4()), "--deposit", "1"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "not saved" in result.stdout
    assert (tmp_path / "economy.json").read_text(encoding="utf-8") == broken


def test_balance_rejects_nan_deposit(monkeypatch, tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from rooster_ranch import main
    from rooster_ranch.config import Settings

    monkeypatch.setattr(main, "settings", Settings(data_dir=tmp_path, schematics_dir=tmp_path / "schematics"))
    owner = str(uuid4())
    runner = typer_testing.CliRunner()
    runner.invoke(main.app, ["balance", owner, "--deposit", "10"], catch_exceptions=False)

    result = runner.invoke(main.app, ["balance", owner, "--deposit", "nan"], catch_exceptions=False)

    assert result.exit_code == 0
    assert json.loads((tmp_path / "economy.json").read_text(encoding="utf-8")) == {owner: 10.0}
