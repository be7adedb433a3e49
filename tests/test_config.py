from pathlib import Path

import pytest

from kasir.config import EngineSettings, find_project_root
from kasir.logs import configure_logging


def test_from_env_reads_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n", encoding="utf-8")
    monkeypatch.setenv("KASIR_CASH_ROUNDING_STEP", "5000")
    monkeypatch.setenv("KASIR_DAY_START", "08:00")
    monkeypatch.setenv("KASIR_CATALOG_DIR", "catalog")
    monkeypatch.setenv("KASIR_LOG_JSON", "0")
    monkeypatch.delenv("KASIR_TIMEZONE", raising=False)

    settings = EngineSettings.from_env(tmp_path)

    assert settings.cash_rounding_step == 5000
    assert settings.day_start == "08:00"
    assert settings.timezone == "Asia/Jakarta"
    assert settings.catalog_dir == (tmp_path / "catalog").resolve()
    assert settings.log_json is False


def test_from_env_rejects_malformed_numbers(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    monkeypatch.setenv("KASIR_MAX_INCREMENT_SECONDS", "five minutes")

    with pytest.raises(ValueError, match="KASIR_MAX_INCREMENT_SECONDS"):
        EngineSettings.from_env(tmp_path)


def test_find_project_root_walks_up(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_project_root(nested) == tmp_path.resolve()


def test_configure_logging_rejects_unknown_level() -> None:
    configure_logging("debug", json=False)
    with pytest.raises(ValueError):
        configure_logging("chatty")
