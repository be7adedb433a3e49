from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _resolve_from_root(root: Path, value: str) -> Path:
    candidate = Path(value)
    if candidate.is_absolute():
        return candidate
    return (root / candidate).resolve()


def find_project_root(start: Path | None = None) -> Path:
    cursor = (start or Path.cwd()).resolve()
    for candidate in [cursor, *cursor.parents]:
        if (candidate / "pyproject.toml").exists():
            return candidate
    raise RuntimeError("Could not find project root (missing pyproject.toml in parent chain).")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip() not in {"0", "false", "False", "no", ""}


@dataclass(frozen=True, slots=True)
class EngineSettings:
    timezone: str = "Asia/Jakarta"
    day_start: str = "09:00"
    day_end: str = "21:00"
    min_increment_seconds: int = 60
    max_increment_seconds: int = 300
    cash_rounding_step: int = 10_000
    currency_prefix: str = ""
    catalog_dir: Path | None = None
    log_level: str = "INFO"
    log_json: bool = True

    @classmethod
    def from_env(cls, start: Path | None = None) -> "EngineSettings":
        catalog_value = os.getenv("KASIR_CATALOG_DIR", "data/catalog")
        catalog_path = Path(catalog_value)
        if not catalog_path.is_absolute():
            catalog_path = _resolve_from_root(find_project_root(start), catalog_value)

        return cls(
            timezone=os.getenv("KASIR_TIMEZONE", "Asia/Jakarta"),
            day_start=os.getenv("KASIR_DAY_START", "09:00"),
            day_end=os.getenv("KASIR_DAY_END", "21:00"),
            min_increment_seconds=_env_int("KASIR_MIN_INCREMENT_SECONDS", 60),
            max_increment_seconds=_env_int("KASIR_MAX_INCREMENT_SECONDS", 300),
            cash_rounding_step=_env_int("KASIR_CASH_ROUNDING_STEP", 10_000),
            currency_prefix=os.getenv("KASIR_CURRENCY_PREFIX", ""),
            catalog_dir=catalog_path,
            log_level=os.getenv("KASIR_LOG_LEVEL", "INFO"),
            log_json=_env_flag("KASIR_LOG_JSON", True),
        )
