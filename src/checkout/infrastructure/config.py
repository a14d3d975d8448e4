"""Runtime settings, read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "INFO"
    log_file: Path | None = None
    low_stock_threshold: int = 10
    critical_stock_threshold: int = 5
    async_notifications: bool = False

    @staticmethod
    def from_env() -> Settings:
        log_file = os.environ.get("CHECKOUT_LOG_FILE")
        return Settings(
            data_dir=Path(os.environ.get("CHECKOUT_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            log_level=os.environ.get("CHECKOUT_LOG_LEVEL", "INFO").upper(),
            log_file=Path(log_file) if log_file else None,
            low_stock_threshold=_env_int("CHECKOUT_LOW_STOCK_THRESHOLD", 10),
            critical_stock_threshold=_env_int("CHECKOUT_CRITICAL_STOCK_THRESHOLD", 5),
            async_notifications=_env_bool("CHECKOUT_ASYNC_NOTIFICATIONS", False),
        )
