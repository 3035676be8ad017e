"""Environment-driven settings for the planner entry points."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

EXPORT_DIR_ENV = "MORTGAGE_EXPORT_DIR"
COST_OF_CAPITAL_RATE_ENV = "MORTGAGE_COST_OF_CAPITAL_RATE"
LOG_LEVEL_ENV = "MORTGAGE_LOG_LEVEL"
LOG_FILE_ENV = "MORTGAGE_LOG_FILE"


@dataclass(frozen=True)
class Settings:
    export_dir: Path
    cost_of_capital_rate: float | None
    log_level: str
    log_file: Path | None


def _read_rate(name: str) -> float | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return None
    if value < 0:
        logger.warning("Ignoring %s=%r: must be >= 0", name, raw)
        return None
    return value


def _read_log_level(name: str) -> str:
    raw = (os.getenv(name) or "INFO").strip().upper()
    if raw not in logging.getLevelNamesMapping():
        logger.warning("Unknown log level %r in %s; using INFO", raw, name)
        return "INFO"
    return raw


def load_settings() -> Settings:
    return Settings(
        export_dir=Path(os.getenv(EXPORT_DIR_ENV) or "."),
        cost_of_capital_rate=_read_rate(COST_OF_CAPITAL_RATE_ENV),
        log_level=_read_log_level(LOG_LEVEL_ENV),
        log_file=Path(os.environ[LOG_FILE_ENV]) if os.getenv(LOG_FILE_ENV) else None,
    )
