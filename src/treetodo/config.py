# src/treetodo/config.py

"""Settings loaded from environment variables (+ optional .env in the working directory).

Variables:
- TREETODO_LOG_LEVEL: console (stderr) logging level (default: WARNING)
- TREETODO_LOG_FILE: optional log file; when set, DEBUG records are written there
- TREETODO_DATA_FILE: todo JSON file (default: ~/.todo_cli.json)
- TODO_CLI_FILE: legacy name for TREETODO_DATA_FILE, used only when that is unset
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TREETODO"
DATA_FILE_NAME = ".todo_cli.json"

load_dotenv(find_dotenv(usecwd=True), override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_optional_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


def _home_dir() -> Path:
    try:
        return Path.home()
    except RuntimeError:
        return Path(".")


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Logging ----
    log_level: str
    log_file: Path | None

    # ---- Persistence ----
    data_file: Path

    @staticmethod
    def from_env() -> "Settings":
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        log_file = _env_optional_path(_k("LOG_FILE"))

        raw_data_file = _first_env(_k("DATA_FILE"), "TODO_CLI_FILE", default=None)
        data_file = (
            Path(raw_data_file).expanduser() if raw_data_file else _home_dir() / DATA_FILE_NAME
        )

        return Settings(
            log_level=log_level,
            log_file=log_file,
            data_file=data_file,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
