"""Runtime settings, read once from the environment at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    environment: str = "development"
    log_level: str = "DEBUG"

    @property
    def database_file(self) -> Path:
        return self.data_dir / "catalog.json"

    @property
    def json_logs(self) -> bool:
        return self.environment in ("production", "staging")

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        environment = env.get("CATALOG_ENV", "development").lower()
        data_dir = env.get("CATALOG_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            environment=environment,
            log_level=env.get("CATALOG_LOG_LEVEL", _LEVELS_BY_ENV.get(environment, "INFO")).upper(),
        )
