"""Runtime settings, read from the environment.

- ``STOREFRONT_DATA_DIR``: where the JSON data files live
- ``STOREFRONT_LOG_LEVEL``: stdlib level name, default WARNING
- ``STOREFRONT_LOG_FORMAT``: ``console`` (default) or ``json``
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

LOG_FORMATS = ("console", "json")


@dataclass(frozen=True)
class Settings:

    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    log_format: str = "console"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        data_dir = env.get("STOREFRONT_DATA_DIR")
        log_level = env.get("STOREFRONT_LOG_LEVEL", cls.log_level).upper()
        log_format = env.get("STOREFRONT_LOG_FORMAT", cls.log_format).lower()
        if log_format not in LOG_FORMATS:
            raise ValueError(
                f"STOREFRONT_LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, "
                f"got {log_format!r}"
            )

        return cls(
            data_dir=Path(data_dir).expanduser() if data_dir else DEFAULT_DATA_DIR,
            log_level=log_level,
            log_format=log_format,
        )
