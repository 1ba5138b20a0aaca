from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .rules import MODES, SINGLE_MODE


@dataclass(frozen=True)
class Settings:
    mode: str = SINGLE_MODE
    tolerant_headers: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        mode = env.get("P75_SEARCH_MODE", SINGLE_MODE).strip().lower()
        if mode not in MODES:
            raise ValueError(f"P75_SEARCH_MODE must be one of {', '.join(MODES)}, got {mode!r}")

        tolerant = env.get("P75_SEARCH_TOLERANT_HEADERS", "1").strip().lower()
        return cls(
            mode=mode,
            tolerant_headers=tolerant not in ("0", "false", "no", "off"),
            log_level=env.get("P75_SEARCH_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
