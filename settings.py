"""
settings.py — Runtime configuration
=====================================
Everything that changes between machines comes from the environment:

    RACE_PROVIDER_URL      maze/solver server root   (http://localhost:8081)
    RACE_REQUEST_TIMEOUT   seconds per provider call (unset = wait forever)
    RACE_HOST / RACE_PORT  where Flask listens       (127.0.0.1 / 5000)
    RACE_DEBUG             Flask debug mode          (false)
    RACE_LOG_LEVEL         logging level name        (INFO)

Visual constants are not here; see ui.canvas.CanvasConfig.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RaceSettings:
    provider_url:    str             = "http://localhost:8081"
    request_timeout: Optional[float] = None
    host:            str             = "127.0.0.1"
    port:            int             = 5000
    debug:           bool            = False
    log_level:       str             = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> RaceSettings:
    env = os.environ if environ is None else environ
    defaults = RaceSettings()

    timeout = env.get("RACE_REQUEST_TIMEOUT", "").strip()
    level = env.get("RACE_LOG_LEVEL", defaults.log_level).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"RACE_LOG_LEVEL: unknown level {level!r}")

    return RaceSettings(
        provider_url=env.get("RACE_PROVIDER_URL", defaults.provider_url).strip() or defaults.provider_url,
        request_timeout=_parse(float, "RACE_REQUEST_TIMEOUT", timeout) if timeout else None,
        host=env.get("RACE_HOST", defaults.host),
        port=_parse(int, "RACE_PORT", env.get("RACE_PORT", str(defaults.port))),
        debug=env.get("RACE_DEBUG", "").strip().lower() in _TRUE,
        log_level=level,
    )


def _parse(kind, name: str, raw: str):
    try:
        value = kind(raw)
    except ValueError:
        raise ValueError(f"{name}: expected {kind.__name__}, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name}: must be positive, got {raw!r}")
    return value
