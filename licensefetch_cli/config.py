"""Runtime settings read from the environment."""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 10.0

ENV_BASE_URL = "LICENSEFETCH_BASE_URL"
ENV_TIMEOUT = "LICENSEFETCH_TIMEOUT"
ENV_TOKEN = "GITHUB_TOKEN"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    token: Optional[str] = None

    def with_base_url(self, base_url: Optional[str]) -> "Settings":
        if not base_url:
            return self
        return replace(self, base_url=base_url.rstrip("/"))


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", ENV_TIMEOUT, raw)
        return DEFAULT_TIMEOUT
    if not math.isfinite(value) or value <= 0:
        logger.warning("Ignoring %s=%r: must be a positive finite number", ENV_TIMEOUT, raw)
        return DEFAULT_TIMEOUT
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from environment variables, falling back to defaults."""
    env = os.environ if environ is None else environ
    base_url = env.get(ENV_BASE_URL, "").strip() or DEFAULT_BASE_URL
    raw_timeout = env.get(ENV_TIMEOUT, "").strip()
    timeout = _parse_timeout(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    token = env.get(ENV_TOKEN, "").strip() or None
    return Settings(base_url=base_url.rstrip("/"), timeout=timeout, token=token)
