"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_PROVIDER = "spirit"
DEFAULT_INTERVAL = 30.0
DEFAULT_TIMEOUT = 8.0
DEFAULT_CACHE_PATH = Path("~/.cache/inflight/cache.json")

DEVELOPMENT_ENVIRONMENTS = frozenset({"development", "dev", "local", "demo"})


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    value = env.get(name, "").strip()
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}") from None
    if parsed <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return parsed


@dataclass
class TrackerConfig:
    """Settings for a tracker session."""

    provider_id: str = DEFAULT_PROVIDER
    interval: float = DEFAULT_INTERVAL
    timeout: float = DEFAULT_TIMEOUT
    cache_path: Optional[Path] = DEFAULT_CACHE_PATH
    environment: str = "production"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TrackerConfig":
        """
        Build config from INFLIGHT_* environment variables.
        An empty INFLIGHT_CACHE_FILE disables the on-disk cache.
        """
        env = os.environ if environ is None else environ
        cache_value = env.get("INFLIGHT_CACHE_FILE")
        if cache_value is None:
            cache_path: Optional[Path] = DEFAULT_CACHE_PATH
        elif cache_value.strip():
            cache_path = Path(cache_value.strip())
        else:
            cache_path = None
        return cls(
            provider_id=env.get("INFLIGHT_PROVIDER", "").strip().lower() or DEFAULT_PROVIDER,
            interval=_float_env(env, "INFLIGHT_REFRESH_INTERVAL", DEFAULT_INTERVAL),
            timeout=_float_env(env, "INFLIGHT_TIMEOUT", DEFAULT_TIMEOUT),
            cache_path=cache_path,
            environment=env.get("INFLIGHT_ENV", "").strip().lower() or "production",
        )

    def is_development_mode(self) -> bool:
        """Non-production contexts may fall back to demo data."""
        return self.environment.lower() in DEVELOPMENT_ENVIRONMENTS
