"""Runtime settings, read from environment variables."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


ENV_PREFIX = "DRIVER_OUTLINE_"


@dataclass(frozen=True)
class OutlineSettings:
    """Tunables for one outline run."""
    concurrency: int = 8                        # Files outlined at once
    max_passes: int = 15                        # Convergence pass ceiling
    pass_delay: float = 0.5                     # Seconds between passes
    retry_delays: tuple[float, ...] = (0.1, 0.3, 0.6)  # Backoff on empty results
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OutlineSettings":
        """Build settings from ``DRIVER_OUTLINE_*`` variables.

        Unset variables keep their defaults. Malformed values raise
        ``ValueError`` naming the offending variable.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        concurrency = _read(env, "CONCURRENCY", int, defaults.concurrency)
        if concurrency < 1:
            raise ValueError(f"{ENV_PREFIX}CONCURRENCY must be at least 1")

        max_passes = _read(env, "MAX_PASSES", int, defaults.max_passes)
        if max_passes < 1:
            raise ValueError(f"{ENV_PREFIX}MAX_PASSES must be at least 1")

        pass_delay = _read(env, "PASS_DELAY", float, defaults.pass_delay)
        retry_delays = _read(env, "RETRY_DELAYS", _parse_delays, defaults.retry_delays)
        if pass_delay < 0 or any(d < 0 for d in retry_delays):
            raise ValueError(f"{ENV_PREFIX}PASS_DELAY and {ENV_PREFIX}RETRY_DELAYS must not be negative")

        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).upper()

        return cls(
            concurrency=concurrency,
            max_passes=max_passes,
            pass_delay=pass_delay,
            retry_delays=retry_delays,
            log_level=log_level,
        )


def _parse_delays(value: str) -> tuple[float, ...]:
    """Parse comma-separated seconds such as ``"0.1, 0.3,0.6"``."""
    return tuple(float(part) for part in value.split(",") if part.strip())


def _read(env: Mapping[str, str], name: str, convert, default):
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None or raw.strip() == "":
        return default
    try:
        return convert(raw.strip())
    except ValueError as e:
        raise ValueError(f"Invalid {ENV_PREFIX}{name}={raw!r}: {e}") from e
