"""Environment-driven settings."""

import logging
import os

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, expected a number; using %s", name, raw, default)
        return default


DEFAULT_LOCALE = (os.getenv("AUDIT_DEFAULT_LOCALE") or "en").strip().lower()

# Per-collaborator timeout for signal and benchmark providers, in seconds
PROVIDER_TIMEOUT = _env_float("AUDIT_PROVIDER_TIMEOUT", 60.0)

LOG_LEVEL = (os.getenv("AUDIT_LOG_LEVEL") or "WARNING").strip().upper()
