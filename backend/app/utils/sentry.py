"""Optional Sentry error reporting for the score tracker API."""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

logger = logging.getLogger(__name__)

SERVICE_NAME = "finding-friends-tracker"


def _sample_rate(env_var: str) -> float:
    raw = (os.getenv(env_var) or "").strip()
    if not raw:
        return 0.0
    try:
        rate = float(raw)
    except ValueError:
        logger.warning("%s is not a number (got %r); sampling disabled", env_var, raw)
        return 0.0
    if not 0.0 <= rate <= 1.0:
        logger.warning("%s must be between 0 and 1 (got %s); sampling disabled", env_var, rate)
        return 0.0
    return rate


def sentry_options() -> dict:
    return {
        "dsn": os.getenv("SENTRY_DSN"),
        "environment": (os.getenv("SENTRY_ENVIRONMENT") or "").strip() or None,
        "traces_sample_rate": _sample_rate("SENTRY_TRACES_SAMPLE_RATE"),
        "profiles_sample_rate": _sample_rate("SENTRY_PROFILES_SAMPLE_RATE"),
        "integrations": [FastApiIntegration()],
    }


def init_sentry() -> bool:
    """Start Sentry when ``SENTRY_DSN`` is set; return whether it was started."""
    if not os.getenv("SENTRY_DSN"):
        logger.info("SENTRY_DSN not set; error reporting disabled")
        return False

    options = sentry_options()
    sentry_sdk.init(**options)
    sentry_sdk.set_tag("service", SERVICE_NAME)
    logger.info("Sentry enabled (environment=%s)", options["environment"] or "default")
    return True
