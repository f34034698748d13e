# shifthours/core/sentry_config.py
"""
Sentry configuration for error tracking in production.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

logger = logging.getLogger(__name__)


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Only active when PRODUCTION=true and SENTRY_DSN is set.

    Returns:
        True if Sentry was initialized, False otherwise.
    """
    is_production = os.getenv("PRODUCTION", "false").lower() == "true"
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not is_production:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning("SENTRY_DSN not set. Error tracking disabled.")
        return False

    environment = os.getenv("SENTRY_ENVIRONMENT", "production")

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            traces_sample_rate=0.1,
            sample_rate=1.0,
            release=os.getenv("RELEASE_VERSION", "shift-hours@0.1.0"),
            environment=environment,
            # Reports carry employee names
            send_default_pii=False,
            attach_stacktrace=True,
            before_send=before_send_hook,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}", exc_info=True)
        return False

    logger.info(f"Sentry initialized (environment: {environment})")
    return True


def before_send_hook(event, hint):
    """
    Filter sensitive data before sending to Sentry.

    Report bodies hold employee data, so request bodies are never forwarded.
    """
    request = event.get("request")
    if request:
        headers = request.get("headers") or {}
        for header in ("cookie", "authorization", "x-api-key"):
            if header in headers:
                headers[header] = "[Filtered]"
        if "data" in request:
            request["data"] = "[Filtered]"

    return event


def capture_exception(error: Exception, context: dict | None = None) -> None:
    """
    Capture an exception to Sentry with additional context.

    Args:
        error: Exception to capture
        context: Named context dicts to attach to the event
    """
    if context:
        with sentry_sdk.new_scope() as scope:
            for key, value in context.items():
                scope.set_context(key, value)
            sentry_sdk.capture_exception(error)
    else:
        sentry_sdk.capture_exception(error)
