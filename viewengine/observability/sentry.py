# File: viewengine/observability/sentry.py | Version: 1.1 | Title: Optional Sentry initialization
import logging
import os

log = logging.getLogger(__name__)


def init_sentry_if_configured() -> bool:
    """Initialise sentry_sdk when SENTRY_DSN is set; returns whether it did."""
    dsn = os.getenv("SENTRY_DSN", "").strip()
    if not dsn:
        log.info("Sentry disabled (no SENTRY_DSN).")
        return False

    try:
        import sentry_sdk

        traces = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1"))

        sentry_sdk.init(
            dsn=dsn,
            environment=os.getenv("SENTRY_ENVIRONMENT", "development"),
            traces_sample_rate=traces,
            # snapshots carry user content; keep request bodies out of events
            send_default_pii=False,
            max_request_body_size="never",
        )
        log.info("Sentry initialized.")
        return True
    except Exception as e:  # pragma: no cover (best-effort)
        log.warning("Sentry init failed: %s", e)
        return False
