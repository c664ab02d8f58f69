"""
Logging configuration and Sentry initialization.
"""
import logging
import sentry_sdk
from sentry_sdk.integrations.httpx import HttpxIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from cryptoquant.config import settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = None) -> None:
    """Configure root logging from LOG_LEVEL (or an explicit level name)."""
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        logger.warning(f"Unknown log level '{level_name}', falling back to INFO")
        numeric_level = logging.INFO
    
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric_level)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))


def init_sentry() -> bool:
    """Initialize Sentry if DSN is provided. Returns True when enabled."""
    if not settings.SENTRY_DSN:
        logger.info("Sentry DSN not provided. Error tracking disabled.")
        return False
    
    try:
        # Configure logging integration
        logging_integration = LoggingIntegration(
            level=logging.INFO,        # Capture info and above as breadcrumbs
            event_level=logging.ERROR   # Send errors as events
        )
        
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.SENTRY_ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            integrations=[
                HttpxIntegration(),
                logging_integration,
            ],
            release=settings.APP_VERSION,
            send_default_pii=False,
            max_breadcrumbs=50,
        )
        logger.info("Sentry initialized")
        return True
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}")
        return False
