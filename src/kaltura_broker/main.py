"""Main entry point for the Kaltura service broker."""

import logging
import sys

import uvicorn
from dotenv import load_dotenv

from kaltura_broker.config import get_settings


def setup_logging() -> None:
    """Configure application logging."""
    settings = get_settings()

    log_format = (
        '{"time": "%(asctime)s", "level": "%(levelname)s", '
        '"logger": "%(name)s", "message": "%(message)s"}'
        if settings.log_format == "json"
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main() -> None:
    """Run the Kaltura service broker server."""
    # Load environment variables from .env file
    load_dotenv()

    setup_logging()

    settings = get_settings()
    logger = logging.getLogger(__name__)

    # Initialize OpenTelemetry tracing (must be done before creating app)
    from kaltura_broker.telemetry import setup_telemetry, shutdown_telemetry

    setup_telemetry()

    if not settings.broker_user or not settings.broker_pass:
        logger.warning("BROKER_USER or BROKER_PASS is not set, all broker requests will be rejected")

    logger.info(
        "Starting Kaltura service broker",
        extra={
            "host": settings.host,
            "port": settings.port,
            "otel_enabled": settings.otel_enabled,
        },
    )

    from kaltura_broker.api import create_app

    app = create_app()

    try:
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    finally:
        shutdown_telemetry()


if __name__ == "__main__":
    main()
