"""Logging configuration for the SaaS admin backend"""
import logging
import sys

from src.shared.context import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Stamp every record with the current request's correlation id"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def setup_logging(debug: bool | None = None) -> None:
    """Configure application-wide logging"""
    if debug is None:
        from src.infrastructure.config.settings import get_settings

        debug = get_settings().debug

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )
