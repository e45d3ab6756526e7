"""Delivery rules shared by email and push notifications."""

import json
import logging
from dataclasses import dataclass, field
from datetime import timedelta

from src.domain.entities.notification import NotificationEntity

logger = logging.getLogger(__name__)

RETRYABLE_ERROR_CODES = frozenset(
    {"TEMPORARY_FAILURE", "RATE_LIMIT_EXCEEDED", "SERVICE_UNAVAILABLE", "TIMEOUT"}
)

MAX_DATA_BYTES = 10_000
MAX_RECIPIENTS = 100
BASE_RETRY_DELAY = timedelta(seconds=60)
MAX_RETRY_DELAY = timedelta(minutes=30)


@dataclass
class ValidationReport:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class NotificationPolicy:
    """Stateless rules: payload sanity checks and the retry strategy"""

    def validate(self, notification: NotificationEntity) -> ValidationReport:
        report = ValidationReport()
        recipients = notification.recipient_values

        if not recipients:
            report.errors.append("At least one recipient is required")
        elif len(recipients) > MAX_RECIPIENTS:
            report.warnings.append(
                f"{len(recipients)} recipients exceeds the recommended maximum of {MAX_RECIPIENTS}"
            )

        data_size = len(json.dumps(notification.data, default=str).encode("utf-8"))
        if data_size > MAX_DATA_BYTES:
            report.warnings.append(
                f"Data payload is {data_size} bytes, above the recommended {MAX_DATA_BYTES}"
            )

        for warning in report.warnings:
            logger.warning(f"Notification {notification.id}: {warning}")
        return report

    def is_retryable_error(self, error_code: str | None) -> bool:
        return bool(error_code) and error_code.upper() in RETRYABLE_ERROR_CODES

    def should_retry(self, notification: NotificationEntity) -> bool:
        return (
            notification.can_retry
            and not notification.retries_exhausted()
            and self.is_retryable_error(notification.error_code)
        )

    def retry_delay(self, retry_count: int) -> timedelta:
        """Exponential backoff: 60s * 2^retry_count, capped at 30 minutes"""
        if retry_count < 0:
            retry_count = 0
        delay = BASE_RETRY_DELAY * (2 ** min(retry_count, 16))
        return min(delay, MAX_RETRY_DELAY)
