"""Retry execution and failure classification."""

from cryptocloud.services.retry.error_classifier import classify_failure, extract_status_code
from cryptocloud.services.retry.retry_executor import RetryExecutor, execute_with_retry

__all__ = [
    "RetryExecutor",
    "classify_failure",
    "execute_with_retry",
    "extract_status_code",
]
