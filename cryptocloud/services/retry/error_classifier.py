"""Failure classification for determining retry behavior."""

from __future__ import annotations

from typing import Optional

import httpx

from cryptocloud.domain.exceptions import NON_RETRYABLE_STATUS_CODES
from cryptocloud.domain.retry import AttemptOutcome


def extract_status_code(error: Exception) -> Optional[int]:
    """Return the HTTP status carried by an error, if any."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code

    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        return status_code
    return None


def classify_failure(error: Exception) -> AttemptOutcome:
    """
    Classify a failed attempt.

    Bad input and bad credentials (400, 401, 403) are fatal. Everything else,
    including failures that never produced a status code such as DNS errors or
    refused connections, is treated as transient.
    """
    if extract_status_code(error) in NON_RETRYABLE_STATUS_CODES:
        return AttemptOutcome.fatal(error)
    return AttemptOutcome.retryable(error)


__all__ = ["classify_failure", "extract_status_code"]
