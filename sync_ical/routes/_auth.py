"""
Shared-secret check for scheduler-invoked routes.
"""

from __future__ import annotations

import hmac

from sync_ical import config


def validate_bearer_secret(auth_header: str | None) -> bool:
    """
    Validate an "Authorization: Bearer <secret>" header against CRON_SECRET.

    Args:
        auth_header: Authorization header value (e.g., "Bearer s3cret")

    Returns:
        bool: True if the secret matches, False otherwise (always False when
        CRON_SECRET is not configured)
    """
    expected = config.CRON_SECRET
    if not expected or not auth_header or not auth_header.startswith("Bearer "):
        return False

    presented = auth_header[len("Bearer "):]
    return hmac.compare_digest(presented.encode("utf-8"), expected.encode("utf-8"))
