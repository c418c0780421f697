"""
Signed tokens for the public calendar feed.

A token is the hex HMAC-SHA256 of the tenant ID under ICAL_SECRET (or
CRON_SECRET when no dedicated secret is set). Tokens are derived, never
stored, so the same tenant always gets the same token and rotating the secret
revokes every feed URL at once.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Optional
from urllib.parse import quote

from sync_ical import config
from sync_ical.errors import FeedTokenSecretMissingError


def _signing_secret() -> str:
    if not config.ICAL_SECRET:
        raise FeedTokenSecretMissingError()
    return config.ICAL_SECRET


def issue_feed_token(tenant_id: str) -> str:
    """
    Compute the feed token of a tenant.

    Raises:
        FeedTokenSecretMissingError: If no signing secret is configured.
    """
    return hmac.new(
        _signing_secret().encode("utf-8"), tenant_id.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def verify_feed_token(tenant_id: str, token: Optional[str]) -> bool:
    """
    Check a token presented on the export endpoint against the requested tenant.

    Args:
        tenant_id: Tenant named in the request path
        token: Value of the token query parameter

    Returns:
        bool: True only if token is the HMAC of this tenant ID

    Raises:
        FeedTokenSecretMissingError: If no signing secret is configured.
    """
    expected = issue_feed_token(tenant_id)
    if not token or len(token) != len(expected):
        return False
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


def build_feed_url(tenant_id: str) -> str:
    """Full public URL of a tenant's calendar feed, token included."""
    return (
        f"{config.APP_BASE_URL}/calendar/{quote(tenant_id, safe='')}"
        f"?token={issue_feed_token(tenant_id)}"
    )
