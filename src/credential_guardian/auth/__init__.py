"""Token expiry checks, refresh exchange and bearer token provider."""

from .provider import RefreshingTokenProvider
from .token_refresh import (
    CredentialGuardian,
    ensure_valid_token,
    is_token_expiring_soon,
    refresh_access_token,
)

__all__ = [
    "CredentialGuardian",
    "RefreshingTokenProvider",
    "ensure_valid_token",
    "is_token_expiring_soon",
    "refresh_access_token",
]
