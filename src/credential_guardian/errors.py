from __future__ import annotations


class ConfigError(ValueError):
    """Configuration is missing or invalid."""


class MalformedCredentialError(ValueError):
    """Credential fields are missing or cannot be parsed."""


class AuthError(RuntimeError):
    """Authentication or token exchange failed."""


class TokenExchangeError(AuthError):
    """Token endpoint answered a refresh request with a non-success status."""

    def __init__(self, status_code: int, reason: str, body: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"Token refresh failed: {status_code} {reason} - {body}")


class InvalidTokenResponseError(AuthError):
    """Token endpoint returned success but the payload was unusable."""
