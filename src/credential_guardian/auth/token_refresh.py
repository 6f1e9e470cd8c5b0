"""Expiry check and refresh-token exchange for a single OAuth credential.

The three operations are stateless: each takes a credential (or refresh
token) by value and returns either the same credential or a new one. Errors
from the token endpoint are raised to the caller without retrying.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import requests

from ..config import DEFAULT_BUFFER_MINUTES, TOKEN_URL, GuardianConfig
from ..credentials import Credential
from ..errors import AuthError, InvalidTokenResponseError, TokenExchangeError
from ..logging_utils import log_extra, mask_token

Clock = Callable[[], float]

_log = logging.getLogger(__name__)


def is_token_expiring_soon(
    credential: Credential,
    buffer_minutes: float = DEFAULT_BUFFER_MINUTES,
    *,
    clock: Clock = time.time,
) -> bool:
    """Return True when ``credential`` expires within ``buffer_minutes``.

    Already-expired credentials count as expiring. A non-integer
    ``expires_at`` raises ``MalformedCredentialError``.
    """
    remaining = credential.expires_at_seconds() - int(clock())
    return remaining <= buffer_minutes * 60


def refresh_access_token(
    refresh_token: str,
    *,
    session: Optional[requests.Session] = None,
    token_url: str = TOKEN_URL,
    timeout: float | None = None,
    clock: Clock = time.time,
) -> Credential:
    """Exchange ``refresh_token`` for a new credential at the token endpoint.

    Raises ``TokenExchangeError`` on a non-success status; nothing is retried.
    """
    http = session if session is not None else requests
    data = {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
    }

    _log.info(
        "Making token refresh request...",
        extra=log_extra(token_url=token_url, refresh_token=mask_token(refresh_token)),
    )
    try:
        response = http.post(
            token_url,
            data=data,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise AuthError("Failed to contact token endpoint") from exc

    if not response.ok:
        body = response.text or ""
        _log.error("Token refresh failed: %s %s", response.status_code, response.reason)
        _log.error("Response body: %s", body)
        raise TokenExchangeError(response.status_code, response.reason or "", body)

    try:
        payload = response.json()
        access_token = payload["access_token"]
        new_refresh_token = payload["refresh_token"]
        expires_in = int(payload["expires_in"])
    except (ValueError, KeyError, TypeError) as exc:
        raise InvalidTokenResponseError("Invalid token response payload") from exc

    if not access_token or not new_refresh_token:
        raise InvalidTokenResponseError("Token response is missing access or refresh token")

    _log.info("Token refresh successful", extra=log_extra(expires_in=expires_in))
    return Credential(
        access_token=str(access_token),
        refresh_token=str(new_refresh_token),
        expires_at=str(int(clock()) + expires_in),
    )


def ensure_valid_token(
    credential: Credential,
    *,
    session: Optional[requests.Session] = None,
    token_url: str = TOKEN_URL,
    timeout: float | None = None,
    clock: Clock = time.time,
) -> Credential:
    """Return ``credential`` unchanged, or a refreshed one if it is about to expire."""
    if not is_token_expiring_soon(credential, clock=clock):
        return credential
    _log.info("Token expiring soon, refreshing...")
    return refresh_access_token(
        credential.refresh_token,
        session=session,
        token_url=token_url,
        timeout=timeout,
        clock=clock,
    )


class CredentialGuardian:
    """Binds the refresh operations to one config, HTTP session and clock.

    Holds no credential state; callers keep their own copy.
    """

    def __init__(
        self,
        config: Optional[GuardianConfig] = None,
        session: Optional[requests.Session] = None,
        clock: Clock = time.time,
    ) -> None:
        self._config = config or GuardianConfig()
        self._session = session or requests.Session()
        self._clock = clock

    @property
    def config(self) -> GuardianConfig:
        return self._config

    def is_expiring_soon(self, credential: Credential, buffer_minutes: float | None = None) -> bool:
        if buffer_minutes is None:
            buffer_minutes = self._config.buffer_minutes
        return is_token_expiring_soon(credential, buffer_minutes, clock=self._clock)

    def refresh(self, refresh_token: str) -> Credential:
        return refresh_access_token(
            refresh_token,
            session=self._session,
            token_url=self._config.token_url,
            timeout=self._config.timeout_seconds,
            clock=self._clock,
        )

    def ensure_valid(self, credential: Credential) -> Credential:
        if not self.is_expiring_soon(credential):
            return credential
        _log.info("Token expiring soon, refreshing...")
        return self.refresh(credential.refresh_token)
