from __future__ import annotations

import logging
from typing import Callable, Optional

from ..credentials import Credential
from ..logging_utils import log_extra
from .token_refresh import CredentialGuardian


class RefreshingTokenProvider:
    """Bearer token source for API clients backed by a refreshable credential.

    ``on_refresh`` receives every newly issued credential so the caller can
    persist it. Concurrent ``get_token`` calls are not coordinated; each may
    run its own exchange.
    """

    def __init__(
        self,
        credential: Credential,
        guardian: Optional[CredentialGuardian] = None,
        on_refresh: Optional[Callable[[Credential], None]] = None,
    ) -> None:
        self._credential = credential
        self._guardian = guardian or CredentialGuardian()
        self._on_refresh = on_refresh
        self._log = logging.getLogger(__name__)

    @property
    def credential(self) -> Credential:
        return self._credential

    def get_token(self) -> str:
        current = self._guardian.ensure_valid(self._credential)
        if current is not self._credential:
            self._credential = current
            self._log.info("Stored refreshed credential", extra=log_extra(expires_at=current.expires_at))
            if self._on_refresh is not None:
                self._on_refresh(current)
        return current.access_token

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.get_token()}"}
