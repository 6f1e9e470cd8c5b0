"""The OAuth credential value shared with the hosting application.

Credentials are immutable. Storage and the initial authorization flow live
outside this package; they hand a ``Credential`` in and persist whatever
comes back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .errors import MalformedCredentialError

_WIRE_FIELDS = {
    "accessToken": "access_token",
    "refreshToken": "refresh_token",
    "expiresAt": "expires_at",
}


@dataclass(frozen=True)
class Credential:
    access_token: str = field(repr=False)
    refresh_token: str = field(repr=False)
    expires_at: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Credential":
        """Build a credential from the ``{accessToken, refreshToken, expiresAt}`` shape."""
        try:
            values = {attr: data[key] for key, attr in _WIRE_FIELDS.items()}
        except KeyError as exc:
            raise MalformedCredentialError(f"Credential is missing {exc.args[0]}") from exc
        for key, attr in _WIRE_FIELDS.items():
            value = values[attr]
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, (str, int)):
                raise MalformedCredentialError(
                    f"{key} must be a string or integer, got {type(value).__name__}"
                )
        return cls(
            access_token=str(values["access_token"]),
            refresh_token=str(values["refresh_token"]),
            expires_at=str(values["expires_at"]),
        )

    def to_dict(self) -> dict[str, str]:
        return {key: getattr(self, attr) for key, attr in _WIRE_FIELDS.items()}

    def expires_at_seconds(self) -> int:
        try:
            return int(self.expires_at)
        except (TypeError, ValueError) as exc:
            raise MalformedCredentialError(
                f"expiresAt must be integer epoch seconds, got {self.expires_at!r}"
            ) from exc

    def is_usable(self) -> bool:
        return bool(self.access_token and self.refresh_token and self.expires_at)
