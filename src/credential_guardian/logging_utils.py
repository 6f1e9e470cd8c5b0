from __future__ import annotations

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def log_extra(**kwargs: Any) -> dict[str, Any]:
    return {k: v for k, v in kwargs.items() if v is not None}


def mask_token(token: str | None, visible: int = 4) -> str:
    """Return a loggable form of a secret, keeping only its last characters."""
    if not token:
        return "<empty>"
    if len(token) <= visible:
        return "*" * len(token)
    return f"...{token[-visible:]}"
