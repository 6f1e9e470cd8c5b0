"""Wiring for hosting applications.

``create_guardian`` loads the guardian settings, configures logging and
returns a ready ``CredentialGuardian``. The config file is taken from the
argument, then from ``CREDENTIAL_GUARDIAN_CONFIG``; with neither, built-in
defaults are used.
"""

import os
from pathlib import Path
from typing import Optional

import requests

from .auth import CredentialGuardian
from .config import GuardianConfig, load_config
from .logging_utils import configure_logging


def _config_path() -> Path | None:
    """Get the configuration file path from the environment, if set."""
    path = os.environ.get("CREDENTIAL_GUARDIAN_CONFIG")
    return Path(path) if path else None


def create_guardian(
    config_path: Path | None = None,
    session: Optional[requests.Session] = None,
) -> CredentialGuardian:
    """Create a guardian from a config file.

    Args:
        config_path: Optional path to a YAML config file. If None, uses
            ``CREDENTIAL_GUARDIAN_CONFIG`` or falls back to defaults.
        session: Optional HTTP session shared with the hosting application.

    Returns:
        CredentialGuardian: guardian bound to the loaded settings
    """
    if config_path is None:
        config_path = _config_path()

    config = load_config(config_path) if config_path is not None else GuardianConfig()
    configure_logging(config.log_level)

    return CredentialGuardian(config, session=session)
