"""Keeps a single OAuth credential valid by refreshing it before it expires."""

# Submodules are imported directly by callers:
# from credential_guardian.auth import ensure_valid_token, CredentialGuardian
# from credential_guardian.credentials import Credential
# from credential_guardian.config import load_config

__all__ = [
    "auth",
    "config",
    "credentials",
    "errors",
]
