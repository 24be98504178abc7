"""ION API credential handling."""

from __future__ import annotations

from .credentials import REFRESH_BUFFER, Credential, CredentialCache, TokenInfo

__all__ = ["REFRESH_BUFFER", "Credential", "CredentialCache", "TokenInfo"]
