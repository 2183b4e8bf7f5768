from __future__ import annotations

"""
Authentication and transport for the Reddit API.

This package exposes:
- Authenticator: protocol every authentication strategy implements.
- ScriptAuthenticator: password grant, acts as a logged in user.
- ApplicationAuthenticator: client credentials grant, read-only browsing.
- AuthenticatedClient: shared session that re-authenticates once when
  Reddit rejects the token.
"""

from .auth import ApplicationAuthenticator, Authenticator, ScriptAuthenticator
from .authenticated_client import AuthenticatedClient

__all__ = [
    "Authenticator",
    "ScriptAuthenticator",
    "ApplicationAuthenticator",
    "AuthenticatedClient",
]
