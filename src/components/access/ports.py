"""
Access component ports.

External interfaces for viewer identity.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.entities import Viewer


class IdentityPort(Protocol):
    """
    Port for authenticated-session lookup.

    Implementations:
    - StubIdentityAdapter: fixed token -> viewer table (dev/tests)
    """

    def lookup(self, session_token: str | None) -> Viewer | None:
        """
        Resolve a session token to a viewer.

        Returns None for unknown/expired sessions. May raise on
        backend failure; callers map that to the anonymous viewer.
        """
        ...
