"""
Identity stub adapter (dev/tests).

Stub implementation of IdentityPort backed by a token -> viewer table.
Stands in for the real authenticated-session lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from src.components.access import IdentityPort
from src.domain.entities import MembershipTier, Role, Viewer

logger = logging.getLogger(__name__)


@dataclass
class StubIdentityAdapter:
    """
    Token -> Viewer lookup held in memory.

    Unknown tokens resolve to None (anonymous). Can be told to fail to
    simulate an unavailable session backend.
    """

    _sessions: dict[str, Viewer] = field(default_factory=dict)
    _fail: bool = False

    def lookup(self, session_token: str | None) -> Viewer | None:
        if self._fail:
            raise ConnectionError("identity backend unavailable")
        viewer = self._sessions.get(session_token or "")
        logger.debug(
            "StubIdentityAdapter.lookup: known=%s", viewer is not None
        )
        return viewer

    # --- Testing Helpers ---

    def add_session(
        self,
        token: str,
        user_id: str,
        role: Role = "user",
        tier: MembershipTier = "free",
    ) -> Viewer:
        viewer = Viewer(user_id=user_id, role=role, tier=tier)
        self._sessions[token] = viewer
        return viewer

    def set_failure(self, fail: bool) -> None:
        self._fail = fail

    def clear(self) -> None:
        self._sessions.clear()
        self._fail = False


# Verify protocol compliance at module load time
def _verify_protocol_compliance() -> None:
    """Verify StubIdentityAdapter satisfies IdentityPort protocol."""
    adapter: IdentityPort = StubIdentityAdapter()
    _ = adapter.lookup(None)


_verify_protocol_compliance()
