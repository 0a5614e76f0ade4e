"""One trash facade per user session."""

from __future__ import annotations

import logging
from collections import OrderedDict
from collections.abc import Callable
from uuid import UUID

from spendwise.application.ports.identity import CurrentUser
from spendwise.application.services.trash_facade import TrashFacade

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 1024


class TrashSessionRegistry:
    """Create facades on first use and hand the same one back afterwards.

    The registry is owned by whoever owns the sessions (the API app keeps
    one on its state); there is no module-level instance.

    At most ``max_sessions`` facades are kept. Opening one more evicts the
    least recently used idle session; a session with a restore or purge in
    flight is never evicted, so the registry may run over the bound until
    such work finishes. An evicted user simply gets a fresh facade (empty
    selection, no error notes) on the next request.
    """

    def __init__(
        self,
        facade_builder: Callable[[CurrentUser], TrashFacade],
        max_sessions: int = DEFAULT_MAX_SESSIONS,
    ):
        if max_sessions < 1:
            msg = "max_sessions must be at least 1"
            raise ValueError(msg)
        self._facade_builder = facade_builder
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[UUID, TrashFacade] = OrderedDict()

    @property
    def max_sessions(self) -> int:
        return self._max_sessions

    def facade_for(self, user: CurrentUser) -> TrashFacade:
        facade = self._sessions.get(user.user_id)
        if facade is not None:
            self._sessions.move_to_end(user.user_id)
            return facade

        facade = self._facade_builder(user)
        self._sessions[user.user_id] = facade
        logger.debug("Opened trash session for %s", user)
        self._evict_idle()
        return facade

    def end_session(self, user_id: UUID) -> bool:
        return self._sessions.pop(user_id, None) is not None

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def _evict_idle(self) -> None:
        excess = len(self._sessions) - self._max_sessions
        if excess <= 0:
            return
        # Oldest first; the newest entry is the session just opened
        candidates = list(self._sessions.items())[:-1]
        for user_id, facade in candidates:
            if excess == 0:
                break
            if facade.is_busy:
                continue
            del self._sessions[user_id]
            excess -= 1
            logger.debug("Evicted idle trash session for %s", user_id)
        if excess > 0:
            logger.warning(
                "%d trash session(s) over the limit of %d; all others are busy",
                excess,
                self._max_sessions,
            )
