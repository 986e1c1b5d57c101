"""Per-browser controllers keyed by a session cookie.

In-memory LRU; sessions are lost on restart, which only costs a re-fetch.
"""

import uuid
from collections import OrderedDict
from typing import Callable, Optional

import structlog

from facts.controller import FactsController

logger = structlog.get_logger()


class SessionRegistry:
    def __init__(self, max_sessions: int = 1000):
        self.max_sessions = max_sessions
        self._controllers: OrderedDict[str, FactsController] = OrderedDict()

    def __len__(self) -> int:
        return len(self._controllers)

    def get(self, session_id: Optional[str]) -> Optional[FactsController]:
        if not session_id or session_id not in self._controllers:
            return None
        self._controllers.move_to_end(session_id)
        return self._controllers[session_id]

    def get_or_create(
        self, session_id: Optional[str], factory: Callable[[], FactsController]
    ) -> tuple[str, FactsController]:
        """Return (session_id, controller), minting a new session when needed."""
        controller = self.get(session_id)
        if controller is not None:
            return session_id, controller

        session_id = uuid.uuid4().hex
        controller = factory()
        self._controllers[session_id] = controller
        while len(self._controllers) > self.max_sessions:
            evicted, _ = self._controllers.popitem(last=False)
            logger.debug("session.evicted", session_id=evicted)
        logger.debug("session.created", session_id=session_id, active=len(self._controllers))
        return session_id, controller

    def clear(self):
        self._controllers.clear()
