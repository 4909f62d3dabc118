"""In-memory registry of form sessions, one per page view."""

from __future__ import annotations

import threading
from collections import OrderedDict
from collections.abc import Callable
from uuid import uuid4

from email_writer.logging_utils import get_logger
from email_writer.services.form_controller import FormController

logger = get_logger(__name__)


class SessionNotFoundError(KeyError):
    """Raised when a session id is unknown or has been evicted."""


class FormSessionStore:
    """Creates and hands out form controllers keyed by session id."""

    def __init__(self, factory: Callable[[], FormController], *, max_sessions: int = 1000) -> None:
        self._factory = factory
        self._max_sessions = max_sessions
        self._lock = threading.Lock()
        self._sessions: OrderedDict[str, FormController] = OrderedDict()

    def create(self) -> tuple[str, FormController]:
        session_id = uuid4().hex
        controller = self._factory()
        with self._lock:
            self._sessions[session_id] = controller
            while len(self._sessions) > self._max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Form session evicted | session_id=%s", evicted)
        return session_id, controller

    def get(self, session_id: str) -> FormController:
        with self._lock:
            try:
                return self._sessions[session_id]
            except KeyError:
                raise SessionNotFoundError(session_id) from None

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise SessionNotFoundError(session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
