"""SessionManager — one lazy login per tool instance.

INVARIANT: The session state moves from UNATTEMPTED to AUTHENTICATED or
FAILED exactly once. The login outcome is cached and every later call
sees the identical Result. There is no re-login: a failed login is
replayed for the lifetime of the instance.
"""

from __future__ import annotations

import threading
from enum import StrEnum
from typing import TYPE_CHECKING

import structlog

from sslctl.services.classify import to_result
from sslctl.services.result import Result, is_error

if TYPE_CHECKING:
    from sslctl.infrastructure.client import Transport

logger = structlog.get_logger(__name__)


class SessionState(StrEnum):
    UNATTEMPTED = "unattempted"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class SessionManager:
    """Authenticate against the provider on first use and cache the outcome.

    Establishment is guarded by a lock so concurrent first callers trigger
    a single ``auth`` call.
    """

    def __init__(self, transport: Transport, login: str, password: str) -> None:
        self._transport = transport
        self._login = login
        self._password = password
        self._lock = threading.Lock()
        self._state = SessionState.UNATTEMPTED
        self._result: Result | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    def ensure(self) -> Result:
        """Return the cached login Result, logging in on the first call."""
        if self._result is not None:
            return self._result
        with self._lock:
            if self._result is None:
                self._result = self._authenticate()
        return self._result

    def _authenticate(self) -> Result:
        raw = self._transport.auth(self._login, self._password)
        # The auth endpoint's own error shape is definitive; no login marker check.
        result = to_result({}, raw)
        if is_error(result):
            self._state = SessionState.FAILED
            logger.warning("session.failed", login=self._login, message=result.message)
        else:
            self._state = SessionState.AUTHENTICATED
            logger.debug("session.authenticated", login=self._login)
        return result
