"""
In-memory store for ID-card scan pairing sessions.

A desk client opens a session, a phone submits the scanned card data
against its id, and the desk reads it back. Sessions expire after
SCAN_SESSION_TTL_SECONDS whether or not data ever arrives.

The store is process-local; a multi-instance deployment needs a shared
TTL-capable store instead.
"""

import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from app.config.settings import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

STATUS_WAITING = "waiting"
STATUS_COMPLETED = "completed"

ExpiryCallback = Callable[[str, Optional[Dict[str, Any]]], None]


@dataclass
class ScanSession:
    session_id: str
    status: str = STATUS_WAITING
    data: Optional[Dict[str, Any]] = None
    created_at: datetime = field(default_factory=datetime.utcnow)


class ScanSessionStore:
    """
    Keyed session store with one expiry timer per entry.

    ``on_expire(session_id, data)`` fires exactly once for each session
    that lapses; sessions removed with ``pop`` never fire it.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        on_expire: Optional[ExpiryCallback] = None,
    ):
        self.ttl_seconds = ttl_seconds or settings.SCAN_SESSION_TTL_SECONDS
        self.on_expire = on_expire
        self._sessions: Dict[str, ScanSession] = {}
        self._timers: Dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create(self, session_id: Optional[str] = None, payload: Optional[Dict[str, Any]] = None) -> ScanSession:
        session_id = session_id or secrets.token_hex(16)
        session = ScanSession(session_id=session_id, data=payload)
        timer = threading.Timer(self.ttl_seconds, self.expire, args=(session_id,))
        timer.daemon = True

        with self._lock:
            previous = self._timers.pop(session_id, None)
            self._sessions[session_id] = session
            self._timers[session_id] = timer
        if previous is not None:
            previous.cancel()
        timer.start()

        logger.debug("Scan session created", extra={"session_id": session_id, "ttl_seconds": self.ttl_seconds})
        return session

    def get(self, session_id: str) -> Optional[ScanSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def update(self, session_id: str, data: Dict[str, Any]) -> Optional[ScanSession]:
        """Attach scanned data; returns None when the session is gone."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            session.data = data
            session.status = STATUS_COMPLETED
        logger.info("Scan session completed", extra={"session_id": session_id})
        return session

    def pop(self, session_id: str) -> Optional[ScanSession]:
        """Remove a session without firing the expiry callback."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
            timer = self._timers.pop(session_id, None)
        if timer is not None:
            timer.cancel()
        return session

    def expire(self, session_id: str) -> bool:
        """Drop a session and fire ``on_expire``; False if it was already gone."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
            timer = self._timers.pop(session_id, None)
        if session is None:
            return False
        if timer is not None and timer is not threading.current_thread():
            timer.cancel()

        logger.info("Scan session expired", extra={"session_id": session_id, "scan_status": session.status})
        if self.on_expire is not None:
            try:
                self.on_expire(session_id, session.data)
            except Exception as e:
                logger.error(f"Scan session expiry callback failed: {e}", exc_info=True)
        return True

    def clear(self) -> None:
        with self._lock:
            timers = list(self._timers.values())
            self._sessions.clear()
            self._timers.clear()
        for timer in timers:
            timer.cancel()


scan_sessions = ScanSessionStore()
