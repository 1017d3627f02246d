"""SSE session lifecycle and server-to-client push."""

import asyncio
import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import uuid4

import structlog
from pydantic import BaseModel


logger = structlog.get_logger(__name__)

DEFAULT_KEEPALIVE_SECONDS = 30.0

# Stream response headers for every session
SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class SessionState(str, Enum):
    """Lifecycle of an SSE session: opening -> open -> closed."""

    opening = "opening"
    open = "open"
    closed = "closed"


@dataclass
class Session:
    """One live server-to-client stream.

    The queue is the transport handle: frames put on it are written to the
    HTTP response by ``SessionManager.stream``. ``None`` ends the stream.
    """

    id: str
    opened_at: datetime
    state: SessionState = SessionState.opening
    queue: asyncio.Queue[str | None] = field(default_factory=asyncio.Queue, repr=False)


def format_sse_event(payload: Any) -> str:
    """Serialize a payload as one SSE ``data`` event."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(exclude_none=True)
    return f"data: {json.dumps(payload, separators=(',', ':'), ensure_ascii=False)}\n\n"


def format_sse_comment(comment: str) -> str:
    """SSE comment line, ignored by clients; used as keep-alive."""
    return f": {comment}\n\n"


class SessionManager:
    """Owns every open SSE session.

    Sessions are only reachable through ``open``, ``push``, ``close`` and
    ``stream`` by id. Each mutation of the session table is a single dict
    insert or pop, so no lock is needed on one event loop.
    """

    def __init__(
        self,
        hello: dict[str, Any],
        keepalive_seconds: float = DEFAULT_KEEPALIVE_SECONDS,
    ) -> None:
        """Initialize the manager.

        Args:
            hello: Notification pushed first on every new session.
            keepalive_seconds: Idle interval before a keep-alive comment.
        """
        self._hello = hello
        self._keepalive_seconds = keepalive_seconds
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def is_open(self, session_id: str) -> bool:
        session = self._sessions.get(session_id)
        return session is not None and session.state is SessionState.open

    def open(self) -> str:
        """Register a new session and queue the hello notification.

        Returns:
            The session id.
        """
        session = Session(id=uuid4().hex, opened_at=datetime.now(timezone.utc))
        self._sessions[session.id] = session
        session.state = SessionState.open
        self.push(session.id, self._hello)
        logger.info("sse_session_opened", session_id=session.id, active_sessions=len(self._sessions))
        return session.id

    def push(self, session_id: str, payload: Any) -> bool:
        """Queue one SSE event for a session.

        A push to an unknown or closed session is dropped and logged; the
        peer may have disconnected concurrently.

        Returns:
            True if the event was queued.
        """
        session = self._sessions.get(session_id)
        if session is None or session.state is not SessionState.open:
            logger.warning("sse_push_dropped", session_id=session_id, reason="session closed")
            return False
        session.queue.put_nowait(format_sse_event(payload))
        return True

    def close(self, session_id: str) -> None:
        """Deregister a session and end its stream. Closing twice is a no-op."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        session.state = SessionState.closed
        session.queue.put_nowait(None)
        logger.info("sse_session_closed", session_id=session_id, active_sessions=len(self._sessions))

    def close_all(self) -> None:
        """Close every session, on shutdown."""
        for session_id in list(self._sessions):
            self.close(session_id)

    async def stream(self, session_id: str) -> AsyncIterator[str]:
        """Yield SSE frames for a session until it is closed.

        Emits a keep-alive comment whenever the session stays idle for
        ``keepalive_seconds``. The session is closed when the consumer stops
        iterating (client disconnect).
        """
        session = self._sessions.get(session_id)
        if session is None:
            return
        try:
            while True:
                try:
                    frame = await asyncio.wait_for(session.queue.get(), timeout=self._keepalive_seconds)
                except asyncio.TimeoutError:
                    yield format_sse_comment("ping")
                    continue
                if frame is None:
                    break
                yield frame
        finally:
            self.close(session_id)
