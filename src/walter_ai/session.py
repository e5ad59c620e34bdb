"""
MCP session lifecycle.

The first call performs the handshake (``initialize`` + the
``notifications/initialized`` notification). Concurrent callers share one
in-flight handshake. A 404 from the endpoint means Walter forgot the
session: the record is wiped and the next call handshakes again.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from walter_ai.cancellation import CancelToken, race
from walter_ai.errors import TransportError

if TYPE_CHECKING:
    from walter_ai.transport.http import HttpTransport

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2025-11-25"
DEFAULT_MAX_REQUEST_ID = 1_000_000


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


@dataclass
class Session:
    session_id: Optional[str] = None
    request_counter: int = 0
    state: SessionState = SessionState.UNINITIALIZED


def is_session_loss(error: BaseException) -> bool:
    """Only a 404 counts."""
    return isinstance(error, TransportError) and error.session_lost


class SessionManager:
    def __init__(
        self,
        session: Session,
        client_name: str,
        client_version: str,
        max_request_id: int = DEFAULT_MAX_REQUEST_ID,
    ):
        self._session = session
        self._client_name = client_name
        self._client_version = client_version
        self._max_request_id = max_request_id
        self._transport: Optional[HttpTransport] = None
        self._lock = asyncio.Lock()
        self._handshake: Optional[asyncio.Task[None]] = None
        self._generation = 0

    def bind(self, transport: HttpTransport) -> None:
        self._transport = transport

    @property
    def session(self) -> Session:
        return self._session

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def generation(self) -> int:
        """Bumped on every invalidation; lets callers name the session they used."""
        return self._generation

    def next_request_id(self) -> int:
        counter = self._session.request_counter + 1
        if counter > self._max_request_id:
            counter = 1
        self._session.request_counter = counter
        return counter

    async def ensure_ready(self, cancel_token: Optional[CancelToken] = None) -> None:
        """Return once the session is ready, joining any handshake in flight."""
        if self._session.state is SessionState.READY:
            return
        if self._transport is None:
            raise RuntimeError("SessionManager.bind() was never called")
        async with self._lock:
            if self._session.state is SessionState.READY:
                return
            if self._handshake is None:
                self._session.state = SessionState.INITIALIZING
                self._handshake = asyncio.ensure_future(self._run_handshake())
                # waiters may all have been cancelled; mark the outcome as seen
                self._handshake.add_done_callback(lambda t: t.cancelled() or t.exception())
            handshake = self._handshake
        if cancel_token is not None:
            cancel_token.raise_if_cancelled("Walter session setup")
        # shielded: a waiter giving up leaves the handshake running for the others
        await race(asyncio.shield(handshake), cancel_token, None, what="Walter session setup")

    async def _run_handshake(self) -> None:
        generation = self._generation
        logger.debug("Starting Walter MCP handshake")
        try:
            result = await self._transport.send(
                "initialize",
                {
                    "protocolVersion": PROTOCOL_VERSION,
                    "capabilities": {},
                    "clientInfo": {"name": self._client_name, "version": self._client_version},
                },
                self.next_request_id(),
            )
            await self._transport.notify("notifications/initialized")
        except BaseException:
            if generation == self._generation:
                self._session.state = SessionState.UNINITIALIZED
                self._session.session_id = None
                self._handshake = None
            raise
        if generation == self._generation:
            self._session.state = SessionState.READY
            self._handshake = None
        server = result.get("serverInfo") if isinstance(result, dict) else None
        logger.debug("Walter MCP session ready (session=%s, server=%s)", self._session.session_id, server)

    def invalidate(self, generation: Optional[int] = None) -> bool:
        """Forget the session so the next call handshakes again.

        With ``generation``, only acts if that session is still the current
        one; returns whether anything was reset.
        """
        if generation is not None and generation != self._generation:
            return False
        logger.warning("Walter session %s lost; will re-initialize", self._session.session_id)
        self._generation += 1
        self._session.session_id = None
        self._session.request_counter = 0
        self._session.state = SessionState.UNINITIALIZED
        self._handshake = None
        return True
