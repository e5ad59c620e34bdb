"""
AsyncWalter / Walter — main SDK clients.
"""

import asyncio
from typing import Any, Optional

import httpx

from walter_ai.cancellation import CancelToken
from walter_ai.chat import ChatEngine, ChatResult, PartialCallback
from walter_ai.chats import ChatsAPI
from walter_ai.config import WalterConfig
from walter_ai.invoker import ToolInvoker
from walter_ai.models.chat import CancelOutcome, Chat, PendingExchange
from walter_ai.models.response import ResponseStatus
from walter_ai.models.turf import Turf, TurfSearch
from walter_ai.session import DEFAULT_MAX_REQUEST_ID, Session, SessionManager
from walter_ai.transport.http import DEFAULT_BASE_URL, DEFAULT_RPC_TIMEOUT_S, HttpTransport
from walter_ai.turfs import TurfsAPI

CLIENT_NAME = "walter-ai-sdk"
CLIENT_VERSION = "0.1.0"


class AsyncWalter:
    """Async Walter client (primary).

    Safe to share between concurrent tasks: they share one MCP session and
    at most one handshake is ever in flight.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_RPC_TIMEOUT_S,
        max_request_id: int = DEFAULT_MAX_REQUEST_ID,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        engine_options: Optional[dict[str, Any]] = None,
    ):
        self._session = Session()
        self.sessions = SessionManager(self._session, CLIENT_NAME, CLIENT_VERSION, max_request_id)
        self.transport = HttpTransport(
            self._session,
            token,
            base_url,
            client_name=CLIENT_NAME,
            client_version=CLIENT_VERSION,
            timeout=timeout,
            http_transport=http_transport,
        )
        self.sessions.bind(self.transport)
        self.tools = ToolInvoker(self.transport, self.sessions)
        self.chats = ChatsAPI(self.tools)
        self.turfs = TurfsAPI(self.tools)
        self._engine = ChatEngine(self.chats, **(engine_options or {}))

    @classmethod
    def from_config(cls, config: WalterConfig, **kwargs: Any) -> "AsyncWalter":
        return cls(config.token, config.url, **kwargs)

    @property
    def session(self) -> Session:
        return self._session

    async def start_chat(self, cancel_token: Optional[CancelToken] = None) -> str:
        return await self.chats.start(cancel_token)

    async def list_chats(self, cancel_token: Optional[CancelToken] = None) -> list[Chat]:
        return await self.chats.list(cancel_token)

    async def send_message(
        self, chat_id: str, message: str, cancel_token: Optional[CancelToken] = None,
    ) -> PendingExchange:
        return await self.chats.send_message(chat_id, message, cancel_token)

    async def get_response(self, request_id: str, cancel_token: Optional[CancelToken] = None) -> ResponseStatus:
        return await self.chats.get_response(request_id, cancel_token)

    async def cancel(self, chat_id: str, cancel_token: Optional[CancelToken] = None) -> CancelOutcome:
        return await self.chats.cancel(chat_id, cancel_token)

    async def list_turfs(self, cancel_token: Optional[CancelToken] = None) -> list[Turf]:
        return await self.turfs.list(cancel_token)

    async def search_turfs(
        self,
        name: Optional[str] = None,
        type: Optional[str] = None,
        os: Optional[str] = None,
        status: Optional[str] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> TurfSearch:
        return await self.turfs.search(name=name, type=type, os=os, status=status, cancel_token=cancel_token)

    async def stream(
        self,
        chat_id: str,
        message: str,
        on_partial: Optional[PartialCallback] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> ChatResult:
        """Send a message and block until Walter finishes, streaming partials."""
        return await self._engine.stream(chat_id, message, on_partial, cancel_token)

    async def chat(
        self,
        message: str,
        chat_id: Optional[str] = None,
        on_partial: Optional[PartialCallback] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> ChatResult:
        """Like stream(), but starts a new chat when no ``chat_id`` is given."""
        chat_id = (chat_id or "").strip() or await self.chats.start(cancel_token)
        return await self._engine.stream(chat_id, message, on_partial, cancel_token)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "AsyncWalter":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()


class Walter:
    """Sync wrapper around AsyncWalter. Runs the event loop internally."""

    def __init__(self, token: str, base_url: str = DEFAULT_BASE_URL, **kwargs: Any):
        self._loop = asyncio.new_event_loop()
        self._async = AsyncWalter(token, base_url, **kwargs)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def chats(self) -> ChatsAPI:
        return self._async.chats

    @property
    def turfs(self) -> TurfsAPI:
        return self._async.turfs

    def start_chat(self) -> str:
        return self._run(self._async.start_chat())

    def list_chats(self) -> list[Chat]:
        return self._run(self._async.list_chats())

    def send_message(self, chat_id: str, message: str) -> PendingExchange:
        return self._run(self._async.send_message(chat_id, message))

    def get_response(self, request_id: str) -> ResponseStatus:
        return self._run(self._async.get_response(request_id))

    def cancel(self, chat_id: str) -> CancelOutcome:
        return self._run(self._async.cancel(chat_id))

    def list_turfs(self) -> list[Turf]:
        return self._run(self._async.list_turfs())

    def search_turfs(self, **filters: Optional[str]) -> TurfSearch:
        return self._run(self._async.search_turfs(**filters))

    def stream(self, chat_id: str, message: str, on_partial: Optional[PartialCallback] = None) -> ChatResult:
        return self._run(self._async.stream(chat_id, message, on_partial))

    def chat(self, message: str, chat_id: Optional[str] = None,
             on_partial: Optional[PartialCallback] = None) -> ChatResult:
        return self._run(self._async.chat(message, chat_id, on_partial))

    def close(self) -> None:
        self._run(self._async.aclose())
        self._loop.close()
