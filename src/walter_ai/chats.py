"""
Chat tools — start, list, send, poll and cancel conversations with Walter.
"""

from __future__ import annotations

from typing import Any, Optional

from walter_ai.cancellation import CancelToken
from walter_ai.decoder import decode, decode_list, decode_response_status, parse_json, require_object
from walter_ai.invoker import ToolInvoker, text_of
from walter_ai.models.chat import CancelOutcome, Chat, ChatCreated, PendingExchange
from walter_ai.models.response import ResponseStatus


class ChatsAPI:
    def __init__(self, tools: ToolInvoker):
        self._tools = tools

    async def _payload(self, tool: str, args: dict[str, Any], cancel_token: Optional[CancelToken]) -> Any:
        content = await self._tools.invoke(tool, args, cancel_token)
        return parse_json(text_of(content))

    async def start(self, cancel_token: Optional[CancelToken] = None) -> str:
        """Create a new chat and return its id."""
        data = await self._payload("start_chat", {}, cancel_token)
        return decode(ChatCreated, data, "start_chat").chat_id

    async def list(self, cancel_token: Optional[CancelToken] = None) -> list[Chat]:
        data = await self._payload("list_chats", {}, cancel_token)
        return decode_list(Chat, require_object(data, "list_chats"), "chats", "list_chats")

    async def send_message(
        self, chat_id: str, message: str, cancel_token: Optional[CancelToken] = None,
    ) -> PendingExchange:
        """Submit a message; Walter answers asynchronously, see get_response()."""
        data = await self._payload("send_message", {"chat_id": chat_id, "message": message}, cancel_token)
        return decode(PendingExchange, data, "send_message")

    async def get_response(self, request_id: str, cancel_token: Optional[CancelToken] = None) -> ResponseStatus:
        data = await self._payload("get_response", {"request_id": request_id}, cancel_token)
        return decode_response_status(data)

    async def cancel(self, chat_id: str, cancel_token: Optional[CancelToken] = None) -> CancelOutcome:
        """Interrupt whatever Walter is doing in a chat. The chat stays open."""
        data = await self._payload("cancel", {"chat_id": chat_id}, cancel_token)
        return decode(CancelOutcome, data, "cancel")
