"""
Walter exposed as agent tools.

Each tool has a JSON-schema parameter block and an ``execute`` coroutine
that never raises for Walter failures: errors come back as a ``ToolOutput``
with ``is_error`` set and a message safe to show the agent.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from walter_ai.cancellation import CancelToken
from walter_ai.client import AsyncWalter
from walter_ai.errors import WalterError
from walter_ai.formatting import format_cancel, format_chats, format_turfs, to_user_message

logger = logging.getLogger(__name__)

UpdateCallback = Callable[["ToolOutput"], Any]


class ToolOutput:
    __slots__ = ("text", "details", "is_error")

    def __init__(self, text: str, details: Optional[dict[str, Any]] = None, is_error: bool = False):
        self.text = text
        self.details = details or {}
        self.is_error = is_error

    @classmethod
    def error(cls, message: str, **details: Any) -> "ToolOutput":
        return cls(f"Error: {message}", {"error": message, **details}, is_error=True)

    def to_content(self) -> dict[str, Any]:
        """MCP-style content envelope."""
        return {"content": [{"type": "text", "text": self.text}], "isError": self.is_error, "details": self.details}

    def __repr__(self) -> str:
        return f"ToolOutput(is_error={self.is_error}, text={self.text[:40]!r})"


Executor = Callable[[dict[str, Any], Optional[CancelToken], Optional[UpdateCallback]], Awaitable[ToolOutput]]


class AgentTool:
    __slots__ = ("name", "label", "description", "parameters", "_execute")

    def __init__(self, name: str, label: str, description: str, parameters: dict[str, Any], execute: Executor):
        self.name = name
        self.label = label
        self.description = description
        self.parameters = parameters
        self._execute = execute

    async def execute(
        self,
        params: Optional[dict[str, Any]] = None,
        cancel_token: Optional[CancelToken] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> ToolOutput:
        try:
            return await self._execute(params or {}, cancel_token, on_update)
        except WalterError as e:
            if to_user_message(e) != str(e):
                logger.warning("%s failed with an internal error: %s", self.name, e)
            return ToolOutput.error(to_user_message(e))
        except Exception as e:
            logger.exception("%s failed unexpectedly", self.name)
            return ToolOutput.error(to_user_message(e))

    def __repr__(self) -> str:
        return f"AgentTool(name={self.name!r})"


def _text_param(params: dict[str, Any], key: str) -> str:
    value = params.get(key)
    return value.strip() if isinstance(value, str) else ""


def build_agent_tools(client: AsyncWalter) -> list[AgentTool]:
    async def chat(params: dict[str, Any], cancel_token: Optional[CancelToken],
                   on_update: Optional[UpdateCallback]) -> ToolOutput:
        message = _text_param(params, "message")
        if not message:
            return ToolOutput.error("message is required")
        chat_id = _text_param(params, "chat_id") or await client.start_chat(cancel_token)

        def partial(text: str) -> None:
            if on_update is not None:
                on_update(ToolOutput(text, {"status": "processing", "chat_id": chat_id}))

        result = await client.stream(chat_id, message, partial, cancel_token)
        return ToolOutput(result.response, {"chat_id": result.chat_id, "status": "complete"})

    async def cancel(params: dict[str, Any], cancel_token: Optional[CancelToken],
                     _on_update: Optional[UpdateCallback]) -> ToolOutput:
        chat_id = _text_param(params, "chat_id")
        if not chat_id:
            return ToolOutput.error("chat_id is required")
        outcome = await client.cancel(chat_id, cancel_token)
        return ToolOutput(format_cancel(chat_id, outcome), {"chat_id": chat_id, **outcome.model_dump(exclude_none=True)})

    async def list_chats(_params: dict[str, Any], cancel_token: Optional[CancelToken],
                         _on_update: Optional[UpdateCallback]) -> ToolOutput:
        chats = await client.list_chats(cancel_token)
        return ToolOutput(format_chats(chats), {"chats": [c.model_dump() for c in chats], "count": len(chats)})

    async def list_turfs(_params: dict[str, Any], cancel_token: Optional[CancelToken],
                         _on_update: Optional[UpdateCallback]) -> ToolOutput:
        turfs = await client.list_turfs(cancel_token)
        return ToolOutput(format_turfs(turfs), {"turfs": [t.model_dump() for t in turfs], "count": len(turfs)})

    async def search_turfs(params: dict[str, Any], cancel_token: Optional[CancelToken],
                           _on_update: Optional[UpdateCallback]) -> ToolOutput:
        filters = {k: _text_param(params, k) or None for k in ("name", "type", "os", "status")}
        if not any(filters.values()):
            return ToolOutput.error(
                "Provide at least one filter (name, type, os, or status). "
                "Use walter_list_turfs to see all systems."
            )
        found = await client.search_turfs(cancel_token=cancel_token, **filters)
        if found.count == 0:
            return ToolOutput("No systems matched your search.", {"turfs": [], "count": 0})
        text = format_turfs(found.turfs, heading="matching system(s)", count=found.count)
        return ToolOutput(text, {"turfs": [t.model_dump() for t in found.turfs], "count": found.count})

    no_params: dict[str, Any] = {"type": "object", "properties": {}, "required": []}
    chat_id_param = {"type": "string", "description": "Chat session ID (e.g. chat_k7xm9pq3)"}

    return [
        AgentTool(
            "walter_chat",
            "Walter Chat",
            "Talk to Walter, an expert at managing infrastructure. Describe what you need in plain "
            "language (check disk usage, investigate a slow API, review nginx config) and Walter will "
            "explore your connected systems to figure it out. Expect 10-60 seconds per answer.\n\n"
            "Omit chat_id to start a fresh conversation. Include it to continue an existing one "
            "(use walter_list_chats to find previous conversations).",
            {
                "type": "object",
                "properties": {
                    "message": {"type": "string", "description": "What you want Walter to investigate or do"},
                    "chat_id": {**chat_id_param, "description": "Chat session ID to continue. Omit to start a new conversation."},
                },
                "required": ["message"],
            },
            chat,
        ),
        AgentTool(
            "walter_cancel",
            "Walter Cancel",
            "Interrupt Walter if it is taking too long or going in the wrong direction. "
            "The conversation stays open; send a new message with better direction afterward.",
            {
                "type": "object",
                "properties": {"chat_id": chat_id_param},
                "required": ["chat_id"],
                "additionalProperties": False,
            },
            cancel,
        ),
        AgentTool(
            "walter_list_chats",
            "Walter List Chats",
            "List your existing conversations with Walter, to continue one rather than starting "
            "a new one. Returns chat IDs, titles and timestamps.",
            no_params,
            list_chats,
        ),
        AgentTool(
            "walter_list_turfs",
            "Walter List Turfs",
            "See what systems Walter has access to: all connected servers and cloud accounts "
            "and whether they are online.",
            no_params,
            list_turfs,
        ),
        AgentTool(
            "walter_search_turfs",
            "Walter Search Turfs",
            "Find specific systems by name, type, OS, or status.",
            {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Partial name match (case-insensitive)"},
                    "type": {"type": "string", "enum": ["server", "aws", "gcp"], "description": "System type"},
                    "os": {"type": "string", "description": "Operating system: linux, darwin, windows"},
                    "status": {"type": "string", "enum": ["online", "offline"], "description": "Connection status"},
                },
                "required": [],
            },
            search_turfs,
        ),
    ]
