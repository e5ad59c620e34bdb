"""
Plain-text rendering of Walter results for agents and terminals.
"""

from typing import Optional

from walter_ai.errors import (
    ConnectionError,
    RPCError,
    RemoteTaskError,
    RequestCancelled,
    ResponseTimeout,
    ToolError,
    TransportError,
)
from walter_ai.models.chat import CancelOutcome, Chat
from walter_ai.models.turf import Turf

UNEXPECTED_RESPONSE = "Walter returned an unexpected response. Please try again."

# Errors whose messages are written for people; the rest describe internals
_USER_FACING = (
    TransportError,
    ConnectionError,
    RPCError,
    ToolError,
    RemoteTaskError,
    RequestCancelled,
    ResponseTimeout,
)


def to_user_message(error: BaseException) -> str:
    if isinstance(error, _USER_FACING):
        return str(error)
    return UNEXPECTED_RESPONSE


def format_chat_line(chat: Chat) -> str:
    date = f" ({chat.last_activity_at})" if chat.last_activity_at else ""
    active = " 🟢" if chat.status == "active" else ""
    return f"- {chat.id}: {chat.title}{date}{active}"


def format_chats(chats: list[Chat]) -> str:
    if not chats:
        return "No existing conversations. Use walter_chat to start one."
    lines = "\n".join(format_chat_line(c) for c in chats)
    return f"{len(chats)} conversation(s):\n\n{lines}"


def format_turf_line(turf: Turf) -> str:
    dot = "🟢" if turf.online else "⚫"
    os = f" ({turf.os})" if turf.os else ""
    return f"{dot} {turf.label}{os} — {turf.type}"


def format_turfs(turfs: list[Turf], heading: str = "connected system(s)", count: Optional[int] = None) -> str:
    if not turfs:
        return "No systems connected. Set up a turf in Walter first."
    lines = "\n".join(format_turf_line(t) for t in turfs)
    return f"{len(turfs) if count is None else count} {heading}:\n\n{lines}"


def format_cancel(chat_id: str, outcome: CancelOutcome) -> str:
    if outcome.status == "cancelled":
        return f"Cancelled active operation in {chat_id}. You can send a new message to redirect Walter."
    return f"Nothing was running in {chat_id}."
