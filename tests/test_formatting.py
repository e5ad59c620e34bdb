from walter_ai.errors import (
    DecodeError,
    ProtocolError,
    RemoteTaskError,
    RequestCancelled,
    ResponseTimeout,
    ToolError,
    TransportError,
)
from walter_ai.formatting import (
    UNEXPECTED_RESPONSE,
    format_cancel,
    format_chat_line,
    format_chats,
    format_turfs,
    to_user_message,
)
from walter_ai.models.chat import CancelOutcome, Chat
from walter_ai.models.turf import Turf


def test_internal_failures_are_masked():
    assert to_user_message(DecodeError("Chat: missing required field 'status'")) == UNEXPECTED_RESPONSE
    assert to_user_message(ProtocolError("bad envelope")) == UNEXPECTED_RESPONSE
    assert to_user_message(ValueError("boom")) == UNEXPECTED_RESPONSE


def test_user_facing_failures_pass_through():
    for error in (
        TransportError(401, "Walter API error: 401 Unauthorized"),
        ToolError("cancel", "Chat not found"),
        RemoteTaskError("Walter error: turf offline"),
        RequestCancelled(),
        ResponseTimeout("Walter response timed out after 5 minutes"),
    ):
        assert to_user_message(error) == str(error)


def test_chat_lines():
    active = Chat(id="chat_1", name="Disk", last_activity_at="2026-10-01", status="active")
    idle = Chat(id="chat_2", status="idle")
    assert format_chat_line(active) == "- chat_1: Disk (2026-10-01) 🟢"
    assert format_chat_line(idle) == "- chat_2: (untitled)"
    assert format_chats([active, idle]).startswith("2 conversation(s):\n\n- chat_1")
    assert "No existing conversations" in format_chats([])


def test_turfs():
    turfs = [
        Turf(turf_id="t1", name="web-1", type="server", status="online", os="linux"),
        Turf(turf_id="t2", name="", type="aws", status="offline"),
    ]
    text = format_turfs(turfs)
    assert text.startswith("2 connected system(s):")
    assert "🟢 web-1 (linux) — server" in text
    assert "⚫ t2 — aws" in text
    assert format_turfs(turfs[:1], heading="matching system(s)", count=9).startswith("9 matching system(s):")
    assert "No systems connected" in format_turfs([])


def test_cancel_outcomes():
    assert "Cancelled active operation in chat_1" in format_cancel("chat_1", CancelOutcome(status="cancelled"))
    assert format_cancel("chat_1", CancelOutcome(status="idle")) == "Nothing was running in chat_1."
