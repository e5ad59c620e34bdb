"""
Calls Walter's MCP tools (``tools/call``) on top of the session.

A 404 means the session is gone: it is re-established once and the call is
retried once. A second 404 propagates.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from walter_ai.cancellation import CancelToken
from walter_ai.errors import ProtocolError, ToolError
from walter_ai.models.envelope import ContentItem, ToolResult
from walter_ai.session import SessionManager, is_session_loss
from walter_ai.transport.http import HttpTransport

logger = logging.getLogger(__name__)


def text_of(content: list[ContentItem]) -> str:
    """Join the text fragments of a tool result."""
    return "\n".join(item.text for item in content if item.type == "text" and item.text is not None)


class ToolInvoker:
    def __init__(self, transport: HttpTransport, sessions: SessionManager):
        self._transport = transport
        self._sessions = sessions

    async def invoke(
        self,
        name: str,
        arguments: Optional[dict[str, Any]] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> list[ContentItem]:
        args = arguments or {}
        await self._sessions.ensure_ready(cancel_token)
        generation = self._sessions.generation
        try:
            return await self._call(name, args, cancel_token)
        except Exception as e:
            if not is_session_loss(e):
                raise
            logger.warning("Walter session expired during '%s'; retrying once", name)
            self._sessions.invalidate(generation)
            await self._sessions.ensure_ready(cancel_token)
            return await self._call(name, args, cancel_token)

    async def _call(
        self, name: str, args: dict[str, Any], cancel_token: Optional[CancelToken],
    ) -> list[ContentItem]:
        raw = await self._transport.send(
            "tools/call",
            {"name": name, "arguments": args},
            self._sessions.next_request_id(),
            cancel_token,
        )
        try:
            result = ToolResult.model_validate(raw)
        except ValidationError as e:
            raise ProtocolError(f"Malformed result from tools/call({name}): {e.errors()[0]['msg']}") from e

        if result.isError:
            first = next((c.text for c in result.content if c.type == "text" and c.text), None)
            raise ToolError(name, first or "Unknown error")
        return result.content
