"""
Turf tools — the systems Walter is connected to.
"""

from __future__ import annotations

from typing import Any, Optional

from walter_ai.cancellation import CancelToken
from walter_ai.decoder import decode, decode_list, parse_json, require_object
from walter_ai.errors import DecodeError
from walter_ai.invoker import ToolInvoker, text_of
from walter_ai.models.turf import Turf, TurfSearch


class TurfsAPI:
    def __init__(self, tools: ToolInvoker):
        self._tools = tools

    async def list(self, cancel_token: Optional[CancelToken] = None) -> list[Turf]:
        content = await self._tools.invoke("list_turfs", {}, cancel_token)
        data = require_object(parse_json(text_of(content)), "list_turfs")
        return decode_list(Turf, data, "turfs", "list_turfs")

    async def search(
        self,
        name: Optional[str] = None,
        type: Optional[str] = None,
        os: Optional[str] = None,
        status: Optional[str] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> TurfSearch:
        """Filter turfs; only the filters given are sent."""
        filters = {"name": name, "type": type, "os": os, "status": status}
        args: dict[str, Any] = {k: v for k, v in filters.items() if v is not None}
        content = await self._tools.invoke("search_turfs", args, cancel_token)
        data = require_object(parse_json(text_of(content)), "search_turfs")
        turfs = decode_list(Turf, data, "turfs", "search_turfs")
        count = data.get("count")
        if isinstance(count, bool) or not isinstance(count, (int, float)):
            raise DecodeError(
                f"search_turfs: expected number for 'count', got {count.__class__.__name__}",
                "search_turfs", "count",
            )
        return TurfSearch(turfs=turfs, count=int(count))
