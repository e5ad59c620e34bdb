"""
JSON-RPC 2.0 envelope and MCP tool-result shapes.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, model_validator

from walter_ai.models._fields import LenientStr


class RPCErrorBody(BaseModel):
    message: str = "Unknown error"
    code: Optional[int] = None


class RPCResponse(BaseModel):
    jsonrpc: Optional[str] = None
    id: Optional[int] = None
    result: Any = None
    error: Optional[RPCErrorBody] = None


class ContentItem(BaseModel):
    """One fragment of a tool result. Unknown kinds pass through untouched."""

    model_config = ConfigDict(extra="allow")

    type: StrictStr
    text: LenientStr = None

    @model_validator(mode="after")
    def _text_items_carry_text(self) -> "ContentItem":
        if self.type == "text" and self.text is None:
            raise ValueError("text content item has no 'text'")
        return self


class ToolResult(BaseModel):
    content: list[ContentItem]
    isError: StrictBool = False
