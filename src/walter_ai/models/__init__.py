from walter_ai.models.chat import CancelOutcome, Chat, ChatCreated, PendingExchange
from walter_ai.models.envelope import ContentItem, RPCErrorBody, RPCResponse, ToolResult
from walter_ai.models.response import Complete, Failed, Processing, ResponseStatus
from walter_ai.models.turf import Turf, TurfSearch

__all__ = [
    "CancelOutcome",
    "Chat",
    "ChatCreated",
    "Complete",
    "ContentItem",
    "Failed",
    "PendingExchange",
    "Processing",
    "RPCErrorBody",
    "RPCResponse",
    "ResponseStatus",
    "ToolResult",
    "Turf",
    "TurfSearch",
]
