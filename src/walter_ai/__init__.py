"""
walter-ai — Walter SDK for Python.

Talk to Walter, the infrastructure investigator, over its MCP endpoint.
JSON-RPC session handling plus a blocking, streaming chat call.
"""

from walter_ai.cancellation import CancelToken
from walter_ai.chat import ChatResult
from walter_ai.client import AsyncWalter, Walter
from walter_ai.config import WalterConfig, load_config
from walter_ai.errors import (
    ConfigError,
    ConnectionError,
    DecodeError,
    ProtocolError,
    RPCError,
    RemoteTaskError,
    RequestCancelled,
    ResponseTimeout,
    ToolError,
    TransportError,
    WalterError,
)
from walter_ai.models import Chat, Complete, Failed, PendingExchange, Processing, Turf

__version__ = "0.1.0"
__all__ = [
    "AsyncWalter",
    "Walter",
    "CancelToken",
    "ChatResult",
    "WalterConfig",
    "load_config",
    "WalterError",
    "TransportError",
    "ConnectionError",
    "ProtocolError",
    "RPCError",
    "ToolError",
    "DecodeError",
    "RemoteTaskError",
    "RequestCancelled",
    "ResponseTimeout",
    "ConfigError",
    "Chat",
    "Turf",
    "PendingExchange",
    "Processing",
    "Complete",
    "Failed",
]
