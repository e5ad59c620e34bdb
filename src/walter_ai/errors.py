"""
Walter error types.

Every error carries a machine-readable ``code``; only ``TransportError``
carries an HTTP status.
"""

from typing import Any, Optional

NOT_FOUND = 404


class WalterError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TransportError(WalterError):
    """Non-success HTTP status from the Walter endpoint."""

    def __init__(self, status: int, message: str):
        super().__init__("http_error", message, {"status": status})
        self.status = status

    @property
    def session_lost(self) -> bool:
        # 401/403 are auth failures, not session loss
        return self.status == NOT_FOUND


class ConnectionError(WalterError):
    def __init__(self, message: str):
        super().__init__("connection_error", message)


class ProtocolError(WalterError):
    """Body that is not JSON or not a JSON-RPC / tool-result shape."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("protocol_error", message, details)


class RPCError(WalterError):
    def __init__(self, message: str, rpc_code: Optional[int] = None):
        super().__init__("rpc_error", message, {"rpc_code": rpc_code} if rpc_code is not None else None)
        self.rpc_code = rpc_code


class ToolError(WalterError):
    """Tool result with ``isError: true``."""

    def __init__(self, tool: str, message: str):
        super().__init__("tool_error", message, {"tool": tool})
        self.tool = tool


class DecodeError(WalterError):
    def __init__(self, message: str, record: Optional[str] = None, field: Optional[str] = None):
        details = {k: v for k, v in (("record", record), ("field", field)) if v is not None}
        super().__init__("decode_error", message, details or None)
        self.record = record
        self.field = field


class RemoteTaskError(WalterError):
    """Walter reported that the exchange itself failed."""

    def __init__(self, message: str):
        super().__init__("remote_error", message)


class RequestCancelled(WalterError):
    def __init__(self, message: str = "Request was cancelled"):
        super().__init__("cancelled", message)


class ResponseTimeout(WalterError):
    def __init__(self, message: str):
        super().__init__("timeout", message)


class ConfigError(WalterError):
    def __init__(self, message: str):
        super().__init__("config_error", message)
