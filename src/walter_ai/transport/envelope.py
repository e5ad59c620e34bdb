"""
JSON-RPC envelope construction and parsing.
"""

from typing import Any, Optional

from pydantic import ValidationError

from walter_ai.errors import ProtocolError, RPCError
from walter_ai.models.envelope import RPCResponse

JSONRPC_VERSION = "2.0"


def build_request(method: str, params: Optional[dict[str, Any]], request_id: int) -> dict[str, Any]:
    """Build a call envelope. Calls always carry ``params``, even when empty."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "method": method,
        "params": params or {},
    }


def build_notification(method: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Build a notification envelope: no ``id``, ``params`` only when non-empty."""
    envelope: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": method}
    if params:
        envelope["params"] = params
    return envelope


def parse_response(raw: Any, method: str) -> Any:
    """Return the ``result`` of a response envelope, or raise its ``error``."""
    if not isinstance(raw, dict):
        raise ProtocolError(
            f"Walter response to '{method}' is not a JSON-RPC object (got {type(raw).__name__})",
        )
    try:
        response = RPCResponse.model_validate(raw)
    except ValidationError as e:
        raise ProtocolError(f"Malformed JSON-RPC response to '{method}': {e.errors()[0]['msg']}") from e
    if response.error is not None:
        raise RPCError(f"Walter RPC error: {response.error.message}", response.error.code)
    return response.result
