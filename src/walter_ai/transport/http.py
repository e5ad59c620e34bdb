"""
HTTP transport for the Walter MCP endpoint.

Every call is a POST of one JSON-RPC envelope to ``{base_url}/mcp``. The
transport owns the bearer token and round-trips the ``Mcp-Session-Id``
header; the session record itself belongs to the session manager.
"""

import logging
from typing import Any, Optional

import httpx

from walter_ai.cancellation import CancelToken, race
from walter_ai.errors import ConnectionError, ProtocolError, TransportError
from walter_ai.session import Session
from walter_ai.transport.envelope import build_notification, build_request, parse_response

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://walterops.com"
MCP_PATH = "/mcp"
SESSION_HEADER = "Mcp-Session-Id"
DEFAULT_RPC_TIMEOUT_S = 30.0
SNIPPET_CHARS = 200


class HttpTransport:
    def __init__(
        self,
        session: Session,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        client_name: str = "walter-ai-sdk",
        client_version: str = "0.1.0",
        timeout: float = DEFAULT_RPC_TIMEOUT_S,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._session = session
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "User-Agent": f"{client_name}/{client_version}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            # the per-call deadline is enforced by race(); httpx only guards connects
            timeout=httpx.Timeout(None, connect=timeout),
            transport=http_transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        headers = {"Authorization": f"Bearer {self._token}"}
        if self._session.session_id:
            headers[SESSION_HEADER] = self._session.session_id
        return headers

    async def _post(self, body: dict[str, Any], method: str) -> httpx.Response:
        try:
            resp = await self._client.post(MCP_PATH, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise ConnectionError(f"Walter connection failed during '{method}': {e}") from e
        if not resp.is_success:
            raise TransportError(resp.status_code, f"Walter API error: {resp.status_code} {resp.reason_phrase}")
        session_id = resp.headers.get(SESSION_HEADER)
        if session_id:
            self._session.session_id = session_id
        return resp

    async def send(
        self,
        method: str,
        params: Optional[dict[str, Any]],
        request_id: int,
        cancel_token: Optional[CancelToken] = None,
    ) -> Any:
        """Issue one JSON-RPC call and return its ``result``."""
        body = build_request(method, params, request_id)
        logger.debug("-> %s id=%d", method, request_id)
        resp = await race(self._post(body, method), cancel_token, self._timeout, what=f"Walter call '{method}'")
        try:
            data = resp.json()
        except ValueError as e:
            snippet = resp.text[:SNIPPET_CHARS]
            raise ProtocolError(
                f"Walter returned non-JSON for '{method}': {snippet!r}",
                {"status": resp.status_code, "body": snippet},
            ) from e
        return parse_response(data, method)

    async def notify(
        self,
        method: str,
        params: Optional[dict[str, Any]] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> None:
        """Send a notification; only the status code is checked."""
        body = build_notification(method, params)
        logger.debug("-> %s (notification)", method)
        await race(self._post(body, method), cancel_token, self._timeout, what=f"Walter notification '{method}'")

    async def aclose(self) -> None:
        await self._client.aclose()
