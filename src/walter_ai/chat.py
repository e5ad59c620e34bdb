"""
Chat engine — send a message and block until Walter's answer is complete.

send_message only queues the work; the engine then polls get_response:
- waits SETTLE_DELAY_S before the first poll
- emits each new partial once (exact string comparison)
- sleeps retry_after_seconds between polls while Walter is processing
- tolerates MAX_CONSECUTIVE_ERRORS - 1 failed polls in a row, backing off
  exponentially from ERROR_BACKOFF_S
- gives up after MAX_POLL_S of wall-clock time
"""

import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Optional, Union

from walter_ai.cancellation import CancelToken, sleep
from walter_ai.chats import ChatsAPI
from walter_ai.errors import RemoteTaskError, RequestCancelled, ResponseTimeout, WalterError
from walter_ai.models.response import Complete, Failed, Processing

logger = logging.getLogger(__name__)

SETTLE_DELAY_S = 2.0
MAX_POLL_S = 5 * 60.0
ERROR_BACKOFF_S = 2.0
MAX_CONSECUTIVE_ERRORS = 3
# floor for server-provided retry intervals
MIN_RETRY_S = 1.0

PartialCallback = Callable[[str], Union[None, Awaitable[None]]]


class ChatResult:
    __slots__ = ("response", "chat_id")

    def __init__(self, response: str, chat_id: str):
        self.response = response
        self.chat_id = chat_id

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ChatResult):
            return NotImplemented
        return (self.response, self.chat_id) == (other.response, other.chat_id)

    def __repr__(self) -> str:
        return f"ChatResult(chat_id={self.chat_id!r}, response={self.response[:40]!r})"


class ChatEngine:
    def __init__(
        self,
        chats: ChatsAPI,
        settle_delay_s: float = SETTLE_DELAY_S,
        max_poll_s: float = MAX_POLL_S,
        error_backoff_s: float = ERROR_BACKOFF_S,
        max_consecutive_errors: int = MAX_CONSECUTIVE_ERRORS,
        min_retry_s: float = MIN_RETRY_S,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._chats = chats
        self._settle_delay_s = settle_delay_s
        self._max_poll_s = max_poll_s
        self._error_backoff_s = error_backoff_s
        self._max_consecutive_errors = max_consecutive_errors
        self._min_retry_s = min_retry_s
        self._clock = clock

    async def stream(
        self,
        chat_id: str,
        message: str,
        on_partial: Optional[PartialCallback] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> ChatResult:
        """Send ``message`` to ``chat_id`` and return Walter's final response.

        ``on_partial`` receives each new in-progress snapshot. Raises
        RemoteTaskError, RequestCancelled or ResponseTimeout when the exchange
        does not complete.
        """
        exchange = await self._chats.send_message(chat_id, message, cancel_token)
        deadline = self._clock() + self._max_poll_s
        logger.debug("Submitted message to %s (request %s)", exchange.chat_id, exchange.request_id)

        await self._pause(self._settle_delay_s, deadline, cancel_token)

        last_partial: Optional[str] = None
        consecutive_errors = 0

        while self._clock() < deadline:
            if cancel_token is not None and cancel_token.cancelled:
                break

            try:
                status = await self._chats.get_response(exchange.request_id, cancel_token)
            except RequestCancelled:
                raise
            except WalterError as e:
                consecutive_errors += 1
                if consecutive_errors >= self._max_consecutive_errors:
                    raise
                backoff = self._error_backoff_s * 2 ** (consecutive_errors - 1)
                logger.warning(
                    "Polling %s failed (%d/%d), retrying in %gs: %s",
                    exchange.request_id, consecutive_errors, self._max_consecutive_errors, backoff, e,
                )
                await self._pause(backoff, deadline, cancel_token)
                continue
            consecutive_errors = 0

            if isinstance(status, Processing):
                if status.partial and status.partial != last_partial:
                    last_partial = status.partial
                    if on_partial is not None:
                        emitted = on_partial(status.partial)
                        if inspect.isawaitable(emitted):
                            await emitted
                await self._pause(max(status.retry_after_seconds, self._min_retry_s), deadline, cancel_token)
            elif isinstance(status, Complete):
                return ChatResult(status.response, exchange.chat_id)
            elif isinstance(status, Failed):
                raise RemoteTaskError(f"Walter error: {status.error}")

        if cancel_token is not None and cancel_token.cancelled:
            raise RequestCancelled()
        raise ResponseTimeout(f"Walter response timed out after {self._max_poll_s / 60:g} minutes")

    async def _pause(self, seconds: float, deadline: float, cancel_token: Optional[CancelToken]) -> None:
        # never sleep past the deadline
        await sleep(min(seconds, max(deadline - self._clock(), 0.0)), cancel_token)
