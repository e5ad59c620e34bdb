"""
Chat records — conversations with Walter.
"""

from pydantic import BaseModel, StrictStr

from walter_ai.models._fields import LenientStr


class Chat(BaseModel):
    id: StrictStr
    name: LenientStr = None
    first_message: LenientStr = None
    last_message: LenientStr = None
    last_activity_at: LenientStr = None
    status: StrictStr

    @property
    def title(self) -> str:
        return self.name or self.first_message or "(untitled)"


class ChatCreated(BaseModel):
    """start_chat payload"""
    chat_id: StrictStr


class PendingExchange(BaseModel):
    """send_message payload — one submitted message awaiting its response."""
    request_id: StrictStr
    chat_id: StrictStr


class CancelOutcome(BaseModel):
    """cancel payload"""
    status: StrictStr
    message: LenientStr = None
