"""Response decoding: strict required fields, lenient optionals, tagged status."""

import pytest

from walter_ai.decoder import decode, decode_list, decode_response_status, parse_json
from walter_ai.errors import DecodeError
from walter_ai.models.chat import CancelOutcome, Chat, PendingExchange
from walter_ai.models.response import Complete, Failed, Processing
from walter_ai.models.turf import Turf

CHAT = {
    "id": "chat_k7xm9pq3",
    "name": "Disk usage on web-1",
    "first_message": "check disk usage",
    "last_message": "Done: / is 81% full",
    "last_activity_at": "2026-10-01T12:00:00Z",
    "status": "active",
}


class TestResponseStatus:
    def test_processing_with_partial(self):
        status = decode_response_status({"status": "processing", "partial": "Looking…", "retry_after_seconds": 3})
        assert isinstance(status, Processing)
        assert status.partial == "Looking…"
        assert status.retry_after_seconds == 3.0

    def test_processing_defaults_retry_interval(self):
        status = decode_response_status({"status": "processing"})
        assert status.partial is None
        assert status.retry_after_seconds == 4.0
        assert decode_response_status({"status": "processing", "retry_after_seconds": "soon"}).retry_after_seconds == 4.0
        assert decode_response_status({"status": "processing", "retry_after_seconds": True}).retry_after_seconds == 4.0

    def test_complete_and_error(self):
        assert decode_response_status({"status": "complete", "response": "done"}) == Complete(status="complete", response="done")
        assert decode_response_status({"status": "error", "error": "turf offline"}) == Failed(status="error", error="turf offline")

    def test_unknown_status_is_decode_error(self):
        with pytest.raises(DecodeError) as exc:
            decode_response_status({"status": "bogus"})
        assert "bogus" in str(exc.value)
        assert exc.value.record == "ResponseStatus"

    def test_missing_status(self):
        with pytest.raises(DecodeError) as exc:
            decode_response_status({"response": "done"})
        assert exc.value.field == "status"

    def test_variant_required_field(self):
        with pytest.raises(DecodeError) as exc:
            decode_response_status({"status": "complete"})
        assert exc.value.field == "response"
        assert "ResponseStatus" in str(exc.value)

        with pytest.raises(DecodeError) as exc:
            decode_response_status({"status": "error", "error": 5})
        assert exc.value.field == "error"

    def test_non_object(self):
        with pytest.raises(DecodeError, match="expected object"):
            decode_response_status(["complete"])


class TestRecords:
    def test_chat_round_trip(self):
        chat = decode(Chat, CHAT)
        assert chat.id == "chat_k7xm9pq3"
        assert chat.title == "Disk usage on web-1"

    def test_chat_missing_status_names_field_and_record(self):
        raw = {k: v for k, v in CHAT.items() if k != "status"}
        with pytest.raises(DecodeError) as exc:
            decode(Chat, raw)
        assert exc.value.field == "status"
        assert exc.value.record == "Chat"
        assert "status" in str(exc.value) and "Chat" in str(exc.value)

    def test_required_field_of_wrong_type(self):
        with pytest.raises(DecodeError) as exc:
            decode(Chat, {**CHAT, "id": 42})
        assert exc.value.field == "id"

    def test_optional_fields_of_wrong_type_become_none(self):
        chat = decode(Chat, {"id": "c1", "status": "idle", "name": 7, "last_activity_at": ["x"]})
        assert chat.name is None
        assert chat.last_activity_at is None
        assert chat.title == "(untitled)"

    def test_turf_optionals(self):
        turf = decode(Turf, {"turf_id": "t1", "name": "", "type": "aws", "status": "offline", "hostname": "ip-10-0-0-1", "os": None})
        assert turf.os is None
        assert turf.label == "ip-10-0-0-1"
        assert not turf.online

    def test_exchange_and_cancel_payloads(self):
        assert decode(PendingExchange, {"request_id": "req_1", "chat_id": "c1"}).request_id == "req_1"
        outcome = decode(CancelOutcome, {"status": "idle", "message": 3})
        assert outcome.message is None

    def test_list_threads_item_path(self):
        payload = {"chats": [CHAT, {**CHAT, "status": None}]}
        with pytest.raises(DecodeError) as exc:
            decode_list(Chat, payload, "chats", "list_chats")
        assert exc.value.field == "chats[1].status"
        assert exc.value.record == "Chat"

    def test_list_field_must_be_array(self):
        with pytest.raises(DecodeError) as exc:
            decode_list(Chat, {"chats": {}}, "chats", "list_chats")
        assert exc.value.field == "chats"


class TestParseJson:
    def test_valid(self):
        assert parse_json('{"chat_id": "c1"}') == {"chat_id": "c1"}

    def test_invalid_json_preview_is_bounded(self):
        text = "Walter is thinking " * 50
        with pytest.raises(DecodeError) as exc:
            parse_json(text)
        message = str(exc.value)
        assert message.startswith("Expected JSON from Walter, got: Walter is thinking")
        assert message.endswith("…")
        assert len(message) < len(text)

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_are_rejected(self, constant):
        with pytest.raises(DecodeError, match="Expected JSON from Walter"):
            parse_json(f'{{"status": "processing", "retry_after_seconds": {constant}}}')


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), 1e999])
def test_non_finite_retry_interval_falls_back_to_default(value):
    status = decode_response_status({"status": "processing", "retry_after_seconds": value})
    assert status.retry_after_seconds == 4.0
