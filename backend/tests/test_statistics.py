"""Tests for aggregate like/dislike statistics."""
from datetime import datetime, timezone

import pytest

from community_events.schemas.response import ResponseRecord
from community_events.services.response_service import ResponseStore
from community_events.services.statistics_service import compute_statistics, count_responses

T1 = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)


def _record(event_id: str, participant_id: str, response_type: str) -> ResponseRecord:
    return ResponseRecord(
        id=f"{event_id}_{participant_id}",
        event_id=event_id,
        participant_id=participant_id,
        response_type=response_type,
        timestamp=T1,
    )


@pytest.fixture
def store(response_collection):
    return ResponseStore(response_collection)


class TestComputeStatistics:

    def test_reference_example(self, store):
        for event_id, participant_id, kind in [
            ("e1", "u1", "like"), ("e1", "u2", "like"), ("e1", "u3", "dislike"), ("e2", "u1", "like"),
        ]:
            store.upsert_response(event_id, participant_id, kind, T1)

        stats = store.compute_statistics().model_dump(by_alias=True)
        assert stats["events"]["e1"] == {"likes": 2, "dislikes": 1, "totalResponses": 3}
        assert stats["events"]["e2"] == {"likes": 1, "dislikes": 0, "totalResponses": 1}
        assert stats["totals"] == {"likes": 3, "dislikes": 1, "totalResponses": 4, "eventCount": 2}

    def test_empty_storage(self, store):
        stats = store.compute_statistics()
        assert stats.events == {}
        assert stats.totals.event_count == 0
        assert stats.totals.total_responses == 0

    def test_changed_response_counted_once(self, store):
        store.upsert_response("e1", "u1", "like", T1)
        store.upsert_response("e1", "u1", "dislike", T1)
        stats = store.compute_statistics()
        assert (stats.events["e1"].likes, stats.events["e1"].dislikes) == (0, 1)

    def test_event_disappears_when_last_response_withdrawn(self, store):
        store.upsert_response("e1", "u1", "like", T1)
        store.upsert_response("e2", "u1", "like", T1)
        store.delete_response("e1", "u1")
        stats = store.compute_statistics()
        assert list(stats.events) == ["e2"]
        assert stats.totals.event_count == 1


class TestUnknownResponseTypes:
    """Records with an unrecognized type are excluded from every count."""

    def test_count_responses_skips_unknown(self):
        stats = count_responses([_record("e1", "u1", "like"), _record("e1", "u2", "meh")])
        assert (stats.likes, stats.dislikes, stats.total_responses) == (1, 0, 1)

    def test_event_with_only_unknown_types_is_absent(self):
        stats = compute_statistics({
            "e1": [_record("e1", "u1", "meh")],
            "e2": [_record("e2", "u1", "dislike")],
        })
        assert list(stats.events) == ["e2"]
        assert stats.totals.event_count == 1
        assert stats.totals.total_responses == 1

    def test_unknown_type_in_document_store(self, tmp_path):
        from community_events.storage.document import DocumentCollection

        collection = DocumentCollection(tmp_path / "event_responses.json")
        legacy = _record("e1", "u9", "maybe").model_dump()
        collection.put(legacy["id"], legacy)
        store = ResponseStore(collection)
        store.upsert_response("e1", "u1", "like", T1)
        stats = store.compute_statistics()
        assert stats.events["e1"].total_responses == 1
        assert len(store.list_responses_for_event("e1")) == 2
