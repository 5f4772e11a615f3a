"""Tests for the CommandRecord and CommandQuery models."""

from datetime import datetime, timezone

from chat_commands.models import CommandQuery, CommandRecord, UserProfile


def _record(**overrides) -> CommandRecord:
    data = {
        "_id": "a" * 24,
        "id": "msg-1",
        "message": "!ask hello",
        "user_id": "1001",
        "username": "viewer",
        "created_at": datetime(2026, 10, 19, tzinfo=timezone.utc),
    }
    data.update(overrides)
    return CommandRecord.model_validate(data)


def test_record_storage_id_alias():
    record = _record()
    assert record.storage_id == "a" * 24
    assert record.model_dump(by_alias=True)["_id"] == "a" * 24


def test_record_defaults():
    record = _record()
    assert record.num is None
    assert record.deleted_at is None
    assert record.archived is None
    assert record.ack is None
    assert record.user is None
    assert record.is_deleted is False


def test_record_deleted():
    record = _record(deleted_at=datetime(2026, 10, 19, 1, tzinfo=timezone.utc))
    assert record.is_deleted is True


def test_record_user_snapshot():
    record = _record(user={"name": "viewer", "status": "live"})
    assert record.user == UserProfile(name="viewer", status="live")


def test_query_defaults_have_no_range():
    assert CommandQuery().has_explicit_range is False


def test_query_naive_datetimes_become_utc():
    query = CommandQuery(created_after=datetime(2026, 10, 19, 12, 0))
    assert query.created_after.tzinfo == timezone.utc
    assert query.has_explicit_range is True
