"""Tests for the workout log stored in MongoDB."""

from datetime import datetime, timedelta, timezone

import pytest

from exceptions import DecodeError, InvalidArgumentsError
from models.workout import HeartRateExp, TimeExp

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


class TestInsert:

    async def test_insert_then_find_existing(self, workout_repo, record_factory):
        record = record_factory(exp=HeartRateExp(moderate=60, vigorous=360))

        await workout_repo.insert(record)
        found = await workout_repo.find_existing("discord-1", 1001)

        assert found is not None
        assert found.message_id == "msg-1"
        assert found.exp == HeartRateExp(moderate=60, vigorous=360)

    async def test_find_existing_is_keyed_by_owner(self, workout_repo, record_factory):
        await workout_repo.insert(record_factory())

        assert await workout_repo.find_existing("someone-else", 1001) is None
        assert await workout_repo.find_existing("discord-1", 9999) is None

    async def test_insert_without_owner_is_rejected(self, workout_repo, record_factory, fake_db):
        with pytest.raises(InvalidArgumentsError) as exc_info:
            await workout_repo.insert(record_factory(discord_id=""))

        assert exc_info.value.field == "discord_id"
        assert fake_db["workouts"].docs == []

    @pytest.mark.parametrize("activity_id", [0, -1])
    async def test_insert_without_activity_is_rejected(self, workout_repo, record_factory, fake_db, activity_id):
        with pytest.raises(InvalidArgumentsError):
            await workout_repo.insert(record_factory(activity_id=activity_id))

        assert fake_db["workouts"].docs == []


class TestUpdate:

    async def test_update_keeps_message_and_timestamp(self, workout_repo, record_factory):
        original = record_factory()
        await workout_repo.insert(original)

        changed = original.model_copy(update={
            "activity_name": "Renamed Run",
            "activity_type": "Walk",
            "message_id": "other-message",
            "timestamp": NOW,
            "exp": TimeExp(minutes=5)
        })
        assert await workout_repo.update(changed)

        stored = await workout_repo.find_existing("discord-1", 1001)
        assert stored.activity_name == "Renamed Run"
        assert stored.activity_type == "Walk"
        assert stored.exp == TimeExp(minutes=5)
        assert stored.message_id == original.message_id
        assert stored.timestamp == original.timestamp

    async def test_update_unknown_workout(self, workout_repo, record_factory):
        assert not await workout_repo.update(record_factory())


class TestHistory:

    async def test_thirty_day_history_window(self, workout_repo, record_factory):
        await workout_repo.insert(record_factory(activity_id=1, timestamp=NOW - timedelta(days=2)))
        await workout_repo.insert(record_factory(activity_id=2, timestamp=NOW - timedelta(days=31)))
        await workout_repo.insert(record_factory(activity_id=3, discord_id="other", timestamp=NOW - timedelta(days=2)))

        history = await workout_repo.thirty_day_history("discord-1", NOW)

        assert [record.activity_id for record in history] == [1]

    async def test_corrupt_document_raises_decode_error(self, workout_repo, fake_db):
        fake_db["workouts"].docs.append({
            "discord_id": "discord-1",
            "activity_id": 1001,
            "timestamp": NOW - timedelta(days=1),
            "exp": {"type": "steps", "count": 10}
        })

        with pytest.raises(DecodeError):
            await workout_repo.thirty_day_history("discord-1", NOW)

        with pytest.raises(DecodeError):
            await workout_repo.find_existing("discord-1", 1001)
