"""Shared fixtures: an in-memory stand-in for the Mongo collections and model factories."""

import copy
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

import pytest

from database.athlete_repository import AthleteRepository
from database.workout_repository import WorkoutRepository
from models.strava_activity import StravaActivity, StravaStream
from models.workout import HeartRateExp, TimeExp, WorkoutRecord

# Wednesday
NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, condition in query.items():
        value = doc.get(key)
        if isinstance(condition, dict):
            for op, operand in condition.items():
                if value is None:
                    return False
                if op == "$gt" and not value > operand:
                    return False
                if op == "$gte" and not value >= operand:
                    return False
                if op == "$lt" and not value < operand:
                    return False
                if op == "$lte" and not value <= operand:
                    return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]):
        self.docs = docs

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self.docs:
            yield doc


class FakeCollection:
    """Implements the subset of AsyncCollection the repositories use."""

    def __init__(self):
        self.docs: list[dict[str, Any]] = []

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query: dict[str, Any]) -> FakeCursor:
        return FakeCursor([copy.deepcopy(doc) for doc in self.docs if _matches(doc, query)])

    async def insert_one(self, doc: dict[str, Any]):
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(acknowledged=True)

    async def update_one(self, query: dict[str, Any], update: dict[str, Any], upsert: bool = False):
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(copy.deepcopy(update.get("$set", {})))
                return SimpleNamespace(matched_count=1, modified_count=1, acknowledged=True)

        if upsert:
            self.docs.append({**query, **copy.deepcopy(update.get("$set", {}))})
        return SimpleNamespace(matched_count=0, modified_count=0, acknowledged=True)

    async def create_index(self, *args, **kwargs) -> str:
        return kwargs.get("name", "index")


class FakeDatabase:
    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def workout_repo(fake_db) -> WorkoutRepository:
    return WorkoutRepository(fake_db)


@pytest.fixture
def athlete_repo(fake_db) -> AthleteRepository:
    return AthleteRepository(fake_db)


def make_activity(**overrides) -> StravaActivity:
    data = {
        "id": 1001,
        "athlete_id": 42,
        "start_date": datetime(2024, 5, 14, 7, 30, tzinfo=timezone.utc),
        "moving_time": 1800,
        "elapsed_time": 2000,
        "distance": 5000.0,
        "total_elevation_gain": 30.0,
        "has_heartrate": True,
        "average_heartrate": 150.0,
        "max_heartrate": 172.0,
        "type": "Run",
        "name": "Morning Run",
        "description": "easy miles",
        "average_speed": 2.8,
    }
    data.update(overrides)
    return StravaActivity(**data)


def make_streams(heart_rate: list[float], time: list[float]) -> dict[str, StravaStream]:
    return {
        "heartrate": StravaStream(type="heartrate", data=heart_rate, original_size=len(heart_rate)),
        "time": StravaStream(type="time", data=time, original_size=len(time)),
    }


def make_record(**overrides) -> WorkoutRecord:
    data = {
        "discord_id": "discord-1",
        "activity_id": 1001,
        "activity_name": "Morning Run",
        "activity_type": "Run",
        "timestamp": datetime(2024, 5, 14, 7, 30, tzinfo=timezone.utc),
        "message_id": "msg-1",
        "exp": TimeExp(minutes=30.0),
    }
    data.update(overrides)
    return WorkoutRecord(**data)


@pytest.fixture
def activity_factory():
    return make_activity


@pytest.fixture
def streams_factory():
    return make_streams


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def hr_exp() -> HeartRateExp:
    return HeartRateExp(moderate=60.0, vigorous=360.0)
