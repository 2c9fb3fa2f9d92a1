import pytest

from exceptions import DecodeError, UnauthorizedError
from models.athlete import Athlete


async def test_linked_athlete(athlete_repo):
    await athlete_repo.create_or_update_athlete(Athlete(athlete_id=42, discord_id="discord-1", max_heart_rate=180))

    athlete = await athlete_repo.get_linked_athlete(42)

    assert athlete.discord_id == "discord-1"
    assert athlete.max_heart_rate == 180


async def test_unknown_athlete_is_unauthorized(athlete_repo):
    with pytest.raises(UnauthorizedError) as exc_info:
        await athlete_repo.get_linked_athlete(42)

    assert exc_info.value.athlete_id == 42


async def test_athlete_without_discord_link_is_unauthorized(athlete_repo, fake_db):
    fake_db["athletes"].docs.append({"athlete_id": 42, "discord_id": ""})

    with pytest.raises(UnauthorizedError):
        await athlete_repo.get_linked_athlete(42)


async def test_max_heart_rate_only_set_for_known_athletes(athlete_repo):
    assert not await athlete_repo.set_max_heart_rate(42, 180)

    await athlete_repo.create_or_update_athlete(Athlete(athlete_id=42, discord_id="discord-1"))

    assert await athlete_repo.set_max_heart_rate(42, 180)
    assert (await athlete_repo.get_athlete(42)).max_heart_rate == 180


async def test_malformed_tokens_raise_decode_error(athlete_repo, fake_db):
    fake_db["strava_tokens"].docs.append({"athlete_id": 42, "access_token": "access"})

    with pytest.raises(DecodeError):
        await athlete_repo.get_tokens(42)
