from __future__ import annotations

import pytest

from sporting_club.config import Settings
from sporting_club.seeds import SPORT_SEED_DATA
from sporting_club.services.club_store import ClubStore


@pytest.mark.asyncio
async def test_init_seeds_starter_sports_when_empty():
    store = ClubStore(settings=Settings(DATABASE_URL="sqlite://", SEED_INITIAL_DATA=True))
    await store.init()
    try:
        sports = await store.get_all_sports()
        assert [s.name for s in sports] == [item["name"] for item in SPORT_SEED_DATA]
        assert {s.category for s in sports} == {"Team Sports", "Racquet Sports", "Water Sports"}
        assert await store.seed_starter_sports() == 0
    finally:
        await store.close()


@pytest.mark.asyncio
async def test_seeding_skipped_when_sports_exist(store):
    await store.add_sport({"name": "Fencing", "category": "Combat Sports"})

    assert await store.seed_starter_sports() == 0
    assert [s.name for s in await store.get_all_sports()] == ["Fencing"]


@pytest.mark.asyncio
async def test_reseed_after_clear(store):
    assert await store.seed_starter_sports() == len(SPORT_SEED_DATA)
    await store.clear_all_data()

    assert await store.seed_starter_sports() == len(SPORT_SEED_DATA)
    assert len(await store.get_all_sports()) == len(SPORT_SEED_DATA)
