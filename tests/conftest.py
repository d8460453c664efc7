import os
import sys
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('SEED_INITIAL_DATA', 'false')

from sporting_club.config import Settings  # noqa: E402
from sporting_club.services.club_store import ClubStore  # noqa: E402


@pytest.fixture
def settings():
    return Settings(DATABASE_URL='sqlite://', APP_ENV='test', SEED_INITIAL_DATA=False)


@pytest_asyncio.fixture
async def store(settings):
    club_store = ClubStore(settings=settings)
    await club_store.init()
    yield club_store
    await club_store.close()


@pytest.fixture
def member_data():
    return {
        'first_name': 'Ana',
        'last_name': 'Silva',
        'email': 'a@b.com',
        'phone': '+351 900 000 000',
        'date_of_birth': date(1990, 5, 17),
        'address': 'Rua do Clube 1',
        'membership_date': date(2024, 1, 10),
        'status': 'active',
    }


@pytest.fixture
def sport_data():
    return {'name': 'Football', 'description': 'Association football', 'category': 'Team Sports'}
