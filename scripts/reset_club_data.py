"""
Maintenance utility to wipe the club database and reseed the starter sports.

Usage:
  python scripts/reset_club_data.py
"""
from __future__ import annotations

import asyncio
import logging

from sporting_club.config import get_settings
from sporting_club.services.club_store import ClubStore


async def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    store = ClubStore(settings=settings.model_copy(update={"seed_initial_data": False}))
    await store.init()
    try:
        await store.clear_all_data()
        inserted = await store.seed_starter_sports()
        total = len(await store.get_all_sports())
        print(f"seed_starter_sports inserted={inserted} total={total}")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
