from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from sporting_club.models import Sport, new_id, utcnow

logger = logging.getLogger(__name__)

SPORT_SEED_DATA: list[dict[str, Any]] = [
    {"name": "Football", "description": "Association football", "category": "Team Sports"},
    {"name": "Basketball", "description": "Indoor basketball", "category": "Team Sports"},
    {"name": "Tennis", "description": "Individual or doubles tennis", "category": "Racquet Sports"},
    {"name": "Swimming", "description": "Competitive swimming", "category": "Water Sports"},
    {"name": "Volleyball", "description": "Indoor volleyball", "category": "Team Sports"},
]


def seed_sports(db: Session) -> int:
    """Insert the starter sports when the sports table is empty. Returns rows inserted."""
    existing_count = db.scalar(select(func.count()).select_from(Sport)) or 0
    if existing_count > 0:
        return 0

    for item in SPORT_SEED_DATA:
        now = utcnow()
        db.add(Sport(id=new_id(), created_at=now, updated_at=now, **item))
        # Flush one at a time so rowid order matches list order.
        db.flush()

    db.commit()
    logger.info(f"Seeded {len(SPORT_SEED_DATA)} starter sports")
    return len(SPORT_SEED_DATA)
