"""
ClubStore - local record store for sports, members and subscriptions.

Construct one instance at application start, await init(), and hand it to
every caller. Each operation opens its own session and either commits fully
or rolls back and raises one of the errors in sporting_club.core.exceptions.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import delete, literal_column, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from sporting_club.config import Settings, get_settings
from sporting_club.core.exceptions import ConflictError, NotFoundError, NotInitializedError
from sporting_club.database import create_db_engine, database_health, init_db, make_session_factory
from sporting_club.models import Member, Sport, Subscription, new_id, utcnow
from sporting_club.schemas import (
    MemberCreate,
    MemberSchema,
    MemberUpdate,
    MemberWithSports,
    SportCreate,
    SportSchema,
    SportUpdate,
    SportWithMembers,
    SubscriptionSchema,
)
from sporting_club.seeds import seed_sports

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Insertion order.
INSERTION_ORDER = literal_column("rowid")


def _coerce(schema: Type[SchemaT], data: Union[SchemaT, dict[str, Any]]) -> SchemaT:
    if isinstance(data, schema):
        return data
    return schema.model_validate(data)


class ClubStore:
    """Data access for sports, members and the subscriptions linking them."""

    def __init__(self, settings: Optional[Settings] = None, engine: Optional[Engine] = None):
        self.settings = settings or get_settings()
        self._engine = engine
        self._owns_engine = engine is None
        self._session_factory: Optional[sessionmaker[Session]] = None

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None

    async def init(self) -> None:
        """Create the schema and seed starter sports on first use."""
        if self.is_initialized:
            return

        if self._engine is None:
            self._engine = create_db_engine(self.settings)
        init_db(self._engine)
        self._session_factory = make_session_factory(self._engine)

        if self.settings.seed_initial_data:
            await self.seed_starter_sports()

        logger.info(f"{self.settings.app_name} store initialized ({self.settings.app_env})")

    async def seed_starter_sports(self) -> int:
        """Insert the starter sports if there are no sports yet. Returns rows inserted."""
        with self._session() as db:
            return seed_sports(db)

    async def close(self) -> None:
        if self._engine is not None and self._owns_engine:
            self._engine.dispose()
            self._engine = None
        self._session_factory = None
        logger.info("Club store closed")

    async def health(self) -> dict[str, Any]:
        if self._engine is None or not self.is_initialized:
            raise NotInitializedError("Database not initialized. Call init() first.")
        return database_health(self._engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._session_factory is None:
            raise NotInitializedError("Database not initialized. Call init() first.")
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def _commit(self, db: Session, conflict_message: str) -> None:
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            logger.warning(f"{conflict_message}: {exc.orig}")
            raise ConflictError(conflict_message) from exc
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Database write failed: {str(exc)}")
            raise

    # Sports

    async def add_sport(self, data: Union[SportCreate, dict[str, Any]]) -> SportSchema:
        payload = _coerce(SportCreate, data)
        now = utcnow()
        with self._session() as db:
            sport = Sport(id=new_id(), created_at=now, updated_at=now, **payload.model_dump())
            db.add(sport)
            self._commit(db, f"Sport {sport.id} already exists")
            logger.info(f"Added sport {sport.name} ({sport.id})")
            return SportSchema.model_validate(sport)

    async def get_sport(self, sport_id: str) -> Optional[SportSchema]:
        with self._session() as db:
            sport = db.get(Sport, sport_id)
            return SportSchema.model_validate(sport) if sport else None

    async def get_all_sports(self) -> list[SportSchema]:
        with self._session() as db:
            rows = db.scalars(select(Sport).order_by(INSERTION_ORDER)).all()
            return [SportSchema.model_validate(row) for row in rows]

    async def get_sports_by_category(self, category: str) -> list[SportSchema]:
        with self._session() as db:
            rows = db.scalars(
                select(Sport).where(Sport.category == category).order_by(INSERTION_ORDER)
            ).all()
            return [SportSchema.model_validate(row) for row in rows]

    async def update_sport(self, sport_id: str, data: Union[SportUpdate, dict[str, Any]]) -> SportSchema:
        changes = _coerce(SportUpdate, data).model_dump(exclude_unset=True)
        with self._session() as db:
            sport = db.get(Sport, sport_id)
            if sport is None:
                logger.warning(f"Update of unknown sport {sport_id}")
                raise NotFoundError("Sport not found")
            for field, value in changes.items():
                setattr(sport, field, value)
            sport.updated_at = utcnow()
            self._commit(db, f"Sport {sport_id} update conflicts with an existing record")
            return SportSchema.model_validate(sport)

    async def delete_sport(self, sport_id: str) -> bool:
        """Remove a sport. Its subscriptions are kept; returns False if nothing was deleted."""
        with self._session() as db:
            sport = db.get(Sport, sport_id)
            if sport is None:
                return False
            db.delete(sport)
            self._commit(db, f"Sport {sport_id} could not be deleted")
            logger.info(f"Deleted sport {sport_id}")
            return True

    # Members

    async def add_member(self, data: Union[MemberCreate, dict[str, Any]]) -> MemberSchema:
        payload = _coerce(MemberCreate, data)
        now = utcnow()
        with self._session() as db:
            member = Member(id=new_id(), created_at=now, updated_at=now, **payload.model_dump())
            db.add(member)
            self._commit(db, f"A member with email {payload.email} already exists")
            logger.info(f"Added member {member.first_name} {member.last_name} ({member.id})")
            return MemberSchema.model_validate(member)

    async def get_member(self, member_id: str) -> Optional[MemberSchema]:
        with self._session() as db:
            member = db.get(Member, member_id)
            return MemberSchema.model_validate(member) if member else None

    async def get_member_by_email(self, email: str) -> Optional[MemberSchema]:
        with self._session() as db:
            member = db.scalars(select(Member).where(Member.email == email)).first()
            return MemberSchema.model_validate(member) if member else None

    async def get_all_members(self) -> list[MemberSchema]:
        with self._session() as db:
            rows = db.scalars(select(Member).order_by(INSERTION_ORDER)).all()
            return [MemberSchema.model_validate(row) for row in rows]

    async def get_members_by_status(self, status: str) -> list[MemberSchema]:
        with self._session() as db:
            rows = db.scalars(
                select(Member).where(Member.status == status).order_by(INSERTION_ORDER)
            ).all()
            return [MemberSchema.model_validate(row) for row in rows]

    async def update_member(self, member_id: str, data: Union[MemberUpdate, dict[str, Any]]) -> MemberSchema:
        changes = _coerce(MemberUpdate, data).model_dump(exclude_unset=True)
        with self._session() as db:
            member = db.get(Member, member_id)
            if member is None:
                logger.warning(f"Update of unknown member {member_id}")
                raise NotFoundError("Member not found")
            for field, value in changes.items():
                setattr(member, field, value)
            member.updated_at = utcnow()
            self._commit(db, f"A member with email {changes.get('email', member.email)} already exists")
            return MemberSchema.model_validate(member)

    async def delete_member(self, member_id: str) -> bool:
        """Remove a member. Their subscriptions are kept; returns False if nothing was deleted."""
        with self._session() as db:
            member = db.get(Member, member_id)
            if member is None:
                return False
            db.delete(member)
            self._commit(db, f"Member {member_id} could not be deleted")
            logger.info(f"Deleted member {member_id}")
            return True

    # Subscriptions

    @staticmethod
    def _find_subscription(db: Session, member_id: str, sport_id: str) -> Optional[Subscription]:
        return db.scalars(
            select(Subscription).where(
                Subscription.member_id == member_id,
                Subscription.sport_id == sport_id,
            )
        ).first()

    async def subscribe_member_to_sport(self, member_id: str, sport_id: str) -> SubscriptionSchema:
        """
        Subscribe a member to a sport.

        A cancelled subscription for the same pair is reactivated in place, so the
        pair stays unique; an active one raises ConflictError.
        """
        conflict = "Member is already subscribed to this sport"
        with self._session() as db:
            subscription = self._find_subscription(db, member_id, sport_id)
            now = utcnow()
            if subscription is not None and subscription.status == "active":
                logger.warning(f"{conflict}: member={member_id} sport={sport_id}")
                raise ConflictError(conflict)

            if subscription is None:
                subscription = Subscription(
                    id=new_id(),
                    member_id=member_id,
                    sport_id=sport_id,
                    subscription_date=now,
                    status="active",
                    created_at=now,
                    updated_at=now,
                )
                db.add(subscription)
            else:
                subscription.status = "active"
                subscription.subscription_date = now
                subscription.updated_at = now

            self._commit(db, conflict)
            logger.info(f"Subscribed member {member_id} to sport {sport_id}")
            return SubscriptionSchema.model_validate(subscription)

    async def get_subscription(self, member_id: str, sport_id: str) -> Optional[SubscriptionSchema]:
        with self._session() as db:
            subscription = self._find_subscription(db, member_id, sport_id)
            return SubscriptionSchema.model_validate(subscription) if subscription else None

    async def get_member_subscriptions(self, member_id: str) -> list[SubscriptionSchema]:
        with self._session() as db:
            rows = db.scalars(
                select(Subscription).where(Subscription.member_id == member_id).order_by(INSERTION_ORDER)
            ).all()
            return [SubscriptionSchema.model_validate(row) for row in rows]

    async def get_sport_subscriptions(self, sport_id: str) -> list[SubscriptionSchema]:
        with self._session() as db:
            rows = db.scalars(
                select(Subscription).where(Subscription.sport_id == sport_id).order_by(INSERTION_ORDER)
            ).all()
            return [SubscriptionSchema.model_validate(row) for row in rows]

    async def get_all_subscriptions(self) -> list[SubscriptionSchema]:
        with self._session() as db:
            rows = db.scalars(select(Subscription).order_by(INSERTION_ORDER)).all()
            return [SubscriptionSchema.model_validate(row) for row in rows]

    async def get_active_subscriptions(self) -> list[SubscriptionSchema]:
        with self._session() as db:
            rows = db.scalars(
                select(Subscription).where(Subscription.status == "active").order_by(INSERTION_ORDER)
            ).all()
            return [SubscriptionSchema.model_validate(row) for row in rows]

    async def cancel_subscription(self, member_id: str, sport_id: str) -> SubscriptionSchema:
        """Mark a subscription cancelled. The row is kept for history."""
        with self._session() as db:
            subscription = self._find_subscription(db, member_id, sport_id)
            if subscription is None:
                logger.warning(f"Cancel of unknown subscription member={member_id} sport={sport_id}")
                raise NotFoundError("Subscription not found")
            subscription.status = "cancelled"
            subscription.updated_at = utcnow()
            self._commit(db, "Subscription could not be cancelled")
            logger.info(f"Cancelled subscription of member {member_id} to sport {sport_id}")
            return SubscriptionSchema.model_validate(subscription)

    # Joined views

    async def get_member_with_sports(self, member_id: str) -> Optional[MemberWithSports]:
        """Member plus the sports reached through active subscriptions; None if no such member."""
        with self._session() as db:
            member = db.get(Member, member_id)
            if member is None:
                return None

            active = db.scalars(
                select(Subscription)
                .where(Subscription.member_id == member_id, Subscription.status == "active")
                .order_by(INSERTION_ORDER)
            ).all()
            # Subscriptions to deleted sports are skipped.
            sports = [sport for sport in (db.get(Sport, sub.sport_id) for sub in active) if sport is not None]

            return MemberWithSports(
                **MemberSchema.model_validate(member).model_dump(),
                sports=[SportSchema.model_validate(sport) for sport in sports],
                subscriptions=[SubscriptionSchema.model_validate(sub) for sub in active],
            )

    async def get_sport_with_members(self, sport_id: str) -> Optional[SportWithMembers]:
        """Sport plus the members reached through active subscriptions; None if no such sport."""
        with self._session() as db:
            sport = db.get(Sport, sport_id)
            if sport is None:
                return None

            active = db.scalars(
                select(Subscription)
                .where(Subscription.sport_id == sport_id, Subscription.status == "active")
                .order_by(INSERTION_ORDER)
            ).all()
            members = [member for member in (db.get(Member, sub.member_id) for sub in active) if member is not None]

            return SportWithMembers(
                **SportSchema.model_validate(sport).model_dump(),
                members=[MemberSchema.model_validate(member) for member in members],
                subscriptions=[SubscriptionSchema.model_validate(sub) for sub in active],
                member_count=len(active),
            )

    async def clear_all_data(self) -> None:
        """Empty all three tables in one transaction."""
        with self._session() as db:
            for model in (Subscription, Member, Sport):
                db.execute(delete(model))
            self._commit(db, "Could not clear club data")
        logger.info("Cleared all sports, members and subscriptions")
