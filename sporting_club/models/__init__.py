"""
SQLAlchemy models for the sporting club store.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # SQLite drops tzinfo on the way back, so timestamps are stored as naive UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Sport(Base):
    __tablename__ = "sports"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(Text, nullable=False, index=True)
    max_members = Column(Integer)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class Member(Base):
    __tablename__ = "members"

    id = Column(String(36), primary_key=True, default=new_id)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    phone = Column(Text, nullable=False, default="")
    date_of_birth = Column(Date, nullable=False)
    address = Column(Text, nullable=False, default="")
    membership_date = Column(Date, nullable=False)
    status = Column(String(16), nullable=False, default="active", index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class Subscription(Base):
    __tablename__ = "subscriptions"
    # No foreign keys: deleting a sport or member leaves its subscriptions in place.
    __table_args__ = (
        UniqueConstraint("member_id", "sport_id", name="uq_subscriptions_member_sport"),
        Index("ix_subscriptions_member_id", "member_id"),
        Index("ix_subscriptions_sport_id", "sport_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    member_id = Column(String(36), nullable=False)
    sport_id = Column(String(36), nullable=False)
    subscription_date = Column(DateTime, nullable=False, default=utcnow)
    status = Column(String(16), nullable=False, default="active")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
