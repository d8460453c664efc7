"""
Database connection and session management.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine, func, select, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sporting_club.config import Settings
from sporting_club.models import Base, Member, Sport, Subscription

logger = logging.getLogger(__name__)


def create_db_engine(settings: Settings) -> Engine:
    """
    Build the engine for the configured SQLite database.

    An in-memory URL gets a single shared connection so every session sees the same data.
    """
    url = make_url(settings.database_url)
    if url.database in (None, "", ":memory:"):
        return create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.db_echo,
        )
    return create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        pool_pre_ping=True,
        echo=settings.db_echo,
    )


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """
    Create the sports, members and subscriptions tables if they do not exist.
    """
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database schema ready on {engine.url.render_as_string(hide_password=True)}")


def check_database_connection(engine: Engine) -> bool:
    """
    Return True when the database connection is healthy.
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


def database_health(engine: Engine) -> dict[str, Any]:
    """
    Return structured database health details.
    """
    try:
        with engine.connect() as connection:
            version = connection.execute(text("SELECT sqlite_version()")).scalar()
            counts = {
                model.__tablename__: int(connection.execute(select(func.count()).select_from(model)).scalar() or 0)
                for model in (Sport, Member, Subscription)
            }

        return {
            "ok": True,
            "dialect": engine.dialect.name,
            "database": engine.url.database or ":memory:",
            "server_version": str(version),
            "counts": counts,
        }
    except SQLAlchemyError as exc:
        return {
            "ok": False,
            "error": str(exc),
        }
