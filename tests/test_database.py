from sqlalchemy import inspect

from sporting_club.config import Settings
from sporting_club.database import check_database_connection, create_db_engine, database_health, init_db


def test_init_db_creates_tables_and_indexes():
    engine = create_db_engine(Settings(DATABASE_URL='sqlite://'))
    init_db(engine)
    init_db(engine)

    inspector = inspect(engine)
    assert set(inspector.get_table_names()) == {'sports', 'members', 'subscriptions'}

    unique_pairs = [c['column_names'] for c in inspector.get_unique_constraints('subscriptions')]
    assert ['member_id', 'sport_id'] in unique_pairs

    subscription_indexes = {tuple(i['column_names']) for i in inspector.get_indexes('subscriptions')}
    assert {('member_id',), ('sport_id',)} <= subscription_indexes
    assert ('category',) in {tuple(i['column_names']) for i in inspector.get_indexes('sports')}
    engine.dispose()


def test_health_checks():
    engine = create_db_engine(Settings(DATABASE_URL='sqlite://'))
    init_db(engine)

    assert check_database_connection(engine) is True
    health = database_health(engine)
    assert health['ok'] is True
    assert health['database'] == ':memory:'
    assert health['counts'] == {'sports': 0, 'members': 0, 'subscriptions': 0}
    engine.dispose()


def test_health_reports_missing_tables():
    engine = create_db_engine(Settings(DATABASE_URL='sqlite://'))

    health = database_health(engine)

    assert health['ok'] is False
    assert 'error' in health
    engine.dispose()
