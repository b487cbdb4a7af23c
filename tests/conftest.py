import os
import pytest
import sqlalchemy as sa

from sqlpager.testing import created_tables, insert

from .util.models import metadata, items, item


@pytest.fixture(scope='function')
def engine() -> sa.engine.Engine:
    return sa.engine.create_engine(DATABASE_URL, future=True)


@pytest.fixture(scope='function')
def connection(engine: sa.engine.Engine) -> sa.engine.Connection:
    with engine.connect() as conn:
        yield conn


@pytest.fixture(scope='function')
def ten_items(connection: sa.engine.Connection) -> sa.engine.Connection:
    """ A connection to a database with 10 items: ids 1..10, odd ones are "open", even ones are "closed" """
    with created_tables(connection, metadata):
        insert(connection, items, *(
            item(n, status='open' if n % 2 else 'closed')
            for n in range(1, 11)
        ))
        yield connection


# URL of the database to connect to
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite://')
