""" Database: engine lifecycle and connection pool limits """

from __future__ import annotations

import logging
import os
from time import monotonic
from typing import Optional, Union

import sqlalchemy as sa

from .settings import DatabaseSettings, DatabaseModeSettings
from .schema import init_schema

logger = logging.getLogger(__name__)


class Database:
    """ Manages the database engine and its connection pool

    Example:
        db = Database(DatabaseSettings())
        with db:
            with db.connect() as connection:
                ...
    """
    # The engine. `None` when closed
    engine: Optional[sa.engine.Engine]

    # Configuration
    settings: DatabaseSettings

    # Directory with *.sql files to initialize the schema from. Used with `settings.auto_create_db_schema`
    schema_dir: Optional[str]

    def __init__(self, settings: DatabaseSettings = None, *, schema_dir: Union[str, os.PathLike] = None):
        self.settings = settings or DatabaseSettings()
        self.schema_dir = os.fspath(schema_dir) if schema_dir is not None else None
        self.engine = None

    def open(self) -> sa.engine.Engine:
        """ Open the database in the default mode

        If it is already open, the old engine is disposed of.
        If `auto_create_db_schema` is set, the schema is initialized first.
        """
        self.close()

        if self.settings.auto_create_db_schema and self.schema_dir:
            self.init_schema(self.schema_dir)

        self.engine = self.create_engine(self.settings.mode_default())
        logger.info('Database opened: %r', self.engine.url)
        return self.engine

    def close(self):
        """ Dispose of the engine and its pool. Safe to call many times """
        if self.engine is not None:
            self.engine.dispose()
            logger.info('Database closed: %r', self.engine.url)
            self.engine = None

    def connect(self) -> sa.engine.Connection:
        """ Get a connection from the pool """
        if self.engine is None:
            raise RuntimeError('The database is not open. Call open() first.')
        return self.engine.connect()

    def init_schema(self, sql_dir: Union[str, os.PathLike], sorted_files: list[str] = None) -> bool:
        """ Create the database and replay the SQL files, unless it already exists

        Connects in the "init" mode: with a privileged user.

        Args:
            sql_dir: Directory with the *.sql files
            sorted_files: File names to replay, in this order. Default: every *.sql file under `sql_dir`, sorted.

        Returns:
            True if the schema has been created; False if the database already existed
        """
        engine = self.create_engine(self.settings.mode_init())
        try:
            with engine.begin() as connection:
                return init_schema(connection, self.settings.name, sql_dir, sorted_files)
        finally:
            engine.dispose()

    def create_engine(self, mode: DatabaseModeSettings) -> sa.engine.Engine:
        """ Create an engine for the given connection mode, with its pool limits """
        url = self.settings.url(mode)

        # SQLite has no use for a connection pool
        if url.get_backend_name() == 'sqlite':
            return sa.create_engine(url, future=True)

        # Zero means "no limit" for every one of them
        if mode.max_open:
            pool_size = max(min(mode.max_idle, mode.max_open), 1)
            max_overflow = mode.max_open - pool_size
        else:
            pool_size = max(mode.max_idle, 1)
            max_overflow = -1

        engine = sa.create_engine(
            url,
            future=True,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_recycle=mode.life_time or -1,
            pool_pre_ping=True,
        )
        limit_idle_time(engine, mode.idle_time)
        return engine

    def __enter__(self):
        if self.engine is None:
            self.open()
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def limit_idle_time(engine: sa.engine.Engine, idle_time: int):
    """ Discard pooled connections that have been idle for more than `idle_time` seconds

    A QueuePool only knows how to recycle connections by age. This adds recycling by idle time:
    when a connection is checked out, its last check-in time is inspected.
    """
    if not idle_time:
        return

    @sa.event.listens_for(engine, 'checkin')
    def remember_checkin_time(dbapi_connection, connection_record):
        connection_record.info['checkin_time'] = monotonic()

    @sa.event.listens_for(engine, 'checkout')
    def discard_idle_connection(dbapi_connection, connection_record, connection_proxy):
        checkin_time = connection_record.info.get('checkin_time')
        if checkin_time is not None and monotonic() - checkin_time > idle_time:
            # The pool catches this, discards the connection, and makes a new one
            connection_record.info.pop('checkin_time')
            raise sa.exc.DisconnectionError('Connection has been idle for too long')
