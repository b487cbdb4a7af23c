""" Schema initialization: create the database, replay SQL files """

from __future__ import annotations

import logging
import os
from collections import abc
from pathlib import Path
from typing import Union

import sqlalchemy as sa

logger = logging.getLogger(__name__)


def init_schema(connection: sa.engine.Connection, name: str, sql_dir: Union[str, os.PathLike], sorted_files: abc.Sequence[str] = None) -> bool:
    """ Create the database `name` and replay SQL files into it, unless it already exists

    The first failing file stops the replay; the error is raised as is.

    Note that with MySQL, files with many statements need the MULTI_STATEMENTS client flag.
    For PyMySQL: DB_INIT_PARAMS="client_flag=65536"

    Args:
        connection: A connection in the "init" mode
        name: Database name
        sql_dir: Directory with the *.sql files
        sorted_files: File names to replay, in this order. Default: every *.sql file under `sql_dir`, sorted.

    Returns:
        True if the schema has been created; False if the database already existed
    """
    if schema_exists(connection, name):
        logger.info('Database already exists, skipping schema initialization: %s', name)
        return False

    # MySQL: the init user connects without a database. Create it.
    if _is_mysql(connection):
        create_database(connection, name)

    for path in schema_files(sql_dir, sorted_files):
        logger.info('Replaying SQL file: %s', path)
        replay_sql_file(connection, path)

    # Done
    return True


def schema_exists(connection: sa.engine.Connection, name: str) -> bool:
    """ Does the database exist?

    MySQL: look it up in the INFORMATION_SCHEMA.
    Others: the database has to have some tables.
    """
    if _is_mysql(connection):
        return bool(connection.execute(
            sa.text('SELECT EXISTS (SELECT 1 FROM INFORMATION_SCHEMA.SCHEMATA WHERE SCHEMA_NAME = :name)'),
            {'name': name},
        ).scalar())
    else:
        return bool(sa.inspect(connection).get_table_names())


def create_database(connection: sa.engine.Connection, name: str):
    """ MySQL: CREATE DATABASE and USE it """
    quoted_name = connection.dialect.identifier_preparer.quote_identifier(name)
    connection.exec_driver_sql(f"CREATE DATABASE IF NOT EXISTS {quoted_name} COLLATE 'utf8mb4_unicode_ci' CHARACTER SET 'utf8mb4'")
    connection.exec_driver_sql(f'USE {quoted_name}')


def schema_files(sql_dir: Union[str, os.PathLike], sorted_files: abc.Sequence[str] = None) -> list[Path]:
    """ List SQL files to replay

    Either `sorted_files` relative to `sql_dir`, or every *.sql file found under `sql_dir` in lexical order
    """
    sql_dir = Path(sql_dir)

    if sorted_files:
        return [sql_dir / file_name for file_name in sorted_files]
    else:
        return sorted(path for path in sql_dir.rglob('*.sql') if path.is_file())


def replay_sql_file(connection: sa.engine.Connection, path: Union[str, os.PathLike]):
    """ Execute every statement from an SQL file """
    sql = Path(path).read_text(encoding='utf-8')

    # pysqlite refuses to execute more than one statement at a time, unless asked nicely
    if connection.dialect.name == 'sqlite':
        connection.connection.driver_connection.executescript(sql)  # type: ignore[union-attr]
    else:
        connection.exec_driver_sql(sql)


def _is_mysql(connection: sa.engine.Connection) -> bool:
    return connection.dialect.name in ('mysql', 'mariadb')
