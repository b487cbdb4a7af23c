""" Database: configuration, connection pool, schema initialization """

from .settings import DatabaseSettings, DatabaseModeSettings
from .connection import Database
from .schema import init_schema, schema_exists, schema_files, replay_sql_file
