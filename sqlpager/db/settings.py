""" Database configuration: read from the environment """

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qsl

import sqlalchemy as sa
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class DatabaseModeSettings:
    """ Credentials and pool limits for one connection mode """
    user: str
    password: str
    name: str
    params: str

    # Pool limits: max connections, max idle connections
    max_open: int
    max_idle: int

    # Connection lifetime & idle time, seconds
    life_time: int
    idle_time: int


class DatabaseSettings(BaseSettings):
    """ Database settings with environment variable support

    There are two connection modes:
    * "init" mode: a privileged user that creates the database. Small fixed pool.
    * "default" mode: the application user
    """
    model_config = SettingsConfigDict(
        env_prefix='DB_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # Create the database and replay the schema files when the database is opened
    auto_create_db_schema: bool = Field(
        default=False,
        validation_alias=AliasChoices('AUTO_CREATE_DB_SCHEMA', 'auto_create_db_schema'),
    )

    # SqlAlchemy driver name: "mysql+pymysql", "postgresql+psycopg2", "sqlite", ...
    type: str = 'mysql+pymysql'
    host: Optional[str] = 'localhost'
    port: Optional[int] = None

    # Default mode
    user: str = ''
    password: str = ''
    name: str = ''
    params: str = ''
    max_open: int = 10
    max_idle: int = 5
    life_time: int = 300
    idle_time: int = 60

    # Init mode
    init_user: str = ''
    init_password: str = ''
    init_name: str = ''
    init_params: str = ''

    @field_validator('max_open', 'max_idle', 'life_time', 'idle_time')
    @classmethod
    def validate_pool_limit(cls, v: int) -> int:
        if v < 0:
            raise ValueError('Pool limits cannot be negative')
        return v

    def mode_init(self) -> DatabaseModeSettings:
        """ Settings for the "init" mode

        MySQL connects without a database when `init_name` is empty: it creates one.
        Other backends can't do that: they initialize the application database `name`.
        """
        return DatabaseModeSettings(
            user=self.init_user,
            password=self.init_password,
            name=self.init_name or ('' if self.is_mysql else self.name),
            params=self.init_params,
            max_open=1,
            max_idle=1,
            life_time=30,
            idle_time=30,
        )

    @property
    def is_mysql(self) -> bool:
        return sa.engine.make_url(f'{self.type}://').get_backend_name() in ('mysql', 'mariadb')

    def mode_default(self) -> DatabaseModeSettings:
        """ Settings for the "default" mode """
        return DatabaseModeSettings(
            user=self.user,
            password=self.password,
            name=self.name,
            params=self.params,
            max_open=self.max_open,
            max_idle=self.max_idle,
            life_time=self.life_time,
            idle_time=self.idle_time,
        )

    def url(self, mode: DatabaseModeSettings) -> sa.engine.URL:
        """ Build a connection URL for the given mode

        `mode.params` is a query string: "charset=utf8mb4&autocommit=true"
        """
        return sa.engine.URL.create(
            drivername=self.type,
            username=mode.user or None,
            password=mode.password or None,
            host=self.host or None,
            port=self.port,
            database=mode.name or None,
            query=dict(parse_qsl(mode.params)),
        )
