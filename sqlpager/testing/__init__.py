""" Tools for testing """

from .query_logger import QueryLogger, ExpectedQueryCounter, LoggedQuery
from .recreate_tables import created_tables, create_tables, drop_tables
from .table_data import insert
