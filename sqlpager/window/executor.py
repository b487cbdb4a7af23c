""" WindowedQuery: run a parameterized SQL query one window at a time

A window is a LIMIT/OFFSET slice of the result set. To find out whether there is a next window
without running a COUNT(*), the query is executed with LIMIT = limit + 1: if the extra row comes back,
there is more. The extra row is then removed.
"""

from __future__ import annotations

from collections import abc
from typing import Generic, Optional, TypeVar, Union

import sqlalchemy as sa

from sqlpager import exc
from sqlpager.settings import PagerSettings

from .arguments import WindowArgs
from .state import WindowState


# Row type: whatever `row_factory` makes of a row
RowT = TypeVar('RowT')

# A callable that converts a row mapping into a row object
RowFactory = abc.Callable[[abc.Mapping], RowT]


class WindowedQuery(Generic[RowT]):
    """ Windowed Query: executes a prepared statement one window at a time

    The statement must use named parameters for the limit and the offset, and must have an ORDER BY:

        SELECT * FROM items
        WHERE status = :status
        ORDER BY id
        LIMIT :limit OFFSET :offset

    Example:
        with WindowedQuery.prepare(connection, SQL) as q:
            rows = q.select([], ListArgs(limit=10, values={'status': 'open'}))
            if q.has_next:
                q.select_next(rows)

    The limit is bound on the first select() and stays fixed for the lifetime of the object:
    pages don't change their size while you're paging. If the caller changes the limit in between calls,
    the change is ignored.

    Not thread-safe: one object per request.
    """
    # The statement to execute. `None` when closed
    statement: Optional[sa.sql.TextClause]

    # The connection to execute it with
    connection: sa.engine.Connection

    # Pagination settings
    settings: PagerSettings

    # Converts a row mapping into a row object
    row_factory: RowFactory

    # Arguments of the last select(). Reused by select_previous() and select_next()
    args: Optional[WindowArgs]

    # Window state: derived after every select()
    state: WindowState

    def __init__(self, connection: sa.engine.Connection, statement: sa.sql.TextClause, settings: PagerSettings = None, row_factory: RowFactory = None):
        self.connection = connection
        self.statement = statement
        self.settings = settings or self.DEFAULT_SETTINGS
        self.row_factory = row_factory or dict
        self.args = None
        self.state = WindowState()

        # The effective limit. Bound on the first select()
        self._limit = None

    __slots__ = 'connection', 'statement', 'settings', 'row_factory', 'args', 'state', '_limit'

    @classmethod
    def prepare(cls, connection: sa.engine.Connection, query: Union[str, sa.sql.TextClause], settings: PagerSettings = None, row_factory: RowFactory = None) -> WindowedQuery:
        """ Prepare a windowed query

        Args:
            connection: The connection to execute the query with
            query: SQL with named parameters (":name"), or a `sa.text()` clause
            settings: Pagination settings
            row_factory: Callable to convert every row mapping. Default: `dict`
        """
        if isinstance(query, str):
            query = sa.text(query)
        return cls(connection, query, settings, row_factory)

    # Default settings object
    DEFAULT_SETTINGS = PagerSettings()

    @property
    def limit(self) -> Optional[int]:
        """ The effective limit. `None` until the first select() """
        return self._limit

    @property
    def closed(self) -> bool:
        return self.statement is None

    def select(self, rows: abc.MutableSequence[RowT], args: WindowArgs) -> abc.MutableSequence[RowT]:
        """ Select a window of rows

        The contents of `rows` is replaced with at most `limit` rows.
        `args` gets its offset normalized and its limit set to `limit + 1`: that's the value the statement gets.

        Raises:
            exc.InvalidContainerError: `rows` is not a mutable sequence
            exc.InvalidLimitError: bad limit
            exc.InvalidOffsetError: bad offset
            sa.exc.SQLAlchemyError: query execution errors, as is
        """
        if self.statement is None:
            raise RuntimeError('Cannot select from a closed query')

        # Validate everything before running anything
        if not isinstance(rows, abc.MutableSequence):
            raise exc.InvalidContainerError(rows)

        limit, offset = args.subset()
        offset = self.settings.get_final_offset(offset)

        # Bind the limit. Only once.
        if self._limit is None:
            self._limit = self.settings.get_final_limit(limit)
        limit = self._limit

        # Load one extra row to see if there's a next page
        args.set_offset(offset)
        args.set_limit(limit + 1)
        self.args = args

        # Execute
        res: sa.engine.CursorResult = self.connection.execute(self.statement, args.params())
        try:
            fetched = res.mappings().fetchmany(limit + 1)
        finally:
            res.close()

        # Put rows into the container. The extra row stays out.
        rows.clear()
        rows.extend(self.row_factory(row) for row in fetched[:limit])

        # Done
        self.state = WindowState.for_fetched_rows(limit, offset, len(fetched))
        return rows

    @property
    def has_previous(self) -> bool:
        return self.state.has_previous

    def get_previous(self) -> tuple[int, int]:
        """ Get (limit, offset) of the previous window

        Raises:
            exc.BeginOfResults: there's no previous window
        """
        if not self.state.has_previous:
            raise exc.BeginOfResults()
        return self.state.limit, self.state.previous_offset

    def select_previous(self, rows: abc.MutableSequence[RowT]) -> abc.MutableSequence[RowT]:
        """ Select the previous window, using the same arguments

        Raises:
            exc.BeginOfResults: there's no previous window. No query is executed.
        """
        _, offset = self.get_previous()
        self.args.set_offset(offset)  # type: ignore[union-attr]
        return self.select(rows, self.args)  # type: ignore[arg-type]

    @property
    def has_next(self) -> bool:
        return self.state.has_next

    def get_next(self) -> tuple[int, int]:
        """ Get (limit, offset) of the next window

        Raises:
            exc.EndOfResults: there's no next window
        """
        if not self.state.has_next:
            raise exc.EndOfResults()
        return self.state.limit, self.state.next_offset

    def select_next(self, rows: abc.MutableSequence[RowT]) -> abc.MutableSequence[RowT]:
        """ Select the next window, using the same arguments

        Raises:
            exc.EndOfResults: there's no next window. No query is executed.
        """
        _, offset = self.get_next()
        self.args.set_offset(offset)  # type: ignore[union-attr]
        return self.select(rows, self.args)  # type: ignore[arg-type]

    def close(self):
        """ Release the statement. Safe to call many times """
        self.statement = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
