from __future__ import annotations

from collections import abc
from typing import Any, Generic, Union

import sqlalchemy as sa

from sqlpager.settings import PagerSettings

from .arguments import PagingArgs
from .executor import WindowedQuery, RowT, RowFactory
from .links import NavigationLinks, build_links
from .state import WindowState


class PagedQuery(Generic[RowT]):
    """ A WindowedQuery that generates links to the previous/next pages

    The links are absolute URLs based on the endpoint: they keep the filters and replace the limit & offset.

    Example:
        with PagedQuery.prepare(connection, SQL, 'https://host/items') as q:
            rows = q.select([], ListArgs(limit=10, values={'status': 'open'}))
            return {'items': rows, **q.links.as_dict()}
    """
    # The windowed query that does all the work
    query: WindowedQuery[RowT]

    # Base URL for the links
    endpoint: str

    # Navigation links: available after select()
    links: NavigationLinks

    def __init__(self, query: WindowedQuery[RowT], endpoint: str):
        self.query = query
        self.endpoint = endpoint
        self.links = NavigationLinks(previous=None, next=None)

    __slots__ = 'query', 'endpoint', 'links'

    @classmethod
    def prepare(cls, connection: sa.engine.Connection, query: Union[str, sa.sql.TextClause], endpoint: str, settings: PagerSettings = None, row_factory: RowFactory = None) -> PagedQuery:
        """ Prepare a paged query. See: WindowedQuery.prepare() """
        return cls(WindowedQuery.prepare(connection, query, settings, row_factory), endpoint)

    @property
    def state(self) -> WindowState:
        return self.query.state

    @property
    def has_previous(self) -> bool:
        return self.query.has_previous

    @property
    def has_next(self) -> bool:
        return self.query.has_next

    def select(self, rows: abc.MutableSequence[RowT], args: PagingArgs) -> abc.MutableSequence[RowT]:
        """ Select a window of rows and generate links. See: WindowedQuery.select() """
        self.query.select(rows, args)
        self._update_links()
        return rows

    def select_previous(self, rows: abc.MutableSequence[RowT]) -> abc.MutableSequence[RowT]:
        self.query.select_previous(rows)
        self._update_links()
        return rows

    def select_next(self, rows: abc.MutableSequence[RowT]) -> abc.MutableSequence[RowT]:
        self.query.select_next(rows)
        self._update_links()
        return rows

    def response(self, rows: abc.Sequence[RowT]) -> dict[str, Any]:
        """ Get a JSON-friendly envelope: { items, previous?, next? } """
        return {
            'items': list(rows),
            **self.links.as_dict(),
        }

    def _update_links(self):
        args: PagingArgs = self.query.args  # type: ignore[assignment]
        limit_key, offset_key = args.subset_keys()
        self.links = build_links(self.endpoint, args.filters(), self.query.state, limit_key, offset_key)

    def close(self):
        self.query.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
