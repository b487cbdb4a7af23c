""" Window arguments: the contract between a caller and a WindowedQuery

An argument object carries the pagination pair (limit, offset) and, optionally, filter values.
The WindowedQuery reads and writes the pagination pair only; everything else is passed
to the SQL statement as named parameters, untouched.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Optional


class WindowArgs:
    """ Base class for window arguments

    Implement it to feed your own argument objects to a WindowedQuery.
    """

    def subset(self) -> tuple[Optional[int], Optional[int]]:
        """ Get the current (limit, offset) pair """
        raise NotImplementedError

    def set_limit(self, limit: int):
        raise NotImplementedError

    def set_offset(self, offset: int):
        raise NotImplementedError

    def params(self) -> dict[str, Any]:
        """ Get the named parameters for the SQL statement, pagination included """
        raise NotImplementedError


class PagingArgs(WindowArgs):
    """ Window arguments that also know how to become a URL

    Used by PagedQuery to generate navigation links
    """

    def subset_keys(self) -> tuple[str, str]:
        """ Get the names of the (limit, offset) keys, both in SQL and in the query string """
        raise NotImplementedError

    def filters(self) -> dict[str, Any]:
        """ Get non-pagination parameters: they will be preserved in navigation links """
        raise NotImplementedError


@dataclasses.dataclass
class ListArgs(PagingArgs):
    """ Arguments for a typical list query: limit, offset, and some filter values

    Example:
        args = ListArgs(limit=10, values={'status': 'open'})
        q = WindowedQuery.prepare(connection, 'SELECT * FROM items WHERE status = :status ORDER BY id LIMIT :limit OFFSET :offset')
        q.select(rows, args)
    """
    # Page size. `None` means: use the default
    limit: Optional[int] = None

    # The number of rows to skip
    offset: int = 0

    # Other named parameters: filter values
    values: dict[str, Any] = dataclasses.field(default_factory=dict)

    # Names of the pagination parameters
    limit_key: str = 'limit'
    offset_key: str = 'offset'

    def subset(self) -> tuple[Optional[int], Optional[int]]:
        return self.limit, self.offset

    def set_limit(self, limit: int):
        self.limit = limit

    def set_offset(self, offset: int):
        self.offset = offset

    def subset_keys(self) -> tuple[str, str]:
        return self.limit_key, self.offset_key

    def filters(self) -> dict[str, Any]:
        return {
            k: v
            for k, v in self.values.items()
            if k not in (self.limit_key, self.offset_key)
        }

    def params(self) -> dict[str, Any]:
        # Pagination keys win over filters with the same name
        return {
            **self.values,
            self.limit_key: self.limit,
            self.offset_key: self.offset,
        }


class DictArgs(PagingArgs):
    """ Arguments stored in a plain dict

    The dict is used by reference: limit and offset are written into it.

    Example:
        args = {'status': 'open', 'l': 10, 'o': 0}
        q.select(rows, DictArgs(args, limit_key='l', offset_key='o'))
    """

    def __init__(self, args: dict[str, Any], *, limit_key: str = 'limit', offset_key: str = 'offset'):
        self.args = args
        self.limit_key = limit_key
        self.offset_key = offset_key

    __slots__ = 'args', 'limit_key', 'offset_key'

    def subset(self) -> tuple[Optional[int], Optional[int]]:
        return self.args.get(self.limit_key), self.args.get(self.offset_key)

    def set_limit(self, limit: int):
        self.args[self.limit_key] = limit

    def set_offset(self, offset: int):
        self.args[self.offset_key] = offset

    def subset_keys(self) -> tuple[str, str]:
        return self.limit_key, self.offset_key

    def filters(self) -> dict[str, Any]:
        return {
            k: v
            for k, v in self.args.items()
            if k not in (self.limit_key, self.offset_key)
        }

    def params(self) -> dict[str, Any]:
        return self.args
