from __future__ import annotations

from dataclasses import dataclass


@dataclass
class WindowState:
    """ Window state: becomes available after a window is selected

    `has_previous` + `previous_offset` and `has_next` + `next_offset` are only meaningful as pairs.
    """
    # The effective page size
    limit: int = 0

    # The offset of the window that has just been selected
    offset: int = 0

    # Is there a previous window? Where does it start?
    has_previous: bool = False
    previous_offset: int = 0

    # Is there a next window? Where does it start?
    has_next: bool = False
    next_offset: int = 0

    @classmethod
    def for_fetched_rows(cls, limit: int, offset: int, n_fetched: int) -> WindowState:
        """ Derive the state from the number of rows a query has fetched

        Args:
            limit: The effective limit. The query is expected to have fetched up to `limit + 1` rows
            offset: The offset the query has used
            n_fetched: The number of rows fetched, before trimming
        """
        # One row more than asked for: there is a next page
        has_next = n_fetched > limit

        return cls(
            limit=limit,
            offset=offset,
            has_previous=offset > 0,
            previous_offset=max(0, offset - limit),
            has_next=has_next,
            next_offset=offset + limit if has_next else offset + n_fetched,
        )
