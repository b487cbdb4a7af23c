from __future__ import annotations

from collections import abc
from typing import Any, NamedTuple, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

from .state import WindowState


class NavigationLinks(NamedTuple):
    """ Links to the previous/next windows """
    # Link to the previous window, if available
    previous: Optional[str]

    # Link to the next window, if available
    next: Optional[str]

    def as_dict(self) -> dict[str, str]:
        """ Get links for a JSON response: only those that are available """
        return {
            name: link
            for name, link in self._asdict().items()
            if link is not None
        }


def build_links(endpoint: str, filters: abc.Mapping[str, Any], state: WindowState, limit_key: str = 'limit', offset_key: str = 'offset') -> NavigationLinks:
    """ Build absolute URLs to the previous and the next windows

    Every link gets: all `filters` (except for the pagination keys), then `limit_key` and `offset_key` from the window state.
    The query string of the endpoint is dropped.

    Example:
        build_links('https://host/items', {'status': 'open'}, state)
        -> NavigationLinks(previous=None, next='https://host/items?limit=4&offset=4&status=open')
    """
    url = urlsplit(endpoint)

    # Filters: the same for both links
    query = {
        k: _query_value(v)
        for k, v in filters.items()
        if k not in (limit_key, offset_key)
    }

    def link(offset: int) -> str:
        link_query = {**query, limit_key: str(state.limit), offset_key: str(offset)}
        return urlunsplit((
            url.scheme,
            url.netloc,
            url.path,
            urlencode(sorted(link_query.items()), doseq=True),
            '',
        ))

    # Done
    return NavigationLinks(
        previous=link(state.previous_offset) if state.has_previous else None,
        next=link(state.next_offset) if state.has_next else None,
    )


def _query_value(value: Any):
    """ Convert a filter value into something `urlencode()` handles: a string, or a list of strings """
    if value is None:
        return ''
    elif isinstance(value, (list, tuple)):
        return [_query_value(v) for v in value]
    elif isinstance(value, bool):
        return 'true' if value else 'false'
    else:
        return str(value)
