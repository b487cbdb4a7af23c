import pytest
import sqlalchemy as sa

from sqlpager import exc
from sqlpager import PagedQuery, ListArgs, DictArgs, NavigationLinks

from .util.models import ids, SELECT_ITEMS, SELECT_ITEMS_BY_STATUS


def test_paged_query_links(ten_items: sa.engine.Connection):
    """ Walk through pages, look at the links """
    with PagedQuery.prepare(ten_items, SELECT_ITEMS_BY_STATUS, 'https://host/items') as q:
        # No links before anything is selected
        assert q.links == NavigationLinks(None, None)

        # Page 0: odd ids
        rows = q.select([], ListArgs(limit=2, values={'status': 'open'}))
        assert ids(rows) == [1, 3]
        assert q.links == NavigationLinks(
            previous=None,
            next='https://host/items?limit=2&offset=2&status=open',
        )

        # Page 1
        q.select_next(rows)
        assert ids(rows) == [5, 7]
        assert q.links == NavigationLinks(
            previous='https://host/items?limit=2&offset=0&status=open',
            next='https://host/items?limit=2&offset=4&status=open',
        )

        # Page 2: last
        q.select_next(rows)
        assert ids(rows) == [9]
        assert q.links == NavigationLinks(
            previous='https://host/items?limit=2&offset=2&status=open',
            next=None,
        )
        assert not q.has_next

        # Page 1 again
        q.select_previous(rows)
        assert ids(rows) == [5, 7]
        assert q.has_previous and q.has_next
        assert q.state.offset == 2

    # Closed on exit
    assert q.query.closed


def test_paged_query_link_limit_is_effective(ten_items: sa.engine.Connection):
    """ Links carry the effective limit, not the requested one, and not limit + 1 """
    q = PagedQuery.prepare(ten_items, SELECT_ITEMS, 'https://host/items')
    q.select([], ListArgs(limit=0))

    # 64 > 10: no next page
    assert q.links == NavigationLinks(None, None)

    q = PagedQuery.prepare(ten_items, SELECT_ITEMS, 'https://host/items')
    q.select([], ListArgs(limit=3, offset=-10))
    assert q.links.next == 'https://host/items?limit=3&offset=3'


def test_paged_query_custom_keys(ten_items: sa.engine.Connection):
    """ Custom pagination keys: used both in SQL and in links """
    q = PagedQuery.prepare(ten_items, 'SELECT id FROM items WHERE status = :status ORDER BY id LIMIT :l OFFSET :o', 'http://localhost/v1/items?l=1&o=1')
    rows = q.select([], DictArgs({'status': 'closed', 'l': 2, 'o': 2}, limit_key='l', offset_key='o'))

    assert ids(rows) == [6, 8]
    assert q.links == NavigationLinks(
        previous='http://localhost/v1/items?l=2&o=0&status=closed',
        next='http://localhost/v1/items?l=2&o=4&status=closed',
    )


def test_paged_query_response(ten_items: sa.engine.Connection):
    """ JSON envelope """
    q = PagedQuery.prepare(ten_items, SELECT_ITEMS, 'https://host/items')
    rows = q.select([], ListArgs(limit=2, offset=8))

    assert q.response(rows) == {
        'items': [
            {'id': 9, 'status': 'open', 'title': 'item-9'},
            {'id': 10, 'status': 'closed', 'title': 'item-10'},
        ],
        'previous': 'https://host/items?limit=2&offset=6',
    }


def test_paged_query_errors(ten_items: sa.engine.Connection):
    """ Errors are the same as with WindowedQuery; links stay as they were """
    q = PagedQuery.prepare(ten_items, SELECT_ITEMS, 'https://host/items')

    with pytest.raises(exc.InvalidLimitError):
        q.select([], ListArgs(limit='many'))
    assert q.links == NavigationLinks(None, None)

    q.select([], ListArgs(limit=5, offset=5))
    links = q.links
    with pytest.raises(exc.EndOfResults):
        q.select_next([])
    assert q.links == links
