import sqlalchemy as sa

# Items: a table to paginate over


metadata = sa.MetaData()

items = sa.Table(
    'items', metadata,
    sa.Column('id', sa.Integer, primary_key=True),
    sa.Column('status', sa.String),
    sa.Column('title', sa.String),
)


def item(id: int, status: str = 'open', **extra):
    """ Make a dict for an `items` row

    Example:
        item(1)
        => {'id': 1, 'status': 'open', 'title': 'item-1'}
    """
    return {
        'id': id,
        'status': status,
        'title': f'item-{id}',
        **extra
    }


def ids(rows: list) -> list[int]:
    """ Get ids of result rows """
    return [row['id'] for row in rows]


# Typical queries
SELECT_ITEMS = 'SELECT id, status, title FROM items ORDER BY id LIMIT :limit OFFSET :offset'
SELECT_ITEMS_BY_STATUS = 'SELECT id, status, title FROM items WHERE status = :status ORDER BY id LIMIT :limit OFFSET :offset'
