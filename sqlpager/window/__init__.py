""" Window pagination: LIMIT/OFFSET over SQL queries

* WindowedQuery: runs a query one window at a time, knows whether there are previous/next windows
* WindowArgs: the arguments a WindowedQuery reads limit & offset from
* build_links(): turns a window state into URLs
* PagedQuery: WindowedQuery + links
"""

from .arguments import WindowArgs, PagingArgs, ListArgs, DictArgs
from .state import WindowState
from .executor import WindowedQuery, RowFactory
from .links import NavigationLinks, build_links
from .paging import PagedQuery
