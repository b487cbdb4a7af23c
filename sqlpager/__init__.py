from importlib.metadata import version as _version

__version__ = _version('sqlpager')

from .settings import PagerSettings, DEFAULT_LIMIT
from .window import WindowedQuery, PagedQuery, WindowState
from .window import WindowArgs, PagingArgs, ListArgs, DictArgs
from .window import NavigationLinks, build_links

from . import exc
