import re
from typing import Optional

import fastapi
from fastapi.responses import JSONResponse

from sqlpager import exc
from sqlpager.settings import PagerSettings
from sqlpager.window import ListArgs


def window_args_dependency(settings: PagerSettings = None):
    """ Make a FastAPI dependency that gets window arguments from the query string

    The limit and the offset come from `settings.limit_key` and `settings.offset_key`.
    Every other query string parameter becomes a filter value.

    Example:
        @app.get('/items')
        def items(request: Request, args: ListArgs = Depends(window_args)):
            with PagedQuery.prepare(connection, SQL, endpoint_url(request)) as q:
                return q.response(q.select([], args))
    """
    settings = settings or PagerSettings()
    limit_key, offset_key = settings.limit_key, settings.offset_key

    def window_args(request: fastapi.Request) -> ListArgs:
        """ Get window arguments from the request

        Raises:
            fastapi.HTTPException: 400 when the limit or the offset is not a number
        """
        query_params = request.query_params

        try:
            limit = parse_int_argument(limit_key, query_params.get(limit_key))
            offset = parse_int_argument(offset_key, query_params.get(offset_key))
        except ArgumentValueError as e:
            raise fastapi.HTTPException(status_code=400, detail=str(e)) from e

        # Filters: single values as strings, repeated keys as lists
        values = {}
        for key in query_params.keys():
            if key in (limit_key, offset_key):
                continue
            key_values = query_params.getlist(key)
            values[key] = key_values[0] if len(key_values) == 1 else key_values

        return ListArgs(
            limit=limit,
            offset=offset or 0,
            values=values,
            limit_key=limit_key,
            offset_key=offset_key,
        )

    return window_args


# Dependency with the default settings
window_args = window_args_dependency()


def endpoint_url(request: fastapi.Request) -> str:
    """ Get the absolute URL of the current endpoint, without the query string """
    return str(request.url.replace(query='', fragment=''))


def install_exception_handlers(app: fastapi.FastAPI):
    """ Report window argument errors as "400 Bad Request" """
    @app.exception_handler(exc.WindowArgumentError)
    async def window_argument_error_handler(request: fastapi.Request, e: exc.WindowArgumentError):
        return JSONResponse(status_code=400, content={'detail': str(e)})


class ArgumentValueError(ValueError):
    """ Query string argument parse error """
    def __init__(self, argument_name: str, error: str):
        self.argument_name = argument_name
        super().__init__(error)


def parse_int_argument(name: str, value: Optional[str]) -> Optional[int]:
    """ Parse a query string argument as an integer: plain decimal digits, optional minus """
    # None passthrough
    if value is None or value == '':
        return None

    # `int()` is too lenient: it accepts " 5 ", "+5", "1_0"
    if not INTEGER_ARGUMENT.fullmatch(value):
        raise ArgumentValueError(name, f'"{name}" must be an integer')

    return int(value)


INTEGER_ARGUMENT = re.compile(r'-?[0-9]+')
