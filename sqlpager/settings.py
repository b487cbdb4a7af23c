from __future__ import annotations

import dataclasses
from typing import Optional

from sqlpager import exc


# The limit you get when none is given, or when the given one is unusable
DEFAULT_LIMIT = 64


@dataclasses.dataclass
class PagerSettings:
    """ Settings for windowed queries

    This object defines how a WindowedQuery treats its input: default and max limits,
    and whether bad values are corrected or rejected.
    """
    # The `limit` you get by default, if not specified
    default_limit: int = DEFAULT_LIMIT

    # The max number of items you get, regardless of the limit
    max_limit: Optional[int] = None

    # Strict mode: reject bad limits and negative offsets instead of correcting them
    strict: bool = False

    # Names of the pagination query string keys
    limit_key: str = 'limit'
    offset_key: str = 'offset'

    def __post_init__(self):
        assert self.default_limit >= 1, 'default_limit must be positive'
        assert self.max_limit is None or self.max_limit >= 1, 'max_limit must be positive'

    # ### Callbacks for WindowedQuery
    # WindowedQuery uses these methods to apply the settings

    def get_final_limit(self, limit: Optional[int]) -> int:
        """ Callback that fine-tunes the `limit` of a query by applying default and max limits

        Used by: WindowedQuery, once, when the first window is selected.

        Raises:
            exc.InvalidLimitError: the limit is not an integer, or it's < 1 in strict mode
        """
        # Check types. `bool` is an `int`, but nobody means it
        if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool)):
            raise exc.InvalidLimitError(limit)

        # Apply default limit
        if limit is None:
            limit = self.default_limit
        elif limit < 1:
            if self.strict:
                raise exc.InvalidLimitError(limit)
            limit = self.default_limit

        # Apply max limit
        if self.max_limit:
            limit = min(limit, self.max_limit)

        # Done
        return limit

    def get_final_offset(self, offset: Optional[int]) -> int:
        """ Callback that fine-tunes the `offset` of a query

        Used by: WindowedQuery, every time a window is selected.

        Raises:
            exc.InvalidOffsetError: the offset is not an integer, or it's negative in strict mode
        """
        if offset is None:
            return 0
        if not isinstance(offset, int) or isinstance(offset, bool):
            raise exc.InvalidOffsetError(offset)

        if offset < 0:
            if self.strict:
                raise exc.InvalidOffsetError(offset)
            offset = 0

        return offset
