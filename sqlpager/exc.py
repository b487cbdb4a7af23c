
class BaseSqlpagerException(Exception):
    pass


class WindowArgumentError(BaseSqlpagerException):
    """ Invalid input provided by the caller

    Reported before any query is executed. Never retried: the caller has to fix the input.
    """


class InvalidContainerError(WindowArgumentError):
    """ The row container is not a mutable sequence """

    def __init__(self, container: object):
        self.container = container
        super().__init__(f'Invalid container: expected a mutable sequence, got {type(container).__name__}')


class InvalidLimitError(WindowArgumentError):
    """ The "limit" is not an integer, or is out of range """

    def __init__(self, limit: object):
        self.limit = limit
        super().__init__(f'Invalid limit: {limit!r}')


class InvalidOffsetError(WindowArgumentError):
    """ The "offset" is not an integer, or is negative """

    def __init__(self, offset: object):
        self.offset = offset
        super().__init__(f'Invalid offset: {offset!r}')


class NavigationError(BaseSqlpagerException):
    """ Navigation beyond the available results

    This is a control-flow signal, not a failure: check `has_previous` / `has_next` to avoid it.
    """


class BeginOfResults(NavigationError):
    """ There is no previous window: already at the beginning """

    def __init__(self):
        super().__init__('Begin of results: there is no previous window')


class EndOfResults(NavigationError):
    """ There is no next window: already at the end """

    def __init__(self):
        super().__init__('End of results: there is no next window')
