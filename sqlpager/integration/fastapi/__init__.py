from .window_args import window_args, window_args_dependency
from .window_args import endpoint_url, install_exception_handlers
