"""Logging setup for the tidyfs CLI.

Modules log through ``logging.getLogger(__name__)``; this module wires
the root logger to a Rich handler on stderr that prefixes every line
with a timestamp.
"""

import logging

from rich.logging import RichHandler

from tidyfs.utils.formatting import err_console

LOG_TIME_FORMAT = "[%Y-%m-%d %H:%M:%S]"


def resolve_level(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI verbosity flags to a logging level.

    Quiet wins over verbose when both are given.
    """
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Attach a timestamped Rich handler to the tidyfs logger.

    Calling it again replaces the previous handler, so repeated CLI
    invocations in one process (tests) do not duplicate output.

    Args:
        verbose: Enable DEBUG output.
        quiet: Only show warnings and errors.
    """
    package_logger = logging.getLogger("tidyfs")
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        show_path=False,
        show_level=True,
        markup=False,
        rich_tracebacks=False,
        log_time_format=LOG_TIME_FORMAT,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger.addHandler(handler)
    package_logger.setLevel(resolve_level(verbose, quiet))
