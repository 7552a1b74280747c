"""Decorators for command functions."""

import asyncio
import functools
import time
import traceback
from collections.abc import Callable

import typer

from taskflow.errors import NotFoundError, TaskflowError, ValidationError
from taskflow.utils.exit_codes import exit_code_for
from taskflow.utils.logger import get_logger
from taskflow.utils.ui.formatters import format_error


def command_wrapper(func: Callable):
    """Decorator running a (possibly async) command with logging and error mapping.

    Taskflow errors become an error message and a semantic exit code;
    anything else is logged with its traceback and exits with code 1.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except (ValidationError, NotFoundError) as e:
            elapsed = time.monotonic() - start
            logger.warning("command rejected: %s (%.3fs) - %s", cmd, elapsed, e)
            format_error(str(e))
            raise typer.Exit(code=exit_code_for(e)) from e

        except typer.Exit:
            # Re-raise Typer's own exits (like --help or explicit Exit(0))
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            if isinstance(e, TaskflowError):
                format_error(str(e))
            else:
                format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_code_for(e)) from e

    return wrapper
