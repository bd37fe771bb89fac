"""
Common CLI utilities and decorators for consistent command behavior.

Everything below the CLI layer raises typed errors; this is the only
place that turns them into process exit codes.
"""

import json
import logging
import sys
import click
from functools import wraps
from typing import Any, Dict, Iterable
from rich.console import Console
from rich.markup import escape

from .exit_codes import (
    INTERRUPTED,
    get_exit_code_for_exception, CommandError
)

logger = logging.getLogger(__name__)

err_console = Console(stderr=True)


def standard_command(func):
    """
    Decorator that provides standard CLI error handling:
    - CommandError subclasses exit with their own exit code
    - Ctrl+C exits with 130
    - Anything else exits with the code mapped from its type

    Errors are printed to stderr through rich; stdout stays clean for data.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            err_console.print("[red]Interrupted by user[/red]")
            sys.exit(INTERRUPTED)
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            logger.debug(f"{type(e).__name__}: {e}")
            print_error(str(e))
            sys.exit(e.exit_code)
        except Exception as e:
            logger.debug("Unexpected failure", exc_info=True)
            print_error(f"Command failed: {e}")
            sys.exit(get_exit_code_for_exception(e))

    return wrapper


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True, highlight=False)


def output_jsonl(items: Iterable[Dict[str, Any]]) -> None:
    """Print one JSON object per line on stdout."""
    for item in items:
        print(json.dumps(item, ensure_ascii=False, default=str), flush=True)


# Standard options that many commands share
common_options = {
    'json': click.option('--json', 'json_output', is_flag=True,
                         help='Output as JSONL'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('json')
        def my_command(json_output):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
