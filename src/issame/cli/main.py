"""issame CLI - main entry point."""

import logging

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from issame import __version__
from issame.config import get_settings
from issame.dispatch import USAGE_LINES, UsageError, dispatch
from issame.logging_config import setup_logging
from issame.models import EXIT_USAGE, ComparisonOutcome, ComparisonResult, IsSameError, Mode

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

_VERDICTS = {
    (Mode.TWO_FILES, ComparisonOutcome.MATCH): "Files are the same",
    (Mode.TWO_FILES, ComparisonOutcome.MISMATCH): "Files are not the same",
    (Mode.ONE_FILE, ComparisonOutcome.MATCH): "File matches",
    (Mode.ONE_FILE, ComparisonOutcome.MISMATCH): "File does not match",
}


def _fail(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True, highlight=False)
    raise SystemExit(ComparisonOutcome.ERROR.exit_code)


def _report(result: ComparisonResult) -> None:
    """Print both compared values and the verdict."""
    console.print(result.left, soft_wrap=True, markup=False, highlight=False)
    console.print(result.right, soft_wrap=True, markup=False, highlight=False)
    style = "green" if result.is_match else "yellow"
    console.print(f"[{style}]{_VERDICTS[(result.mode, result.outcome)]}[/{style}]")


@click.command(
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False}
)
@click.version_option(version=__version__, prog_name="issame")
@click.option("--verbose", "-v", is_flag=True, help="Print the digests and the verdict")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(verbose: bool, args: tuple[str, ...]):
    """Check whether two files, or a file and a SHA-512 checksum, are the same.

    \b
      issame FILE1 FILE2
      issame --one-file FILE CHECKSUM

    Exits 0 when they match, 1 when they differ, 2 on errors
    and 255 when the arguments are wrong.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        _fail(f"Invalid configuration: {e}")

    verbose = verbose or settings.verbose
    setup_logging("DEBUG" if verbose else settings.log_level, err_console)

    try:
        result = dispatch(args)
    except UsageError as e:
        logger.debug("Usage error: %s", e)
        for line in USAGE_LINES:
            console.print(line, markup=False, highlight=False)
        raise SystemExit(EXIT_USAGE)
    except IsSameError as e:
        _fail(str(e))

    if verbose:
        _report(result)
    raise SystemExit(result.outcome.exit_code)


if __name__ == "__main__":
    cli()
