"""Main CLI entry point."""

import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from fixmath.config import Config
from fixmath.transform import transform

console = Console(stderr=True)
load_dotenv()

logger = logging.getLogger("fixmath")


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the result here instead of rewriting INPUT_PATH.",
)
@click.option(
    "--check",
    is_flag=True,
    default=False,
    help="Only report; exit with status 1 if any formula would be converted.",
)
@click.option(
    "--encoding",
    default=None,
    help="File encoding (defaults to $FIXMATH_ENCODING, then utf-8).",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Log what each conversion pass did.",
)
@click.version_option()
def main(input_path, output, check, encoding, verbose):
    """Convert LaTeX-style maths delimiters in a markdown note to $ / $$.

    \\( ... \\) and maths-like ( ... ) become $ ... $; \\[ ... \\] and
    maths-like [ ... ] become $$ ... $$.  Fenced code blocks are never
    touched.  INPUT_PATH is rewritten in place unless --output is given.
    """
    if verbose:
        _enable_logging()

    try:
        config = Config.from_env(encoding_override=encoding)
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    try:
        # Bytes in, bytes out: keeps \r\n endings exactly as they were.
        original = input_path.read_bytes().decode(config.encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("reading %s failed", input_path, exc_info=True)
        console.print(f"[red]Error:[/red] failed to process file: {e}")
        sys.exit(1)

    result = transform(original)

    if result.text == original or result.stats.total == 0:
        console.print("[dim]No changes required[/dim]")
        return

    message = result.stats.summary()

    if check:
        console.print(f"[yellow]{message}[/yellow] [dim](check only, nothing written)[/dim]")
        sys.exit(1)

    target = output or input_path
    try:
        target.write_bytes(result.text.encode(config.encoding))
    except (OSError, UnicodeEncodeError) as e:
        logger.debug("writing %s failed", target, exc_info=True)
        console.print(f"[red]Error:[/red] failed to process file: {e}")
        sys.exit(1)

    console.print(f"[green]{message}[/green]")
    if output:
        console.print(f"[green]Written to {output}[/green]")


def _enable_logging() -> None:
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False, show_time=False))
    logger.setLevel(logging.DEBUG)
