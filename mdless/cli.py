"""
Renders a Markdown file for the terminal.
Reads from stdin when no file (or "-") is given and writes to stdout.
"""

from __future__ import annotations

from pathlib import Path

import click

from .config import COLOR_MODES, ConfigError, build_config, resolve_columns
from .events import parse_events
from .exceptions import RenderError
from .filesystem import read_source
from .log import configure_logging, get_logger
from .render import dump_events, render
from .styles import Styles

__all__ = ["cli"]

logger = get_logger(__name__)


@click.command()
@click.version_option(package_name="mdless")
@click.option("--columns", type=int, help="Terminal width used for horizontal rules")
@click.option(
    "--color",
    type=click.Choice(COLOR_MODES),
    help="When to colour output (default: auto, only when writing to a terminal)",
)
@click.option("--dump-events", "dump", is_flag=True, help="Print parsed Markdown events instead")
@click.option("--verbose", "-v", is_flag=True, help="Log debug information to stderr")
@click.argument("filepath", default="-", type=click.Path(dir_okay=False, allow_dash=True))
def cli(
    filepath: str,
    columns: int | None = None,
    color: str | None = None,
    dump: bool = False,
    verbose: bool = False,
):
    """
    Render a Markdown file with styles for a terminal.

    Args:
        filepath: Path to the Markdown file, or ``-`` for stdin.
        columns: Override for the width of horizontal rules.
        color: Colour mode override; None follows the configuration.
        dump: Print the event stream instead of rendering it.
        verbose: Enable debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If options or configuration values are invalid.
        click.ClickException: If reading, parsing or rendering fails, including
            documents with unsupported constructs such as tables or images.

    Examples:
        mdless README.md --columns 72
    """
    configure_logging(verbose)
    from_stdin = filepath == "-"
    search_path = Path.cwd() if from_stdin else Path(filepath).resolve().parent
    try:
        config = build_config(search_path, columns=columns, color=color)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    if from_stdin:
        source = click.get_text_stream("stdin").read()
    else:
        try:
            source = read_source(Path(filepath), config.max_file_size)
        except IOError as error:
            raise click.ClickException(str(error)) from error

    stdout = click.get_text_stream("stdout")
    events = parse_events(source)
    try:
        if dump:
            dump_events(stdout, events)
        else:
            use_color = config.color == "always" or (
                config.color == "auto" and stdout.isatty()
            )
            styles = Styles.ansi() if use_color else Styles.plain()
            columns = resolve_columns(config)
            logger.debug("Rendering %s at %d columns", filepath, columns)
            render(stdout, events, columns, styles)
    except RenderError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
