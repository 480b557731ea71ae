"""
CLI Module

Command line interface for icnskit:
- Create an icns file or iconset from an input image
- List the input formats that can be converted
"""

import sys

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import __version__
from .env import env, get_config_summary
from .errors import IcnsKitError
from .iconutil import IconUtil
from .logger import get_logger, set_log_level, setup_logging
from .runner import OutputType, run, valid_formats

logger = get_logger(__name__)

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)


def _print_formats() -> None:
    table = Table(title="Valid input formats")
    table.add_column("Identifier", style="cyan")
    table.add_column("Extension")
    for identifier, extension in valid_formats():
        table.add_row(identifier, extension)
    console.print(table)


def _print_error(error: IcnsKitError) -> None:
    error_console.print(Text.assemble(("error: ", "bold red"), error.message), soft_wrap=True)
    if error.fix:
        error_console.print(Text.assemble(("fix: ", "bold yellow"), error.fix), soft_wrap=True)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('input', required=False, type=click.Path(dir_okay=True, path_type=str))
@click.argument('output', required=False, type=click.Path(dir_okay=True, path_type=str))
@click.option('--type', '-t', 'output_type',
              type=click.Choice([kind.value for kind in OutputType]),
              default=OutputType.INFER.value, show_default=True,
              help='Output type; infer picks iconset for an .iconset output path, icns otherwise')
@click.option('--iconset', '-s', is_flag=True, hidden=True,
              help='Deprecated, use --type iconset')
@click.option('--list-formats', '-l', is_flag=True,
              help='List the input formats that can be converted')
@click.option('--verbose', '-v', is_flag=True, help='Show debug output')
@click.version_option(__version__, '--version', prog_name='icnskit')
@click.pass_context
def main(ctx, input, output, output_type, iconset, list_formats, verbose):
    """Create an icns file or iconset from INPUT, writing it to OUTPUT."""
    setup_logging()
    if verbose:
        set_log_level('DEBUG', 'console')
        logger.debug(f"Configuration: {get_config_summary()}")

    if list_formats:
        _print_formats()
        return

    if not input:
        click.echo(ctx.get_help())
        return

    if iconset:
        error_console.print(Text.assemble(
            ("warning: ", "bold yellow"),
            "'--iconset' is deprecated, use '--type iconset' instead",
        ), soft_wrap=True)
        output_type = OutputType.ICONSET.value

    try:
        run(input, output, OutputType(output_type), IconUtil(env.iconutil_path))
    except IcnsKitError as e:
        logger.debug(f"{type(e).__name__}: {e.message}")
        _print_error(e)
        sys.exit(1)


if __name__ == '__main__':
    main()
