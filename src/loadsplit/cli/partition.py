"""CLI partition command for loadsplit"""

import logging
import sys

import click

from loadsplit.errors import InvalidArgumentError, ScanError
from loadsplit.partitioner import Strategy, TieBreak
from loadsplit.planner import plan_directory
from loadsplit.utils import get_bool_env, get_default_pattern, get_log_level, get_max_workers


USAGE_MESSAGE = 'Proper usage is: loadsplit <dir>'


def configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else get_log_level('WARNING')
    logging.basicConfig(level=level, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')


@click.command('partition')
@click.argument('directory', required=False)
@click.option(
    '--workers',
    '-w',
    type=int,
    default=None,
    help='Number of workers to spread files over (default: $LOADSPLIT_MAX_WORKERS or 4)',
)
@click.option('--pattern', '-p', default=None, help="File name glob to include (default: $LOADSPLIT_PATTERN or '*.dat')")
@click.option('--recursive', '-r', is_flag=True, help='Include matching files in subdirectories')
@click.option(
    '--tie-break',
    type=click.Choice([t.value for t in TieBreak]),
    default=TieBreak.FIRST.value,
    show_default=True,
    help='Worker kept when two placements give the same skew',
)
@click.option(
    '--strategy',
    type=click.Choice([s.value for s in Strategy]),
    default=Strategy.CLOSED_FORM.value,
    show_default=True,
    help='How candidate placements are evaluated',
)
@click.option('--json', 'json_output', is_flag=True, help='Output in JSON format')
@click.option('--verbose', '-v', is_flag=True, help='Show totals and skew for each worker')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--debug', is_flag=True, help='Log every placement decision to stderr')
def partition_command(
    directory: str | None,
    workers: int | None,
    pattern: str | None,
    recursive: bool,
    tie_break: str,
    strategy: str,
    json_output: bool,
    verbose: bool,
    no_color: bool,
    debug: bool,
):
    """Split the files of DIRECTORY across workers, balancing total bytes.

    Files are taken in name order. With no more files than workers every
    file gets its own worker; otherwise each remaining file goes to the
    worker that keeps the load closest to the mean.

    \b
    Examples:
        loadsplit /data/batches                 # *.dat files over 4 workers
        loadsplit /data/batches -w 8 -v         # 8 workers, show totals
        loadsplit /data -r -p '*.csv' --json    # recursive, JSON output
    """
    configure_logging(debug)

    if directory is None:
        raise click.UsageError(USAGE_MESSAGE)

    worker_count = workers if workers is not None else get_max_workers()
    try:
        response = plan_directory(
            directory,
            worker_count,
            pattern=pattern or get_default_pattern(),
            recursive=recursive,
            tie_break=tie_break,
            strategy=strategy,
        )
    except ScanError as e:
        raise click.UsageError(f'{e}\n{USAGE_MESSAGE}') from e
    except InvalidArgumentError as e:
        raise click.BadParameter(str(e), param_hint="'--workers'") from e

    if json_output:
        click.echo(response.model_dump_json(indent=2))
    else:
        colorize = not (no_color or get_bool_env('LOADSPLIT_NO_COLOR', False)) and sys.stdout.isatty()
        click.echo(response.to_cli(verbose=verbose, colorize=colorize))
