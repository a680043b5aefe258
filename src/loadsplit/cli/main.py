"""Main CLI entry point with command groups"""

import click

from loadsplit.__version__ import __version__
from loadsplit.cli.partition import partition_command
from loadsplit.cli.serve import serve_command


class DefaultCommandGroup(click.Group):
    """Custom Click Group that allows a default command"""

    def parse_args(self, ctx, args):
        # During shell completion, don't redirect to default command
        if ctx.resilient_parsing:
            return super().parse_args(ctx, args)

        # If --help or --version is requested, show group help/version
        if args and args[0] in ('--help', '-h', '--version'):
            return super().parse_args(ctx, args)

        # Check if first arg is a known command
        if args and args[0] in self.commands:
            return super().parse_args(ctx, args)

        # Otherwise, treat as partition command (default)
        return super().parse_args(ctx, ['partition'] + args)


@click.group(cls=DefaultCommandGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name='loadsplit')
@click.pass_context
def cli(ctx):
    """
    loadsplit - Split files across workers by size.

    \b
    Commands:
      loadsplit <dir>           Partition the *.dat files of a directory (default command)
      loadsplit serve           Start the planning API server

    \b
    Examples:
      loadsplit /data/batches
      loadsplit /data/batches --workers 8 --verbose
      loadsplit serve --port 8000 --root /data
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


cli.add_command(partition_command, name='partition')
cli.add_command(serve_command, name='serve')


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
