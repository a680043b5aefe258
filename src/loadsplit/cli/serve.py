"""CLI serve command for loadsplit"""

import os

import click

from loadsplit.utils import get_str_env, setup_shutdown_filter


@click.command('serve')
@click.option('--host', default='127.0.0.1', show_default=True, help='Host to bind to')
@click.option('--port', default=8000, show_default=True, type=int, help='Port to bind to')
@click.option(
    '--root',
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help='Directory that GET /v1/partition may scan (default: $LOADSPLIT_ROOT or cwd)',
)
@click.option('--log-level', default=None, help='Log level (default: $LOADSPLIT_LOG_LEVEL or INFO)')
def serve_command(host: str, port: int, root: str | None, log_level: str | None):
    """Start the partition planning API server.

    \b
    Endpoints:
      GET  /health            Service information
      GET  /metrics           Prometheus metrics
      POST /v1/partition      Partition an explicit list of items
      GET  /v1/partition      Partition the files of a directory under --root
    """
    import uvicorn

    if root:
        os.environ['LOADSPLIT_ROOT'] = os.path.realpath(root)
    if log_level:
        os.environ['LOADSPLIT_LOG_LEVEL'] = log_level.upper()

    setup_shutdown_filter()
    click.echo(f'Starting loadsplit API on http://{host}:{port}')
    uvicorn.run(
        'loadsplit.web:app',
        host=host,
        port=port,
        log_level=get_str_env('LOADSPLIT_LOG_LEVEL', 'INFO').lower(),
    )
