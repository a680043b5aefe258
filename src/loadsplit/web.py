import logging
import os
import platform
from contextlib import asynccontextmanager
from functools import partial

import anyio
import psutil
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from loadsplit import planner as planner_module

# Import real prometheus for server mode and swap it into the planner module
from loadsplit import prometheus as prom
from loadsplit.__version__ import __version__
from loadsplit.errors import InvalidArgumentError, ScanError
from loadsplit.models import HealthResponse, PartitionRequest, PartitionResponse
from loadsplit.partitioner import Strategy, TieBreak
from loadsplit.planner import plan_directory, plan_items
from loadsplit.utils import DEFAULT_MAX_WORKERS, DEFAULT_PATTERN, get_log_level, get_max_workers


# Replace the noop prometheus in the planner module with the real one
planner_module.prom = prom

logging.basicConfig(level=get_log_level('INFO'), format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: resolve the directory GET /v1/partition may scan
    # Set by the serve CLI command, or defaults to cwd
    root = os.getenv('LOADSPLIT_ROOT') or os.getcwd()
    app.state.root = os.path.realpath(root)
    logger.info(f'Scan root: {app.state.root}')

    yield

    logger.info('Shutting down loadsplit')


app = FastAPI(
    title='loadsplit',
    version=__version__,
    description="""
    Static load balancing of files across workers.

    ## Endpoints

    * `POST /v1/partition` - Partition an explicit list of weighted items
    * `GET /v1/partition` - Partition the files of a directory by size
    * `/health` - Service information
    * `/metrics` - Prometheus metrics

    Plans are computed and returned; nothing is executed or dispatched.
    """,
    license_info={'name': 'MIT'},
    lifespan=lifespan,
    docs_url='/docs',
    redoc_url='/redoc',
)


def get_os_info() -> dict:
    return {
        'system': platform.system(),
        'release': platform.release(),
        'version': platform.version(),
        'machine': platform.machine(),
    }


def get_system_resources() -> dict:
    mem = psutil.virtual_memory()
    return {
        'cpu_cores': psutil.cpu_count(logical=True),
        'cpu_cores_physical': psutil.cpu_count(logical=False),
        'ram_total_gb': round(mem.total / (1024**3), 2),
        'ram_available_gb': round(mem.available / (1024**3), 2),
    }


def get_app_env_variables() -> dict:
    app_env_prefixes = ['LOADSPLIT_', 'UVICORN_', 'PROMETHEUS_']
    return {key: value for key, value in os.environ.items() if any(key.startswith(p) for p in app_env_prefixes)}


def validate_path_within_root(path: str, root: str) -> str:
    """Resolve `path` and make sure it does not escape `root`.

    Raises:
        ValueError: If the resolved path lies outside the root
    """
    resolved = os.path.realpath(path if os.path.isabs(path) else os.path.join(root, path))
    if os.path.commonpath([resolved, root]) != root:
        raise ValueError(f'Path is outside the allowed root: {path}')
    return resolved


@app.get('/health', tags=['General'], response_model=HealthResponse)
async def health():
    """
    Health check and system introspection endpoint.

    Returns:
    - Service status
    - Application version
    - Operating system information
    - Application-related environment variables
    """
    return HealthResponse(
        status='ok',
        app_version=__version__,
        python_version=platform.python_version(),
        os_info=get_os_info(),
        system_resources=get_system_resources(),
        constants={'DEFAULT_MAX_WORKERS': DEFAULT_MAX_WORKERS, 'DEFAULT_PATTERN': DEFAULT_PATTERN},
        environment=get_app_env_variables(),
    )


@app.get('/metrics', tags=['Monitoring'], include_in_schema=True)
async def metrics():
    """
    Prometheus metrics endpoint.

    Exposes partition request counts, durations, item and byte totals,
    worker counts and the aggregate skew of computed plans.
    """
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.post('/v1/partition', tags=['Partition'], response_model=PartitionResponse)
async def partition_items(request: PartitionRequest):
    """
    Partition an explicit list of items.

    Items are considered in the order given. Returns one entry per worker with
    the item handles assigned to it, its total weight and its skew.
    """
    items = [(item.handle, item.weight) for item in request.items]
    try:
        # Greedy placement is CPU-bound, keep it off the event loop
        return await anyio.to_thread.run_sync(
            partial(plan_items, items, request.workers, tie_break=request.tie_break, strategy=request.strategy)
        )
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get('/v1/partition', tags=['Partition'], response_model=PartitionResponse)
async def partition_directory(
    path: str = Query(..., description='Directory to scan, relative to or inside the server root'),
    workers: int | None = Query(None, description='Number of workers (default: $LOADSPLIT_MAX_WORKERS or 4)'),
    pattern: str = Query(DEFAULT_PATTERN, description='File name glob'),
    recursive: bool = Query(False, description='Include subdirectories'),
    tie_break: TieBreak = Query(TieBreak.FIRST, description='Tie-break rule for equal skew'),
    strategy: Strategy = Query(Strategy.CLOSED_FORM, description='Candidate evaluation method'),
):
    """
    Partition the files of a directory by size.

    The directory must lie within the server's scan root.
    """
    try:
        directory = validate_path_within_root(path, app.state.root)
    except ValueError as e:
        raise HTTPException(status_code=403, detail=str(e))

    if not os.path.exists(directory):
        raise HTTPException(status_code=404, detail=f'Path not found: {path}')
    if not os.path.isdir(directory):
        raise HTTPException(status_code=400, detail=f'Not a directory: {path}')

    try:
        # Stat'ing many files blocks, keep it off the event loop
        return await anyio.to_thread.run_sync(
            partial(
                plan_directory,
                directory,
                workers if workers is not None else get_max_workers(),
                pattern=pattern,
                recursive=recursive,
                tie_break=tie_break,
                strategy=strategy,
            )
        )
    except ScanError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
