"""Pydantic models for API requests and responses"""

from typing import Any

from pydantic import BaseModel, Field

from loadsplit.partitioner import Assignment, Phase, Strategy, TieBreak
from loadsplit.utils import DEFAULT_MAX_WORKERS, human_readable_size


class HealthResponse(BaseModel):
    """Health check response with basic introspection data"""

    status: str = Field(..., example="ok")
    app_version: str = Field(..., example="0.3.0", description="Application version")
    python_version: str = Field(..., example="3.12.4", description="Python interpreter version")
    os_info: dict[str, str] = Field(
        ...,
        example={"system": "Linux", "release": "6.8.0", "version": "#1 SMP"},
        description="Operating system information",
    )
    system_resources: dict[str, Any] = Field(
        ...,
        example={"cpu_cores": 8, "cpu_cores_physical": 4, "ram_total_gb": 16.0, "ram_available_gb": 8.5},
        description="System resources (CPU cores and RAM)",
    )
    constants: dict[str, Any] = Field(
        default_factory=dict,
        example={"DEFAULT_MAX_WORKERS": 4, "DEFAULT_PATTERN": "*.dat"},
        description="Application configuration constants",
    )
    environment: dict[str, str] = Field(
        default_factory=dict,
        example={"LOADSPLIT_LOG_LEVEL": "INFO"},
        description="Application-related environment variables",
    )


class ItemIn(BaseModel):
    """A work item submitted for partitioning"""

    handle: str = Field(..., example="/data/part-0001.dat", description="Item identifier")
    weight: int | float = Field(..., example=1048576, description="Non-negative item weight (bytes for files)")


class PartitionRequest(BaseModel):
    """Request body for POST /v1/partition

    Attributes:
        items: Items in the order they should be considered
        workers: Number of workers to spread the items over
        tie_break: Which candidate wins on an exact skew tie ('first' or 'last')
        strategy: Candidate evaluation method ('closed-form' or 'simulate')
    """

    items: list[ItemIn] = Field(..., description="Ordered items to partition")
    workers: int = Field(DEFAULT_MAX_WORKERS, example=4, description="Number of workers")
    tie_break: TieBreak = Field(TieBreak.FIRST, description="Tie-break rule for equal skew")
    strategy: Strategy = Field(Strategy.CLOSED_FORM, description="Candidate evaluation method")


class WorkerAssignment(BaseModel):
    """Items assigned to one worker

    Attributes:
        worker: 1-based worker number
        items: Item handles in assignment order
        total_weight: Sum of the item weights
        skew: (total_weight - mean) / max over the final assignment
    """

    worker: int = Field(..., example=1, description="Worker number (1-based)")
    items: list[str] = Field(default=[], example=["a.dat", "d.dat"])
    total_weight: int | float = Field(..., example=2048)
    skew: float = Field(..., example=0.05)


class PartitionResponse(BaseModel):
    """Result of a partitioning run"""

    path: str | None = Field(None, example="/data", description="Scanned directory, if items came from one")
    requested_workers: int = Field(..., example=4, description="Worker count that was asked for")
    phase: Phase = Field(..., example="greedy", description="'direct' (one item per worker) or 'greedy'")
    tie_break: TieBreak = Field(..., example="first")
    strategy: Strategy = Field(..., example="closed-form")
    time: float = Field(..., example=0.002, description="Partitioning duration in seconds")
    item_count: int = Field(..., example=12)
    total_weight: int | float = Field(..., example=8192)
    mean_weight: float = Field(..., example=2048.0)
    max_weight: int | float = Field(..., example=2100)
    aggregate_skew: float = Field(..., example=0.08, description="Sum of absolute worker skews")
    workers: list[WorkerAssignment] = Field(default=[])

    @classmethod
    def from_assignment(
        cls,
        assignment: Assignment,
        requested_workers: int,
        strategy: Strategy,
        elapsed: float,
        path: str | None = None,
    ) -> 'PartitionResponse':
        stats = assignment.statistics
        return cls(
            path=path,
            requested_workers=requested_workers,
            phase=assignment.phase,
            tie_break=assignment.tie_break,
            strategy=strategy,
            time=elapsed,
            item_count=assignment.item_count,
            total_weight=sum(assignment.totals),
            mean_weight=stats.mean_weight,
            max_weight=stats.max_weight,
            aggregate_skew=assignment.aggregate_skew,
            workers=[
                WorkerAssignment(
                    worker=w.worker_id,
                    items=[str(item) for item in w.assigned],
                    total_weight=w.total_weight,
                    skew=w.skew,
                )
                for w in assignment.workers
            ],
        )

    def to_cli(self, verbose: bool = False, colorize: bool = False) -> str:
        """Format response for CLI output, one 'Worker <n>: [items]' line per worker"""
        GREY = '\033[90m'
        CYAN = '\033[36m'
        BOLD_CYAN = '\033[1;36m'
        YELLOW = '\033[33m'
        GREEN = '\033[32m'
        RESET = '\033[0m'

        lines = []

        if verbose:
            summary = [
                ('Path', self.path or '-'),
                ('Items', str(self.item_count)),
                ('Workers', f'{len(self.workers)} of {self.requested_workers} ({self.phase.value})'),
                ('Total', human_readable_size(self.total_weight)),
                ('Aggregate skew', f'{self.aggregate_skew:.4f}'),
                ('Time', f'{self.time:.3f}s'),
            ]
            for label, value in summary:
                if colorize:
                    lines.append(f"{GREY}{label}:{RESET} {YELLOW}{value}{RESET}")
                else:
                    lines.append(f"{label}: {value}")
            lines.append("")

        for worker in self.workers:
            items = ", ".join(worker.items)
            if colorize:
                line = f"{BOLD_CYAN}Worker {worker.worker}{RESET}{GREY}:{RESET} [{CYAN}{items}{RESET}]"
            else:
                line = f"Worker {worker.worker}: [{items}]"
            if verbose:
                detail = f"{human_readable_size(worker.total_weight)}, skew {worker.skew:+.4f}"
                line += f" {GREEN}({detail}){RESET}" if colorize else f" ({detail})"
            lines.append(line)

        return "\n".join(lines)
