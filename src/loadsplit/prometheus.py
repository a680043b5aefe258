"""Prometheus metrics for loadsplit"""

from prometheus_client import Counter, Histogram

# ============================================================================
# Request Metrics
# ============================================================================

# Total number of partition requests
partition_requests_total = Counter(
    'loadsplit_partition_requests_total',
    'Total number of partition requests',
    ['status'],  # success, invalid_argument, scan_error
)


# ============================================================================
# Performance Metrics
# ============================================================================

partition_duration_seconds = Histogram(
    'loadsplit_partition_duration_seconds',
    'Time spent computing a partition',
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0],
    # 0.1ms to 30s - greedy placement grows with items x workers^2 in simulate mode
)


# ============================================================================
# Partition Metrics
# ============================================================================

items_partitioned_total = Counter('loadsplit_items_partitioned_total', 'Total number of items assigned to workers')

bytes_partitioned_total = Counter('loadsplit_bytes_partitioned_total', 'Total weight (bytes) assigned to workers')

workers_per_partition = Histogram(
    'loadsplit_workers_per_partition',
    'Number of workers used per partition',
    buckets=[1, 2, 4, 8, 16, 32, 64, 128],
)

aggregate_skew = Histogram(
    'loadsplit_aggregate_skew',
    'Aggregate skew of the final assignment',
    buckets=[0.0, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
)


def record_partition(item_count: int, total_weight: float, worker_count: int, skew: float, duration: float):
    """Record metrics for a successful partition."""
    partition_requests_total.labels(status='success').inc()
    partition_duration_seconds.observe(duration)
    items_partitioned_total.inc(item_count)
    bytes_partitioned_total.inc(total_weight)
    workers_per_partition.observe(worker_count)
    aggregate_skew.observe(skew)


def record_failure(status: str):
    """Record a rejected partition request."""
    partition_requests_total.labels(status=status).inc()
