"""No-op Prometheus stub for CLI usage (when serve is not used)"""


class NoOpMetric:
    """No-op metric that accepts any method call and does nothing."""

    def __call__(self, *args, **kwargs):
        return self

    def __getattr__(self, name):
        return self

    def inc(self, *args, **kwargs):
        pass

    def observe(self, *args, **kwargs):
        pass

    def labels(self, *args, **kwargs):
        return self


# Create no-op instances for all metrics
partition_requests_total = NoOpMetric()
partition_duration_seconds = NoOpMetric()
items_partitioned_total = NoOpMetric()
bytes_partitioned_total = NoOpMetric()
workers_per_partition = NoOpMetric()
aggregate_skew = NoOpMetric()


def record_partition(item_count: int, total_weight: float, worker_count: int, skew: float, duration: float):
    pass


def record_failure(status: str):
    pass
