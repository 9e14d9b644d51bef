"""Monitoring configuration for the trainer."""
from prometheus_client import Counter, Histogram, start_http_server

# Training metrics
letters_handled = Counter(
    "wordscramble_letters_total",
    "Total number of letters fed to trainings",
    ["result"],
)

tasks_finished = Counter(
    "wordscramble_tasks_finished_total",
    "Total number of tasks that were completed or failed",
    ["outcome"],
)

trainings_started = Counter(
    "wordscramble_trainings_started_total",
    "Total number of trainings started",
    ["origin"],
)

trainings_completed = Counter(
    "wordscramble_trainings_completed_total",
    "Total number of trainings played to the end",
)

# Error metrics
snapshot_errors = Counter(
    "wordscramble_snapshot_errors_total",
    "Total number of stored snapshots rejected on load",
)

# Performance metrics
request_duration = Histogram(
    "wordscramble_request_duration_seconds",
    "Duration of bot requests in seconds",
    ["handler"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
