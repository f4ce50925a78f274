"""Monitoring and metrics instrumentation for parameterized retry runs.

Exports custom Prometheus metrics for retry rates and tuple resolution.
"""

from parameterized_retry.monitoring.metrics import (
    attempt_outcomes_total,
    invocations_total,
    tuples_resolved_total,
)

__all__ = [
    "invocations_total",
    "attempt_outcomes_total",
    "tuples_resolved_total",
]
