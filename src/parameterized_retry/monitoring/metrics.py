"""Custom Prometheus metrics for parameterized retry runs.

These metrics live in the default registry; a host that exposes /metrics
picks them up. Useful signals:
- invocations_total{kind="retry"} (high retry share indicates flaky bodies)
- tuples_resolved_total{reason="budget_exhausted"} (tuples that never stabilized)
"""

from prometheus_client import Counter

# === Invocation Metrics ===

invocations_total = Counter(
    "parameterized_retry_invocations_total",
    "Total invocations produced by the iterator",
    ["kind"],
)
"""
Invocations counter by kind.

Labels:
- kind: first (first attempt of a tuple), retry (repeated attempt)
"""

attempt_outcomes_total = Counter(
    "parameterized_retry_attempt_outcomes_total",
    "Total attempt outcomes reported by the host",
    ["outcome"],
)
"""
Attempt outcomes counter.

Labels:
- outcome: passed, retryable_failure, failed, aborted
"""

# === Resolution Metrics ===

tuples_resolved_total = Counter(
    "parameterized_retry_tuples_resolved_total",
    "Total parameter tuples committed by the iterator",
    ["reason"],
)
"""
Tuple resolutions counter.

Labels:
- reason: no_retryable_failure, success_threshold_met, budget_exhausted
"""
