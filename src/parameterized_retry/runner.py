"""
Reference host loop.

Runs a parameterized test body under a retry policy without any host
test framework: materializes the sources, pulls invocations from a
RetryRun, calls the body, reports each outcome and collects a RunReport.

Usage:
    report = run_parameterized(
        body,
        sources=[[(1, "a"), (2, "b")]],
        policy=RetryPolicy(repeats=3, retryable_kinds=(ConnectionError,)),
    )
    assert report.succeeded
"""

import time
from typing import Any, Callable, Iterable

import structlog

from parameterized_retry.models.report import InvocationResult, RunReport
from parameterized_retry.naming import InvocationNameFormatter
from parameterized_retry.retry.classifier import ExceptionClassifier
from parameterized_retry.retry.engine import begin_run
from parameterized_retry.retry.policy import RetryPolicy
from parameterized_retry.sources import MethodSignature, materialize

logger = structlog.get_logger(__name__)


def run_parameterized(
    body: Callable[..., Any],
    sources: Iterable[Any],
    policy: RetryPolicy,
    name_pattern: str | None = None,
    display_name: str | None = None,
    classifier: ExceptionClassifier | None = None,
    record_metrics: bool | None = None,
) -> RunReport:
    """
    Execute `body` once per invocation produced by the retry engine.

    Configuration (policy, name pattern, sources) is fully validated before
    the first invocation. A failing attempt does not abort the run: a
    non-retryable failure is recorded as that attempt's terminal error and
    the run moves on to the next tuple. Exceptions that are not Exception
    subclasses (KeyboardInterrupt, SystemExit) propagate and end the run.

    Args:
        body: Test body, called as body(*arguments)
        sources: Parameter sources (instances, classes or iterables of rows)
        policy: Retry policy
        name_pattern: Invocation name pattern (default: DEFAULT_NAME_PATTERN)
        display_name: Display name of the test method (default: body.__name__)
        classifier: Exception classifier (default: ExceptionClassifier())
        record_metrics: Update Prometheus counters (default: PROMETHEUS_ENABLED)

    Returns:
        RunReport with one InvocationResult per attempt, in execution order

    Raises:
        ConfigurationError: Invalid policy, pattern or parameter source
    """
    policy.validate()
    display_name = display_name if display_name is not None else getattr(body, "__name__", "")
    formatter = InvocationNameFormatter(name_pattern, display_name=display_name)

    tuples = materialize(sources, MethodSignature.from_callable(body))
    formatter.check(tuples)
    run = begin_run(tuples, policy, classifier=classifier, record_metrics=record_metrics)
    report = RunReport(display_name=display_name, tuple_count=len(tuples))

    start_time_ms = int(time.time() * 1000)
    logger.info(
        "Starting parameterized run",
        display_name=display_name,
        tuples=len(tuples),
        repeats=policy.repeats,
        min_success=policy.min_success,
    )

    for invocation in run:
        name = formatter.format(invocation)
        failure: Exception | None = None

        try:
            body(*invocation.arguments)
        except Exception as exc:
            failure = exc

        retryable = run.report(failure)
        report.results.append(
            InvocationResult(
                invocation=invocation,
                name=name,
                status=run.status_for(failure),
                retryable=retryable,
                error_type=type(failure).__name__ if failure is not None else None,
                error_message=str(failure) if failure is not None else None,
            )
        )

    total_latency_ms = int(time.time() * 1000) - start_time_ms
    failed = report.failed_tuples()
    log = logger.warning if failed else logger.info
    log(
        "Parameterized run finished",
        display_name=display_name,
        invocations=report.invocation_count,
        tuples=len(tuples),
        failed_tuples=failed,
        total_latency_ms=total_latency_ms,
    )
    return report
