"""
Retry run: the per-method struct tying policy, history and iterator together.

A host begins a run for one test method, pulls invocations from it and
reports exactly one outcome per invocation:

    run = begin_run(tuples, policy)
    for invocation in run:
        try:
            body(*invocation.arguments)
        except Exception as exc:
            run.report_failure(exc)
            ...  # still surface exc as the attempt's error
        else:
            run.report_success()

Nothing here is keyed on ambient execution context, so a run can be
driven directly from unit tests.
"""

from typing import Iterable, Sequence

import structlog

from parameterized_retry.config import settings
from parameterized_retry.models.enums import AttemptStatus, Decision
from parameterized_retry.models.invocation import Invocation
from parameterized_retry.monitoring.metrics import attempt_outcomes_total
from parameterized_retry.retry.classifier import ExceptionClassifier
from parameterized_retry.retry.exceptions import AttemptAborted, OutcomeReportError
from parameterized_retry.retry.history import AttemptHistory
from parameterized_retry.retry.iterator import InvocationIterator
from parameterized_retry.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)


class RetryRun:
    """
    One run of a parameterized test method under a retry policy.

    Iterating the run yields Invocation descriptors; after each one the
    host must report the attempt's outcome before pulling again, since the
    next decision depends on it.

    Attributes:
        policy: Retry policy for this run
        classifier: Exception classifier
        history: Attempt history of the tuple being attempted
        iterator: Invocation state machine
    """

    def __init__(
        self,
        tuples: Iterable[Sequence],
        policy: RetryPolicy,
        classifier: ExceptionClassifier | None = None,
        record_metrics: bool | None = None,
    ):
        """
        Initialize a run.

        Args:
            tuples: Eagerly materialized parameter tuples, in order
            policy: Retry policy (re-validated here)
            classifier: Exception classifier (default: ExceptionClassifier())
            record_metrics: Update Prometheus counters (default: PROMETHEUS_ENABLED)

        Raises:
            ConfigurationError: Policy invariants violated
        """
        policy.validate()

        self.policy = policy
        self.classifier = classifier or ExceptionClassifier()
        self.record_metrics = settings.PROMETHEUS_ENABLED if record_metrics is None else record_metrics
        self.history = AttemptHistory(policy.repeats)
        self.iterator = InvocationIterator(tuples, policy, self.history, self.record_metrics)
        self._outstanding: Invocation | None = None

        logger.debug(
            "Retry run started",
            tuples=len(self.iterator.tuples),
            repeats=policy.repeats,
            min_success=policy.min_success,
            retryable_kinds=[kind.__name__ for kind in policy.retryable_kinds],
        )

    def __iter__(self) -> "RetryRun":
        return self

    def __next__(self) -> Invocation:
        invocation = next(self.iterator)
        self._outstanding = invocation
        return invocation

    @property
    def outstanding(self) -> Invocation | None:
        """Invocation handed out and still waiting for its outcome."""
        return self._outstanding

    def decide(self) -> Decision:
        return self.iterator.decide()

    def report(self, failure: BaseException | None) -> bool:
        """
        Report the outcome of the outstanding invocation.

        Args:
            failure: Exception raised by the test body, or None on success

        Returns:
            True if the outcome was recorded as retryable

        Raises:
            OutcomeReportError: No invocation is waiting for an outcome
        """
        invocation = self._outstanding
        if invocation is None:
            raise OutcomeReportError(
                "Outcome reported with no outstanding invocation",
                {"failure": type(failure).__name__ if failure is not None else None},
            )

        retryable = self.classifier.outcome_for(failure, self.policy)
        self.iterator.record_outcome(retryable)
        self._outstanding = None

        status = self.status_for(failure)
        label = status.value
        if status is AttemptStatus.FAILED and retryable:
            label = "retryable_failure"
        if self.record_metrics:
            attempt_outcomes_total.labels(outcome=label).inc()

        if failure is not None:
            logger.info(
                f"Attempt {invocation.attempt} of tuple {invocation.index} {label}",
                tuple_index=invocation.index,
                attempt=invocation.attempt,
                error_type=type(failure).__name__,
                retryable=retryable,
            )
        return retryable

    def report_success(self) -> bool:
        return self.report(None)

    def report_failure(self, failure: BaseException) -> bool:
        return self.report(failure)

    def report_abort(self, reason: str = "attempt aborted") -> bool:
        return self.report(AttemptAborted(reason))

    def status_for(self, failure: BaseException | None) -> AttemptStatus:
        """Host-facing status of an attempt that ended with `failure`."""
        if failure is None:
            return AttemptStatus.PASSED
        if self.classifier.is_abort(failure):
            return AttemptStatus.ABORTED
        return AttemptStatus.FAILED


def begin_run(
    tuples: Iterable[Sequence],
    policy: RetryPolicy,
    classifier: ExceptionClassifier | None = None,
    record_metrics: bool | None = None,
) -> RetryRun:
    """Start a retry run over `tuples`; see RetryRun."""
    return RetryRun(tuples, policy, classifier=classifier, record_metrics=record_metrics)
