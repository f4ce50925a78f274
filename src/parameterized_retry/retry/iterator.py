"""
Invocation iterator: the retry state machine.

The iterator is pulled by the host one invocation at a time. On every
pull it decides, from the attempt history of the tuple at the cursor,
whether to hand back another attempt of that tuple, move on to the first
attempt of the next tuple, or stop.

Decision rule (R = repeats, M = min_success, H = attempt history):

    retry   iff  H.failure_count() >= 1
            and  attempt_cursor < R
            and  H.recent_success_count(M) != M

Otherwise the tuple is committed and the cursor advances. A retry always
re-yields the tuple at the cursor position active when the retry was
decided, i.e. the tuple whose attempt just failed.
"""

from dataclasses import dataclass
from typing import Iterable, Sequence

import structlog

from parameterized_retry.config import settings
from parameterized_retry.models.enums import Decision, ResolutionReason
from parameterized_retry.models.invocation import Invocation
from parameterized_retry.monitoring.metrics import invocations_total, tuples_resolved_total
from parameterized_retry.retry.history import AttemptHistory
from parameterized_retry.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)


@dataclass
class IterationState:
    """
    Mutable cursor state, owned exclusively by one InvocationIterator.

    Attributes:
        tuple_cursor: Index of the tuple currently being attempted
        attempt_cursor: Attempts yielded for that tuple (0 before the first)
        retryable_failure_pending: Last reported outcome was retryable and
            no retry has been handed out for it yet
        exhausted: Terminal state reached
    """

    tuple_cursor: int = 0
    attempt_cursor: int = 0
    retryable_failure_pending: bool = False
    exhausted: bool = False


class InvocationIterator:
    """
    Pull-based iterator of invocations over an eagerly materialized
    sequence of parameter tuples.

    States: HAS_MORE until every tuple is committed, then EXHAUSTED. The
    iterator never runs anything itself; the host runs the body between
    two pulls and reports the outcome through record_outcome().

    Attributes:
        tuples: Ordered parameter tuples
        policy: Retry budget and success threshold
        history: Attempt history of the tuple at the cursor
        state: Cursor state
        resolutions: Reason each committed tuple was resolved, by index
    """

    def __init__(
        self,
        tuples: Iterable[Sequence],
        policy: RetryPolicy,
        history: AttemptHistory,
        record_metrics: bool | None = None,
    ):
        self.tuples: list[tuple] = [tuple(values) for values in tuples]
        self.policy = policy
        self.history = history
        self.state = IterationState()
        self.resolutions: dict[int, ResolutionReason] = {}
        self.record_metrics = settings.PROMETHEUS_ENABLED if record_metrics is None else record_metrics

    def __iter__(self) -> "InvocationIterator":
        return self

    def __next__(self) -> Invocation:
        decision = self.decide()

        if decision is Decision.RETRY:
            return self._retry()

        if decision is Decision.ADVANCE:
            self._advance()
            decision = self.decide()

        if decision is Decision.FIRST:
            return self._first_attempt()

        if not self.state.exhausted:
            self.state.exhausted = True
            logger.info(
                "Parameter sequence exhausted",
                tuples=len(self.tuples),
                resolutions=len(self.resolutions),
            )
        raise StopIteration

    def decide(self) -> Decision:
        """
        Compute what the next pull will do, without changing any state.

        Returns:
            FIRST, RETRY, ADVANCE or EXHAUSTED
        """
        state = self.state
        if state.exhausted:
            return Decision.EXHAUSTED

        if state.attempt_cursor == 0:
            if state.tuple_cursor < len(self.tuples):
                return Decision.FIRST
            return Decision.EXHAUSTED

        if self._should_retry():
            return Decision.RETRY
        return Decision.ADVANCE

    def record_outcome(self, outcome: bool) -> None:
        """
        Record the outcome of the attempt most recently handed out.

        Args:
            outcome: True if the attempt failed retryably (or was aborted)
        """
        self.history.record(outcome)
        self.state.retryable_failure_pending = bool(outcome)

    @property
    def current_tuple(self) -> tuple | None:
        if self.state.tuple_cursor < len(self.tuples):
            return self.tuples[self.state.tuple_cursor]
        return None

    def _counts(self) -> tuple[int, int]:
        """(failures, recent successes) from one locked read of the history."""
        outcomes = self.history.snapshot()
        window = outcomes[-self.policy.min_success:]
        return sum(outcomes), window.count(False)

    def _should_retry(self) -> bool:
        # Single predicate: splitting it changes observable retry counts
        failures, recent_successes = self._counts()
        return (
            failures >= 1
            and self.state.attempt_cursor < self.policy.repeats
            and recent_successes != self.policy.min_success
        )

    def _resolution_reason(self) -> ResolutionReason:
        failures, recent_successes = self._counts()
        if failures == 0:
            return ResolutionReason.NO_RETRYABLE_FAILURE
        if recent_successes == self.policy.min_success:
            return ResolutionReason.SUCCESS_THRESHOLD_MET
        return ResolutionReason.BUDGET_EXHAUSTED

    def _first_attempt(self) -> Invocation:
        state = self.state
        state.attempt_cursor = 1

        if self.record_metrics:
            invocations_total.labels(kind="first").inc()

        logger.debug(
            "Starting parameter tuple",
            tuple_index=state.tuple_cursor,
            tuples_total=len(self.tuples),
        )
        return Invocation(
            index=state.tuple_cursor,
            arguments=self.tuples[state.tuple_cursor],
            attempt=1,
        )

    def _retry(self) -> Invocation:
        state = self.state
        state.attempt_cursor += 1
        state.retryable_failure_pending = False

        if self.record_metrics:
            invocations_total.labels(kind="retry").inc()

        history = self.history.snapshot()
        logger.info(
            f"Retrying parameter tuple (attempt {state.attempt_cursor}/{self.policy.repeats})",
            tuple_index=state.tuple_cursor,
            attempt=state.attempt_cursor,
            repeats=self.policy.repeats,
            failures=sum(history),
            history=history,
        )
        return Invocation(
            index=state.tuple_cursor,
            arguments=self.tuples[state.tuple_cursor],
            attempt=state.attempt_cursor,
        )

    def _advance(self) -> None:
        # Budget exhausted, no retryable failure pending, or success threshold
        # met: every branch that is not a retry commits the tuple.
        state = self.state
        reason = self._resolution_reason()
        self.resolutions[state.tuple_cursor] = reason

        if self.record_metrics:
            tuples_resolved_total.labels(reason=reason.value).inc()

        log = logger.warning if reason is ResolutionReason.BUDGET_EXHAUSTED else logger.debug
        log(
            f"Parameter tuple resolved: {reason.value}",
            tuple_index=state.tuple_cursor,
            attempts=state.attempt_cursor,
            retryable_failure_pending=state.retryable_failure_pending,
            history=self.history.snapshot(),
        )

        state.tuple_cursor += 1
        self.history.clear()
        state.retryable_failure_pending = False
        state.attempt_cursor = 0
