"""
Exception classification for attempt outcomes.

Decides whether a failure raised by the test body qualifies for another
attempt. Abort signals are always retryable so that skipped attempts do
not count against the tuple.
"""

import unittest

import structlog

from parameterized_retry.retry.exceptions import AttemptAborted
from parameterized_retry.retry.policy import RetryPolicy

logger = structlog.get_logger(__name__)

# Failure kinds meaning "this attempt was skipped, not failed". unittest skips
# only: pytest.skip() raises a BaseException outside this tuple.
ABORT_KINDS: tuple[type[BaseException], ...] = (AttemptAborted, unittest.SkipTest)


class ExceptionClassifier:
    """
    Classifies attempt failures as retryable or terminal.

    The classifier never swallows a failure: it only decides the history
    outcome. Callers still propagate non-retryable failures as the
    attempt's terminal error.

    Attributes:
        abort_kinds: Exception classes treated as abort signals
    """

    def __init__(self, abort_kinds: tuple[type[BaseException], ...] = ABORT_KINDS):
        self.abort_kinds = abort_kinds

    def is_abort(self, failure: BaseException) -> bool:
        return isinstance(failure, self.abort_kinds)

    def classify(self, failure: BaseException, policy: RetryPolicy) -> bool:
        """
        Decide whether a failure qualifies for retry.

        Args:
            failure: Exception raised by the test body
            policy: Retry policy holding the retryable kinds

        Returns:
            True for abort signals and instances of any retryable kind
            (subclasses included), False otherwise
        """
        abort = self.is_abort(failure)
        retryable = abort or isinstance(failure, policy.retryable_kinds)

        logger.debug(
            "Failure classified",
            error_type=type(failure).__name__,
            retryable=retryable,
            abort=abort,
        )
        return retryable

    def outcome_for(self, failure: BaseException | None, policy: RetryPolicy) -> bool:
        """
        Map an attempt result to its history outcome.

        Args:
            failure: Exception raised by the attempt, or None on success

        Returns:
            AttemptOutcome: True if the attempt failed retryably (or aborted)
        """
        if failure is None:
            return False
        return self.classify(failure, policy)
