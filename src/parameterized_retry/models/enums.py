"""
Enumerations for parameterized retry data models.

All enums are closed taxonomies - no values outside these sets are permitted.
"""

from enum import Enum


class AttemptStatus(str, Enum):
    """
    Status a host reports for a single attempt.

    ABORTED attempts were deliberately skipped by the test body; they are
    recorded as retryable in the attempt history.
    """

    PASSED = "passed"
    FAILED = "failed"
    ABORTED = "aborted"


class Decision(str, Enum):
    """
    What the invocation iterator does on its next pull.

    - FIRST: first attempt of the tuple at the cursor
    - RETRY: another attempt of the same tuple
    - ADVANCE: commit the current tuple and move to the next one
    - EXHAUSTED: no tuples and no retry left
    """

    FIRST = "first"
    RETRY = "retry"
    ADVANCE = "advance"
    EXHAUSTED = "exhausted"


class ResolutionReason(str, Enum):
    """Why a tuple was committed and the iterator moved on."""

    NO_RETRYABLE_FAILURE = "no_retryable_failure"
    SUCCESS_THRESHOLD_MET = "success_threshold_met"
    BUDGET_EXHAUSTED = "budget_exhausted"
