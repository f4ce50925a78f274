"""
Attempt history for the tuple currently being attempted.
"""

import threading
from collections import deque
from itertools import islice

from parameterized_retry.retry.exceptions import OutcomeReportError


class AttemptHistory:
    """
    Ordered log of attempt outcomes scoped to one parameter tuple.

    Outcomes are booleans: True means the attempt failed with a retryable
    kind (or was aborted), False means success or a non-retryable failure.
    The buffer is bounded by the retry budget and cleared whenever the
    iterator advances to the next tuple.

    Appends are lock-guarded because some hosts report outcomes from a
    worker thread other than the one pulling invocations.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._outcomes: deque[bool] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def record(self, outcome: bool) -> None:
        """
        Append one attempt outcome.

        Raises:
            OutcomeReportError: history already holds `capacity` outcomes
        """
        with self._lock:
            if len(self._outcomes) >= self.capacity:
                raise OutcomeReportError(
                    "Attempt history is full for the current tuple",
                    {"capacity": self.capacity},
                )
            self._outcomes.append(bool(outcome))

    def clear(self) -> None:
        with self._lock:
            self._outcomes.clear()

    def failure_count(self) -> int:
        """Count of retryable failures recorded for the current tuple."""
        with self._lock:
            return sum(1 for outcome in self._outcomes if outcome)

    def recent_success_count(self, window: int) -> int:
        """
        Count successes among the most recent `window` outcomes.

        Only the last min(window, len) entries are inspected, so older
        successes followed by failures do not count.
        """
        with self._lock:
            skip = max(len(self._outcomes) - window, 0)
            return sum(1 for outcome in islice(self._outcomes, skip, None) if not outcome)

    def snapshot(self) -> tuple[bool, ...]:
        with self._lock:
            return tuple(self._outcomes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)
