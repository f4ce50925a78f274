"""
Retry engine for parameterized tests.

This package re-runs a parameter tuple when the test body raises a
retryable failure, up to a bounded number of attempts, and requires a
minimum number of recent successes before the tuple is resolved.

Main Components:
    - RetryPolicy: Immutable retry budget, success threshold, retryable kinds
    - ExceptionClassifier: Decides whether a failure qualifies for retry
    - AttemptHistory: Outcomes recorded for the tuple being attempted
    - InvocationIterator: State machine deciding retry / advance / stop
    - RetryRun: Per-method struct the host pulls invocations from

Usage:
    >>> from parameterized_retry.retry import RetryPolicy, begin_run
    >>> run = begin_run([(1,), (2,)], RetryPolicy(repeats=3, retryable_kinds=(TimeoutError,)))
    >>> for invocation in run:
    ...     run.report_success()
"""

from parameterized_retry.retry.classifier import ABORT_KINDS, ExceptionClassifier
from parameterized_retry.retry.engine import RetryRun, begin_run
from parameterized_retry.retry.exceptions import (
    AttemptAborted,
    ConfigurationError,
    OutcomeReportError,
    ParameterizedRetryError,
    ParameterSourceError,
)
from parameterized_retry.retry.history import AttemptHistory
from parameterized_retry.retry.iterator import InvocationIterator, IterationState
from parameterized_retry.retry.policy import RetryPolicy

__all__ = [
    "ABORT_KINDS",
    "AttemptAborted",
    "AttemptHistory",
    "ConfigurationError",
    "ExceptionClassifier",
    "InvocationIterator",
    "IterationState",
    "OutcomeReportError",
    "ParameterizedRetryError",
    "ParameterSourceError",
    "RetryPolicy",
    "RetryRun",
    "begin_run",
]
