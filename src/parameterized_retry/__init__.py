"""
Parameterized retry engine.

Repeats a parameterized test body over an ordered sequence of argument
tuples, re-running a tuple when the body raises a retryable failure:
- bounded number of attempts per tuple (repeats)
- a tuple is resolved once its most recent min_success attempts succeeded
- abort signals are retried without counting against the tuple

Architecture: explicit RetryRun struct (policy + history + iterator) pulled
by a host loop; parameter sources and naming are injected collaborators.
"""

from parameterized_retry.models import AttemptStatus, Invocation, InvocationResult, RunReport
from parameterized_retry.naming import InvocationNameFormatter
from parameterized_retry.retry import (
    AttemptAborted,
    ConfigurationError,
    ExceptionClassifier,
    ParameterSourceError,
    RetryPolicy,
    RetryRun,
    begin_run,
)
from parameterized_retry.runner import run_parameterized
from parameterized_retry.sources import MethodSignature, StaticSource, materialize

__version__ = "0.1.0"

__all__ = [
    "AttemptAborted",
    "AttemptStatus",
    "ConfigurationError",
    "ExceptionClassifier",
    "Invocation",
    "InvocationNameFormatter",
    "InvocationResult",
    "MethodSignature",
    "ParameterSourceError",
    "RetryPolicy",
    "RetryRun",
    "RunReport",
    "StaticSource",
    "begin_run",
    "materialize",
    "run_parameterized",
]
