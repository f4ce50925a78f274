"""
Retry engine exceptions.

This module defines the errors raised by the parameterized retry engine
and the abort signal a test body can raise to skip an attempt.

Error taxonomy:
    - ConfigurationError: invalid policy, name pattern or parameter source.
      Raised before any invocation is produced and never retried.
    - ParameterSourceError: a parameter source could not be built or failed
      while producing its tuples.
    - OutcomeReportError: the host reported an outcome with no outstanding
      attempt to attach it to.
    - AttemptAborted: raised by a test body to mark an attempt as skipped.
      Always treated as retryable.
"""

from typing import Any


class ParameterizedRetryError(Exception):
    """
    Base exception for all engine errors.

    All engine-specific exceptions inherit from this to allow catching
    any engine error with a single except clause.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize engine error.

        Args:
            message: Human-readable error description
            details: Structured error data for logging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(ParameterizedRetryError):
    """
    Raised when the run cannot be configured.

    Examples:
    - repeats < 1 or min_success < 1
    - a retryable kind that is not an exception class
    - a blank or malformed invocation name pattern

    Fatal: surfaced immediately, no invocations are produced.
    """
    pass


class ParameterSourceError(ConfigurationError):
    """
    Raised when a parameter source cannot be constructed or fails while
    producing its tuples.

    Attributes:
        source_name: Name of the offending source (class name or repr)
    """

    def __init__(self, message: str, source_name: str, cause: BaseException | None = None):
        details: dict[str, Any] = {"source": source_name}
        if cause is not None:
            details["cause"] = f"{type(cause).__name__}: {cause}"
        super().__init__(message, details)
        self.source_name = source_name


class OutcomeReportError(ParameterizedRetryError):
    """
    Raised when an attempt outcome is reported but no attempt is outstanding.

    Each invocation produced by the iterator accepts exactly one report.
    """
    pass


class AttemptAborted(Exception):
    """
    Abort signal: the attempt was deliberately skipped, not a real failure.

    Test bodies raise this (for example when a precondition is not met)
    to have the attempt recorded as retryable without counting it against
    the tuple's success window.
    """

    def __init__(self, reason: str = "attempt aborted"):
        super().__init__(reason)
        self.reason = reason
