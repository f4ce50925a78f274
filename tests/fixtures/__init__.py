"""
Test fixtures for parameterized retry.

Failure kinds shared by unit and integration tests:
- FlakyError: configured as retryable in most policies
- FlakyTimeoutError: subclass of FlakyError (retryable through its base)
- FatalError: never configured as retryable
"""


class FlakyError(Exception):
    """Retryable failure kind used throughout the tests."""


class FlakyTimeoutError(FlakyError):
    """Specialization of FlakyError."""


class FatalError(Exception):
    """Failure kind never configured as retryable."""
