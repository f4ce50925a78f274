"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import pytest

from parameterized_retry.config import Settings
from parameterized_retry.retry.engine import RetryRun
from parameterized_retry.retry.policy import RetryPolicy
from tests.fixtures import FlakyError


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults.

    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.DEFAULT_REPEATS = 5
    """
    return Settings(
        APP_NAME="Parameterized Retry (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        DEFAULT_REPEATS=3,
        DEFAULT_MIN_SUCCESS=1,
        DEFAULT_NAME_PATTERN="[{index}] {arguments}",
        DISAMBIGUATE_ATTEMPTS=True,
        PROMETHEUS_ENABLED=False,  # Enable explicitly in metric tests
    )


@pytest.fixture
def make_policy():
    """Factory fixture for RetryPolicy with FlakyError as the retryable kind.

    Usage:
        def test_something(make_policy):
            policy = make_policy(repeats=5, min_success=2)
    """
    def _create(
        repeats: int = 3,
        min_success: int = 1,
        retryable_kinds: tuple = (FlakyError,),
    ) -> RetryPolicy:
        return RetryPolicy(
            repeats=repeats,
            min_success=min_success,
            retryable_kinds=retryable_kinds,
        )

    return _create


@pytest.fixture
def drive_run():
    """Factory fixture that drives a RetryRun from a script of outcomes.

    The script maps tuple index -> list of per-attempt outcomes, where an
    outcome is an exception instance (the attempt raised it) or None
    (the attempt passed). Attempts beyond the script pass.

    Usage:
        def test_something(drive_run):
            invocations = drive_run(run, {0: [FlakyError(), None]})
    """
    def _drive(run: RetryRun, script: dict[int, list]) -> list:
        invocations = []
        for invocation in run:
            invocations.append(invocation)
            outcomes = script.get(invocation.index, [])
            position = invocation.attempt - 1
            failure = outcomes[position] if position < len(outcomes) else None
            run.report(failure)
        return invocations

    return _drive
