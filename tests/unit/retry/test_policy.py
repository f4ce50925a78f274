"""Unit tests for RetryPolicy validation."""

from dataclasses import FrozenInstanceError

import pytest

from parameterized_retry.retry.exceptions import ConfigurationError
from parameterized_retry.retry.policy import RetryPolicy
from tests.fixtures import FatalError, FlakyError


def test_valid_policy():
    policy = RetryPolicy(repeats=3, min_success=2, retryable_kinds=(FlakyError,))
    assert policy.repeats == 3
    assert policy.min_success == 2
    assert policy.retryable_kinds == (FlakyError,)


def test_defaults():
    policy = RetryPolicy(repeats=1)
    assert policy.min_success == 1
    assert policy.retryable_kinds == ()


def test_repeats_must_be_positive():
    with pytest.raises(ConfigurationError, match="repeats"):
        RetryPolicy(repeats=0)


def test_min_success_must_be_positive():
    with pytest.raises(ConfigurationError, match="minimum success"):
        RetryPolicy(repeats=3, min_success=0)


def test_non_integer_repeats_rejected():
    with pytest.raises(ConfigurationError):
        RetryPolicy(repeats=2.5)


def test_configuration_error_carries_details():
    with pytest.raises(ConfigurationError) as exc_info:
        RetryPolicy(repeats=-2)
    assert exc_info.value.details == {"repeats": -2}
    assert "-2" in str(exc_info.value)


@pytest.mark.parametrize("field", ["repeats", "min_success"])
@pytest.mark.parametrize("value", [True, False])
def test_bool_counts_rejected(field, value):
    """bool is an int subclass but never a valid count."""
    values = {"repeats": 3, "min_success": 1, field: value}
    with pytest.raises(ConfigurationError):
        RetryPolicy(**values)


@pytest.mark.parametrize("kind", ["FlakyError", 42, FlakyError(), int])
def test_retryable_kinds_must_be_exception_classes(kind):
    with pytest.raises(ConfigurationError, match="not an exception class"):
        RetryPolicy(repeats=3, retryable_kinds=(kind,))


@pytest.mark.parametrize("kinds", [ValueError, FlakyError, 42, "FlakyError", None])
def test_retryable_kinds_must_be_a_collection(kinds):
    with pytest.raises(ConfigurationError, match="tuple of exception classes"):
        RetryPolicy(repeats=3, retryable_kinds=kinds)


def test_retryable_kinds_accepts_list():
    policy = RetryPolicy(repeats=3, retryable_kinds=[FlakyError, FatalError])
    assert policy.retryable_kinds == (FlakyError, FatalError)


def test_duplicate_kinds_dropped_in_order():
    policy = RetryPolicy(repeats=3, retryable_kinds=(FlakyError, FatalError, FlakyError))
    assert policy.retryable_kinds == (FlakyError, FatalError)


def test_policy_is_frozen():
    policy = RetryPolicy(repeats=3)
    with pytest.raises(FrozenInstanceError):
        policy.repeats = 5


def test_from_settings_uses_defaults(test_settings):
    test_settings.DEFAULT_REPEATS = 5
    test_settings.DEFAULT_MIN_SUCCESS = 2

    policy = RetryPolicy.from_settings(test_settings, retryable_kinds=[FlakyError])

    assert policy.repeats == 5
    assert policy.min_success == 2
    assert policy.retryable_kinds == (FlakyError,)


def test_from_settings_overrides(test_settings):
    policy = RetryPolicy.from_settings(test_settings, repeats=7, min_success=3)
    assert policy.repeats == 7
    assert policy.min_success == 3


def test_from_settings_rejects_bare_class(test_settings):
    with pytest.raises(ConfigurationError, match="tuple of exception classes"):
        RetryPolicy.from_settings(test_settings, retryable_kinds=FlakyError)


def test_from_settings_validates(test_settings):
    test_settings.DEFAULT_REPEATS = 0
    with pytest.raises(ConfigurationError):
        RetryPolicy.from_settings(test_settings)
