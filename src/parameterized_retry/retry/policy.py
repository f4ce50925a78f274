"""
Retry policy.

This module defines the RetryPolicy dataclass that governs one run over
one ordered sequence of parameter tuples.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from parameterized_retry.retry.exceptions import ConfigurationError

if TYPE_CHECKING:
    from parameterized_retry.config import Settings


def _dedupe_kinds(kinds: Iterable[type[BaseException]]) -> tuple[type[BaseException], ...]:
    """Drop duplicate kinds keeping first-seen order."""
    return tuple(dict.fromkeys(kinds))


def _is_count(value: object) -> bool:
    # bool is an int subclass
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry budget and success threshold for a parameterized run.

    This frozen dataclass is immutable for the lifetime of one test
    method's execution. Validation happens in __post_init__ so an invalid
    policy can never reach the iterator.

    Attributes:
        repeats: Maximum number of attempts per tuple (retry budget)
        min_success: Size of the trailing success window that resolves a tuple
        retryable_kinds: Exception classes that trigger another attempt
            (subclasses included)
    """

    repeats: int
    min_success: int = 1
    retryable_kinds: tuple[type[BaseException], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate policy invariants."""
        self.validate()
        # frozen: bypass __setattr__ to store the normalized kinds
        object.__setattr__(self, "retryable_kinds", _dedupe_kinds(self.retryable_kinds))

    def validate(self) -> None:
        """
        Check policy invariants.

        Raises:
            ConfigurationError: repeats or min_success not an integer >= 1,
                retryable_kinds not a collection, or a retryable kind that is
                not an exception class
        """
        if not _is_count(self.repeats) or self.repeats < 1:
            raise ConfigurationError(
                "Total repeats must be higher than 0",
                {"repeats": self.repeats},
            )

        if not _is_count(self.min_success) or self.min_success < 1:
            raise ConfigurationError(
                "Total minimum success must be higher or equal to 1",
                {"min_success": self.min_success},
            )

        kinds = self.retryable_kinds
        if isinstance(kinds, (type, str, bytes)) or not isinstance(kinds, Iterable):
            raise ConfigurationError(
                "Retryable kinds must be a tuple of exception classes",
                {"retryable_kinds": repr(kinds)},
            )

        for kind in kinds:
            if not (isinstance(kind, type) and issubclass(kind, BaseException)):
                raise ConfigurationError(
                    f"Retryable kind {kind!r} is not an exception class",
                    {"retryable_kind": repr(kind)},
                )

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        retryable_kinds: Iterable[type[BaseException]] = (),
        repeats: int | None = None,
        min_success: int | None = None,
    ) -> "RetryPolicy":
        """
        Build a policy from configured defaults, with optional overrides.

        Args:
            settings: Application settings (DEFAULT_REPEATS, DEFAULT_MIN_SUCCESS)
            retryable_kinds: Exception classes that trigger retry
            repeats: Override for settings.DEFAULT_REPEATS
            min_success: Override for settings.DEFAULT_MIN_SUCCESS
        """
        return cls(
            repeats=settings.DEFAULT_REPEATS if repeats is None else repeats,
            min_success=settings.DEFAULT_MIN_SUCCESS if min_success is None else min_success,
            retryable_kinds=(
                tuple(retryable_kinds) if isinstance(retryable_kinds, Iterable) else retryable_kinds
            ),
        )
