"""
Invocation display names.

Renders a human-readable name for each invocation from a pattern such as
"[{index}] {arguments}". Supported placeholders:

    {index}         1-based position of the tuple in the parameter sequence
    {arguments}     comma-separated argument values
    {0}, {1}, ...   individual argument values
    {display_name}  display name of the test method
    {attempt}       attempt number for the tuple (1 = first try)
"""

import string
from typing import Iterable

from parameterized_retry.config import settings
from parameterized_retry.models.invocation import Invocation
from parameterized_retry.retry.exceptions import ConfigurationError

NAMED_PLACEHOLDERS = frozenset({"index", "arguments", "display_name", "attempt"})


def _field_root(field_name: str) -> str:
    """'0.real' -> '0', 'arguments[1]' -> 'arguments'."""
    for separator in (".", "["):
        field_name = field_name.split(separator, 1)[0]
    return field_name


class InvocationNameFormatter:
    """
    Formats invocation names from a pattern.

    The pattern is validated on construction so a bad pattern is a
    configuration error before any invocation runs.

    Attributes:
        pattern: Stripped name pattern
        display_name: Display name of the test method
        disambiguate_attempts: Append " (attempt N)" to retried invocations
            whose pattern does not already show the attempt
    """

    def __init__(
        self,
        pattern: str | None = None,
        display_name: str = "",
        disambiguate_attempts: bool | None = None,
    ):
        pattern = settings.DEFAULT_NAME_PATTERN if pattern is None else pattern
        if not pattern or not pattern.strip():
            raise ConfigurationError(
                "Configuration error: invocation name pattern must be non-empty",
                {"display_name": display_name},
            )

        self.pattern = pattern.strip()
        self.display_name = display_name
        self.disambiguate_attempts = (
            settings.DISAMBIGUATE_ATTEMPTS if disambiguate_attempts is None else disambiguate_attempts
        )
        self._fields = self._parse_fields(self.pattern)

    @staticmethod
    def _parse_fields(pattern: str) -> set[str]:
        try:
            fields = {
                _field_root(field_name)
                for _, field_name, _, _ in string.Formatter().parse(pattern)
                if field_name is not None
            }
        except ValueError as exc:
            raise ConfigurationError(
                f"Malformed invocation name pattern: {exc}",
                {"pattern": pattern},
            ) from exc

        unknown = sorted(f for f in fields if f and not f.isdigit() and f not in NAMED_PLACEHOLDERS)
        if unknown:
            raise ConfigurationError(
                f"Unknown placeholder(s) in invocation name pattern: {', '.join(unknown)}",
                {"pattern": pattern, "allowed": sorted(NAMED_PLACEHOLDERS)},
            )
        return fields

    def format(self, invocation: Invocation) -> str:
        """
        Render the display name of an invocation.

        Raises:
            ConfigurationError: Pattern references an argument position the
                tuple does not have, or an item, attribute or format spec
                its value does not support
        """
        arguments = invocation.arguments
        try:
            name = self.pattern.format(
                *arguments,
                index=invocation.index + 1,
                arguments=", ".join(str(value) for value in arguments),
                display_name=self.display_name,
                attempt=invocation.attempt,
            )
        except IndexError as exc:
            raise ConfigurationError(
                "Invocation name pattern references a missing argument",
                {"pattern": self.pattern, "arity": len(arguments), "tuple_index": invocation.index},
            ) from exc
        except (KeyError, AttributeError, TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Invocation name pattern cannot be rendered: {type(exc).__name__}: {exc}",
                {"pattern": self.pattern, "tuple_index": invocation.index},
            ) from exc

        if self.disambiguate_attempts and invocation.is_retry and "attempt" not in self._fields:
            name = f"{name} (attempt {invocation.attempt})"
        return name

    def check(self, tuples: Iterable[tuple]) -> None:
        """
        Render the first-attempt name of every tuple once.

        Lets a host surface pattern/argument mismatches before the first
        invocation runs.

        Raises:
            ConfigurationError: see format()
        """
        for index, arguments in enumerate(tuples):
            self.format(Invocation(index=index, arguments=arguments, attempt=1))
