"""
Parameter sources.

A parameter source supplies an ordered, finite sequence of argument
tuples. Sources are injected by the caller; the engine never discovers
them. All tuples are collected eagerly before the first invocation so a
broken source surfaces as a configuration error instead of mid-run.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Protocol, Sequence, runtime_checkable

import structlog

from parameterized_retry.retry.exceptions import ParameterSourceError

logger = structlog.get_logger(__name__)


@runtime_checkable
class ParameterSource(Protocol):
    """
    Protocol for parameter sources.

    Implementations return an iterable of rows; each row is a sequence of
    argument values (a scalar row is treated as a single argument).
    """

    def provide_arguments(self) -> Iterable[Any]:
        ...


class StaticSource:
    """Parameter source over an in-memory sequence of rows."""

    def __init__(self, rows: Iterable[Any]):
        self.rows = list(rows)

    def provide_arguments(self) -> Iterable[Any]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return f"StaticSource({len(self.rows)} rows)"


@dataclass(frozen=True)
class MethodSignature:
    """
    Arity information about the test body.

    Attributes:
        parameter_count: Number of positional parameters the body declares
        has_aggregator: Body declares *args, which consumes any extra values
    """

    parameter_count: int
    has_aggregator: bool = False

    @classmethod
    def from_callable(cls, body: Callable[..., Any]) -> "MethodSignature":
        positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        parameters = inspect.signature(body).parameters.values()
        return cls(
            parameter_count=sum(1 for p in parameters if p.kind in positional),
            has_aggregator=any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters),
        )


def as_tuple(row: Any) -> tuple:
    """Normalize one source row to an argument tuple."""
    if isinstance(row, (tuple, list)):
        return tuple(row)
    return (row,)


def consume_arguments(arguments: Sequence[Any], signature: MethodSignature | None) -> tuple:
    """
    Truncate an argument tuple to the body's arity.

    Extra values are dropped unless the body aggregates them through *args,
    in which case the tuple passes through unmodified.
    """
    arguments = tuple(arguments)
    if signature is None or signature.has_aggregator:
        return arguments
    if len(arguments) > signature.parameter_count:
        return arguments[: signature.parameter_count]
    return arguments


def _source_name(source: Any) -> str:
    if isinstance(source, type):
        return source.__name__
    return repr(source)


def _instantiate(source_cls: type) -> ParameterSource:
    try:
        return source_cls()
    except TypeError as exc:
        raise ParameterSourceError(
            f"Failed to find a no-argument constructor for parameter source [{source_cls.__name__}]",
            source_name=source_cls.__name__,
            cause=exc,
        ) from exc
    except Exception as exc:
        raise ParameterSourceError(
            f"Failed to construct parameter source [{source_cls.__name__}]",
            source_name=source_cls.__name__,
            cause=exc,
        ) from exc


def resolve_source(source: Any) -> ParameterSource:
    """
    Turn a source entry into a ParameterSource.

    Accepts a ParameterSource instance, a ParameterSource class (built with
    no arguments), or any plain iterable of rows.
    """
    if isinstance(source, type):
        return _instantiate(source)
    if isinstance(source, ParameterSource):
        return source
    if isinstance(source, Iterable) and not isinstance(source, (str, bytes)):
        return StaticSource(source)
    raise ParameterSourceError(
        f"Object of type {type(source).__name__} is not a parameter source",
        source_name=_source_name(source),
    )


def materialize(
    sources: Iterable[Any],
    signature: MethodSignature | None = None,
) -> list[tuple]:
    """
    Collect every tuple from every source, in order.

    Args:
        sources: Parameter sources (instances, classes or iterables of rows)
        signature: Body arity used to truncate tuples (None = no truncation)

    Returns:
        Ordered list of argument tuples

    Raises:
        ParameterSourceError: A source could not be built or failed while
            producing arguments
    """
    collected: list[tuple] = []

    for entry in sources:
        source = resolve_source(entry)
        name = _source_name(entry)
        try:
            rows = [as_tuple(row) for row in source.provide_arguments()]
        except ParameterSourceError:
            raise
        except Exception as exc:
            raise ParameterSourceError(
                f"Parameter source [{name}] failed to provide arguments",
                source_name=name,
                cause=exc,
            ) from exc

        collected.extend(consume_arguments(row, signature) for row in rows)
        logger.debug("Parameter source materialized", source=name, rows=len(rows))

    return collected
