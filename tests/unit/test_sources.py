"""Unit tests for parameter sources and argument consumption."""

import pytest

from parameterized_retry.retry.exceptions import ConfigurationError, ParameterSourceError
from parameterized_retry.sources import (
    MethodSignature,
    ParameterSource,
    StaticSource,
    as_tuple,
    consume_arguments,
    materialize,
    resolve_source,
)


class CsvLikeSource:
    """No-argument source, usable as a class."""

    def provide_arguments(self):
        yield ("apple", 1)
        yield ("pear", 2)


class NeedsPathSource:
    def __init__(self, path):
        self.path = path

    def provide_arguments(self):
        return []


class ExplodingSource:
    def provide_arguments(self):
        yield (1,)
        raise OSError("disk gone")


class TestMethodSignature:
    """Arity detection from the test body."""

    def test_positional_parameters(self):
        def body(a, b, c=3):
            pass

        signature = MethodSignature.from_callable(body)
        assert signature.parameter_count == 3
        assert signature.has_aggregator is False

    def test_var_positional_is_aggregator(self):
        def body(a, *rest):
            pass

        signature = MethodSignature.from_callable(body)
        assert signature.parameter_count == 1
        assert signature.has_aggregator is True

    def test_keyword_only_not_counted(self):
        def body(a, *, fixture=None, **kwargs):
            pass

        assert MethodSignature.from_callable(body) == MethodSignature(parameter_count=1)


class TestConsumeArguments:
    def test_truncates_to_arity(self):
        assert consume_arguments((1, 2, 3), MethodSignature(parameter_count=2)) == (1, 2)

    def test_shorter_tuple_unchanged(self):
        assert consume_arguments((1,), MethodSignature(parameter_count=2)) == (1,)

    def test_aggregator_passes_through(self):
        signature = MethodSignature(parameter_count=1, has_aggregator=True)
        assert consume_arguments((1, 2, 3), signature) == (1, 2, 3)

    def test_no_signature_passes_through(self):
        assert consume_arguments([1, 2, 3], None) == (1, 2, 3)


def test_as_tuple():
    assert as_tuple((1, 2)) == (1, 2)
    assert as_tuple([1, 2]) == (1, 2)
    assert as_tuple("abc") == ("abc",)
    assert as_tuple(5) == (5,)


class TestResolveSource:
    def test_instance_is_used_as_is(self):
        source = CsvLikeSource()
        assert resolve_source(source) is source
        assert isinstance(source, ParameterSource)

    def test_class_is_instantiated(self):
        assert isinstance(resolve_source(CsvLikeSource), CsvLikeSource)

    def test_iterable_becomes_static_source(self):
        assert isinstance(resolve_source([(1,), (2,)]), StaticSource)

    def test_class_without_no_arg_constructor(self):
        with pytest.raises(ParameterSourceError, match="no-argument constructor") as exc_info:
            resolve_source(NeedsPathSource)
        assert exc_info.value.source_name == "NeedsPathSource"
        assert isinstance(exc_info.value.__cause__, TypeError)

    @pytest.mark.parametrize("entry", [42, "a,b,c", None])
    def test_unusable_object(self, entry):
        with pytest.raises(ParameterSourceError, match="not a parameter source"):
            resolve_source(entry)


class TestMaterialize:
    """Eager, ordered collection across sources."""

    def test_sources_in_order(self):
        tuples = materialize([CsvLikeSource, [(3, "x")], StaticSource([4, 5])])
        assert tuples == [("apple", 1), ("pear", 2), (3, "x"), (4,), (5,)]

    def test_truncates_with_signature(self):
        tuples = materialize([[(1, 2, 3), (4, 5, 6)]], MethodSignature(parameter_count=2))
        assert tuples == [(1, 2), (4, 5)]

    def test_failing_source_is_configuration_error(self):
        with pytest.raises(ParameterSourceError, match="ExplodingSource") as exc_info:
            materialize([ExplodingSource])

        assert isinstance(exc_info.value, ConfigurationError)
        assert isinstance(exc_info.value.__cause__, OSError)
        assert "disk gone" in exc_info.value.details["cause"]

    def test_empty_sources(self):
        assert materialize([]) == []
