"""
Tests for operation id generation.
"""

import pytest

from normgraph import (
    DefaultOperationIdGenerator,
    MissingOperationError,
    NodeCache,
    OperationIdGenerator,
    UnnamedOperationError,
    parse_document,
)


class TestDefaultOperationIdGenerator:
    """Name + serialized variables."""

    def test_empty_variables(self):
        """No variables serialize as {}."""
        generator = DefaultOperationIdGenerator()
        document = parse_document("query MyQuery { a }")
        assert generator.get_operation_id(document, {}) == "MyQuery/{}"
        assert generator.get_operation_id(document, None) == "MyQuery/{}"

    def test_variables_are_compact_json(self):
        """Separators carry no spaces."""
        generator = DefaultOperationIdGenerator()
        document = parse_document("query MyQuery($id: ID) { a }")
        assert generator.get_operation_id(document, {"id": "1"}) == 'MyQuery/{"id":"1"}'

    def test_keys_are_sorted(self):
        """Key order does not change the id."""
        generator = DefaultOperationIdGenerator()
        document = parse_document("query Q { a }")
        first = generator.get_operation_id(document, {"b": 1, "a": 2})
        second = generator.get_operation_id(document, {"a": 2, "b": 1})
        assert first == second == 'Q/{"a":2,"b":1}'

    def test_unsorted_keeps_insertion_order(self):
        """sort_keys=False keeps the caller's order."""
        generator = DefaultOperationIdGenerator(sort_keys=False)
        document = parse_document("query Q { a }")
        assert generator.get_operation_id(document, {"b": 1, "a": 2}) == 'Q/{"b":1,"a":2}'

    def test_anonymous_operation_raises(self):
        """Operations must be named."""
        generator = DefaultOperationIdGenerator()
        with pytest.raises(UnnamedOperationError):
            generator.get_operation_id(parse_document("{ a }"), {})

    def test_document_without_operation_raises(self):
        """Fragment-only documents have no id."""
        generator = DefaultOperationIdGenerator()
        with pytest.raises(MissingOperationError):
            generator.get_operation_id(parse_document("fragment F on Query { a }"), {})

    def test_first_operation_is_used(self):
        """Later operations are ignored."""
        generator = DefaultOperationIdGenerator()
        document = parse_document("query First { a } query Second { b }")
        assert generator.get_operation_id(document, {}) == "First/{}"


class FixedOperationIdGenerator(OperationIdGenerator):
    def get_operation_id(self, document, variables):
        return "fixed"


class TestCustomGenerator:
    """Injected strategies."""

    def test_cache_uses_injected_generator(self):
        """Results are recorded under the custom key."""
        cache = NodeCache(id_generator=FixedOperationIdGenerator())
        query = parse_document("query MyQuery { a }")
        cache.write(query, {}, {"__typename": "Query", "a": 1})

        snapshot = cache.serialize()
        assert snapshot.operation_results == {"fixed": "Query:fixed"}
        assert cache.read(query, {}).data == {"a": 1}

    def test_generator_without_implementation_cannot_be_created(self):
        """The base class is abstract."""
        with pytest.raises(TypeError):
            OperationIdGenerator()
