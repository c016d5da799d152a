"""
Shared fixtures for normgraph tests.
"""

import pytest

from normgraph import NodeCache, parse_document


@pytest.fixture
def cache():
    """Empty cache with default settings."""
    return NodeCache()


@pytest.fixture
def parse():
    """Parse GraphQL source into a document."""
    return parse_document


@pytest.fixture
def seeded_cache():
    """Cache holding the result of `query MyQuery` as Query:0."""
    return NodeCache(initial_data={
        "operationResults": {"MyQuery/{}": "Query:0"},
        "normalizedData": {
            "Query:0": {
                "__typename": "Query",
                "stringValue": "hello",
                "intValue": 1,
                "floatValue": 1.0,
                "boolValue": False,
                "nullableValue": None,
                "greeting": {"__ref": True, "type": "Greeting", "id": "0"},
                "nodes": [
                    {"__ref": True, "type": "Node", "id": "0"},
                    {"__ref": True, "type": "Node", "id": "1"},
                ],
            },
            "Greeting:0": {"__typename": "Greeting", "hello": "world"},
            "Node:0": {"__typename": "Node", "name": "hoge"},
            "Node:1": {"__typename": "Node", "name": "fuga"},
        },
    })
