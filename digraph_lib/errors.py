"""Exceptions raised by digraph_lib lookups."""

from typing import Hashable


class GraphError(Exception):
    """Base exception for graph operations."""


class NodeNotFoundError(GraphError, LookupError):
    """Raised when a node key is not present in the graph."""

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"Node {key!r} does not exist.")


class EdgeNotFoundError(GraphError, LookupError):
    """Raised when no edge exists for an ordered pair of node keys."""

    def __init__(self, from_key: Hashable, to_key: Hashable) -> None:
        self.from_key = from_key
        self.to_key = to_key
        super().__init__(f"Edge {from_key!r} -> {to_key!r} does not exist.")
