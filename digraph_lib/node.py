from dataclasses import dataclass, field, replace
from typing import FrozenSet, Generic, Hashable, Iterable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(frozen=True)
class Node(Generic[K, V]):
    """
    A graph vertex: a key, an optional value and the keys it is linked to.

    Nodes are immutable. The ``with_*``/``without_*`` helpers return a new
    node and leave the original untouched.

    Attributes:
        key: The unique, hashable identifier for the node.
        value: Optional payload associated with the node.
        incoming: Keys of nodes that have an edge pointing at this node.
        outgoing: Keys of nodes this node has an edge pointing at.
    """

    key: K
    value: Optional[V] = None
    incoming: FrozenSet[K] = field(default_factory=frozenset)
    outgoing: FrozenSet[K] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        # Accept any iterable of keys but always store frozensets
        object.__setattr__(self, "incoming", frozenset(self.incoming))
        object.__setattr__(self, "outgoing", frozenset(self.outgoing))

    @classmethod
    def new(cls, key: K, value: Optional[V] = None) -> "Node[K, V]":
        """Creates a node with no adjacency."""
        return cls(key, value)

    def with_value(self, value: V) -> "Node[K, V]":
        return replace(self, value=value)

    def without_value(self) -> "Node[K, V]":
        return replace(self, value=None)

    def with_incoming(self, keys: Iterable[K]) -> "Node[K, V]":
        """Returns a copy whose incoming keys are exactly ``keys``."""
        return replace(self, incoming=frozenset(keys))

    def without_incoming(self) -> "Node[K, V]":
        return replace(self, incoming=frozenset())

    def with_outgoing(self, keys: Iterable[K]) -> "Node[K, V]":
        """Returns a copy whose outgoing keys are exactly ``keys``."""
        return replace(self, outgoing=frozenset(keys))

    def without_outgoing(self) -> "Node[K, V]":
        return replace(self, outgoing=frozenset())
