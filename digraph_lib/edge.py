from dataclasses import dataclass, replace
from typing import Generic, Hashable, Optional, Tuple, TypeVar

from .config import DEFAULT_EDGE_WEIGHT, MIN_EDGE_WEIGHT

K = TypeVar("K", bound=Hashable)
L = TypeVar("L")

# An edge is identified by its ordered (from, to) pair
EdgeKey = Tuple[Hashable, Hashable]


@dataclass(frozen=True)
class Edge(Generic[K, L]):
    """
    A directed edge between two node keys.

    Attributes:
        from_key: Key of the node the edge starts at.
        to_key: Key of the node the edge ends at.
        label: Optional informational payload.
        weight: Optional weight. ``None`` means unit weight when queried.
    """

    from_key: K
    to_key: K
    label: Optional[L] = None
    weight: Optional[float] = None

    @classmethod
    def new(cls, from_key: K, to_key: K) -> "Edge[K, L]":
        """Creates an unlabeled, unweighted edge."""
        return cls(from_key, to_key)

    @property
    def key(self) -> EdgeKey:
        return (self.from_key, self.to_key)

    @property
    def effective_weight(self) -> float:
        """
        The weight the path search uses for this edge.

        A missing weight counts as ``DEFAULT_EDGE_WEIGHT`` and negative
        weights are raised to ``MIN_EDGE_WEIGHT``.
        """
        weight = DEFAULT_EDGE_WEIGHT if self.weight is None else float(self.weight)
        return max(weight, MIN_EDGE_WEIGHT)

    def with_label(self, label: L) -> "Edge[K, L]":
        return replace(self, label=label)

    def without_label(self) -> "Edge[K, L]":
        return replace(self, label=None)

    def with_weight(self, weight: float) -> "Edge[K, L]":
        return replace(self, weight=float(weight))

    def without_weight(self) -> "Edge[K, L]":
        return replace(self, weight=None)
