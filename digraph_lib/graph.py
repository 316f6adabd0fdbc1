import logging
from typing import Dict, FrozenSet, Generic, Hashable, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .edge import Edge, EdgeKey
from .errors import EdgeNotFoundError, NodeNotFoundError
from .node import Node

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
L = TypeVar("L")


class Graph(Generic[K, V, L]):
    """
    An immutable directed graph of keyed nodes and optionally labeled,
    optionally weighted edges.

    Every mutating operation returns a new Graph and leaves the receiver
    unchanged. For every stored edge (a, b), node ``a`` lists ``b`` in its
    outgoing keys and node ``b`` lists ``a`` in its incoming keys, and every
    adjacency entry is backed by a stored edge.
    """

    def __init__(self) -> None:
        self._nodes: Dict[K, Node[K, V]] = {}  # Stores node key -> Node
        self._edges: Dict[EdgeKey, Edge[K, L]] = {}  # Stores (from, to) -> Edge

    @classmethod
    def _from_parts(
        cls,
        nodes: Dict[K, Node[K, V]],
        edges: Dict[EdgeKey, Edge[K, L]]
    ) -> "Graph[K, V, L]":
        graph = cls()
        graph._nodes = nodes
        graph._edges = edges
        return graph

    # --- Queries --- #

    def get_nodes(self) -> List[Node[K, V]]:
        """Returns all nodes. The order is not part of the contract."""
        return list(self._nodes.values())

    def get_edges(self) -> List[Edge[K, L]]:
        """Returns all edges. The order is not part of the contract."""
        return list(self._edges.values())

    def get_node(self, key: K) -> Node[K, V]:
        """
        Retrieves the node stored under a key.

        Args:
            key: The key of the node.

        Returns:
            The stored Node.

        Raises:
            NodeNotFoundError: If the node does not exist.
        """
        try:
            return self._nodes[key]
        except KeyError:
            raise NodeNotFoundError(key) from None

    def get_edge(self, from_key: K, to_key: K) -> Edge[K, L]:
        """
        Retrieves the edge from ``from_key`` to ``to_key``.

        Args:
            from_key: The starting node of the edge.
            to_key: The ending node of the edge.

        Returns:
            The stored Edge.

        Raises:
            EdgeNotFoundError: If no such edge exists.
        """
        try:
            return self._edges[(from_key, to_key)]
        except KeyError:
            raise EdgeNotFoundError(from_key, to_key) from None

    def has_node(self, key: K) -> bool:
        return key in self._nodes

    def has_edge(self, from_key: K, to_key: K) -> bool:
        return (from_key, to_key) in self._edges

    def neighbors(self, key: K) -> Tuple[K, ...]:
        """
        Returns the keys reachable from ``key`` over one outgoing edge.

        Keys come back sorted, or sorted by ``repr`` when they cannot be
        compared, so searches visit them in the same order on every run.
        An absent key has no neighbors; this never raises.
        """
        node = self._nodes.get(key)
        if node is None:
            return ()
        return _ordered(node.outgoing)

    def edge_weight(self, from_key: K, to_key: K) -> float:
        """
        Gets the weight the path search uses for an edge.

        Missing weights count as 1.0 and negative weights as 0.0.

        Raises:
            EdgeNotFoundError: If no such edge exists.
        """
        return self.get_edge(from_key, to_key).effective_weight

    def get_nodes_count(self) -> int:
        """Returns the number of nodes in the graph."""
        return len(self._nodes)

    def get_edges_count(self) -> int:
        """Returns the number of edges in the graph."""
        return len(self._edges)

    def __contains__(self, key: object) -> bool:
        """Checks if a node exists in the graph."""
        return key in self._nodes

    def __len__(self) -> int:
        """Returns the number of nodes in the graph."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[K]:
        """Returns an iterator over all node keys in the graph."""
        return iter(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self._nodes == other._nodes and self._edges == other._edges

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    # --- Mutations (each returns a new Graph) --- #

    def insert_node(self, node: Node[K, V]) -> "Graph[K, V, L]":
        """
        Adds a node, or replaces the node stored under the same key.

        The stored adjacency is reconciled against the new node: edges for
        links the new node drops are removed first, then the node record is
        installed, then unit-weight edges are created for links the new node
        adds. An edge that already exists for an added link is kept as is.
        Nodes on the other end of an added link are created if missing.

        A self-loop lives in both adjacency sets of its node. Dropping the
        node's own key from either set removes an existing self-loop; adding
        it to either set creates one.

        Args:
            node: The node to store.

        Returns:
            A new Graph containing the node.
        """
        nodes = dict(self._nodes)
        edges = dict(self._edges)
        key = node.key

        old = nodes.get(key)
        old_incoming: FrozenSet[K] = old.incoming if old is not None else frozenset()
        old_outgoing: FrozenSet[K] = old.outgoing if old is not None else frozenset()
        node = _normalize_self_loop(node, key in old_outgoing)

        removed_in = old_incoming - node.incoming
        removed_out = old_outgoing - node.outgoing
        new_in = node.incoming - old_incoming
        new_out = node.outgoing - old_outgoing

        if old is not None:
            logger.debug(
                "Replacing node %r: %d edge(s) removed, %d edge(s) added",
                key, len(removed_in) + len(removed_out), len(new_in) + len(new_out)
            )

        for other in removed_in:
            _drop_edge(nodes, edges, other, key)
        for other in removed_out:
            _drop_edge(nodes, edges, key, other)

        nodes[key] = node

        for other in _ordered(new_in):
            _add_unit_edge(nodes, edges, other, key)
        for other in _ordered(new_out):
            _add_unit_edge(nodes, edges, key, other)

        return type(self)._from_parts(nodes, edges)

    def remove_node(self, node: Node[K, V]) -> "Graph[K, V, L]":
        """
        Removes a node and every edge touching it.

        The node is looked up by key; its stored adjacency decides which
        edges go. Removing an absent node returns an equal graph.

        Args:
            node: The node to remove.

        Returns:
            A new Graph without the node.
        """
        stored = self._nodes.get(node.key)
        if stored is None:
            return self

        nodes = dict(self._nodes)
        edges = dict(self._edges)
        key = stored.key

        for other in stored.outgoing:
            _drop_edge(nodes, edges, key, other)
        for other in stored.incoming:
            _drop_edge(nodes, edges, other, key)
        del nodes[key]

        logger.debug(
            "Removed node %r with %d edge(s)",
            key, len(stored.outgoing | stored.incoming)
        )
        return type(self)._from_parts(nodes, edges)

    def insert_edge(self, edge: Edge[K, L]) -> "Graph[K, V, L]":
        """
        Adds an edge, or replaces the edge with the same (from, to) pair.

        Label and weight are replaced, not merged. Missing endpoint nodes
        are created with no value.

        Args:
            edge: The edge to store.

        Returns:
            A new Graph containing the edge.
        """
        nodes = dict(self._nodes)
        edges = dict(self._edges)

        _link(nodes, edge.from_key, edge.to_key)
        edges[edge.key] = edge
        return type(self)._from_parts(nodes, edges)

    def remove_edge(self, edge: Edge[K, L]) -> "Graph[K, V, L]":
        """
        Removes the edge with the same (from, to) pair as ``edge``.

        Endpoint nodes are kept even if they become isolated. Removing an
        absent edge returns an equal graph.

        Args:
            edge: The edge to remove. Only its key is used.

        Returns:
            A new Graph without the edge.
        """
        if edge.key not in self._edges:
            return self

        nodes = dict(self._nodes)
        edges = dict(self._edges)
        _drop_edge(nodes, edges, edge.from_key, edge.to_key)
        return type(self)._from_parts(nodes, edges)


def _ordered(keys: Iterable[Hashable]) -> Tuple:
    try:
        return tuple(sorted(keys))
    except TypeError:
        return tuple(sorted(keys, key=repr))


def _node_or_new(nodes: Dict, key: Hashable) -> Node:
    node = nodes.get(key)
    return Node(key) if node is None else node


def _normalize_self_loop(node: Node, had_loop: bool) -> Node:
    key = node.key
    if had_loop:
        loop = key in node.incoming and key in node.outgoing
    else:
        loop = key in node.incoming or key in node.outgoing
    if loop:
        return node.with_incoming(node.incoming | {key}).with_outgoing(node.outgoing | {key})
    return node.with_incoming(node.incoming - {key}).with_outgoing(node.outgoing - {key})


def _link(nodes: Dict, from_key: Hashable, to_key: Hashable) -> None:
    source = _node_or_new(nodes, from_key)
    nodes[from_key] = source.with_outgoing(source.outgoing | {to_key})
    # Re-read: for a self-loop the source record was just replaced
    target = _node_or_new(nodes, to_key)
    nodes[to_key] = target.with_incoming(target.incoming | {from_key})


def _unlink(nodes: Dict, from_key: Hashable, to_key: Hashable) -> None:
    source: Optional[Node] = nodes.get(from_key)
    if source is not None:
        nodes[from_key] = source.with_outgoing(source.outgoing - {to_key})
    target: Optional[Node] = nodes.get(to_key)
    if target is not None:
        nodes[to_key] = target.with_incoming(target.incoming - {from_key})


def _drop_edge(nodes: Dict, edges: Dict, from_key: Hashable, to_key: Hashable) -> None:
    edges.pop((from_key, to_key), None)
    _unlink(nodes, from_key, to_key)


def _add_unit_edge(nodes: Dict, edges: Dict, from_key: Hashable, to_key: Hashable) -> None:
    _link(nodes, from_key, to_key)
    if (from_key, to_key) not in edges:
        edges[(from_key, to_key)] = Edge(from_key, to_key)
