import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import (
    Any, Callable, Dict, Generic, Hashable, Iterable, List, Optional, Set, Tuple, TypeVar
)

from .config import MIN_EDGE_WEIGHT, ZERO_HEURISTIC
from .graph import Graph

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)

NeighborsFunc = Callable[[Any], Iterable[Any]]
WeightFunc = Callable[[Any, Any], float]
HeuristicFunc = Callable[[Any], float]
ValueHeuristicFunc = Callable[[Any, Any], float]


@dataclass
class SearchResult(Generic[K]):
    """
    Outcome of a best-first search.

    Attributes:
        path: Keys from start to goal, or None if the goal was not reached.
        cost: Total clamped weight of ``path``, or None without a path.
        expanded: Number of keys taken from the open set.
    """

    path: Optional[List[K]]
    cost: Optional[float]
    expanded: int


@dataclass
class _KeyState:
    distance: float
    previous: Optional[Hashable]
    heuristic: float
    entry: int = 0  # Sequence number of the newest open-set entry


def best_first_search(
    start: K,
    goal: K,
    neighbors_out: NeighborsFunc,
    edge_weight: WeightFunc,
    heuristic: HeuristicFunc
) -> SearchResult[K]:
    """
    Finds the cheapest path from ``start`` to ``goal`` using A*.

    The key with the lowest ``distance + heuristic`` is expanded first. When
    several keys share that priority, the one that entered the open set
    first wins. Weights returned by ``edge_weight`` are raised to 0.0 if
    negative, so the search always terminates, even around negative cycles.

    Args:
        start: The key to start from.
        goal: The key to reach.
        neighbors_out: Returns the keys reachable over one edge from a key.
        edge_weight: Returns the weight of the edge between two keys.
        heuristic: Returns an estimate of the remaining cost from a key to
                   ``goal``. It must never overestimate for the returned path
                   to be the cheapest one. A constant 0.0 gives Dijkstra.

    Returns:
        A SearchResult. Its ``path`` is None if ``goal`` is unreachable.
    """
    counter = itertools.count(1)
    states: Dict[Hashable, _KeyState] = {
        start: _KeyState(distance=0.0, previous=None, heuristic=heuristic(start))
    }
    open_set: Set[Hashable] = {start}
    # Priority queue stores (distance + heuristic, entry, key)
    queue: List[Tuple[float, int, Hashable]] = [
        (states[start].distance + states[start].heuristic, states[start].entry, start)
    ]
    expanded = 0

    while queue:
        _, entry, current = heapq.heappop(queue)

        # Stale entry: the key was expanded already or re-queued with a better distance
        if current not in open_set or entry != states[current].entry:
            continue

        expanded += 1
        if current == goal:
            path = _reconstruct_path(states, start, goal)
            logger.debug(
                "Found path %r -> %r with cost %s after expanding %d key(s)",
                start, goal, states[goal].distance, expanded
            )
            return SearchResult(path=path, cost=states[goal].distance, expanded=expanded)

        current_state = states[current]
        for neighbor in neighbors_out(current):
            weight = max(float(edge_weight(current, neighbor)), MIN_EDGE_WEIGHT)
            tentative = current_state.distance + weight

            state = states.get(neighbor)
            if state is None:
                state = _KeyState(distance=tentative, previous=current, heuristic=heuristic(neighbor))
                states[neighbor] = state
            elif tentative < state.distance:
                state.distance = tentative
                state.previous = current
            else:
                continue

            state.entry = next(counter)
            open_set.add(neighbor)
            heapq.heappush(queue, (state.distance + state.heuristic, state.entry, neighbor))

        open_set.discard(current)

    logger.debug("No path %r -> %r after expanding %d key(s)", start, goal, expanded)
    return SearchResult(path=None, cost=None, expanded=expanded)


def _reconstruct_path(states: Dict[Hashable, _KeyState], start: K, goal: K) -> List[K]:
    path: List[K] = [goal]
    current: Hashable = goal
    while current != start:
        state = states.get(current)
        assert state is not None, f"No search state recorded for {current!r}"
        assert state.previous is not None, f"Path to {current!r} does not lead back to start"
        current = state.previous
        path.append(current)
    path.reverse()
    return path


def dijkstra_search(graph: Graph, start: K, goal: K) -> SearchResult[K]:
    """
    Runs Dijkstra's algorithm: A* with a heuristic of 0.0 for every key.

    Returns:
        A SearchResult with no path if ``goal`` is not in the graph or is
        unreachable from ``start``.
    """
    if goal not in graph:
        return SearchResult(path=None, cost=None, expanded=0)
    return best_first_search(
        start, goal, graph.neighbors, graph.edge_weight, lambda key: ZERO_HEURISTIC
    )


def dijkstra_find_path(graph: Graph, start: K, goal: K) -> Optional[List[K]]:
    """
    Finds the cheapest path between two nodes using Dijkstra's algorithm.

    Args:
        graph: The graph to search.
        start: The key of the starting node.
        goal: The key of the node to reach.

    Returns:
        The keys along the path, start and goal included, or None if no
        path exists. Missing weights count as 1.0, negative weights as 0.0.
    """
    return dijkstra_search(graph, start, goal).path


def astar_search(
    graph: Graph,
    start: K,
    goal: K,
    heuristic_fn: ValueHeuristicFunc
) -> SearchResult[K]:
    """
    Runs A* guided by a heuristic over node values.

    ``heuristic_fn(value, goal_value)`` is called once per discovered node.
    A node without a value (or a goal without one) gets a heuristic of 0.0.

    Returns:
        A SearchResult with no path if ``goal`` is not in the graph or is
        unreachable from ``start``.
    """
    if goal not in graph:
        return SearchResult(path=None, cost=None, expanded=0)
    goal_value = graph.get_node(goal).value

    def heuristic(key: Hashable) -> float:
        if goal_value is None or key not in graph:
            return ZERO_HEURISTIC
        value = graph.get_node(key).value
        if value is None:
            return ZERO_HEURISTIC
        return float(heuristic_fn(value, goal_value))

    return best_first_search(start, goal, graph.neighbors, graph.edge_weight, heuristic)


def astar_find_path(
    graph: Graph,
    start: K,
    goal: K,
    heuristic_fn: ValueHeuristicFunc
) -> Optional[List[K]]:
    """
    Finds the cheapest path between two nodes using A*.

    Args:
        graph: The graph to search.
        start: The key of the starting node.
        goal: The key of the node to reach.
        heuristic_fn: Estimates the remaining cost from a node's value to the
                      goal node's value. It must never overestimate the true
                      cost for the result to be a cheapest path.

    Returns:
        The keys along the path, start and goal included, or None if no
        path exists.
    """
    return astar_search(graph, start, goal, heuristic_fn).path


def path_cost(graph: Graph, path: List[K]) -> float:
    """
    Sums the clamped weights of the edges along a path.

    Raises:
        EdgeNotFoundError: If two consecutive keys are not joined by an edge.
    """
    return sum(
        (graph.edge_weight(from_key, to_key) for from_key, to_key in zip(path, path[1:])),
        0.0
    )
