from .node import Node
from .edge import Edge, EdgeKey
from .graph import Graph
from .errors import GraphError, NodeNotFoundError, EdgeNotFoundError
from .algorithms import (
    SearchResult, best_first_search,
    dijkstra_search, dijkstra_find_path,
    astar_search, astar_find_path, path_cost
)
from .networkx_export import to_networkx

__all__ = [
    "Node", "Edge", "EdgeKey", "Graph",
    "GraphError", "NodeNotFoundError", "EdgeNotFoundError",
    "SearchResult", "best_first_search",
    "dijkstra_search", "dijkstra_find_path",
    "astar_search", "astar_find_path", "path_cost",
    "to_networkx"
]
