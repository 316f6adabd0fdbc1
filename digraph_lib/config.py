"""
Tunable constants for digraph_lib.

Edge weights and heuristic defaults used by the graph and the path search
live here so every module reads the same values.
"""

# Weight used for an edge that carries no explicit weight
DEFAULT_EDGE_WEIGHT = 1.0

# Floor applied to every edge weight before it reaches the search
MIN_EDGE_WEIGHT = 0.0

# Heuristic value when no estimate is available (turns A* into Dijkstra)
ZERO_HEURISTIC = 0.0
