"""
Conversion of a digraph_lib Graph into a networkx DiGraph.

Lets callers hand a graph to networkx's algorithms or drawing helpers,
e.g. ``nx.draw_circular(to_networkx(g), with_labels=True)``.
"""

import networkx as nx

from .graph import Graph


def to_networkx(graph: Graph) -> nx.DiGraph:
    """
    Builds a networkx DiGraph with the same nodes and edges.

    Each networkx node carries a ``value`` attribute. Each networkx edge
    carries ``label`` and ``weight``; ``weight`` is the clamped weight the
    path search uses (1.0 when unset, 0.0 when negative).

    Args:
        graph: The graph to convert.

    Returns:
        A new networkx DiGraph.
    """
    G = nx.DiGraph()
    for node in graph.get_nodes():
        G.add_node(node.key, value=node.value)
    for edge in graph.get_edges():
        G.add_edge(edge.from_key, edge.to_key, label=edge.label, weight=edge.effective_weight)
    return G
