try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install keygraph[networkx]"
    ) from e

import warnings

from ..core.graph import DEFAULT_WEIGHT, Graph


def to_nx(graph: Graph):
    """Export a Graph to a networkx graph keyed by node id.

    Parameters
    ----------
    graph : Graph

    Returns
    -------
    networkx.DiGraph | networkx.Graph
        ``DiGraph`` for directed graphs, ``Graph`` otherwise. Nodes carry a
        ``name`` attribute; edges carry ``weight`` when one is stored.
        Edges whose endpoints were removed from the node set are exported
        with their endpoints re-added.

    """
    G = nx.DiGraph() if graph.directed else nx.Graph()
    G.graph.update(graph.graph_attributes)

    for node in graph.nodes():
        G.add_node(node.id, name=node.name)

    for source, target, weight in graph.edge_list():
        for endpoint in (source, target):
            if endpoint.id not in G:
                G.add_node(endpoint.id, name=endpoint.name)
        if weight is None:
            G.add_edge(source.id, target.id)
        else:
            G.add_edge(source.id, target.id, weight=weight)

    return G


def from_nx(nxG, directed=None, weight="weight"):
    """Import a networkx graph.

    Parameters
    ----------
    nxG : networkx.Graph
        Any networkx graph. Multigraphs are collapsed to one edge per
        endpoint pair (the last parallel edge's weight wins).
    directed : bool, optional
        Override the orientation; defaults to ``nxG.is_directed()``.
    weight : str, optional
        Edge attribute read as the weight. Edges without it get the default
        weight.

    Returns
    -------
    tuple[Graph, dict]
        The new graph and a mapping from networkx node keys to created nodes.

    Raises
    ------
    CapacityExceeded
        If ``nxG`` has more nodes than one graph can hold.

    """
    if directed is None:
        directed = nxG.is_directed()
    if nxG.is_multigraph():
        warnings.warn(
            "Parallel edges of a multigraph are collapsed to a single edge",
            UserWarning,
            stacklevel=2,
        )

    G = Graph(directed=directed)
    G.graph_attributes.update(nxG.graph)
    mapping = {}
    for key, data in nxG.nodes(data=True):
        mapping[key] = G.create_node(data.get("name", str(key)))

    for u, v, data in nxG.edges(data=True):
        a, b = mapping[u], mapping[v]
        G.add_edge(a, b)
        G.set_edge_weight(a, b, weight=data.get(weight, DEFAULT_WEIGHT))

    return G, mapping
