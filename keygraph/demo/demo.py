import keygraph as kg


def build_graph():
    """Australian states and territories joined by weighted borders."""
    G = kg.Graph(directed=False, title="Australia")

    nsw = G.create_node("NSW")
    vic = G.create_node("VIC")
    qld = G.create_node("QLD")
    wa = G.create_node("WA")
    sa = G.create_node("SA")
    tas = G.create_node("TAS")
    nt = G.create_node("NT")
    act = G.create_node("ACT")

    borders = [
        (nsw, tas, 2),
        (nsw, act, 8),
        (vic, tas, 0),
        (vic, sa, 8),
        (wa, vic, 6),
        (nt, qld, 2),
        (qld, nsw, 4),
        (nsw, vic, 6),
    ]
    for a, b, weight in borders:
        edge = G.add_edge(a, b)
        G.set_edge_weight(edge, weight=weight)

    return G


def main():
    G = build_graph()

    print(f"Graph: {G.get_graph_attribute('title')} {G!r}")

    print("\nNodes:")
    for node in G.nodes():
        print(f"  {node.name}")

    print("\nEdges:")
    for edge in G.edges():
        print(f"  {edge.source.name} --- {G.get_edge_weight(edge)} --- {edge.target.name}")

    print("\nEdge table:")
    print(G.edges_view())


if __name__ == "__main__":
    main()
