import itertools

import pytest

from keygraph import EdgeKey, EdgeType, Graph, InvalidComparison


class TestGraphConstruction:
    def test_empty_graph(self, undirected):
        assert undirected.shape == (0, 0)
        assert len(undirected) == 0
        assert list(undirected.nodes()) == []
        assert list(undirected.edges()) == []
        assert undirected.edge_weights == {}

    def test_directed_flag(self):
        assert Graph(directed=True).edge_type is EdgeType.DIRECTED
        assert Graph().edge_type is EdgeType.UNDIRECTED
        assert Graph().directed is False

    def test_directed_is_read_only(self, undirected):
        with pytest.raises(AttributeError):
            undirected.directed = True

    def test_graph_attributes(self):
        G = Graph(title="demo")
        assert G.get_graph_attribute("title") == "demo"
        G.set_graph_attribute("owner", "me")
        assert G.graph_attributes == {"title": "demo", "owner": "me"}
        assert G.get_graph_attribute("missing", 3) == 3

    def test_repr(self, abc):
        G, a, b, _ = abc
        G.add_edge(a, b)
        assert repr(G) == "Graph(directed=False, nodes=3, edges=1)"


class TestNodeSet:
    def test_add_node_is_idempotent(self, abc):
        G, a, _, _ = abc
        G.add_node(a)
        assert G.number_of_nodes() == 3

    def test_remove_and_readd(self, abc):
        G, a, _, _ = abc
        G.remove_node(a)
        assert not G.has_node(a)
        assert G.get_node(a.id) is None
        G.add_node(a)
        assert G.get_node(a.id) is a

    def test_remove_missing_node_is_noop(self, abc):
        G, a, _, _ = abc
        G.remove_node(a)
        G.remove_node(a)
        assert G.number_of_nodes() == 2

    def test_remove_node_keeps_edges_and_weights(self, abc):
        G, a, b, _ = abc
        G.add_edge(a, b)
        G.set_edge_weight(a, b, weight=3.0)
        G.remove_node(a)
        assert G.has_edge(a, b)
        assert G.get_edge_weight(a, b) == 3.0

    def test_membership_rejects_other_kinds(self, undirected):
        with pytest.raises(InvalidComparison):
            undirected.has_node("A")
        with pytest.raises(InvalidComparison):
            None in undirected  # noqa: B015
        with pytest.raises(InvalidComparison):
            undirected.add_node(1)

    def test_iteration_is_restartable(self, abc):
        G, a, b, c = abc
        first = {n.id for n in G.nodes()}
        second = {n.id for n in G}
        assert first == second == {a.id, b.id, c.id}


class TestUndirectedEdges:
    def test_both_orders_give_the_same_key(self, abc):
        G, a, b, _ = abc
        assert G.make_edge(a, b).key == G.make_edge(b, a).key

    def test_lower_id_becomes_source(self, abc):
        G, a, b, _ = abc
        e = G.add_edge(b, a)
        assert e.source is a and e.target is b
        assert e.key == EdgeKey(a.id, b.id)

    def test_reverse_add_creates_single_edge(self, abc):
        G, a, b, _ = abc
        G.add_edge(a, b)
        G.add_edge(b, a)
        assert G.number_of_edges() == 1

    def test_has_edge_is_symmetric(self, abc):
        G, a, b, c = abc
        G.add_edge(c, a)
        for x, y in itertools.permutations((a, b, c), 2):
            assert G.has_edge(x, y) == G.has_edge(y, x)
        assert G.has_edge(a, c)
        assert not G.has_edge(a, b)

    def test_canonicalization_with_signed_ids(self):
        G = Graph()
        nodes = [G.create_node(str(i)) for i in range(40000)]
        neg, pos = nodes[0], nodes[-1]
        assert neg.id < 0 < pos.id
        e = G.add_edge(pos, neg)
        assert e.source is neg
        assert G.has_edge(neg, pos)

    def test_self_loop(self, abc):
        G, a, _, _ = abc
        e = G.add_edge(a, a)
        assert e.key == EdgeKey(a.id, a.id)
        assert G.has_edge(e)


class TestDirectedEdges:
    def test_orientation_is_kept(self, directed):
        x = directed.create_node("X")
        y = directed.create_node("Y")
        e = directed.add_edge(y, x)
        assert e.source is y and e.target is x
        assert directed.has_edge(y, x)
        assert not directed.has_edge(x, y)

    def test_reverse_is_a_different_edge(self, directed):
        x = directed.create_node("X")
        y = directed.create_node("Y")
        directed.add_edge(x, y)
        assert not directed.has_edge(y, x)
        directed.add_edge(y, x)
        assert directed.number_of_edges() == 2

    def test_keys_differ_for_distinct_pairs(self, directed):
        nodes = [directed.create_node(str(i)) for i in range(4)]
        for a, b in itertools.combinations(nodes, 2):
            assert directed.make_edge(a, b).key != directed.make_edge(b, a).key
        a = nodes[0]
        assert directed.make_edge(a, a).key == directed.make_edge(a, a).key


class TestEdgeSet:
    def test_add_edge_is_idempotent(self, abc):
        G, a, b, _ = abc
        first = G.add_edge(a, b)
        G.set_edge_weight(first, weight=7.0)
        second = G.add_edge(a, b)
        assert second is first
        assert G.number_of_edges() == 1
        assert G.get_edge_weight(a, b) == 7.0

    def test_new_edge_gets_default_weight(self, abc):
        G, a, b, _ = abc
        G.add_edge(a, b)
        assert G.get_edge_weight(a, b) == 1.0

    def test_configured_default_weight(self):
        G = Graph(default_weight=0.25)
        a, b = G.create_node(), G.create_node()
        G.add_edge(a, b)
        assert G.get_edge_weight(a, b) == 0.25

    def test_lookup_by_edge_key_and_nodes(self, abc):
        G, a, b, _ = abc
        e = G.add_edge(b, a)
        assert G.has_edge(e)
        assert G.has_edge(e.key)
        assert G.get_edge(a, b) is e
        assert G.get_edge(EdgeKey(b.id, a.id)) is None

    def test_remove_edge_by_nodes_and_by_edge(self, abc):
        G, a, b, c = abc
        G.add_edge(a, b)
        e = G.add_edge(b, c)
        G.remove_edge(b, a)
        G.remove_edge(e)
        assert G.number_of_edges() == 0

    def test_remove_missing_edge_is_noop(self, abc):
        G, a, b, _ = abc
        G.remove_edge(a, b)
        assert G.number_of_edges() == 0

    def test_edges_and_edge_list(self, abc):
        G, a, b, c = abc
        G.add_edge(a, b)
        G.add_edge(b, c)
        G.set_edge_weight(b, c, weight=2.5)
        assert {e.key for e in G.edges()} == {EdgeKey(a.id, b.id), EdgeKey(b.id, c.id)}
        assert sorted(w for _, _, w in G.edge_list()) == [1.0, 2.5]

    @pytest.mark.parametrize("args", [(), ("a",), (1, 2), (None, None, None)])
    def test_bad_endpoints(self, abc, args):
        G = abc[0]
        with pytest.raises(TypeError):
            G.has_edge(*args)

    def test_make_edge_rejects_non_nodes(self, abc):
        G, a, _, _ = abc
        with pytest.raises(InvalidComparison):
            G.make_edge(a, "B")
