import pytest

from keygraph import Graph


@pytest.fixture
def undirected():
    return Graph(directed=False)


@pytest.fixture
def directed():
    return Graph(directed=True)


@pytest.fixture
def abc(undirected):
    """Undirected graph with nodes A, B, C and no edges."""
    G = undirected
    a = G.create_node("A")
    b = G.create_node("B")
    c = G.create_node("C")
    return G, a, b, c
