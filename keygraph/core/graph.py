import logging
from types import MappingProxyType

import numpy as np
import polars as pl
import scipy.sparse as sp

from .edge import Edge, EdgeKey
from .errors import CapacityExceeded, InvalidComparison
from .node import _FACTORY_TOKEN, MAX_NODES, NODE_ID_MAX, NODE_ID_MIN, Node
from .structure import EdgeType

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT = 1.0


class Graph:
    """In-memory graph of uniquely identified nodes and weighted edges.

    The graph owns three independent stores:

    - the node set, keyed by node id;
    - the edge set, keyed by :class:`~keygraph.core.edge.EdgeKey`;
    - the weight mapping, also keyed by ``EdgeKey``.

    Parameters
    ----------
    directed : bool, optional
        If False (default), every edge is stored with the lower node id as its
        source, so ``(a, b)`` and ``(b, a)`` name the same edge. Fixed for the
        lifetime of the graph.
    default_weight : float, optional
        Weight stored by :meth:`add_edge` when an edge is first inserted.
    **attributes
        Free-form graph-level attributes.

    Notes
    -----
    - Node ids come from a per-instance counter starting at ``-32768``. After
      65,536 nodes, :meth:`create_node` raises
      :class:`~keygraph.core.errors.CapacityExceeded`.
    - Removals never cascade: removing a node keeps its edges and weights,
      removing an edge keeps its weight.
    - Weights may exist for edges that are not in the edge set.

    See Also
    --------
    create_node, add_edge, set_edge_weight, edges_view, adjacency_matrix

    """

    # Construction

    def __init__(self, directed=False, *, default_weight=DEFAULT_WEIGHT, **attributes):
        self._directed = bool(directed)
        self.default_weight = float(default_weight)

        self._nodes = {}  # node_id -> Node
        self._edges = {}  # EdgeKey -> Edge
        self._edge_weights = {}  # EdgeKey -> float
        self.graph_attributes = dict(attributes)

        self._next_node_id = NODE_ID_MIN

        # bumped on every mutation; guards the adjacency cache
        self._version = 0
        self._adjacency = None
        self._adjacency_version = None

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def edge_weights(self):
        """Read-only view of the weight mapping (``EdgeKey -> float``).

        Use :meth:`set_edge_weight` / :meth:`remove_edge_weight` to change it.
        """
        return MappingProxyType(self._edge_weights)

    @property
    def edge_type(self) -> EdgeType:
        return EdgeType.from_flag(self._directed)

    def _touch(self):
        self._version += 1

    # Graph attributes

    def set_graph_attribute(self, key, value):
        """Set a graph-level attribute.

        Parameters
        ----------
        key : str
        value : Any

        """
        self.graph_attributes[key] = value

    def get_graph_attribute(self, key, default=None):
        """Get a graph-level attribute.

        Parameters
        ----------
        key : str
        default : Any, optional

        Returns
        -------
        Any

        """
        return self.graph_attributes.get(key, default)

    # Nodes

    def create_node(self, name="") -> Node:
        """Create a node with the next free id and add it to the graph.

        Parameters
        ----------
        name : Any, optional
            Display label stored verbatim. Not used for identity.

        Returns
        -------
        Node

        Raises
        ------
        CapacityExceeded
            If all 65,536 node ids of this graph have been issued.

        """
        if self._next_node_id > NODE_ID_MAX:
            logger.debug("Node id space exhausted after %d nodes", MAX_NODES)
            raise CapacityExceeded(
                f"Graph already created {MAX_NODES} nodes; node ids are 16-bit"
            )
        node = Node(name, self._next_node_id, _token=_FACTORY_TOKEN)
        self._next_node_id += 1
        self.add_node(node)
        logger.debug("Created node %r with id %d", name, node.id)
        return node

    @property
    def nodes_created(self) -> int:
        """Number of ids this graph has issued so far (removed nodes included)."""
        return self._next_node_id - NODE_ID_MIN

    def add_node(self, node: Node):
        """Add ``node`` to the node set. A node with the same id is left in place."""
        self._require_node(node)
        if node.id not in self._nodes:
            self._nodes[node.id] = node
            self._touch()

    def has_node(self, node: Node) -> bool:
        self._require_node(node)
        return node.id in self._nodes

    def remove_node(self, node: Node):
        """Remove ``node`` from the node set.

        Edges and weights referencing the node are kept. Removing a node that
        is not present does nothing.
        """
        self._require_node(node)
        if self._nodes.pop(node.id, None) is not None:
            self._touch()

    def get_node(self, node_id):
        """Look up a node of the node set by id; ``None`` if absent."""
        return self._nodes.get(node_id)

    def nodes(self):
        """Iterate over the node set. Each call starts a fresh iteration."""
        return iter(self._nodes.values())

    def number_of_nodes(self) -> int:
        return len(self._nodes)

    @staticmethod
    def _require_node(node):
        if not isinstance(node, Node):
            raise InvalidComparison(f"Expected a Node, got {type(node).__name__}")

    # Edges

    def make_edge(self, a: Node, b: Node) -> Edge:
        """Build the edge connecting ``a`` and ``b`` under this graph's orientation rule.

        Directed graphs keep ``a -> b``. Undirected graphs put the node with the
        smaller (signed) id first, so both call orders yield the same key.
        Nothing is added to the graph.
        """
        self._require_node(a)
        self._require_node(b)
        if not self._directed and a.id > b.id:
            return Edge(b, a)
        return Edge(a, b)

    def add_edge(self, a: Node, b: Node) -> Edge:
        """Insert the edge between ``a`` and ``b`` and give it the default weight.

        If the edge is already present nothing changes, including its weight,
        and the stored edge is returned.

        Returns
        -------
        Edge
            The canonical edge; for undirected graphs its source may be ``b``.

        """
        edge = self.make_edge(a, b)
        existing = self._edges.get(edge.key)
        if existing is not None:
            return existing
        self._edges[edge.key] = edge
        self._edge_weights[edge.key] = self.default_weight
        self._touch()
        logger.debug("Added edge %s", edge.key)
        return edge

    def has_edge(self, *endpoints) -> bool:
        """Test for an edge, given as ``(edge)``, ``(edge_key)`` or ``(node_a, node_b)``."""
        return self.edge_key(*endpoints) in self._edges

    def get_edge(self, *endpoints):
        """Return the stored edge for the given endpoints, or ``None``."""
        return self._edges.get(self.edge_key(*endpoints))

    def remove_edge(self, *endpoints):
        """Remove an edge from the edge set; its weight is kept. Absent edges are ignored."""
        if self._edges.pop(self.edge_key(*endpoints), None) is not None:
            self._touch()

    def edges(self):
        """Iterate over the edge set. Each call starts a fresh iteration."""
        return iter(self._edges.values())

    def edge_list(self):
        """Materialize ``(source, target, weight)`` for every edge in the edge set.

        Returns
        -------
        list[tuple[Node, Node, float | None]]

        """
        return [
            (edge.source, edge.target, self._edge_weights.get(key))
            for key, edge in self._edges.items()
        ]

    def number_of_edges(self) -> int:
        return len(self._edges)

    def edge_key(self, *endpoints) -> EdgeKey:
        """Resolve endpoints to the key used by the edge set and the weight mapping.

        Parameters
        ----------
        *endpoints
            One :class:`Edge` (its stored key), one :class:`EdgeKey` (ids checked,
            not canonicalized) or two :class:`Node` objects (canonicalized through
            :meth:`make_edge`).

        Returns
        -------
        EdgeKey

        Raises
        ------
        TypeError
            For any other combination of arguments, or a non-integer id.
        ValueError
            If an ``EdgeKey`` id falls outside the 16-bit range.

        """
        if len(endpoints) == 1:
            (item,) = endpoints
            if isinstance(item, Edge):
                return item.key
            if isinstance(item, EdgeKey):
                return EdgeKey.of(*item)
        elif len(endpoints) == 2 and all(isinstance(n, Node) for n in endpoints):
            return self.make_edge(*endpoints).key
        kinds = ", ".join(type(e).__name__ for e in endpoints)
        raise TypeError(f"Expected an Edge, an EdgeKey or two Nodes, got ({kinds})")

    # Weights

    def set_edge_weight(self, *endpoints, weight):
        """Store ``weight`` for the given edge.

        The edge does not have to be in the graph and is not added to it.

        Examples
        --------
        >>> g.set_edge_weight(a, b, weight=4.5)
        >>> g.set_edge_weight(edge, weight=0.0)

        """
        self._edge_weights[self.edge_key(*endpoints)] = float(weight)
        self._touch()

    def get_edge_weight(self, *endpoints):
        """Stored weight for the given edge, or ``None`` if no weight is set.

        ``None`` means no weight; a stored ``0.0`` is returned as ``0.0``.
        """
        return self._edge_weights.get(self.edge_key(*endpoints))

    def remove_edge_weight(self, *endpoints):
        """Drop the stored weight; the edge set is left alone."""
        if self._edge_weights.pop(self.edge_key(*endpoints), None) is not None:
            self._touch()

    # Views

    def nodes_view(self) -> pl.DataFrame:
        """Polars DF [DataFrame] of the node set.

        Returns
        -------
        polars.DataFrame
            Columns ``node_id`` (Int16) and ``name`` (Utf8), ordered by ``node_id``.

        """
        ordered = sorted(self._nodes.values(), key=lambda n: n.id)
        return pl.DataFrame(
            {
                "node_id": pl.Series([n.id for n in ordered], dtype=pl.Int16),
                "name": pl.Series([_label(n.name) for n in ordered], dtype=pl.Utf8),
            }
        )

    def edges_view(self, include_weight=True) -> pl.DataFrame:
        """Polars DF [DataFrame] of the edge set, one row per edge.

        Parameters
        ----------
        include_weight : bool, optional
            Add a ``weight`` column (null where no weight is stored).

        Returns
        -------
        polars.DataFrame
            Columns ``source_id``, ``target_id`` (Int16), ``packed_id`` (Int32),
            ``source``, ``target``, ``edge_type`` (Utf8) and optionally
            ``weight`` (Float64), ordered by ``(source_id, target_id)``.

        """
        keys = sorted(self._edges)
        edges = [self._edges[k] for k in keys]
        cols = {
            "source_id": pl.Series([k.source_id for k in keys], dtype=pl.Int16),
            "target_id": pl.Series([k.target_id for k in keys], dtype=pl.Int16),
            "packed_id": pl.Series([k.packed for k in keys], dtype=pl.Int32),
            "source": pl.Series([_label(e.source.name) for e in edges], dtype=pl.Utf8),
            "target": pl.Series([_label(e.target.name) for e in edges], dtype=pl.Utf8),
            "edge_type": pl.Series([self.edge_type.value] * len(keys), dtype=pl.Utf8),
        }
        if include_weight:
            cols["weight"] = pl.Series(
                [self._edge_weights.get(k) for k in keys], dtype=pl.Float64
            )
        return pl.DataFrame(cols)

    def weights_view(self) -> pl.DataFrame:
        """Every stored weight, including weights of edges no longer in the graph.

        Returns
        -------
        polars.DataFrame
            Columns ``source_id``, ``target_id``, ``packed_id``, ``weight`` and
            ``in_graph`` (Boolean).

        """
        keys = sorted(self._edge_weights)
        return pl.DataFrame(
            {
                "source_id": pl.Series([k.source_id for k in keys], dtype=pl.Int16),
                "target_id": pl.Series([k.target_id for k in keys], dtype=pl.Int16),
                "packed_id": pl.Series([k.packed for k in keys], dtype=pl.Int32),
                "weight": pl.Series([self._edge_weights[k] for k in keys], dtype=pl.Float64),
                "in_graph": pl.Series([k in self._edges for k in keys], dtype=pl.Boolean),
            }
        )

    def adjacency_matrix(self):
        """Weighted adjacency matrix over the current node set.

        Rows and columns follow ascending node id. Edges with an endpoint that
        is no longer in the node set are skipped; an edge without a stored
        weight counts as ``default_weight``. Undirected graphs give a symmetric
        matrix. Built on first access and cached until the next mutation.

        Returns
        -------
        tuple[scipy.sparse.csr_matrix, list[Node]]
            The matrix and the nodes labelling its rows/columns.

        """
        if self._adjacency is None or self._adjacency_version != self._version:
            self._adjacency = self._build_adjacency()
            self._adjacency_version = self._version
        matrix, order = self._adjacency
        return matrix, list(order)

    def _build_adjacency(self):
        order = sorted(self._nodes.values(), key=lambda n: n.id)
        index = {n.id: i for i, n in enumerate(order)}
        rows, cols, data = [], [], []
        for key in self._edges:
            i = index.get(key.source_id)
            j = index.get(key.target_id)
            if i is None or j is None:
                continue
            w = self._edge_weights.get(key, self.default_weight)
            rows.append(i)
            cols.append(j)
            data.append(w)
            if not self._directed and i != j:
                rows.append(j)
                cols.append(i)
                data.append(w)
        n = len(order)
        matrix = sp.csr_matrix(
            (
                np.asarray(data, dtype=np.float64),
                (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64)),
            ),
            shape=(n, n),
        )
        return matrix, order

    # Sizes and dunders

    @property
    def shape(self):
        return (self.number_of_nodes(), self.number_of_edges())

    def __len__(self):
        return len(self._nodes)

    def __iter__(self):
        return self.nodes()

    def __contains__(self, node):
        return self.has_node(node)

    def __repr__(self):
        return (
            f"Graph(directed={self._directed}, nodes={len(self._nodes)}, "
            f"edges={len(self._edges)})"
        )


def _label(name):
    return None if name is None else str(name)
