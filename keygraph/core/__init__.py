from .edge import Edge, EdgeKey
from .errors import CapacityExceeded, GraphError, InvalidComparison
from .graph import DEFAULT_WEIGHT, Graph
from .node import MAX_NODES, NODE_ID_MAX, NODE_ID_MIN, Node
from .structure import EdgeType

__all__ = [
    "CapacityExceeded",
    "DEFAULT_WEIGHT",
    "Edge",
    "EdgeKey",
    "EdgeType",
    "Graph",
    "GraphError",
    "InvalidComparison",
    "MAX_NODES",
    "Node",
    "NODE_ID_MAX",
    "NODE_ID_MIN",
]
