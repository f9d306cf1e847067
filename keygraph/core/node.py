import numpy as np

from .errors import InvalidComparison

_INT16 = np.iinfo(np.int16)

NODE_ID_MIN = int(_INT16.min)  # -32768
NODE_ID_MAX = int(_INT16.max)  # 32767
MAX_NODES = NODE_ID_MAX - NODE_ID_MIN + 1

# Handed out by Graph.create_node only.
_FACTORY_TOKEN = object()


def check_node_id(node_id) -> int:
    """Validate that ``node_id`` fits a signed 16-bit integer and return it as ``int``.

    Parameters
    ----------
    node_id : int
        Candidate identifier. NumPy integer scalars are accepted.

    Returns
    -------
    int

    Raises
    ------
    TypeError
        If ``node_id`` is not an integer (``bool`` is rejected too).
    ValueError
        If ``node_id`` falls outside ``[NODE_ID_MIN, NODE_ID_MAX]``.

    """
    if isinstance(node_id, (bool, np.bool_)) or not isinstance(node_id, (int, np.integer)):
        raise TypeError(f"Node id must be an integer, got {type(node_id).__name__}")
    node_id = int(node_id)
    if not NODE_ID_MIN <= node_id <= NODE_ID_MAX:
        raise ValueError(f"Node id {node_id} outside 16-bit range [{NODE_ID_MIN}, {NODE_ID_MAX}]")
    return node_id


class Node:
    """A single vertex of a :class:`~keygraph.core.graph.Graph`.

    Nodes are only built by :meth:`Graph.create_node`, which hands out the next
    id from the graph's counter. The ``name`` is a free display label and takes
    no part in identity: two nodes are equal iff their ids are equal.

    Comparing a node with anything that is not a node raises
    :class:`~keygraph.core.errors.InvalidComparison`.
    """

    __slots__ = ("name", "_id")

    def __init__(self, name, node_id, *, _token=None):
        if _token is not _FACTORY_TOKEN:
            raise TypeError("Nodes are created through Graph.create_node()")
        self.name = name
        self._id = check_node_id(node_id)

    @property
    def id(self) -> int:
        return self._id

    def identity(self) -> int:
        return self._id

    def __eq__(self, other):
        if not isinstance(other, Node):
            raise InvalidComparison(
                f"Cannot compare Node with {type(other).__name__}"
            )
        return self._id == other._id

    def __hash__(self):
        return hash(self._id)

    def __repr__(self):
        return f"Node(name={self.name!r}, id={self._id})"
