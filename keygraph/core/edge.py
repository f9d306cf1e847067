from typing import NamedTuple

from .errors import InvalidComparison
from .node import Node, check_node_id

_LOW16 = 0xFFFF
_UINT32 = 1 << 32
_INT32_MAX = (1 << 31) - 1


class EdgeKey(NamedTuple):
    """Composite identifier of an edge: the ordered ``(source_id, target_id)`` pair.

    Two edges share a key iff they connect the same ordered pair of node ids.
    The key is what the graph deduplicates edges on and what edge weights are
    stored under.

    The historical 32-bit form (source id in the high half, target id in the
    low half) is available through :attr:`packed` and reversible with
    :meth:`from_packed`.
    """

    source_id: int
    target_id: int

    @classmethod
    def of(cls, source_id, target_id) -> "EdgeKey":
        """Build a key after checking both ids fit a signed 16-bit integer."""
        return cls(check_node_id(source_id), check_node_id(target_id))

    @property
    def packed(self) -> int:
        """Signed 32-bit packing ``(source_id << 16) | (target_id & 0xFFFF)``.

        The target is masked so a negative id does not spill its sign bits into
        the high half.
        """
        value = ((self.source_id & _LOW16) << 16) | (self.target_id & _LOW16)
        if value > _INT32_MAX:
            value -= _UINT32
        return value

    @classmethod
    def from_packed(cls, value: int) -> "EdgeKey":
        """Inverse of :attr:`packed`; accepts the signed or unsigned 32-bit form."""
        if not -(1 << 31) <= value < _UINT32:
            raise ValueError(f"Packed edge id {value} does not fit in 32 bits")
        value &= _UINT32 - 1
        return cls(_to_int16(value >> 16), _to_int16(value & _LOW16))

    def reversed(self) -> "EdgeKey":
        return EdgeKey(self.target_id, self.source_id)


def _to_int16(half: int) -> int:
    return half - 0x10000 if half & 0x8000 else half


class Edge:
    """Connection from ``source`` to ``target``.

    The endpoints are plain references to nodes of the graph that built the
    edge; nothing checks that they still belong to it. Identity is carried
    entirely by :attr:`key`, so two separately built edges over the same
    ordered id pair are interchangeable, whatever node objects they hold.

    Edges are normally obtained from :meth:`Graph.add_edge` or
    :meth:`Graph.make_edge`, which apply the graph's orientation rule.
    """

    __slots__ = ("source", "target", "_key")

    def __init__(self, source: Node, target: Node):
        if not isinstance(source, Node) or not isinstance(target, Node):
            raise TypeError(
                f"Edge endpoints must be Node objects, got "
                f"{type(source).__name__} and {type(target).__name__}"
            )
        self.source = source
        self.target = target
        self._key = EdgeKey(source.id, target.id)

    @classmethod
    def connect(cls, source: Node, target: Node) -> "Edge":
        return cls(source, target)

    @property
    def key(self) -> EdgeKey:
        return self._key

    @property
    def composite_id(self) -> EdgeKey:
        """Same as :attr:`key`."""
        return self._key

    @property
    def packed_id(self) -> int:
        return self._key.packed

    def identity(self) -> EdgeKey:
        return self._key

    def endpoints(self) -> tuple:
        return self.source, self.target

    def __eq__(self, other):
        if not isinstance(other, Edge):
            raise InvalidComparison(
                f"Cannot compare Edge with {type(other).__name__}"
            )
        return self._key == other._key

    def __hash__(self):
        return hash(self._key)

    def __repr__(self):
        return (
            f"Edge({self.source.name!r} -> {self.target.name!r}, "
            f"key=({self._key.source_id}, {self._key.target_id}))"
        )
