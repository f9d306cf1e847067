from enum import Enum


class EdgeType(str, Enum):
    """Edge orientation of a graph (DIRECTED, UNDIRECTED).

    Attributes:
        DIRECTED: edges keep the endpoint order they were requested with
        UNDIRECTED: edges are stored lowest node id first
    """

    DIRECTED = "directed"
    UNDIRECTED = "undirected"

    @classmethod
    def from_flag(cls, directed: bool) -> "EdgeType":
        return cls.DIRECTED if directed else cls.UNDIRECTED
