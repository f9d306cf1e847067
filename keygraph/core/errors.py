class GraphError(Exception):
    """Base class for errors raised by keygraph."""


class InvalidComparison(GraphError, TypeError):
    """A node or edge was compared against something that is not the same kind."""


class CapacityExceeded(GraphError, OverflowError):
    """The graph has already issued every node id in the 16-bit id space."""
