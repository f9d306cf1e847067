# keygraph/__init__.py
"""keygraph: nodes, edges and weights keyed by compact integer ids."""
from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

from .core import (
    DEFAULT_WEIGHT,
    MAX_NODES,
    NODE_ID_MAX,
    NODE_ID_MIN,
    CapacityExceeded,
    Edge,
    EdgeKey,
    EdgeType,
    Graph,
    GraphError,
    InvalidComparison,
    Node,
)

from . import adapters as _adapters

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "demo": "keygraph.demo",
}

# Adapter functions (optional dependencies), loaded through the backend registry
_adapter_symbols = _adapters.exported_symbols()

__all__ = sorted(
    set(list(_lazy_submodules) + list(_adapter_symbols))
    | {
        "adapters",
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
    }
)


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _adapter_symbols:
        return _adapters.resolve(name)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("keygraph")
except PackageNotFoundError:
    __version__ = "0.0.0"
