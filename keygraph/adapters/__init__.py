"""Conversion backends. Each backend is an optional extra imported on first use."""
from importlib import import_module, util

__all__ = ["available_backends", "load_adapter", "resolve"]

# backend -> (library that must be importable, public functions of the adapter)
_BACKENDS = {
    "networkx": ("networkx", ("to_nx", "from_nx")),
}


def available_backends() -> dict:
    """Map every known backend to whether its library can be imported."""
    return {name: util.find_spec(lib) is not None for name, (lib, _) in _BACKENDS.items()}


def exported_symbols() -> dict:
    """Map each adapter function name to the backend that provides it."""
    return {fn: name for name, (_, fns) in _BACKENDS.items() for fn in fns}


def load_adapter(name: str):
    """Import the adapter module for backend ``name``.

    Raises
    ------
    ValueError
        If ``name`` is not a known backend.
    ModuleNotFoundError
        If the backend's library is missing; the message names the extra to install.

    """
    try:
        lib, _ = _BACKENDS[name]
    except KeyError:
        known = ", ".join(sorted(_BACKENDS))
        raise ValueError(f"Unknown adapter '{name}' (known: {known})") from None
    if util.find_spec(lib) is None:
        raise ModuleNotFoundError(
            f"Optional backend '{name}' is not installed. "
            f"Install with `pip install keygraph[{name}]`."
        )
    return import_module(f"{__name__}.{name}")


def resolve(symbol: str):
    """Return adapter function ``symbol`` (e.g. ``"to_nx"``), loading its backend."""
    backend = exported_symbols()[symbol]
    return getattr(load_adapter(backend), symbol)
