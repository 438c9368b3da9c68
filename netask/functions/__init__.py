"""
Built-in functions available to task scripts.
Each module exposes NODE_FUNCTIONS and/or NETWORK_FUNCTIONS; the default
registry is assembled from all of them the first time it is requested.
"""

from typing import Optional

from . import attrs, connections, network
from .registry import FunctionEntry, FunctionRegistry

BUILTIN_MODULES = (attrs, connections, network)

_DEFAULT_REGISTRY: Optional[FunctionRegistry] = None


def default_registry() -> FunctionRegistry:
    """The process-wide registry of built-in functions (built once, then shared read-only)."""
    global _DEFAULT_REGISTRY
    if _DEFAULT_REGISTRY is None:
        _DEFAULT_REGISTRY = FunctionRegistry.from_modules(*BUILTIN_MODULES)
    return _DEFAULT_REGISTRY
