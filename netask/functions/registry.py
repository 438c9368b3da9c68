"""
The catalog of functions a task script can call.

Node functions and network functions live in separate namespaces, so the same
name may exist once in each. A registry is built once from its entries and is
read-only afterwards: scripts cannot define, replace or remove functions.
"""

import inspect
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from netask.parser.classes import Scope


@dataclass(frozen=True)
class FunctionEntry:
    """A registered function together with the metadata used for introspection."""

    name: str
    scope: Scope
    func: Callable
    category: str = "builtin"

    @property
    def help(self) -> str:
        return inspect.getdoc(self.func) or ""

    @property
    def code(self) -> str:
        try:
            return inspect.getsource(self.func)
        except (OSError, TypeError):
            # Builtins and dynamically created callables have no retrievable source.
            return ""

    @property
    def signature(self) -> str:
        """The call signature as written in a script, without the node/context parameter."""
        params = list(inspect.signature(self.func).parameters.values())[1:]
        return "(" + ", ".join(str(p) for p in params) + ")"

    def bind(self, target, args, kwargs) -> inspect.BoundArguments:
        """Checks the script arguments against the function; raises TypeError on mismatch."""
        return inspect.signature(self.func).bind(target, *args, **kwargs)

    def __call__(self, target, *args, **kwargs):
        return self.func(target, *args, **kwargs)


class FunctionRegistry:
    def __init__(self, entries: Iterable[FunctionEntry]):
        namespaces: Dict[Scope, Dict[str, FunctionEntry]] = {scope: {} for scope in Scope}
        for entry in entries:
            namespace = namespaces[entry.scope]
            if entry.name in namespace:
                raise ValueError(f"The {entry.scope.value} function '{entry.name}' is registered more than once.")
            namespace[entry.name] = entry

        # Sorted once here so every listing is reproducible.
        self._namespaces: Mapping[Scope, Mapping[str, FunctionEntry]] = MappingProxyType(
            {scope: MappingProxyType(dict(sorted(namespace.items()))) for scope, namespace in namespaces.items()}
        )

    @classmethod
    def from_modules(cls, *modules) -> "FunctionRegistry":
        """
        Builds a registry from modules exposing NODE_FUNCTIONS and NETWORK_FUNCTIONS
        dictionaries; the module's short name becomes the category of its functions.
        """
        entries = []
        for module in modules:
            category = module.__name__.rsplit(".", 1)[-1]
            for name, func in getattr(module, "NODE_FUNCTIONS", {}).items():
                entries.append(FunctionEntry(name=name, scope=Scope.NODE, func=func, category=category))
            for name, func in getattr(module, "NETWORK_FUNCTIONS", {}).items():
                entries.append(FunctionEntry(name=name, scope=Scope.NETWORK, func=func, category=category))
        return cls(entries)

    # --- Lookup ---

    def lookup(self, scope: Scope, name: str) -> Optional[FunctionEntry]:
        return self._namespaces[scope].get(name)

    def _find(self, name: str) -> Optional[FunctionEntry]:
        # Node functions take precedence when a name exists in both namespaces.
        return self.lookup(Scope.NODE, name) or self.lookup(Scope.NETWORK, name)

    def help(self, name: str) -> Optional[str]:
        entry = self._find(name)
        return entry.help if entry else None

    def code(self, name: str) -> Optional[str]:
        entry = self._find(name)
        return entry.code if entry else None

    # --- Listing ---

    def node_functions(self) -> Mapping[str, FunctionEntry]:
        return self._namespaces[Scope.NODE]

    def network_functions(self) -> Mapping[str, FunctionEntry]:
        return self._namespaces[Scope.NETWORK]

    def names(self, scope: Scope) -> List[str]:
        return list(self._namespaces[scope])

    def list(self) -> List[FunctionEntry]:
        """All entries, node functions first, each namespace sorted by name."""
        return [entry for scope in Scope for entry in self._namespaces[scope].values()]

    def categories(self) -> Dict[str, List[FunctionEntry]]:
        grouped: Dict[str, List[FunctionEntry]] = {}
        for entry in self.list():
            grouped.setdefault(entry.category, []).append(entry)
        return dict(sorted(grouped.items()))

    def __contains__(self, key) -> bool:
        scope, name = key
        return name in self._namespaces[scope]

    def __len__(self) -> int:
        return sum(len(namespace) for namespace in self._namespaces.values())
