"""
The in-memory network that task scripts operate on.

Nodes live in an arena: each one is addressed by a stable integer index, and the
underlying `networkx.DiGraph` only ever sees those indices, so edges are plain
index pairs. Node names map to indices through a separate dictionary, which
also preserves the order in which nodes were added.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

import networkx as nx

from netask.exceptions import ErrorCode, TaskError


class NodeView:
    """A handle on one node of a Network; node functions receive one of these."""

    def __init__(self, network: "Network", index: int):
        self.network = network
        self.index = index

    @property
    def name(self) -> str:
        return self.network.graph.nodes[self.index]["name"]

    @property
    def attrs(self) -> Dict[str, Any]:
        return self.network.graph.nodes[self.index]["attrs"]

    def inputs(self) -> List["NodeView"]:
        return [NodeView(self.network, i) for i in sorted(self.network.graph.predecessors(self.index))]

    def output(self) -> Optional["NodeView"]:
        successors = sorted(self.network.graph.successors(self.index))
        return NodeView(self.network, successors[0]) if successors else None

    def __eq__(self, other) -> bool:
        return isinstance(other, NodeView) and other.network is self.network and other.index == self.index

    def __hash__(self) -> int:
        return hash((id(self.network), self.index))

    def __repr__(self) -> str:
        return f"NodeView({self.name!r})"


class Network:
    """A directed graph of named nodes; edges point downstream (from input to output)."""

    def __init__(self):
        self.graph = nx.DiGraph()
        self.attrs: Dict[str, Any] = {}
        self._index: Dict[str, int] = {}

    # --- Construction ---

    def add_node(self, name: str, **attrs) -> NodeView:
        """Adds a node, or updates the attributes of an existing one."""
        index = self._index.get(name)
        if index is None:
            index = len(self._index)
            self._index[name] = index
            self.graph.add_node(index, name=name, attrs={})
        self.graph.nodes[index]["attrs"].update(attrs)
        return NodeView(self, index)

    def add_edge(self, source: str, target: str):
        """Connects source to target, creating either node if needed."""
        src = self.add_node(source).index
        dst = self.add_node(target).index
        self.graph.add_edge(src, dst)

    # --- Lookup ---

    def node(self, name: str) -> NodeView:
        index = self._index.get(name)
        if index is None:
            raise TaskError(ErrorCode.UNKNOWN_NODE, name=name)
        return NodeView(self, index)

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[NodeView]:
        for index in self._index.values():
            yield NodeView(self, index)

    @property
    def nodes(self) -> List[str]:
        return list(self._index)

    @property
    def edges(self) -> List[Tuple[str, str]]:
        names = self.graph.nodes
        return [(names[src]["name"], names[dst]["name"]) for src, dst in sorted(self.graph.edges)]

    def inputs(self, name: str) -> List[str]:
        return [view.name for view in self.node(name).inputs()]

    def output(self, name: str) -> Optional[str]:
        view = self.node(name).output()
        return view.name if view else None

    def outlets(self) -> List[str]:
        """Nodes without any downstream connection, in insertion order."""
        return [view.name for view in self if self.graph.out_degree(view.index) == 0]

    def upstream_count(self, name: str) -> int:
        return len(nx.ancestors(self.graph, self.node(name).index))

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.graph)

    def copy(self) -> "Network":
        new = Network()
        for view in self:
            new.add_node(view.name, **dict(view.attrs))
        for source, target in self.edges:
            new.add_edge(source, target)
        new.attrs = dict(self.attrs)
        return new

    def __repr__(self) -> str:
        return f"Network(nodes={len(self)}, edges={self.graph.number_of_edges()})"
