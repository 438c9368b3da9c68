"""
Network functions: they act on the network as a whole and receive the task
context, so they can also load a network or replace the current one.
"""

from typing import TYPE_CHECKING

import networkx as nx
import pandas as pd
from matplotlib.figure import Figure

from netask.config import DEFAULT_NAME_COLUMN
from netask.exceptions import ErrorCode, TaskError
from netask.network import dump_network
from netask.network import load_network as read_network_file

from .attrs import MISSING

if TYPE_CHECKING:
    from netask.context import TaskContext


# --- Loading & Saving ---


def load_network(ctx: "TaskContext", path: str):
    """
    Load the network from a connections file, replacing the current network.

    Each line of the file is either `upstream -> downstream` or a single node name;
    `#` starts a comment.
    """
    ctx.network = read_network_file(path)


def clear_network(ctx: "TaskContext"):
    """Unload the current network."""
    ctx.network = None


def save_connections(ctx: "TaskContext", path: str):
    """Write the network's connections to `path` in the connections file format."""
    network = ctx.require_network("save_connections")
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_network(network))


def _plain(value):
    """Converts numpy scalars from the table into the equivalent Python values."""
    return value.item() if hasattr(value, "item") else value


def load_csv_attrs(ctx: "TaskContext", path: str, name_column: str = DEFAULT_NAME_COLUMN):
    """
    Set node attributes from a CSV table with one row per node.

    The `name_column` holds the node names; every other column becomes an attribute.
    Empty cells are skipped.
    """
    network = ctx.require_network("load_csv_attrs")
    try:
        # Node names are text even when they look like numbers ("001").
        table = pd.read_csv(path, dtype={name_column: str})
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise TaskError(ErrorCode.ATTRIBUTE_FILE_ERROR, path=path, details=str(e)) from e
    if name_column not in table.columns:
        raise TaskError(ErrorCode.ATTRIBUTE_FILE_ERROR, path=path, details=f"there is no '{name_column}' column")

    for record in table.to_dict(orient="records"):
        node = network.node(str(record.pop(name_column)))
        node.attrs.update({key: _plain(value) for key, value in record.items() if not pd.isna(value)})


def save_plot(ctx: "TaskContext", path: str, title: str = ""):
    """Draw the network with its node names and save the figure to `path` (png, svg, pdf...)."""
    network = ctx.require_network("save_plot")
    labels = {view.index: view.name for view in network}

    fig = Figure(figsize=(8, 6))
    ax = fig.add_subplot()
    positions = nx.spring_layout(network.graph, seed=0)
    nx.draw_networkx(network.graph, pos=positions, ax=ax, labels=labels, node_color="#9ecae1", arrows=True)
    if title:
        ax.set_title(title)
    ax.set_axis_off()
    fig.savefig(path)


# --- Queries ---


def node_count(ctx: "TaskContext") -> int:
    """Number of nodes in the network."""
    return len(ctx.require_network("node_count"))


def nodes(ctx: "TaskContext") -> list:
    """Names of all nodes, in the order they were loaded."""
    return ctx.require_network("nodes").nodes


def edges(ctx: "TaskContext") -> list:
    """All connections as `[upstream, downstream]` pairs."""
    return [list(edge) for edge in ctx.require_network("edges").edges]


def outlets(ctx: "TaskContext") -> list:
    """Names of the nodes that have no downstream connection."""
    return ctx.require_network("outlets").outlets()


def print_network(ctx: "TaskContext"):
    """Print every node with its downstream connection."""
    network = ctx.require_network("print_network")
    for view in network:
        downstream = view.output()
        print(f"{view.name} -> {downstream.name}" if downstream else view.name)


# --- Network attributes ---


def set_attr(ctx: "TaskContext", name: str, value):
    """Set the network-level attribute `name` to `value`."""
    ctx.require_network("set_attr").attrs[name] = value


def get_attr(ctx: "TaskContext", name: str, default=MISSING):
    """Get the network-level attribute `name`, or `default` when it is not set."""
    network = ctx.require_network("get_attr")
    if name in network.attrs:
        return network.attrs[name]
    if default is MISSING:
        raise TaskError(ErrorCode.ATTRIBUTE_NOT_FOUND, owner="network", name=name)
    return default


NETWORK_FUNCTIONS = {
    "load_network": load_network,
    "clear_network": clear_network,
    "save_connections": save_connections,
    "load_csv_attrs": load_csv_attrs,
    "save_plot": save_plot,
    "node_count": node_count,
    "nodes": nodes,
    "edges": edges,
    "outlets": outlets,
    "print_network": print_network,
    "set_attr": set_attr,
    "get_attr": get_attr,
}
