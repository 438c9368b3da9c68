"""
Node functions describing where a node sits in the network.
"""

from netask.network import NodeView


def name(node: NodeView) -> str:
    """Name of the node."""
    return node.name


def inputs(node: NodeView) -> list:
    """Names of the nodes directly upstream of this one."""
    return [upstream.name for upstream in node.inputs()]


def output(node: NodeView):
    """Name of the node directly downstream of this one, if any."""
    downstream = node.output()
    return downstream.name if downstream else None


def order(node: NodeView) -> int:
    """Number of nodes draining through this node, the node itself included."""
    return node.network.upstream_count(node.name) + 1


def print_node(node: NodeView):
    """Print the node and its downstream connection."""
    downstream = node.output()
    if downstream is None:
        print(node.name)
    else:
        print(f"{node.name} -> {downstream.name}")


NODE_FUNCTIONS = {
    "name": name,
    "inputs": inputs,
    "output": output,
    "order": order,
    "print_node": print_node,
}
