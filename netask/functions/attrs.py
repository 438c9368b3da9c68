"""
Node functions for reading and writing node attributes.
Every function receives the node it runs on as its first argument.
"""

from netask.exceptions import ErrorCode, TaskError
from netask.network import NodeView


class _Missing:
    """Default marker for optional arguments that have no sensible default value."""

    def __repr__(self):
        return "missing"


MISSING = _Missing()


def set_attr(node: NodeView, name: str, value):
    """Set the attribute `name` of the node to `value`."""
    node.attrs[name] = value


def set_attrs(node: NodeView, **attrs):
    """Set several attributes at once, e.g. `node.set_attrs(area=12.5, river="Ohio")`."""
    node.attrs.update(attrs)


def get_attr(node: NodeView, name: str, default=MISSING):
    """
    Get the value of the attribute `name`.

    Fails when the node has no such attribute, unless a `default` is given,
    in which case the default is returned instead.
    """
    if name in node.attrs:
        return node.attrs[name]
    if default is MISSING:
        raise TaskError(ErrorCode.ATTRIBUTE_NOT_FOUND, owner=node.name, name=name)
    return default


def has_attr(node: NodeView, name: str) -> bool:
    """Whether the node has the attribute `name`."""
    return name in node.attrs


def del_attr(node: NodeView, name: str):
    """Remove the attribute `name`; does nothing when it is not set."""
    node.attrs.pop(name, None)


def attrs(node: NodeView) -> dict:
    """All attributes of the node."""
    return dict(node.attrs)


def print_attrs(node: NodeView, *names: str):
    """Print the node's attributes, or only the given ones."""
    keys = names or sorted(node.attrs)
    values = ", ".join(f"{key} = {node.attrs.get(key)!r}" for key in keys)
    print(f"{node.name}: {values}")


NODE_FUNCTIONS = {
    "set_attr": set_attr,
    "set_attrs": set_attrs,
    "get_attr": get_attr,
    "has_attr": has_attr,
    "del_attr": del_attr,
    "attrs": attrs,
    "print_attrs": print_attrs,
}
