from typing import Any, Optional

from pydantic import BaseModel


def _first_difference(actual: Any, expected: Any, path: str) -> Optional[str]:
    """Walks both trees together and describes the first place where they disagree, or returns None."""
    if type(actual) is not type(expected):
        return f"{path}: expected a {type(expected).__name__}, got a {type(actual).__name__} ({actual!r})"

    if isinstance(actual, BaseModel):
        # Source positions never take part in the comparison.
        names = [name for name in type(actual).model_fields if name != "span"]
        children = ((f"{path}.{name}", getattr(actual, name), getattr(expected, name)) for name in names)
    elif isinstance(actual, list):
        if len(actual) != len(expected):
            return f"{path}: expected {len(expected)} items, got {len(actual)}"
        children = ((f"{path}[{i}]", act, exp) for i, (act, exp) in enumerate(zip(actual, expected)))
    else:
        return None if actual == expected else f"{path}: expected {expected!r}, got {actual!r}"

    for child_path, act, exp in children:
        difference = _first_difference(act, exp, child_path)
        if difference:
            return difference
    return None


def assert_asts_equal(actual, expected):
    """
    Asserts that two ASTs (a node, or a list of statements) have the same shape
    and values. Spans are ignored, types are compared strictly (1 is not 1.0).
    """
    difference = _first_difference(actual, expected, "ast")
    assert difference is None, f"ASTs differ at {difference}"
