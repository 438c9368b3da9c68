"""
Utility functions for netask hosts: terminal colouring, a renderer for
TaskError diagnostics and a plain-text formatter for statement outputs.
"""

from typing import Any, Optional

from netask.exceptions import TaskError


class TerminalColors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    CYAN = "\033[96m"
    RESET = "\033[0m"


def format_error(err: TaskError, source: Optional[str] = None) -> str:
    """
    Creates a user-friendly error message from a TaskError.
    When the script source is available and the error has a position, the
    offending line is quoted with a caret under the reported column.
    """
    if err.span is None or source is None:
        return err.message

    lines = source.splitlines()
    if not 1 <= err.span.s_line <= len(lines):
        return err.message

    line_content = lines[err.span.s_line - 1]
    gutter = f"L{err.span.s_line} | "
    return f"{err.message}\n" f"{gutter}{line_content}\n" f"{' ' * (len(gutter) + err.span.s_col - 1)}^"


def format_output(output: Any) -> str:
    """Renders the output of a statement for printing; mappings print one node per line."""
    if isinstance(output, dict):
        return "\n".join(f"{key}: {value}" for key, value in output.items())
    return str(output)
