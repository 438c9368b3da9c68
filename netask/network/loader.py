"""
Reading and writing network files.

A network file lists one connection per line, `upstream -> downstream`, or a
single node name for a node without connections. Names containing spaces or
special characters are written in double quotes. `#` starts a comment.
"""

import os
import re
from typing import Optional

from netask.config import NETWORK_FILE_ARROW, NETWORK_FILE_COMMENT
from netask.exceptions import ErrorCode, TaskError
from netask.parser.classes import Span

from .network import Network

_NAME = rf'"[^"]*"|(?:(?!{re.escape(NETWORK_FILE_ARROW)})[^\s"])+'
CONNECTION_REGEX = re.compile(rf'^(?P<source>{_NAME})\s*(?:{re.escape(NETWORK_FILE_ARROW)}\s*(?P<target>{_NAME}))?$')
PLAIN_NAME_REGEX = re.compile(r'^[^\s"#]+$')


def _strip_comment(line: str) -> str:
    """Removes a trailing comment, ignoring comment markers inside quoted names."""
    in_string = False
    for i, char in enumerate(line):
        if char == '"':
            in_string = not in_string
        elif char == NETWORK_FILE_COMMENT and not in_string:
            return line[:i]
    return line


def _unquote(name: str) -> str:
    return name[1:-1] if name.startswith('"') else name


def network_from_text(text: str, file_path: Optional[str] = None) -> Network:
    """Builds a Network from the contents of a network file."""
    network = Network()
    for i, line in enumerate(text.splitlines()):
        line_num = i + 1
        clean_line = _strip_comment(line).strip()
        if not clean_line:
            continue

        match = CONNECTION_REGEX.match(clean_line)
        if not match:
            col = line.index(clean_line) + 1
            span = Span(s_line=line_num, s_col=col, e_line=line_num, e_col=col + len(clean_line), file_path=file_path)
            raise TaskError(ErrorCode.NETWORK_FILE_SYNTAX, span=span, line=clean_line)

        source = _unquote(match.group("source"))
        target = match.group("target")
        if target is None:
            network.add_node(source)
        else:
            network.add_edge(source, _unquote(target))
    return network


def load_network(path: str) -> Network:
    """Loads a network file from disk."""
    absolute_path = os.path.abspath(path)
    try:
        with open(absolute_path, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise TaskError(ErrorCode.NETWORK_FILE_NOT_FOUND, path=path)
    except (OSError, UnicodeDecodeError) as e:
        # Directories, missing permissions and non UTF-8 files.
        raise TaskError(ErrorCode.NETWORK_FILE_UNREADABLE, path=path, details=f"{type(e).__name__}: {e}") from e
    return network_from_text(content, file_path=absolute_path)


def _quote_name(name: str) -> str:
    if PLAIN_NAME_REGEX.match(name) and NETWORK_FILE_ARROW not in name:
        return name
    return f'"{name}"'


def dump_network(network: Network) -> str:
    """Serialises a Network back into the network file format."""
    lines = []
    connected = set()
    for source, target in network.edges:
        lines.append(f"{_quote_name(source)} {NETWORK_FILE_ARROW} {_quote_name(target)}")
        connected.update((source, target))
    for name in network.nodes:
        if name not in connected:
            lines.append(_quote_name(name))
    return "\n".join(lines) + "\n" if lines else ""
