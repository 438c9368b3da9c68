"""
Defines the formal data structures (contracts) for the tokens and the Abstract
Syntax Tree (AST) produced by the tokenizer and parser stages.

Each node is a pydantic model and includes a `Span` object to track its
location in the source code, enabling precise error reporting in later stages.
"""

import re
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

# --- Core Data Structures ---


class Span(BaseModel):
    """Represents a location in the source code for precise error reporting."""

    s_line: int
    s_col: int
    e_line: int
    e_col: int
    start_pos: int = 0
    end_pos: int = 0
    file_path: Optional[str] = None


class Scope(str, Enum):
    NODE = "node"
    NETWORK = "network"


class TokenKind(str, Enum):
    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"
    PUNCTUATION = "punctuation"
    OPERATOR = "operator"
    COMMENT = "comment"
    WHITESPACE = "whitespace"
    NEWLINE = "newline"


class ScriptToken(BaseModel, frozen=True):
    """A single lexical unit of a task script."""

    kind: TokenKind
    terminal: str
    text: str
    span: Span

    @property
    def is_trivia(self) -> bool:
        return self.kind in (TokenKind.COMMENT, TokenKind.WHITESPACE)


class ASTNode(BaseModel):
    """A base class for all AST nodes, ensuring they have a span."""

    span: Span


# --- Literals and Identifiers ---


class NumberLiteral(ASTNode):
    value: Union[int, float]

    def evaluate(self) -> Any:
        return self.value

    def to_source(self) -> str:
        return repr(self.value)


class StringLiteral(ASTNode):
    value: str

    def evaluate(self) -> Any:
        return self.value

    def to_source(self) -> str:
        return _quote(self.value)


class BooleanLiteral(ASTNode):
    value: bool

    def evaluate(self) -> Any:
        return self.value

    def to_source(self) -> str:
        return "true" if self.value else "false"


class Identifier(ASTNode):
    """A bare name; as an argument it evaluates to the name itself."""

    value: str

    def evaluate(self) -> Any:
        return self.value

    def to_source(self) -> str:
        return self.value


class ArrayLiteral(ASTNode):
    items: List["Expression"]

    def evaluate(self) -> Any:
        return [item.evaluate() for item in self.items]

    def to_source(self) -> str:
        return "[" + ", ".join(item.to_source() for item in self.items) + "]"


Expression = Union[NumberLiteral, StringLiteral, BooleanLiteral, Identifier, ArrayLiteral]
ArrayLiteral.model_rebuild()


class Argument(ASTNode):
    """A positional (name is None) or keyword argument of a task call."""

    name: Optional[str] = None
    value: Expression

    def to_source(self) -> str:
        if self.name is None:
            return self.value.to_source()
        return f"{self.name}={self.value.to_source()}"


# --- Statements ---


class TaskStatement(ASTNode):
    """One function call of a task script, e.g. `node[A].set_attr("x", 1)`."""

    scope: Scope
    function: str
    selection: Optional[List[str]] = None
    args: List[Argument] = []

    def positional_values(self) -> List[Any]:
        return [arg.value.evaluate() for arg in self.args if arg.name is None]

    def keyword_values(self) -> Dict[str, Any]:
        return {arg.name: arg.value.evaluate() for arg in self.args if arg.name is not None}

    def to_source(self) -> str:
        receiver = self.scope.value
        if self.selection is not None:
            receiver += "[" + ", ".join(_node_ref_source(name) for name in self.selection) + "]"
        arguments = ", ".join(arg.to_source() for arg in self.args)
        return f"{receiver}.{self.function}({arguments})"

    def __str__(self) -> str:
        return self.to_source()


_BARE_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_QUOTE_ESCAPES = {"\\": "\\\\", "\"": "\\\"", "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def _quote(text: str) -> str:
    return '"' + "".join(_QUOTE_ESCAPES.get(char, char) for char in text) + '"'


def _node_ref_source(name: str) -> str:
    if _BARE_NAME.fullmatch(name):
        return name
    return _quote(name)


# A generic type hint for any node in the AST
Node = Union[ASTNode, TaskStatement]
