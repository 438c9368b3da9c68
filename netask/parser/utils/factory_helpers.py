from typing import List, Optional

from netask.parser.classes import *


def get_span(s_line: int = 1, s_col: int = 1, e_line: int = 1, e_col: int = 1, file_path: Optional[str] = None):
    return Span(s_line=s_line, s_col=s_col, e_line=e_line, e_col=e_col, file_path=file_path)


def get_identifier(value: str):
    return Identifier(span=get_span(), value=value)


def get_number_literal(value: int | float):
    return NumberLiteral(span=get_span(), value=value)


def get_string_literal(value: str):
    return StringLiteral(span=get_span(), value=value)


def get_boolean_literal(value: bool):
    return BooleanLiteral(span=get_span(), value=value)


def get_array_literal(items: List[Expression]):
    return ArrayLiteral(span=get_span(), items=items)


def get_argument(value: Expression, name: Optional[str] = None):
    return Argument(span=get_span(), name=name, value=value)


def get_statement(scope: Scope, function: str, args: Optional[List[Argument]] = None, selection: Optional[List[str]] = None):
    return TaskStatement(span=get_span(), scope=scope, function=function, args=args or [], selection=selection)


def get_node_call(function: str, *args: Argument, selection: Optional[List[str]] = None):
    return get_statement(Scope.NODE, function, list(args), selection)


def get_network_call(function: str, *args: Argument):
    return get_statement(Scope.NETWORK, function, list(args))
