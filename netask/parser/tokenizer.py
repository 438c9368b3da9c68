from typing import List, Optional

from lark import Token
from lark.exceptions import UnexpectedCharacters

from netask.config import STRING_ESCAPES, TOKEN_KINDS
from netask.exceptions import ErrorCode, TaskError

from .classes import ScriptToken, Span
from .grammar import LARK_PARSER


def span_from_token(token: Token, file_path: Optional[str] = None) -> Span:
    """Creates a Span object from a single Lark Token."""
    return Span(
        s_line=token.line,
        s_col=token.column,
        e_line=token.end_line,
        e_col=token.end_column,
        start_pos=token.start_pos,
        end_pos=token.end_pos,
        file_path=file_path,
    )


def decode_string(raw: str) -> str:
    """Strips the quotes of a STRING token and resolves its escape sequences."""
    body = raw[1:-1]
    chars = []
    i = 0
    while i < len(body):
        char = body[i]
        if char == "\\":
            chars.append(STRING_ESCAPES[body[i + 1]])
            i += 2
        else:
            chars.append(char)
            i += 1
    return "".join(chars)


def _check_escapes(token: Token, file_path: Optional[str]):
    i = 1
    while i < len(token.value) - 1:
        if token.value[i] == "\\":
            escaped = token.value[i + 1]
            if escaped not in STRING_ESCAPES:
                # Point at the backslash itself, which may sit on a later line of a multi-line string.
                before = token.value[:i]
                line = token.line + before.count("\n")
                column = i - before.rfind("\n") if "\n" in before else token.column + i
                span = Span(s_line=line, s_col=column, e_line=line, e_col=column + 2, start_pos=token.start_pos + i, end_pos=token.start_pos + i + 2, file_path=file_path)
                raise TaskError(ErrorCode.SYNTAX_INVALID_ESCAPE, span=span, char=escaped)
            i += 2
        else:
            i += 1


def _translate_lex_error(err: UnexpectedCharacters, file_path: Optional[str]) -> TaskError:
    span = Span(
        s_line=err.line,
        s_col=err.column,
        e_line=err.line,
        e_col=err.column + 1,
        start_pos=err.pos_in_stream,
        end_pos=err.pos_in_stream + 1,
        file_path=file_path,
    )
    if err.char == '"':
        # The only way a quote can fail to lex is when its closing quote is missing.
        return TaskError(ErrorCode.SYNTAX_UNCLOSED_STRING, span=span)
    return TaskError(ErrorCode.SYNTAX_INVALID_CHARACTER, span=span, char=err.char)


def tokenize(text: str, file_path: Optional[str] = None) -> List[ScriptToken]:
    """
    Converts the raw script text into the complete, ordered list of tokens.
    Comments, whitespace and newlines are kept so that the text can be reproduced;
    the parser decides which of them matter.
    """
    tokens = []
    try:
        for token in LARK_PARSER.lex(text, dont_ignore=True):
            if token.type == "STRING":
                _check_escapes(token, file_path)
            tokens.append(
                ScriptToken(
                    kind=TOKEN_KINDS[token.type],
                    terminal=token.type,
                    text=token.value,
                    span=span_from_token(token, file_path),
                )
            )
    except UnexpectedCharacters as e:
        raise _translate_lex_error(e, file_path) from e
    return tokens


def to_lark_token(token: ScriptToken) -> Token:
    """Rebuilds the Lark token a ScriptToken was made from, positions included."""
    span = token.span
    return Token(
        token.terminal,
        token.text,
        start_pos=span.start_pos,
        line=span.s_line,
        column=span.s_col,
        end_line=span.e_line,
        end_column=span.e_col,
        end_pos=span.end_pos,
    )
