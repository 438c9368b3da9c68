from typing import Optional

from lark import Token
from lark.exceptions import LarkError, UnexpectedToken

from netask.config import FRIENDLY_TOKEN_NAMES, MATCHING_BRACKETS
from netask.exceptions import ErrorCode, TaskError

from .classes import Span


def _describe_expected(expected) -> str:
    friendly_expected = sorted(FRIENDLY_TOKEN_NAMES.get(e, e) for e in expected)
    if len(friendly_expected) > 1:
        return f"Expected one of: {', '.join(friendly_expected[:-1])} or {friendly_expected[-1]}"
    elif friendly_expected:
        return f"Expected {friendly_expected[0]}"
    return ""


def _span_of(token: Token, file_path: Optional[str]) -> Optional[Span]:
    line = getattr(token, "line", None)
    if line is None or line < 1:
        return None
    return Span(
        s_line=line,
        s_col=token.column,
        e_line=token.end_line or line,
        e_col=token.end_column or token.column,
        start_pos=token.start_pos or 0,
        end_pos=token.end_pos or 0,
        file_path=file_path,
    )


def _closers_in_reach(expected, open_bracket: Optional[str]) -> set:
    """
    The LALR tables merge states, so the expected set may offer a closing bracket
    that matches nothing. Only the closer of the innermost open bracket is kept.
    """
    allowed = MATCHING_BRACKETS.get(open_bracket)
    return {e for e in expected if e not in MATCHING_BRACKETS.values() or e == allowed}


def translate_lark_error(err: LarkError, file_path: Optional[str] = None, open_bracket: Optional[str] = None) -> TaskError:
    """
    Translates a generic LarkError into a user-friendly TaskError.
    `open_bracket` is the terminal of the innermost bracket still open where the error occurred.
    """

    if isinstance(err, UnexpectedToken):
        # Build a helpful message about what was expected.
        expected_str = _describe_expected(_closers_in_reach(err.expected, open_bracket))

        found_token = err.token
        found_str = f"but found '{found_token.value}' instead."
        if found_token.type == "$END":
            found_str = "but reached the end of the script instead."
        elif found_token.type == "NEWLINE":
            found_str = "but the line ended instead."

        details = f"{expected_str}, {found_str}" if expected_str else f"Found unexpected token '{found_token.value}'."

        # At the end of input Lark borrows the position of the last real token (or has none at all).
        span = _span_of(found_token, file_path)
        if span is None:
            span = Span(s_line=1, s_col=1, e_line=1, e_col=1, file_path=file_path)
        return TaskError(code=ErrorCode.SYNTAX_UNEXPECTED_TOKEN, span=span, details=details)

    # Fallback for any other Lark error
    return TaskError(code=ErrorCode.SYNTAX_PARSING_ERROR, file_path=file_path, details=str(err))
