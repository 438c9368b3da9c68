import math
from typing import List, Optional, Sequence

from lark import Token, Transformer
from lark.exceptions import LarkError, VisitError

from netask.config import BOOLEAN_KEYWORDS, MATCHING_BRACKETS, SCOPE_KEYWORDS, STATEMENT_SEPARATORS
from netask.exceptions import ErrorCode, TaskError

from .classes import *
from .grammar import LARK_PARSER
from .helpers import translate_lark_error
from .tokenizer import decode_string, span_from_token, to_lark_token, tokenize


class TaskTransformer(Transformer):
    """
    Transforms the Lark parse tree into the pydantic AST.
    Each method is called when the parser completes a rule (or alias) of the same name;
    terminals are converted first, so rules receive Identifier/literal nodes and raw
    punctuation tokens, and the transformation works from the atoms upwards.
    """

    def __init__(self, file_path: Optional[str] = None):
        self.file_path = file_path
        super().__init__()

    # --- Helper methods for creating spans ---
    def _create_span_from_token(self, token: Token) -> Span:
        return span_from_token(token, self.file_path)

    def _get_span_from_items(self, items: list) -> Span:
        """Calculates a Span that covers a list of tokens and/or ASTNodes."""
        first = next((item for item in items if hasattr(item, "span") or isinstance(item, Token)), None)
        last = next((item for item in reversed(items) if hasattr(item, "span") or isinstance(item, Token)), first)

        if not first:  # Handle empty lists
            return Span(s_line=1, s_col=1, e_line=1, e_col=1, file_path=self.file_path)

        first_span = first.span if hasattr(first, "span") else self._create_span_from_token(first)
        last_span = last.span if hasattr(last, "span") else self._create_span_from_token(last)

        return Span(
            s_line=first_span.s_line,
            s_col=first_span.s_col,
            e_line=last_span.e_line,
            e_col=last_span.e_col,
            start_pos=first_span.start_pos,
            end_pos=last_span.end_pos,
            file_path=self.file_path,
        )

    def _as_value(self, item):
        """`true` and `false` are ordinary names to the grammar; in value position they are booleans."""
        if isinstance(item, Identifier) and item.value in BOOLEAN_KEYWORDS:
            return BooleanLiteral(value=BOOLEAN_KEYWORDS[item.value], span=item.span)
        return item

    # --- Terminal Transformations ---
    def NAME(self, token: Token):
        return Identifier(value=token.value, span=self._create_span_from_token(token))

    def STRING(self, token: Token):
        return StringLiteral(value=decode_string(token.value), span=self._create_span_from_token(token))

    def NUMBER(self, token: Token):
        val = token.value
        num = float(val) if "." in val or "e" in val.lower() else int(val)
        span = self._create_span_from_token(token)
        if isinstance(num, float) and not math.isfinite(num):
            raise TaskError(ErrorCode.SYNTAX_NUMBER_OUT_OF_RANGE, span=span, value=val)
        return NumberLiteral(value=num, span=span)

    # --- Rule Transformations ---
    def array(self, items):
        values = items[1] if items[1] is not None else []
        return ArrayLiteral(items=values, span=self._get_span_from_items(items))

    def values(self, items):
        return [self._as_value(item) for item in items if not isinstance(item, Token)]

    def keyword_argument(self, items):
        name_ident, _equal, value = items
        return Argument(name=name_ident.value, value=self._as_value(value), span=self._get_span_from_items(items))

    def arguments(self, items):
        arguments = []
        for item in items:
            if isinstance(item, Token):
                continue
            if not isinstance(item, Argument):
                item = Argument(value=self._as_value(item), span=item.span)
            arguments.append(item)
        return arguments

    def node_refs(self, items):
        return [item.value for item in items if not isinstance(item, Token)]

    def selector(self, items):
        return items[1] if items[1] is not None else []

    def statement(self, items):
        scope_ident, selection, _dot, func_ident, _lpar, arguments, _rpar = items
        span = self._get_span_from_items(items)

        scope = SCOPE_KEYWORDS.get(scope_ident.value)
        if scope is None:
            raise TaskError(ErrorCode.SYNTAX_UNKNOWN_SCOPE, span=scope_ident.span, scope=scope_ident.value)
        if scope is Scope.NETWORK and selection is not None:
            raise TaskError(ErrorCode.SYNTAX_SELECTOR_ON_NETWORK, span=span)

        arguments = arguments or []
        seen_keywords = set()
        for arg in arguments:
            if arg.name is None:
                if seen_keywords:
                    raise TaskError(ErrorCode.SYNTAX_POSITIONAL_AFTER_KEYWORD, span=arg.span, name=func_ident.value)
                continue
            if arg.name in seen_keywords:
                raise TaskError(ErrorCode.SYNTAX_DUPLICATE_KEYWORD, span=arg.span, name=func_ident.value, arg=arg.name)
            seen_keywords.add(arg.name)

        return TaskStatement(scope=scope, function=func_ident.value, selection=selection, args=arguments, span=span)

    def start(self, children):
        return [child for child in children if isinstance(child, TaskStatement)]


def _significant_tokens(tokens: Sequence[ScriptToken]) -> List[ScriptToken]:
    """
    Drops comments and whitespace, and the newlines nested inside parentheses or
    brackets, leaving exactly the tokens the grammar is written against.
    """
    result = []
    depth = 0
    for token in tokens:
        if token.is_trivia:
            continue
        if token.terminal in MATCHING_BRACKETS:
            depth += 1
        elif token.terminal in MATCHING_BRACKETS.values():
            # An unbalanced closing bracket is left for the parser to report.
            depth = max(depth - 1, 0)
        elif token.kind is TokenKind.NEWLINE and depth > 0:
            continue
        result.append(token)
    return result


def _split_statements(tokens: Sequence[ScriptToken]) -> List[List[ScriptToken]]:
    """Cuts the significant tokens after every separator; each chunk holds at most one statement."""
    chunks = [[]]
    for token in tokens:
        chunks[-1].append(token)
        if token.terminal in STATEMENT_SEPARATORS:
            chunks.append([])
    return [chunk for chunk in chunks if chunk]


def _parse_chunk(tokens: List[ScriptToken], transformer: TaskTransformer) -> List[TaskStatement]:
    open_brackets = []
    try:
        interactive = LARK_PARSER.parse_interactive()
        last_token = None
        for script_token in tokens:
            last_token = to_lark_token(script_token)
            interactive.feed_token(last_token)
            if script_token.terminal in MATCHING_BRACKETS:
                open_brackets.append(script_token.terminal)
            elif open_brackets and script_token.terminal == MATCHING_BRACKETS[open_brackets[-1]]:
                open_brackets.pop()
        parse_tree = interactive.feed_eof(last_token)
        return transformer.transform(parse_tree)
    except VisitError as e:
        # Errors raised inside the transformer come wrapped by Lark.
        if isinstance(e.orig_exc, TaskError):
            raise e.orig_exc from None
        raise
    except LarkError as e:
        innermost = open_brackets[-1] if open_brackets else None
        raise translate_lark_error(e, transformer.file_path, open_bracket=innermost) from e


def parse(tokens: Sequence[ScriptToken], file_path: Optional[str] = None) -> List[TaskStatement]:
    """
    Parses a complete token sequence into the ordered list of task statements.
    Each statement is parsed and checked before the next one is read, so the
    first malformed statement is the one reported and nothing after it is parsed.
    """
    transformer = TaskTransformer(file_path=file_path)
    statements = []
    for chunk in _split_statements(_significant_tokens(tokens)):
        statements.extend(_parse_chunk(chunk, transformer))
    return statements


def parse_script(script_content: str, file_path: Optional[str] = None) -> List[TaskStatement]:
    """Tokenizes and parses the script content in one go."""
    return parse(tokenize(script_content, file_path=file_path), file_path=file_path)
