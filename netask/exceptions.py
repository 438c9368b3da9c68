"""
Custom exception types for the netask scripting engine.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from netask.parser.classes import Span


class ErrorKind(Enum):
    LEX = "lex"
    PARSE = "parse"
    UNKNOWN_FUNCTION = "unknown_function"
    MISSING_NETWORK = "missing_network"
    EXECUTION = "execution"


class ErrorCode(Enum):

    # --- Lexical Errors ---
    SYNTAX_INVALID_CHARACTER = "Syntax Error: Invalid character '{char}' found."
    SYNTAX_UNCLOSED_STRING = "Syntax Error: Unclosed string literal."
    SYNTAX_INVALID_ESCAPE = "Syntax Error: Invalid escape sequence '\\{char}' in string literal."

    # --- Syntax Errors ---
    # The 'details' are generated from what the parser expected (e.g., "Expected a '.' but found '('").
    SYNTAX_UNEXPECTED_TOKEN = "Syntax Error: Invalid syntax. {details}"
    SYNTAX_UNKNOWN_SCOPE = "Syntax Error: Unknown scope '{scope}'. Task calls must start with 'node' or 'network'."
    SYNTAX_SELECTOR_ON_NETWORK = "Syntax Error: A node selection '[...]' can only be used on 'node' calls."
    SYNTAX_POSITIONAL_AFTER_KEYWORD = "Syntax Error: Positional argument follows keyword argument in call to '{name}'."
    SYNTAX_DUPLICATE_KEYWORD = "Syntax Error: Keyword argument '{arg}' is given more than once in call to '{name}'."
    SYNTAX_NUMBER_OUT_OF_RANGE = "Syntax Error: The number '{value}' is too large to be represented."
    SYNTAX_PARSING_ERROR = "Syntax Error: A general parsing error occurred. Details: {details}"

    # --- Dispatch Errors ---
    UNKNOWN_FUNCTION = "Unknown {scope} function '{name}'."
    NO_NETWORK_LOADED = "No network loaded: {scope} function '{name}' needs a network. Load one first (e.g. 'network.load_network(\"file.net\")')."

    # --- Execution Errors ---
    ARGUMENT_MISMATCH = "Invalid arguments for {scope} function '{name}': {details}"
    FUNCTION_FAILED = "The {scope} function '{name}' failed: {details}"
    UNKNOWN_NODE = "Node '{name}' is not in the network."
    ATTRIBUTE_NOT_FOUND = "'{owner}' has no attribute '{name}'."

    # --- Network File Errors ---
    NETWORK_FILE_NOT_FOUND = "Network file not found: '{path}'"
    NETWORK_FILE_UNREADABLE = "Could not read network file '{path}': {details}"
    NETWORK_FILE_SYNTAX = "Invalid connection '{line}' in network file. Expected 'a -> b' or a single node name."
    ATTRIBUTE_FILE_ERROR = "Could not read attributes from '{path}': {details}"


ERROR_KINDS = {
    ErrorCode.SYNTAX_INVALID_CHARACTER: ErrorKind.LEX,
    ErrorCode.SYNTAX_UNCLOSED_STRING: ErrorKind.LEX,
    ErrorCode.SYNTAX_INVALID_ESCAPE: ErrorKind.LEX,
    ErrorCode.SYNTAX_UNEXPECTED_TOKEN: ErrorKind.PARSE,
    ErrorCode.SYNTAX_UNKNOWN_SCOPE: ErrorKind.PARSE,
    ErrorCode.SYNTAX_SELECTOR_ON_NETWORK: ErrorKind.PARSE,
    ErrorCode.SYNTAX_POSITIONAL_AFTER_KEYWORD: ErrorKind.PARSE,
    ErrorCode.SYNTAX_DUPLICATE_KEYWORD: ErrorKind.PARSE,
    ErrorCode.SYNTAX_NUMBER_OUT_OF_RANGE: ErrorKind.PARSE,
    ErrorCode.SYNTAX_PARSING_ERROR: ErrorKind.PARSE,
    ErrorCode.UNKNOWN_FUNCTION: ErrorKind.UNKNOWN_FUNCTION,
    ErrorCode.NO_NETWORK_LOADED: ErrorKind.MISSING_NETWORK,
}


class TaskError(Exception):
    def __init__(
        self,
        code: ErrorCode,
        span: Optional["Span"] = None,
        file_path: Optional[str] = None,
        **kwargs,
    ):
        self.code = code
        self.span = span
        self.file_path = file_path or (span.file_path if span else None)
        self.details = kwargs

        # --- 1. Generate the core error message ---
        # The format string (e.g., "Unknown {scope} function '{name}'") is populated
        # with any extra data it needs from kwargs.
        self.core_message = code.value.format(**kwargs)

        # --- 2. Determine the location prefix ---
        location_prefix = ""
        if span:
            file_label = self.file_path or "<script>"
            location_prefix = f"Error in '{file_label}' (Line: {span.s_line}, Column: {span.s_col}):\n"
        elif self.file_path:
            location_prefix = f"Error in '{self.file_path}': "

        # --- 3. Combine them for the final message ---
        self.message = location_prefix + self.core_message

        super().__init__(self.message)

    @property
    def kind(self) -> ErrorKind:
        """Every code that is not a lexing, parsing or dispatch failure comes from running a function."""
        return ERROR_KINDS.get(self.code, ErrorKind.EXECUTION)

    @property
    def line(self) -> Optional[int]:
        return self.span.s_line if self.span else None

    @property
    def column(self) -> Optional[int]:
        return self.span.s_col if self.span else None
