"""
Static configuration data for the netask scripting engine.
This includes scope keywords, token tables and the friendly names used in error messages.
Built-in functions are loaded from the 'netask.functions' package.
"""

from netask.parser.classes import Scope, TokenKind

# The receiver written before the '.' decides the scope of a task call.
SCOPE_KEYWORDS = {"node": Scope.NODE, "network": Scope.NETWORK}

BOOLEAN_KEYWORDS = {"true": True, "false": False}

# Maps every terminal of 'netask.lark' to the kind reported by the tokenizer.
TOKEN_KINDS = {
    "NAME": TokenKind.IDENTIFIER,
    "STRING": TokenKind.STRING,
    "NUMBER": TokenKind.NUMBER,
    "DOT": TokenKind.PUNCTUATION,
    "COMMA": TokenKind.PUNCTUATION,
    "LPAR": TokenKind.PUNCTUATION,
    "RPAR": TokenKind.PUNCTUATION,
    "LSQB": TokenKind.PUNCTUATION,
    "RSQB": TokenKind.PUNCTUATION,
    "SEMICOLON": TokenKind.PUNCTUATION,
    "EQUAL": TokenKind.OPERATOR,
    "COMMENT": TokenKind.COMMENT,
    "WS": TokenKind.WHITESPACE,
    "NEWLINE": TokenKind.NEWLINE,
}

# Opening bracket -> closing bracket. Newlines inside these pairs do not end a statement.
MATCHING_BRACKETS = {"LPAR": "RPAR", "LSQB": "RSQB"}

STATEMENT_SEPARATORS = {"NEWLINE", "SEMICOLON"}

STRING_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "t": "\t", "r": "\r"}

# A mapping from Lark's internal token names to friendly, human-readable names.
FRIENDLY_TOKEN_NAMES = {
    "NAME": "a name",
    "STRING": "a string literal",
    "NUMBER": "a number",
    "DOT": "a dot '.'",
    "COMMA": "a comma ','",
    "LPAR": "an opening parenthesis '('",
    "RPAR": "a closing parenthesis ')'",
    "LSQB": "an opening bracket '['",
    "RSQB": "a closing bracket ']'",
    "EQUAL": "an equals sign '='",
    "SEMICOLON": "a semicolon ';'",
    "NEWLINE": "the end of the line",
    "$END": "the end of the script",
}

# --- Network files ---
NETWORK_FILE_ARROW = "->"
NETWORK_FILE_COMMENT = "#"

# Column holding node names when attributes are imported from a CSV table.
DEFAULT_NAME_COLUMN = "name"
