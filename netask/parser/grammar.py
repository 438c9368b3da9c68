import os

from lark import Lark

LARK_PARSER = None

try:
    # Use importlib.resources for robust package data access
    from importlib.resources import files as pkg_files

    # The path is relative to the 'netask.parser' subpackage
    netask_grammar = (pkg_files("netask.parser") / "netask.lark").read_text()
except Exception:
    # Fallback for development environments where the package is not installed
    grammar_path = os.path.join(os.path.dirname(__file__), "netask.lark")
    with open(grammar_path, "r") as f:
        netask_grammar = f.read()

# A basic lexer is required so the tokenizer can run on its own, ahead of parsing.
# The tokens are later fed back into the same LALR parser through its interactive interface.
LARK_PARSER = Lark(netask_grammar, start="start", parser="lalr", lexer="basic", maybe_placeholders=True)
