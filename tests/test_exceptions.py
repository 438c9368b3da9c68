import pytest

from netask.exceptions import ERROR_KINDS, ErrorCode, ErrorKind, TaskError
from netask.parser.classes import Span


def test_message_with_span_and_file():
    span = Span(s_line=3, s_col=7, e_line=3, e_col=9, file_path="tasks.txt")
    err = TaskError(ErrorCode.UNKNOWN_FUNCTION, span=span, scope="node", name="frobnicate")

    assert err.message == "Error in 'tasks.txt' (Line: 3, Column: 7):\nUnknown node function 'frobnicate'."
    assert str(err) == err.message
    assert err.core_message == "Unknown node function 'frobnicate'."
    assert err.details == {"scope": "node", "name": "frobnicate"}
    assert (err.line, err.column) == (3, 7)


def test_message_with_file_only():
    err = TaskError(ErrorCode.ATTRIBUTE_FILE_ERROR, file_path="attrs.csv", path="attrs.csv", details="bad")
    assert err.message == "Error in 'attrs.csv': Could not read attributes from 'attrs.csv': bad"
    assert err.line is None


@pytest.mark.parametrize(
    "code, kind",
    [
        pytest.param(ErrorCode.SYNTAX_INVALID_CHARACTER, ErrorKind.LEX, id="lex"),
        pytest.param(ErrorCode.SYNTAX_DUPLICATE_KEYWORD, ErrorKind.PARSE, id="parse"),
        pytest.param(ErrorCode.UNKNOWN_FUNCTION, ErrorKind.UNKNOWN_FUNCTION, id="unknown_function"),
        pytest.param(ErrorCode.NO_NETWORK_LOADED, ErrorKind.MISSING_NETWORK, id="missing_network"),
        pytest.param(ErrorCode.FUNCTION_FAILED, ErrorKind.EXECUTION, id="execution"),
        pytest.param(ErrorCode.NETWORK_FILE_SYNTAX, ErrorKind.EXECUTION, id="network_file"),
    ],
)
def test_error_kinds(code, kind):
    assert ERROR_KINDS.get(code, ErrorKind.EXECUTION) is kind
