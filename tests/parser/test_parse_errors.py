import pytest

from netask.exceptions import ErrorCode, ErrorKind, TaskError
from netask.parser.parser import parse_script


@pytest.mark.parametrize(
    "code, expected_code, line, col",
    [
        pytest.param("foo(", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 4, id="call_without_scope"),
        pytest.param(".f()", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 1, id="missing_receiver"),
        pytest.param("node.f(", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 7, id="unclosed_call_at_end"),
        pytest.param("node.f(1\nnode.g()", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 2, 1, id="unclosed_call_runs_into_next_line"),
        pytest.param("node.f() node.g()", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 10, id="missing_separator"),
        pytest.param("node.f())", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 9, id="extra_closing_parenthesis"),
        pytest.param("node.f(1 2)", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 10, id="missing_comma"),
        pytest.param("node.f(x=)", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 10, id="keyword_without_value"),
        pytest.param("node.f(,)", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 8, id="leading_comma"),
        pytest.param("node.f", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 6, id="missing_call_parentheses"),
        pytest.param("nodes.f()", ErrorCode.SYNTAX_UNKNOWN_SCOPE, 1, 1, id="unknown_scope"),
        pytest.param("node.f()\n  graph.g()", ErrorCode.SYNTAX_UNKNOWN_SCOPE, 2, 3, id="unknown_scope_second_line"),
        pytest.param("network[A].f()", ErrorCode.SYNTAX_SELECTOR_ON_NETWORK, 1, 1, id="selection_on_network"),
        pytest.param("node.f(x=1, 2)", ErrorCode.SYNTAX_POSITIONAL_AFTER_KEYWORD, 1, 13, id="positional_after_keyword"),
        pytest.param("node.f(x=1, x=2)", ErrorCode.SYNTAX_DUPLICATE_KEYWORD, 1, 13, id="duplicate_keyword"),
        pytest.param("node.f(1e999)", ErrorCode.SYNTAX_NUMBER_OUT_OF_RANGE, 1, 8, id="number_out_of_range"),
        pytest.param("node.f\nnode.g()", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 7, id="line_ends_before_call"),
        pytest.param("node.f(1; 2)", ErrorCode.SYNTAX_UNEXPECTED_TOKEN, 1, 9, id="separator_inside_call"),
    ],
)
def test_parse_errors(code, expected_code, line, col):
    with pytest.raises(TaskError) as e:
        parse_script(code)

    assert e.value.code == expected_code
    assert e.value.kind is ErrorKind.PARSE
    assert (e.value.line, e.value.column) == (line, col)


def test_lex_errors_surface_through_parse_script():
    with pytest.raises(TaskError) as e:
        parse_script('node.f(1)\nnode.g("open')

    assert e.value.code == ErrorCode.SYNTAX_UNCLOSED_STRING
    assert e.value.kind is ErrorKind.LEX
    assert e.value.line == 2


def test_unexpected_token_message_names_the_found_token():
    with pytest.raises(TaskError) as e:
        parse_script("node.f(1 2)")

    assert "(Line: 1, Column: 10)" in e.value.message
    assert "but found '2' instead." in e.value.message
    assert "a comma ','" in e.value.message


def test_unexpected_end_of_script_message():
    with pytest.raises(TaskError) as e:
        parse_script("node.f(1,")

    assert "but reached the end of the script instead." in e.value.message


def test_error_message_names_the_file():
    with pytest.raises(TaskError) as e:
        parse_script("nodes.f()", file_path="tasks.txt")

    assert e.value.file_path == "tasks.txt"
    assert e.value.message.startswith("Error in 'tasks.txt' (Line: 1, Column: 1):\n")
    assert "Unknown scope 'nodes'" in e.value.message


def test_first_error_stops_parsing():
    with pytest.raises(TaskError) as e:
        parse_script("node.f()\nnode.g(1 2)\nnode.h(")

    assert e.value.line == 2


@pytest.mark.parametrize(
    "code, expected_code, line",
    [
        pytest.param("nodes.f()\nnode.g(", ErrorCode.SYNTAX_UNKNOWN_SCOPE, 1, id="unknown_scope_before_unclosed_call"),
        pytest.param("node.f(x=1, x=2)\nnode.g(1 2)", ErrorCode.SYNTAX_DUPLICATE_KEYWORD, 1, id="duplicate_keyword_before_missing_comma"),
        pytest.param("network[A].f(); node.g())", ErrorCode.SYNTAX_SELECTOR_ON_NETWORK, 1, id="selection_before_extra_parenthesis"),
        pytest.param("node.f()\nnode.g(1e999)\nnode.h(", ErrorCode.SYNTAX_NUMBER_OUT_OF_RANGE, 2, id="bad_number_before_unclosed_call"),
    ],
)
def test_errors_are_reported_in_source_order(code, expected_code, line):
    with pytest.raises(TaskError) as e:
        parse_script(code)

    assert e.value.code == expected_code
    assert e.value.line == line


def test_line_end_message():
    with pytest.raises(TaskError) as e:
        parse_script("node.f\nnode.g()")

    assert "but the line ended instead." in e.value.message


@pytest.mark.parametrize(
    "code, offered, not_offered",
    [
        pytest.param("node.g(1 2)", "a closing parenthesis ')'", "a closing bracket ']'", id="inside_parentheses"),
        pytest.param("node[A 1].g()", "a closing bracket ']'", "a closing parenthesis ')'", id="inside_selection"),
        pytest.param("node.g([1 2])", "a closing bracket ']'", "a closing parenthesis ')'", id="array_inside_parentheses"),
    ],
)
def test_expected_closers_match_the_open_bracket(code, offered, not_offered):
    with pytest.raises(TaskError) as e:
        parse_script(code)

    assert offered in e.value.message
    assert not_offered not in e.value.message
