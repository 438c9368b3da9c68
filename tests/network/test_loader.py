import os

import pytest

from netask.exceptions import ErrorCode, TaskError
from netask.network import dump_network, load_network, network_from_text


def test_connections_and_single_nodes():
    network = network_from_text("A -> B\nC\nB->D\n")

    assert network.nodes == ["A", "B", "C", "D"]
    assert network.edges == [("A", "B"), ("B", "D")]


def test_comments_and_blank_lines_are_ignored():
    text = "# header\n\nA -> B  # main stem\n   \n  C  \n"
    network = network_from_text(text)

    assert network.nodes == ["A", "B", "C"]


def test_quoted_names():
    network = network_from_text('"gauge #3" -> "Lower Ohio"\n"a -> b"\n')

    assert network.nodes == ["gauge #3", "Lower Ohio", "a -> b"]
    assert network.edges == [("gauge #3", "Lower Ohio")]


@pytest.mark.parametrize(
    "text, line, col",
    [
        pytest.param("A B", 1, 1, id="two_names_without_arrow"),
        pytest.param("A -> B\n  A -> B -> C", 2, 3, id="chained_arrows"),
        pytest.param("A ->", 1, 1, id="missing_target"),
        pytest.param("-> B", 1, 1, id="missing_source"),
        pytest.param('"A -> B', 1, 1, id="unclosed_quote"),
    ],
)
def test_syntax_errors(text, line, col):
    with pytest.raises(TaskError) as e:
        network_from_text(text, file_path="net.txt")

    assert e.value.code == ErrorCode.NETWORK_FILE_SYNTAX
    assert (e.value.line, e.value.column) == (line, col)
    assert e.value.file_path == "net.txt"


def test_load_network_from_disk(tmp_path):
    path = tmp_path / "net.txt"
    path.write_text("A -> B\n", encoding="utf-8")

    network = load_network(str(path))

    assert network.edges == [("A", "B")]


def test_load_network_errors_point_to_the_file(tmp_path):
    path = tmp_path / "net.txt"
    path.write_text("A -> B\nbad line here\n", encoding="utf-8")

    with pytest.raises(TaskError) as e:
        load_network(str(path))

    assert e.value.file_path == os.path.abspath(str(path))
    assert e.value.line == 2


def test_missing_network_file(tmp_path):
    path = str(tmp_path / "absent.txt")
    with pytest.raises(TaskError) as e:
        load_network(path)

    assert e.value.code == ErrorCode.NETWORK_FILE_NOT_FOUND
    assert path in e.value.message


def test_dump_network():
    network = network_from_text('A -> B\n"x y"\nB -> "C->D"\n')

    assert dump_network(network) == 'A -> B\nB -> "C->D"\n"x y"\n'


def test_dump_empty_network():
    assert dump_network(network_from_text("")) == ""


def test_dump_then_load_gives_the_same_network():
    network = network_from_text('"gauge #3" -> B\nB -> C\nD\n')
    reloaded = network_from_text(dump_network(network))

    assert reloaded.nodes == network.nodes
    assert reloaded.edges == network.edges


def test_directory_is_not_a_network_file(tmp_path):
    with pytest.raises(TaskError) as e:
        load_network(str(tmp_path))

    assert e.value.code == ErrorCode.NETWORK_FILE_UNREADABLE
    assert str(tmp_path) in e.value.message


def test_network_file_must_be_utf8(tmp_path):
    path = tmp_path / "net.txt"
    path.write_bytes(b"A -> \xff\xfe\n")

    with pytest.raises(TaskError) as e:
        load_network(str(path))

    assert e.value.code == ErrorCode.NETWORK_FILE_UNREADABLE
    assert "UnicodeDecodeError" in e.value.message
