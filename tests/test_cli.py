import io

import pytest

from netask.cli import main


@pytest.fixture
def files(tmp_path):
    network = tmp_path / "net.txt"
    network.write_text("A -> C\nB -> C\n", encoding="utf-8")
    tasks = tmp_path / "tasks.txt"
    tasks.write_text('node[A].set_attr("x", 1)\nnode[A].get_attr("x")\nnetwork.outlets()\n', encoding="utf-8")
    return tasks, network


def test_run_prints_outputs(files, capsys):
    tasks, network = files
    main([str(tasks), "-n", str(network)])

    out = capsys.readouterr().out
    assert f"--- Running 3 tasks from {tasks} ---" in out
    assert "\n1\n['C']\n" in out
    assert "--- Run Successful ---" in out
    assert "--- Total Execution Time:" in out


def test_print_tasks(files, capsys):
    tasks, network = files
    main([str(tasks), "--network", str(network), "--print-tasks"])

    out = capsys.readouterr().out
    assert 'node[A].set_attr("x", 1)\nnode[A].get_attr("x")\nnetwork.outlets()\n' in out


def test_node_outputs_print_one_node_per_line(files, capsys):
    tasks, network = files
    tasks.write_text("node.name()", encoding="utf-8")
    main([str(tasks), "-n", str(network)])

    assert "A: A\nC: C\nB: B\n" in capsys.readouterr().out


def test_task_error_exits_with_diagnostic(files, capsys):
    tasks, network = files
    tasks.write_text('node[A].set_attr("x", 1)\nnode[Z].name()\n', encoding="utf-8")

    with pytest.raises(SystemExit) as e:
        main([str(tasks), "-n", str(network)])

    assert e.value.code == 1
    err = capsys.readouterr().err
    assert "--- TASK ERROR ---" in err
    assert "Node 'Z' is not in the network." in err
    assert "L2 | node[Z].name()" in err


def test_parse_error_exits_before_running(files, capsys):
    tasks, network = files
    tasks.write_text("node.name()\nnode.f(\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        main([str(tasks), "-n", str(network)])

    captured = capsys.readouterr()
    assert "--- Running" not in captured.out
    assert "Syntax Error" in captured.err


def test_network_file_errors_are_not_quoted_from_the_script(files, capsys):
    tasks, network = files
    network.write_text("A B\n", encoding="utf-8")

    with pytest.raises(SystemExit):
        main([str(tasks), "-n", str(network)])

    err = capsys.readouterr().err
    assert "Invalid connection 'A B'" in err
    assert "L1 |" not in err


def test_missing_network_without_network_flag(files, capsys):
    tasks, _ = files
    with pytest.raises(SystemExit):
        main([str(tasks)])
    assert "No network loaded" in capsys.readouterr().err


def test_missing_tasks_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as e:
        main([str(tmp_path / "absent.txt")])

    assert e.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_tasks_from_stdin(files, monkeypatch, capsys):
    _, network = files
    monkeypatch.setattr("sys.stdin", io.StringIO("network.node_count()"))

    main(["-n", str(network)])

    out = capsys.readouterr().out
    assert "from stdin" in out
    assert "\n3\n" in out


def test_list_functions(capsys):
    main(["--list-functions"])

    out = capsys.readouterr().out
    assert "--- attrs ---" in out
    assert "node.set_attr(name: str, value)" in out
    assert "network.load_network(path: str)" in out


def test_completion(capsys):
    main(["-C", "network"])

    names = capsys.readouterr().out.split()
    assert "load_network" in names
    assert "print_attrs" not in names
    assert names == sorted(names)


def test_function_help_and_code(capsys):
    main(["--fnhelp", "get_attr"])
    assert "Get the value of the attribute `name`." in capsys.readouterr().out

    main(["--fncode", "order"])
    assert "def order(node" in capsys.readouterr().out

    main(["--fnhelp", "no_such_function"])
    assert capsys.readouterr().out == "\n"


def test_directory_as_network_file(files, tmp_path, capsys):
    tasks, _ = files

    with pytest.raises(SystemExit) as e:
        main([str(tasks), "-n", str(tmp_path)])

    assert e.value.code == 1
    err = capsys.readouterr().err
    assert "--- TASK ERROR ---" in err
    assert "Could not read network file" in err


def test_tasks_file_that_is_not_utf8(tmp_path, capsys):
    tasks = tmp_path / "tasks.txt"
    tasks.write_bytes(b"node.f(\"\xff\")\n")

    with pytest.raises(SystemExit) as e:
        main([str(tasks)])

    assert e.value.code == 1
    assert "Could not read tasks file" in capsys.readouterr().err


def test_unexpected_errors_exit_with_a_report(files, monkeypatch, capsys):
    tasks, network = files

    def broken(*args, **kwargs):
        raise RuntimeError("registry exploded")

    monkeypatch.setattr("netask.cli.parse_script", broken)

    with pytest.raises(SystemExit) as e:
        main([str(tasks), "-n", str(network)])

    assert e.value.code == 1
    err = capsys.readouterr().err
    assert "--- UNEXPECTED ERROR ---" in err
    assert "RuntimeError: registry exploded" in err
