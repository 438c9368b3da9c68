import argparse
import sys
import time

from .exceptions import TaskError
from .functions import default_registry
from .network import load_network
from .parser.parser import parse_script
from .parser.classes import Scope
from .context import TaskContext
from .utils import TerminalColors, format_error, format_output


def _list_functions(registry):
    for category, entries in registry.categories().items():
        print(f"{TerminalColors.CYAN}--- {category} ---{TerminalColors.RESET}")
        for entry in entries:
            print(f"{entry.scope.value}.{entry.name}{entry.signature}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run a task script over a network of nodes.")
    parser.add_argument(
        "tasks",
        nargs="?",
        default=None,
        help="The path to the tasks file. Omit to read from stdin.",
    )
    parser.add_argument("-n", "--network", help="The network (connections) file to load before running the tasks.")
    parser.add_argument("-l", "--list-functions", action="store_true", help="List all functions and exit.")
    parser.add_argument("-C", "--completion", choices=[scope.value for scope in Scope], help="List the function names of one scope, one per line, and exit.")
    parser.add_argument("-f", "--fnhelp", metavar="FUNCTION", help="Print the help of a function and exit.")
    parser.add_argument("-c", "--fncode", metavar="FUNCTION", help="Print the code of a function and exit.")
    parser.add_argument("-p", "--print-tasks", action="store_true", help="Print the parsed tasks before running them.")

    args = parser.parse_args(argv)
    registry = default_registry()

    # --- Introspection ---
    if args.fnhelp:
        print(registry.help(args.fnhelp) or "")
        return
    if args.fncode:
        print(registry.code(args.fncode) or "")
        return
    if args.list_functions:
        _list_functions(registry)
        return
    if args.completion:
        for name in registry.names(Scope(args.completion)):
            print(name)
        return

    # --- Input Validation ---
    if not args.tasks and sys.stdin.isatty():
        parser.error("tasks is required when not reading from a pipe.")

    start_time = time.perf_counter()
    script_path_for_display = args.tasks or "stdin"
    script_content = None

    try:
        # --- Read Input ---
        if args.tasks:
            with open(args.tasks, "r", encoding="utf-8") as f:
                script_content = f.read()
        else:
            script_content = sys.stdin.read()

        script = parse_script(script_content, file_path=args.tasks)

        if args.print_tasks:
            for statement in script:
                print(statement.to_source())

        network = load_network(args.network) if args.network else None
        context = TaskContext(network=network, registry=registry)

        print(f"{TerminalColors.CYAN}--- Running {len(script)} tasks from {script_path_for_display} ---{TerminalColors.RESET}")
        for statement in script:
            output = context.execute(statement)
            if output is not None:
                print(format_output(output))

        print(f"\n{TerminalColors.GREEN}--- Run Successful ---{TerminalColors.RESET}")

    # --- Error Handling ---
    except TaskError as e:
        # Errors located in the network file cannot be quoted from the script.
        source = script_content if e.file_path is None or e.file_path == args.tasks else None
        print(
            f"\n{TerminalColors.RED}--- TASK ERROR ---\n{format_error(e, source)}{TerminalColors.RESET}",
            file=sys.stderr,
        )
        sys.exit(1)
    except FileNotFoundError:
        print(
            f"{TerminalColors.RED}ERROR: Tasks file '{script_path_for_display}' not found.{TerminalColors.RESET}",
            file=sys.stderr,
        )
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        print(
            f"{TerminalColors.RED}ERROR: Could not read tasks file '{script_path_for_display}': {type(e).__name__}: {e}{TerminalColors.RESET}",
            file=sys.stderr,
        )
        sys.exit(1)
    except Exception as e:
        print(
            f"\n{TerminalColors.RED}--- UNEXPECTED ERROR ---{TerminalColors.RESET}",
            file=sys.stderr,
        )
        print("This may be a bug in netask. Please report it.", file=sys.stderr)
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)

    finally:
        duration = time.perf_counter() - start_time
        print(f"\n{TerminalColors.CYAN}--- Total Execution Time: {duration:.4f} seconds ---{TerminalColors.RESET}")


if __name__ == "__main__":
    main()
