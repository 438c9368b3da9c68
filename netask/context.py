from typing import Any, Dict, Iterable, List, Optional

from netask.exceptions import ErrorCode, TaskError
from netask.functions import default_registry
from netask.functions.registry import FunctionEntry, FunctionRegistry
from netask.network import Network, NodeView
from netask.parser.classes import Scope, TaskStatement


class TaskContext:
    """
    Holds the state of one script run: the current network (possibly none yet)
    and the registry the statements are dispatched against.

    Statements run one at a time, in order, and every change a statement makes to
    the network is seen by the statements after it. The first failing statement
    ends the run; its TaskError is raised to the caller.
    """

    def __init__(self, network: Optional[Network] = None, registry: Optional[FunctionRegistry] = None):
        self.network = network
        self.functions = registry if registry is not None else default_registry()

    def require_network(self, name: str, scope: Scope = Scope.NETWORK) -> Network:
        """Returns the current network, failing when none is loaded."""
        if self.network is None:
            raise TaskError(ErrorCode.NO_NETWORK_LOADED, scope=scope.value, name=name)
        return self.network

    def run(self, statements: Iterable[TaskStatement]) -> List[Any]:
        """Executes the statements in order and returns their outputs."""
        return [self.execute(statement) for statement in statements]

    def execute(self, statement: TaskStatement) -> Any:
        """Executes a single statement and returns its output (None when it produces nothing)."""
        entry = self.functions.lookup(statement.scope, statement.function)
        if entry is None:
            raise TaskError(ErrorCode.UNKNOWN_FUNCTION, span=statement.span, scope=statement.scope.value, name=statement.function)

        args = statement.positional_values()
        kwargs = statement.keyword_values()

        if statement.scope is Scope.NETWORK:
            self._check_arguments(entry, statement, args, kwargs)
            return self._invoke(entry, statement, self, args, kwargs)

        # --- Node scope: the function runs once per target node ---
        if self.network is None:
            raise TaskError(ErrorCode.NO_NETWORK_LOADED, span=statement.span, scope=statement.scope.value, name=statement.function)

        self._check_arguments(entry, statement, args, kwargs)
        targets = self._select_nodes(statement)
        outputs: Dict[str, Any] = {}
        for node in targets:
            result = self._invoke(entry, statement, node, args, kwargs)
            if result is not None:
                outputs[node.name] = result

        if statement.selection is not None and len(targets) == 1:
            return outputs.get(targets[0].name)
        return outputs or None

    def _select_nodes(self, statement: TaskStatement) -> List[NodeView]:
        if statement.selection is None:
            return list(self.network)
        targets = []
        for name in dict.fromkeys(statement.selection):
            if name not in self.network:
                raise TaskError(ErrorCode.UNKNOWN_NODE, span=statement.span, name=name)
            targets.append(self.network.node(name))
        return targets

    def _check_arguments(self, entry: FunctionEntry, statement: TaskStatement, args: list, kwargs: dict):
        try:
            entry.bind(None, args, kwargs)
        except TypeError as e:
            raise TaskError(ErrorCode.ARGUMENT_MISMATCH, span=statement.span, scope=statement.scope.value, name=statement.function, details=str(e)) from None

    def _invoke(self, entry: FunctionEntry, statement: TaskStatement, target, args: list, kwargs: dict) -> Any:
        try:
            return entry(target, *args, **kwargs)
        except TaskError as e:
            if e.span is not None or e.file_path is not None:
                raise
            # Errors raised without a location are reported at the calling statement.
            raise TaskError(e.code, span=statement.span, **e.details) from e.__cause__
        except Exception as e:
            raise TaskError(
                ErrorCode.FUNCTION_FAILED,
                span=statement.span,
                scope=statement.scope.value,
                name=statement.function,
                details=f"{type(e).__name__}: {e}",
            ) from e
