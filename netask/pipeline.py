import os
from typing import Any, Dict, List, Optional

from netask.context import TaskContext
from netask.functions.registry import FunctionRegistry
from netask.network import Network
from netask.parser.parser import parse
from netask.parser.tokenizer import tokenize

STAGES = ("tokens", "tasks", "run")


class TaskPipeline:
    """
    Orchestrates a script run from source text to outputs.
    The artifact of each stage is passed as input to the next:
    text -> tokens -> task statements -> outputs.
    """

    def __init__(
        self,
        source_content: str,
        file_path: Optional[str] = None,
        network: Optional[Network] = None,
        registry: Optional[FunctionRegistry] = None,
        stop_after_stage: Optional[str] = None,
    ):
        if stop_after_stage is not None and stop_after_stage not in STAGES:
            raise ValueError(f"Unknown stage '{stop_after_stage}'. Expected one of: {', '.join(STAGES)}")
        self.source_content = source_content
        self.file_path = os.path.abspath(file_path) if file_path else None
        self.stop_after_stage = stop_after_stage
        self.context = TaskContext(network=network, registry=registry)
        self.artifacts: Dict[str, Any] = {}
        self.results: List[Any] = []

    def run(self) -> Any:
        """
        Executes the pipeline stage by stage. Any TaskError aborts the run
        at the stage that raised it.
        """
        # --- Stage 1: Tokenizing ---
        self._run_stage("tokens", tokenize, self.source_content, file_path=self.file_path)
        if self.stop_after_stage == "tokens":
            return self.results[-1]

        # --- Stage 2: Parsing ---
        self._run_stage("tasks", parse, self.results[-1], file_path=self.file_path)
        if self.stop_after_stage == "tasks":
            return self.results[-1]

        # --- Stage 3: Execution ---
        self._run_stage("run", self.context.run, self.results[-1])
        return self.results[-1]

    def _run_stage(self, name: str, func, *args, **kwargs) -> Any:
        """Runs a single function as a stage, storing and returning its result."""
        result = func(*args, **kwargs)
        self.artifacts[name] = result
        self.results.append(result)
        return result

    @property
    def network(self) -> Optional[Network]:
        """The network as left by the run."""
        return self.context.network


def run_tasks(
    script_content: str,
    network: Optional[Network] = None,
    file_path: Optional[str] = None,
    registry: Optional[FunctionRegistry] = None,
    stop_after_stage: Optional[str] = None,
):
    """High-level entry point: tokenizes, parses and runs a task script."""
    pipeline = TaskPipeline(script_content, file_path, network, registry, stop_after_stage)
    return pipeline.run()
