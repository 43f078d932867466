import json
import logging
import os
from typing import Any, Dict, List, Optional

from .error_reporter import ErrorReporter
from .exceptions import FrontEndError
from .lexer.core.lexer import scan_tokens
from .parser.core.parser import parse
from .utils import FrontEndArtifactEncoder

logger = logging.getLogger(__name__)

STAGES = ("tokens", "ast")


class FrontEndPipeline:
    """
    Runs the front-end stages in order, from source text to AST.
    The artifact of each stage is the input of the next one. Lexing errors do not
    stop the run: the parser still sees the tokens that could be scanned, so a
    single run reports every lexical and syntax error at once.
    """

    def __init__(
        self,
        source_content: str,
        file_path: Optional[str] = None,
        dump_stages: List[str] = [],
        stop_after_stage: Optional[str] = None,
    ):
        self.source_content = source_content
        self.file_path = os.path.abspath(file_path) if file_path else "<stdin>"
        self.dump_stages = dump_stages
        self.stop_after_stage = stop_after_stage
        self.reporter = ErrorReporter()
        self.artifacts: Dict[str, Any] = {}
        self.results: List[Any] = []

    def run(self) -> Any:
        # --- Stage 1: Lexing ---
        # The input is the raw source code content
        self._run_simple_stage("tokens", scan_tokens, self.source_content, self.reporter)
        if self.stop_after_stage == "tokens":
            return self._finish()

        # --- Stage 2: Parsing ---
        # The input is the token list from the previous stage
        result = parse(self.results[-1], self.reporter)
        self._store("ast", result.statements)
        return self._finish()

    def _run_simple_stage(self, name: str, func, *args, **kwargs) -> Any:
        """Runs a single function as a stage, storing and returning its result."""
        result = func(*args, **kwargs)
        self._store(name, result)
        return result

    def _store(self, name: str, result: Any):
        logger.debug(f"Stage '{name}' finished.")
        self.artifacts[name] = result
        self.results.append(result)  # Append to the results chain
        if name in self.dump_stages:
            self.save_artifact(name, result)

    def _finish(self) -> Any:
        if self.reporter.had_error:
            raise FrontEndError(self.reporter.errors, self.file_path)
        return self.results[-1]

    def save_artifact(self, name: str, data: Any):
        """Saves an intermediate artifact to a JSON file with a user-friendly name."""

        if self.file_path == "<stdin>":
            base_name = "stdin_output"
        else:
            base_name = os.path.splitext(self.file_path)[0]

        output_path = f"{base_name}.{name}.json"

        print(f"--- Saving artifact '{name}' to {output_path} ---")

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=False, cls=FrontEndArtifactEncoder)


def run_front_end(
    source_content: str,
    file_path: Optional[str] = None,
    dump_stages: List[str] = [],
    stop_after_stage: Optional[str] = None,
):
    """High-level entry point for the front-end pipeline."""
    pipeline = FrontEndPipeline(source_content, file_path, dump_stages, stop_after_stage)
    return pipeline.run()
