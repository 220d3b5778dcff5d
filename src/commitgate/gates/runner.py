"""Gate runner for executing every check and deciding the commit.

The runner checks hook preconditions, reads the staged files, runs each
registered check in order, and re-stages files when all checks pass.
"""

import logging
import time
from typing import Callable, Optional

from ..common import GateConfig
from ..executor import CommandExecutor
from ..hook import check_preconditions
from ..staging import read_staged_files, restage_files
from .registry import GateDefinition, GateRegistry, get_registry
from .result import CheckResult, GateContext, GateRunResult

# Ensure checks are registered
from . import definitions  # noqa: F401

log = logging.getLogger(__name__)

CheckStartCallback = Callable[[GateDefinition, int, int], None]
CheckDoneCallback = Callable[[GateDefinition, CheckResult], None]


class GateRunner:
    """Executes checks and produces the commit decision."""

    def __init__(
        self,
        config: GateConfig,
        executor: Optional[CommandExecutor] = None,
        registry: Optional[GateRegistry] = None,
    ):
        """Initialize the runner.

        Args:
            config: Gate configuration.
            executor: Command executor (default: CommandExecutor()).
            registry: Check registry (default: the global registry).
        """
        self.config = config
        self.executor = executor or CommandExecutor()
        self.registry = registry or get_registry()

    def run_check(self, gate: GateDefinition, ctx: GateContext) -> CheckResult:
        """Run a single check.

        A non-zero exit status and a classifier finding are both recorded
        as failures; neither stops the run.

        Raises:
            ToolInvocationError: If the tool could not be started.
        """
        command = gate.command(ctx.config)
        output = ctx.executor.run(command, gate.workdir(ctx.config))

        result = CheckResult(
            gate_id=gate.gate_id,
            title=gate.title,
            raw_output=output.output,
            returncode=output.returncode,
            duration_ms=output.duration_ms,
        )
        suggestion = gate.suggestion_for(ctx.config)

        if not output.ok:
            result.add_failure(
                message=f"{gate.title} exited with status {output.returncode}",
                suggestion=suggestion,
            )

        finding = gate.classify(output)
        if finding:
            result.add_failure(message=finding, suggestion=suggestion)

        log.debug(f"{gate.gate_id}: {'PASS' if result.passed else 'FAIL'}")
        return result

    def run(
        self,
        on_check_start: Optional[CheckStartCallback] = None,
        on_check_done: Optional[CheckDoneCallback] = None,
    ) -> GateRunResult:
        """Run every check and decide whether the commit is allowed.

        Args:
            on_check_start: Called with (gate, index, total) before a check.
            on_check_done: Called with (gate, result) after a check.

        Returns:
            GateRunResult with per-check results and the decision.

        Raises:
            PreconditionError: If a hook file is missing.
            ToolInvocationError: If a tool could not be started.
            GitError: If reading or updating the index fails.
        """
        check_preconditions(self.config)

        start = time.perf_counter()
        staged = read_staged_files(self.config.repo_root, self.executor)
        ctx = GateContext(config=self.config, executor=self.executor)

        gates = self.registry.list_all()
        results: list[CheckResult] = []
        all_passed = True

        for index, gate in enumerate(gates, start=1):
            if on_check_start:
                on_check_start(gate, index, len(gates))

            result = self.run_check(gate, ctx)
            results.append(result)
            if not result.passed:
                all_passed = False

            if on_check_done:
                on_check_done(gate, result)

        restaged: list[str] = []
        if all_passed:
            restaged = restage_files(
                self.config.repo_root, staged.restageable, self.executor
            )

        end = time.perf_counter()

        return GateRunResult(
            allowed=all_passed,
            results=results,
            restaged=restaged,
            duration_ms=int((end - start) * 1000),
        )


def run_gates(
    config: GateConfig,
    executor: Optional[CommandExecutor] = None,
    on_check_start: Optional[CheckStartCallback] = None,
    on_check_done: Optional[CheckDoneCallback] = None,
) -> GateRunResult:
    """Convenience function to run every check.

    Args:
        config: Gate configuration.
        executor: Command executor.
        on_check_start: Progress callback before each check.
        on_check_done: Progress callback after each check.

    Returns:
        GateRunResult.
    """
    runner = GateRunner(config, executor)
    return runner.run(on_check_start, on_check_done)
