"""External command execution.

Commands run synchronously with stderr merged into stdout, so the
captured text matches what the tool would print to a terminal. No
timeout is applied.
"""

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

from .errors import ToolInvocationError, tool_invocation_failed

log = logging.getLogger(__name__)


@dataclass
class CommandOutput:
    """Captured result of one external command."""

    command: list[str]
    cwd: str
    returncode: int
    output: str
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandExecutor:
    """Runs external commands and captures their text output."""

    def run(self, command: list[str], cwd: Path) -> CommandOutput:
        """Run a command to completion.

        Args:
            command: Program and arguments.
            cwd: Working directory.

        Returns:
            CommandOutput with exit status and merged stdout/stderr.

        Raises:
            ToolInvocationError: If the process could not be started.
        """
        log.debug(f"Running: {' '.join(command)} (cwd={cwd})")
        start = time.perf_counter()
        try:
            proc = subprocess.run(
                command,
                cwd=str(cwd),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            # Missing executable, missing cwd, or no permission to run
            log.error(f"Could not start {command[0]}: {e}")
            raise ToolInvocationError(
                tool_invocation_failed(command, str(cwd), str(e))
            ) from e

        duration_ms = int((time.perf_counter() - start) * 1000)
        log.debug(f"Exit {proc.returncode} after {duration_ms}ms: {' '.join(command)}")

        return CommandOutput(
            command=list(command),
            cwd=str(cwd),
            returncode=proc.returncode,
            output=proc.stdout or "",
            duration_ms=duration_ms,
        )
