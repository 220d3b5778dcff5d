"""Gate result types and dataclasses.

Defines the per-check result, the run context handed to each check,
and the aggregate result of a whole gate run.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..common import GateConfig
from ..executor import CommandExecutor

PASS = "PASS"
FAIL = "FAIL"
ALLOWED = "allowed"
REJECTED = "rejected"


@dataclass
class GateFailure:
    """A single failure within a check."""

    message: str
    suggestion: Optional[str] = None  # Actionable fix suggestion


@dataclass
class GateContext:
    """Context provided to check execution."""

    config: GateConfig
    executor: CommandExecutor


@dataclass
class CheckResult:
    """Result of one check.

    passed starts True and is cleared by the first add_failure call.
    """

    gate_id: str
    title: str
    passed: bool = True
    raw_output: str = ""
    returncode: Optional[int] = None
    duration_ms: int = 0
    failures: list[GateFailure] = field(default_factory=list)

    def add_failure(self, message: str, suggestion: Optional[str] = None) -> None:
        """Add a failure to the result."""
        self.failures.append(GateFailure(message=message, suggestion=suggestion))
        self.passed = False

    @property
    def suggestion(self) -> str:
        """First remediation suggestion, or empty when passing."""
        for failure in self.failures:
            if failure.suggestion:
                return failure.suggestion
        return ""


@dataclass
class SummaryRow:
    """One row of the summary table."""

    check: str
    status: str
    commit: str
    suggestion: str

    @classmethod
    def from_result(cls, result: CheckResult) -> "SummaryRow":
        if result.passed:
            return cls(result.title, PASS, ALLOWED, "-")
        return cls(result.title, FAIL, REJECTED, result.suggestion or "-")

    def to_dict(self) -> dict:
        return {
            "check": self.check,
            "status": self.status,
            "commit": self.commit,
            "suggestion": self.suggestion,
        }


@dataclass
class GateRunResult:
    """Result of running every check."""

    allowed: bool
    results: list[CheckResult] = field(default_factory=list)
    restaged: list[str] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def passed_count(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def summary(self) -> list[SummaryRow]:
        """Summary table rows in execution order."""
        return [SummaryRow.from_result(r) for r in self.results]

    @property
    def exit_code(self) -> int:
        return 0 if self.allowed else 1
