"""Centralized error handling for CommitGate.

This module provides:
- Standard error codes
- A structured error record for fatal errors
- Exceptions raised at the process, git and hook seams
- Factory functions for consistent error reporting
"""

import sys
from dataclasses import dataclass, field
from typing import Optional

from .ui.format import ColorMode, format_error


# =============================================================================
# Error Codes
# =============================================================================

# Hook errors
HOOK_NOT_FOUND = "HOOK_NOT_FOUND"
NOT_A_GIT_REPO = "NOT_A_GIT_REPO"

# Process errors
TOOL_INVOCATION_FAILED = "TOOL_INVOCATION_FAILED"
GIT_COMMAND_FAILED = "GIT_COMMAND_FAILED"

# Gate errors
GATE_NOT_FOUND = "GATE_NOT_FOUND"

# Generic errors
INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Error Envelope
# =============================================================================


@dataclass
class CommitGateError:
    """Structured error.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message.
        hints: Actionable suggestions for resolving the error.
        details: Context-specific error details.
    """

    code: str
    message: str
    hints: list[str] = field(default_factory=list)
    details: dict = field(default_factory=dict)


# =============================================================================
# Exceptions
# =============================================================================


class CommitGateException(Exception):
    """Base exception carrying an error envelope."""

    def __init__(self, error: CommitGateError):
        self.error = error
        super().__init__(error.message)


class PreconditionError(CommitGateException):
    """Raised when a required hook file is missing."""


class ToolInvocationError(CommitGateException):
    """Raised when an external tool cannot be started at all."""


class GitError(CommitGateException):
    """Raised when a git command fails."""


# =============================================================================
# Factory Functions
# =============================================================================


def hook_not_found(path: str, role: str) -> CommitGateError:
    """Create error for a missing hook file."""
    return CommitGateError(
        code=HOOK_NOT_FOUND,
        message=f"{role} not found: {path}",
        hints=[
            "Run: commitgate install",
            "Check that you are at the repository root",
        ],
        details={"path": path, "role": role},
    )


def not_a_git_repo(path: str) -> CommitGateError:
    """Create error for a directory without .git/hooks."""
    return CommitGateError(
        code=NOT_A_GIT_REPO,
        message=f"Not a git repository: {path}",
        hints=["Run: git init", "Pass --repo <path> to point at the repository"],
        details={"path": path},
    )


def tool_invocation_failed(
    command: list[str], cwd: str, reason: str
) -> CommitGateError:
    """Create error for a tool that could not be started."""
    return CommitGateError(
        code=TOOL_INVOCATION_FAILED,
        message=f"Could not run '{' '.join(command)}' in {cwd}: {reason}",
        hints=[
            "Install the sub-project dependencies (composer install / npm install)",
            "Check that the sub-project directory exists",
        ],
        details={"command": command, "cwd": cwd, "reason": reason},
    )


def git_command_failed(
    command: list[str], returncode: int, output: str
) -> CommitGateError:
    """Create error for a failed git command."""
    return CommitGateError(
        code=GIT_COMMAND_FAILED,
        message=f"git command failed ({returncode}): {' '.join(command)}",
        hints=["Check that the repository is not locked by another git process"],
        details={"command": command, "returncode": returncode, "output": output},
    )


def gate_not_found(
    gate_id: str, suggestions: Optional[list[str]] = None
) -> CommitGateError:
    """Create error for an unknown gate."""
    hints = ["Run: commitgate gate-list"]
    if suggestions:
        hints.insert(0, f"Did you mean: {', '.join(suggestions)}?")
    return CommitGateError(
        code=GATE_NOT_FOUND,
        message=f"Unknown gate '{gate_id}'",
        hints=hints,
        details={"gate_id": gate_id},
    )


def internal_error(message: str, details: Optional[dict] = None) -> CommitGateError:
    """Create internal error."""
    return CommitGateError(
        code=INTERNAL_ERROR,
        message=f"Internal error: {message}",
        hints=["Please report this issue"],
        details=details or {},
    )


def print_error(
    error: CommitGateError,
    color_mode: ColorMode = ColorMode.AUTO,
    file=None,
) -> None:
    """Print error as text: a red headline, then plain hint lines.

    Args:
        error: The error to print.
        color_mode: Color output mode for the headline.
        file: Output file (default: stderr).
    """
    if file is None:
        file = sys.stderr
    print(format_error(error.message, color_mode), file=file)
    for hint in error.hints:
        print(f"  Hint: {hint}", file=file)
