"""Check system for the commit gate.

The gate system provides a unified way to define, run, and report
on the checks that decide whether a commit is allowed.
"""

from .result import CheckResult, GateContext, GateFailure, GateRunResult, SummaryRow
from .registry import GateRegistry, register_gate, get_gate, list_gates
from .runner import GateRunner, run_gates

__all__ = [
    "CheckResult",
    "GateContext",
    "GateFailure",
    "GateRunResult",
    "SummaryRow",
    "GateRegistry",
    "register_gate",
    "get_gate",
    "list_gates",
    "GateRunner",
    "run_gates",
]
