"""CommitGate: a pre-commit gate for PHP backend and JavaScript frontend checks."""

__version__ = "0.1.0"
