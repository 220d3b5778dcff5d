"""Gate registry for defining and looking up checks.

The registry is the single source of truth for the checks a run
executes. Checks run in registration order.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional
import difflib

from ..common import GateConfig
from ..executor import CommandOutput

BACKEND = "backend"
FRONTEND = "frontend"

# Returns a failure message, or None when the output is clean
Classifier = Callable[[CommandOutput], Optional[str]]
CommandBuilder = Callable[[GateConfig], list[str]]


@dataclass
class GateDefinition:
    """Definition of a check in the registry."""

    gate_id: str
    title: str
    description: str
    project: str  # BACKEND or FRONTEND
    command: CommandBuilder
    classify: Classifier
    suggestion: str
    aliases: list[str] = field(default_factory=list)

    def workdir(self, config: GateConfig) -> Path:
        """Working directory for this check."""
        if self.project == BACKEND:
            return config.backend_path
        return config.frontend_path

    def suggestion_for(self, config: GateConfig) -> str:
        """Remediation text with the configured sub-project directories."""
        return self.suggestion.format(
            backend=config.backend_dir, frontend=config.frontend_dir
        )

    def to_dict(self, config: Optional[GateConfig] = None) -> dict:
        """Convert to dictionary for listing."""
        config = config or GateConfig(repo_root=Path("."))
        return {
            "gate_id": self.gate_id,
            "title": self.title,
            "description": self.description,
            "project": self.project,
            "command": self.command(config),
            "suggestion": self.suggestion_for(config),
            "aliases": self.aliases,
        }


class GateRegistry:
    """Central registry for all checks."""

    def __init__(self):
        self._gates: dict[str, GateDefinition] = {}
        self._aliases: dict[str, str] = {}  # alias -> canonical_id

    def register(
        self,
        gate_id: str,
        title: str,
        description: str,
        project: str,
        command: CommandBuilder,
        classify: Classifier,
        suggestion: str,
        aliases: Optional[list[str]] = None,
    ) -> None:
        """Register a check.

        Args:
            gate_id: Canonical identifier (e.g., php-cs-fixer).
            title: Name shown in the summary table.
            description: Full description with the pass criteria.
            project: BACKEND or FRONTEND.
            command: Builds the command line from configuration.
            classify: Maps captured output to a failure message or None.
            suggestion: Remediation shown when the check fails.
            aliases: Optional short aliases.
        """
        if gate_id in self._gates:
            raise ValueError(f"Gate already registered: {gate_id}")
        if project not in (BACKEND, FRONTEND):
            raise ValueError(f"Unknown project for {gate_id}: {project}")

        gate = GateDefinition(
            gate_id=gate_id,
            title=title,
            description=description,
            project=project,
            command=command,
            classify=classify,
            suggestion=suggestion,
            aliases=aliases or [],
        )
        self._gates[gate_id] = gate

        for alias in gate.aliases:
            if alias in self._aliases:
                raise ValueError(f"Alias already registered: {alias}")
            self._aliases[alias] = gate_id

    def get(self, gate_id_or_alias: str) -> Optional[GateDefinition]:
        """Get a check by ID or alias.

        Args:
            gate_id_or_alias: Gate ID or alias.

        Returns:
            GateDefinition or None if not found.
        """
        if gate_id_or_alias in self._gates:
            return self._gates[gate_id_or_alias]

        canonical_id = self._aliases.get(gate_id_or_alias)
        if canonical_id:
            return self._gates.get(canonical_id)

        return None

    def list_all(self) -> list[GateDefinition]:
        """List all checks in execution order."""
        return list(self._gates.values())

    def suggest_similar(self, unknown_id: str, limit: int = 3) -> list[str]:
        """Suggest similar gate IDs for typos.

        Args:
            unknown_id: The unknown gate ID.
            limit: Maximum suggestions.

        Returns:
            List of similar gate IDs.
        """
        all_ids = list(self._gates.keys()) + list(self._aliases.keys())
        return difflib.get_close_matches(unknown_id, all_ids, n=limit, cutoff=0.4)


# Global registry instance
_registry = GateRegistry()


def register_gate(
    gate_id: str,
    title: str,
    description: str,
    project: str,
    command: CommandBuilder,
    suggestion: str,
    aliases: Optional[list[str]] = None,
) -> Callable:
    """Decorator to register a classifier as a check.

    Usage:
        @register_gate(
            gate_id="build",
            title="Build",
            description="Frontend build output contains no ERROR.",
            project=FRONTEND,
            command=lambda config: ["npm", "run", "build"],
            suggestion="cd {frontend} && npm run build",
        )
        def classify_build(result: CommandOutput) -> Optional[str]:
            ...
    """

    def decorator(func: Classifier) -> Classifier:
        _registry.register(
            gate_id=gate_id,
            title=title,
            description=description,
            project=project,
            command=command,
            classify=func,
            suggestion=suggestion,
            aliases=aliases,
        )
        return func

    return decorator


def get_gate(gate_id_or_alias: str) -> Optional[GateDefinition]:
    """Get a check from the global registry."""
    return _registry.get(gate_id_or_alias)


def list_gates() -> list[GateDefinition]:
    """List all checks from the global registry."""
    return _registry.list_all()


def get_registry() -> GateRegistry:
    """Get the global registry instance."""
    return _registry
