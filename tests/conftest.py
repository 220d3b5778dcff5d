"""Shared fixtures: a fake command executor and a prepared repository."""

from pathlib import Path

import pytest

from commitgate.common import GateConfig
from commitgate.errors import ToolInvocationError, tool_invocation_failed
from commitgate.executor import CommandExecutor, CommandOutput


CLEAN_OUTPUTS = {
    "vendor/bin/php-cs-fixer": (0, "Loaded config default.\nno issues\n"),
    "vendor/bin/pint": (0, "  PASS   .......................... 3 files\n"),
    "vendor/bin/phpstan": (0, " [OK] No errors\n"),
    "npm run lint": (0, "> frontend@1.0.0 lint\n> eslint src\n"),
    "npm run format": (0, "src/App.vue 45ms (unchanged)\nsrc/main.js 3ms\n"),
    "npm run build": (0, "vite v5.0.0 building for production...\n✓ built in 2.10s\n"),
    "git diff": (0, "Backend/app/User.php\0Frontend/src/App.vue\0README.md\0"),
    "git add": (0, ""),
}


class FakeExecutor(CommandExecutor):
    """Executor that returns canned output keyed by command prefix."""

    def __init__(self, overrides=None, missing=()):
        self.responses = dict(CLEAN_OUTPUTS)
        self.responses.update(overrides or {})
        self.missing = set(missing)
        self.calls: list[tuple[list[str], Path]] = []

    def _lookup(self, command: list[str]):
        line = " ".join(command)
        for prefix, response in self.responses.items():
            if line.startswith(prefix):
                return prefix, response
        raise AssertionError(f"Unexpected command: {line}")

    def run(self, command, cwd):
        self.calls.append((list(command), Path(cwd)))
        prefix, (returncode, output) = self._lookup(command)
        if prefix in self.missing:
            raise ToolInvocationError(
                tool_invocation_failed(command, str(cwd), "No such file or directory")
            )
        return CommandOutput(
            command=list(command), cwd=str(cwd), returncode=returncode, output=output
        )

    def commands(self) -> list[str]:
        return [" ".join(c) for c, _ in self.calls]

    def tool_calls(self) -> list[str]:
        return [c for c in self.commands() if not c.startswith("git ")]


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Repository with both hook files and both sub-projects."""
    (tmp_path / "pre-commit").write_text("#!/usr/bin/env sh\nexec commitgate run\n")
    hooks = tmp_path / ".git" / "hooks"
    hooks.mkdir(parents=True)
    (hooks / "pre-commit").write_text("#!/usr/bin/env sh\nexec commitgate run\n")
    (tmp_path / "Backend").mkdir()
    (tmp_path / "Frontend").mkdir()
    return tmp_path


@pytest.fixture
def config(repo: Path) -> GateConfig:
    return GateConfig(repo_root=repo)


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()
