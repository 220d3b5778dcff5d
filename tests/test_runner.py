"""Tests for the gate runner.

Tests cover:
- Execution order and working directories
- Aggregate allow/block decision
- No short-circuit on findings
- Uniform handling of non-zero exit status
- Fatal invocation and precondition errors
- Re-staging on success only
"""

import pytest

from commitgate.errors import (
    GitError,
    PreconditionError,
    ToolInvocationError,
    HOOK_NOT_FOUND,
)
from commitgate.gates.registry import get_registry
from commitgate.gates.result import FAIL, PASS, REJECTED
from commitgate.gates.runner import GateRunner, run_gates

from conftest import FakeExecutor


EXPECTED_ORDER = ["php-cs-fixer", "pint", "phpstan", "eslint", "prettier", "build"]


class TestExecution:
    """Tests for check ordering and invocation."""

    def test_registry_order(self):
        """Checks are registered in the required order."""
        ids = [g.gate_id for g in get_registry().list_all()]
        assert ids == EXPECTED_ORDER

    def test_runs_every_check_in_order(self, config, executor):
        """All six tools run, in order, after reading the index."""
        result = GateRunner(config, executor).run()

        assert [r.gate_id for r in result.results] == EXPECTED_ORDER
        assert executor.commands()[0].startswith("git diff --cached")
        assert executor.tool_calls() == [
            "vendor/bin/php-cs-fixer fix app --diff",
            "vendor/bin/pint --dirty",
            "vendor/bin/phpstan analyse --memory-limit=2G",
            "npm run lint",
            "npm run format",
            "npm run build",
        ]

    def test_working_directories(self, config, executor, repo):
        """Backend tools run in Backend/, frontend tasks in Frontend/."""
        GateRunner(config, executor).run()

        cwds = {" ".join(c): cwd for c, cwd in executor.calls}
        assert cwds["vendor/bin/pint --dirty"] == repo / "Backend"
        assert cwds["npm run build"] == repo / "Frontend"
        assert cwds["git add -- Backend/app/User.php Frontend/src/App.vue"] == repo

    def test_phpstan_memory_from_config(self, config, executor):
        """PHPStan memory limit comes from configuration."""
        GateRunner(config.with_overrides(phpstan_memory="512M"), executor).run()
        assert "vendor/bin/phpstan analyse --memory-limit=512M" in executor.tool_calls()

    def test_callbacks(self, config, executor):
        """Start and done callbacks fire once per check."""
        started, done = [], []
        GateRunner(config, executor).run(
            on_check_start=lambda g, i, n: started.append((g.gate_id, i, n)),
            on_check_done=lambda g, r: done.append(r.passed),
        )
        assert started[0] == ("php-cs-fixer", 1, 6)
        assert started[-1] == ("build", 6, 6)
        assert done == [True] * 6


class TestDecision:
    """Tests for the aggregate decision."""

    def test_all_clean_allows_commit(self, config, executor):
        """Clean output everywhere allows the commit and re-stages files."""
        result = run_gates(config, executor)

        assert result.allowed is True
        assert result.exit_code == 0
        assert [row.status for row in result.summary] == [PASS] * 6
        assert result.restaged == ["Backend/app/User.php", "Frontend/src/App.vue"]
        assert "git add -- Backend/app/User.php Frontend/src/App.vue" in executor.commands()

    def test_php_cs_fixer_found_blocks(self, config):
        """'Found 2 of 10 files' fails the fixer row and the commit."""
        executor = FakeExecutor(
            {"vendor/bin/php-cs-fixer": (0, "Found 2 of 10 files that can be fixed\n")}
        )
        result = run_gates(config, executor)

        row = result.summary[0]
        assert row.check == "PHP-CS-Fixer"
        assert row.status == FAIL
        assert row.commit == REJECTED
        assert "php-cs-fixer fix app" in row.suggestion
        assert result.exit_code == 1

    def test_phpstan_ok_passes(self, config):
        """Exactly '[OK] No errors' is a pass."""
        executor = FakeExecutor({"vendor/bin/phpstan": (0, "[OK] No errors")})
        result = run_gates(config, executor)
        assert result.results[2].passed is True

    def test_eslint_marker_blocks(self, config):
        executor = FakeExecutor(
            {"npm run lint": (0, "12 problems (3 errors, 9 warnings) ✖\n")}
        )
        result = run_gates(config, executor)

        assert result.summary[3].status == FAIL
        assert result.allowed is False

    def test_build_error_blocks_and_skips_restage(self, config):
        """A build ERROR blocks the commit and nothing is re-staged."""
        executor = FakeExecutor(
            {"npm run build": (0, "ERROR: Module not found: 'lodash'\n")}
        )
        result = run_gates(config, executor)

        assert result.summary[5].status == FAIL
        assert result.allowed is False
        assert result.restaged == []
        assert not any(c.startswith("git add") for c in executor.commands())

    @pytest.mark.parametrize("index", range(6))
    def test_any_single_failure_blocks(self, config, index):
        """One failing check blocks regardless of the other five."""
        prefix = [
            "vendor/bin/php-cs-fixer",
            "vendor/bin/pint",
            "vendor/bin/phpstan",
            "npm run lint",
            "npm run format",
            "npm run build",
        ][index]
        executor = FakeExecutor({prefix: (1, "")})
        result = run_gates(config, executor)

        assert result.exit_code == 1
        assert result.failed_count == 1
        assert not result.results[index].passed

    def test_findings_do_not_short_circuit(self, config):
        """Every check runs even after an early failure."""
        executor = FakeExecutor(
            {
                "vendor/bin/php-cs-fixer": (0, "Found 1 of 3 files"),
                "vendor/bin/pint": (1, "  FAIL  app/User.php"),
            }
        )
        result = run_gates(config, executor)

        assert len(executor.tool_calls()) == 6
        assert result.failed_count == 2
        assert result.passed_count == 4


class TestExitStatus:
    """Non-zero exit status is a finding for every check."""

    def test_nonzero_exit_is_finding(self, config):
        executor = FakeExecutor({"vendor/bin/php-cs-fixer": (8, "no issues")})
        result = run_gates(config, executor)

        check = result.results[0]
        assert check.passed is False
        assert check.returncode == 8
        assert "exited with status 8" in check.failures[0].message
        assert len(executor.tool_calls()) == 6

    def test_prettier_exit_status(self, config):
        """Prettier is classified on exit status, not on trailing letters."""
        executor = FakeExecutor({"npm run format": (2, "src/broken.js\n")})
        result = run_gates(config, executor)
        assert result.results[4].passed is False

    def test_prettier_file_list_is_clean(self, config):
        """A file list with timings no longer counts as a failure."""
        executor = FakeExecutor({"npm run format": (0, "src/a.js 10ms\nsrc/b.vue 4ms\n")})
        result = run_gates(config, executor)
        assert result.results[4].passed is True

    def test_finding_and_exit_both_recorded(self, config):
        executor = FakeExecutor({"npm run lint": (1, "✖ 2 problems")})
        result = run_gates(config, executor)

        lint = result.results[3]
        assert lint.gate_id == "eslint"
        assert lint.returncode == 1
        assert [f.message for f in lint.failures] == [
            "ESLint exited with status 1",
            "Lint problems: ✖ 2 problems",
        ]
        assert lint.failures[0].suggestion == "cd Frontend && npm run lint -- --fix"


class TestFatalErrors:
    """Tests for errors that abort the run."""

    def test_missing_hook_script(self, config, executor, repo):
        """A missing hook script aborts before any command."""
        (repo / "pre-commit").unlink()

        with pytest.raises(PreconditionError) as exc_info:
            GateRunner(config, executor).run()

        assert exc_info.value.error.code == HOOK_NOT_FOUND
        assert executor.calls == []

    def test_missing_installed_hook(self, config, executor, repo):
        (repo / ".git" / "hooks" / "pre-commit").unlink()

        with pytest.raises(PreconditionError):
            GateRunner(config, executor).run()
        assert executor.calls == []

    def test_missing_tool_aborts(self, config):
        """A tool that cannot start stops the remaining checks."""
        executor = FakeExecutor(missing={"vendor/bin/phpstan"})

        with pytest.raises(ToolInvocationError):
            GateRunner(config, executor).run()

        assert executor.tool_calls()[-1].startswith("vendor/bin/phpstan")
        assert "npm run lint" not in executor.tool_calls()

    def test_git_error(self, config):
        executor = FakeExecutor({"git diff": (128, "fatal: not a git repository")})

        with pytest.raises(GitError):
            GateRunner(config, executor).run()
        assert executor.tool_calls() == []
