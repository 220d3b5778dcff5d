"""Check definitions.

This module registers the six checks with the global registry, in
execution order. Import this module to ensure checks are registered.

Each classifier inspects the captured tool output and returns a failure
message, or None when the output is clean. A non-zero exit status is
handled uniformly by the runner and is not repeated here.
"""

from typing import Optional

from ..executor import CommandOutput
from .registry import BACKEND, FRONTEND, register_gate

PHP_CS_FIXER_MARKER = "Found"
PINT_MARKER = "FAIL"
PHPSTAN_OK_MARKER = "[OK] No errors"
ESLINT_MARKER = "✖"  # heavy multiplication x
PRETTIER_ERROR_MARKER = "[error]"
BUILD_MARKER = "ERROR"


def _first_line_with(output: str, marker: str) -> Optional[str]:
    for line in output.splitlines():
        if marker in line:
            return line.strip()
    return None


# =============================================================================
# Backend (PHP)
# =============================================================================


@register_gate(
    gate_id="php-cs-fixer",
    title="PHP-CS-Fixer",
    description="php-cs-fixer over app/ reports no files; any 'Found' line fails.",
    project=BACKEND,
    command=lambda config: ["vendor/bin/php-cs-fixer", "fix", "app", "--diff"],
    suggestion="cd {backend} && vendor/bin/php-cs-fixer fix app",
    aliases=["cs-fixer"],
)
def classify_php_cs_fixer(result: CommandOutput) -> Optional[str]:
    """Fail on the fixer's 'Found N of M files' report."""
    line = _first_line_with(result.output, PHP_CS_FIXER_MARKER)
    if line is not None:
        return f"Code style issues: {line}"
    return None


@register_gate(
    gate_id="pint",
    title="Pint",
    description="Pint in --dirty mode checks uncommitted files; any 'FAIL' fails.",
    project=BACKEND,
    command=lambda config: ["vendor/bin/pint", "--dirty"],
    suggestion="cd {backend} && vendor/bin/pint",
)
def classify_pint(result: CommandOutput) -> Optional[str]:
    if PINT_MARKER in result.output:
        return "Coding standard violations in changed files"
    return None


@register_gate(
    gate_id="phpstan",
    title="PHPStan",
    description="PHPStan analysis must print '[OK] No errors'.",
    project=BACKEND,
    command=lambda config: [
        "vendor/bin/phpstan",
        "analyse",
        f"--memory-limit={config.phpstan_memory}",
    ],
    suggestion="cd {backend} && vendor/bin/phpstan analyse and fix the reported errors",
    aliases=["stan"],
)
def classify_phpstan(result: CommandOutput) -> Optional[str]:
    """Success is positive: the OK banner must be present."""
    if PHPSTAN_OK_MARKER not in result.output:
        return "Static analysis reported errors"
    return None


# =============================================================================
# Frontend (JavaScript)
# =============================================================================


@register_gate(
    gate_id="eslint",
    title="ESLint",
    description="npm run lint reports no problems; the '✖' summary fails.",
    project=FRONTEND,
    command=lambda config: ["npm", "run", "lint"],
    suggestion="cd {frontend} && npm run lint -- --fix",
    aliases=["lint"],
)
def classify_eslint(result: CommandOutput) -> Optional[str]:
    line = _first_line_with(result.output, ESLINT_MARKER)
    if line is not None:
        return f"Lint problems: {line}"
    return None


@register_gate(
    gate_id="prettier",
    title="Prettier",
    description="npm run format exits 0 without '[error]' lines.",
    project=FRONTEND,
    command=lambda config: ["npm", "run", "format"],
    suggestion="cd {frontend} && npm run format and fix the files it cannot parse",
    aliases=["format"],
)
def classify_prettier(result: CommandOutput) -> Optional[str]:
    line = _first_line_with(result.output, PRETTIER_ERROR_MARKER)
    if line is not None:
        return f"Formatter error: {line}"
    return None


@register_gate(
    gate_id="build",
    title="Build",
    description="npm run build output contains no 'ERROR'.",
    project=FRONTEND,
    command=lambda config: ["npm", "run", "build"],
    suggestion="cd {frontend} && npm run build and fix the build errors",
)
def classify_build(result: CommandOutput) -> Optional[str]:
    line = _first_line_with(result.output, BUILD_MARKER)
    if line is not None:
        return f"Build failed: {line}"
    return None
