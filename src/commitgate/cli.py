"""Command-line interface for CommitGate."""

import argparse
import json
import logging
import sys
from typing import Optional

from . import __version__
from .common import GateConfig
from .errors import CommitGateException, gate_not_found, internal_error, print_error
from .executor import CommandExecutor
from .ui.format import (
    ColorMode,
    format_decision,
    format_step_banner,
    render_summary,
)

log = logging.getLogger(__name__)

COMMANDS = ("run", "install", "gate-list", "gate-explain")


def _config_from_args(args: argparse.Namespace) -> GateConfig:
    """Environment configuration with CLI overrides applied."""
    return GateConfig.from_env().with_overrides(
        repo_root=getattr(args, "repo", None),
        backend_dir=getattr(args, "backend", None),
        frontend_dir=getattr(args, "frontend", None),
        phpstan_memory=getattr(args, "phpstan_memory", None),
        hook_script=getattr(args, "hook_script", None),
    )


def _log_level(config: GateConfig, verbose: bool) -> int:
    """Numeric log level; unknown names fall back to WARNING."""
    if verbose:
        return logging.DEBUG
    level = logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        return logging.WARNING
    return level


def _configure_logging(config: GateConfig, verbose: bool) -> None:
    logging.basicConfig(
        level=_log_level(config, verbose),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def cmd_run(args: argparse.Namespace, executor: Optional[CommandExecutor] = None) -> int:
    """Handle the run command."""
    from .gates.runner import GateRunner

    config = _config_from_args(args)
    color = ColorMode(args.color)

    def on_check_start(gate, index, total):
        print(format_step_banner(index, total, gate.title, color))

    def on_check_done(gate, result):
        if result.raw_output:
            print(result.raw_output.rstrip("\n"))
        print()

    runner = GateRunner(config, executor)
    try:
        result = runner.run(on_check_start, on_check_done)
    except CommitGateException as e:
        log.error(f"Gate run aborted: {e.error.code}")
        print_error(e.error, color)
        return 1

    print(render_summary(result.summary, color))
    print(
        f"{result.passed_count}/{len(result.results)} checks passed "
        f"({result.duration_ms}ms)."
    )
    if result.restaged:
        print(f"Re-staged {len(result.restaged)} files.")
    print(format_decision(result.allowed, color))

    return result.exit_code


def cmd_install(args: argparse.Namespace, executor: Optional[CommandExecutor] = None) -> int:
    """Handle the install command."""
    from .hook import install_hook

    config = _config_from_args(args)
    try:
        written = install_hook(config, force=args.force)
    except CommitGateException as e:
        print_error(e.error, ColorMode(args.color))
        return 1

    for path in written:
        print(f"  ✅ Installed: {path}")
    return 0


def cmd_gate_list(args: argparse.Namespace, executor: Optional[CommandExecutor] = None) -> int:
    """Handle the gate list command."""
    from .gates.registry import get_registry
    from .gates import definitions  # noqa: F401

    config = _config_from_args(args)
    gates = get_registry().list_all()

    if args.json:
        print(json.dumps([g.to_dict(config) for g in gates], indent=2, ensure_ascii=False))
        return 0

    print(f"{'#':<3} {'ID':<15} {'PROJECT':<10} {'TITLE':<20}")
    print("-" * 50)
    for index, gate in enumerate(gates, start=1):
        print(f"{index:<3} {gate.gate_id:<15} {gate.project:<10} {gate.title:<20}")

    print(f"\nTotal: {len(gates)} checks")
    return 0


def cmd_gate_explain(args: argparse.Namespace, executor: Optional[CommandExecutor] = None) -> int:
    """Handle the gate explain command."""
    from .gates.registry import get_registry
    from .gates import definitions  # noqa: F401

    config = _config_from_args(args)
    registry = get_registry()
    gate = registry.get(args.gate_id)

    if gate is None:
        suggestions = registry.suggest_similar(args.gate_id)
        print_error(gate_not_found(args.gate_id, suggestions), ColorMode(args.color))
        return 1

    print(f"Gate: {gate.gate_id}")
    print(f"Title: {gate.title}")
    print(f"Project: {gate.project} ({gate.workdir(config)})")
    print(f"Command: {' '.join(gate.command(config))}")
    print("\nDescription:")
    print(f"  {gate.description}")
    print(f"\nSuggestion: {gate.suggestion_for(config)}")
    if gate.aliases:
        print(f"Aliases: {', '.join(gate.aliases)}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--repo", help="Repository root (default: current directory)")
    common.add_argument("--backend", help="Backend sub-project directory")
    common.add_argument("--frontend", help="Frontend sub-project directory")
    common.add_argument("--phpstan-memory", help="PHPStan memory limit (e.g. 2G)")
    common.add_argument("--hook-script", help="Tracked hook script path")
    common.add_argument(
        "--color",
        choices=[m.value for m in ColorMode],
        default=ColorMode.AUTO.value,
        help="Color output",
    )
    common.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    parser = argparse.ArgumentParser(
        prog="commitgate",
        description="Pre-commit gate for PHP backend and JavaScript frontend checks",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # run command
    run_parser = subparsers.add_parser(
        "run", parents=[common], help="Run all checks (default)"
    )
    run_parser.set_defaults(func=cmd_run)

    # install command
    install_parser = subparsers.add_parser(
        "install", parents=[common], help="Install the git pre-commit hook"
    )
    install_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing hook script"
    )
    install_parser.set_defaults(func=cmd_install)

    # gate list command
    gate_list_parser = subparsers.add_parser(
        "gate-list", parents=[common], help="List checks in execution order"
    )
    gate_list_parser.add_argument("--json", action="store_true", help="Output as JSON")
    gate_list_parser.set_defaults(func=cmd_gate_list)

    # gate explain command
    gate_explain_parser = subparsers.add_parser(
        "gate-explain", parents=[common], help="Explain a check"
    )
    gate_explain_parser.add_argument("gate_id", help="Gate ID or alias")
    gate_explain_parser.set_defaults(func=cmd_gate_explain)

    return parser


def _normalize_argv(argv: list[str]) -> list[str]:
    """Put the subcommand first, inserting 'run' when there is none."""
    for index, arg in enumerate(argv):
        if arg in COMMANDS:
            return [arg] + argv[:index] + argv[index + 1 :]
    if argv and argv[0] in ("-h", "--help", "--version"):
        return argv
    return ["run"] + argv


def main(
    argv: Optional[list[str]] = None,
    executor: Optional[CommandExecutor] = None,
) -> int:
    """Main entry point.

    With no subcommand, behaves as 'run' so the hook can call it bare.
    Options may come before or after the subcommand.
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = _normalize_argv(list(argv))

    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(_config_from_args(args), args.verbose)

    try:
        return args.func(args, executor)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        # Unexpected failure still blocks the commit
        log.exception("Unhandled error")
        print_error(internal_error(str(e)), ColorMode(args.color))
        return 1


if __name__ == "__main__":
    sys.exit(main())
