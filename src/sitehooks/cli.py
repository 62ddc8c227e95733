# CLI interface for sitehooks
import argparse
import logging
import os
import sys
from pathlib import Path

from sitehooks import __version__
from sitehooks.config import (
    CONFIG_FILENAME,
    ConfigError,
    HooksConfig,
    find_config_file,
    load_config,
    save_config,
)
from sitehooks.hooks import EVENTS, HOOKS, UnknownEventError, run_event
from sitehooks.models import ConsoleIO, HookEvent, HookResult
from sitehooks.version_gate import detect_tool_version

# ABOUTME: Exit codes
# 0 = success, 1 = tool version too old (raised by the gate), 2 = config error, 3 = fatal
EXIT_SUCCESS = 0
EXIT_VERSION_TOO_OLD = 1
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3

# ABOUTME: Subcommands that run a single hook directly
HOOK_COMMANDS = {
    "scaffold": "create_required_files",
    "check-version": "check_tool_version",
    "clean": "remove_vcs_directories",
    "post-scaffold": "post_scaffold_procedure",
    "sub-profile": "post_scaffold_sub_profile_procedure",
}


def build_event(args: argparse.Namespace, name: str) -> HookEvent:
    """Create the HookEvent for a CLI invocation.

    ABOUTME: Loads --config or the project's own config file
    ABOUTME: Tool version comes from --tool-version, $COMPOSER_VERSION or composer itself
    """
    project_root = Path(args.project_root).resolve()
    config_path = Path(args.config) if args.config else find_config_file(project_root)
    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        raise ConfigError(str(e)) from e

    tool_version = getattr(args, "tool_version", None)
    branch_alias = getattr(args, "branch_alias", None)
    if name in ("check_tool_version", "pre-install-cmd", "pre-update-cmd"):
        tool_version = tool_version or detect_tool_version()
        branch_alias = branch_alias or os.environ.get("COMPOSER_BRANCH_ALIAS_VERSION")

    return HookEvent(
        name=name,
        project_root=project_root,
        io=ConsoleIO(),
        tool_version=tool_version,
        branch_alias=branch_alias,
        config=config,
    )


def print_result(result: HookResult) -> None:
    """Print a one-line summary of a hook run plus touched paths."""
    summary = (
        f"{result.hook}: {len(result.created)} created, {len(result.patched)} patched, "
        f"{len(result.removed)} removed, {len(result.skipped)} skipped"
    )
    print(summary)
    for label, paths in (
        ("created", result.created),
        ("patched", result.patched),
        ("removed", result.removed),
    ):
        for path in paths:
            print(f"  {label}: {path}")


def cmd_run(args: argparse.Namespace) -> int:
    """Execute run command.

    ABOUTME: Dispatches a lifecycle event to its registered hooks
    ABOUTME: Returns exit code based on results
    """
    event = build_event(args, args.event)
    for result in run_event(event):
        print_result(result)
    return EXIT_SUCCESS


def cmd_hook(args: argparse.Namespace) -> int:
    """Execute one of the single-hook commands."""
    hook_name = HOOK_COMMANDS[args.command]
    event = build_event(args, hook_name)

    if hook_name == "remove_vcs_directories":
        result = HOOKS[hook_name](event, dry_run=args.dry_run)
    else:
        result = HOOKS[hook_name](event)

    print_result(result)
    return EXIT_SUCCESS


def cmd_events(args: argparse.Namespace) -> int:
    """Execute events command: list registered events and their hooks."""
    print(f"sitehooks events v{__version__}")
    print()
    for event_name, hook_names in EVENTS.items():
        print(f"  {event_name}")
        for hook_name in hook_names:
            print(f"    - {hook_name}")
    return EXIT_SUCCESS


def cmd_init_config(args: argparse.Namespace) -> int:
    """Execute init-config command.

    ABOUTME: Writes a .sitehooks.toml with every default spelled out
    ABOUTME: Refuses to overwrite an existing file unless --force is given
    """
    path = Path(args.config) if args.config else Path(args.project_root) / CONFIG_FILENAME

    if path.exists() and not args.force:
        print(f"Error: {path} already exists. Use --force to overwrite.")
        return EXIT_CONFIG_ERROR

    save_config(path, HooksConfig())
    print(f"Wrote default config to {path}")
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="sitehooks",
        description="Build lifecycle setup hooks for Drupal projects"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"sitehooks v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every filesystem action"
    )
    parser.add_argument(
        "--project-root", "-C",
        default=".",
        help="Project root containing the web root (default: current directory)"
    )
    parser.add_argument(
        "--config",
        help=f"Config file (default: {CONFIG_FILENAME} or [tool.sitehooks] in pyproject.toml)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the hooks registered for a lifecycle event"
    )
    run_parser.add_argument(
        "event",
        help="Lifecycle event name (see 'sitehooks events')"
    )
    _add_version_arguments(run_parser)

    # single-hook commands
    subparsers.add_parser(
        "scaffold",
        help="Create scaffold directories and default site files"
    )
    check_parser = subparsers.add_parser(
        "check-version",
        help="Fail if the build tool is older than the minimum version"
    )
    _add_version_arguments(check_parser)

    clean_parser = subparsers.add_parser(
        "clean",
        help="Remove .git directories beneath the web root"
    )
    clean_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List what would be removed without deleting"
    )

    subparsers.add_parser(
        "post-scaffold",
        help="Apply robots, .htaccess and development services patches"
    )
    subparsers.add_parser(
        "sub-profile",
        help="Remove the distribution key from the parent profile manifest"
    )

    # events command
    subparsers.add_parser(
        "events",
        help="List lifecycle events and their hooks"
    )

    # init-config command
    init_parser = subparsers.add_parser(
        "init-config",
        help=f"Write a default {CONFIG_FILENAME}"
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file"
    )

    return parser


def _add_version_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--tool-version",
        help="Version of the invoking build tool (default: $COMPOSER_VERSION or composer --version)"
    )
    parser.add_argument(
        "--branch-alias",
        help="Branch alias used when the tool version is a git revision"
    )


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Returns exit code for sys.exit()
    ABOUTME: The version gate exits the process itself with status 1
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s - %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return EXIT_SUCCESS

    try:
        if args.command == "run":
            return cmd_run(args)
        elif args.command in HOOK_COMMANDS:
            return cmd_hook(args)
        elif args.command == "events":
            return cmd_events(args)
        elif args.command == "init-config":
            return cmd_init_config(args)
        else:
            parser.print_help()
            return EXIT_SUCCESS

    except (ConfigError, UnknownEventError) as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except Exception as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
