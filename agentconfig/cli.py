"""Click-based CLI for agentconfig - one source of truth for AI coding agent configs.

Keeps agent configuration files in a single source root and mirrors them
into each agent's expected location, as symlinks or copies.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from agentconfig import __version__
from agentconfig.config import init_config, load_config, validate_config_file
from agentconfig.config.schema import Scope, SyncMode
from agentconfig.errors import AgentConfigError, ExitCode
from agentconfig.output import Console, create_console
from agentconfig.sync import ConflictPolicy, SyncOptions, get_status, sync_configs
from agentconfig.utils.paths import PathContext, resolve_absolute
from agentconfig.utils.platform import can_create_symlinks, get_current_platform

DEFAULT_ROOT = "~/.agentconfig"

POLICY_CHOICE = click.Choice([policy.value for policy in ConflictPolicy])


def _is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def _fail(console: Console, error: AgentConfigError) -> NoReturn:
    console.print_error(error.message)
    sys.exit(int(error.code))


@click.group()
@click.version_option(version=__version__, prog_name="agentconfig")
@click.option(
    "--root",
    envvar="AGENTCONFIG_HOME",
    default=DEFAULT_ROOT,
    show_default=True,
    help="Source root holding agentconfig.yml and the shared config files",
)
@click.pass_context
def cli(ctx: click.Context, root: str) -> None:
    """agentconfig - sync AI coding agent configs from one source root.

    \b
    Source root: ~/.agentconfig/   (override with --root or AGENTCONFIG_HOME)
    Targets:     ~/.claude, ~/.codex, ~/.cursor, ~/.config/opencode, ...
    """
    context = PathContext.from_environment()
    ctx.ensure_object(dict)
    ctx.obj["context"] = context
    ctx.obj["root"] = resolve_absolute(root, context)


@cli.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing agentconfig.yml")
@click.option("--on-conflict", type=POLICY_CHOICE, help="What to do if agentconfig.yml already exists")
@click.pass_context
def init(ctx: click.Context, force: bool, on_conflict: Optional[str]) -> None:
    """Create agentconfig.yml and the source directory layout."""
    console = create_console()
    root: Path = ctx.obj["root"]

    try:
        result = init_config(root, conflict_policy=on_conflict, force=force)
    except AgentConfigError as e:
        _fail(console, e)

    if result.action == "skipped":
        console.print_info(f"Config already exists, skipped: {result.config_path}")
        return

    if result.backup_path:
        console.print_info(f"Backed up previous config to {result.backup_path}")

    verb = "Created" if result.action == "created" else "Overwrote"
    console.print_success(f"{verb} config at {result.config_path}")


@cli.command()
@click.option("--project", "project", type=click.Path(), help="Use project mode with this project root")
@click.option("--dry-run", "-n", is_flag=True, help="Preview changes without applying")
@click.option("--link", "mode", flag_value=SyncMode.LINK.value, help="Create symlinks to the source files")
@click.option("--copy", "mode", flag_value=SyncMode.COPY.value, help="Copy the source files")
@click.option("--force", "-f", is_flag=True, help="Replace existing targets without asking")
@click.option("--agent", "agent", help="Only sync this agent")
@click.option("--profile", help="Profile whose extra mappings are added")
@click.option("--strict", is_flag=True, help="Fail on a missing source instead of skipping it")
@click.option("--on-conflict", type=POLICY_CHOICE, help="Policy for existing targets not managed by agentconfig")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def sync(
    ctx: click.Context,
    project: Optional[str],
    dry_run: bool,
    mode: Optional[str],
    force: bool,
    agent: Optional[str],
    profile: Optional[str],
    strict: bool,
    on_conflict: Optional[str],
    verbose: bool,
) -> None:
    """Sync agent configs from the source root to their targets.

    Existing targets that agentconfig did not create are conflicts. They are
    resolved with --on-conflict, interactively, or skipped.
    """
    console = create_console(verbose=verbose)
    root: Path = ctx.obj["root"]
    context: PathContext = ctx.obj["context"]

    try:
        config = load_config(root)
        options = SyncOptions(
            config=config,
            source_root=root,
            scope=Scope.PROJECT if project else Scope.GLOBAL,
            project_root=resolve_absolute(project, context) if project else None,
            mode=SyncMode(mode) if mode else None,
            dry_run=dry_run,
            force=force,
            conflict_policy=ConflictPolicy(on_conflict) if on_conflict else None,
            agent_filter=agent,
            strict=strict,
            profile=profile,
            context=context,
            conflict_resolver=console.resolve_conflict,
            interactive=_is_interactive(),
        )
        result = sync_configs(options)
    except AgentConfigError as e:
        _fail(console, e)

    console.print_sync_result(result, dry_run=dry_run)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show drift between synced targets and the last sync."""
    console = create_console()

    try:
        entries = get_status(ctx.obj["root"])
    except AgentConfigError as e:
        _fail(console, e)

    console.print_status(entries)

    if any(not entry.is_ok for entry in entries):
        sys.exit(int(ExitCode.VALIDATION))


@cli.command()
@click.pass_context
def doctor(ctx: click.Context) -> None:
    """Check the configuration and the platform's symlink support."""
    console = create_console()
    root: Path = ctx.obj["root"]

    console.print(f"Source root: {root}", soft_wrap=True)
    console.print(f"Platform: {get_current_platform()}")
    if can_create_symlinks():
        console.print("Symlinks: supported")
    else:
        console.print_warning("Symlinks: not supported, auto mode will copy")

    is_valid, errors = validate_config_file(root)
    if not is_valid:
        for error in errors:
            console.print_error(error)
        sys.exit(int(ExitCode.VALIDATION))

    console.print_success("Config OK")


@cli.command("list-agents")
@click.pass_context
def list_agents(ctx: click.Context) -> None:
    """List the agents defined in agentconfig.yml."""
    console = create_console()

    try:
        config = load_config(ctx.obj["root"])
    except AgentConfigError as e:
        _fail(console, e)

    console.print_agents(config)


if __name__ == "__main__":
    cli()
