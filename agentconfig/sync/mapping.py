# AgentConfig Mapping Resolver
# Expands agent and profile configuration into concrete source/target pairs

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from agentconfig.config.schema import AgentConfigFile, Scope, SyncMode
from agentconfig.errors import ValidationError
from agentconfig.utils.paths import PathContext, resolve_absolute, resolve_from_root

PROJECT_ROOT_PLACEHOLDER = "<project-root>"


@dataclass(frozen=True)
class ResolvedMapping:
    """A mapping with absolute paths and a concrete mode, produced fresh for each run."""

    agent: str
    source: Path
    target: Path
    mode: SyncMode


def resolve_scope_root(
    root: str,
    scope: Scope,
    project_root: Optional[Path],
    context: PathContext,
) -> Path:
    """
    Resolve a scope's templated root to an absolute path.

    ``<project-root>`` is substituted before placeholder expansion, and only
    in project scope.

    Raises:
        ValidationError: If scope is project and no project root is given.
    """
    if scope == Scope.PROJECT:
        if project_root is None:
            raise ValidationError("Project root is required for project mode")
        root = root.replace(PROJECT_ROOT_PLACEHOLDER, str(project_root))
    return resolve_absolute(root, context)


def resolve_mappings(
    config: AgentConfigFile,
    source_root: Path,
    scope: Scope,
    project_root: Optional[Path],
    mode: SyncMode,
    context: PathContext,
    *,
    agent_filter: Optional[str] = None,
    profile: Optional[str] = None,
) -> list[ResolvedMapping]:
    """
    Produce the ordered list of mappings for a run.

    Agents are visited in declaration order. Each agent contributes its
    scope's files followed by the active profile's files, so profile
    mappings are repeated for every agent. Agents without the requested
    scope are skipped.

    Args:
        config: Validated configuration.
        source_root: Absolute source root.
        scope: Global or project.
        project_root: Repository root, required for project scope.
        mode: Concrete link or copy mode.
        context: Path resolution context.
        agent_filter: Only resolve this agent id.
        profile: Profile name overriding ``defaults.profile``.

    Returns:
        List of ResolvedMapping.

    Raises:
        ValidationError: If project scope is requested without a project root.
        ValueError: If mode is still ``auto``.
    """
    if mode == SyncMode.AUTO:
        raise ValueError("Sync mode must be resolved to link or copy before resolving mappings")

    profile_files = config.get_profile_files(profile)
    mappings: list[ResolvedMapping] = []

    agents = config.agents
    if agent_filter:
        agent = config.get_agent(agent_filter)
        agents = {agent_filter: agent} if agent is not None else {}

    for agent_id, agent in agents.items():
        scope_config = agent.get_scope(scope)
        if scope_config is None:
            continue

        root = resolve_scope_root(scope_config.root, scope, project_root, context)

        for entry in [*scope_config.files, *profile_files]:
            mappings.append(
                ResolvedMapping(
                    agent=agent_id,
                    source=resolve_from_root(source_root, entry.source),
                    target=resolve_from_root(root, entry.target),
                    mode=mode,
                )
            )

    return mappings
