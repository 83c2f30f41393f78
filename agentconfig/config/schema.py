# AgentConfig Configuration Schema
# Pydantic models for YAML configuration validation

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SyncMode(str, Enum):
    """How targets are materialized."""

    AUTO = "auto"
    LINK = "link"
    COPY = "copy"


class Scope(str, Enum):
    """Which root an agent's mappings are synced into."""

    GLOBAL = "global"
    PROJECT = "project"


class MappingEntry(BaseModel):
    """A single source -> target pairing, relative to the source and scope roots."""

    source: str = Field(description="Path under the source root; trailing '/' marks a directory")
    target: str = Field(description="Path under the scope root, or an absolute override")


class ScopeConfig(BaseModel):
    """Target root and mappings for one scope of an agent."""

    root: str = Field(description="Target root; supports ~, ${VAR}, ${VAR:-default} and <project-root>")
    files: list[MappingEntry] = Field(description="Ordered mappings")


class AgentConfig(BaseModel):
    """Configuration for one coding-assistant tool."""

    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(alias="displayName", description="Human-readable tool name")
    global_: Optional[ScopeConfig] = Field(default=None, alias="global", description="Per-user mappings")
    project: Optional[ScopeConfig] = Field(default=None, description="Per-repository mappings")

    def get_scope(self, scope: Scope) -> Optional[ScopeConfig]:
        """Get the scope configuration, or None if the agent doesn't define it."""
        if scope == Scope.GLOBAL:
            return self.global_
        return self.project

    @property
    def scopes(self) -> list[str]:
        """Names of the scopes this agent defines."""
        return [scope.value for scope in Scope if self.get_scope(scope) is not None]


class ProfileConfig(BaseModel):
    """Extra mappings applied to every agent when the profile is selected."""

    files: Optional[list[MappingEntry]] = Field(default=None, description="Mappings appended to each agent")


class Defaults(BaseModel):
    """Run defaults that CLI flags may override."""

    model_config = ConfigDict(populate_by_name=True)

    mode: SyncMode = Field(description="auto, link or copy")
    profile: str = Field(description="Profile selected when none is given")
    source_root: str = Field(alias="sourceRoot", description="Source root hint")


class AgentConfigFile(BaseModel):
    """Root configuration model (agentconfig.yml)."""

    version: int = Field(description="Configuration format version")
    defaults: Defaults = Field(description="Run defaults")
    agents: dict[str, AgentConfig] = Field(description="Agent definitions in declaration order")
    profiles: Optional[dict[str, ProfileConfig]] = Field(default=None, description="Named extra mapping sets")

    def get_agent(self, agent_id: str) -> Optional[AgentConfig]:
        """Get an agent by id."""
        return self.agents.get(agent_id)

    def get_profile_files(self, profile_name: Optional[str] = None) -> list[MappingEntry]:
        """
        Get the mappings of a profile.

        Args:
            profile_name: Profile to look up. Defaults to ``defaults.profile``.

        Returns:
            The profile's mappings, or an empty list if the profile or its
            file list is not defined.
        """
        name = profile_name or self.defaults.profile
        if not self.profiles:
            return []
        profile = self.profiles.get(name)
        if profile is None or profile.files is None:
            return []
        return list(profile.files)
