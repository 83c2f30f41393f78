# AgentConfig Default Configuration
# Default agent mappings as Python dict and YAML generator

import copy
from typing import Any

import yaml

from agentconfig.config.schema import AgentConfigFile

DEFAULT_CONFIG: dict[str, Any] = {
    "version": 1,
    "defaults": {
        "mode": "auto",
        "profile": "default",
        "sourceRoot": "${AGENTCONFIG_HOME:-~/.agentconfig}",
    },
    "agents": {
        # Claude Code
        "claude": {
            "displayName": "Claude Code",
            "global": {
                "root": "~/.claude",
                "files": [
                    {"source": "agent.md", "target": "CLAUDE.md"},
                    {"source": "claude/settings.json", "target": "settings.json"},
                    {"source": "claude/agents/", "target": "agents/"},
                    {"source": "claude/commands/", "target": "commands/"},
                    {"source": "skills/", "target": "skills/"},
                ],
            },
            "project": {
                "root": "<project-root>",
                "files": [
                    {"source": "agent.md", "target": "CLAUDE.md"},
                    {"source": "claude/settings.json", "target": ".claude/settings.json"},
                    {"source": "claude/agents/", "target": ".claude/agents/"},
                    {"source": "claude/commands/", "target": ".claude/commands/"},
                    {"source": "rules/", "target": ".claude/rules/"},
                    {"source": "skills/", "target": ".claude/skills/"},
                ],
            },
        },
        # Codex CLI
        "codex": {
            "displayName": "Codex CLI",
            "global": {
                "root": "${CODEX_HOME:-~/.codex}",
                "files": [
                    {"source": "agent.md", "target": "AGENTS.md"},
                    {"source": "skills/", "target": "../.agents/skills/"},
                ],
            },
            "project": {
                "root": "<project-root>",
                "files": [
                    {"source": "agent.md", "target": "AGENTS.md"},
                    {"source": "skills/", "target": ".agents/skills/"},
                ],
            },
        },
        # Cursor
        "cursor": {
            "displayName": "Cursor",
            "global": {
                "root": "~/.cursor",
                "files": [
                    {"source": "cursor/hooks.json", "target": "hooks.json"},
                    {"source": "cursor/hooks/", "target": "hooks/"},
                    {"source": "skills/", "target": "skills/"},
                ],
            },
            "project": {
                "root": "<project-root>",
                "files": [
                    {"source": "agent.md", "target": "AGENTS.md"},
                    {"source": "cursor/hooks.json", "target": ".cursor/hooks.json"},
                    {"source": "cursor/hooks/", "target": ".cursor/hooks/"},
                    {"source": "rules/", "target": ".cursor/rules/"},
                    {"source": "skills/", "target": ".cursor/skills/"},
                ],
            },
        },
        # OpenCode
        "opencode": {
            "displayName": "OpenCode",
            "global": {
                "root": "~/.config/opencode",
                "files": [
                    {"source": "agent.md", "target": "AGENTS.md"},
                    {"source": "agents/", "target": "agents/"},
                    {"source": "commands/", "target": "commands/"},
                    {"source": "rules/", "target": "rules/"},
                    {"source": "skills/", "target": "skills/"},
                ],
            },
            "project": {
                "root": "<project-root>",
                "files": [
                    {"source": "agent.md", "target": "AGENTS.md"},
                    {"source": "agents/", "target": ".opencode/agents/"},
                    {"source": "commands/", "target": ".opencode/commands/"},
                    {"source": "rules/", "target": ".opencode/rules/"},
                    {"source": "skills/", "target": ".opencode/skills/"},
                ],
            },
        },
    },
    "profiles": {
        "default": {
            "files": [],
        },
    },
}


def create_default_config() -> AgentConfigFile:
    """Build a fresh, independent copy of the default configuration."""
    return AgentConfigFile.model_validate(copy.deepcopy(DEFAULT_CONFIG))


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# agentconfig - shared coding-assistant configuration
#
# Files under this directory are synced into each agent's global root
# (agentconfig sync) or into a repository (agentconfig sync --project PATH).
#
# Modes:
#   - auto: symlink when the platform allows it, copy otherwise
#   - link: always symlink
#   - copy: always copy
#
# Root placeholders: ~, ${VAR}, ${VAR:-default}, <project-root>
# A trailing '/' on a source marks a directory mapping.

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
