# AgentConfig Output Module
# Rich console output and interactive prompts

from agentconfig.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
