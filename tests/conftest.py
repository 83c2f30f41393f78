# AgentConfig Test Fixtures
# Pytest fixtures for agentconfig tests

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
import yaml

from agentconfig.config import parse_config
from agentconfig.config.schema import AgentConfigFile
from agentconfig.utils.paths import PathContext
from agentconfig.utils.platform import can_create_symlinks


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory."""
    home = temp_dir / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("AGENTCONFIG_HOME", raising=False)
    return home


@pytest.fixture
def path_context(temp_dir: Path, temp_home: Path) -> PathContext:
    """Path context rooted in the temporary directory."""
    return PathContext(env={}, cwd=temp_dir, home=temp_home)


@pytest.fixture
def source_root(temp_dir: Path) -> Path:
    """Create a source root with an agent.md and a skills directory."""
    root = temp_dir / "source"
    root.mkdir()
    (root / "agent.md").write_text("hello", encoding="utf-8")
    skills = root / "skills" / "review"
    skills.mkdir(parents=True)
    (skills / "SKILL.md").write_text("# Review\n", encoding="utf-8")
    return root


@pytest.fixture
def sample_config_data(temp_dir: Path) -> dict:
    """Raw configuration with one agent targeting the temporary directory."""
    return {
        "version": 1,
        "defaults": {"mode": "copy", "profile": "default", "sourceRoot": "~/.agentconfig"},
        "agents": {
            "claude": {
                "displayName": "Claude Code",
                "global": {
                    "root": str(temp_dir / "target"),
                    "files": [
                        {"source": "agent.md", "target": "CLAUDE.md"},
                        {"source": "skills/", "target": "skills/"},
                    ],
                },
                "project": {
                    "root": "<project-root>",
                    "files": [{"source": "agent.md", "target": "CLAUDE.md"}],
                },
            },
        },
        "profiles": {"default": {"files": []}},
    }


@pytest.fixture
def sample_config(sample_config_data: dict) -> AgentConfigFile:
    """Validated sample configuration."""
    return parse_config(sample_config_data)


@pytest.fixture
def config_file(source_root: Path, sample_config_data: dict) -> Path:
    """Write the sample configuration into the source root."""
    config_path = source_root / "agentconfig.yml"

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(sample_config_data, f, default_flow_style=False, sort_keys=False)

    return config_path


@pytest.fixture
def target_root(temp_dir: Path) -> Path:
    """Global target root used by the sample configuration."""
    return temp_dir / "target"


@pytest.fixture
def requires_symlinks() -> None:
    """Skip tests that need symlink support on this platform."""
    if not can_create_symlinks():
        pytest.skip("Symlinks not supported on this platform")

