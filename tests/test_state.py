# AgentConfig State Tests
# Tests for the persisted sync snapshot

import json
import os
from pathlib import Path

import pytest

from agentconfig.config.schema import SyncMode
from agentconfig.errors import ValidationError
from agentconfig.sync.mapping import ResolvedMapping
from agentconfig.sync.state import (
    STATE_FILENAME,
    StateManager,
    SyncRecord,
    SyncState,
    build_record,
    merge_state,
)
from agentconfig.utils.hashing import content_hash


def _record(path: str, **kwargs) -> SyncRecord:
    defaults = {"source": "/src/agent.md", "agent": "claude", "mode": "copy", "hash": "abc"}
    defaults.update(kwargs)
    return SyncRecord(path=path, **defaults)


class TestSyncRecord:
    """Tests for SyncRecord serialization."""

    def test_camel_case_keys(self):
        data = _record("/t/CLAUDE.md", mtime_ms=12.5, link_target=None).to_dict()
        assert data["mtimeMs"] == 12.5
        assert "linkTarget" in data
        assert "mtime_ms" not in data

    def test_round_trip(self):
        record = _record("/t/CLAUDE.md", mode="link", hash=None, link_target="/src/agent.md", size=3)
        assert SyncRecord.from_dict(record.to_dict()) == record


class TestSyncState:
    """Tests for SyncState."""

    def test_is_managed(self):
        state = SyncState(mode="global", files={"/t/a": _record("/t/a")})
        assert state.is_managed(Path("/t/a"))
        assert not state.is_managed("/t/b")
        assert state.files["/t/a"].agent == "claude"

    def test_round_trip(self):
        state = SyncState(
            mode="project",
            updated_at="2026-10-17T09:30:00.000Z",
            project_root="/repo",
            files={"/t/a": _record("/t/a")},
        )
        data = state.to_dict()
        assert data["updatedAt"] == "2026-10-17T09:30:00.000Z"
        assert data["projectRoot"] == "/repo"
        assert SyncState.from_dict(data) == state


class TestStateManager:
    """Tests for StateManager."""

    def test_missing_file_returns_none(self, temp_dir: Path):
        assert StateManager(temp_dir).load() is None

    def test_save_and_load(self, temp_dir: Path):
        manager = StateManager(temp_dir)
        state = SyncState(mode="global", updated_at="now", files={"/t/a": _record("/t/a")})
        manager.save(state)

        assert manager.state_path == temp_dir / STATE_FILENAME
        assert json.loads(manager.state_path.read_text(encoding="utf-8"))["version"] == 1
        assert manager.load() == state

    def test_invalid_json(self, temp_dir: Path):
        (temp_dir / STATE_FILENAME).write_text("{not json", encoding="utf-8")
        with pytest.raises(ValidationError, match="Invalid JSON"):
            StateManager(temp_dir).load()

    def test_not_an_object(self, temp_dir: Path):
        (temp_dir / STATE_FILENAME).write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValidationError, match="Invalid state format"):
            StateManager(temp_dir).load()

    def test_missing_record_fields(self, temp_dir: Path):
        data = {"version": 1, "mode": "global", "files": {"/t/a": {"path": "/t/a"}}}
        (temp_dir / STATE_FILENAME).write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(ValidationError, match="Invalid state format"):
            StateManager(temp_dir).load()

    def test_missing_mode_defaults_to_global(self, temp_dir: Path):
        data = {"version": 1, "files": {"/t/a": _record("/t/a").to_dict()}}
        (temp_dir / STATE_FILENAME).write_text(json.dumps(data), encoding="utf-8")

        state = StateManager(temp_dir).load()

        assert state.mode == "global"
        assert state.is_managed("/t/a")


class TestBuildRecord:
    """Tests for build_record()."""

    def test_copied_file(self, temp_dir: Path):
        target = temp_dir / "CLAUDE.md"
        target.write_text("hello", encoding="utf-8")
        mapping = ResolvedMapping("claude", temp_dir / "agent.md", target, SyncMode.COPY)

        record = build_record(mapping)

        assert record.mode == "copy"
        assert record.hash == content_hash("hello")
        assert record.link_target is None
        assert record.size == 5

    @pytest.mark.usefixtures("requires_symlinks")
    def test_link(self, temp_dir: Path):
        source = temp_dir / "agent.md"
        source.write_text("hello", encoding="utf-8")
        target = temp_dir / "CLAUDE.md"
        os.symlink(source, target)

        record = build_record(ResolvedMapping("claude", source, target, SyncMode.LINK))

        assert record.mode == "link"
        assert record.link_target == str(source)
        assert record.hash is None

    def test_link_mapping_that_fell_back_is_copy(self, temp_dir: Path):
        target = temp_dir / "CLAUDE.md"
        target.write_text("hello", encoding="utf-8")
        record = build_record(ResolvedMapping("claude", temp_dir / "agent.md", target, SyncMode.LINK))
        assert record.mode == "copy"


class TestMergeState:
    """Tests for merge_state()."""

    def test_no_previous(self):
        state = merge_state(None, "global", None, [_record("/t/a")])
        assert list(state.files) == ["/t/a"]
        assert state.project_root is None
        assert state.updated_at.endswith("Z")

    def test_keeps_stale_and_replaces_updated(self):
        previous = SyncState(
            mode="global",
            files={"/t/old": _record("/t/old"), "/t/a": _record("/t/a", hash="before")},
        )
        state = merge_state(previous, "project", Path("/repo"), [_record("/t/a", hash="after")])

        assert state.files["/t/old"].hash == "abc"
        assert state.files["/t/a"].hash == "after"
        assert state.mode == "project"
        assert state.project_root == "/repo"
