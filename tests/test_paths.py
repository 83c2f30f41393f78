# Tests for agentconfig.utils.paths
# Placeholder expansion, resolution and safe file operations

import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from agentconfig.utils.paths import (
    PathContext,
    atomic_write,
    backup_destination,
    backup_timestamp,
    copy_file_or_dir,
    expand_placeholders,
    is_directory_mapping,
    remove_directory,
    resolve_absolute,
    resolve_from_root,
    strip_anchor,
)


@pytest.fixture
def ctx() -> PathContext:
    return PathContext(
        env={"CODEX_HOME": "/opt/codex", "EMPTY": ""},
        cwd=Path("/work/project"),
        home=Path("/home/tester"),
    )


class TestExpandPlaceholders:
    """Tests for expand_placeholders()."""

    def test_no_tokens_unchanged(self, ctx):
        assert expand_placeholders("/etc/config", ctx) == "/etc/config"

    def test_set_variable(self, ctx):
        assert expand_placeholders("${CODEX_HOME}/AGENTS.md", ctx) == "/opt/codex/AGENTS.md"

    def test_unset_variable_uses_fallback(self, ctx):
        assert expand_placeholders("${MISSING:-/fallback}", ctx) == "/fallback"

    def test_empty_variable_uses_fallback(self, ctx):
        assert expand_placeholders("${EMPTY:-/fallback}", ctx) == "/fallback"

    def test_unset_without_fallback_is_empty(self, ctx):
        assert expand_placeholders("a${MISSING}b", ctx) == "ab"

    def test_set_variable_ignores_fallback(self, ctx):
        assert expand_placeholders("${CODEX_HOME:-~/.codex}", ctx) == "/opt/codex"

    def test_fallback_home_is_expanded(self, ctx):
        assert expand_placeholders("${MISSING:-~/.codex}", ctx) == os.path.join("/home/tester", ".codex")

    def test_bare_tilde(self, ctx):
        assert expand_placeholders("~", ctx) == "/home/tester"

    def test_tilde_only_at_start(self, ctx):
        assert expand_placeholders("a/~/b", ctx) == "a/~/b"


class TestResolveAbsolute:
    """Tests for resolve_absolute()."""

    def test_relative_uses_cwd(self, ctx):
        assert resolve_absolute("sub/file", ctx) == Path("/work/project/sub/file")

    def test_absolute_normalized(self, ctx):
        assert resolve_absolute("/a/b/../c/./d", ctx) == Path("/a/c/d")

    def test_home(self, ctx):
        assert resolve_absolute("~/.claude", ctx) == Path("/home/tester/.claude")

    def test_dotdot_from_cwd(self, ctx):
        assert resolve_absolute("..", ctx) == Path("/work")


class TestResolveFromRoot:
    """Tests for resolve_from_root()."""

    def test_relative_joined(self):
        assert resolve_from_root("/root/src", "claude/settings.json") == Path("/root/src/claude/settings.json")

    def test_absolute_override(self):
        assert resolve_from_root("/root/src", "/etc/x") == Path("/etc/x")

    def test_escapes_root_lexically(self):
        assert resolve_from_root("/home/u/.codex", "../.agents/skills/") == Path("/home/u/.agents/skills")


class TestMappingHelpers:
    """Tests for is_directory_mapping() and strip_anchor()."""

    def test_trailing_slash_is_directory(self):
        assert is_directory_mapping("skills/")
        assert not is_directory_mapping("agent.md")

    def test_strip_anchor(self):
        assert strip_anchor(Path("/home/u/.claude/CLAUDE.md")) == Path("home/u/.claude/CLAUDE.md")

    def test_strip_anchor_relative_unchanged(self):
        assert strip_anchor(Path("a/b")) == Path("a/b")


class TestBackupTimestamp:
    """Tests for backup_timestamp() and backup_destination()."""

    def test_format(self):
        now = datetime(2026, 10, 17, 9, 30, 5, 123000, tzinfo=timezone.utc)
        assert backup_timestamp(now) == "2026-10-17T09-30-05-123Z"

    def test_no_separators_unsafe_for_filenames(self):
        stamp = backup_timestamp()
        assert ":" not in stamp
        assert "." not in stamp
        assert stamp.endswith("Z")

    def test_destination(self, temp_dir):
        dest = backup_destination(temp_dir, "ts", Path("home/u/CLAUDE.md"))
        assert dest == temp_dir / "backup" / "ts" / "home" / "u" / "CLAUDE.md"


class TestCopyFileOrDir:
    """Tests for copy_file_or_dir()."""

    def test_copy_file_creates_parents(self, temp_dir):
        src = temp_dir / "src.txt"
        src.write_text("content", encoding="utf-8")
        dst = temp_dir / "a" / "b" / "dst.txt"
        copy_file_or_dir(src, dst)
        assert dst.read_text(encoding="utf-8") == "content"

    def test_copy_directory_into_existing(self, temp_dir):
        src = temp_dir / "src"
        (src / "nested").mkdir(parents=True)
        (src / "nested" / "f.txt").write_text("x", encoding="utf-8")
        dst = temp_dir / "dst"
        dst.mkdir()
        (dst / "keep.txt").write_text("keep", encoding="utf-8")

        copy_file_or_dir(src, dst)

        assert (dst / "nested" / "f.txt").read_text(encoding="utf-8") == "x"
        assert (dst / "keep.txt").exists()

    @pytest.mark.usefixtures("requires_symlinks")
    def test_nested_symlinks_preserved(self, temp_dir):
        src = temp_dir / "src"
        src.mkdir()
        os.symlink("elsewhere", src / "link")
        dst = temp_dir / "dst"

        copy_file_or_dir(src, dst)

        assert (dst / "link").is_symlink()
        assert os.readlink(dst / "link") == "elsewhere"

    def test_missing_source_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            copy_file_or_dir(temp_dir / "missing", temp_dir / "dst")


class TestRemoveDirectory:
    """Tests for remove_directory()."""

    def test_empty_removed(self, temp_dir):
        d = temp_dir / "empty"
        d.mkdir()
        assert remove_directory(d, allow_non_empty=False)
        assert not d.exists()

    def test_non_empty_refused(self, temp_dir):
        d = temp_dir / "full"
        d.mkdir()
        (d / "f.txt").write_text("x", encoding="utf-8")
        assert not remove_directory(d, allow_non_empty=False)
        assert (d / "f.txt").exists()

    def test_non_empty_allowed(self, temp_dir):
        d = temp_dir / "full"
        (d / "sub").mkdir(parents=True)
        assert remove_directory(d, allow_non_empty=True)
        assert not d.exists()


class TestAtomicWrite:
    """Tests for atomic_write()."""

    def test_writes_and_replaces(self, temp_dir):
        path = temp_dir / "deep" / "state.json"
        atomic_write(path, "one")
        atomic_write(path, "two")
        assert path.read_text(encoding="utf-8") == "two"

    def test_no_temp_files_left(self, temp_dir):
        atomic_write(temp_dir / "f.txt", b"bytes")
        assert sorted(p.name for p in temp_dir.iterdir()) == ["f.txt"]
