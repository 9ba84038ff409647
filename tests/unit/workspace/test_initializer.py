"""Tests for workspace initialization."""

import json
import os
import stat
from unittest.mock import patch

import pytest

from proofstore.config.layout import DEFAULT_SUBDIRECTORIES, WorkspaceLayout
from proofstore.exceptions import InvalidArgumentError
from proofstore.storage.meta_store import read_meta
from proofstore.workspace.initializer import init_workspace, is_initialized

SUBDIRS = ["ledger", "nodes", "defs", "assumptions", "externals", "lemmas", "locks"]


class TestCreatesLayout:
    def test_all_subdirectories(self, tmp_path):
        root = tmp_path / "proof"
        init_workspace(root)
        assert root.is_dir()
        for name in SUBDIRS:
            assert (root / name).is_dir(), name

    def test_default_subdirectory_order(self):
        assert list(DEFAULT_SUBDIRECTORIES) == SUBDIRS

    def test_exactly_seven_subdirectories_and_meta(self, tmp_path):
        root = tmp_path / "p"
        init_workspace(root)
        entries = sorted(p.name for p in root.iterdir())
        assert entries == sorted(SUBDIRS + ["meta.json"])

    def test_meta_default_content(self, tmp_path):
        root = tmp_path / "proof"
        init_workspace(root)
        assert json.loads((root / "meta.json").read_text(encoding="utf-8")) == {"version": "1.0"}

    def test_nested_root(self, tmp_path):
        root = tmp_path / "a" / "b" / "c" / "proof"
        init_workspace(root)
        assert (root / "externals").is_dir()

    def test_relative_root(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        init_workspace("rel-proof")
        assert (tmp_path / "rel-proof" / "locks").is_dir()

    def test_returns_paths(self, tmp_path):
        paths = init_workspace(tmp_path / "proof")
        assert paths.externals == tmp_path / "proof" / "externals"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_directory_permissions(self, tmp_path):
        old_umask = os.umask(0o022)
        try:
            root = tmp_path / "proof"
            init_workspace(root)
        finally:
            os.umask(old_umask)
        for name in SUBDIRS:
            mode = stat.S_IMODE((root / name).stat().st_mode)
            assert mode == 0o755, name

    @pytest.mark.skipif(os.name == "nt", reason="symlinks")
    def test_symlink_root_followed(self, tmp_path):
        real = tmp_path / "real"
        real.mkdir()
        link = tmp_path / "link"
        link.symlink_to(real)

        init_workspace(link)

        assert (real / "externals").is_dir()
        assert (real / "meta.json").is_file()


class TestIdempotence:
    def test_repeated_calls(self, tmp_path):
        root = tmp_path / "proof"
        init_workspace(root)
        init_workspace(root)
        init_workspace(root)
        assert is_initialized(root)

    def test_files_survive(self, tmp_path):
        root = tmp_path / "proof"
        init_workspace(root)
        markers = []
        for name in SUBDIRS:
            marker = root / name / "marker.txt"
            marker.write_text(name)
            markers.append(marker)

        init_workspace(root)

        for marker in markers:
            assert marker.read_text() == marker.parent.name

    def test_edited_meta_not_overwritten(self, tmp_path):
        root = tmp_path / "proof"
        init_workspace(root)
        meta = root / "meta.json"
        meta.write_text('{"version": "9.9", "conjecture": "custom"}')

        init_workspace(root)

        assert meta.read_text() == '{"version": "9.9", "conjecture": "custom"}'

    def test_preexisting_meta_any_content(self, tmp_path):
        root = tmp_path / "proof"
        root.mkdir()
        (root / "meta.json").write_text("not even json")

        init_workspace(root)

        assert (root / "meta.json").read_text() == "not even json"

    def test_existing_root_with_content(self, tmp_path):
        root = tmp_path / "proof"
        (root / "nodes").mkdir(parents=True)
        (root / "nodes" / "n1.json").write_text("{}")

        init_workspace(root)

        assert (root / "nodes" / "n1.json").read_text() == "{}"
        assert is_initialized(root)


class TestFailures:
    @pytest.mark.parametrize("root", ["", "   ", "\t", "/tmp/x\x00y"])
    def test_invalid_root(self, root):
        with pytest.raises(InvalidArgumentError):
            init_workspace(root)

    def test_root_is_a_file(self, tmp_path):
        root = tmp_path / "proof"
        root.write_text("file")
        with pytest.raises(OSError):
            init_workspace(root)

    def test_subdirectory_collides_with_file(self, tmp_path):
        root = tmp_path / "proof"
        root.mkdir()
        (root / "lemmas").write_text("file")
        with pytest.raises(OSError):
            init_workspace(root)
        # No rollback: directories created before the failure remain.
        assert (root / "ledger").is_dir()

    def test_failed_meta_write_recovers_on_retry(self, tmp_path):
        root = tmp_path / "proof"
        with patch("proofstore.storage.json_io.os.fsync", side_effect=OSError("no space")):
            with pytest.raises(OSError, match="no space"):
                init_workspace(root)
        assert not (root / "meta.json").exists()
        assert list(root.glob("*.tmp")) == []

        init_workspace(root)

        assert read_meta(root).version == "1.0"
        assert json.loads((root / "meta.json").read_text(encoding="utf-8")) == {"version": "1.0"}

    @pytest.mark.skipif(os.name == "nt" or os.geteuid() == 0, reason="needs POSIX non-root")
    def test_permission_denied(self, tmp_path):
        restricted = tmp_path / "restricted"
        restricted.mkdir()
        restricted.chmod(0o555)
        try:
            with pytest.raises(PermissionError):
                init_workspace(restricted / "proof")
        finally:
            restricted.chmod(0o755)


class TestCustomLayout:
    def test_layout_drives_creation(self, tmp_path):
        layout = WorkspaceLayout(
            subdirectories=("records", "archive"),
            meta_filename="workspace.json",
            default_meta={"version": "2.0"},
        )
        root = tmp_path / "ws"
        init_workspace(root, layout)

        assert (root / "records").is_dir()
        assert (root / "archive").is_dir()
        assert not (root / "ledger").exists()
        assert json.loads((root / "workspace.json").read_text()) == {"version": "2.0"}
        assert is_initialized(root, layout)
        assert not is_initialized(root)


class TestIsInitialized:
    def test_false_for_missing_root(self, bare_root):
        assert is_initialized(bare_root) is False

    def test_false_when_subdirectory_missing(self, workspace_root):
        (workspace_root / "locks").rmdir()
        assert is_initialized(workspace_root) is False

    def test_false_when_meta_missing(self, workspace_root):
        (workspace_root / "meta.json").unlink()
        assert is_initialized(workspace_root) is False
