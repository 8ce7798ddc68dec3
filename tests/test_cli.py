"""Tests for projectview/cli.py."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from projectview.cli import build_parser, main


def run_cli(root: Path, *argv: str) -> int:
    return main(["--root", str(root), *argv])


class TestList:
    def test_prints_one_path_per_line(
        self, project_root: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli(project_root, "list") == 0
        out = capsys.readouterr().out
        assert sorted(out.splitlines()) == ["a.txt", "sub/b.txt"]

    def test_json(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(project_root, "list", "--json") == 0
        payload = json.loads(capsys.readouterr().out)
        assert sorted(payload["files"]) == ["a.txt", "sub/b.txt"]
        assert "error" not in payload

    def test_exclusion_flags(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(project_root, "--no-default-excludes", "-x", "sub", "list") == 0
        assert sorted(capsys.readouterr().out.splitlines()) == ["a.txt", "node_modules/c.txt"]

    def test_gitignore_flag(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (project_root / ".gitignore").write_text("sub/\n")
        assert run_cli(project_root, "--gitignore", "list") == 0
        assert sorted(capsys.readouterr().out.splitlines()) == [".gitignore", "a.txt"]

    def test_missing_root(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(tmp_path / "missing", "list") == 1
        assert "Directory not found" in capsys.readouterr().err


class TestRead:
    def test_prints_content(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(project_root, "read", "a.txt") == 0
        assert capsys.readouterr().out == "hello"

    def test_traversal_exits_nonzero(
        self, project_root: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli(project_root, "read", "../secrets.txt") == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Path traversal detected" in captured.err

    def test_json_error(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(project_root, "read", "missing.txt", "--json") == 1
        payload = json.loads(capsys.readouterr().out)
        assert set(payload) == {"error"}
        assert payload["error"].startswith("Failed to fetch file content: ")

    def test_strict_containment(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        root = tmp_path / "project"
        root.mkdir()
        (tmp_path / "project-evil").mkdir()
        (tmp_path / "project-evil" / "x.txt").write_text("evil")

        assert run_cli(root, "read", "../project-evil/x.txt") == 0
        assert capsys.readouterr().out == "evil"

        assert run_cli(root, "--strict-containment", "read", "../project-evil/x.txt") == 1
        assert "Path traversal detected" in capsys.readouterr().err

    def test_bad_encoding(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(project_root, "--encoding", "nope", "read", "a.txt") == 2
        assert "Unknown encoding" in capsys.readouterr().err


class TestShow:
    def test_markdown_page(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(project_root, "show", "a.txt") == 0
        out = capsys.readouterr().out
        assert "- `sub/b.txt`" in out
        assert "## File: `a.txt`" in out
        assert "```text\nhello\n```" in out

    def test_without_path(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(project_root, "show") == 0
        assert "## File:" not in capsys.readouterr().out

    def test_json(self, project_root: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert run_cli(project_root, "show", "../x", "--json") == 1
        payload = json.loads(capsys.readouterr().out)
        assert payload["file"] == "../x"
        assert payload["selected_file"] == {"error": "Invalid file path: Path traversal detected"}


class TestDump:
    def test_dump_includes_every_readable_file(
        self, project_root: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (project_root / "blob.bin").write_bytes(b"\xff\xfe\xfd")

        assert run_cli(project_root, "dump") == 0

        captured = capsys.readouterr()
        assert "### File: `a.txt`" in captured.out
        assert "### File: `sub/b.txt`" in captured.out
        assert "### File: `blob.bin`" not in captured.out
        assert "node_modules" not in captured.out
        assert "Could not read blob.bin" in captured.err
        assert "_2 of 3 files included._" in captured.out


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


BAD_NAME = b"bad\xff.txt"


@pytest.fixture
def undecodable_root(project_root: Path) -> Path:
    """Add a file whose name is not valid UTF-8."""
    try:
        with open(os.path.join(os.fsencode(project_root), BAD_NAME), "wb") as f:
            f.write(b"raw name")
    except OSError:
        pytest.skip("filesystem rejects non-UTF-8 file names")
    return project_root


class TestUndecodableNames:
    def test_list_writes_original_bytes(
        self, undecodable_root: Path, capsysbinary: pytest.CaptureFixture[bytes]
    ) -> None:
        assert run_cli(undecodable_root, "list") == 0
        assert sorted(capsysbinary.readouterr().out.splitlines()) == [b"a.txt", BAD_NAME, b"sub/b.txt"]

    def test_list_json_escapes_name(
        self, undecodable_root: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli(undecodable_root, "list", "--json") == 0
        payload = json.loads(capsys.readouterr().out)
        assert os.fsdecode(BAD_NAME) in payload["files"]

    def test_show_and_read(
        self, undecodable_root: Path, capsysbinary: pytest.CaptureFixture[bytes]
    ) -> None:
        assert run_cli(undecodable_root, "show", os.fsdecode(BAD_NAME)) == 0
        out = capsysbinary.readouterr().out
        assert b"- `" + BAD_NAME + b"`" in out
        assert b"raw name" in out

    def test_dump(self, undecodable_root: Path, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
        assert run_cli(undecodable_root, "dump") == 0
        out = capsysbinary.readouterr().out
        assert b"### File: `" + BAD_NAME + b"`" in out
        assert b"_3 of 3 files included._" in out


class TestShowExitCodes:
    def test_unreadable_selection_exits_nonzero(
        self, project_root: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli(project_root, "show", "missing.txt") == 1
        captured = capsys.readouterr()
        assert "## File: `missing.txt`" in captured.out
        assert "Failed to fetch file content" in captured.err

    def test_failed_listing_exits_nonzero(
        self, project_root: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (project_root / "locked").mkdir()
        real_scandir = os.scandir

        def fake_scandir(path):
            if os.fspath(path).endswith("locked"):
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)

        assert run_cli(project_root, "show", "a.txt") == 1
        captured = capsys.readouterr()
        assert "```text\nhello\n```" in captured.out
        assert "Failed to list files" in captured.err
