"""Unit tests for the dupes command."""

import re
from pathlib import Path
from unittest.mock import patch

from tidyfs.cli.main import app
from tidyfs.core.workspace import WorkspaceError
from typer.testing import CliRunner

runner = CliRunner()

DIGEST_LINE = re.compile(r"^[0-9a-f]{64} ")


def _populate(docs: Path) -> None:
    docs.mkdir(parents=True, exist_ok=True)
    (docs / "a.bin").write_bytes(b"\x00" * 2048)
    (docs / "b.bin").write_bytes(b"\x00" * 2048)
    (docs / "c.bin").write_bytes(b"\x01" * 2048)


class TestDupesCommand:
    """Tests for tidyfs dupes."""

    def test_reports_groups(self, isolated_home: Path) -> None:
        """Duplicate members are printed with their digest, then the total."""
        docs = isolated_home / "docs"
        _populate(docs)

        result = runner.invoke(app, ["dupes", "--dir", str(docs), "--min-size", "1024"])

        assert result.exit_code == 0
        lines = [line for line in result.stdout.splitlines() if DIGEST_LINE.match(line)]
        assert [line.split(" ", 1)[1] for line in lines] == [
            str(docs / "a.bin"),
            str(docs / "b.bin"),
        ]
        assert len({line.split(" ", 1)[0] for line in lines}) == 1
        assert "Total duplicate groups: 1" in result.stdout

    def test_no_duplicates(self, isolated_home: Path) -> None:
        """A tree without duplicates reports zero groups and succeeds."""
        docs = isolated_home / "docs"
        docs.mkdir()
        (docs / "only.bin").write_bytes(b"o" * 2048)

        result = runner.invoke(app, ["dupes", "-d", str(docs), "-s", "1024"])

        assert result.exit_code == 0
        assert "Total duplicate groups: 0" in result.stdout

    def test_default_directory_from_config(self, isolated_home: Path) -> None:
        """Without --dir, the configured duplicate directory is used."""
        _populate(isolated_home / "Documents")
        config_file = isolated_home / ".config" / "tidyfs" / "config.toml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text("min_duplicate_size = 1024\n")

        result = runner.invoke(app, ["dupes"])

        assert result.exit_code == 0
        assert "Total duplicate groups: 1" in result.stdout

    def test_missing_directory_exits_1(self, isolated_home: Path) -> None:
        """A missing directory is a precondition failure."""
        result = runner.invoke(app, ["dupes", "--dir", str(isolated_home / "missing")])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_workspace_failure_exits_2(self, isolated_home: Path) -> None:
        """A workspace that cannot be created aborts with exit code 2."""
        docs = isolated_home / "docs"
        _populate(docs)

        with patch(
            "tidyfs.core.workspace.ScopedWorkspace.acquire",
            side_effect=WorkspaceError("Cannot create workspace"),
        ):
            result = runner.invoke(app, ["dupes", "--dir", str(docs)])

        assert result.exit_code == 2

    def test_workspace_removed_after_run(self, isolated_home: Path) -> None:
        """No scratch directory survives the command."""
        docs = isolated_home / "docs"
        _populate(docs)
        scratch = isolated_home / "scratch"
        scratch.mkdir()
        config_file = isolated_home / ".config" / "tidyfs" / "config.toml"
        config_file.parent.mkdir(parents=True)
        config_file.write_text(f'workspace_dir = "{scratch}"\n')

        result = runner.invoke(app, ["dupes", "--dir", str(docs), "--min-size", "1024"])

        assert result.exit_code == 0
        assert list(scratch.iterdir()) == []

    def test_export(self, isolated_home: Path) -> None:
        """--export writes the same lines to a file."""
        docs = isolated_home / "docs"
        _populate(docs)
        out = isolated_home / "report.txt"

        result = runner.invoke(
            app, ["dupes", "--dir", str(docs), "--min-size", "1024", "--export", str(out)]
        )

        assert result.exit_code == 0
        lines = out.read_text().splitlines()
        assert len(lines) == 3
        assert lines[-1] == "Total duplicate groups: 1"

    def test_nothing_deleted(self, isolated_home: Path) -> None:
        """Duplicate detection never removes files."""
        docs = isolated_home / "docs"
        _populate(docs)

        runner.invoke(app, ["dupes", "--dir", str(docs), "--min-size", "1024"])

        assert sorted(p.name for p in docs.iterdir()) == ["a.bin", "b.bin", "c.bin"]
