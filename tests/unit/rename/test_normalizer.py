"""Unit tests for filename normalization.

Tests the canonical name transformation, collision handling, and that
preview and live runs agree on the plan.
"""

import logging
import os
from pathlib import Path

import pytest
from tidyfs.core.gate import ExecutionGate
from tidyfs.rename.models import RenameDisposition, RenamePlanEntry, RenameSummary
from tidyfs.rename.normalizer import FilenameNormalizer, RenameError, canonical_name


def _names(directory: Path) -> list[str]:
    return sorted(os.listdir(directory))


class TestCanonicalName:
    """Tests for canonical_name."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("My File.txt", "my-file.txt"),
            ("REPORT 2024 (final).PDF", "report-2024-final.pdf"),
            ("a   b\tc", "a-b-c"),
            ("line\nbreak.txt", "line-break.txt"),
            ("Café Menu.md", "caf-menu.md"),
            ("already-fine_1.0.tar.gz", "already-fine_1.0.tar.gz"),
            (" leading", "-leading"),
            ("$$$", ""),
        ],
    )
    def test_transformation(self, name: str, expected: str) -> None:
        """Lowercase, hyphenate whitespace runs, drop everything else."""
        assert canonical_name(name) == expected

    @pytest.mark.parametrize("name", ["My File.txt", "A  B  C", "x!y@z#", "..Hidden File"])
    def test_idempotent(self, name: str) -> None:
        """Normalizing twice equals normalizing once."""
        once = canonical_name(name)

        assert canonical_name(once) == once


class TestNormalize:
    """Tests for FilenameNormalizer.normalize."""

    def test_renames_files(self, tmp_path: Path) -> None:
        """Non-canonical names are renamed in live mode."""
        (tmp_path / "My File.txt").write_text("content")
        (tmp_path / "Photo 01.JPG").write_text("photo")

        summary = FilenameNormalizer(ExecutionGate(dry_run=False)).normalize(tmp_path)

        assert summary.renamed == 2
        assert summary.collisions == 0
        assert _names(tmp_path) == ["my-file.txt", "photo-01.jpg"]
        assert (tmp_path / "my-file.txt").read_text() == "content"

    def test_collision_with_existing_file(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """An existing canonical name is never overwritten."""
        (tmp_path / "My File.txt").write_text("spaced")
        (tmp_path / "my-file.txt").write_text("existing")

        with caplog.at_level(logging.INFO, logger="tidyfs"):
            summary = FilenameNormalizer(ExecutionGate(dry_run=False)).normalize(tmp_path)

        assert summary.renamed == 0
        assert summary.collisions == 1
        assert (tmp_path / "My File.txt").read_text() == "spaced"
        assert (tmp_path / "my-file.txt").read_text() == "existing"
        assert "Collision detected - my-file.txt already exists, skipping My File.txt" in caplog.text
        assert "Renamed 0 files, 1 collisions avoided" in caplog.text

    def test_two_sources_same_target(self, tmp_path: Path) -> None:
        """The first file in name order wins; the second is a collision."""
        (tmp_path / "A B.txt").write_text("first")
        (tmp_path / "a  b.txt").write_text("second")

        summary = FilenameNormalizer(ExecutionGate(dry_run=False)).normalize(tmp_path)

        assert summary.renamed == 1
        assert summary.collisions == 1
        assert (tmp_path / "a-b.txt").read_text() == "first"
        assert (tmp_path / "a  b.txt").read_text() == "second"

    def test_hard_linked_target_is_collision(self, tmp_path: Path) -> None:
        """A second hard link under the canonical name is a distinct entry."""
        (tmp_path / "a.txt").write_text("shared")
        try:
            os.link(tmp_path / "a.txt", tmp_path / "A.txt")
        except FileExistsError:
            pytest.skip("case-insensitive filesystem")

        summary = FilenameNormalizer(ExecutionGate(dry_run=False)).normalize(tmp_path)

        assert summary.renamed == 0
        assert summary.collisions == 1
        assert _names(tmp_path) == ["A.txt", "a.txt"]

    def test_canonical_names_untouched(self, tmp_path: Path) -> None:
        """Already canonical names are no-ops."""
        (tmp_path / "notes.txt").write_text("n")

        summary = FilenameNormalizer(ExecutionGate(dry_run=False)).normalize(tmp_path)

        assert [e.disposition for e in summary.entries] == [RenameDisposition.NO_OP]
        assert summary.changes == ()

    def test_unusable_names_skipped(self, tmp_path: Path) -> None:
        """Names that normalize to nothing, '.' or '..' are left alone."""
        (tmp_path / "$$$").write_text("a")
        (tmp_path / "..!").write_text("b")

        summary = FilenameNormalizer(ExecutionGate(dry_run=False)).normalize(tmp_path)

        assert {e.disposition for e in summary.entries} == {RenameDisposition.SKIP_EMPTY}
        assert _names(tmp_path) == ["$$$", "..!"]

    def test_subdirectories_ignored(self, tmp_path: Path) -> None:
        """Directories and nested files are not renamed."""
        (tmp_path / "Sub Dir").mkdir()
        (tmp_path / "Sub Dir" / "Inner File").write_text("i")

        summary = FilenameNormalizer(ExecutionGate(dry_run=False)).normalize(tmp_path)

        assert summary.entries == ()
        assert (tmp_path / "Sub Dir" / "Inner File").exists()

    def test_symlinks_ignored(self, tmp_path: Path) -> None:
        """Symlinks are not regular files and keep their names."""
        (tmp_path / "target.txt").write_text("t")
        (tmp_path / "My Link").symlink_to(tmp_path / "target.txt")

        FilenameNormalizer(ExecutionGate(dry_run=False)).normalize(tmp_path)

        assert (tmp_path / "My Link").is_symlink()

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        """A missing directory is a precondition failure."""
        with pytest.raises(RenameError):
            FilenameNormalizer(ExecutionGate()).normalize(tmp_path / "missing")

    def test_gate_failure_recorded(self, tmp_path: Path) -> None:
        """A rename the gate cannot perform is reported as FAILED."""
        (tmp_path / "My File").write_text("x")
        gate = ExecutionGate(dry_run=False)
        normalizer = FilenameNormalizer(gate)
        os.chmod(tmp_path, 0o500)
        try:
            if os.access(tmp_path, os.W_OK):
                pytest.skip("running with privileges that ignore permissions")
            summary = normalizer.normalize(tmp_path)
        finally:
            os.chmod(tmp_path, 0o700)

        assert summary.failures == 1
        assert summary.entries[0].error is not None
        assert (tmp_path / "My File").exists()


class TestPreviewAgreement:
    """Tests that preview and live mode produce the same plan."""

    def _populate(self, directory: Path) -> None:
        directory.mkdir()
        for name in ("A B.txt", "a  b.txt", "My File.txt", "my-file.txt", "Photo.JPG", "ok.txt"):
            (directory / name).write_text(name)

    def test_preview_makes_no_changes(self, tmp_path: Path) -> None:
        """A preview run leaves every name in place."""
        target = tmp_path / "target"
        self._populate(target)
        before = _names(target)

        gate = ExecutionGate(dry_run=True)
        summary = FilenameNormalizer(gate).normalize(target)

        assert _names(target) == before
        assert summary.renamed == len(gate.planned)

    def test_live_matches_preview(self, tmp_path: Path) -> None:
        """Live mode performs exactly the renames the preview planned."""
        preview_dir = tmp_path / "preview"
        live_dir = tmp_path / "live"
        self._populate(preview_dir)
        self._populate(live_dir)

        preview_gate = ExecutionGate(dry_run=True)
        preview = FilenameNormalizer(preview_gate).normalize(preview_dir)
        live = FilenameNormalizer(ExecutionGate(dry_run=False)).normalize(live_dir)

        assert [(e.original, e.disposition) for e in preview.entries] == [
            (e.original, e.disposition) for e in live.entries
        ]
        planned = {
            (os.path.basename(a.path), os.path.basename(a.destination or ""))
            for a in preview_gate.planned
        }
        assert planned == {("A B.txt", "a-b.txt"), ("Photo.JPG", "photo.jpg")}
        assert _names(live_dir) == sorted(
            ["a-b.txt", "a  b.txt", "My File.txt", "my-file.txt", "photo.jpg", "ok.txt"]
        )


class TestRenameSummary:
    """Tests for RenameSummary counters."""

    def test_counters(self) -> None:
        """Counters tally dispositions."""
        summary = RenameSummary(
            directory="/d",
            entries=(
                RenamePlanEntry("A", "a", RenameDisposition.APPLY),
                RenamePlanEntry("B", "b", RenameDisposition.SKIP_COLLISION),
                RenamePlanEntry("c", "c", RenameDisposition.NO_OP),
                RenamePlanEntry("D", "d", RenameDisposition.FAILED, error="boom"),
            ),
        )

        assert (summary.renamed, summary.collisions, summary.failures) == (1, 1, 1)
        assert len(summary.changes) == 3
