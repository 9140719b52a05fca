"""Unit tests for the dirs CLI commands."""

from pathlib import Path

from linkbridge.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestDirsCreate:
    """Tests for linkbridge dirs create."""

    def test_creates(self, out_dir: Path) -> None:
        """A missing directory is created."""
        result = runner.invoke(app, ["dirs", "create", str(out_dir)])

        assert result.exit_code == 0
        assert "Directory created" in result.output
        assert out_dir.is_dir()

    def test_existing(self, tmp_path: Path) -> None:
        """An existing directory is reported."""
        result = runner.invoke(app, ["dirs", "create", str(tmp_path)])

        assert result.exit_code == 0
        assert "already exists" in result.output

    def test_file_in_the_way(self, media_file: Path) -> None:
        """A file at the path is an error."""
        result = runner.invoke(app, ["dirs", "create", str(media_file)])

        assert result.exit_code == 1


class TestDirsRemove:
    """Tests for linkbridge dirs remove."""

    def test_removes_empty(self, out_dir: Path) -> None:
        """An empty directory is removed."""
        out_dir.mkdir()

        result = runner.invoke(app, ["dirs", "remove", str(out_dir)])

        assert result.exit_code == 0
        assert not out_dir.exists()

    def test_non_empty_refused(self, out_dir: Path) -> None:
        """A non-empty directory needs --force."""
        out_dir.mkdir()
        (out_dir / "keep.txt").write_text("x")

        result = runner.invoke(app, ["dirs", "remove", str(out_dir)])

        assert result.exit_code == 1
        assert "not empty" in result.output
        assert (out_dir / "keep.txt").exists()

    def test_force(self, out_dir: Path) -> None:
        """--force removes contents."""
        out_dir.mkdir()
        (out_dir / "keep.txt").write_text("x")

        result = runner.invoke(app, ["dirs", "remove", str(out_dir), "--force"])

        assert result.exit_code == 0
        assert not out_dir.exists()
