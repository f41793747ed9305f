"""Unit tests for the models CLI command."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from modelviz import __version__
from modelviz.cli import app


@pytest.fixture(autouse=True)
def no_config_discovery():
    """Keep a stray .modelviz.json out of the tests."""
    with patch("modelviz.config.find_config_file", return_value=None):
        yield


class TestModelsCommand:
    """Test generating diagrams from the command line."""

    def test_write_to_file(self, snapshot_file, tmp_path):
        """The document is written to --out."""
        runner = CliRunner()
        out = tmp_path / "models.dot"

        result = runner.invoke(app, ["models", str(snapshot_file), "--out", str(out)])

        assert result.exit_code == 0
        assert "Diagram generated" in result.output
        document = out.read_text(encoding="utf-8")
        assert document.startswith('digraph "models_diagram" {')
        assert '"Post" -> "Comment"' in document

    def test_write_to_stdout(self, snapshot_file):
        """Without --out the document goes to stdout."""
        runner = CliRunner()

        result = runner.invoke(app, ["models", str(snapshot_file)])

        assert result.exit_code == 0
        assert 'digraph "models_diagram" {' in result.output

    def test_inheritance_flag(self, snapshot_file):
        """--inheritance groups the User lineage into a cluster."""
        runner = CliRunner()

        result = runner.invoke(app, ["models", str(snapshot_file), "--inheritance"])

        assert result.exit_code == 0
        assert 'subgraph "cluster_user" {' in result.output

    def test_filter_option(self, snapshot_file):
        """--filter limits the classes drawn."""
        runner = CliRunner()

        result = runner.invoke(app, ["models", str(snapshot_file), "-F", "Tag"])

        assert result.exit_code == 0
        assert '"Tag" [' in result.output
        assert '"Comment" [' not in result.output

    def test_link_base(self, snapshot_file):
        runner = CliRunner()

        result = runner.invoke(app, ["models", str(snapshot_file), "--link-base", "https://git.example/blog"])

        assert result.exit_code == 0
        assert 'URL="https://git.example/blog/app/models/post.rb"' in result.output

    def test_config_file(self, snapshot_file, tmp_path):
        """Options from --config apply to the run."""
        runner = CliRunner()
        config_file = tmp_path / "modelviz.json"
        config_file.write_text(json.dumps({"diagram": {"brief": True}}))

        result = runner.invoke(app, ["models", str(snapshot_file), "--config", str(config_file)])

        assert result.exit_code == 0
        assert '"Post" [shape=box]' in result.output

    def test_invalid_config_file(self, snapshot_file, tmp_path):
        runner = CliRunner()
        config_file = tmp_path / "modelviz.json"
        config_file.write_text("{broken")

        result = runner.invoke(app, ["models", str(snapshot_file), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_xmi_not_supported(self, snapshot_file, tmp_path):
        """Requesting XMI fails and writes nothing."""
        runner = CliRunner()
        out = tmp_path / "models.xmi"

        result = runner.invoke(app, ["models", str(snapshot_file), "--format", "xmi", "--out", str(out)])

        assert result.exit_code == 1
        assert "not supported" in result.output
        assert not out.exists()

    def test_unsupported_format_from_config(self, snapshot_file, tmp_path):
        """A configured format is refused the same way as --format."""
        runner = CliRunner()
        out = tmp_path / "models.xmi"
        config_file = tmp_path / "modelviz.json"
        config_file.write_text(json.dumps({"output": {"format": "xmi", "file": str(out)}}))

        result = runner.invoke(app, ["models", str(snapshot_file), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "XMI output is not supported" in result.output
        assert not out.exists()

    def test_invalid_format(self, snapshot_file):
        runner = CliRunner()

        result = runner.invoke(app, ["models", str(snapshot_file), "--format", "svg"])

        assert result.exit_code == 1
        assert "Invalid format" in result.output

    def test_missing_snapshot(self, tmp_path):
        runner = CliRunner()

        result = runner.invoke(app, ["models", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Snapshot file not found" in result.output


class TestVersion:
    """Test version option."""

    def test_version(self):
        runner = CliRunner()

        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"modelviz version {__version__}" in result.output
