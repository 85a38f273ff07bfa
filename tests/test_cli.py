"""Tests for the weavedoc command line."""

import json

import pytest
from click.testing import CliRunner

from weavedoc import __version__
from weavedoc.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestBuild:
    """Tests for the build command."""

    def test_build_defaults(self, runner, project_dir):
        result = runner.invoke(cli, ["build", "-p", str(project_dir)])

        assert result.exit_code == 0, result.output
        assert "Running weavedoc" in result.output
        assert "Document has been written to" in result.output
        assert (project_dir / "target" / "dataweave-doc.md").is_file()

    def test_build_options(self, runner, project_dir):
        """Test that command-line options reach the document."""
        result = runner.invoke(cli, [
            "build", "-p", str(project_dir),
            "-o", "docs/api.md",
            "--header-table",
            "--header-text", "# API",
            "-m", "modules::Utils",
        ])

        assert result.exit_code == 0, result.output
        content = (project_dir / "docs" / "api.md").read_text(encoding="utf-8")
        assert content.startswith("# API\n")
        assert "| Module | Description |" in content
        assert content.index("## modules::Utils") < content.index("## main")

    def test_config_file_in_project_root(self, runner, project_dir):
        (project_dir / "weavedoc.yaml").write_text(
            "output_file: build/from-config.md\n", encoding="utf-8"
        )

        result = runner.invoke(cli, ["build", "-p", str(project_dir)])

        assert result.exit_code == 0, result.output
        assert (project_dir / "build" / "from-config.md").is_file()

    def test_no_header_table_overrides_config(self, runner, project_dir):
        """Test that --no-header-table turns off a header table set in the config file."""
        (project_dir / "weavedoc.yaml").write_text("write_header_table: true\n", encoding="utf-8")
        output = project_dir / "target" / "dataweave-doc.md"

        result = runner.invoke(cli, ["build", "-p", str(project_dir)])
        assert result.exit_code == 0, result.output
        assert "| Module | Description |" in output.read_text(encoding="utf-8")

        result = runner.invoke(cli, ["build", "-p", str(project_dir), "--no-header-table"])
        assert result.exit_code == 0, result.output
        assert "| Module | Description |" not in output.read_text(encoding="utf-8")

    def test_missing_file(self, runner, project_dir):
        result = runner.invoke(cli, ["build", "-p", str(project_dir), "-f", "Missing.dwl"])

        assert result.exit_code == 1
        assert "doesn't exist" in result.output
        assert not (project_dir / "target").exists()

    def test_bad_config_file(self, runner, project_dir):
        (project_dir / "weavedoc.yaml").write_text("unknown_key: 1\n", encoding="utf-8")

        result = runner.invoke(cli, ["build", "-p", str(project_dir)])

        assert result.exit_code == 1
        assert "unknown_key" in result.output

    def test_bad_log_level(self, runner, project_dir):
        """Test that an unknown log level is reported, not raised."""
        (project_dir / "weavedoc.yaml").write_text("log_level: verbose\n", encoding="utf-8")

        result = runner.invoke(cli, ["build", "-p", str(project_dir)])

        assert result.exit_code == 1
        assert "log_level must be one of" in result.output
        assert not isinstance(result.exception, KeyError)
        assert not (project_dir / "target").exists()

    def test_skip(self, runner, project_dir):
        result = runner.invoke(cli, ["build", "-p", str(project_dir), "--skip"])

        assert result.exit_code == 0
        assert "skipping doc generation" in result.output
        assert not (project_dir / "target").exists()

    def test_about_flag(self, runner, project_dir):
        result = runner.invoke(cli, ["build", "-p", str(project_dir), "--about"])

        assert result.exit_code == 0
        assert "DataWeave Document Generator" in result.output


class TestExtract:
    """Tests for the extract command."""

    def test_json(self, runner, dwl_dir):
        result = runner.invoke(cli, ["extract", str(dwl_dir / "modules" / "Utils.dwl"), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["module_name"] == "Utils"
        assert [fn["name"] for fn in data["functions"]] == ["capitalize", "statusLabel"]

    def test_tree(self, runner, dwl_dir):
        result = runner.invoke(cli, ["extract", str(dwl_dir / "main.dwl")])

        assert result.exit_code == 0, result.output
        assert "money(amount: Number)" in result.output
        assert "taxRate" in result.output


class TestInfo:
    """Tests for informational commands."""

    def test_about(self, runner):
        result = runner.invoke(cli, ["about"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output
