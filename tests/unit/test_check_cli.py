"""Unit tests for the check and rules CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from conftest import activity
from synlint import __version__
from synlint.cli import app

runner = CliRunner()


@pytest.fixture
def template(workspace, tmp_path):
    """Template with an orphan pipeline and a parallel ForEach without batch count."""
    workspace.pipeline("PL_Orphan", activities=[activity("Loop", type="ForEach")])
    return workspace.write(tmp_path / "TemplateForWorkspace.json")


@pytest.fixture
def clean_template(clean_workspace, tmp_path):
    return clean_workspace.write(tmp_path / "TemplateForWorkspace.json")


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep config discovery away from the developer's own .synlint.json."""
    monkeypatch.chdir(tmp_path)


class TestCheckCommand:
    """Test the check command."""

    def test_summary_table(self, template):
        result = runner.invoke(app, ["check", str(template)])

        assert result.exit_code == 0
        assert "Summary" in result.stdout
        assert "without any triggers" in result.stdout
        assert "Details" not in result.stdout

    def test_detail_table(self, template):
        result = runner.invoke(app, ["check", str(template), "--no-summary", "--detail"])

        assert result.exit_code == 0
        assert "Details" in result.stdout
        assert "PL_Orphan" in result.stdout
        assert "Summary" not in result.stdout

    def test_clean_template_detail(self, clean_template):
        result = runner.invoke(app, ["check", str(clean_template), "-d"])

        assert result.exit_code == 0
        assert "No issues found" in result.stdout

    def test_json_output(self, template):
        result = runner.invoke(app, ["check", str(template), "--format", "json", "--detail"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["totalFindings"] == 2
        assert len(data["summary"]) == 19
        assert {d["ruleId"] for d in data["details"]} == {"pipeline_no_trigger", "foreach_no_batch_count"}

    def test_json_without_detail(self, template):
        result = runner.invoke(app, ["check", str(template), "--format", "json"])

        assert json.loads(result.stdout)["details"] == []

    def test_markdown_output(self, template):
        result = runner.invoke(app, ["check", str(template), "--format", "markdown", "--detail"])

        assert result.exit_code == 0
        assert "# Workspace Analysis Report" in result.stdout
        assert "| Issue Count | Check Detail | Severity |" in result.stdout
        assert "**HIGH** Activity `Loop`" in result.stdout

    @pytest.mark.parametrize("fail_on,expected", [("high", 1), ("medium", 1), ("low", 1)])
    def test_fail_on(self, template, fail_on, expected):
        result = runner.invoke(app, ["check", str(template), "--fail-on", fail_on])

        assert result.exit_code == expected

    def test_fail_on_clean_template(self, clean_template):
        result = runner.invoke(app, ["check", str(clean_template), "--fail-on", "low"])

        assert result.exit_code == 0

    def test_missing_template(self, tmp_path):
        result = runner.invoke(app, ["check", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Template file not found" in result.stdout

    def test_unparsable_template(self, tmp_path):
        broken = tmp_path / "broken.json"
        broken.write_text("{", encoding="utf-8")

        result = runner.invoke(app, ["check", str(broken)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout

    def test_config_file(self, template, tmp_path):
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({
            "rules": {"disabled": ["foreach_no_batch_count"]},
            "output": {"format": "json", "detail": True},
        }), encoding="utf-8")

        result = runner.invoke(app, ["check", str(template), "--config", str(config_file)])

        data = json.loads(result.stdout)
        assert [d["ruleId"] for d in data["details"]] == ["pipeline_no_trigger"]

    def test_discovered_config_file(self, template, tmp_path):
        (tmp_path / ".synlint.json").write_text(json.dumps({"output": {"failOn": "medium"}}), encoding="utf-8")

        result = runner.invoke(app, ["check", str(template)])

        assert result.exit_code == 1

    def test_invalid_config(self, template, tmp_path):
        config_file = tmp_path / "bad.json"
        config_file.write_text("{ nope", encoding="utf-8")

        result = runner.invoke(app, ["check", str(template), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Error" in result.stdout


class TestRulesCommand:
    """Test the rules command."""

    def test_lists_catalog(self):
        result = runner.invoke(app, ["rules"])

        assert result.exit_code == 0
        assert "pipeline_conflicting_chain" in result.stdout
        assert "19 active" in result.stdout


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout
