from __future__ import annotations

from click.testing import CliRunner

from ciimport.cli import cli


def test_import_help_lists_options():
    result = CliRunner().invoke(cli, ["import", "--help"])
    assert result.exit_code == 0
    for flag in ("--url", "--org", "--name", "--credentials", "--batch-mode"):
        assert flag in result.output


def test_declining_git_init_exits_non_zero(tmp_path, monkeypatch):
    monkeypatch.setenv("CIIMPORT_HOME", str(tmp_path / "home"))
    project = tmp_path / "project"
    project.mkdir()

    result = CliRunner().invoke(cli, ["import", str(project)], input="n\n")

    assert result.exit_code == 1
    assert "Please initialise git yourself then try again" in result.output
    assert not (project / ".git").exists()


def test_unparseable_url_exits_non_zero(tmp_path, monkeypatch):
    monkeypatch.setenv("CIIMPORT_HOME", str(tmp_path / "home"))

    result = CliRunner().invoke(cli, ["import", "--batch-mode", "--url", "not-a-url", str(tmp_path)])

    assert result.exit_code == 1
    assert "Failed to parse git URL not-a-url" in result.output
