"""Tests for the vetcore command line."""

import textwrap

import pytest
from typer.testing import CliRunner

from vetcore import __version__
from vetcore.cli import app

runner = CliRunner()

PLUGIN_SOURCE = textwrap.dedent(
    '''
    from vetcore.syntax.kinds import NodeKind


    def register(registry):
        @registry.checker("calls", NodeKind.CALL_EXPRESSION, usage="report calls")
        def check_call(ctx, node):
            ctx.report(node, "call found")
    '''
)


@pytest.fixture
def plugin_module(tmp_path, monkeypatch):
    """A checker plugin importable under a name unique to the test."""
    name = f"cli_plugin_{tmp_path.name.replace('-', '_')}"
    plugin_dir = tmp_path / "plugins"
    plugin_dir.mkdir()
    (plugin_dir / f"{name}.py").write_text(PLUGIN_SOURCE)
    monkeypatch.syspath_prepend(str(plugin_dir))
    return name


@pytest.fixture
def workdir(tmp_path, monkeypatch, write_go):
    """A clean working directory holding one package with one call."""
    work = tmp_path / "work"
    write_go(work / "pkg", "a.go", "package pkg\n\nfunc f() {\n\tg()\n}\n")
    monkeypatch.chdir(work)
    return work


class TestCliBasics:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"vetcore {__version__}" in result.output

    def test_list_without_checkers(self, workdir):
        result = runner.invoke(app, ["--list", "--no-entry-points"])
        assert result.exit_code == 0
        assert "No checkers registered" in result.output

    def test_list_with_plugin(self, workdir, plugin_module):
        result = runner.invoke(app, ["--list", "--no-entry-points", "-p", plugin_module])
        assert result.exit_code == 0
        assert "calls" in result.output


class TestCliRun:
    """Running checkers from the command line."""

    def test_clean_run_exits_zero(self, workdir):
        result = runner.invoke(app, ["--no-entry-points", "pkg"])
        assert result.exit_code == 0
        assert "Checking pkg/a.go" in result.output

    def test_diagnostics_exit_one(self, workdir, plugin_module):
        result = runner.invoke(app, ["--no-entry-points", "-p", plugin_module, "pkg"])
        assert result.exit_code == 1
        assert "vet: pkg/a.go:4:2: call found" in result.output

    def test_enable_filters_checkers(self, workdir, plugin_module):
        result = runner.invoke(
            app, ["--no-entry-points", "-p", plugin_module, "-e", "something-else", "pkg"]
        )
        assert result.exit_code == 0
        assert "call found" not in result.output

    def test_config_file(self, workdir, plugin_module, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text(f'[vetcore]\ntool_name = "govet"\nplugins = ["{plugin_module}"]\n')

        result = runner.invoke(app, ["--no-entry-points", "-c", str(config), "pkg"])

        assert result.exit_code == 1
        assert "govet: pkg/a.go:4:2: call found" in result.output

    def test_project_config_discovered(self, workdir, plugin_module):
        (workdir / "vetcore.toml").write_text('[vetcore]\nenabled_checkers = []\n')

        result = runner.invoke(app, ["--no-entry-points", "-p", plugin_module, "pkg"])

        assert result.exit_code == 0
        assert "call found" not in result.output

    def test_mixed_arguments(self, workdir):
        result = runner.invoke(app, ["--no-entry-points", "pkg", "pkg/a.go"])
        assert result.exit_code == 1
        assert "error: input arguments must not be both directories and files" in result.output
        assert "Checking" not in result.output


class TestCliErrors:
    def test_unknown_plugin(self, workdir):
        result = runner.invoke(app, ["--no-entry-points", "-p", "no_such_vetcore_plugin", "pkg"])
        assert result.exit_code == 1
        assert "Cannot load checker plugin" in result.output

    def test_missing_config_file(self, workdir):
        result = runner.invoke(app, ["--no-entry-points", "-c", "missing.toml", "pkg"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_error_text_is_not_markup(self, workdir):
        result = runner.invoke(app, ["--no-entry-points", "-c", "[bold]missing.toml", "pkg"])
        assert result.exit_code == 1
        lines = [line.strip() for line in result.output.splitlines()]
        assert "Error: Config file not found: [bold]missing.toml" in lines


class TestCliLogging:
    def test_log_file_receives_records(self, workdir):
        log = workdir / "vet.log"
        result = runner.invoke(app, ["--no-entry-points", "-v", "--log-file", str(log), "pkg"])
        assert result.exit_code == 0
        assert "Walked pkg/a.go" in log.read_text()

    def test_log_file_from_config(self, workdir):
        (workdir / "vetcore.toml").write_text('[vetcore]\nlog_file = "from-config.log"\n')
        result = runner.invoke(app, ["--no-entry-points", "--plugin", "no_such_vetcore_plugin", "pkg"])
        assert result.exit_code == 1
        assert "PluginLoadError" in (workdir / "from-config.log").read_text()
