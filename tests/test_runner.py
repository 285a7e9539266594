"""End-to-end tests for run(): argument handling, traversal, and output."""

import os

import pytest

from vetcore.checkers.registry import CheckerRegistry
from vetcore.config import VetConfig
from vetcore.exceptions import ArgumentMixError, RegistryError
from vetcore.runner import classify_paths, run
from vetcore.syntax.kinds import NodeKind


def _call_registry() -> CheckerRegistry:
    registry = CheckerRegistry()

    @registry.checker("calls", NodeKind.CALL_EXPRESSION, usage="report every call")
    def check_call(ctx, node):
        ctx.report(node, f"call of {node.child_by_field('function').text}")

    return registry


@pytest.fixture
def project(tmp_path, write_go):
    """Two packages, one nested, plus a directory with no Go files."""
    root = tmp_path / "proj"
    write_go(root, "main.go", "package main\n\nfunc main() {\n\trun()\n}\n")
    write_go(root / "lib", "lib.go", "package lib\n\nfunc F() {\n\tG()\n}\n")
    write_go(root / "lib", "lib_test.go", "package lib\n\nfunc T() {\n\tF()\n}\n")
    (root / "docs").mkdir()
    return root


def _run(reporter, paths, registry=None, config=None, parser=None):
    status = run(
        [str(p) for p in paths],
        registry if registry is not None else _call_registry(),
        config,
        reporter,
        parser,
    )
    return status, reporter


class TestArgumentClassification:
    """Test classify_paths()."""

    def test_split(self, reporter, tmp_path):
        (tmp_path / "d").mkdir()
        (tmp_path / "f.go").write_text("package p\n")

        assert classify_paths([str(tmp_path / "d")], reporter) == ([str(tmp_path / "d")], [])
        assert classify_paths([str(tmp_path / "f.go")], reporter) == ([], [str(tmp_path / "f.go")])

    def test_mixed_raises(self, reporter, tmp_path):
        (tmp_path / "d").mkdir()
        (tmp_path / "f.go").write_text("package p\n")

        with pytest.raises(ArgumentMixError):
            classify_paths([str(tmp_path / "d"), str(tmp_path / "f.go")], reporter)

    def test_missing_path_reported_and_dropped(self, reporter, tmp_path):
        missing = str(tmp_path / "missing")

        assert classify_paths([missing], reporter) == ([], [])
        assert reporter.stderr_lines == [f"vet: error: {missing}: No such file or directory"]


class TestRunDirectories:
    """Directory arguments are walked recursively."""

    def test_output(self, project, go_parser, reporter_factory):
        status, reporter = _run(reporter_factory(), [project], parser=go_parser)

        lib = os.path.join(str(project), "lib")
        assert reporter.stdout_lines == [
            f"Checking {os.path.join(str(project), 'main.go')}",
            f"Checking {os.path.join(lib, 'lib.go')}",
            f"Checking {os.path.join(lib, 'lib_test.go')}",
        ]
        assert reporter.stderr_lines == [
            f"vet: {os.path.join(str(project), 'main.go')}:4:2: call of run",
            f"vet: {os.path.join(lib, 'lib.go')}:4:2: call of G",
            f"vet: {os.path.join(lib, 'lib_test.go')}:4:2: call of F",
        ]
        assert status.exit_code == 1

    def test_directories_in_argument_order(self, tmp_path, write_go, go_parser, reporter_factory):
        write_go(tmp_path / "z", "z.go", "package z\n")
        write_go(tmp_path / "a", "a.go", "package a\n")

        status, reporter = _run(reporter_factory(), [tmp_path / "z", tmp_path / "a"], parser=go_parser)

        assert reporter.stdout_lines == [
            f"Checking {tmp_path / 'z' / 'z.go'}",
            f"Checking {tmp_path / 'a' / 'a.go'}",
        ]
        assert status.ok

    def test_bad_package_does_not_stop_the_run(self, project, write_go, go_parser, reporter_factory):
        write_go(project / "broken", "a.go", "package one\n")
        write_go(project / "broken", "b.go", "package two\n")

        status, reporter = _run(reporter_factory(), [project], parser=go_parser)

        broken = os.path.join(str(project), "broken")
        expected = (
            f"vet: error processing directory {broken}, "
            f"found packages one (a.go) and two (b.go) in {broken}"
        )
        assert expected in reporter.stderr_lines
        assert len(reporter.stdout_lines) == 3
        assert not status.ok

    def test_run_is_deterministic(self, project, go_parser, reporter_factory):
        _, first = _run(reporter_factory(), [project], parser=go_parser)
        _, second = _run(reporter_factory(), [project], parser=go_parser)

        assert first.stdout == second.stdout
        assert first.stderr == second.stderr


class TestRunFiles:
    """File arguments form one ad-hoc unit."""

    def test_files_analyzed_in_given_order(self, tmp_path, write_go, go_parser, reporter_factory):
        b = write_go(tmp_path, "b.go", "package p\n")
        a = write_go(tmp_path, "a.go", "package p\n")

        status, reporter = _run(reporter_factory(), [b, a], parser=go_parser)

        assert reporter.stdout_lines == [f"Checking {b}", f"Checking {a}"]
        assert status.ok
        assert status.exit_code == 0

    def test_parse_error_in_files_mode(self, tmp_path, write_go, go_parser, reporter_factory):
        good = write_go(tmp_path, "good.go", "package p\n\nfunc f() {\n\tg()\n}\n")
        bad = write_go(tmp_path, "bad.go", "package p\n\nfunc (\n")

        status, reporter = _run(reporter_factory(), [good, bad], parser=go_parser)

        assert reporter.stdout_lines == [f"Checking {good}"]
        assert reporter.stderr_lines[0] == f"vet: {good}:4:2: call of g"
        assert reporter.stderr_lines[1].startswith(f"vet: error: {bad}:")
        assert not status.ok


class TestRunFailures:
    """Invocation-level failures."""

    def test_mixed_arguments(self, project, go_parser, reporter_factory):
        status, reporter = _run(reporter_factory(), [project, project / "main.go"], parser=go_parser)

        assert reporter.stdout == ""
        assert reporter.stderr_lines == [
            "error: input arguments must not be both directories and files"
        ]
        assert status.exit_code == 1

    def test_missing_path_does_not_block_others(self, project, go_parser, reporter_factory):
        missing = project / "nope"

        status, reporter = _run(reporter_factory(), [missing, project / "lib"], parser=go_parser)

        assert reporter.stderr_lines[0] == f"vet: error: {missing}: No such file or directory"
        assert len(reporter.stdout_lines) == 2
        assert not status.ok

    def test_no_paths_is_a_clean_run(self, reporter_factory):
        status, reporter = _run(reporter_factory(), [])
        assert status.ok
        assert reporter.stdout == ""


class TestRunRegistry:
    """run() freezes the registry."""

    def test_registry_sealed(self, project, go_parser, reporter_factory):
        registry = _call_registry()
        _run(reporter_factory(), [project / "docs"], registry=registry, parser=go_parser)

        assert registry.sealed
        with pytest.raises(RegistryError):
            registry.register("late", [NodeKind.CALL_EXPRESSION], lambda c, n: None)

    def test_enabled_checkers_restricts(self, project, go_parser, reporter_factory):
        config = VetConfig(enabled_checkers=["other"])

        status, reporter = _run(reporter_factory(), [project], config=config, parser=go_parser)

        assert len(reporter.stdout_lines) == 3
        assert reporter.stderr == ""
        assert status.ok

    def test_tool_name_prefix(self, project, go_parser, reporter_factory):
        reporter = reporter_factory(tool_name="govet")

        config = VetConfig(tool_name="govet")
        run([str(project / "lib")], _call_registry(), config, reporter, go_parser)

        assert all(line.startswith("govet: ") for line in reporter.stderr_lines)

    def test_excluded_directories(self, project, go_parser, reporter_factory):
        config = VetConfig(exclude_dirs=["lib"])

        _, reporter = _run(reporter_factory(), [project], config=config, parser=go_parser)

        assert reporter.stdout_lines == [f"Checking {os.path.join(str(project), 'main.go')}"]
