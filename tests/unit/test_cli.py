"""Tests for the command-line interface."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from complexity_watch.cli import build_parser, cli, load_config, main


@pytest.fixture(autouse=True)
def restore_log_levels():
    """Undo the level changes made by --verbose."""
    root = logging.getLogger()
    package = logging.getLogger("complexity_watch")
    root_level, package_level = root.level, package.level
    yield
    root.setLevel(root_level)
    package.setLevel(package_level)


class TestArgumentParsing:
    """Test argument parsing and configuration merging."""

    def test_defaults_leave_environment_untouched(self):
        args = build_parser().parse_args(["src"])
        assert args.path == "src"
        assert args.threshold is None
        assert args.recursive is None
        assert args.boolean_operators is None

    def test_arguments_override_environment(self):
        args = build_parser().parse_args(
            ["src", "--threshold", "8", "--format", "json", "--no-boolean-operators",
             "--ignore", "build/", "--ignore", "*.h"]
        )
        with patch.dict(os.environ, {"COMPLEXITY_THRESHOLD": "3", "COMPLEXITY_RECURSIVE": "1"}):
            config = load_config(args)

        assert config.analysis.threshold == 8
        assert config.analysis.recursive is True
        assert config.analysis.include_boolean_operators is False
        assert config.analysis.ignore_patterns == ["build/", "*.h"]
        assert config.output.format == "json"

    def test_environment_used_without_arguments(self):
        args = build_parser().parse_args(["src"])
        with patch.dict(os.environ, {"COMPLEXITY_FORMAT": "json", "COMPLEXITY_LANGUAGE": "cpp"}):
            config = load_config(args)
        assert config.output.format == "json"
        assert config.analysis.language == "cpp"


class TestMain:
    """Test end-to-end runs of the CLI."""

    def test_text_report(self, sample_tree, capsys):
        exit_code = main([str(sample_tree / "engine.cpp")])
        output = capsys.readouterr().out

        assert exit_code == 0
        assert "Function: run" in output
        assert "Language: cpp" in output
        assert "Complexity: 3" in output
        assert output.rstrip().endswith("Total complexity: 3")

    def test_json_report(self, sample_tree, capsys):
        exit_code = main([str(sample_tree), "--format", "json", "--recursive"])
        data = json.loads(capsys.readouterr().out)

        assert exit_code == 0
        functions = sorted(r["function"] for r in data["results"])
        assert functions == ["handle", "helper", "run"]
        assert data["total_complexity"] == 1 + 1 + 3

    def test_threshold_filters(self, sample_tree, capsys):
        exit_code = main([str(sample_tree), "--threshold", "2", "--format", "json"])
        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert [r["function"] for r in data["results"]] == ["run"]

    def test_ignore_pattern(self, sample_tree, capsys):
        exit_code = main([str(sample_tree), "-r", "--ignore", "pkg/", "--format", "json"])
        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert sorted(r["function"] for r in data["results"]) == ["handle", "run"]

    def test_verbose_lists_factors(self, sample_tree, capsys):
        exit_code = main([str(sample_tree / "app.py"), "--verbose"])
        output = capsys.readouterr().out
        assert exit_code == 0
        assert "Complexity Factors:" in output
        assert "if (structural) (line 2, +1)" in output

    def test_invalid_path(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing")]) == 1
        assert capsys.readouterr().out == ""

    def test_negative_threshold_is_usage_error(self, sample_tree):
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_tree), "--threshold", "-1"])
        assert exc_info.value.code == 2

    def test_unsupported_language_is_usage_error(self, sample_tree):
        with pytest.raises(SystemExit) as exc_info:
            main([str(sample_tree), "--language", "rust"])
        assert exc_info.value.code == 2

    def test_unexpected_error(self, sample_tree):
        with patch("complexity_watch.cli.default_registry", side_effect=RuntimeError("boom")):
            assert main([str(sample_tree)]) == 1

    def test_cli_exits_with_main_code(self, sample_tree):
        with patch("sys.argv", ["complexity-watch", str(sample_tree / "app.py")]):
            with pytest.raises(SystemExit) as exc_info:
                cli()
        assert exc_info.value.code == 0
