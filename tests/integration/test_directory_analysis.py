"""Integration tests for directory and git repository fan-out."""

import shutil
import subprocess
from pathlib import Path

import pytest

from complexity_watch.complexity_analysis import ComplexityAnalyzer
from complexity_watch.config import AnalysisConfig
from complexity_watch.utils.files import (
    IgnoreMatcher,
    is_git_repository,
    list_files,
    list_git_files,
)

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, check=True, capture_output=True)


@pytest.fixture
def git_repo(sample_tree):
    """The sample tree as a git repository with one untracked file."""
    _git(sample_tree, "init", "-q")
    _git(sample_tree, "add", "app.py", "pkg/helpers.py", "README.md")
    (sample_tree / "scratch.py").write_text("def scratch(a):\n    if a:\n        pass\n")
    return sample_tree


class TestFileListing:
    """Test the file system helpers."""

    def test_list_files_top_level(self, sample_tree):
        names = [p.name for p in list_files(sample_tree)]
        assert names == ["README.md", "app.py", "engine.cpp"]

    def test_list_files_recursive(self, sample_tree):
        files = list_files(sample_tree, recursive=True)
        assert sample_tree / "pkg" / "helpers.py" in files

    def test_list_files_skips_vcs_and_caches(self, sample_tree):
        cache = sample_tree / "__pycache__"
        cache.mkdir()
        (cache / "stale.py").write_text("def stale():\n    pass\n")
        files = list_files(sample_tree, recursive=True)
        assert all("__pycache__" not in p.parts for p in files)

    def test_ignore_matcher_is_relative_to_root(self, sample_tree):
        matcher = IgnoreMatcher(["pkg/"], root=sample_tree)
        assert matcher.matches(sample_tree / "pkg" / "helpers.py")
        assert not matcher.matches(sample_tree / "app.py")

    def test_ignore_matcher_without_patterns(self, sample_tree):
        assert not IgnoreMatcher().matches(sample_tree / "app.py")


class TestDirectoryAnalysis:
    """Test analysis of plain directories."""

    def test_top_level_only(self, analyzer, sample_tree):
        results = analyzer.analyze_directory(sample_tree)
        by_name = {r.function_name: r for r in results}
        assert set(by_name) == {"handle", "run"}
        assert by_name["run"].complexity == 3
        assert by_name["run"].file_path == str(sample_tree / "engine.cpp")

    def test_recursive(self, analyzer, sample_tree):
        results = analyzer.analyze_directory(sample_tree, recursive=True)
        assert {r.function_name for r in results} == {"handle", "run", "helper"}

    def test_recursive_from_config(self, registry, sample_tree):
        analyzer = ComplexityAnalyzer(registry, AnalysisConfig(recursive=True))
        results = analyzer.analyze_directory(sample_tree)
        assert "helper" in {r.function_name for r in results}

    def test_ignore_patterns(self, registry, sample_tree):
        analyzer = ComplexityAnalyzer(
            registry, AnalysisConfig(ignore_patterns=["*.cpp", "pkg/"], recursive=True)
        )
        results = analyzer.analyze_directory(sample_tree)
        assert [r.function_name for r in results] == ["handle"]

    def test_forced_language(self, registry, sample_tree):
        analyzer = ComplexityAnalyzer(registry, AnalysisConfig(language="cpp", recursive=True))
        results = analyzer.analyze_directory(sample_tree)
        assert [r.function_name for r in results] == ["run"]

    def test_unreadable_file_is_skipped(self, analyzer, sample_tree):
        (sample_tree / "broken.py").write_bytes(b"\xff\xfe\xfa")
        results = analyzer.analyze_directory(sample_tree)
        assert {r.function_name for r in results} == {"handle", "run"}


@requires_git
class TestGitRepositoryAnalysis:
    """Test analysis of git working trees."""

    def test_is_git_repository(self, git_repo, tmp_path_factory):
        assert is_git_repository(git_repo)
        assert not is_git_repository(tmp_path_factory.mktemp("plain"))

    def test_list_git_files(self, git_repo):
        files = sorted(p.relative_to(git_repo).as_posix() for p in list_git_files(git_repo))
        assert files == ["README.md", "app.py", "pkg/helpers.py"]

    def test_only_tracked_files_are_analyzed(self, analyzer, git_repo):
        results = analyzer.analyze_git_repository(git_repo)
        assert {r.function_name for r in results} == {"handle", "helper"}

    def test_analyze_path_prefers_git(self, analyzer, git_repo):
        results = analyzer.analyze_path(git_repo)
        assert {r.function_name for r in results} == {"handle", "helper"}

    def test_ignore_patterns_apply(self, registry, git_repo):
        analyzer = ComplexityAnalyzer(registry, AnalysisConfig(ignore_patterns=["pkg/"]))
        results = analyzer.analyze_git_repository(git_repo)
        assert [r.function_name for r in results] == ["handle"]

    def test_not_a_repository(self, analyzer, tmp_path):
        assert analyzer.analyze_git_repository(tmp_path) == []
        assert list_git_files(tmp_path) == []
