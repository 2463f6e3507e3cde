"""Shared pytest fixtures for all tests."""

import os
from pathlib import Path

import pytest

from complexity_watch.complexity_analysis import (
    CognitiveComplexityCalculator,
    ComplexityAnalyzer,
    CppFunctionExtractor,
    PythonFunctionExtractor,
    default_registry,
)
from complexity_watch.config import AnalysisConfig


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep COMPLEXITY_* variables of the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("COMPLEXITY_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def registry():
    """Registry with the built-in extractors."""
    return default_registry()


@pytest.fixture
def python_extractor():
    """Fresh Python extractor."""
    return PythonFunctionExtractor()


@pytest.fixture
def cpp_extractor():
    """Fresh C++ extractor."""
    return CppFunctionExtractor()


@pytest.fixture
def analyzer(registry):
    """Analyzer with default configuration."""
    return ComplexityAnalyzer(registry, AnalysisConfig())


@pytest.fixture
def score_python(python_extractor):
    """Score every function of a Python snippet, keyed by qualified name."""

    def _score(code: str, include_boolean_operators: bool = True):
        calculator = CognitiveComplexityCalculator(
            python_extractor.grammar, include_boolean_operators
        )
        units = python_extractor.parse_functions(code)
        return {unit.name: calculator.calculate(unit.node, code) for unit in units}

    return _score


@pytest.fixture
def score_cpp(cpp_extractor):
    """Score every function of a C++ snippet, keyed by qualified name."""

    def _score(code: str, include_boolean_operators: bool = True):
        calculator = CognitiveComplexityCalculator(cpp_extractor.grammar, include_boolean_operators)
        units = cpp_extractor.parse_functions(code)
        return {unit.name: calculator.calculate(unit.node, code) for unit in units}

    return _score


@pytest.fixture
def sample_tree(tmp_path) -> Path:
    """Directory with Python, C++ and unsupported files, one level deep."""
    (tmp_path / "app.py").write_text(
        "def handle(request):\n"
        "    if request:\n"
        "        return 1\n"
        "    return 0\n"
    )
    (tmp_path / "engine.cpp").write_text(
        "int run(int n) {\n"
        "    for (int i = 0; i < n; i++) {\n"
        "        if (i % 2) {\n"
        "            n--;\n"
        "        }\n"
        "    }\n"
        "    return n;\n"
        "}\n"
    )
    (tmp_path / "README.md").write_text("# not code\n")
    sub = tmp_path / "pkg"
    sub.mkdir()
    (sub / "helpers.py").write_text(
        "def helper(x):\n"
        "    while x:\n"
        "        x -= 1\n"
        "    return x\n"
    )
    return tmp_path
