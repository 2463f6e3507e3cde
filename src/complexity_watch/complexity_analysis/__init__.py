"""Cognitive complexity analysis for multiple programming languages.

This module provides a plugin-based architecture for discovering functions
with tree-sitter and scoring them with a single language-agnostic cognitive
complexity calculator.
"""

from .analyzer import ComplexityAnalyzer
from .base_extractor import BaseFunctionExtractor, ExtractorRegistry, ParserInitializationError
from .cognitive import CognitiveComplexityCalculator
from .grammar import LanguageGrammar, NodeKind
from .languages import CppFunctionExtractor, PythonFunctionExtractor, default_registry
from .models import (
    AnalysisResult,
    ComplexityFactor,
    ComplexityResult,
    FunctionUnit,
    IncrementKind,
)

__all__ = [
    "AnalysisResult",
    "BaseFunctionExtractor",
    "CognitiveComplexityCalculator",
    "ComplexityAnalyzer",
    "ComplexityFactor",
    "ComplexityResult",
    "CppFunctionExtractor",
    "ExtractorRegistry",
    "FunctionUnit",
    "IncrementKind",
    "LanguageGrammar",
    "NodeKind",
    "ParserInitializationError",
    "PythonFunctionExtractor",
    "default_registry",
]
