"""Language-specific function extractor implementations.

This module contains concrete implementations of the BaseFunctionExtractor
for the supported languages, and the factory for the default registry.
"""

from ..base_extractor import ExtractorRegistry
from .cpp_extractor import CPP_GRAMMAR, CppFunctionExtractor
from .python_extractor import PYTHON_GRAMMAR, PythonFunctionExtractor

__all__ = [
    "CPP_GRAMMAR",
    "CppFunctionExtractor",
    "PYTHON_GRAMMAR",
    "PythonFunctionExtractor",
    "default_registry",
]


def default_registry() -> ExtractorRegistry:
    """Build a registry with every built-in extractor registered.

    Construct it once at startup and pass it to whoever needs it.

    Raises:
        ParserInitializationError: If a bundled grammar cannot be loaded
    """
    registry = ExtractorRegistry()
    registry.register(CppFunctionExtractor())
    registry.register(PythonFunctionExtractor())
    return registry
