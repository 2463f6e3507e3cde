"""Abstract base class and registry for language-specific function extractors.

This module provides the foundation for discovering function definitions
across multiple programming languages with a consistent interface.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any, Dict, Iterator, List, Optional, Tuple

from tree_sitter import Language, Node, Parser, Tree

from .grammar import LanguageGrammar, node_text
from .models import FunctionUnit

logger = logging.getLogger(__name__)


class ParserInitializationError(RuntimeError):
    """Raised when the tree-sitter parser for a language cannot be built."""

    def __init__(self, language: str, cause: Exception):
        super().__init__(f"Failed to initialize {language} parser: {cause}")
        self.language = language
        self.cause = cause


class BaseFunctionExtractor(ABC):
    """Abstract base class for language-specific function extractors.

    Each instance owns its own tree-sitter ``Parser``; instances must not be
    shared between concurrent callers. Use ``clone()`` (or the registry) to
    obtain a fresh one.
    """

    language: str = ""
    extensions: Tuple[str, ...] = ()
    grammar: LanguageGrammar

    def __init__(self):
        """Initialize the extractor and its tree-sitter parser.

        Raises:
            ParserInitializationError: If the grammar cannot be loaded
        """
        self._parser = self._create_parser()

    @abstractmethod
    def _language_handle(self) -> Any:
        """Return the grammar handle exported by the tree-sitter language package."""
        pass

    @abstractmethod
    def resolve_name(self, definition: Node, source: bytes) -> Optional[str]:
        """Resolve the unqualified name of a function definition.

        Args:
            definition: Function definition node
            source: Source bytes the tree was parsed from

        Returns:
            The function name, or None if the definition is malformed
        """
        pass

    @abstractmethod
    def collect_parameters(self, definition: Node, source: bytes) -> List[str]:
        """Collect parameter names of a function definition in declaration order."""
        pass

    def clone(self) -> "BaseFunctionExtractor":
        """Create a fresh extractor of the same language with its own parser."""
        return type(self)()

    def parse(self, text: str) -> Optional[Tree]:
        """Parse source text into a syntax tree.

        Args:
            text: Source code

        Returns:
            The tree, or None if the parser failed
        """
        try:
            return self._parser.parse(text.encode("utf-8"))
        except Exception as e:
            logger.error(f"Failed to parse {self.language} source: {e}")
            return None

    def parse_functions(self, file_text: str, file_path: str = "") -> List[FunctionUnit]:
        """Extract every function definition from a file.

        Args:
            file_text: Full file content
            file_path: Path used for log messages only

        Returns:
            Function units in depth-first document order, outer before inner
        """
        if not file_text:
            logger.warning(f"Empty file content: {file_path or '<string>'}")
            return []

        logger.debug(f"Parsing file: {file_path or '<string>'}")
        tree = self.parse(file_text)
        if tree is None:
            logger.error(f"Failed to parse file: {file_path or '<string>'}")
            return []

        return self.functions_in_tree(tree, file_text)

    def functions_in_tree(self, tree: Tree, file_text: str) -> List[FunctionUnit]:
        """Extract function units from an already parsed tree.

        Args:
            tree: Tree produced by ``parse(file_text)``
            file_text: Source the tree was parsed from
        """
        source = file_text.encode("utf-8")
        functions = [
            self._build_unit(definition, name, source)
            for definition, name in self.iter_definitions(tree.root_node, source)
        ]

        logger.debug(f"Found {len(functions)} functions")
        for func in functions:
            logger.debug(f"Function: {func.name} (lines {func.start_line}-{func.end_line})")
        return functions

    def iter_definitions(self, root: Node, source: bytes) -> Iterator[Tuple[Node, str]]:
        """Walk a tree and yield each function definition with its qualified name.

        The walk is pre-order, left to right, and keeps an explicit stack so
        deeply nested input cannot exhaust the interpreter stack. Nested
        definitions are qualified with the names of their enclosing functions.
        Classes are not part of the chain, so a local class method and a
        sibling nested function of the same name both come out as
        ``outer.m``; names are labels, not keys.

        Args:
            root: Node to start from, usually the tree root
            source: Source bytes the tree was parsed from

        Yields:
            Tuples of (definition node, qualified name)
        """
        stack: List[Tuple[Node, Tuple[str, ...]]] = [(root, ())]
        while stack:
            node, scope = stack.pop()
            if node is None:
                continue

            parent = node
            child_scope = scope
            definition = self.grammar.as_function(node)
            if definition is not None:
                # Descend through the definition itself so wrapped definitions
                # are not visited a second time
                parent = definition
                name = self.resolve_name(definition, source)
                if name:
                    child_scope = scope + (name,)
                    yield definition, ".".join(child_scope)
                else:
                    logger.debug(
                        f"Could not resolve function name at line "
                        f"{definition.start_point[0] + 1}, skipping"
                    )

            stack.extend((child, child_scope) for child in reversed(parent.children))

    def _create_parser(self) -> Parser:
        try:
            return Parser(Language(self._language_handle()))
        except Exception as e:
            logger.error(f"Failed to initialize {self.language} parser: {e}")
            raise ParserInitializationError(self.language, e) from e

    def _build_unit(self, definition: Node, name: str, source: bytes) -> FunctionUnit:
        body = definition.child_by_field_name(self.grammar.body_field)
        return FunctionUnit(
            name=name,
            start_line=definition.start_point[0] + 1,
            end_line=definition.end_point[0] + 1,
            body=node_text(body, source),
            parameters=tuple(self.collect_parameters(definition, source)),
            start_byte=definition.start_byte,
            node=body,
        )


def _extension_of(path: Any) -> str:
    """Return the lowercased extension of a path without its leading dot."""
    if not path:
        return ""
    return PurePath(str(path)).suffix.lstrip(".").lower()


class ExtractorRegistry:
    """Registry for managing language-specific extractors.

    Holds one prototype extractor per language and maps file extensions to
    languages. Lookups hand out fresh clones so that callers never share a
    parser.
    """

    def __init__(self):
        self._prototypes: Dict[str, BaseFunctionExtractor] = {}
        self._extensions: Dict[str, str] = {}

    def register(self, extractor: BaseFunctionExtractor, language: Optional[str] = None) -> None:
        """Register an extractor prototype.

        Args:
            extractor: Extractor instance used as the prototype
            language: Language identifier (defaults to ``extractor.language``)
        """
        if extractor is None:
            logger.error("Attempting to register null extractor")
            return

        language = (language or extractor.language).lower()
        self._prototypes[language] = extractor

        for extension in extractor.extensions:
            extension = extension.lstrip(".").lower()
            previous = self._extensions.get(extension)
            if previous and previous != language:
                logger.debug(f"Extension .{extension} reassigned from {previous} to {language}")
            self._extensions[extension] = language

        logger.info(f"Registered {type(extractor).__name__} for {language}")

    def create_for_language(self, language: Optional[str]) -> Optional[BaseFunctionExtractor]:
        """Get a fresh extractor for the specified language.

        Args:
            language: Language identifier

        Returns:
            New extractor instance or None if not supported
        """
        if not language:
            return None
        prototype = self._prototypes.get(language.lower())
        if prototype is None:
            return None
        return prototype.clone()

    def create_for_extension(self, file_path: Any) -> Optional[BaseFunctionExtractor]:
        """Get a fresh extractor based on a file's extension.

        Args:
            file_path: Path (or bare file name) of the file

        Returns:
            New extractor instance or None if the extension is not mapped
        """
        return self.create_for_language(self.language_for_path(file_path))

    def language_for_path(self, file_path: Any) -> Optional[str]:
        """Resolve the language owning a file's extension."""
        extension = _extension_of(file_path)
        if not extension:
            return None
        return self._extensions.get(extension)

    def supported_languages(self) -> List[str]:
        """Get list of supported language identifiers."""
        return list(self._prototypes.keys())

    def supported_extensions(self) -> List[str]:
        """Get list of claimed file extensions (without leading dot)."""
        return list(self._extensions.keys())

    def is_supported(self, language: str) -> bool:
        """Check if a language has a registered extractor."""
        return bool(language) and language.lower() in self._prototypes
