"""Python function extractor.

Discovers ``def`` / ``async def`` definitions, including decorated and
nested ones, using the tree-sitter Python grammar.
"""

import logging
from typing import List, Optional

import tree_sitter_python as tspython
from tree_sitter import Node

from ..base_extractor import BaseFunctionExtractor
from ..grammar import LanguageGrammar, NodeKind, node_text

logger = logging.getLogger(__name__)


PYTHON_GRAMMAR = LanguageGrammar(
    name="python",
    node_kinds={
        "if_statement": NodeKind.CONDITIONAL,
        "elif_clause": NodeKind.ELIF,
        "else_clause": NodeKind.ELSE,
        "for_statement": NodeKind.RANGE_LOOP,
        "while_statement": NodeKind.WHILE_LOOP,
        "except_clause": NodeKind.CATCH,
        "except_group_clause": NodeKind.CATCH,
        "match_statement": NodeKind.SWITCH,
        "case_clause": NodeKind.CASE,
        "function_definition": NodeKind.FUNCTION,
        "boolean_operator": NodeKind.LOGICAL_OPERATOR,
    },
    logical_operators=frozenset({"and", "or"}),
    wrapper_types=frozenset({"decorated_definition"}),
)

# Parameter wrappers whose name sits in the ``name`` field
_NAMED_PARAMETERS = ("default_parameter", "typed_default_parameter")
# Parameter wrappers whose name is the first named child
_WRAPPED_PARAMETERS = ("typed_parameter", "list_splat_pattern", "dictionary_splat_pattern")


class PythonFunctionExtractor(BaseFunctionExtractor):
    """Function extractor for Python source.

    Decorators are unwrapped transparently and nested functions are reported
    with their enclosing function names, e.g. ``outer.inner``.
    """

    language = "python"
    extensions = ("py",)
    grammar = PYTHON_GRAMMAR

    def _language_handle(self):
        return tspython.language()

    def resolve_name(self, definition: Node, source: bytes) -> Optional[str]:
        name_node = definition.child_by_field_name("name")
        if name_node is None:
            return None
        return node_text(name_node, source) or None

    def collect_parameters(self, definition: Node, source: bytes) -> List[str]:
        parameters = definition.child_by_field_name("parameters")
        if parameters is None:
            return []

        names = []
        for param in parameters.named_children:
            name_node = self._parameter_name(param)
            if name_node is not None:
                names.append(node_text(name_node, source))
        return names

    @staticmethod
    def _parameter_name(param: Node) -> Optional[Node]:
        """Find the identifier naming a parameter; separators yield None."""
        node = param
        while node is not None:
            if node.type == "identifier":
                return node
            if node.type in _NAMED_PARAMETERS:
                node = node.child_by_field_name("name")
            elif node.type in _WRAPPED_PARAMETERS:
                node = node.named_children[0] if node.named_children else None
            else:
                return None
        return None
