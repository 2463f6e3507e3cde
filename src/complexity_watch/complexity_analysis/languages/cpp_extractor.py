"""C/C++ function extractor.

Discovers ``function_definition`` nodes using the tree-sitter C++ grammar and
resolves their names through the declarator chain, e.g.::

    int *Foo::make(int n) { ... }

    function_definition
      declarator: pointer_declarator
        declarator: function_declarator
          declarator: qualified_identifier
            name: identifier "make"
"""

import logging
from typing import List, Optional

import tree_sitter_cpp as tscpp
from tree_sitter import Node

from ..base_extractor import BaseFunctionExtractor
from ..grammar import LanguageGrammar, NodeKind, node_text

logger = logging.getLogger(__name__)


CPP_GRAMMAR = LanguageGrammar(
    name="cpp",
    node_kinds={
        "if_statement": NodeKind.CONDITIONAL,
        "else_clause": NodeKind.ELSE,
        "for_statement": NodeKind.FOR_LOOP,
        "for_range_loop": NodeKind.RANGE_LOOP,
        "while_statement": NodeKind.WHILE_LOOP,
        "do_statement": NodeKind.DO_WHILE,
        "catch_clause": NodeKind.CATCH,
        "switch_statement": NodeKind.SWITCH,
        "case_statement": NodeKind.CASE,
        "function_definition": NodeKind.FUNCTION,
        "binary_expression": NodeKind.LOGICAL_OPERATOR,
    },
    logical_operators=frozenset({"&&", "||", "and", "or"}),
)

# Nodes that name the declared entity
NAME_TYPES = frozenset(
    {"identifier", "field_identifier", "destructor_name", "operator_name", "operator_cast"}
)

# Nodes whose ``name`` field carries the name
_SCOPED_TYPES = frozenset({"qualified_identifier", "template_function", "template_method"})

# Named children of declarators that never lead to the declared name
_NON_NAME_CHILDREN = frozenset(
    {
        "parameter_list",
        "type_qualifier",
        "attribute_specifier",
        "attribute_declaration",
        "ms_call_modifier",
        "ms_pointer_modifier",
        "trailing_return_type",
        "noexcept",
        "throw_specifier",
        "virtual_specifier",
        "ref_qualifier",
        "comment",
    }
)

_PARAMETER_TYPES = frozenset(
    {
        "parameter_declaration",
        "optional_parameter_declaration",
        "variadic_parameter_declaration",
    }
)


class CppFunctionExtractor(BaseFunctionExtractor):
    """Function extractor for C and C++ source."""

    language = "cpp"
    extensions = ("cpp", "cxx", "cc", "c", "hpp", "hxx", "hh", "h")
    grammar = CPP_GRAMMAR

    def _language_handle(self):
        return tscpp.language()

    def resolve_name(self, definition: Node, source: bytes) -> Optional[str]:
        declarator = definition.child_by_field_name("declarator")
        if declarator is None:
            logger.debug("Could not find declarator node")
            return None
        return self.find_declarator_name(declarator, source)

    def collect_parameters(self, definition: Node, source: bytes) -> List[str]:
        parameter_list = self._parameter_list(definition)
        if parameter_list is None:
            return []

        names = []
        for param in parameter_list.named_children:
            if param.type not in _PARAMETER_TYPES:
                continue
            declarator = param.child_by_field_name("declarator")
            name = self.find_declarator_name(declarator, source)
            if name:
                names.append(name)
        return names

    @staticmethod
    def find_declarator_name(declarator: Optional[Node], source: bytes) -> Optional[str]:
        """Follow a declarator chain down to the declared name.

        Stops at the first plain identifier; qualified and template names are
        resolved through their ``name`` field, so ``ns::Foo::bar`` gives
        ``bar``.

        Returns:
            The name, or None when the chain holds no identifier
        """
        current = declarator
        while current is not None:
            if current.type in NAME_TYPES:
                return node_text(current, source) or None
            if current.type in _SCOPED_TYPES:
                current = current.child_by_field_name("name")
                continue
            current = _inner_declarator(current)
        return None

    @staticmethod
    def _parameter_list(definition: Node) -> Optional[Node]:
        """Find the parameter list of the function itself.

        The innermost function declarator around the name is the function's
        own; outer ones belong to a returned function pointer, e.g.
        ``int (*g(int x))(double)``.
        """
        parameters = None
        current = definition.child_by_field_name("declarator")
        while current is not None:
            if current.type == "function_declarator":
                parameters = current.child_by_field_name("parameters")
            if current.type in NAME_TYPES or current.type in _SCOPED_TYPES:
                break
            current = _inner_declarator(current)
        return parameters


def _inner_declarator(node: Node) -> Optional[Node]:
    """Step one level down a declarator chain."""
    inner = node.child_by_field_name("declarator")
    if inner is not None:
        return inner
    # reference_declarator and friends hold the inner declarator unlabelled
    for child in node.named_children:
        if child.type not in _NON_NAME_CHILDREN:
            return child
    return None
