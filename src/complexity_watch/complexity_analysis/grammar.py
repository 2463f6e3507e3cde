"""Closed classification of syntax node types for complexity scoring.

Each language contributes a ``LanguageGrammar`` that maps its tree-sitter node
types onto the small, language-independent ``NodeKind`` set. The calculator
only ever dispatches on ``NodeKind``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional


class NodeKind(Enum):
    """Syntactic roles that matter to cognitive complexity."""

    CONDITIONAL = "if"
    FOR_LOOP = "for"
    RANGE_LOOP = "for-each"
    WHILE_LOOP = "while"
    DO_WHILE = "do-while"
    CATCH = "catch"
    SWITCH = "switch"
    ELSE = "else"
    ELIF = "else if"
    CASE = "case"
    FUNCTION = "function"
    LOGICAL_OPERATOR = "boolean operator"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Human readable construct name used in factor descriptions."""
        return self.value

    @property
    def increases_nesting(self) -> bool:
        """Whether everything inside this construct sits one level deeper."""
        return self in _NESTING_KINDS

    @property
    def is_control_structure(self) -> bool:
        """Whether entering this construct can add a structural increment."""
        return self in _NESTING_KINDS or self in (NodeKind.ELSE, NodeKind.ELIF, NodeKind.CASE)


_NESTING_KINDS = frozenset(
    {
        NodeKind.CONDITIONAL,
        NodeKind.FOR_LOOP,
        NodeKind.RANGE_LOOP,
        NodeKind.WHILE_LOOP,
        NodeKind.DO_WHILE,
        NodeKind.CATCH,
        NodeKind.SWITCH,
    }
)


@dataclass(frozen=True)
class LanguageGrammar:
    """Per-language table of node types and logical operator tokens.

    ``node_kinds`` is keyed by tree-sitter node type. Node types listed under
    ``NodeKind.LOGICAL_OPERATOR`` are binary expressions whose ``operator``
    field is checked against ``logical_operators``.
    """

    name: str
    node_kinds: Mapping[str, NodeKind]
    logical_operators: FrozenSet[str] = field(default_factory=frozenset)
    wrapper_types: FrozenSet[str] = field(default_factory=frozenset)
    body_field: str = "body"

    def kind_of(self, node: Any) -> NodeKind:
        """Classify a node; unknown or absent nodes are ``OTHER``."""
        if node is None:
            return NodeKind.OTHER
        return self.node_kinds.get(node.type, NodeKind.OTHER)

    def unwrap(self, node: Any) -> Any:
        """Strip wrapper nodes (e.g. decorators) down to the wrapped definition."""
        while node is not None and node.type in self.wrapper_types:
            node = node.child_by_field_name("definition")
        return node

    def as_function(self, node: Any) -> Optional[Any]:
        """Return the function definition behind ``node``, if it is one."""
        definition = self.unwrap(node)
        if self.kind_of(definition) is NodeKind.FUNCTION:
            return definition
        return None

    def logical_operator(self, node: Any) -> Optional[str]:
        """Return the operator token if ``node`` is a logical AND/OR expression."""
        if self.kind_of(node) is not NodeKind.LOGICAL_OPERATOR:
            return None
        operator = node.child_by_field_name("operator")
        if operator is None or operator.type not in self.logical_operators:
            return None
        return operator.type


def node_text(node: Any, source: bytes) -> str:
    """Slice a node's text out of the source bytes it was parsed from."""
    if node is None or not source:
        return ""
    if node.start_byte > node.end_byte or node.end_byte > len(source):
        return ""
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
