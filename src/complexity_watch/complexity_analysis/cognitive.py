"""Cognitive complexity calculator.

Scores a single function body following the cognitive complexity rules:

- every control structure adds a structural increment of 1;
- a nesting construct placed inside another adds a nesting increment equal
  to the depth at which it appears;
- an ``else if`` / ``elif`` continuation adds a flat hybrid increment of 1
  and neither a structural nor a nesting increment;
- each sequence of like boolean operators adds a fundamental increment of 1.

Nested function definitions are not descended into; they are scored as
separate units.
"""

import logging
from typing import Any, Iterable, Optional

from .grammar import LanguageGrammar, NodeKind, node_text
from .models import ComplexityFactor, ComplexityResult, FunctionUnit, IncrementKind

logger = logging.getLogger(__name__)

# Stack marker closing a nesting construct once its subtree has been visited
_LEAVE = object()


class CognitiveComplexityCalculator:
    """Language-agnostic cognitive complexity calculator.

    The calculator holds no per-call state; every call to ``calculate`` works
    on its own ``ComplexityResult``, so one instance can score any number of
    functions.
    """

    def __init__(self, grammar: LanguageGrammar, include_boolean_operators: bool = True):
        """Initialize the calculator.

        Args:
            grammar: Node classification table of the language being scored
            include_boolean_operators: Count fundamental increments for
                sequences of logical AND/OR operators
        """
        self.grammar = grammar
        self.include_boolean_operators = include_boolean_operators

    def calculate(self, node: Any, source_text: str = "") -> ComplexityResult:
        """Calculate the cognitive complexity of one function.

        Args:
            node: Function body node, or the function definition itself
            source_text: Source the tree was parsed from, used to quote
                operator tokens in factor descriptions

        Returns:
            ComplexityResult with the total and the ordered factors
        """
        result = ComplexityResult()
        if node is None:
            logger.debug("Received null node, nothing to score")
            return result

        body = self._function_body(node)
        if body is None:
            logger.debug(
                f"No {self.grammar.name} body found for {node.type} "
                f"at line {node.start_point[0] + 1}"
            )
            return result

        logger.debug(f"Scoring {self.grammar.name} {body.type} at line {body.start_point[0] + 1}")

        source = source_text.encode("utf-8") if source_text else b""
        result.nesting_level = 0
        try:
            self._walk(body, source, result)
        finally:
            result.nesting_level = 0
        return result

    def calculate_batch(
        self, units: Iterable[FunctionUnit], source_text: str = ""
    ) -> ComplexityResult:
        """Score several function units into one aggregated result.

        The returned ``function_complexities`` maps every unit name to its own
        score; ``factors`` holds all factors in unit order.
        """
        batch = ComplexityResult()
        for unit in units:
            batch.merge(unit.name, self.calculate(unit.node, source_text))
        return batch

    def _function_body(self, node: Any) -> Optional[Any]:
        """Resolve the node to traverse: a definition's body or the node itself."""
        definition = self.grammar.as_function(node)
        if definition is None:
            return node
        return definition.child_by_field_name(self.grammar.body_field)

    def _walk(self, root: Any, source: bytes, result: ComplexityResult) -> None:
        """Pre-order traversal with an explicit stack and nesting counter."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node is _LEAVE:
                result.nesting_level -= 1
                continue
            if node is None:
                continue

            kind = self.grammar.kind_of(node)
            if kind is NodeKind.FUNCTION:
                logger.debug(
                    f"Skipping nested {node.type} at line {node.start_point[0] + 1}"
                )
                continue

            opens_level = False
            if kind is NodeKind.LOGICAL_OPERATOR:
                if self.include_boolean_operators:
                    self._score_boolean_operator(node, source, result)
            elif kind.is_control_structure:
                opens_level = self._score_control_structure(node, kind, result)

            if opens_level:
                result.nesting_level += 1
                stack.append(_LEAVE)
            stack.extend(reversed(node.children))

    def _score_control_structure(
        self, node: Any, kind: NodeKind, result: ComplexityResult
    ) -> bool:
        """Add the increments for a control structure.

        Returns:
            True if the construct opens a new nesting level
        """
        line = node.start_point[0] + 1

        match kind:
            case NodeKind.ELIF:
                self._add(result, "else if (hybrid)", 1, line, IncrementKind.HYBRID)
                return False
            case NodeKind.CONDITIONAL if self._is_chained_conditional(node):
                # Continues the enclosing conditional's nesting level
                self._add(result, "else if (hybrid)", 1, line, IncrementKind.HYBRID)
                return False
            case NodeKind.ELSE if self._wraps_chained_conditional(node):
                return False
            case _:
                depth = result.nesting_level
                self._add(
                    result, f"{kind.label} (structural)", 1, line, IncrementKind.STRUCTURAL
                )
                if kind.increases_nesting and depth > 0:
                    self._add(
                        result, f"nested {kind.label} (nesting)", depth, line, IncrementKind.NESTING
                    )
                return kind.increases_nesting

    def _score_boolean_operator(self, node: Any, source: bytes, result: ComplexityResult) -> None:
        """Add a fundamental increment for the first operator of a like sequence."""
        operator = self.grammar.logical_operator(node)
        if operator is None:
            return
        # ``a && b && c`` is a single sequence; only its outermost node counts
        if self.grammar.logical_operator(node.parent) == operator:
            return

        token = node.child_by_field_name("operator")
        text = node_text(token, source) or operator
        self._add(
            result,
            f"boolean operator {text} (fundamental)",
            1,
            node.start_point[0] + 1,
            IncrementKind.FUNDAMENTAL,
        )

    def _is_chained_conditional(self, node: Any) -> bool:
        """A conditional directly inside an else/elif clause is an else-if."""
        return self.grammar.kind_of(node.parent) in (NodeKind.ELSE, NodeKind.ELIF)

    def _wraps_chained_conditional(self, node: Any) -> bool:
        """An else clause whose only statement is a conditional."""
        statements = [c for c in node.named_children if c.type != "comment"]
        return (
            len(statements) == 1
            and self.grammar.kind_of(statements[0]) is NodeKind.CONDITIONAL
        )

    @staticmethod
    def _add(
        result: ComplexityResult,
        description: str,
        increment: int,
        line_number: int,
        kind: IncrementKind,
    ) -> None:
        result.add_factor(ComplexityFactor(description, increment, line_number, kind))
        logger.debug(
            f"Added {kind.value} complexity: +{increment} for {description} at line {line_number}"
        )

