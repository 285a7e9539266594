"""Node kinds that checkers can subscribe to.

The set is closed. Tree-sitter node types outside the table below have no
kind: they dispatch to nothing, but their children are still walked.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class NodeKind(Enum):
    """Syntactic constructs a checker may be triggered by."""

    ASSIGNMENT = "assignment"
    BINARY_EXPRESSION = "binary-expression"
    CALL_EXPRESSION = "call-expression"
    COMPOSITE_LITERAL = "composite-literal"
    EXPRESSION_STATEMENT = "expression-statement"
    FOR_LOOP = "for-loop"
    FUNCTION_DECLARATION = "function-declaration"
    FUNCTION_LITERAL = "function-literal"
    GENERAL_DECLARATION = "general-declaration"
    INTERFACE_TYPE = "interface-type"
    RANGE_LOOP = "range-loop"
    RETURN_STATEMENT = "return-statement"
    STRUCT_TYPE = "struct-type"

    @classmethod
    def parse(cls, value: str) -> NodeKind:
        """Look up a kind by its value or member name, case-insensitively.

        Raises:
            ValueError: If no kind matches
        """
        normalized = value.strip().lower().replace("_", "-")
        for kind in cls:
            if kind.value == normalized:
                return kind
        raise ValueError(f"unknown node kind: {value!r}")


# tree-sitter-go node type -> kind
GO_NODE_KINDS: dict[str, NodeKind] = {
    "assignment_statement": NodeKind.ASSIGNMENT,
    "short_var_declaration": NodeKind.ASSIGNMENT,
    "binary_expression": NodeKind.BINARY_EXPRESSION,
    "call_expression": NodeKind.CALL_EXPRESSION,
    "composite_literal": NodeKind.COMPOSITE_LITERAL,
    "expression_statement": NodeKind.EXPRESSION_STATEMENT,
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "method_declaration": NodeKind.FUNCTION_DECLARATION,
    "func_literal": NodeKind.FUNCTION_LITERAL,
    "import_declaration": NodeKind.GENERAL_DECLARATION,
    "const_declaration": NodeKind.GENERAL_DECLARATION,
    "var_declaration": NodeKind.GENERAL_DECLARATION,
    "type_declaration": NodeKind.GENERAL_DECLARATION,
    "interface_type": NodeKind.INTERFACE_TYPE,
    "return_statement": NodeKind.RETURN_STATEMENT,
    "struct_type": NodeKind.STRUCT_TYPE,
}


def classify(ts_node: Any) -> Optional[NodeKind]:
    """Map a tree-sitter Go node onto a NodeKind, or None.

    ``for_statement`` covers both loop forms; a ``range_clause`` child makes
    it a range loop.
    """
    node_type = ts_node.type
    if node_type == "for_statement":
        for child in ts_node.children:
            if child.type == "range_clause":
                return NodeKind.RANGE_LOOP
        return NodeKind.FOR_LOOP
    return GO_NODE_KINDS.get(node_type)
