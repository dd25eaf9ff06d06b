"""Parse tree definitions for the Simple language.

The parser builds one tree per program out of a single `Node` type. What
a node means is given by its `NodeType`; its operands and sub-statements
are its ordered `children`. Child order is significant:

* ASSIGN: variable, expression
* IF: condition, then-statement[, else-statement]
* WHILE: condition, body
* FOR: initial assignment, limit expression, body (``descending`` is set
  for DOWNTO loops)
* LOOP: body statements..., TEST (whose one child is the UNTIL condition)
* SELECT: selector, SELECT_BRANCH...; each branch holds SELECT_CONSTANTS
  and one statement
* binary operators: left operand, right operand
* NOT: its operand
* WRITE/WRITELN: value[, field width[, decimal places]]

A parent owns its children outright; nodes keep no link back to their
parent. VARIABLE nodes refer to a symbol table entry, which they do not own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from .symtab import SymtabEntry


class NodeType(Enum):
    PROGRAM = 'PROGRAM'
    COMPOUND = 'COMPOUND'
    ASSIGN = 'ASSIGN'
    LOOP = 'LOOP'
    TEST = 'TEST'
    WRITE = 'WRITE'
    WRITELN = 'WRITELN'

    IF = 'IF'
    WHILE = 'WHILE'
    FOR = 'FOR'
    SELECT = 'SELECT'
    SELECT_BRANCH = 'SELECT_BRANCH'
    SELECT_CONSTANTS = 'SELECT_CONSTANTS'

    ADD = 'ADD'
    SUBTRACT = 'SUBTRACT'
    MULTIPLY = 'MULTIPLY'
    DIVIDE = 'DIVIDE'
    INTDIV = 'INTDIV'
    EQ = 'EQ'
    NEQ = 'NEQ'
    LT = 'LT'
    GT = 'GT'
    LEQ = 'LEQ'
    GEQ = 'GEQ'
    CEQ = 'CEQ'
    AND = 'AND'
    OR = 'OR'
    NOT = 'NOT'

    VARIABLE = 'VARIABLE'
    INTEGER_CONSTANT = 'INTEGER_CONSTANT'
    REAL_CONSTANT = 'REAL_CONSTANT'
    STRING_CONSTANT = 'STRING_CONSTANT'


BINARY_OPERATORS = frozenset({
    NodeType.ADD, NodeType.SUBTRACT, NodeType.MULTIPLY, NodeType.DIVIDE,
    NodeType.INTDIV, NodeType.EQ, NodeType.NEQ, NodeType.LT, NodeType.GT,
    NodeType.LEQ, NodeType.GEQ, NodeType.AND, NodeType.OR, NodeType.CEQ,
})

CONSTANTS = frozenset({
    NodeType.INTEGER_CONSTANT, NodeType.REAL_CONSTANT, NodeType.STRING_CONSTANT,
})


@dataclass(eq=False)
class Node:
    type: NodeType
    line_number: int = 0
    text: Optional[str] = None
    entry: Optional[SymtabEntry] = None
    value: Any = None
    children: List['Node'] = field(default_factory=list)
    descending: bool = False

    def adopt(self, child: Optional['Node']) -> None:
        # A failed sub-parse yields None; the tree is never executed then.
        if child is not None:
            self.children.append(child)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return (
            self.type == other.type
            and self.text == other.text
            and self.value == other.value
            and self.descending == other.descending
            and _entry_name(self.entry) == _entry_name(other.entry)
            and self.children == other.children
        )

    def __repr__(self) -> str:
        label = self.text if self.text is not None else self.value
        if label is None:
            return f"Node({self.type.name}, {len(self.children)} children)"
        return f"Node({self.type.name}, {label!r}, {len(self.children)} children)"


def _entry_name(entry: Optional[SymtabEntry]) -> Optional[str]:
    return entry.name if entry is not None else None
