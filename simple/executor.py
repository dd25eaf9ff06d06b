"""Tree-walking executor for the Simple language.

The executor visits a parse tree depth first. Statement nodes perform
their side effects (assignment, control flow, output); expression nodes
return a `Value`. Dispatch goes through one table keyed by `NodeType`
that must cover every node type; a node with no rule raises
`InternalError`.

Variables live in their symbol table entries: an ASSIGN node stores the
value of its expression in the entry referenced by its VARIABLE child,
and a VARIABLE node in an expression reads it back.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Dict, List, Optional, TextIO

from .errors import ErrorReporter, InternalError, SimpleRuntimeError
from .parser import parse_source
from .symtab import Symtab
from .tree import Node, NodeType
from .types import Value, arithmetic, compare, equals, format_value, truth

logger = logging.getLogger(__name__)


ARITHMETIC_OPERATORS = {
    NodeType.ADD: '+',
    NodeType.SUBTRACT: '-',
    NodeType.MULTIPLY: '*',
    NodeType.DIVIDE: '/',
    NodeType.INTDIV: 'DIV',
}

RELATIONAL_OPERATORS = {
    NodeType.EQ: '=',
    NodeType.CEQ: '=',
    NodeType.NEQ: '<>',
    NodeType.LT: '<',
    NodeType.GT: '>',
    NodeType.LEQ: '<=',
    NodeType.GEQ: '>=',
}

# Node type -> name of the Executor method that evaluates it.
DISPATCH = {
    NodeType.PROGRAM: 'visit_program',
    NodeType.COMPOUND: 'visit_compound',
    NodeType.ASSIGN: 'visit_assign',
    NodeType.LOOP: 'visit_loop',
    NodeType.TEST: 'visit_test',
    NodeType.IF: 'visit_if',
    NodeType.WHILE: 'visit_while',
    NodeType.FOR: 'visit_for',
    NodeType.SELECT: 'visit_select',
    NodeType.SELECT_BRANCH: 'visit_select_branch',
    NodeType.SELECT_CONSTANTS: 'visit_select_constants',
    NodeType.WRITE: 'visit_write',
    NodeType.WRITELN: 'visit_writeln',
    NodeType.AND: 'visit_logical',
    NodeType.OR: 'visit_logical',
    NodeType.NOT: 'visit_not',
    NodeType.VARIABLE: 'visit_variable',
    NodeType.INTEGER_CONSTANT: 'visit_integer_constant',
    NodeType.REAL_CONSTANT: 'visit_real_constant',
    NodeType.STRING_CONSTANT: 'visit_string_constant',
}
DISPATCH.update({node_type: 'visit_arithmetic' for node_type in ARITHMETIC_OPERATORS})
DISPATCH.update({node_type: 'visit_relational' for node_type in RELATIONAL_OPERATORS})

_unhandled = set(NodeType) - set(DISPATCH)
if _unhandled:
    raise InternalError(f"no executor rule for {sorted(t.name for t in _unhandled)}")


class Executor:
    """Executes a parse tree produced by the parser."""

    def __init__(self, symtab: Optional[Symtab] = None, out: Optional[TextIO] = None,
                 debug_level: int = 0):
        self.symtab = symtab
        self.out = out
        self.debug_level = debug_level
        self._visitors: Dict[NodeType, Callable[[Node], Any]] = {
            node_type: getattr(self, method_name) for node_type, method_name in DISPATCH.items()
        }

    def debug(self, msg: str) -> None:
        if self.debug_level > 0:
            logger.debug(msg)

    # Public API
    def execute(self, tree: Node) -> None:
        self.visit(tree)
        self._stream().flush()

    def visit(self, node: Node) -> Any:
        visitor = self._visitors.get(node.type)
        if visitor is None:
            raise InternalError(f"unexpected node type {node.type}")
        return visitor(node)

    def _stream(self) -> TextIO:
        return self.out if self.out is not None else sys.stdout

    # Statements

    def visit_program(self, node: Node) -> None:
        self.debug(f"executing program {node.text}")
        for child in node.children:
            self.visit(child)

    def visit_compound(self, node: Node) -> None:
        for child in node.children:
            self.visit(child)

    def visit_assign(self, node: Node) -> None:
        variable_node, expr_node = node.children
        value = self.visit(expr_node)
        variable_node.entry.value = value
        if self.debug_level >= 2:
            self.debug(f"line {node.line_number}: {variable_node.text} := {value!r}")

    def visit_loop(self, node: Node) -> None:
        *body, test_node = node.children
        while True:
            for statement in body:
                self.visit(statement)
            if self.visit(test_node).data:
                break

    def visit_test(self, node: Node) -> Value:
        outcome = truth(self.visit(node.children[0]))
        if self.debug_level >= 3:
            self.debug(f"line {node.line_number}: until -> {outcome}")
        return Value.boolean(outcome)

    def visit_if(self, node: Node) -> None:
        outcome = truth(self.visit(node.children[0]))
        if self.debug_level >= 3:
            self.debug(f"line {node.line_number}: if -> {outcome}")
        if outcome:
            self.visit(node.children[1])
        elif len(node.children) > 2:
            self.visit(node.children[2])

    def visit_while(self, node: Node) -> None:
        condition, body = node.children
        while truth(self.visit(condition)):
            self.visit(body)

    def visit_for(self, node: Node) -> None:
        init_node, limit_node, body = node.children
        self.visit(init_node)
        control = init_node.children[0].entry
        step = Value.integer(-1 if node.descending else 1)
        past_limit = '<' if node.descending else '>'

        while True:
            # The limit is re-evaluated before every iteration.
            limit = self.visit(limit_node)
            if compare(past_limit, control.value, limit, node.line_number).data:
                break
            self.visit(body)
            control.value = arithmetic('+', control.value, step, node.line_number)

    def visit_select(self, node: Node) -> None:
        selector = self.visit(node.children[0])
        for branch in node.children[1:]:
            constants = self.visit(branch.children[0])
            if any(equals(selector, constant) for constant in constants):
                self.visit(branch)
                return
        if self.debug_level >= 3:
            self.debug(f"line {node.line_number}: no case branch for {selector!r}")

    def visit_select_branch(self, node: Node) -> None:
        self.visit(node.children[1])

    def visit_select_constants(self, node: Node) -> List[Value]:
        return [self.visit(child) for child in node.children]

    def visit_write(self, node: Node) -> None:
        self._stream().write(self._format_argument(node))

    def visit_writeln(self, node: Node) -> None:
        self._stream().write(self._format_argument(node) + '\n')

    def _format_argument(self, node: Node) -> str:
        if not node.children:
            return ''
        value = self.visit(node.children[0])
        width = node.children[1].value if len(node.children) > 1 else None
        places = node.children[2].value if len(node.children) > 2 else None
        return format_value(value, width, places)

    # Expressions

    def visit_arithmetic(self, node: Node) -> Value:
        left = self.visit(node.children[0])
        right = self.visit(node.children[1])
        return arithmetic(ARITHMETIC_OPERATORS[node.type], left, right, node.line_number)

    def visit_relational(self, node: Node) -> Value:
        left = self.visit(node.children[0])
        right = self.visit(node.children[1])
        return compare(RELATIONAL_OPERATORS[node.type], left, right, node.line_number)

    def visit_logical(self, node: Node) -> Value:
        # Both operands are always evaluated.
        left = truth(self.visit(node.children[0]))
        right = truth(self.visit(node.children[1]))
        if node.type == NodeType.AND:
            return Value.boolean(left and right)
        return Value.boolean(left or right)

    def visit_not(self, node: Node) -> Value:
        return Value.boolean(not truth(self.visit(node.children[0])))

    def visit_variable(self, node: Node) -> Value:
        value = node.entry.value
        if value is None:
            raise SimpleRuntimeError(f"variable {node.text} has no value", node.line_number)
        return value

    def visit_integer_constant(self, node: Node) -> Value:
        return Value.integer(node.value)

    def visit_real_constant(self, node: Node) -> Value:
        return Value.real(node.value)

    def visit_string_constant(self, node: Node) -> Value:
        return Value.text(node.value)


def run_program(source: str, out: Optional[TextIO] = None, debug_level: int = 0) -> int:
    """Parse and, if there were no errors, execute a program.

    Returns the number of errors found while parsing.
    """
    symtab = Symtab()
    tree, error_count = parse_source(source, symtab, ErrorReporter(out))
    if error_count == 0:
        Executor(symtab, out, debug_level).execute(tree)
    return error_count
