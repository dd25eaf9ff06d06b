"""Indented, XML-like dump of a parse tree.

    <PROGRAM Example>
        <COMPOUND line 2>
            <ASSIGN line 3>
                <VARIABLE i />
                <INTEGER_CONSTANT 1 />
            </ASSIGN>
        </COMPOUND>
    </PROGRAM>
"""

import sys
from typing import Optional, TextIO

from .tree import Node, NodeType

INDENT = '    '

STATEMENTS = frozenset({
    NodeType.COMPOUND, NodeType.ASSIGN, NodeType.LOOP, NodeType.TEST,
    NodeType.WRITE, NodeType.WRITELN, NodeType.IF, NodeType.WHILE,
    NodeType.FOR, NodeType.SELECT, NodeType.SELECT_BRANCH,
})


class ParseTreePrinter:
    def __init__(self, out: Optional[TextIO] = None):
        self.out = out

    def print(self, tree: Node) -> None:
        self._print_node(tree, 0)

    def _print_node(self, node: Node, level: int) -> None:
        indent = INDENT * level
        label = self._label(node)
        if not node.children:
            self._write(f"{indent}<{label} />")
            return
        self._write(f"{indent}<{label}>")
        for child in node.children:
            self._print_node(child, level + 1)
        self._write(f"{indent}</{node.type.name}>")

    def _label(self, node: Node) -> str:
        parts = [node.type.name]
        if node.text is not None:
            parts.append(node.text)
        elif node.value is not None:
            parts.append(repr(node.value))
        if node.type == NodeType.FOR:
            parts.append('direction="downto"' if node.descending else 'direction="to"')
        if node.type in STATEMENTS:
            parts.append(f"line {node.line_number}")
        return ' '.join(parts)

    def _write(self, line: str) -> None:
        print(line, file=self.out if self.out is not None else sys.stdout)
