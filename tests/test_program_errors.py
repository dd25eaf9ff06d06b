from pathlib import Path

from simple.executor import run_program
from simple.parser import parse_source
from simple.tree import NodeType

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_errors_recovers_after_bad_statement(capsys):
    with open(EXAMPLES / 'errors.pas', 'r', encoding='utf-8') as f:
        source = f.read()
    tree, error_count = parse_source(source)
    assert error_count == 1
    out_lines = capsys.readouterr().out.splitlines()
    assert out_lines == ["SYNTAX ERROR at line 4: Unexpected token at '*'"]

    # every statement after the bad one is still in the tree
    compound = tree.children[0]
    assert [child.type for child in compound.children] == [
        NodeType.ASSIGN, NodeType.ASSIGN, NodeType.ASSIGN, NodeType.WRITELN,
    ]
    assert compound.children[2].children[0].text == 'k'


def test_program_errors_is_not_executed(capsys):
    with open(EXAMPLES / 'errors.pas', 'r', encoding='utf-8') as f:
        source = f.read()
    error_count = run_program(source)
    assert error_count == 1
    out = capsys.readouterr().out
    # the error report is printed, the program's writeln is not
    assert out.splitlines() == ["SYNTAX ERROR at line 4: Unexpected token at '*'"]
