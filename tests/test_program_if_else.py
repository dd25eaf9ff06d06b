from pathlib import Path

from simple.executor import Executor
from simple.parser import parse_source
from simple.symtab import Symtab

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_if_else(capsys):
    """Nested IFs: each ELSE binds to the innermost IF.

    In the third statement the outer condition i = j is false, so the
    inner IF/ELSE never runs and k keeps the value 3 from before.
    """
    with open(EXAMPLES / 'if_else.pas', 'r', encoding='utf-8') as f:
        source = f.read()
    symtab = Symtab()
    tree, error_count = parse_source(source, symtab)
    assert error_count == 0
    Executor(symtab).execute(tree)
    out_lines = capsys.readouterr().out.splitlines()
    assert out_lines == ['k = 10', 'k = 3', 'k = 3', 'k = 22']
    assert symtab.lookup('k').value.data == 22
