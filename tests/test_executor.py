import io
import logging

import pytest

from simple.errors import InternalError, SimpleRuntimeError
from simple.executor import Executor, run_program
from simple.parser import parse_source
from simple.symtab import Symtab
from simple.tree import Node, NodeType
from simple.types import Value


def run(body):
    source = f"PROGRAM test;\nBEGIN\n{body}\nEND.\n"
    symtab = Symtab()
    tree, errors = parse_source(source, symtab)
    assert errors == 0
    out = io.StringIO()
    Executor(symtab, out).execute(tree)
    return out.getvalue(), symtab


def test_assignment_stores_in_symtab():
    out, symtab = run('i := 2; x := i * 1.5')
    assert symtab.lookup('i').value == Value.integer(2)
    assert symtab.lookup('X').value == Value.real(3.0)


def test_for_limit_is_reevaluated_each_iteration():
    out, symtab = run('n := 3;\nFOR i := 1 TO n DO BEGIN write(i); n := 5 END')
    assert out == '12345'


def test_for_does_not_run_when_start_is_past_limit():
    out, symtab = run('FOR i := 5 TO 1 DO write(i); writeln(i)')
    assert out == '5\n'


def test_for_downto_leaves_control_past_limit():
    out, symtab = run('FOR i := 3 DOWNTO 1 DO write(i)')
    assert out == '321'
    assert symtab.lookup('i').value == Value.integer(0)


def test_repeat_runs_body_at_least_once():
    out, _ = run('i := 10; REPEAT write(i); i := i + 1 UNTIL i > 0')
    assert out == '10'


def test_while_may_not_run():
    out, _ = run('i := 0; WHILE i > 0 DO write(i); writeln(i)')
    assert out == '0\n'


def test_case_without_match_does_nothing():
    out, _ = run("i := 7; CASE i OF 1: writeln('one'); 2, 3: writeln('few') END")
    assert out == ''


def test_case_first_matching_branch_wins():
    out, _ = run("i := 2; CASE i OF 1, 2: write('a'); 2: write('b') END")
    assert out == 'a'


def test_case_matches_real_and_character_constants():
    out, _ = run("x := 2; CASE x OF 2.0: write('real') END; "
                 "c := 'q'; CASE c OF 'p': write('p'); 'q': write('q') END")
    assert out == 'realq'


def test_and_or_evaluate_both_operands():
    # the right operand would divide by zero if evaluated
    with pytest.raises(SimpleRuntimeError):
        run('z := 0; b := (1 > 2) AND (1 / z > 0)')
    with pytest.raises(SimpleRuntimeError):
        run('z := 0; b := (1 < 2) OR (1 / z > 0)')


def test_uninitialized_variable_is_a_runtime_error():
    # j is entered by its assignment but read before the assignment runs
    with pytest.raises(SimpleRuntimeError) as excinfo:
        run('IF 1 > 2 THEN j := 1; writeln(j)')
    assert excinfo.value.line_number == 3


def test_division_by_zero_is_a_runtime_error():
    with pytest.raises(SimpleRuntimeError, match='division by zero'):
        run('z := 0; x := 4 DIV z')


def test_unknown_node_type_is_an_internal_error():
    with pytest.raises(InternalError):
        Executor(Symtab()).visit(Node('BOGUS'))


def test_writeln_formats():
    out, _ = run("x := 2.5; writeln(x:6:1); write(7:-3); writeln('|'); write('a'); writeln")
    assert out.splitlines() == ['   2.5', '7  |', 'a']


def test_writeln_literal_arguments():
    out, _ = run("writeln(-4); writeln(2.25); writeln('x':3)")
    assert out.splitlines() == ['-4', '2.25', '  x']


def test_debug_level_logs_assignments(caplog):
    source = 'PROGRAM p; BEGIN i := 1 END.'
    symtab = Symtab()
    tree, _ = parse_source(source, symtab)
    # the CLI's logging setup stops 'simple' records from reaching the root logger
    package_logger = logging.getLogger('simple')
    package_logger.addHandler(caplog.handler)
    caplog.set_level('DEBUG', logger='simple')
    try:
        Executor(symtab, io.StringIO(), debug_level=2).execute(tree)
    finally:
        package_logger.removeHandler(caplog.handler)
    assert any('i := integer(1)' in message for message in caplog.messages)


def test_run_program_returns_error_count():
    out = io.StringIO()
    assert run_program("PROGRAM p; BEGIN writeln('ok') END.", out) == 0
    assert out.getvalue() == 'ok\n'
