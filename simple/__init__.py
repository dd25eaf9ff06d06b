# Simple language package
# This package provides a scanner, parser and tree-walking executor for
# Simple, a small Pascal-like teaching language.
from .errors import SimpleRuntimeError, InternalError
from .executor import Executor, run_program
from .parser import Parser, parse_source
from .scanner import Scanner
from .symtab import Symtab

__all__ = [
    'Executor',
    'InternalError',
    'Parser',
    'Scanner',
    'SimpleRuntimeError',
    'Symtab',
    'parse_source',
    'run_program',
]
