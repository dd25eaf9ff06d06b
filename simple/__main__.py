"""CLI entry point for the Simple interpreter.

Usage:
    python -m simple [-v|-vv|-vvv] -scan <source_file>
    python -m simple [-v...] -parse <source_file>
    python -m simple [-v...] -execute <source_file>
    python -m simple [-v...] --emit-tree <source_file>
    python -m simple [-v...] --tree <tree_json_file>

Options:
  -scan         Print the tokens of the source file
  -parse        Parse the source file and print its parse tree
  -execute      Parse the source file and run the program
  --emit-tree   Parse the source file and write its parse tree as JSON
  --tree        Execute a previously emitted parse tree JSON file
  -v            Increase debug verbosity (can be repeated)

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. A program with scanning or parsing errors
is never executed.
"""

import argparse
import json
import sys
from pathlib import Path

from .executor import Executor
from .logging_config import setup_logging
from .parser import Parser
from .printer import ParseTreePrinter
from .scanner import Scanner
from .symtab import Symtab
from .tree_json import tree_from_obj, tree_to_obj


def read_source(path_name: str) -> str:
    path = Path(path_name)
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def scan(source: str) -> None:
    print("Tokens:")
    print()
    for token in Scanner(source).tokens():
        print(f"{token.type.name:>12} : {token.text}")


def parse(source: str, symtab: Symtab):
    parser = Parser(Scanner(source), symtab)
    tree, error_count = parser.parse_program()
    if error_count:
        print()
        print(f"There were {error_count} syntax errors.")
        sys.exit(1)
    return tree


def execute(tree, symtab: Symtab, debug_level: int) -> None:
    executor = Executor(symtab, debug_level=debug_level)
    try:
        executor.execute(tree)
    except Exception as e:
        sys.stdout.flush()
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog='simple', description="Simple language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument('-scan', action='store_true', help='print the tokens of the source file')
    group.add_argument('-parse', action='store_true', help='print the parse tree of the source file')
    group.add_argument('-execute', action='store_true', help='run the program in the source file')
    group.add_argument('--emit-tree', metavar='SOURCE_FILE', help='write the parse tree as JSON')
    group.add_argument('--tree', metavar='TREE_JSON_FILE', help='execute a parse tree JSON file')
    parser.add_argument('source', nargs='?', help='source file of the program')
    args = parser.parse_args(argv)

    setup_logging(args.v)

    # Emit tree mode
    if args.emit_tree:
        source_file = Path(args.emit_tree)
        tree = parse(read_source(args.emit_tree), Symtab())
        out_path = source_file.with_name(source_file.name + '.tree.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(tree_to_obj(tree), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute a saved tree
    if args.tree:
        tree_path = Path(args.tree)
        if not tree_path.exists():
            print(f"Error: file {tree_path} not found", file=sys.stderr)
            sys.exit(1)
        symtab = Symtab()
        try:
            with open(tree_path, 'r', encoding='utf-8') as f:
                tree = tree_from_obj(json.load(f), symtab)
        except (ValueError, TypeError) as e:
            print(f"Error: invalid parse tree file {tree_path}: {e}", file=sys.stderr)
            sys.exit(1)
        execute(tree, symtab, args.v)
        return

    if not args.source:
        parser.error('missing source file')
    source = read_source(args.source)

    if args.scan:
        scan(source)
        return

    symtab = Symtab()
    tree = parse(source, symtab)
    if args.parse:
        print("Parse tree:")
        print()
        ParseTreePrinter().print(tree)
        return

    execute(tree, symtab, args.v)


if __name__ == '__main__':
    main()
