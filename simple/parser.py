"""Recursive-descent parser for the Simple language.

The parser pulls tokens from a `Scanner` one at a time, always holding
exactly one token of lookahead in ``current``, and builds a parse tree of
`Node` objects. The grammar it accepts, from the top down:

    program     : PROGRAM name ; compound [;] .
    compound    : BEGIN statement { ; statement } END
    statement   : assignment | compound | if | while | repeat | for
                | case | write | writeln | <empty>
    if          : IF expression THEN statement [ ELSE statement ]
    while       : WHILE expression DO statement
    repeat      : REPEAT statement { ; statement } UNTIL expression
    for         : FOR assignment (TO | DOWNTO) expression DO statement
    case        : CASE expression OF { constants : statement ; } END
    write       : WRITE ( argument [ : width [ : places ] ] )
    writeln     : WRITELN [ ( argument [ : width [ : places ] ] ) ]
    expression  : simple [ relop simple ]
    simple      : term { (+ | - | DIV | OR) term }
    term        : factor { (* | / | AND) factor }
    factor      : variable | [-] number | string | ( expression )
                | NOT factor

Because the THEN branch of an IF is parsed with `parse_statement` and not
with a statement list, an ELSE always attaches to the innermost IF that
does not have one yet.

Errors never stop the parse. A syntax error is reported and the parser
skips ahead to a token in STATEMENT_FOLLOWERS; a semantic error (a
variable used before anything was assigned to it) is reported without
skipping. The caller checks `error_count` before executing the tree.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Optional, Tuple

from .errors import ErrorReporter
from .scanner import Scanner
from .symtab import Symtab
from .tokens import Token, TokenType
from .tree import Node, NodeType

logger = logging.getLogger(__name__)


# Tokens that can start a statement.
STATEMENT_STARTERS = frozenset({
    TokenType.BEGIN, TokenType.IDENTIFIER, TokenType.REPEAT, TokenType.IF,
    TokenType.WHILE, TokenType.FOR, TokenType.CASE,
})

# Tokens that can immediately follow a statement; syntax errors resynchronize here.
STATEMENT_FOLLOWERS = frozenset({
    TokenType.SEMICOLON, TokenType.END, TokenType.UNTIL, TokenType.END_OF_FILE,
    TokenType.THEN, TokenType.ELSE, TokenType.DO, TokenType.TO,
    TokenType.DOWNTO, TokenType.OF,
})

RELATIONAL_OPERATORS = MappingProxyType({
    TokenType.EQUALS: NodeType.EQ,
    TokenType.NOT_EQUALS: NodeType.NEQ,
    TokenType.LESS_THAN: NodeType.LT,
    TokenType.GREATER_THAN: NodeType.GT,
    TokenType.LESS_EQUALS: NodeType.LEQ,
    TokenType.GREATER_EQUALS: NodeType.GEQ,
})

SIMPLE_EXPRESSION_OPERATORS = MappingProxyType({
    TokenType.PLUS: NodeType.ADD,
    TokenType.MINUS: NodeType.SUBTRACT,
    TokenType.DIV: NodeType.INTDIV,
    TokenType.OR: NodeType.OR,
})

TERM_OPERATORS = MappingProxyType({
    TokenType.STAR: NodeType.MULTIPLY,
    TokenType.SLASH: NodeType.DIVIDE,
    TokenType.AND: NodeType.AND,
})

# Empty statements are allowed in front of these.
EMPTY_STATEMENT_FOLLOWERS = frozenset({
    TokenType.SEMICOLON, TokenType.END, TokenType.UNTIL, TokenType.ELSE,
    TokenType.END_OF_FILE,
})


class Parser:
    def __init__(self, scanner: Scanner, symtab: Optional[Symtab] = None):
        self.scanner = scanner
        self.symtab = symtab if symtab is not None else Symtab()
        self.reporter: ErrorReporter = scanner.reporter
        self.current: Optional[Token] = None

    @property
    def error_count(self) -> int:
        """Token, syntax and semantic errors seen so far."""
        return self.reporter.count

    # Token handling

    def advance(self) -> None:
        self.current = self.scanner.next_token()

    def match(self, *token_types: TokenType) -> bool:
        return self.current.type in token_types

    def syntax_error(self, message: str, recover: bool = True) -> None:
        self.reporter.syntax_error(self.current.line_number, message, self.current.text)
        logger.debug("syntax error: %s at %r", message, self.current)
        if recover:
            while self.current.type not in STATEMENT_FOLLOWERS:
                self.advance()

    def semantic_error(self, message: str) -> None:
        self.reporter.semantic_error(self.current.line_number, message, self.current.text)
        logger.debug("semantic error: %s at %r", message, self.current)

    # Program structure

    def parse_program(self) -> Tuple[Node, int]:
        """Parse a whole program and return its tree and the error count."""
        program_node = Node(NodeType.PROGRAM)
        self.advance()
        program_node.line_number = self.current.line_number

        if self.match(TokenType.PROGRAM):
            self.advance()
        else:
            self.syntax_error('Expecting PROGRAM')

        if self.match(TokenType.IDENTIFIER):
            program_name = self.current.text
            self.symtab.enter(program_name)
            program_node.text = program_name
            self.advance()
        else:
            self.syntax_error('Expecting program name')

        if self.match(TokenType.SEMICOLON):
            self.advance()
        else:
            self.syntax_error('Missing ;')

        if self.match(TokenType.BEGIN):
            program_node.adopt(self.parse_compound_statement())
        else:
            self.syntax_error('Expecting BEGIN')

        # A stray ; after the final END is tolerated.
        saw_semicolon = False
        while self.match(TokenType.SEMICOLON):
            saw_semicolon = True
            self.advance()
        if self.match(TokenType.PERIOD):
            self.advance()
        elif not saw_semicolon:
            self.syntax_error('Expecting .')

        logger.info("parsed program %s: %d error(s)", program_node.text, self.error_count)
        return program_node, self.error_count

    def parse_statement(self) -> Optional[Node]:
        """Parse one statement. Returns None for an empty statement or after an error."""
        token = self.current
        line_number = token.line_number

        if token.type == TokenType.IDENTIFIER:
            name = token.text.lower()
            if name == 'write':
                node = self.parse_write_statement(NodeType.WRITE)
            elif name == 'writeln':
                node = self.parse_write_statement(NodeType.WRITELN)
            else:
                node = self.parse_assignment_statement()
        elif token.type == TokenType.BEGIN:
            node = self.parse_compound_statement()
        elif token.type == TokenType.REPEAT:
            node = self.parse_repeat_statement()
        elif token.type == TokenType.IF:
            node = self.parse_if_statement()
        elif token.type == TokenType.WHILE:
            node = self.parse_while_statement()
        elif token.type == TokenType.FOR:
            node = self.parse_for_statement()
        elif token.type == TokenType.CASE:
            node = self.parse_case_statement()
        elif token.type in EMPTY_STATEMENT_FOLLOWERS:
            return None
        else:
            self.syntax_error('Unexpected token')
            return None

        node.line_number = line_number
        return node

    def parse_nested_statement(self) -> Node:
        """Parse the statement governed by THEN, ELSE, DO or a CASE label.

        An empty statement there becomes an empty COMPOUND so the parent
        keeps its fixed number of children.
        """
        line_number = self.current.line_number
        node = self.parse_statement()
        if node is None:
            node = Node(NodeType.COMPOUND, line_number)
        return node

    def parse_compound_statement(self) -> Node:
        compound_node = Node(NodeType.COMPOUND, self.current.line_number)
        self.advance()  # BEGIN

        self.parse_statement_list(compound_node, TokenType.END)

        if self.match(TokenType.END):
            self.advance()
        else:
            self.syntax_error('Expecting END')
        return compound_node

    def parse_statement_list(self, parent_node: Node, terminal_type: TokenType) -> None:
        while not self.match(terminal_type, TokenType.END_OF_FILE):
            start_token = self.current
            errors_before = self.error_count

            parent_node.adopt(self.parse_statement())

            if self.match(TokenType.SEMICOLON):
                while self.match(TokenType.SEMICOLON):
                    self.advance()
            elif self.match(*STATEMENT_STARTERS):
                self.syntax_error('Missing ;', recover=False)
            elif self.current is start_token and not self.match(terminal_type, TokenType.END_OF_FILE):
                # Nothing was consumed: a token that cannot appear here.
                if self.error_count == errors_before:
                    self.syntax_error('Unexpected token', recover=False)
                self.advance()

    # Statements

    def parse_assignment_statement(self) -> Node:
        variable_name = self.current.text
        variable_entry = self.symtab.enter(variable_name)

        assign_node = Node(NodeType.ASSIGN, self.current.line_number)
        lhs_node = Node(NodeType.VARIABLE, self.current.line_number,
                        text=variable_name, entry=variable_entry)
        assign_node.adopt(lhs_node)
        self.advance()

        if self.match(TokenType.COLON_EQUALS):
            self.advance()
        else:
            self.syntax_error('Missing :=')
            return assign_node

        assign_node.adopt(self.parse_expression())
        return assign_node

    def parse_if_statement(self) -> Node:
        if_node = Node(NodeType.IF, self.current.line_number)
        self.advance()  # IF

        if_node.adopt(self.parse_expression())

        if not self.match(TokenType.THEN):
            self.syntax_error('Expecting THEN')
        if self.match(TokenType.THEN):
            self.advance()
            if_node.adopt(self.parse_nested_statement())

            if self.match(TokenType.ELSE):
                self.advance()
                if_node.adopt(self.parse_nested_statement())
        return if_node

    def parse_while_statement(self) -> Node:
        while_node = Node(NodeType.WHILE, self.current.line_number)
        self.advance()  # WHILE

        while_node.adopt(self.parse_expression())

        if not self.match(TokenType.DO):
            self.syntax_error('Expecting DO')
        if self.match(TokenType.DO):
            self.advance()
            while_node.adopt(self.parse_nested_statement())
        return while_node

    def parse_repeat_statement(self) -> Node:
        loop_node = Node(NodeType.LOOP, self.current.line_number)
        self.advance()  # REPEAT

        self.parse_statement_list(loop_node, TokenType.UNTIL)

        if self.match(TokenType.UNTIL):
            test_node = Node(NodeType.TEST, self.current.line_number)
            self.advance()
            test_node.adopt(self.parse_expression())
            loop_node.adopt(test_node)
        else:
            self.syntax_error('Expecting UNTIL')
        return loop_node

    def parse_for_statement(self) -> Node:
        for_node = Node(NodeType.FOR, self.current.line_number)
        self.advance()  # FOR
        errors_before = self.error_count

        if self.match(TokenType.IDENTIFIER):
            for_node.adopt(self.parse_assignment_statement())
        else:
            self.syntax_error('Expecting control variable')

        # Once the header has one error, the rest is only resynchronized.
        if self.match(TokenType.TO, TokenType.DOWNTO):
            for_node.descending = self.match(TokenType.DOWNTO)
            self.advance()
            for_node.adopt(self.parse_expression())
        elif self.error_count == errors_before:
            self.syntax_error('Expecting TO or DOWNTO')

        if not self.match(TokenType.DO) and self.error_count == errors_before:
            self.syntax_error('Expecting DO')
        if self.match(TokenType.DO):
            self.advance()
            for_node.adopt(self.parse_nested_statement())
        return for_node

    def parse_case_statement(self) -> Node:
        select_node = Node(NodeType.SELECT, self.current.line_number)
        self.advance()  # CASE

        select_node.adopt(self.parse_expression())

        if not self.match(TokenType.OF):
            self.syntax_error('Expecting OF')
            if not self.match(TokenType.OF):
                return select_node
        self.advance()  # OF

        while not self.match(TokenType.END, TokenType.END_OF_FILE):
            if self.match(TokenType.SEMICOLON):
                self.advance()
                continue

            start_token = self.current
            errors_before = self.error_count

            branch_node = Node(NodeType.SELECT_BRANCH, self.current.line_number)
            branch_node.adopt(self.parse_constant_list())
            if self.match(TokenType.COLON):
                self.advance()
                branch_node.adopt(self.parse_nested_statement())
            elif self.error_count == errors_before:
                self.syntax_error('Expecting :')
            select_node.adopt(branch_node)

            if self.match(TokenType.SEMICOLON):
                while self.match(TokenType.SEMICOLON):
                    self.advance()
            elif not self.match(TokenType.END, TokenType.END_OF_FILE):
                if self.error_count == errors_before:
                    self.syntax_error('Missing ;', recover=False)
                if self.current is start_token or self.match(*STATEMENT_FOLLOWERS):
                    self.advance()

        if self.match(TokenType.END):
            self.advance()
        else:
            self.syntax_error('Expecting END')
        return select_node

    def parse_constant_list(self) -> Node:
        constants_node = Node(NodeType.SELECT_CONSTANTS, self.current.line_number)
        constants_node.adopt(self.parse_constant())
        while self.match(TokenType.COMMA):
            self.advance()
            constants_node.adopt(self.parse_constant())
        return constants_node

    def parse_constant(self) -> Optional[Node]:
        if self.match(TokenType.INTEGER, TokenType.REAL):
            return self.parse_number_constant(negative=False)
        if self.match(TokenType.CHARACTER, TokenType.STRING):
            return self.parse_string_constant()
        if self.match(TokenType.MINUS):
            self.advance()
            if self.match(TokenType.INTEGER, TokenType.REAL):
                return self.parse_number_constant(negative=True)
        self.syntax_error('Invalid constant')
        return None

    def parse_write_statement(self, node_type: NodeType) -> Node:
        write_node = Node(node_type, self.current.line_number)
        self.advance()  # WRITE or WRITELN

        if node_type == NodeType.WRITELN and not self.match(TokenType.LPAREN):
            return write_node

        self.parse_write_arguments(write_node)
        return write_node

    def parse_write_arguments(self, write_node: Node) -> None:
        if self.match(TokenType.LPAREN):
            self.advance()
        else:
            self.syntax_error('Missing left parenthesis')
            return

        if self.match(TokenType.IDENTIFIER):
            write_node.adopt(self.parse_variable())
        elif self.match(TokenType.CHARACTER, TokenType.STRING):
            write_node.adopt(self.parse_string_constant())
        elif self.match(TokenType.INTEGER, TokenType.REAL, TokenType.MINUS):
            number_node = self.parse_signed_number()
            if number_node is None:
                return
            write_node.adopt(number_node)
        else:
            self.syntax_error('Invalid WRITE or WRITELN statement')
            return

        # Field width, then count of decimal places.
        if self.match(TokenType.COLON):
            self.advance()
            width_node = self.parse_format_integer('Invalid field width')
            if width_node is None:
                return
            write_node.adopt(width_node)

            if self.match(TokenType.COLON):
                self.advance()
                places_node = self.parse_format_integer('Invalid count of decimal places')
                if places_node is None:
                    return
                write_node.adopt(places_node)

        if self.match(TokenType.RPAREN):
            self.advance()
        else:
            self.syntax_error('Missing right parenthesis')

    def parse_format_integer(self, message: str) -> Optional[Node]:
        negative = False
        if self.match(TokenType.MINUS):
            negative = True
            self.advance()
        if self.match(TokenType.INTEGER):
            return self.parse_number_constant(negative)
        self.syntax_error(message)
        return None

    # Expressions

    def parse_expression(self) -> Optional[Node]:
        expr_node = self.parse_simple_expression()

        # At most one relational operator; a < b < c is not an expression.
        if self.current.type in RELATIONAL_OPERATORS:
            op_node = Node(RELATIONAL_OPERATORS[self.current.type], self.current.line_number)
            self.advance()
            op_node.adopt(expr_node)
            op_node.adopt(self.parse_simple_expression())
            expr_node = op_node
        return expr_node

    def parse_simple_expression(self) -> Optional[Node]:
        simple_node = self.parse_term()
        while self.current.type in SIMPLE_EXPRESSION_OPERATORS:
            op_node = Node(SIMPLE_EXPRESSION_OPERATORS[self.current.type], self.current.line_number)
            self.advance()
            op_node.adopt(simple_node)
            op_node.adopt(self.parse_term())
            simple_node = op_node
        return simple_node

    def parse_term(self) -> Optional[Node]:
        term_node = self.parse_factor()
        while self.current.type in TERM_OPERATORS:
            op_node = Node(TERM_OPERATORS[self.current.type], self.current.line_number)
            self.advance()
            op_node.adopt(term_node)
            op_node.adopt(self.parse_factor())
            term_node = op_node
        return term_node

    def parse_factor(self) -> Optional[Node]:
        if self.match(TokenType.NOT):
            not_node = Node(NodeType.NOT, self.current.line_number)
            self.advance()
            not_node.adopt(self.parse_factor())
            return not_node
        if self.match(TokenType.IDENTIFIER):
            return self.parse_variable()
        if self.match(TokenType.INTEGER, TokenType.REAL, TokenType.MINUS):
            return self.parse_signed_number()
        if self.match(TokenType.CHARACTER, TokenType.STRING):
            return self.parse_string_constant()
        if self.match(TokenType.LPAREN):
            self.advance()
            expr_node = self.parse_expression()
            if self.match(TokenType.RPAREN):
                self.advance()
            else:
                self.syntax_error('Expecting )')
            return expr_node

        self.syntax_error('Unexpected token')
        return None

    def parse_variable(self) -> Node:
        variable_name = self.current.text
        variable_entry = self.symtab.lookup(variable_name)
        if variable_entry is None:
            self.semantic_error('Undeclared identifier')

        node = Node(NodeType.VARIABLE, self.current.line_number,
                    text=variable_name, entry=variable_entry)
        self.advance()
        return node

    def parse_signed_number(self) -> Optional[Node]:
        negative = False
        if self.match(TokenType.MINUS):
            negative = True
            self.advance()
        if self.match(TokenType.INTEGER, TokenType.REAL):
            return self.parse_number_constant(negative)
        self.syntax_error('Expecting a number')
        return None

    def parse_number_constant(self, negative: bool) -> Node:
        if self.match(TokenType.INTEGER):
            node_type = NodeType.INTEGER_CONSTANT
        else:
            node_type = NodeType.REAL_CONSTANT
        value = self.current.value
        text = self.current.text
        if negative:
            value = -value
            text = '-' + text
        node = Node(node_type, self.current.line_number, text=text, value=value)
        self.advance()
        return node

    def parse_string_constant(self) -> Node:
        node = Node(NodeType.STRING_CONSTANT, self.current.line_number,
                    text=self.current.text, value=self.current.value)
        self.advance()
        return node


def parse_source(source: str, symtab: Optional[Symtab] = None,
                 reporter: Optional[ErrorReporter] = None) -> Tuple[Node, int]:
    """Scan and parse source text, returning the tree and the error count."""
    scanner = Scanner(source, reporter)
    parser = Parser(scanner, symtab)
    return parser.parse_program()
