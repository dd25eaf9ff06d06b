"""Scanner for the Simple language.

The character-level work is done by a Lark lexer configured with the
terminal grammar below. Every input character belongs to some terminal:
characters the language does not know, malformed numbers and strings
that run off the end of the file are matched by dedicated low-priority
terminals and come out as ERROR tokens rather than exceptions, so the
parser always receives a complete token stream.

The `Scanner` class wraps the Lark token iterator and turns each Lark
token into a `Token` with a `TokenType`, a line number and a converted
literal value.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from lark import Lark

from .errors import ErrorReporter
from .tokens import Token, TokenType, word_type

logger = logging.getLogger(__name__)


SCANNER_GRAMMAR = r"""
    start: _token*

    _token: WORD | MALFORMED_NUMBER | REAL | INTEGER
          | STRING | UNCLOSED_STRING
          | COLON_EQUALS | NOT_EQUALS | LESS_EQUALS | GREATER_EQUALS | DOT_DOT
          | PERIOD | COMMA | COLON | SEMICOLON | PLUS | MINUS | STAR | SLASH
          | LPAREN | RPAREN | EQUALS | LESS_THAN | GREATER_THAN
          | LBRACKET | RBRACKET | CARAT
          | ERROR_CHAR

    WORD.1: /[A-Za-z][A-Za-z0-9_]*/

    MALFORMED_NUMBER.4: /\d+\.\d+(?:\.\d+)+/
    // "1." is a real, "1..5" is a range
    REAL.3: /\d+\.(?:\d+|(?!\.))/
    INTEGER.2: /\d+/

    // '' inside a string stands for one quote character
    STRING.2: /'(?:[^']|'')*'/
    UNCLOSED_STRING.1: /'(?:[^']|'')*/

    COLON_EQUALS.1: ":="
    NOT_EQUALS.1: "<>"
    LESS_EQUALS.1: "<="
    GREATER_EQUALS.1: ">="
    DOT_DOT.1: ".."
    PERIOD.1: "."
    COMMA.1: ","
    COLON.1: ":"
    SEMICOLON.1: ";"
    PLUS.1: "+"
    MINUS.1: "-"
    STAR.1: "*"
    SLASH.1: "/"
    LPAREN.1: "("
    RPAREN.1: ")"
    EQUALS.1: "="
    LESS_THAN.1: "<"
    GREATER_THAN.1: ">"
    LBRACKET.1: "["
    RBRACKET.1: "]"
    CARAT.1: "^"

    ERROR_CHAR: /./

    COMMENT.1: /\{[^}]*\}/
    WHITESPACE.1: /\s+/
    %ignore COMMENT
    %ignore WHITESPACE
"""


SCANNER_LEXER = Lark(
    SCANNER_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


_TOKEN_ERRORS = {
    'MALFORMED_NUMBER': 'Invalid number',
    'UNCLOSED_STRING': 'String not closed',
    'ERROR_CHAR': 'Invalid token',
}


class Scanner:
    """Hands out the tokens of a source text one at a time."""

    def __init__(self, source: str, reporter: Optional[ErrorReporter] = None):
        self.reporter = reporter if reporter is not None else ErrorReporter()
        self._stream = SCANNER_LEXER.lex(source)
        self._last_line = 1
        self._exhausted = False

    @property
    def error_count(self) -> int:
        return self.reporter.count_of('TOKEN')

    def next_token(self) -> Token:
        """Return the next token; END_OF_FILE is returned forever at the end."""
        if not self._exhausted:
            lexed = next(self._stream, None)
            if lexed is not None:
                token = self._convert(lexed)
                self._last_line = token.line_number
                return token
            self._exhausted = True
        return Token(TokenType.END_OF_FILE, self._last_line, '')

    def tokens(self) -> Iterator[Token]:
        """Iterate the remaining tokens, stopping before END_OF_FILE."""
        token = self.next_token()
        while token.type != TokenType.END_OF_FILE:
            yield token
            token = self.next_token()

    def _convert(self, lexed) -> Token:
        kind = lexed.type
        text = str(lexed)
        line = lexed.line

        if kind == 'WORD':
            return Token(word_type(text), line, text)
        if kind == 'INTEGER':
            return Token(TokenType.INTEGER, line, text, int(text))
        if kind == 'REAL':
            return Token(TokenType.REAL, line, text, float(text))
        if kind == 'STRING':
            value = text[1:-1].replace("''", "'")
            token_type = TokenType.CHARACTER if len(value) == 1 else TokenType.STRING
            return Token(token_type, line, text, value)
        if kind in _TOKEN_ERRORS:
            self.reporter.token_error(line, _TOKEN_ERRORS[kind], text)
            logger.debug("token error %s at line %d: %r", kind, line, text)
            return Token(TokenType.ERROR, line, text)
        return Token(TokenType[kind], line, text)
