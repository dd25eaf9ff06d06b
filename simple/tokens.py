"""Token definitions for the Simple language.

A token is the unit handed from the scanner to the parser. Each token
carries its kind, the source line it started on, the text it was scanned
from and, for literals, a converted value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional


class TokenType(Enum):
    # Reserved words.
    AND = 'AND'
    ARRAY = 'ARRAY'
    BEGIN = 'BEGIN'
    CASE = 'CASE'
    CONST = 'CONST'
    DIV = 'DIV'
    DO = 'DO'
    DOWNTO = 'DOWNTO'
    ELSE = 'ELSE'
    END = 'END'
    FILE = 'FILE'
    FOR = 'FOR'
    FUNCTION = 'FUNCTION'
    GOTO = 'GOTO'
    IF = 'IF'
    IN = 'IN'
    LABEL = 'LABEL'
    MOD = 'MOD'
    NIL = 'NIL'
    NOT = 'NOT'
    OF = 'OF'
    OR = 'OR'
    PACKED = 'PACKED'
    PROCEDURE = 'PROCEDURE'
    PROGRAM = 'PROGRAM'
    RECORD = 'RECORD'
    REPEAT = 'REPEAT'
    SET = 'SET'
    THEN = 'THEN'
    TO = 'TO'
    TYPE = 'TYPE'
    UNTIL = 'UNTIL'
    VAR = 'VAR'
    WHILE = 'WHILE'
    WITH = 'WITH'

    # Special symbols.
    PERIOD = '.'
    COMMA = ','
    COLON = ':'
    COLON_EQUALS = ':='
    SEMICOLON = ';'
    PLUS = '+'
    MINUS = '-'
    STAR = '*'
    SLASH = '/'
    LPAREN = '('
    RPAREN = ')'
    EQUALS = '='
    NOT_EQUALS = '<>'
    LESS_THAN = '<'
    LESS_EQUALS = '<='
    GREATER_THAN = '>'
    GREATER_EQUALS = '>='
    DOT_DOT = '..'
    LBRACKET = '['
    RBRACKET = ']'
    CARAT = '^'

    IDENTIFIER = 'IDENTIFIER'
    INTEGER = 'INTEGER'
    REAL = 'REAL'
    CHARACTER = 'CHARACTER'
    STRING = 'STRING'
    END_OF_FILE = 'END_OF_FILE'
    ERROR = 'ERROR'


_RESERVED = (
    'AND', 'ARRAY', 'BEGIN', 'CASE', 'CONST', 'DIV', 'DO', 'DOWNTO', 'ELSE',
    'END', 'FILE', 'FOR', 'FUNCTION', 'GOTO', 'IF', 'IN', 'LABEL', 'MOD',
    'NIL', 'NOT', 'OF', 'OR', 'PACKED', 'PROCEDURE', 'PROGRAM', 'RECORD',
    'REPEAT', 'SET', 'THEN', 'TO', 'TYPE', 'UNTIL', 'VAR', 'WHILE', 'WITH',
)

# Keyed by the upper-cased word.
RESERVED_WORDS = MappingProxyType({word: TokenType[word] for word in _RESERVED})


@dataclass
class Token:
    type: TokenType
    line_number: int
    text: str
    value: Optional[Any] = None

    def __repr__(self) -> str:
        return f"Token({self.type.name}, line {self.line_number}, {self.text!r})"


def word_type(text: str) -> TokenType:
    """Return the reserved-word kind for ``text`` or IDENTIFIER."""
    return RESERVED_WORDS.get(text.upper(), TokenType.IDENTIFIER)
