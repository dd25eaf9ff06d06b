from simple.errors import ErrorReporter
from simple.scanner import Scanner
from simple.tokens import TokenType


def kinds(source):
    return [token.type for token in Scanner(source).tokens()]


def test_reserved_words_are_case_insensitive():
    assert kinds('BeGiN begin BEGIN') == [TokenType.BEGIN] * 3
    assert kinds('div Div DIV') == [TokenType.DIV] * 3


def test_identifiers_and_numbers():
    tokens = list(Scanner('alpha_2 := 42 + 3.25').tokens())
    assert [t.type for t in tokens] == [
        TokenType.IDENTIFIER, TokenType.COLON_EQUALS, TokenType.INTEGER,
        TokenType.PLUS, TokenType.REAL,
    ]
    assert tokens[0].text == 'alpha_2'
    assert tokens[2].value == 42
    assert tokens[4].value == 3.25


def test_two_character_symbols():
    assert kinds('<= >= <> := .. < > = : .') == [
        TokenType.LESS_EQUALS, TokenType.GREATER_EQUALS, TokenType.NOT_EQUALS,
        TokenType.COLON_EQUALS, TokenType.DOT_DOT, TokenType.LESS_THAN,
        TokenType.GREATER_THAN, TokenType.EQUALS, TokenType.COLON, TokenType.PERIOD,
    ]


def test_range_is_not_a_real_number():
    assert kinds('1..5') == [TokenType.INTEGER, TokenType.DOT_DOT, TokenType.INTEGER]


def test_strings_and_characters():
    tokens = list(Scanner("'don''t' 'x' ''''").tokens())
    assert [t.type for t in tokens] == [TokenType.STRING, TokenType.CHARACTER, TokenType.CHARACTER]
    assert tokens[0].value == "don't"
    assert tokens[0].text == "'don''t'"
    assert tokens[1].value == 'x'
    assert tokens[2].value == "'"


def test_comments_are_skipped_and_lines_counted():
    source = "program p;\n{ a comment\n spanning lines }\nbegin\nend."
    tokens = list(Scanner(source).tokens())
    assert [t.type for t in tokens] == [
        TokenType.PROGRAM, TokenType.IDENTIFIER, TokenType.SEMICOLON,
        TokenType.BEGIN, TokenType.END, TokenType.PERIOD,
    ]
    assert [t.line_number for t in tokens] == [1, 1, 1, 4, 5, 5]


def test_end_of_file_is_repeated():
    scanner = Scanner('x')
    assert scanner.next_token().type == TokenType.IDENTIFIER
    for _ in range(3):
        token = scanner.next_token()
        assert token.type == TokenType.END_OF_FILE
        assert token.line_number == 1


def test_invalid_character_is_an_error_token(capsys):
    scanner = Scanner('a ? b')
    tokens = list(scanner.tokens())
    assert [t.type for t in tokens] == [TokenType.IDENTIFIER, TokenType.ERROR, TokenType.IDENTIFIER]
    assert scanner.error_count == 1
    assert capsys.readouterr().out == "TOKEN ERROR at line 1: Invalid token at '?'\n"


def test_malformed_number():
    reporter = ErrorReporter()
    scanner = Scanner('x := 1.2.3', reporter)
    tokens = list(scanner.tokens())
    assert tokens[-1].type == TokenType.ERROR
    assert tokens[-1].text == '1.2.3'
    assert reporter.records[0].message == 'Invalid number'


def test_unterminated_string_runs_to_end_of_file():
    reporter = ErrorReporter()
    scanner = Scanner("writeln('oops\nend.", reporter)
    tokens = list(scanner.tokens())
    assert [t.type for t in tokens] == [TokenType.IDENTIFIER, TokenType.LPAREN, TokenType.ERROR]
    assert reporter.records[0].message == 'String not closed'
    assert reporter.records[0].line_number == 1


def test_trailing_point_makes_a_real():
    tokens = list(Scanner('x := 1.; y := 2..3').tokens())
    assert [t.type for t in tokens] == [
        TokenType.IDENTIFIER, TokenType.COLON_EQUALS, TokenType.REAL, TokenType.SEMICOLON,
        TokenType.IDENTIFIER, TokenType.COLON_EQUALS, TokenType.INTEGER, TokenType.DOT_DOT,
        TokenType.INTEGER,
    ]
    assert tokens[2].value == 1.0
    assert tokens[2].text == '1.'
