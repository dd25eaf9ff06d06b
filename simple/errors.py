import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO


class SimpleRuntimeError(Exception):
    """Raised when an executing program does something it cannot, e.g. divide by zero."""
    def __init__(self, message: str, line_number: int = 0):
        if line_number:
            super().__init__(f"line {line_number}: {message}")
        else:
            super().__init__(message)
        self.message = message
        self.line_number = line_number


class InternalError(Exception):
    """Raised for a parse tree the executor has no rule for. Always a bug, never a user error."""
    pass


@dataclass
class ErrorRecord:
    kind: str  # 'TOKEN', 'SYNTAX' or 'SEMANTIC'
    line_number: int
    message: str
    text: str

    def __str__(self) -> str:
        return f"{self.kind} ERROR at line {self.line_number}: {self.message} at '{self.text}'"


class ErrorReporter:
    """Prints and counts the errors found while scanning and parsing.

    The scanner and the parser share one reporter, so `count` is the
    single total the caller checks before executing a tree.
    """
    def __init__(self, out: Optional[TextIO] = None):
        self.out = out
        self.records: List[ErrorRecord] = []

    @property
    def count(self) -> int:
        return len(self.records)

    def count_of(self, kind: str) -> int:
        return sum(1 for record in self.records if record.kind == kind)

    def token_error(self, line_number: int, message: str, text: str) -> None:
        self._report(ErrorRecord('TOKEN', line_number, message, text))

    def syntax_error(self, line_number: int, message: str, text: str) -> None:
        self._report(ErrorRecord('SYNTAX', line_number, message, text))

    def semantic_error(self, line_number: int, message: str, text: str) -> None:
        self._report(ErrorRecord('SEMANTIC', line_number, message, text))

    def _report(self, record: ErrorRecord) -> None:
        self.records.append(record)
        # resolved per call so pytest's capsys sees the output
        print(str(record), file=self.out if self.out is not None else sys.stdout)
