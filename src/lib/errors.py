"""
Error taxonomy for directive parsing and matching

Parse-time errors (MalformedDirective, InvalidPattern) abort before any
scanning starts. Run-time errors (PatternNotFound, AdjacentPatternMismatch,
ExcludedPatternFound) abort the scan at the first unsatisfied directive.

Every error carries the directive-file line number it refers to and renders a
one-line diagnostic via diagnostic().
"""

from typing import Any, Dict, Optional

from ..models.directives import Directive


class CheckError(Exception):
    """Base class for every verification failure"""

    kind: str = "CheckError"

    def __init__(self, line_number: int, message: str) -> None:
        super().__init__(message)
        self.line_number = line_number

    def diagnostic(self) -> str:
        return str(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.kind,
            "line_number": self.line_number,
            "message": self.diagnostic(),
        }


class MalformedDirective(CheckError):
    """Raised when the directive file itself is not well-formed"""

    kind = "MalformedDirective"

    def __init__(self, line_number: int, reason: str) -> None:
        self.reason = reason
        super().__init__(line_number, f"line {line_number}: malformed directive: {reason}")


class InvalidPattern(CheckError):
    """Raised when a directive's pattern text cannot be compiled"""

    kind = "InvalidPattern"

    def __init__(self, line_number: int, reason: str) -> None:
        self.reason = reason
        super().__init__(line_number, f"line {line_number}: invalid pattern: {reason}")


class PatternNotFound(CheckError):
    """
    A CHECK directive found no matching line in the remaining text

    Attributes:
        directive: The unsatisfied directive
        searched_from: Cursor index where the search began, i.e. the 1-based
                       line number of the previous anchor (0 if none)
    """

    kind = "PatternNotFound"

    def __init__(self, directive: Directive, searched_from: int) -> None:
        self.directive = directive
        self.searched_from = searched_from
        super().__init__(
            directive.line_number,
            f"line {directive.line_number}: {directive.keyword}: "
            f"pattern '{directive.raw_pattern}' not found after line {searched_from}",
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(directive=directive_dump(self.directive), searched_from=self.searched_from)
        return result


class AdjacentPatternMismatch(CheckError):
    """
    A CHECK-NEXT (or CHECK-SAME) directive did not match its required line

    Attributes:
        directive: The unsatisfied directive
        actual_line: 1-based target line that was examined
        actual_text: That line's text, or None when past end of input
    """

    kind = "AdjacentPatternMismatch"

    def __init__(self, directive: Directive, actual_line: int, actual_text: Optional[str]) -> None:
        self.directive = directive
        self.actual_line = actual_line
        self.actual_text = actual_text
        got = "end of input" if actual_text is None else f"text '{actual_text}'"
        super().__init__(
            directive.line_number,
            f"line {directive.line_number}: {directive.keyword}: mismatch at line {actual_line}, "
            f"expected pattern '{directive.raw_pattern}', got {got}",
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(
            directive=directive_dump(self.directive),
            actual_line=self.actual_line,
            actual_text=self.actual_text,
        )
        return result


class ExcludedPatternFound(CheckError):
    """
    A CHECK-NOT pattern occurred in the region it must be absent from

    Attributes:
        directive: The violated CHECK-NOT directive
        actual_line: 1-based target line containing the excluded text
        actual_text: That line's text
    """

    kind = "ExcludedPatternFound"

    def __init__(self, directive: Directive, actual_line: int, actual_text: str) -> None:
        self.directive = directive
        self.actual_line = actual_line
        self.actual_text = actual_text
        super().__init__(
            directive.line_number,
            f"line {directive.line_number}: {directive.keyword}: excluded pattern "
            f"'{directive.raw_pattern}' found at line {actual_line}: '{actual_text}'",
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(
            directive=directive_dump(self.directive),
            actual_line=self.actual_line,
            actual_text=self.actual_text,
        )
        return result


def directive_dump(directive: Directive) -> Dict[str, Any]:
    """JSON-ready view of a directive"""
    return {
        "kind": directive.kind.name,
        "keyword": directive.keyword,
        "pattern": directive.raw_pattern,
        "line_number": directive.line_number,
    }
