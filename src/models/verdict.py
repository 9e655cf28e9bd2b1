"""
Matcher state and result models

MatchCursor is the scan position threaded through one verification run;
Verdict is what the run hands back to the caller.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING

# Forward reference for type hint - avoid circular import
if TYPE_CHECKING:
    from ..lib.errors import CheckError


@dataclass
class MatchCursor:
    """
    Forward-only scan position over the target lines

    Attributes:
        line_index: 0-based index of the next line a CHECK may consider
        anchor_line: Index of the most recently matched line (None before any match)
        column: Column where the most recent match ended on anchor_line
    """
    line_index: int = 0
    anchor_line: Optional[int] = None
    column: int = 0

    def anchor_set(self, line_index: int, column: int) -> None:
        """Record a match on `line_index` ending at `column` and move past it"""
        self.anchor_line = line_index
        self.column = column
        self.line_index = line_index + 1


@dataclass
class Verdict:
    """
    Outcome of one directive-file run against one target text

    Attributes:
        passed: True if every directive was satisfied
        failure: The first error that ended the run, None on success
        anchors: (directive line_number, 1-based target line) per positive match
    """
    passed: bool
    failure: Optional["CheckError"] = None
    anchors: List[Tuple[int, int]] = field(default_factory=list)

    def diagnostic(self) -> str:
        if self.failure is None:
            return "all directives satisfied"
        return self.failure.diagnostic()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "passed": self.passed,
            "diagnostic": self.diagnostic(),
            "failure": self.failure.to_dict() if self.failure is not None else None,
            "anchors": [list(pair) for pair in self.anchors],
        }
