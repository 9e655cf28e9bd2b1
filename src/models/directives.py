"""
Directive kinds and directive records

Defines the closed set of check directives understood by the matcher and the
immutable record produced for each directive line.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Optional


class DirectiveKind(Enum):
    """
    Kinds of check directives

    The value is the keyword suffix after the prefix ("" for plain CHECK).
    """
    CHECK = ""              # CHECK: somewhere after the previous match
    CHECK_NEXT = "NEXT"     # CHECK-NEXT: exactly the following line
    CHECK_SAME = "SAME"     # CHECK-SAME: later on the previous match's line
    CHECK_NOT = "NOT"       # CHECK-NOT: absent until the next match

    @property
    def needs_anchor(self) -> bool:
        """Whether the directive is only meaningful after a previous match"""
        return self in (DirectiveKind.CHECK_NEXT, DirectiveKind.CHECK_SAME)

    @property
    def is_positive(self) -> bool:
        """Whether a successful evaluation consumes text (everything but NOT)"""
        return self is not DirectiveKind.CHECK_NOT


# Suffix (as written after "<PREFIX>-") -> kind
DIRECTIVE_SUFFIXES: Dict[str, DirectiveKind] = {
    kind.value: kind for kind in DirectiveKind if kind.value
}


def kind_fromSuffix(suffix: Optional[str]) -> Optional[DirectiveKind]:
    """
    Look up a directive kind from its keyword suffix

    Args:
        suffix: Text after "<PREFIX>-", or None/"" for the bare prefix

    Returns:
        Matching DirectiveKind, or None for an unknown suffix
    """
    if not suffix:
        return DirectiveKind.CHECK
    return DIRECTIVE_SUFFIXES.get(suffix)


@dataclass(frozen=True)
class Directive:
    """
    One directive line from a directive file

    Attributes:
        kind: Directive kind
        raw_pattern: Text after the keyword's colon, trimmed
        line_number: 1-based line in the directive file
        keyword: Keyword as written (e.g. "CHECK-NEXT"), for diagnostics

    Example:
        For "CHECK-NEXT: Function Attrs:{{.*}}inlinehint" on line 4:
        Directive(kind=DirectiveKind.CHECK_NEXT,
                  raw_pattern="Function Attrs:{{.*}}inlinehint",
                  line_number=4, keyword="CHECK-NEXT")
    """
    kind: DirectiveKind
    raw_pattern: str
    line_number: int
    keyword: str = "CHECK"

    def __str__(self) -> str:
        return f"{self.keyword}: {self.raw_pattern}"
