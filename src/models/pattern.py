"""
Compiled pattern models

A pattern is an ordered sequence of literal and wildcard segments. The
PatternCompiler (lib/compiler.py) builds these and attaches the regular
expression that implements the ordered-substring match.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .directives import Directive


@dataclass(frozen=True)
class LiteralSegment:
    """Text that must appear verbatim"""
    text: str


@dataclass(frozen=True)
class WildcardSegment:
    """Any (possibly empty) span; `expression` is the block body, ".*" by default"""
    expression: str = ".*"


Segment = Union[LiteralSegment, WildcardSegment]


@dataclass(frozen=True)
class CompiledPattern:
    """
    Matchable form of a directive pattern

    Attributes:
        raw: Pattern text as written in the directive
        segments: Literal/wildcard segments in order
        regex: Compiled expression; literal segments escaped, wildcards non-greedy

    A line matches when the literal segments occur in order, each after the
    end of the previous one. Nothing is anchored to line start or end.
    """
    raw: str
    segments: Tuple[Segment, ...]
    regex: "re.Pattern[str]"

    def search(
        self, line: str, start: int = 0, end: Optional[int] = None
    ) -> Optional["re.Match[str]"]:
        """Find the first match in `line` within columns [start, end)"""
        if end is None:
            return self.regex.search(line, start)
        return self.regex.search(line, start, end)

    def matches(self, line: str) -> bool:
        return self.regex.search(line) is not None


@dataclass(frozen=True)
class CompiledDirective:
    """A directive together with its compiled pattern"""
    directive: Directive
    pattern: CompiledPattern

    @property
    def kind(self):
        return self.directive.kind
