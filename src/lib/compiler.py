"""
Pattern compiler for directive patterns

Transforms a directive's raw pattern text into a CompiledPattern.
"""

import re
from typing import List, Optional

from ..config import AppSettings, appsettings
from ..models.directives import Directive
from ..models.pattern import (
    CompiledDirective,
    CompiledPattern,
    LiteralSegment,
    Segment,
    WildcardSegment,
)
from .errors import InvalidPattern
from .log import LOG


WILDCARD_OPEN = "{{"
WILDCARD_CLOSE = "}}"
WILDCARD_BODY = ".*"


class PatternCompiler:
    """
    Compiles directive patterns to ordered-substring regular expressions

    Responsibilities:
    - Split pattern text into literal and wildcard segments
    - Reject unterminated or unsupported {{ }} blocks
    - Escape literals and make wildcards non-greedy
    - Optionally canonicalize literal whitespace
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        """
        Initialize compiler

        Args:
            settings: Optional AppSettings; defaults to the module singleton
        """
        self.settings = settings or appsettings

    def compile(self, raw_pattern: str, line_number: int = 0) -> CompiledPattern:
        """
        Compile one pattern

        Args:
            raw_pattern: Pattern text (already trimmed by the parser)
            line_number: Directive-file line, for error reporting

        Returns:
            CompiledPattern with segments and regex

        Raises:
            InvalidPattern: Unterminated '{{', unsupported block body, or an
                            invalid expression when regex blocks are enabled

        Example:
            >>> PatternCompiler().compile("a{{.*}}b").matches("ab")
            True
        """
        segments = self.segments_split(raw_pattern, line_number)
        expression = "".join(self.segment_translate(segment) for segment in segments)

        try:
            regex = re.compile(expression)
        except re.error as e:
            raise InvalidPattern(line_number, f"cannot compile '{raw_pattern}': {e}")

        LOG(f"Compiled '{raw_pattern}' -> /{expression}/", level=3)
        return CompiledPattern(raw=raw_pattern, segments=tuple(segments), regex=regex)

    def directives_compile(self, directives: List[Directive]) -> List[CompiledDirective]:
        """
        Compile every directive's pattern

        Any InvalidPattern aborts the whole list so no partial set is matched.
        """
        compiled = [
            CompiledDirective(
                directive=directive,
                pattern=self.compile(directive.raw_pattern, directive.line_number),
            )
            for directive in directives
        ]
        LOG(f"Compiled {len(compiled)} patterns", level=2)
        return compiled

    def segments_split(self, raw_pattern: str, line_number: int = 0) -> List[Segment]:
        """
        Split a pattern into literal and wildcard segments

        Scans for '{{', then for the closing '}}'. Text between blocks becomes a
        LiteralSegment; empty literals (adjacent blocks) are dropped since they
        are zero-width. A '}}' outside a block is ordinary literal text.

        Args:
            raw_pattern: Pattern text
            line_number: Directive-file line, for error reporting

        Returns:
            Ordered list of segments

        Raises:
            InvalidPattern: '{{' without a matching '}}', or an empty or
                            unsupported block body

        Example:
            "define {{.*}} @hot" ->
            [LiteralSegment("define "), WildcardSegment(".*"), LiteralSegment(" @hot")]
        """
        segments: List[Segment] = []
        pos = 0

        while pos < len(raw_pattern):
            open_pos = raw_pattern.find(WILDCARD_OPEN, pos)
            if open_pos == -1:
                segments.append(LiteralSegment(raw_pattern[pos:]))
                break

            if open_pos > pos:
                segments.append(LiteralSegment(raw_pattern[pos:open_pos]))

            body_start = open_pos + len(WILDCARD_OPEN)
            close_pos = raw_pattern.find(WILDCARD_CLOSE, body_start)
            if close_pos == -1:
                raise InvalidPattern(
                    line_number, f"found '{WILDCARD_OPEN}' with no matching '{WILDCARD_CLOSE}'"
                )

            body = raw_pattern[body_start:close_pos]
            self.body_validate(body, line_number)
            segments.append(WildcardSegment(body))
            pos = close_pos + len(WILDCARD_CLOSE)

        return segments

    def body_validate(self, body: str, line_number: int) -> None:
        """Reject block bodies the active settings do not allow"""
        if not body:
            raise InvalidPattern(line_number, "empty wildcard block '{{}}'")
        if body == WILDCARD_BODY:
            return
        if not self.settings.allow_regex_blocks:
            raise InvalidPattern(
                line_number,
                f"unsupported wildcard '{{{{{body}}}}}' (only '{{{{.*}}}}' is accepted)",
            )
        try:
            re.compile(body)
        except re.error as e:
            raise InvalidPattern(line_number, f"invalid regular expression '{body}': {e}")

    def segment_translate(self, segment: Segment) -> str:
        """
        Translate one segment to regex source

        Literals are escaped (with whitespace runs widened to [ \\t]+ unless
        strict_whitespace is set). The plain wildcard becomes non-greedy '.*?';
        other regex blocks are wrapped in a non-capturing group.
        """
        if isinstance(segment, WildcardSegment):
            if segment.expression == WILDCARD_BODY:
                return ".*?"
            return f"(?:{segment.expression})"

        if self.settings.strict_whitespace:
            return re.escape(segment.text)

        parts = re.split(r"([ \t]+)", segment.text)
        return "".join(
            r"[ \t]+" if index % 2 else re.escape(part)
            for index, part in enumerate(parts)
        )
