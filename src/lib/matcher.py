"""
Stream matcher for compiled directives

Walks the target text line by line against the compiled directive sequence
and produces a Verdict.

Matching rules:
- CHECK scans forward from the cursor; the first matching line is the anchor
- CHECK-NEXT examines exactly the line at the cursor, no search
- CHECK-SAME searches the rest of the anchor line after the previous match
- CHECK-NOT is deferred until the next positive match (or end of text) and
  must not occur anywhere in between

The cursor only ever moves forward, so a run over n lines does O(n) line
tests for any sequence of CHECK directives.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from ..config import AppSettings, appsettings
from ..models.directives import DirectiveKind
from ..models.pattern import CompiledDirective
from ..models.verdict import MatchCursor, Verdict
from .compiler import PatternCompiler
from .errors import (
    AdjacentPatternMismatch,
    CheckError,
    ExcludedPatternFound,
    MalformedDirective,
    PatternNotFound,
)
from .log import LOG
from .parser import DirectiveParser, lines_split


class StreamMatcher:
    """
    Evaluates a compiled directive sequence against target lines

    One StreamMatcher can run any number of times; each run() creates its own
    MatchCursor, so repeated runs yield identical verdicts.
    """

    def __init__(self, directives: Sequence[CompiledDirective], lines: Sequence[str]) -> None:
        """
        Initialize matcher

        Args:
            directives: Compiled directives in file order
            lines: Target text split into lines (no line terminators)
        """
        self.directives = list(directives)
        self.lines = list(lines)

    def run(self) -> Verdict:
        """
        Evaluate every directive in order

        Returns:
            Verdict with passed=True and the anchor list

        Raises:
            PatternNotFound: A CHECK found no line
            AdjacentPatternMismatch: A CHECK-NEXT/CHECK-SAME did not match its line
            ExcludedPatternFound: A CHECK-NOT pattern occurred in its region
        """
        cursor = MatchCursor()
        anchors: List[Tuple[int, int]] = []
        pending_nots: List[CompiledDirective] = []

        for compiled in self.directives:
            kind = compiled.kind

            if kind is DirectiveKind.CHECK_NOT:
                pending_nots.append(compiled)
                continue

            if kind is DirectiveKind.CHECK:
                line_index, start, end = self.check_evaluate(compiled, cursor)
            elif kind is DirectiveKind.CHECK_NEXT:
                line_index, start, end = self.checkNext_evaluate(compiled, cursor)
            elif kind is DirectiveKind.CHECK_SAME:
                line_index, start, end = self.checkSame_evaluate(compiled, cursor)
            else:
                raise ValueError(f"Unhandled directive kind: {kind}")

            self.nots_verify(pending_nots, cursor, line_index, start)
            pending_nots = []

            # CHECK-SAME re-anchors on the same line, so a following
            # CHECK-NEXT still refers to the line after it
            cursor.anchor_set(line_index, end)
            anchors.append((compiled.directive.line_number, line_index + 1))
            LOG(
                f"{compiled.directive.keyword} (line {compiled.directive.line_number}) "
                f"matched target line {line_index + 1}",
                level=3,
            )

        self.nots_verify(pending_nots, cursor, len(self.lines), 0)
        return Verdict(passed=True, anchors=anchors)

    def check_evaluate(
        self, compiled: CompiledDirective, cursor: MatchCursor
    ) -> Tuple[int, int, int]:
        """
        Forward search for a CHECK directive

        Returns:
            (line index, match start column, match end column)
        """
        for line_index in range(cursor.line_index, len(self.lines)):
            match = compiled.pattern.search(self.lines[line_index])
            if match is not None:
                return line_index, match.start(), match.end()

        raise PatternNotFound(compiled.directive, searched_from=cursor.line_index)

    def checkNext_evaluate(
        self, compiled: CompiledDirective, cursor: MatchCursor
    ) -> Tuple[int, int, int]:
        """Test exactly the line under the cursor"""
        line_index = cursor.line_index
        if line_index >= len(self.lines):
            raise AdjacentPatternMismatch(compiled.directive, line_index + 1, None)

        line = self.lines[line_index]
        match = compiled.pattern.search(line)
        if match is None:
            raise AdjacentPatternMismatch(compiled.directive, line_index + 1, line)
        return line_index, match.start(), match.end()

    def checkSame_evaluate(
        self, compiled: CompiledDirective, cursor: MatchCursor
    ) -> Tuple[int, int, int]:
        """Search the anchor line after the end of the previous match"""
        line_index = cursor.anchor_line
        if line_index is None:
            # The parser rejects a leading CHECK-SAME; reaching this means
            # the directive list was assembled by hand
            raise MalformedDirective(compiled.directive.line_number, "CHECK-SAME without a previous match")

        line = self.lines[line_index]
        match = compiled.pattern.search(line, cursor.column)
        if match is None:
            raise AdjacentPatternMismatch(compiled.directive, line_index + 1, line)
        return line_index, match.start(), match.end()

    def nots_verify(
        self,
        pending: List[CompiledDirective],
        cursor: MatchCursor,
        end_line: int,
        end_column: int,
    ) -> None:
        """
        Check deferred CHECK-NOT directives against the region since the last match

        The region runs from the end of the previous match (or the start of the
        text) up to (end_line, end_column) exclusive.

        Raises:
            ExcludedPatternFound: For the first CHECK-NOT (in file order) that
                                  occurs in the region
        """
        if not pending:
            return

        for compiled in pending:
            for line_index, first, last in self.region_iterate(cursor, end_line, end_column):
                if compiled.pattern.search(self.lines[line_index], first, last) is not None:
                    raise ExcludedPatternFound(
                        compiled.directive, line_index + 1, self.lines[line_index]
                    )

    def region_iterate(
        self, cursor: MatchCursor, end_line: int, end_column: int
    ) -> Iterator[Tuple[int, int, int]]:
        """
        Yield (line index, first column, end column) spans between the cursor
        and an end position

        Spans index into the full line so that anchors and lookbehinds in a
        pattern still see the real start of the line.

        Example:
            anchor on line 2 ending at column 5, end at line 4 column 3:
            (2, 5, len(lines[2])), (3, 0, len(lines[3])), (4, 0, 3)
        """
        if cursor.anchor_line is None:
            start_line, start_column = 0, 0
        else:
            start_line, start_column = cursor.anchor_line, cursor.column

        for line_index in range(start_line, min(end_line + 1, len(self.lines))):
            line = self.lines[line_index]
            first = start_column if line_index == start_line else 0
            last = end_column if line_index == end_line else len(line)
            if last > first:
                yield line_index, first, last




def directives_load(
    directive_text: str, settings: Optional[AppSettings] = None
) -> List[CompiledDirective]:
    """
    Parse and compile a directive file

    Raises:
        MalformedDirective: From the parser, or when the file has no directives
        InvalidPattern: From the compiler
    """
    settings = settings or appsettings
    directives = DirectiveParser(directive_text, settings=settings).parse()
    if not directives:
        raise MalformedDirective(0, f"no {settings.check_prefix} directives found")
    return PatternCompiler(settings=settings).directives_compile(directives)


def verify(
    directive_text: str, target_text: str, settings: Optional[AppSettings] = None
) -> Verdict:
    """
    Verify a target text against a directive file

    Main entry point. Parse-time errors abort before any scanning; run-time
    errors abort at the first unsatisfied directive. Either way the error is
    returned inside the Verdict rather than raised.

    Args:
        directive_text: Directive file contents
        target_text: Text to verify
        settings: Optional AppSettings; defaults to the module singleton

    Returns:
        Verdict

    Example:
        >>> verify("CHECK: a{{.*}}b", "xx\\nab\\n").passed
        True
    """
    try:
        compiled = directives_load(directive_text, settings)
        verdict = StreamMatcher(compiled, lines_split(target_text)).run()
    except CheckError as e:
        LOG(f"Verification failed: {e.diagnostic()}", level=2)
        return Verdict(passed=False, failure=e)

    LOG(f"Verification passed ({len(verdict.anchors)} anchors)", level=2)
    return verdict
