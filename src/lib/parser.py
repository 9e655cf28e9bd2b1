"""
Parser for CHECK directive files

Transforms directive-file text into an ordered list of Directive records.

The parser works line by line:
1. Classification: blank, comment, directive, or anything else
2. Recognition: split a directive line into keyword and pattern text
3. Validation: CHECK-NEXT / CHECK-SAME need a previous positive directive

Key features:
- Configurable keyword prefix (CHECK, or any --check-prefix value)
- Optional comment leaders before the keyword ('; CHECK: ...')
- Line number tracking for diagnostics
- Strict mode for rejecting unrecognized lines

Example:
    >>> parser = DirectiveParser("CHECK: define\\nCHECK-NEXT: ret")
    >>> directives = parser.parse()
    >>> directives[1].kind
    <DirectiveKind.CHECK_NEXT: 'NEXT'>
    >>> directives[1].line_number
    2
"""

import re
from typing import List, Optional

from ..config import AppSettings, appsettings
from ..models.directives import Directive, DirectiveKind, kind_fromSuffix
from ..models.parser import KeywordMatch
from .errors import MalformedDirective
from .log import LOG


class DirectiveParser:
    """
    Parser for "<PREFIX>[-<SUFFIX>]: pattern" directive lines

    Handles:
    - Blank lines and comment lines (skipped)
    - CHECK, CHECK-NEXT, CHECK-SAME, CHECK-NOT
    - Unrecognized lines (ignored, or MalformedDirective in strict mode)
    - Error reporting with line numbers
    """

    def __init__(self, source: str, settings: Optional[AppSettings] = None):
        """
        Initialize parser with directive-file text

        Args:
            source: Raw directive file contents
            settings: Optional AppSettings; defaults to the module singleton

        Attributes:
            source: Source text being parsed
            settings: Active settings (prefix, comment marker, strictness)
            line_number: Current 1-based line (for error reporting)
            keyword_pattern: Compiled keyword recognizer for the active prefix
        """
        self.source = source
        self.settings = settings or appsettings
        self.line_number = 0
        self.keyword_pattern = re.compile(
            rf"^({re.escape(self.settings.check_prefix)}(?:-([A-Za-z]+))?):(.*)$"
        )

    def parse(self) -> List[Directive]:
        """
        Parse source text into an ordered directive list

        Returns:
            Directives in file order. Empty list for a file without directives.

        Raises:
            MalformedDirective: CHECK-NEXT/CHECK-SAME with nothing to follow,
                                or (strict mode) an unrecognized line

        Example:
            >>> DirectiveParser("# header\\n\\nCHECK: foo").parse()[0].line_number
            3
        """
        directives: List[Directive] = []
        has_anchor = False

        for line_number, line in enumerate(lines_split(self.source), start=1):
            self.line_number = line_number
            if self.line_skippable(line):
                continue

            match = self.keyword_find(line)
            if match is None:
                if self.settings.strict_mode:
                    raise MalformedDirective(
                        self.line_number, f"unrecognized line '{line.strip()}'"
                    )
                LOG(f"Ignoring line {self.line_number}: {line.strip()}", level=3)
                continue

            if match.kind is None:
                if self.settings.strict_mode:
                    raise MalformedDirective(
                        self.line_number, f"unsupported directive '{match.keyword}'"
                    )
                LOG(f"Ignoring unsupported directive '{match.keyword}' on line {self.line_number}", level=2)
                continue

            if match.kind.needs_anchor and not has_anchor:
                raise MalformedDirective(
                    self.line_number,
                    f"found '{match.keyword}' without a previous {self.settings.check_prefix} line",
                )

            directive = Directive(
                kind=match.kind,
                raw_pattern=match.remainder.strip(),
                line_number=self.line_number,
                keyword=match.keyword,
            )
            directives.append(directive)
            has_anchor = has_anchor or match.kind.is_positive

        LOG(f"Parsed {len(directives)} directives", level=2)
        return directives

    def line_skippable(self, line: str) -> bool:
        """
        Check whether a line is blank or a comment

        Args:
            line: Raw directive-file line

        Returns:
            True for whitespace-only lines and lines starting with the comment marker
        """
        stripped = line.strip()
        if not stripped:
            return True
        marker = self.settings.comment_marker
        return bool(marker) and stripped.startswith(marker)

    def keyword_find(self, line: str) -> Optional[KeywordMatch]:
        """
        Recognize a directive keyword at the start of a line

        Leading whitespace and one configured leader ('//', ';') are skipped.
        The keyword must be the case-sensitive prefix of what remains.

        Args:
            line: Raw directive-file line

        Returns:
            KeywordMatch, or None if the line does not start with the prefix

        Example:
            For "; CHECK-NOT: call" returns
            KeywordMatch(keyword="CHECK-NOT", kind=DirectiveKind.CHECK_NOT, remainder=" call")

            For "CHECK-FOO: x" returns a KeywordMatch with kind=None
        """
        text = self.settings.leader_strip(line.lstrip())
        match = self.keyword_pattern.match(text)
        if not match:
            return None

        keyword, suffix, remainder = match.group(1), match.group(2), match.group(3)
        kind: Optional[DirectiveKind] = kind_fromSuffix(suffix)
        return KeywordMatch(keyword=keyword, kind=kind, remainder=remainder)


def lines_split(text: str) -> List[str]:
    """
    Split text into lines on '\\n' only

    A trailing '\\r' is dropped from each line and a closing newline does not
    produce an extra empty line. Form feeds, vertical tabs and Unicode line
    separators stay inside their line.

    Example:
        >>> lines_split("a\\x0c\\r\\nb\\n")
        ['a\\x0c', 'b']
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]
