"""
Parser-specific data models

Type-safe structures for parser operations and return values.
"""

from dataclasses import dataclass
from typing import Optional

from .directives import DirectiveKind


@dataclass
class KeywordMatch:
    """
    Result of recognizing a directive keyword at the start of a line

    Returned by DirectiveParser.keyword_find() when a line begins with
    "<PREFIX>:" or "<PREFIX>-<SUFFIX>:" (after an optional leader).

    Attributes:
        keyword: Keyword as written, without the colon (e.g. "CHECK-NEXT")
        kind: Recognized kind, or None if the suffix is unknown
        remainder: Text after the colon, untrimmed

    Example:
        For line "; CHECK-NEXT:  ret void":
        KeywordMatch(keyword="CHECK-NEXT", kind=DirectiveKind.CHECK_NEXT,
                     remainder="  ret void")
    """
    keyword: str
    kind: Optional[DirectiveKind]
    remainder: str
