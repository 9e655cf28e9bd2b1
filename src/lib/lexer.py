"""
Custom Pygments lexer for directive files

Used to highlight the failing directive line in CLI diagnostics.

Token types:
- Comment: '#' comment lines
- Keyword: Directive keywords (CHECK, CHECK-NEXT, ...)
- Punctuation: Keyword colon and {{ }} markers
- String.Regex: Wildcard block bodies
- String: Literal pattern text
"""

import re
from functools import lru_cache
from typing import Dict, Optional, Type

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Keyword,
    String,
    Comment,
)

from ..config import appsettings
from ..models.directives import DIRECTIVE_SUFFIXES


def tokens_make(prefix: str) -> Dict[str, list]:
    """
    Build the token table for a directive prefix

    Only the keywords the parser recognizes are highlighted: the prefix on
    its own or followed by one of the directive suffixes.
    """
    suffixes = "|".join(re.escape(suffix) for suffix in DIRECTIVE_SUFFIXES)
    keyword = rf'{re.escape(prefix)}(?:-(?:{suffixes}))?'

    return {
        'root': [
            # Comment lines
            (r'^\s*#.*?$', Comment),

            # Directive keyword, optionally behind a // or ; leader
            (rf'^(\s*(?://|;)?\s*)({keyword})(:)',
             bygroups(Text, Keyword, Punctuation), 'pattern'),

            # Anything else is plain text
            (r'[^\n]+', Text),
            (r'\n', Text),
        ],

        'pattern': [
            # Wildcard block
            (r'(\{\{)(.*?)(\}\})', bygroups(Punctuation, String.Regex, Punctuation)),

            # End of directive line
            (r'\n', Text, '#pop'),

            # Literal pattern text
            (r'[^{\n]+', String),
            (r'\{', String),
        ],
    }


class DirectiveLexer(RegexLexer):
    """
    Lexer for CHECK directive files

    Example:
        CHECK-NEXT: Function Attrs:{{.*}}inlinehint

    Tokens:
        CHECK-NEXT → Keyword
        : → Punctuation
        Function Attrs: → String
        {{ → Punctuation
        .* → String.Regex
        }} → Punctuation
        inlinehint → String
    """

    name = 'Linecheck'
    aliases = ['linecheck', 'filecheck']
    filenames = ['*.check']

    tokens = tokens_make('CHECK')


@lru_cache(maxsize=None)
def lexerClass_forPrefix(prefix: str) -> Type[DirectiveLexer]:
    """DirectiveLexer subclass whose keyword rule uses `prefix`"""
    if prefix == 'CHECK':
        return DirectiveLexer
    return type(f'DirectiveLexer[{prefix}]', (DirectiveLexer,), {'tokens': tokens_make(prefix)})


def get_lexer(prefix: Optional[str] = None) -> DirectiveLexer:
    """
    Get a DirectiveLexer instance

    Args:
        prefix: Directive prefix; defaults to the configured check_prefix

    Returns:
        DirectiveLexer instance ready for use with Pygments
    """
    return lexerClass_forPrefix(prefix or appsettings.check_prefix)()
