"""
Models package for linecheck

Contains data structures and type definitions for the verification pipeline.
"""

from .state import ProgramState, pipeline
from .directives import Directive, DirectiveKind, DIRECTIVE_SUFFIXES
from .parser import KeywordMatch
from .pattern import LiteralSegment, WildcardSegment, CompiledPattern, CompiledDirective
from .verdict import MatchCursor, Verdict

__all__ = [
    "ProgramState",
    "pipeline",
    "Directive",
    "DirectiveKind",
    "DIRECTIVE_SUFFIXES",
    "KeywordMatch",
    "LiteralSegment",
    "WildcardSegment",
    "CompiledPattern",
    "CompiledDirective",
    "MatchCursor",
    "Verdict",
]
