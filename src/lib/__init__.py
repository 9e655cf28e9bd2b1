"""
linecheck - FileCheck-style line verification engine

Checks that a text stream contains CHECK-directive patterns in order.
"""

__version__ = "1.0.0"

from .parser import DirectiveParser
from .compiler import PatternCompiler
from .matcher import StreamMatcher, verify, directives_load
from .errors import (
    CheckError,
    MalformedDirective,
    InvalidPattern,
    PatternNotFound,
    AdjacentPatternMismatch,
    ExcludedPatternFound,
)
from .log import LOG, state_connectToLogger

__all__ = [
    "DirectiveParser",
    "PatternCompiler",
    "StreamMatcher",
    "verify",
    "directives_load",
    "CheckError",
    "MalformedDirective",
    "InvalidPattern",
    "PatternNotFound",
    "AdjacentPatternMismatch",
    "ExcludedPatternFound",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
