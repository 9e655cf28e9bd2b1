"""
linecheck - FileCheck-style line verification engine

Verifies that a text stream (typically compiler IR) contains the patterns of
a CHECK directive file in the required order and adjacency.
"""

__version__ = "1.0.0"

from .lib import DirectiveParser, PatternCompiler, StreamMatcher, verify, LOG, state_connectToLogger

__all__ = [
    "DirectiveParser",
    "PatternCompiler",
    "StreamMatcher",
    "verify",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
