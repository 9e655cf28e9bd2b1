"""
Diagnostic rendering for verdicts

Turns a Verdict into the human-readable report printed by the CLI: the
one-line diagnostic, the offending directive line (syntax highlighted when
color is on) and the target line involved, if any.
"""

from typing import List, Optional

from pygments import highlight
from pygments.formatters import TerminalFormatter

from ..models.verdict import Verdict
from .lexer import get_lexer
from .parser import lines_split


def directiveLine_render(line: str, color: bool, prefix: Optional[str] = None) -> str:
    """Render a directive-file line, highlighted if `color`"""
    if not color:
        return line
    return highlight(line, get_lexer(prefix), TerminalFormatter()).rstrip("\n")


def verdict_render(
    verdict: Verdict,
    directive_source: str,
    check_name: str = "<directives>",
    input_name: str = "<input>",
    color: bool = False,
    prefix: Optional[str] = None,
) -> str:
    """
    Render a verdict as a multi-line report

    Args:
        verdict: Result of verify()
        directive_source: Directive file text (to quote the failing line)
        check_name: Display name of the directive file
        input_name: Display name of the target text
        color: Highlight the directive line with Pygments
        prefix: Directive prefix for highlighting; defaults to the configured one

    Returns:
        Report text without trailing newline

    Example output:
        profile.check:4: error: AdjacentPatternMismatch
        line 4: CHECK-NEXT: mismatch at line 21, expected pattern ..., got text ...
          CHECK-NEXT: Function Attrs:{{.*}}inlinehint
        profile.ll:21: Function Attrs: cold
    """
    if verdict.passed:
        return f"{check_name}: PASS ({len(verdict.anchors)} directives matched in {input_name})"

    failure = verdict.failure
    lines: List[str] = [
        f"{check_name}:{failure.line_number}: error: {failure.kind}",
        verdict.diagnostic(),
    ]

    source_lines = lines_split(directive_source)
    if 1 <= failure.line_number <= len(source_lines):
        quoted = directiveLine_render(
            source_lines[failure.line_number - 1].strip(), color, prefix
        )
        lines.append(f"  {quoted}")

    actual_line: Optional[int] = getattr(failure, "actual_line", None)
    actual_text: Optional[str] = getattr(failure, "actual_text", None)
    if actual_line is not None:
        shown = "<end of input>" if actual_text is None else actual_text
        lines.append(f"{input_name}:{actual_line}: {shown}")

    return "\n".join(lines)
