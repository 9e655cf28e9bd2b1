"""
Pattern compiler tests

Tests segment splitting, wildcard semantics and pattern errors.
"""

import pytest

from linecheck.config import AppSettings
from linecheck.lib.compiler import PatternCompiler
from linecheck.lib.errors import InvalidPattern
from linecheck.lib.parser import DirectiveParser
from linecheck.models.pattern import LiteralSegment, WildcardSegment


class TestSegments:
    """Test splitting into literal and wildcard segments"""

    def test_plain_literal(self):
        """No markers gives a single literal"""
        pattern = PatternCompiler().compile("ret void")
        assert pattern.segments == (LiteralSegment("ret void"),)

    def test_literal_wildcard_literal(self):
        """Marker in the middle"""
        pattern = PatternCompiler().compile("define {{.*}} @hot_function")

        assert pattern.segments == (
            LiteralSegment("define "),
            WildcardSegment(".*"),
            LiteralSegment(" @hot_function"),
        )

    def test_adjacent_wildcards(self):
        """Two adjacent markers produce no empty literal in between"""
        pattern = PatternCompiler().compile("a{{.*}}{{.*}}b")

        assert pattern.segments == (
            LiteralSegment("a"),
            WildcardSegment(),
            WildcardSegment(),
            LiteralSegment("b"),
        )

    def test_leading_and_trailing_wildcards(self):
        """Markers at both ends"""
        pattern = PatternCompiler().compile("{{.*}}mid{{.*}}")
        assert pattern.segments == (WildcardSegment(), LiteralSegment("mid"), WildcardSegment())

    def test_empty_pattern(self):
        """Empty pattern has no segments and matches any line"""
        pattern = PatternCompiler().compile("")

        assert pattern.segments == ()
        assert pattern.matches("")
        assert pattern.matches("anything")

    def test_stray_closing_braces_are_literal(self):
        """'}}' outside a block is plain text"""
        pattern = PatternCompiler().compile("x = {a}}")

        assert pattern.segments == (LiteralSegment("x = {a}}"),)
        assert pattern.matches("let x = {a}} ;")

    def test_closing_brace_after_block(self):
        """'{{.*}}}' is a wildcard followed by a literal '}'"""
        pattern = PatternCompiler().compile('!{!"TotalCount", i64 {{.*}}}')

        assert pattern.segments[-2:] == (WildcardSegment(), LiteralSegment("}"))
        assert pattern.matches('!1 = !{!"TotalCount", i64 10000}')


class TestMatching:
    """Test ordered-substring match semantics"""

    def test_substring_not_anchored(self):
        """Pattern may match anywhere in the line"""
        assert PatternCompiler().compile("hot").matches("define void @hot_function()")

    def test_zero_width_wildcard(self):
        """'a{{.*}}b' matches 'ab'"""
        assert PatternCompiler().compile("a{{.*}}b").matches("ab")

    def test_literals_in_order(self):
        """Literals must appear in pattern order"""
        pattern = PatternCompiler().compile("a{{.*}}b")

        assert pattern.matches("xxaYYbzz")
        assert not pattern.matches("b then a")

    def test_literals_do_not_overlap(self):
        """Each literal must start after the previous one ends"""
        pattern = PatternCompiler().compile("aba{{.*}}abc")

        assert not pattern.matches("ababc")
        assert pattern.matches("abaabc")

    def test_regex_metacharacters_are_literal(self):
        """Literal text is escaped"""
        pattern = PatternCompiler().compile('!{!"ProfileFormat", !"InstrProf"}')

        assert pattern.matches('!0 = !{!"ProfileFormat", !"InstrProf"}')
        assert not pattern.matches('!0 = !{!"ProfileFormatX", !"InstrProf"}')

    def test_dot_is_literal(self):
        """A '.' outside a block only matches a dot"""
        pattern = PatternCompiler().compile("a.b")

        assert pattern.matches("a.b")
        assert not pattern.matches("axb")

    def test_wildcard_is_non_greedy(self):
        """The wildcard takes the shortest span before the next literal"""
        pattern = PatternCompiler().compile("a{{.*}}b")
        match = pattern.search("a1b2b")

        assert match.group(0) == "a1b"

    def test_search_from_column(self):
        """search() honours the start column"""
        pattern = PatternCompiler().compile("x")
        match = pattern.search("x..x", 1)

        assert match.start() == 3

    def test_strict_whitespace_default(self):
        """By default whitespace is matched exactly"""
        pattern = PatternCompiler().compile("a b")
        assert not pattern.matches("a  b")

    def test_canonical_whitespace(self):
        """Without strict whitespace, runs of spaces/tabs are interchangeable"""
        compiler = PatternCompiler(AppSettings(strict_whitespace=False))
        pattern = compiler.compile("a b")

        assert pattern.matches("a  b")
        assert pattern.matches("a\tb")
        assert not pattern.matches("ab")


class TestInvalidPatterns:
    """Test pattern errors"""

    def test_unterminated_block(self):
        """'{{' without '}}' is invalid"""
        with pytest.raises(InvalidPattern) as excinfo:
            PatternCompiler().compile("define {{.* @f", line_number=7)

        assert excinfo.value.line_number == 7
        assert "no matching" in excinfo.value.reason

    def test_empty_block(self):
        """'{{}}' is invalid"""
        with pytest.raises(InvalidPattern):
            PatternCompiler().compile("a{{}}b")

    def test_unsupported_block(self):
        """Only '{{.*}}' is accepted by default"""
        with pytest.raises(InvalidPattern, match="unsupported wildcard"):
            PatternCompiler().compile("i{{[0-9]+}}")

    def test_regex_blocks_when_enabled(self):
        """allow_regex_blocks accepts arbitrary expressions"""
        compiler = PatternCompiler(AppSettings(allow_regex_blocks=True))
        pattern = compiler.compile("i{{[0-9]+}} %x")

        assert pattern.matches("  %y = add i32 %x, 1")
        assert not pattern.matches("  %y = add iN %x, 1")

    def test_regex_alternation_is_grouped(self):
        """Block bodies are grouped so alternation stays inside the block"""
        compiler = PatternCompiler(AppSettings(allow_regex_blocks=True))
        pattern = compiler.compile("call {{void|i32}} @f")

        assert pattern.matches("call i32 @f")
        assert not pattern.matches("void")

    def test_invalid_regex_block(self):
        """A broken expression raises InvalidPattern"""
        compiler = PatternCompiler(AppSettings(allow_regex_blocks=True))

        with pytest.raises(InvalidPattern, match="invalid regular expression"):
            compiler.compile("{{(}}")


class TestDirectivesCompile:
    """Compiling a parsed directive list"""

    def test_compiles_every_directive(self):
        """Each directive is paired with its pattern"""
        directives = DirectiveParser("CHECK: a{{.*}}b\nCHECK-NEXT: c").parse()
        compiled = PatternCompiler().directives_compile(directives)

        assert [c.directive for c in compiled] == directives
        assert compiled[0].pattern.matches("a--b")

    def test_error_reports_directive_line(self):
        """InvalidPattern carries the directive's line number"""
        directives = DirectiveParser("CHECK: ok\n\nCHECK: bad {{.*").parse()

        with pytest.raises(InvalidPattern) as excinfo:
            PatternCompiler().directives_compile(directives)
        assert excinfo.value.line_number == 3
