"""
Directive parser tests

Tests blank/comment skipping, keyword recognition, line numbers and the
CHECK-NEXT / CHECK-SAME placement rule.
"""

import pytest

from linecheck.config import AppSettings
from linecheck.lib.parser import DirectiveParser, lines_split
from linecheck.lib.errors import MalformedDirective
from linecheck.models.directives import Directive, DirectiveKind


class TestEmptyAndSimple:
    """Test empty source and simplest directives"""

    def test_empty_source(self):
        """Empty string should parse to empty list"""
        parser = DirectiveParser("")
        assert parser.parse() == []

    def test_blank_and_comment_only(self):
        """Only blank lines and comments should parse to empty list"""
        parser = DirectiveParser("   \n\n# a comment\n   # indented comment\n\t\n")
        assert parser.parse() == []

    def test_single_check(self):
        """Single CHECK directive"""
        directives = DirectiveParser("CHECK: define void @f").parse()

        assert directives == [
            Directive(
                kind=DirectiveKind.CHECK,
                raw_pattern="define void @f",
                line_number=1,
                keyword="CHECK",
            )
        ]

    def test_check_then_next(self):
        """CHECK followed by CHECK-NEXT"""
        directives = DirectiveParser("CHECK: a\nCHECK-NEXT: b").parse()

        assert [d.kind for d in directives] == [DirectiveKind.CHECK, DirectiveKind.CHECK_NEXT]
        assert directives[1].keyword == "CHECK-NEXT"
        assert directives[1].raw_pattern == "b"

    def test_all_kinds(self):
        """Every supported suffix is recognized"""
        source = "CHECK: a\nCHECK-SAME: b\nCHECK-NOT: c\nCHECK-NEXT: d\n"
        kinds = [d.kind for d in DirectiveParser(source).parse()]

        assert kinds == [
            DirectiveKind.CHECK,
            DirectiveKind.CHECK_SAME,
            DirectiveKind.CHECK_NOT,
            DirectiveKind.CHECK_NEXT,
        ]


class TestLineNumbers:
    """Directive line numbers count every source line"""

    def test_line_numbers_skip_nothing(self):
        """Blank and comment lines still advance the line counter"""
        source = "# header\n\nCHECK: first\n\n# note\nCHECK-NEXT: second\n"
        directives = DirectiveParser(source).parse()

        assert [d.line_number for d in directives] == [3, 6]

    def test_crlf_line_endings(self):
        """Windows line endings count one line each"""
        directives = DirectiveParser("CHECK: a\r\n\r\nCHECK-NEXT: b\r\n").parse()

        assert [d.line_number for d in directives] == [1, 3]
        assert [d.raw_pattern for d in directives] == ["a", "b"]

    def test_unicode_separators_stay_in_pattern(self):
        """U+2028 and NEL are pattern text, not line breaks"""
        directives = DirectiveParser("CHECK: foo\u2028bar\nCHECK: x\x85y").parse()

        assert [d.raw_pattern for d in directives] == ["foo\u2028bar", "x\x85y"]
        assert [d.line_number for d in directives] == [1, 2]


class TestLinesSplit:
    """Splitting text into lines on newlines only"""

    def test_newline_only(self):
        """Form feed, vertical tab and Unicode separators do not split"""
        assert lines_split("a\x0cb\x0bc\u2028d\x85e\nf") == ["a\x0cb\x0bc\u2028d\x85e", "f"]

    def test_closing_newline(self):
        """A final newline does not add an empty line"""
        assert lines_split("a\nb\n") == ["a", "b"]
        assert lines_split("a\n\n") == ["a", ""]
        assert lines_split("") == []

    def test_carriage_return_stripped(self):
        """One trailing carriage return per line is dropped"""
        assert lines_split("a\r\nb\r\n") == ["a", "b"]
        assert lines_split("a\r\r\n") == ["a\r"]


class TestPatternText:
    """Test extraction of the pattern text"""

    def test_pattern_trimmed(self):
        """Whitespace around the pattern is removed"""
        directives = DirectiveParser("CHECK:    spaced out   \t").parse()
        assert directives[0].raw_pattern == "spaced out"

    def test_no_space_after_colon(self):
        """The space after the colon is optional"""
        directives = DirectiveParser("CHECK:tight").parse()
        assert directives[0].raw_pattern == "tight"

    def test_inner_whitespace_preserved(self):
        """Interior whitespace is kept verbatim"""
        directives = DirectiveParser("CHECK: a   b").parse()
        assert directives[0].raw_pattern == "a   b"

    def test_wildcard_kept_raw(self):
        """The parser does not interpret wildcard markers"""
        directives = DirectiveParser("CHECK: Function Attrs:{{.*}}inlinehint").parse()
        assert directives[0].raw_pattern == "Function Attrs:{{.*}}inlinehint"

    def test_empty_pattern(self):
        """A keyword with nothing after it gives an empty pattern"""
        directives = DirectiveParser("CHECK:").parse()
        assert directives[0].raw_pattern == ""


class TestKeywordRecognition:
    """Keyword must be a case-sensitive prefix of the line"""

    def test_lowercase_ignored(self):
        """'check:' is not a directive"""
        assert DirectiveParser("check: a").parse() == []

    def test_keyword_mid_line_ignored(self):
        """A keyword that does not start the line is not a directive"""
        assert DirectiveParser("some text CHECK: a").parse() == []

    def test_longer_word_ignored(self):
        """'CHECKER:' does not start with 'CHECK:' or 'CHECK-'"""
        assert DirectiveParser("CHECKER: a").parse() == []

    def test_leading_whitespace_allowed(self):
        """Indented directives are recognized"""
        directives = DirectiveParser("    CHECK: a").parse()
        assert len(directives) == 1

    def test_semicolon_leader(self):
        """IR-style '; CHECK:' lines are recognized"""
        directives = DirectiveParser("; CHECK: ret void\n;CHECK-NEXT: }").parse()

        assert [d.raw_pattern for d in directives] == ["ret void", "}"]

    def test_slash_leader(self):
        """C-style '// CHECK:' lines are recognized"""
        directives = DirectiveParser("// CHECK: %x = add").parse()
        assert directives[0].raw_pattern == "%x = add"

    def test_hash_is_comment_not_leader(self):
        """'# CHECK:' is a comment line"""
        assert DirectiveParser("# CHECK: hidden").parse() == []

    def test_unknown_suffix_ignored(self):
        """Unsupported suffixes are skipped outside strict mode"""
        directives = DirectiveParser("CHECK-LABEL: x\nCHECK: y").parse()

        assert len(directives) == 1
        assert directives[0].raw_pattern == "y"

    def test_plain_text_ignored(self):
        """Lines that are not directives are ignored by default"""
        directives = DirectiveParser("hello\nCHECK: y\nworld").parse()

        assert len(directives) == 1
        assert directives[0].line_number == 2


class TestCustomPrefix:
    """The keyword prefix follows settings.check_prefix"""

    def test_custom_prefix(self):
        """PROF: lines are directives, CHECK: lines are not"""
        settings = AppSettings(check_prefix="PROF")
        directives = DirectiveParser("CHECK: a\nPROF: b\nPROF-NEXT: c", settings=settings).parse()

        assert [d.raw_pattern for d in directives] == ["b", "c"]
        assert directives[1].keyword == "PROF-NEXT"

    def test_custom_comment_marker(self):
        """Comment marker is configurable"""
        settings = AppSettings(comment_marker="--")
        directives = DirectiveParser("-- CHECK: hidden\nCHECK: shown", settings=settings).parse()

        assert [d.raw_pattern for d in directives] == ["shown"]


class TestStrictMode:
    """Strict mode rejects anything that is not blank, comment or directive"""

    def test_unrecognized_line_raises(self):
        """Plain text raises MalformedDirective with its line number"""
        settings = AppSettings(strict_mode=True)
        parser = DirectiveParser("CHECK: a\nnot a directive", settings=settings)

        with pytest.raises(MalformedDirective) as excinfo:
            parser.parse()
        assert excinfo.value.line_number == 2

    def test_unknown_suffix_raises(self):
        """Unsupported suffix raises in strict mode"""
        settings = AppSettings(strict_mode=True)
        parser = DirectiveParser("CHECK-LABEL: x", settings=settings)

        with pytest.raises(MalformedDirective, match="CHECK-LABEL"):
            parser.parse()

    def test_comments_still_allowed(self):
        """Blank lines and comments are fine in strict mode"""
        settings = AppSettings(strict_mode=True)
        directives = DirectiveParser("# c\n\nCHECK: a", settings=settings).parse()
        assert len(directives) == 1


class TestAnchorRequirement:
    """CHECK-NEXT / CHECK-SAME need a previous positive directive"""

    def test_leading_check_next_raises(self):
        """CHECK-NEXT as the first directive is malformed"""
        parser = DirectiveParser("# comment first\n\nCHECK-NEXT: a")

        with pytest.raises(MalformedDirective) as excinfo:
            parser.parse()
        assert excinfo.value.line_number == 3

    def test_leading_check_same_raises(self):
        """CHECK-SAME as the first directive is malformed"""
        with pytest.raises(MalformedDirective):
            DirectiveParser("CHECK-SAME: a").parse()

    def test_check_not_does_not_anchor(self):
        """A CHECK-NOT before CHECK-NEXT does not count as an anchor"""
        with pytest.raises(MalformedDirective) as excinfo:
            DirectiveParser("CHECK-NOT: a\nCHECK-NEXT: b").parse()
        assert excinfo.value.line_number == 2

    def test_leading_check_not_allowed(self):
        """CHECK-NOT may be the first directive"""
        directives = DirectiveParser("CHECK-NOT: a\nCHECK: b").parse()
        assert directives[0].kind is DirectiveKind.CHECK_NOT

    def test_ignored_lines_do_not_anchor(self):
        """Ignored lines in between do not break the CHECK-NEXT rule"""
        directives = DirectiveParser("CHECK: a\nrandom prose\nCHECK-NEXT: b").parse()
        assert [d.kind for d in directives] == [DirectiveKind.CHECK, DirectiveKind.CHECK_NEXT]
