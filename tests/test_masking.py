"""Tests for fixmath.masking — protected spans of existing dollar maths."""

import re

from fixmath.masking import protected_spans, split_protected, sub_unprotected


class TestProtectedSpans:
    def test_display_and_inline(self):
        text = "a $x$ b $$\ny\n$$ c"
        spans = protected_spans(text)
        assert [text[s:e] for s, e in spans] == ["$x$", "$$\ny\n$$"]

    def test_display_only(self):
        text = "a $x$ b $$y$$"
        spans = protected_spans(text, inline=False)
        assert [text[s:e] for s, e in spans] == ["$$y$$"]

    def test_inline_does_not_cross_lines(self):
        assert protected_spans("costs $5\nand $6") == []

    def test_escaped_dollar_not_a_delimiter(self):
        assert protected_spans(r"\$5 and \$6") == []

    def test_plain_text(self):
        assert protected_spans("no maths") == []

    def test_currency_pair_not_maths(self):
        assert protected_spans("costs $5 and $10") == []

    def test_space_after_opening_dollar_not_maths(self):
        assert protected_spans("a $ x$ b") == []

    def test_space_before_closing_dollar_not_maths(self):
        assert protected_spans("a $x $ b") == []

    def test_closing_dollar_followed_by_digit_not_maths(self):
        assert protected_spans("$x$5") == []

    def test_single_character_inline(self):
        text = "let $x$ be"
        assert [text[s:e] for s, e in protected_spans(text)] == ["$x$"]


class TestSplitProtected:
    def test_round_trip(self):
        text = "pre $a$ mid $$b$$ post"
        parts = split_protected(text)
        assert "".join(chunk for _, chunk in parts) == text
        assert parts == [
            (False, "pre "),
            (True, "$a$"),
            (False, " mid "),
            (True, "$$b$$"),
            (False, " post"),
        ]

    def test_display_only_leaves_inline_unprotected(self):
        assert split_protected("a $x$ b $$y$$", inline=False) == [
            (False, "a $x$ b "),
            (True, "$$y$$"),
        ]

    def test_fully_protected(self):
        assert split_protected("$$x$$") == [(True, "$$x$$")]

    def test_empty(self):
        assert split_protected("") == []


class TestSubUnprotected:
    DIGIT = re.compile(r"\d")

    def test_skips_matches_inside_protected(self):
        text, n = sub_unprotected(self.DIGIT, lambda m: "#", "1 $2$ 3")
        assert text == "# $2$ #"
        assert n == 2

    def test_none_leaves_match(self):
        text, n = sub_unprotected(
            self.DIGIT, lambda m: None if m.group(0) == "1" else "#", "1 2"
        )
        assert text == "1 #"
        assert n == 1

    def test_partial_overlap_is_protected(self):
        pattern = re.compile(r"\[[^\]]+\]")
        text, n = sub_unprotected(pattern, lambda m: "X", "[a $b] c$")
        assert text == "[a $b] c$"
        assert n == 0
