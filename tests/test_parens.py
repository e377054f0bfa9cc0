"""Tests for fixmath.parens — convert_plain_parens()."""

import pytest

from fixmath.parens import convert_plain_parens
from fixmath.stats import ConversionStats


def convert(text):
    return convert_plain_parens(text)[0]


# ── Conversions ────────────────────────────────────────────────────────────────


class TestConverted:
    def test_simple_equation(self):
        assert convert_plain_parens("(x=2)") == ("$x=2$", ConversionStats(inline_count=1))

    def test_limit_with_command(self):
        assert convert(r"as (x\to 1) we get") == r"as $x\to 1$ we get"

    def test_fraction(self):
        assert convert("(0/0)") == "$0/0$"

    def test_superscript(self):
        assert convert("(3x^{2}-3 = 0)") == "$3x^{2}-3 = 0$"

    def test_nested_outer_parens_preserved(self):
        assert convert_plain_parens("((3x^2-3)' = 6x)") == (
            "$((3x^2-3)' = 6x)$",
            ConversionStats(inline_count=1),
        )

    def test_inner_group_not_at_start_drops_outer_pair(self):
        assert convert_plain_parens("(f(x)=2)") == ("$f(x)=2$", ConversionStats(inline_count=1))

    def test_inner_whitespace_trimmed(self):
        assert convert("( a+b )") == "$a+b$"

    def test_primes_kept_inside(self):
        assert convert("so (x^2)' is") == "so $x^2'$ is"

    def test_double_primes(self):
        assert convert("(f_1)'' ") == "$f_1''$ "

    @pytest.mark.parametrize("after", [")", ".", ",", ";", ":", "?", "!", " ", "\n", ""])
    def test_allowed_following_characters(self, after):
        assert convert(f"(x=2){after}") == f"$x=2${after}"

    def test_inner_span_after_opening_paren(self):
        assert convert("((x=2), see)") == "($x=2$, see)"

    def test_maths_inside_prose_parens(self):
        assert convert("(про (3x^{2}-3) в числителе)") == "(про $3x^{2}-3$ в числителе)"

    def test_multiple_spans(self):
        text, stats = convert_plain_parens("(a+b) and (c-d)")
        assert text == "$a+b$ and $c-d$"
        assert stats.inline_count == 2

    def test_bare_number(self):
        assert convert("(-1)") == "$-1$"


# ── Left alone ─────────────────────────────────────────────────────────────────


class TestLeftAlone:
    @pytest.mark.parametrize(
        "src",
        [
            "(and so on)",
            "(про числитель)",
            "(see Fig. 2)",
            "f(x)",
            "call(a+b)",
            "(x)",
            "(a+b)c",
            "(x=2)-3",
            "(unclosed 1+1",
            "()",
            "(η ≤ αβγ)",
        ],
    )
    def test_unchanged(self, src):
        assert convert_plain_parens(src) == (src, ConversionStats())

    def test_explicit_inline_delimiters_inside(self):
        src = r"(see \(x\) there)"
        assert convert(src) == src

    def test_backslash_inline_span_copied_through(self):
        src = r"\( (a+b) \)"
        assert convert_plain_parens(src) == (src, ConversionStats())

    def test_escaped_paren_is_not_an_opener(self):
        src = r"\(x=2\)"
        assert convert(src) == src

    def test_many_unmatched_openers(self):
        src = "( " * 50000
        assert convert_plain_parens(src) == (src, ConversionStats())

    def test_unmatched_openers_before_a_span(self):
        assert convert("( ( ( (x=2)") == "( ( ( $x=2$"
