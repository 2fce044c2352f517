"""
Tests for the line normalizer (comment stripping, tokenizer, rewrites).
"""

import pytest

from calcpad import Normalizer
from calcpad.Normalizer import Token, NUMBER, IDENT, OP, PARALLEL, UNKNOWN


class TestTokenizer:

    def test_numbers_and_operators(self):
        assert Normalizer.tokenize("3.5 + .25") == [
            Token(NUMBER, "3.5"), Token(OP, "+"), Token(NUMBER, ".25"),
        ]

    def test_exponent_needs_digits(self):
        assert Normalizer.tokenize("1e5") == [Token(NUMBER, "1e5")]
        assert Normalizer.tokenize("2e") == [Token(NUMBER, "2"), Token(IDENT, "e")]

    def test_replacement_characters(self):
        kinds = [t.text for t in Normalizer.tokenize("2 × 3 ÷ 4 − 1 ** 2")]
        assert kinds == ["2", "*", "3", "/", "4", "-", "1", "^", "2"]

    def test_pi_symbol_and_parallel(self):
        assert Normalizer.tokenize("π || 2") == [Token(IDENT, "pi"), Token(PARALLEL, "||"), Token(NUMBER, "2")]

    def test_unknown_characters_never_fail(self):
        assert Normalizer.tokenize("$") == [Token(UNKNOWN, "$")]


class TestRewrites:

    @pytest.mark.parametrize("line, expected", [
        ("2x", "2 * x"),
        ("2(3 + 4)", "2 * (3 + 4)"),
        ("(1)(2)", "(1) * (2)"),
        ("(1 + 1)x", "(1 + 1) * x"),
        ("3i", "3 * i"),
        ("2π", "2 * pi"),
        ("sin(x)", "sin(x)"),
        ("sin 30", "sin(30)"),
        ("tan 45 deg", "tan(45 deg)"),
        ("5 km to mi", "5 km to mi"),
        ("10 || 20", "parallel(10, 20)"),
        ("a || b || c", "parallel(parallel(a, b), c)"),
        ("(1 + 2) || x", "parallel((1 + 2), x)"),
        ("10 || -5", "parallel(10, - 5)"),
        ("5 + 3 // groceries", "5 + 3"),
        ("  x   =   4 ", "x = 4"),
    ])
    def test_normalize(self, line, expected):
        assert Normalizer.normalize(line) == expected

    def test_multi_letter_names_are_not_split(self):
        assert Normalizer.normalize("sqrt(cos(0))") == "sqrt(cos(0))"

    def test_unrewritable_parallel_is_left_alone(self):
        assert Normalizer.normalize("1 ||") == "1 ||"
        assert Normalizer.normalize("|| 2") == "|| 2"

    def test_comment_only_line_is_empty(self):
        assert Normalizer.normalize("// just a note") == ""
        assert Normalizer.is_empty("   // note")
        assert not Normalizer.is_empty("1")


class TestIdempotence:

    @pytest.mark.parametrize("line", [
        "2x(3)y", "a||b", "sin 30 deg", "((", "1e5x", "2e 5", "3.5.2", "x==y", "$#@",
        "10 || -5", "1 || ", "|| 2", "45°", "100 °C to F", "i*i", "2 ** -3", "x = y = 3",
        "max(1,2,3)", "(a)(b)(c)", "sin cos 30", "1.", ".5i", "-(-(-1))", "  ", "",
    ])
    def test_normalize_twice_equals_once(self, line):
        once = Normalizer.normalize(line)
        assert Normalizer.normalize(once) == once
