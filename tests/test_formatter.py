"""
Tests for display formatting.
"""

import pytest

from calcpad import Formatter
from calcpad import error as E
from calcpad.DocumentEngine import EvaluationResult
from calcpad.Values import Real, Complex, Quantity


class TestFormatReal:

    @pytest.mark.parametrize("x, precision, expected", [
        (6.123233995736766e-17, 5, "0"),
        (-3e-11, 5, "0"),
        (2.0, 5, "2"),
        (2.9999999999999996, 5, "3"),
        (2.5, 5, "2.5"),
        (1 / 3, 2, "0.33"),
        (20 / 3, 3, "6.667"),
        (200 / 3, 3, "66.667"),
        (2.6, 0, "3"),
        (-0.000001, 5, "0"),
        (-1.25, 1, "-1.2"),
        (1e20, 5, "100000000000000000000"),
    ])
    def test_format_real(self, x, precision, expected):
        assert Formatter.format_real(x, precision) == expected

    @pytest.mark.parametrize("x, expected", [
        (float("inf"), "inf"),
        (float("-inf"), "-inf"),
        (float("nan"), "nan"),
    ])
    def test_non_finite_is_not_rounded(self, x, expected):
        assert Formatter.format_real(x) == expected
        assert Formatter.format_value(Quantity(x, "km")).startswith(expected)


class TestFormatComplex:

    @pytest.mark.parametrize("re, im, expected", [
        (0, 1, "i"),
        (0, -1, "-i"),
        (0, 2, "2i"),
        (3, 1, "3 + i"),
        (3, 2, "3 + 2i"),
        (3, -2, "3 - 2i"),
        (3, 1e-12, "3"),
        (0, 0, "0"),
        (0.5, -0.25, "0.5 - 0.25i"),
    ])
    def test_format_complex(self, re, im, expected):
        assert Formatter.format_complex(re, im, 5) == expected

    def test_coefficient_elided_only_after_rounding_to_one(self):
        assert Formatter.format_complex(0, 1.0000001, 5) == "i"
        assert Formatter.format_complex(0, 1.1, 5) == "1.1i"


class TestFormatValue:

    def test_quantity_uses_symbol(self):
        assert Formatter.format_value(Quantity(5, "km")) == "5 km"
        assert Formatter.format_value(Quantity(100, "degC")) == "100 °C"
        assert Formatter.format_value(Quantity(12.5, "percent")) == "12.5 %"

    def test_dispatch(self):
        assert Formatter.format_value(Real(0.1 + 0.2), 5) == "0.3"
        assert Formatter.format_value(Complex(-1, 0)) == "-1"

    def test_results(self):
        error = EvaluationResult.of_error(E.EvaluationError("Division by zero", code="3003"))
        assert Formatter.format_result(error) == "Error: Division by zero"
        assert Formatter.format_result(error, show_errors=False) == ""
        assert Formatter.format_result(EvaluationResult.empty()) == ""
        assert Formatter.format_result(EvaluationResult.of_value(Real(4))) == "4"


class TestPrecision:

    def test_valid(self):
        assert Formatter.validate_precision(0) == 0
        assert Formatter.validate_precision(10) == 10

    @pytest.mark.parametrize("precision", [-1, 11, 2.5, True, "five", None])
    def test_invalid(self, precision):
        with pytest.raises(E.ConfigurationError) as excinfo:
            Formatter.validate_precision(precision)
        assert excinfo.value.code == "5000"
