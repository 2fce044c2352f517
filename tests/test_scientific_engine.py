"""
Tests for the function library and its angle-mode binding.
"""

import math

import pytest

from calcpad import ScientificEngine
from calcpad import error as E
from calcpad.Values import Real, Complex, Quantity


@pytest.fixture
def deg():
    return ScientificEngine.build_library("DEG")


@pytest.fixture
def rad():
    return ScientificEngine.build_library("RAD")


def call(library, name, *args):
    return library[name](list(args))


class TestAngleMode:

    def test_normalize_angle_mode(self):
        assert ScientificEngine.normalize_angle_mode("rad") == "RAD"
        assert ScientificEngine.normalize_angle_mode(" Deg ") == "DEG"
        with pytest.raises(E.ConfigurationError):
            ScientificEngine.normalize_angle_mode("GRAD")

    def test_forward_trig(self, deg, rad):
        assert call(deg, "sin", Real(90)).value == pytest.approx(1)
        assert call(rad, "sin", Real(math.pi / 2)).value == pytest.approx(1)
        assert call(rad, "sin", Real(90)).value == pytest.approx(math.sin(90))

    def test_inverse_trig_returns_degrees(self, deg, rad):
        assert call(deg, "asin", Real(1)).value == pytest.approx(90)
        assert call(rad, "asin", Real(1)).value == pytest.approx(math.pi / 2)
        assert call(deg, "atan2", Real(1), Real(1)).value == pytest.approx(45)

    def test_aliases_are_the_same_function(self, deg):
        assert deg["arcsin"] is deg["asin"]
        assert deg["arccos"] is deg["acos"]
        assert deg["arctan"] is deg["atan"]

    def test_angle_quantity_ignores_mode(self, deg, rad):
        assert call(rad, "sin", Quantity(30, "deg")).value == pytest.approx(0.5)
        assert call(deg, "cos", Quantity(math.pi, "rad")).value == pytest.approx(-1)

    def test_non_angle_quantity_is_rejected(self, deg):
        with pytest.raises(E.UnitMismatchError):
            call(deg, "sin", Quantity(3, "km"))

    def test_tangent_undefined(self, deg, rad):
        with pytest.raises(E.EvaluationError) as excinfo:
            call(deg, "tan", Real(90))
        assert excinfo.value.code == "2004"
        with pytest.raises(E.EvaluationError):
            call(rad, "tan", Real(math.pi / 2))
        assert call(deg, "tan", Real(45)).value == pytest.approx(1)

    def test_complex_arguments(self, deg, rad):
        with pytest.raises(E.EvaluationError) as excinfo:
            call(deg, "sin", Complex(0, 1))
        assert excinfo.value.code == "2007"
        result = call(rad, "sin", Complex(0, 1))
        assert result.im == pytest.approx(math.sinh(1))

    def test_inverse_domain(self, deg):
        with pytest.raises(E.EvaluationError) as excinfo:
            call(deg, "asin", Real(2))
        assert excinfo.value.code == "2006"


class TestOtherFunctions:

    def test_sqrt(self, deg):
        assert call(deg, "sqrt", Real(16)) == Real(4)
        assert call(deg, "sqrt", Complex(-4, 0)) == Complex(0, 2)
        with pytest.raises(E.EvaluationError) as excinfo:
            call(deg, "sqrt", Real(-4))
        assert excinfo.value.code == "2003"

    def test_logarithms(self, deg):
        assert call(deg, "log", Real(8), Real(2)).value == pytest.approx(3)
        assert call(deg, "ln", Real(math.e)).value == pytest.approx(1)
        assert call(deg, "log10", Real(1000)).value == pytest.approx(3)
        assert call(deg, "log2", Real(8)).value == pytest.approx(3)
        with pytest.raises(E.EvaluationError) as excinfo:
            call(deg, "log", Real(0))
        assert excinfo.value.code == "2001"
        with pytest.raises(E.EvaluationError) as excinfo:
            call(deg, "log", Real(8), Real(1))
        assert excinfo.value.code == "2002"

    def test_cbrt_of_negative(self, deg):
        assert call(deg, "cbrt", Real(-27)).value == pytest.approx(-3)

    def test_hyperbolic(self, deg):
        assert call(deg, "cosh", Real(0)) == Real(1)
        with pytest.raises(E.EvaluationError):
            call(deg, "acosh", Real(0.5))
        with pytest.raises(E.EvaluationError):
            call(deg, "atanh", Real(1))

    def test_rounding(self, deg):
        assert call(deg, "round", Real(2.5)) == Real(3)
        assert call(deg, "round", Real(-2.5)) == Real(-3)
        assert call(deg, "round", Real(1.23456), Real(2)) == Real(1.23)
        assert call(deg, "floor", Quantity(2.7, "km")) == Quantity(2, "km")
        assert call(deg, "ceil", Real(2.1)) == Real(3)

    def test_abs(self, deg):
        assert call(deg, "abs", Real(-3)) == Real(3)
        assert call(deg, "abs", Complex(3, 4)) == Real(5)

    def test_min_max(self, deg):
        assert call(deg, "max", Real(1), Real(5), Real(3)) == Real(5)
        assert call(deg, "min", Quantity(1, "km"), Quantity(500, "m")) == Quantity(500, "m")
        with pytest.raises(E.UnitMismatchError):
            call(deg, "min", Quantity(1, "km"), Quantity(1, "kg"))

    def test_pow_and_parallel(self, deg):
        assert call(deg, "pow", Real(2), Real(8)) == Real(256)
        assert call(deg, "parallel", Real(100), Real(200)).value == pytest.approx(200 / 3)

    def test_arity(self, deg):
        with pytest.raises(E.EvaluationError) as excinfo:
            call(deg, "sqrt", Real(1), Real(2))
        assert excinfo.value.code == "2005"
        with pytest.raises(E.EvaluationError):
            call(deg, "atan2", Real(1))

    def test_units_rejected_by_plain_functions(self, deg):
        with pytest.raises(E.UnitMismatchError):
            call(deg, "sqrt", Quantity(4, "m"))
