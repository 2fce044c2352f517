"""
Tests for the value model: Real / Complex / Quantity arithmetic and unit rules.
"""

import math

import pytest

from calcpad import Values
from calcpad import error as E
from calcpad.Values import Real, Complex, Quantity


class TestRealAndComplex:

    def test_real_arithmetic(self):
        assert Values.add(Real(2), Real(3)) == Real(5)
        assert Values.subtract(Real(2), Real(3)) == Real(-1)
        assert Values.multiply(Real(2), Real(3)) == Real(6)
        assert Values.divide(Real(3), Real(2)) == Real(1.5)
        assert Values.power(Real(2), Real(10)) == Real(1024)
        assert Values.negate(Real(4)) == Real(-4)

    def test_real_promotes_to_complex(self):
        assert Values.add(Real(1), Complex(0, 2)) == Complex(1, 2)
        assert Values.multiply(Complex(0, 1), Complex(0, 1)) == Complex(-1, 0)

    def test_division_by_zero(self):
        with pytest.raises(E.EvaluationError) as excinfo:
            Values.divide(Real(1), Real(0))
        assert excinfo.value.code == "3003"

        with pytest.raises(E.EvaluationError):
            Values.divide(Complex(1, 1), Complex(0, 0))

    def test_negative_base_fractional_exponent(self):
        with pytest.raises(E.EvaluationError) as excinfo:
            Values.power(Real(-8), Real(1 / 3))
        assert excinfo.value.code == "3017"

    def test_overflow_is_an_error(self):
        with pytest.raises(E.EvaluationError) as excinfo:
            Values.power(Real(10), Real(400))
        assert excinfo.value.code == "3026"


class TestQuantities:

    def test_add_keeps_left_unit(self):
        result = Values.add(Quantity(1, "km"), Quantity(500, "m"))
        assert result.unit == "km"
        assert result.magnitude == pytest.approx(1.5)

    def test_add_incompatible_dimensions(self):
        with pytest.raises(E.UnitMismatchError):
            Values.add(Quantity(1, "km"), Quantity(1, "kg"))

    def test_quantity_plus_plain_number_is_rejected(self):
        with pytest.raises(E.UnitMismatchError):
            Values.add(Quantity(1, "km"), Real(1))

    def test_scaling_by_real(self):
        assert Values.multiply(Quantity(5, "km"), Real(2)) == Quantity(10, "km")
        assert Values.multiply(Real(2), Quantity(5, "km")) == Quantity(10, "km")
        assert Values.divide(Quantity(5, "km"), Real(2)) == Quantity(2.5, "km")

    def test_ratio_of_same_dimension(self):
        assert Values.divide(Quantity(2, "km"), Quantity(1000, "m")) == Real(2)

    def test_complex_and_quantity_do_not_mix(self):
        with pytest.raises(E.UnitMismatchError) as excinfo:
            Values.multiply(Complex(0, 1), Quantity(1, "m"))
        assert excinfo.value.code == "3028"

    def test_convert(self):
        result = Values.convert(Quantity(5, "km"), "mi")
        assert result.unit == "mi"
        assert result.magnitude == pytest.approx(3.10685596, rel=1e-8)

    def test_convert_plain_number_only_to_dimensionless(self):
        result = Values.convert(Real(0.25), "percent")
        assert result.unit == "percent"
        assert result.magnitude == pytest.approx(25)
        with pytest.raises(E.UnitMismatchError):
            Values.convert(Real(1), "km")

    def test_with_unit(self):
        assert Values.with_unit(Real(3), "miles") == Quantity(3, "mi")
        with pytest.raises(E.UnitMismatchError):
            Values.with_unit(Quantity(3, "mi"), "km")


class TestParallelAndComparison:

    def test_parallel(self):
        assert Values.parallel(Real(10), Real(20)).value == pytest.approx(20 / 3)

    def test_parallel_complex(self):
        result = Values.parallel(Complex(0, 1), Real(1))
        assert isinstance(result, Complex)
        assert result.re == pytest.approx(0.5)
        assert result.im == pytest.approx(0.5)

    def test_parallel_zero_operand(self):
        with pytest.raises(E.EvaluationError) as excinfo:
            Values.parallel(Real(0), Real(5))
        assert excinfo.value.message == "zero operand"

    def test_parallel_zero_reciprocal_sum(self):
        with pytest.raises(E.EvaluationError) as excinfo:
            Values.parallel(Real(5), Real(-5))
        assert excinfo.value.code == "3003"

    def test_equals_approximately(self):
        assert Values.equals_approximately(Real(0.1 + 0.2), Real(0.3))
        assert not Values.equals_approximately(Real(1), Real(1.001))
        assert Values.equals_approximately(Quantity(1, "km"), Quantity(1000, "m"))
        assert Values.equals_approximately(Real(1), Complex(1, 0))

    def test_serialization(self):
        value = Quantity(2.5, "degF")
        assert Values.from_dict(Values.to_dict(value)) == value
        with pytest.raises(ValueError):
            Values.from_dict({"type": "matrix"})

    def test_non_finite_results_are_rejected(self):
        with pytest.raises(E.EvaluationError):
            Values.real_result(math.inf)
