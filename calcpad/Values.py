# Values.py
"""""
Value model for CalcPad.

A line evaluates to exactly one of:
    Real(value)               plain double
    Complex(re, im)           complex number
    Quantity(magnitude, unit) magnitude with a unit id from UnitEngine

The arithmetic functions below dispatch on these types. A Real is promoted to Complex
when the other operand is Complex, but never to a Quantity. Mixing units of different
dimension classes, or Complex with Quantity, raises UnitMismatchError.
"""""

import cmath
import math
from dataclasses import dataclass

from . import UnitEngine
from . import error as E


@dataclass(frozen=True)
class Real:
    value: float


@dataclass(frozen=True)
class Complex:
    re: float
    im: float

    def as_python(self):
        return complex(self.re, self.im)


@dataclass(frozen=True)
class Quantity:
    magnitude: float
    unit: str

    @property
    def dimension(self):
        return UnitEngine.get_unit(self.unit).dimension


# -----------------------------
# Small helpers
# -----------------------------

def real_result(x):
    """Wrap a float as Real, rejecting overflow/NaN."""
    if not math.isfinite(x):
        raise E.EvaluationError("Number too big.", code="3026")
    return Real(float(x))


def complex_result(z):
    if not (math.isfinite(z.real) and math.isfinite(z.imag)):
        raise E.EvaluationError("Number too big.", code="3026")
    return Complex(float(z.real), float(z.imag))


def quantity_result(magnitude, unit):
    if not math.isfinite(magnitude):
        raise E.EvaluationError("Number too big.", code="3026")
    return Quantity(float(magnitude), unit)


def _as_complex(value):
    if isinstance(value, Complex):
        return value.as_python()
    return complex(value.value, 0.0)


def _unit_symbol(value):
    return UnitEngine.get_unit(value.unit).symbol


def _mismatch(a, b, verb):
    """Build the UnitMismatchError for an unsupported Quantity combination."""
    if isinstance(a, Complex) or isinstance(b, Complex):
        return E.UnitMismatchError("Complex values cannot carry units.", code="3028")
    if isinstance(a, Quantity) and isinstance(b, Quantity):
        return E.UnitMismatchError(f"Cannot {verb} {_unit_symbol(a)} and {_unit_symbol(b)}")
    quantity = a if isinstance(a, Quantity) else b
    return E.UnitMismatchError(f"Cannot {verb} a plain number and {_unit_symbol(quantity)}")


def _is_zero(value):
    return _as_complex(value) == 0


# -----------------------------
# Arithmetic
# -----------------------------

def add(a, b):
    if isinstance(a, Quantity) or isinstance(b, Quantity):
        return _quantity_sum(a, b, 1.0, "add")
    if isinstance(a, Complex) or isinstance(b, Complex):
        return complex_result(_as_complex(a) + _as_complex(b))
    return real_result(a.value + b.value)


def subtract(a, b):
    if isinstance(a, Quantity) or isinstance(b, Quantity):
        return _quantity_sum(a, b, -1.0, "subtract")
    if isinstance(a, Complex) or isinstance(b, Complex):
        return complex_result(_as_complex(a) - _as_complex(b))
    return real_result(a.value - b.value)


def _quantity_sum(a, b, sign, verb):
    """Add/subtract two quantities; the right side is converted into the left side's unit."""
    if not (isinstance(a, Quantity) and isinstance(b, Quantity)):
        raise _mismatch(a, b, verb)
    if not UnitEngine.same_dimension(a.unit, b.unit):
        raise _mismatch(a, b, verb)
    right = UnitEngine.convert_magnitude(b.magnitude, b.unit, a.unit)
    return quantity_result(a.magnitude + sign * right, a.unit)


def multiply(a, b):
    if isinstance(a, Quantity) and isinstance(b, Real):
        return quantity_result(a.magnitude * b.value, a.unit)
    if isinstance(a, Real) and isinstance(b, Quantity):
        return quantity_result(a.value * b.magnitude, b.unit)
    if isinstance(a, Quantity) or isinstance(b, Quantity):
        raise _mismatch(a, b, "multiply")
    if isinstance(a, Complex) or isinstance(b, Complex):
        return complex_result(_as_complex(a) * _as_complex(b))
    return real_result(a.value * b.value)


def divide(a, b):
    if isinstance(a, Quantity) and isinstance(b, Real):
        if b.value == 0:
            raise E.EvaluationError("Division by zero", code="3003")
        return quantity_result(a.magnitude / b.value, a.unit)

    if isinstance(a, Quantity) and isinstance(b, Quantity):
        # Same dimension only: the ratio is a plain number
        if not UnitEngine.same_dimension(a.unit, b.unit):
            raise _mismatch(a, b, "divide")
        denominator = UnitEngine.convert_magnitude(b.magnitude, b.unit, a.unit)
        if denominator == 0:
            raise E.EvaluationError("Division by zero", code="3003")
        return real_result(a.magnitude / denominator)

    if isinstance(a, Quantity) or isinstance(b, Quantity):
        raise _mismatch(a, b, "divide")

    if _is_zero(b):
        raise E.EvaluationError("Division by zero", code="3003")
    if isinstance(a, Complex) or isinstance(b, Complex):
        return complex_result(_as_complex(a) / _as_complex(b))
    return real_result(a.value / b.value)


def power(a, b):
    if isinstance(a, Quantity) or isinstance(b, Quantity):
        raise _mismatch(a, b, "raise to a power")

    if isinstance(a, Complex) or isinstance(b, Complex):
        base = _as_complex(a)
        exponent = _as_complex(b)
        if base == 0 and (exponent.real < 0 or exponent.imag != 0):
            raise E.EvaluationError("Division by zero", code="3003")
        try:
            return complex_result(base ** exponent)
        except OverflowError:
            raise E.EvaluationError("Number too big.", code="3026")

    base = a.value
    exponent = b.value
    if base == 0 and exponent < 0:
        raise E.EvaluationError("Division by zero", code="3003")
    if base < 0 and not float(exponent).is_integer():
        # Python would silently return a complex number here
        raise E.EvaluationError("Negative base with a fractional exponent.", code="3017")
    try:
        return real_result(base ** exponent)
    except OverflowError:
        raise E.EvaluationError("Number too big.", code="3026")


def negate(a):
    if isinstance(a, Quantity):
        return Quantity(-a.magnitude, a.unit)
    if isinstance(a, Complex):
        return Complex(-a.re, -a.im)
    return Real(-a.value)


def parallel(a, b):
    """Parallel combination 1 / (1/a + 1/b), e.g. equivalent resistance of two resistors."""
    if isinstance(a, Quantity) or isinstance(b, Quantity):
        raise _mismatch(a, b, "combine in parallel")
    if _is_zero(a) or _is_zero(b):
        raise E.EvaluationError("zero operand", code="3016")
    one = Real(1.0)
    reciprocal_sum = add(divide(one, a), divide(one, b))
    return divide(one, reciprocal_sum)


def equals_approximately(a, b, tolerance=1e-10):
    """Numeric comparison with an absolute tolerance (plus a small relative one for big values)."""
    if isinstance(a, Quantity) or isinstance(b, Quantity):
        if not (isinstance(a, Quantity) and isinstance(b, Quantity)):
            raise _mismatch(a, b, "compare")
        if not UnitEngine.same_dimension(a.unit, b.unit):
            raise _mismatch(a, b, "compare")
        left = UnitEngine.to_canonical(a.magnitude, a.unit)
        right = UnitEngine.to_canonical(b.magnitude, b.unit)
        return math.isclose(left, right, rel_tol=1e-9, abs_tol=tolerance)
    return cmath.isclose(_as_complex(a), _as_complex(b), rel_tol=1e-9, abs_tol=tolerance)


# -----------------------------
# Units
# -----------------------------

def with_unit(value, unit_name):
    """Attach a unit suffix ('5 km') to a plain number."""
    unit = UnitEngine.lookup_unit(unit_name)
    if isinstance(value, Real):
        return quantity_result(value.value, unit.unit_id)
    if isinstance(value, Complex):
        raise E.UnitMismatchError("Complex values cannot carry units.", code="3028")
    raise E.UnitMismatchError(f"Value already has a unit: {_unit_symbol(value)}")


def convert(value, unit_name):
    """Convert a Quantity into another unit of the same dimension class.

    A plain Real is accepted only when the target unit is dimensionless (e.g. '0.25 to percent').
    """
    target = UnitEngine.lookup_unit(unit_name)

    if isinstance(value, Quantity):
        magnitude = UnitEngine.convert_magnitude(value.magnitude, value.unit, target.unit_id)
        return quantity_result(magnitude, target.unit_id)

    if isinstance(value, Complex):
        raise E.UnitMismatchError("Complex values cannot carry units.", code="3028")

    if target.is_dimensionless:
        return quantity_result(target.from_canonical(value.value), target.unit_id)
    raise E.UnitMismatchError(f"Cannot convert a plain number to {target.symbol}")


# -----------------------------
# Serialization (session store)
# -----------------------------

def to_dict(value):
    if isinstance(value, Quantity):
        return {"type": "quantity", "magnitude": value.magnitude, "unit": value.unit}
    if isinstance(value, Complex):
        return {"type": "complex", "re": value.re, "im": value.im}
    return {"type": "real", "value": value.value}


def from_dict(data):
    kind = data.get("type")
    if kind == "quantity":
        UnitEngine.get_unit(data["unit"])
        return Quantity(float(data["magnitude"]), data["unit"])
    elif kind == "complex":
        return Complex(float(data["re"]), float(data["im"]))
    elif kind == "real":
        return Real(float(data["value"]))
    raise ValueError(f"Unknown value type: {kind}")
