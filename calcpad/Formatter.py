# Formatter.py
"""""
Value / line result -> display string.

Precision is always passed in explicitly (0..10 decimal places). Near-zero values and
values within SNAP_TOLERANCE of an integer are snapped before formatting.
"""""

import math

from . import UnitEngine
from . import error as E
from .Values import Real, Complex, Quantity


SNAP_TOLERANCE = 1e-10
MIN_PRECISION = 0
MAX_PRECISION = 10
ERROR_PREFIX = "Error: "


def validate_precision(precision):
    """Return precision as int; raise ConfigurationError if it is not a whole number in 0..10."""
    if isinstance(precision, bool):
        raise E.ConfigurationError(f"Invalid precision: {precision}")
    try:
        value = int(precision)
    except (TypeError, ValueError):
        raise E.ConfigurationError(f"Invalid precision: {precision}")
    if value != precision or not MIN_PRECISION <= value <= MAX_PRECISION:
        raise E.ConfigurationError(f"Precision must be between {MIN_PRECISION} and {MAX_PRECISION}: {precision}")
    return value


def format_real(x, precision=5):
    if not math.isfinite(x):
        return str(x)
    if abs(x) < SNAP_TOLERANCE:
        return "0"

    nearest = round(x)
    if abs(x - nearest) < SNAP_TOLERANCE:
        return str(int(nearest))

    text = f"{x:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def format_complex(re, im, precision=5):
    real_part = format_real(re, precision)
    imaginary_part = format_real(abs(im), precision)

    if imaginary_part == "0":
        return real_part

    # Coefficient 1 is elided: 'i', '-i', '3 + i'
    coefficient = "" if imaginary_part == "1" else imaginary_part
    if real_part == "0":
        return f"-{coefficient}i" if im < 0 else f"{coefficient}i"
    sign = "-" if im < 0 else "+"
    return f"{real_part} {sign} {coefficient}i"


def format_quantity(magnitude, unit_id, precision=5):
    return f"{format_real(magnitude, precision)} {UnitEngine.get_unit(unit_id).symbol}"


def format_value(value, precision=5):
    """Display string for a Real, Complex or Quantity."""
    if isinstance(value, Quantity):
        return format_quantity(value.magnitude, value.unit, precision)
    if isinstance(value, Complex):
        return format_complex(value.re, value.im, precision)
    if isinstance(value, Real):
        return format_real(value.value, precision)
    raise TypeError(f"Not a value: {value!r}")


def format_result(result, precision=5, show_errors=True):
    """Display string for one EvaluationResult: the value, 'Error: <message>' or ''."""
    if result.is_value:
        return format_value(result.value, precision)
    if result.is_error:
        return f"{ERROR_PREFIX}{result.message}" if show_errors else ""
    return ""
