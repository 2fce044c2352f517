# ScientificEngine.py
"""""
Function library for CalcPad.

build_library(angle_mode) returns a fresh name -> Function table for one evaluation pass.
The angle mode is a parameter, not module state:
    DEG: sin/cos/tan take degrees, asin/acos/atan/atan2 return degrees
    RAD: everything in radians
An argument carrying an angle unit ('45 deg', '1 rad') is converted to radians in both modes.

Every function takes and returns Values (see Values.py).
"""""

import cmath
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext

from . import UnitEngine
from . import Values
from . import error as E
from .Values import Real, Complex, Quantity


DEG = "DEG"
RAD = "RAD"
ANGLE_MODES = (DEG, RAD)

# |cos(x)| below this means tan(x) is undefined, not just large
TANGENT_TOLERANCE = 1e-12


def normalize_angle_mode(angle_mode):
    """Accept 'deg'/'DEG'/'rad'/'RAD'; raise ConfigurationError for anything else."""
    mode = str(angle_mode).strip().upper()
    if mode not in ANGLE_MODES:
        raise E.ConfigurationError(f"Invalid angle mode: {angle_mode}")
    return mode


class Function:
    """A named library function with an arity range (max_args=None means variadic)."""
    def __init__(self, name, implementation, min_args=1, max_args=1):
        self.name = name
        self.implementation = implementation
        self.min_args = min_args
        self.max_args = max_args

    def __call__(self, args):
        if len(args) < self.min_args or (self.max_args is not None and len(args) > self.max_args):
            raise E.EvaluationError(f"Wrong number of arguments for {self.name}()", code="2005")
        try:
            return self.implementation(*args)
        except E.MathError:
            raise
        except OverflowError:
            raise E.EvaluationError("Number too big.", code="3026")
        except (ValueError, ArithmeticError) as e:
            raise E.EvaluationError(f"Argument outside the domain of {self.name}(): {e}", code="2006")

    def __repr__(self):
        return f"Function('{self.name}')"


# -----------------------------
# Argument helpers
# -----------------------------

def _real_arg(name, value):
    """Return the float inside a Real; reject Complex and Quantity arguments."""
    if isinstance(value, Real):
        return value.value
    if isinstance(value, Complex):
        raise E.EvaluationError(f"{name}() does not accept complex arguments", code="2008")
    raise E.UnitMismatchError(f"{name}() does not accept units")


def _angle_arg(name, value, angle_mode):
    """Return the argument in radians: float for Real/angle Quantity, complex for Complex (RAD only)."""
    if isinstance(value, Quantity):
        unit = UnitEngine.get_unit(value.unit)
        if unit.dimension != UnitEngine.ANGLE:
            raise E.UnitMismatchError(f"{name}() expects an angle, got {unit.symbol}")
        return unit.to_canonical(value.magnitude)

    if isinstance(value, Complex):
        if angle_mode == DEG:
            raise E.EvaluationError("Complex arguments are not supported in DEG mode.", code="2007")
        return value.as_python()

    if angle_mode == DEG:
        return math.radians(value.value)
    return value.value


def _inverse_arg(name, value, angle_mode):
    if isinstance(value, Complex):
        if angle_mode == DEG:
            raise E.EvaluationError("Complex arguments are not supported in DEG mode.", code="2007")
        return value.as_python()
    return _real_arg(name, value)


def _angle_result(radians, angle_mode):
    if angle_mode == DEG:
        return Values.real_result(math.degrees(radians))
    return Values.real_result(radians)


def _real_or_complex(name, value):
    """Float for Real, complex for Complex; units are rejected."""
    if isinstance(value, Complex):
        return value.as_python()
    return _real_arg(name, value)


def _wrap(result):
    if isinstance(result, complex):
        return Values.complex_result(result)
    return Values.real_result(result)


# -----------------------------
# Trigonometry (angle mode aware)
# -----------------------------

def _make_forward(name, real_fn, complex_fn, angle_mode):
    def forward(x):
        theta = _angle_arg(name, x, angle_mode)
        if isinstance(theta, complex):
            return Values.complex_result(complex_fn(theta))
        return Values.real_result(real_fn(theta))
    return forward


def _make_tan(angle_mode):
    def tan(x):
        theta = _angle_arg("tan", x, angle_mode)
        if isinstance(theta, complex):
            if abs(cmath.cos(theta)) < TANGENT_TOLERANCE:
                raise E.EvaluationError("tangent undefined", code="2004")
            return Values.complex_result(cmath.tan(theta))
        if abs(math.cos(theta)) < TANGENT_TOLERANCE:
            raise E.EvaluationError("tangent undefined", code="2004")
        return Values.real_result(math.tan(theta))
    return tan


def _make_inverse(name, real_fn, complex_fn, angle_mode, bounded=True):
    def inverse(x):
        argument = _inverse_arg(name, x, angle_mode)
        if isinstance(argument, complex):
            return Values.complex_result(complex_fn(argument))
        if bounded and not -1.0 <= argument <= 1.0:
            raise E.EvaluationError(f"Argument outside the domain of {name}(): {argument}", code="2006")
        return _angle_result(real_fn(argument), angle_mode)
    return inverse


def _make_atan2(angle_mode):
    def atan2(y, x):
        return _angle_result(math.atan2(_real_arg("atan2", y), _real_arg("atan2", x)), angle_mode)
    return atan2


# -----------------------------
# Angle-mode independent functions
# -----------------------------

def sqrt(x):
    argument = _real_or_complex("sqrt", x)
    if isinstance(argument, complex):
        return Values.complex_result(cmath.sqrt(argument))
    if argument < 0:
        raise E.EvaluationError("Square root of a negative number.", code="2003")
    return Values.real_result(math.sqrt(argument))


def cbrt(x):
    argument = _real_arg("cbrt", x)
    return Values.real_result(math.copysign(abs(argument) ** (1.0 / 3.0), argument))


def exp(x):
    argument = _real_or_complex("exp", x)
    if isinstance(argument, complex):
        return Values.complex_result(cmath.exp(argument))
    return Values.real_result(math.exp(argument))


def log(x, base=None):
    """Natural logarithm, or logarithm to the given base: log(8, 2) = 3."""
    argument = _real_or_complex("log", x)
    base_value = None if base is None else _real_or_complex("log", base)

    if isinstance(argument, complex) or isinstance(base_value, complex):
        if base_value is None:
            return _wrap(cmath.log(argument))
        return _wrap(cmath.log(argument, base_value))

    if argument <= 0:
        raise E.EvaluationError("Logarithm of a non-positive number.", code="2001")
    if base_value is None:
        return Values.real_result(math.log(argument))
    if base_value <= 0 or base_value == 1:
        raise E.EvaluationError("Invalid base in logarithm.", code="2002")
    return Values.real_result(math.log(argument, base_value))


def ln(x):
    return log(x)


def _make_fixed_log(name, real_fn, complex_base):
    def fixed_log(x):
        argument = _real_or_complex(name, x)
        if isinstance(argument, complex):
            return Values.complex_result(cmath.log(argument, complex_base))
        if argument <= 0:
            raise E.EvaluationError("Logarithm of a non-positive number.", code="2001")
        return Values.real_result(real_fn(argument))
    return fixed_log


def _make_hyperbolic(name, real_fn, complex_fn, domain=None):
    def hyperbolic(x):
        argument = _real_or_complex(name, x)
        if isinstance(argument, complex):
            return Values.complex_result(complex_fn(argument))
        if domain is not None and not domain(argument):
            raise E.EvaluationError(f"Argument outside the domain of {name}(): {argument}", code="2006")
        return Values.real_result(real_fn(argument))
    return hyperbolic


def absolute(x):
    if isinstance(x, Quantity):
        return Values.quantity_result(abs(x.magnitude), x.unit)
    if isinstance(x, Complex):
        return Values.real_result(abs(x.as_python()))
    return Values.real_result(abs(x.value))


def _rounding(name, fn):
    """Apply fn to a Real, or to the magnitude of a Quantity (the unit is kept)."""
    def rounded(x):
        if isinstance(x, Quantity):
            return Values.quantity_result(float(fn(x.magnitude)), x.unit)
        return Values.real_result(float(fn(_real_arg(name, x))))
    return rounded


def round_half_up(x, digits=None):
    """round(x[, digits]) with halves rounded away from zero (2.5 -> 3), not banker's rounding."""
    places = 0
    if digits is not None:
        places = _real_arg("round", digits)
        if not float(places).is_integer():
            raise E.EvaluationError("round() expects a whole number of digits", code="2006")
        places = int(places)

    def quantize(number):
        # Temporary precision boost, so quantize() never runs out of digits for large floats
        with localcontext() as context:
            context.prec = 400
            pattern = Decimal(1).scaleb(-places)
            return float(Decimal(repr(number)).quantize(pattern, rounding=ROUND_HALF_UP))

    return _rounding("round", quantize)(x)


def _extreme(name, pick):
    """min/max over Reals, or over Quantities of one dimension class (compared canonically)."""
    def extreme(*values):
        if all(isinstance(v, Quantity) for v in values):
            dimension = values[0].dimension
            if any(v.dimension != dimension for v in values):
                raise E.UnitMismatchError(f"{name}() needs quantities of the same kind")
            return pick(values, key=lambda v: UnitEngine.to_canonical(v.magnitude, v.unit))
        return Values.real_result(pick(_real_arg(name, v) for v in values))
    return extreme


# -----------------------------
# Library
# -----------------------------

FUNCTION_NAMES = (
    "sin", "cos", "tan", "asin", "acos", "atan", "atan2", "arcsin", "arccos", "arctan",
    "sqrt", "cbrt", "exp", "log", "ln", "log10", "log2",
    "sinh", "cosh", "tanh", "asinh", "acosh", "atanh",
    "abs", "round", "floor", "ceil", "min", "max", "pow", "parallel",
)


def build_library(angle_mode=DEG):
    """Bind every library function for one evaluation pass in the given angle mode."""
    mode = normalize_angle_mode(angle_mode)

    asin = Function("asin", _make_inverse("asin", math.asin, cmath.asin, mode))
    acos = Function("acos", _make_inverse("acos", math.acos, cmath.acos, mode))
    atan = Function("atan", _make_inverse("atan", math.atan, cmath.atan, mode, bounded=False))

    library = {
        "sin": Function("sin", _make_forward("sin", math.sin, cmath.sin, mode)),
        "cos": Function("cos", _make_forward("cos", math.cos, cmath.cos, mode)),
        "tan": Function("tan", _make_tan(mode)),
        "asin": asin,
        "acos": acos,
        "atan": atan,
        "arcsin": asin,
        "arccos": acos,
        "arctan": atan,
        "atan2": Function("atan2", _make_atan2(mode), 2, 2),

        "sqrt": Function("sqrt", sqrt),
        "cbrt": Function("cbrt", cbrt),
        "exp": Function("exp", exp),
        "log": Function("log", log, 1, 2),
        "ln": Function("ln", ln),
        "log10": Function("log10", _make_fixed_log("log10", math.log10, 10)),
        "log2": Function("log2", _make_fixed_log("log2", math.log2, 2)),

        "sinh": Function("sinh", _make_hyperbolic("sinh", math.sinh, cmath.sinh)),
        "cosh": Function("cosh", _make_hyperbolic("cosh", math.cosh, cmath.cosh)),
        "tanh": Function("tanh", _make_hyperbolic("tanh", math.tanh, cmath.tanh)),
        "asinh": Function("asinh", _make_hyperbolic("asinh", math.asinh, cmath.asinh)),
        "acosh": Function("acosh", _make_hyperbolic("acosh", math.acosh, cmath.acosh, lambda v: v >= 1)),
        "atanh": Function("atanh", _make_hyperbolic("atanh", math.atanh, cmath.atanh, lambda v: -1 < v < 1)),

        "abs": Function("abs", absolute),
        "round": Function("round", round_half_up, 1, 2),
        "floor": Function("floor", _rounding("floor", math.floor)),
        "ceil": Function("ceil", _rounding("ceil", math.ceil)),
        "min": Function("min", _extreme("min", min), 1, None),
        "max": Function("max", _extreme("max", max), 1, None),
        "pow": Function("pow", Values.power, 2, 2),
        "parallel": Function("parallel", Values.parallel, 2, 2),
    }
    return library
