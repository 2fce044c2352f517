# UnitEngine.py
"""""
Unit table for CalcPad.

Every unit belongs to one dimension class and maps affinely onto the canonical unit of
that class:  canonical = value * factor + offset
Only temperature units use a non-zero offset.

Aliases are what the user types ("miles", "°C", "lbs"), unit ids are what a Quantity
stores ("mi", "degC", "lbs").
"""""

import math

from . import error as E


# Dimension classes
LENGTH = "length"
MASS = "mass"
TEMPERATURE = "temperature"
ANGLE = "angle"
VOLUME = "volume"
RATIO = "ratio"  # dimensionless units (percent, ppm)


class Unit:
    """A concrete unit: id, display symbol, dimension class and affine map to canonical."""
    def __init__(self, unit_id, symbol, dimension, factor, offset=0.0):
        self.unit_id = unit_id
        self.symbol = symbol
        self.dimension = dimension
        self.factor = factor
        self.offset = offset

    def to_canonical(self, value):
        return value * self.factor + self.offset

    def from_canonical(self, value):
        return (value - self.offset) / self.factor

    @property
    def is_dimensionless(self):
        return self.dimension == RATIO

    def __repr__(self):
        return f"Unit('{self.unit_id}', {self.dimension})"


# -----------------------------
# Unit table
# -----------------------------

UNITS = {}


def _register(unit_id, symbol, dimension, factor, offset=0.0):
    UNITS[unit_id] = Unit(unit_id, symbol, dimension, factor, offset)


# Length (canonical: meter)
_register("m", "m", LENGTH, 1.0)
_register("km", "km", LENGTH, 1000.0)
_register("cm", "cm", LENGTH, 0.01)
_register("mm", "mm", LENGTH, 0.001)
_register("inch", "in", LENGTH, 0.0254)
_register("ft", "ft", LENGTH, 0.3048)
_register("yd", "yd", LENGTH, 0.9144)
_register("mi", "mi", LENGTH, 1609.344)

# Mass (canonical: kilogram)
_register("kg", "kg", MASS, 1.0)
_register("g", "g", MASS, 0.001)
_register("mg", "mg", MASS, 1e-6)
_register("lbs", "lbs", MASS, 0.45359237)
_register("oz", "oz", MASS, 0.028349523125)

# Temperature (canonical: degree Celsius)
_register("degC", "°C", TEMPERATURE, 1.0)
_register("degF", "°F", TEMPERATURE, 5.0 / 9.0, -32.0 * 5.0 / 9.0)
_register("K", "K", TEMPERATURE, 1.0, -273.15)

# Angle (canonical: radian)
_register("rad", "rad", ANGLE, 1.0)
_register("deg", "deg", ANGLE, math.pi / 180.0)

# Volume (canonical: liter)
_register("L", "L", VOLUME, 1.0)
_register("mL", "mL", VOLUME, 0.001)
_register("gal", "gal", VOLUME, 3.785411784)
_register("qt", "qt", VOLUME, 0.946352946)

# Dimensionless
_register("percent", "%", RATIO, 0.01)
_register("ppm", "ppm", RATIO, 1e-6)


# Spellings accepted in expressions -> unit id.
# Single lowercase letters c / f / l are left free for variable names.
UNIT_ALIASES = {
    "in": "inch", "inch": "inch", "inches": "inch",
    "ft": "ft", "feet": "ft", "foot": "ft",
    "yd": "yd", "yard": "yd", "yards": "yd",
    "m": "m", "meter": "m", "meters": "m",
    "km": "km", "kilometer": "km", "kilometers": "km",
    "cm": "cm", "mm": "mm",
    "mi": "mi", "mile": "mi", "miles": "mi",

    "kg": "kg", "kilogram": "kg", "kilograms": "kg",
    "g": "g", "gram": "g", "grams": "g",
    "mg": "mg",
    "lb": "lbs", "lbs": "lbs", "pound": "lbs", "pounds": "lbs",
    "oz": "oz", "ounce": "oz", "ounces": "oz",

    "C": "degC", "°C": "degC", "degC": "degC", "celsius": "degC",
    "F": "degF", "°F": "degF", "degF": "degF", "fahrenheit": "degF",
    "K": "K", "kelvin": "K",

    "rad": "rad", "radian": "rad", "radians": "rad",
    "deg": "deg", "degree": "deg", "degrees": "deg", "°": "deg",

    "L": "L", "liter": "L", "liters": "L",
    "mL": "mL", "ml": "mL",
    "gal": "gal", "gallon": "gal", "gallons": "gal",
    "qt": "qt", "quart": "qt", "quarts": "qt",

    "percent": "percent", "ppm": "ppm",
}


def is_unit_name(name):
    """Return True if the given identifier is a known unit spelling."""
    return name in UNIT_ALIASES


def lookup_unit(name):
    """Resolve an alias (or unit id) to its Unit; raise UnknownIdentifierError otherwise."""
    unit_id = UNIT_ALIASES.get(name, name)
    unit = UNITS.get(unit_id)
    if unit is None:
        raise E.UnknownIdentifierError(f"Unknown unit: {name}", code="3013")
    return unit


def get_unit(unit_id):
    """Return the Unit for a stored unit id."""
    return lookup_unit(unit_id)


def same_dimension(unit_a, unit_b):
    return get_unit(unit_a).dimension == get_unit(unit_b).dimension


def convert_magnitude(magnitude, from_unit, to_unit):
    """Convert a magnitude between two unit ids of the same dimension class."""
    source = get_unit(from_unit)
    target = get_unit(to_unit)
    if source.dimension != target.dimension:
        raise E.UnitMismatchError(
            f"Cannot convert {source.symbol} ({source.dimension}) to {target.symbol} ({target.dimension})")
    if source.unit_id == target.unit_id:
        return magnitude
    return target.from_canonical(source.to_canonical(magnitude))


def to_canonical(magnitude, unit_id):
    return get_unit(unit_id).to_canonical(magnitude)


def unit_prefixes():
    """All unit spellings, used by the driver to spot a unit name that is still being typed."""
    return list(UNIT_ALIASES)
