# Environment.py
"""""
Variable store for one document.

Ordered name -> Value mapping. The DocumentEngine is the only writer: one successful
assignment line inserts or overwrites one entry. Constants and function names are reserved.
"""""

from . import ScientificEngine
from . import Values
from . import error as E


CONSTANT_NAMES = ("pi", "PI", "e", "i")
RESERVED_NAMES = frozenset(CONSTANT_NAMES) | frozenset(ScientificEngine.FUNCTION_NAMES) | {"to"}


def is_reserved(name):
    return name in RESERVED_NAMES


class Environment:
    def __init__(self, bindings=None):
        self._bindings = {}
        if bindings:
            for name, value in bindings.items():
                self.assign(name, value)

    def assign(self, name, value):
        """Insert or overwrite a binding. Reserved names raise AssignmentError and change nothing."""
        if is_reserved(name):
            raise E.AssignmentError(f"Cannot assign to reserved name '{name}'")
        self._bindings[name] = value
        return value

    def lookup(self, name):
        try:
            return self._bindings[name]
        except KeyError:
            raise E.UnknownIdentifierError(f"Unknown identifier: {name}")

    def get(self, name, default=None):
        return self._bindings.get(name, default)

    def clear(self):
        self._bindings.clear()

    def copy(self):
        duplicate = Environment()
        duplicate._bindings = dict(self._bindings)
        return duplicate

    def names(self):
        return list(self._bindings)

    def items(self):
        return list(self._bindings.items())

    @property
    def variable_count(self):
        return len(self._bindings)

    def to_dict(self):
        return {name: Values.to_dict(value) for name, value in self._bindings.items()}

    @classmethod
    def from_dict(cls, data):
        return cls({name: Values.from_dict(value) for name, value in data.items()})

    def __contains__(self, name):
        return name in self._bindings

    def __len__(self):
        return len(self._bindings)

    def __repr__(self):
        return f"Environment({self._bindings!r})"
