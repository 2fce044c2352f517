# MathEngine.py
"""""
Core calculation engine for CalcPad.

Pipeline
--------
1) Normalizer: converts a raw line into a canonical token list.
2) Parser (AST): builds an Abstract Syntax Tree (recursive-descent, precedence aware).
       assignment  name = expr          (single level, right-hand side only)
       sum         + -
       term        * /
       unary       - +
       power       ^                    (right-associative)
       postfix     unit suffix, 'to <unit>'
       primary     number, identifier, function call, ( expr ), constant
3) Evaluator: walks the tree against an Environment and a function library bound to the
   angle mode, producing a Value (Real / Complex / Quantity).

Formatting lives in Formatter.py, the per-document loop in DocumentEngine.py.
"""""

import logging
import math

from . import Normalizer
from . import ScientificEngine
from . import UnitEngine
from . import Values
from . import error as E
from .Environment import Environment, is_reserved
from .Normalizer import NUMBER, IDENT, OP, LPAREN, RPAREN, COMMA

logger = logging.getLogger(__name__)


CONSTANTS = {
    "pi": Values.Real(math.pi),
    "PI": Values.Real(math.pi),
    "e": Values.Real(math.e),
    "i": Values.Complex(0.0, 1.0),
}

BINARY_OPERATIONS = {
    "+": Values.add,
    "-": Values.subtract,
    "*": Values.multiply,
    "/": Values.divide,
    "^": Values.power,
}


class Scope:
    """Everything a tree needs while evaluating: variables, angle mode and the bound library."""
    def __init__(self, environment=None, angle_mode=ScientificEngine.DEG):
        self.environment = environment if environment is not None else Environment()
        self.angle_mode = ScientificEngine.normalize_angle_mode(angle_mode)
        self.library = ScientificEngine.build_library(self.angle_mode)


# -----------------------------
# AST node types
# -----------------------------

class Number:
    """AST node for a numeric literal."""
    def __init__(self, value):
        self.value = float(value)

    def evaluate(self, scope):
        return Values.real_result(self.value)

    def __repr__(self):
        return f"Number({self.value!r})"


class Identifier:
    """AST node for a constant or a variable lookup."""
    def __init__(self, name):
        self.name = name

    def evaluate(self, scope):
        # Constants can't be shadowed, so they are checked before the environment
        if self.name in CONSTANTS:
            return CONSTANTS[self.name]
        return scope.environment.lookup(self.name)

    def __repr__(self):
        return f"Identifier('{self.name}')"


class BinOp:
    """AST node for a binary operation: left <operator> right."""
    def __init__(self, left, operator, right):
        self.left = left
        self.operator = operator
        self.right = right

    def evaluate(self, scope):
        left_value = self.left.evaluate(scope)
        right_value = self.right.evaluate(scope)

        operation = BINARY_OPERATIONS.get(self.operator)
        if operation is None:
            raise E.ParseError(f"Unknown operator: {self.operator}", code="3004")
        return operation(left_value, right_value)

    def __repr__(self):
        return f"BinOp({self.operator!r}, left={self.left}, right={self.right})"


class UnaryOp:
    """AST node for a leading minus."""
    def __init__(self, operator, operand):
        self.operator = operator
        self.operand = operand

    def evaluate(self, scope):
        value = self.operand.evaluate(scope)
        if self.operator == "-":
            return Values.negate(value)
        return value

    def __repr__(self):
        return f"UnaryOp({self.operator!r}, {self.operand})"


class FunctionCall:
    """AST node for name(arg, ...). Arguments are evaluated before the call."""
    def __init__(self, name, arguments):
        self.name = name
        self.arguments = arguments

    def evaluate(self, scope):
        function = scope.library.get(self.name)
        if function is None:
            raise E.UnknownIdentifierError(f"Unknown function: {self.name}", code="2000")
        argument_values = [argument.evaluate(scope) for argument in self.arguments]
        return function(argument_values)

    def __repr__(self):
        return f"FunctionCall('{self.name}', {self.arguments})"


class UnitSuffix:
    """AST node for '<value> <unit>', e.g. '5 km'."""
    def __init__(self, operand, unit_name):
        self.operand = operand
        self.unit_name = unit_name

    def evaluate(self, scope):
        return Values.with_unit(self.operand.evaluate(scope), self.unit_name)

    def __repr__(self):
        return f"UnitSuffix({self.operand}, '{self.unit_name}')"


class Conversion:
    """AST node for '<expr> to <unit>'."""
    def __init__(self, operand, unit_name):
        self.operand = operand
        self.unit_name = unit_name

    def evaluate(self, scope):
        return Values.convert(self.operand.evaluate(scope), self.unit_name)

    def __repr__(self):
        return f"Conversion({self.operand}, '{self.unit_name}')"


class Assignment:
    """AST node for 'name = expr'. Evaluates the right side only; committing is the caller's job."""
    def __init__(self, name, expression):
        self.name = name
        self.expression = expression

    def evaluate(self, scope):
        if is_reserved(self.name):
            raise E.AssignmentError(f"Cannot assign to reserved name '{self.name}'")
        return self.expression.evaluate(scope)

    def __repr__(self):
        return f"Assignment('{self.name}', {self.expression})"


# -----------------------------
# Parser (recursive descent)
# -----------------------------

def _is_op(tokens, *symbols):
    return bool(tokens) and tokens[0].kind == OP and tokens[0].text in symbols


def ast(tokens):
    """Parse a normalized token list into an AST.
    Implements precedence via nested functions: primary → postfix → power → unary → term → sum → statement.
    """
    tokens = list(tokens)

    # ---- Parsing functions in precedence order ----

    def parse_primary(tokens):
        """Numbers, identifiers, function calls and sub-expressions in '()'."""
        if len(tokens) > 0:
            token = tokens.pop(0)
        else:
            raise E.ParseError("Missing Number.", code="3027")

        # Parenthesized sub-expression
        if token.kind == LPAREN:
            baum_in_der_klammer = parse_sum(tokens)
            if not tokens or tokens.pop(0).kind != RPAREN:
                raise E.ParseError("Missing closing parenthesis ')'", code="3009")
            return baum_in_der_klammer

        # Literals
        elif token.kind == NUMBER:
            try:
                return Number(token.text)
            except ValueError:
                raise E.ParseError(f"Invalid number: {token.text}", code="3011")

        elif token.kind == IDENT:
            if token.text == Normalizer.CONVERSION_KEYWORD:
                raise E.ParseError("Missing value before 'to'", code="3027")

            # Function call: name(arg, ...)
            if tokens and tokens[0].kind == LPAREN:
                tokens.pop(0)
                arguments = []
                if tokens and tokens[0].kind == RPAREN:
                    tokens.pop(0)
                    return FunctionCall(token.text, arguments)
                arguments.append(parse_sum(tokens))
                while tokens and tokens[0].kind == COMMA:
                    tokens.pop(0)
                    arguments.append(parse_sum(tokens))
                if not tokens or tokens.pop(0).kind != RPAREN:
                    raise E.ParseError(f"Missing closing parenthesis after function '{token.text}'", code="3009")
                return FunctionCall(token.text, arguments)

            return Identifier(token.text)

        else:
            raise E.ParseError(f"Unexpected token: {token.text}", code="3011")

    def parse_postfix(tokens):
        """Unit suffix ('5 km') followed by any number of conversions ('to mi')."""
        aktueller_baum = parse_primary(tokens)

        if tokens and tokens[0].kind == IDENT and UnitEngine.is_unit_name(tokens[0].text):
            aktueller_baum = UnitSuffix(aktueller_baum, tokens.pop(0).text)

        while tokens and tokens[0].kind == IDENT and tokens[0].text == Normalizer.CONVERSION_KEYWORD:
            tokens.pop(0)
            if not tokens or tokens[0].kind != IDENT:
                raise E.ParseError("Missing unit after 'to'", code="3027")
            aktueller_baum = Conversion(aktueller_baum, tokens.pop(0).text)
        return aktueller_baum

    def parse_power(tokens):
        """Exponentiation '^' (right-associative, exponent may carry a sign)."""
        aktueller_baum = parse_postfix(tokens)
        if _is_op(tokens, "^"):
            operator = tokens.pop(0).text
            rechtes_teil = parse_unary(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechtes_teil)
        return aktueller_baum

    def parse_unary(tokens):
        """Handle leading '+'/'-'."""
        if _is_op(tokens, "+", "-"):
            operator = tokens.pop(0).text
            operand = parse_unary(tokens)
            if operator == "-":
                return UnaryOp("-", operand)
            return operand
        return parse_power(tokens)

    def parse_term(tokens):
        """Multiplication and division."""
        aktueller_baum = parse_unary(tokens)
        while _is_op(tokens, "*", "/"):
            operator = tokens.pop(0).text
            rechtes_teil = parse_unary(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechtes_teil)
        return aktueller_baum

    def parse_sum(tokens):
        """Addition and subtraction."""
        aktueller_baum = parse_term(tokens)
        while _is_op(tokens, "+", "-"):
            operator = tokens.pop(0).text
            rechte_seite = parse_term(tokens)
            aktueller_baum = BinOp(aktueller_baum, operator, rechte_seite)
        return aktueller_baum

    def parse_statement(tokens):
        """Optional 'name =' at the very start: build an Assignment when present."""
        if len(tokens) >= 2 and tokens[0].kind == IDENT and tokens[1].kind == OP and tokens[1].text == "=":
            name = tokens.pop(0).text
            tokens.pop(0)
            return Assignment(name, parse_sum(tokens))
        return parse_sum(tokens)

    if not tokens:
        raise E.ParseError("Missing Number.", code="3027")

    finaler_baum = parse_statement(tokens)

    # Anything left over was not consumed by the grammar
    if tokens:
        if _is_op(tokens, "="):
            raise E.ParseError("Unexpected '=': only 'name = expression' is allowed", code="3011")
        raise E.ParseError(f"Unexpected token: {tokens[0].text}", code="3011")

    logger.debug("Final AST: %s", finaler_baum)
    return finaler_baum


# -----------------------------
# Public entry point
# -----------------------------

def calculate(problem, environment=None, angle_mode=ScientificEngine.DEG, scope=None):
    """Main API: normalize → parse → evaluate one line.

    Returns (value, assigned_name); assigned_name is None unless the line is an assignment.
    The environment is only read here, so a failing line never changes it.
    Raises a MathError subclass for every kind of failure.
    """
    if scope is None:
        scope = Scope(environment, angle_mode)

    try:
        tokens = Normalizer.normalize_tokens(problem)
        finaler_baum = ast(tokens)
        ergebnis = finaler_baum.evaluate(scope)

        if isinstance(finaler_baum, Assignment):
            return ergebnis, finaler_baum.name
        return ergebnis, None

    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise e
    except RecursionError:
        raise E.ParseError("Expression nested too deeply.", code="3019", equation=problem)
    # Convert unexpected Python arithmetic failures to our unified error type
    except (ValueError, ArithmeticError, TypeError) as e:
        raise E.EvaluationError(str(e).strip() or type(e).__name__, code="3018", equation=problem)
