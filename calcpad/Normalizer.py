# Normalizer.py
"""""
Turns one line of scratchpad text into a canonical token stream.

Pipeline (every step is idempotent, so normalize(normalize(s)) == normalize(s)):
1) strip_comment:  cut at '//', collapse whitespace, trim
2) tokenize:       NUMBER / IDENT / OP / LPAREN / RPAREN / COMMA / PARALLEL / UNKNOWN
                   ('**' -> '^', '×' -> '*', '÷' -> '/', 'π' -> 'pi'); never fails
3) bare trig args: 'sin 30' -> 'sin(30)', 'tan 45 deg' -> 'tan(45 deg)'
4) parallel:       'a || b' -> 'parallel(a, b)', left to right until none are left
5) imaginary unit: '3i' -> '3 * i'
6) implicit mult:  '2x' -> '2 * x', '2(3)' -> '2 * (3)', '(a)(b)' -> '(a) * (b)'
                   unit suffixes ('5 km') and 'to' phrases are left alone

Syntax errors are not reported here; the parser in MathEngine rejects what it can't read.
"""""

import logging
from dataclasses import dataclass

from . import UnitEngine

logger = logging.getLogger(__name__)


NUMBER = "NUMBER"
IDENT = "IDENT"
OP = "OP"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
COMMA = "COMMA"
PARALLEL = "PARALLEL"
UNKNOWN = "UNKNOWN"

Operations = ["+", "-", "*", "/", "^", "="]
CHAR_REPLACEMENTS = {"×": "*", "÷": "/", "−": "-"}
COMMENT_MARKER = "//"
CONVERSION_KEYWORD = "to"

# Functions that may be written without parentheses in front of a plain number
BARE_ARGUMENT_FUNCTIONS = ["sin", "cos", "tan", "asin", "acos", "atan", "arcsin", "arccos", "arctan"]


@dataclass(frozen=True)
class Token:
    kind: str
    text: str


# -----------------------------
# Utilities / small helpers
# -----------------------------

def _is_digit(char):
    return "0" <= char <= "9"


def _is_identifier_start(char):
    return char.isalpha() or char in "_°"


def _is_identifier_part(char):
    return (char.isalpha() and char != "π") or _is_digit(char) or char == "_"


def _is_suffix_word(text):
    """Unit names and 'to' follow a value without an implied '*'."""
    return UnitEngine.is_unit_name(text) or text == CONVERSION_KEYWORD


def _scan_number(text, b):
    """Return the index just past the numeric literal starting at b (digits, '.', exponent)."""
    end = b
    while end < len(text) and _is_digit(text[end]):
        end += 1
    if end < len(text) and text[end] == ".":
        end += 1
        while end < len(text) and _is_digit(text[end]):
            end += 1

    # Exponent only if digits follow, so '2e' stays 2 * e
    if end < len(text) and text[end] in "eE":
        exponent = end + 1
        if exponent < len(text) and text[exponent] in "+-":
            exponent += 1
        if exponent < len(text) and _is_digit(text[exponent]):
            end = exponent
            while end < len(text) and _is_digit(text[end]):
                end += 1
    return end


def _matching_close(tokens, open_index):
    depth = 0
    for k in range(open_index, len(tokens)):
        if tokens[k].kind == LPAREN:
            depth += 1
        elif tokens[k].kind == RPAREN:
            depth -= 1
            if depth == 0:
                return k
    return None


def _matching_open(tokens, close_index):
    depth = 0
    for k in range(close_index, -1, -1):
        if tokens[k].kind == RPAREN:
            depth += 1
        elif tokens[k].kind == LPAREN:
            depth -= 1
            if depth == 0:
                return k
    return None


# -----------------------------
# Step 1: comment / whitespace
# -----------------------------

def strip_comment(text):
    """Cut the line at the first '//' and collapse all whitespace runs to single spaces."""
    source = text.split(COMMENT_MARKER, 1)[0]
    source = source.replace("\u00A0", " ")
    return " ".join(source.split())


# -----------------------------
# Step 2: tokenizer
# -----------------------------

def tokenize(text):
    """Convert a line into a flat token list. Unknown characters become UNKNOWN tokens."""
    tokens = []
    b = 0

    while b < len(text):
        current_char = CHAR_REPLACEMENTS.get(text[b], text[b])

        # --- Whitespace (ignored) ---
        if current_char.isspace():
            b += 1
            continue

        # --- Numbers: digits, decimal point, exponent ---
        if _is_digit(current_char) or (current_char == "." and b + 1 < len(text) and _is_digit(text[b + 1])):
            end = _scan_number(text, b)
            tokens.append(Token(NUMBER, text[b:end]))
            b = end
            continue

        # --- Constant π ---
        if current_char == "π":
            tokens.append(Token(IDENT, "pi"))
            b += 1
            continue

        # --- Identifiers: variables, functions, units, 'to' ---
        if _is_identifier_start(current_char):
            end = b + 1
            while end < len(text) and _is_identifier_part(text[end]):
                end += 1
            tokens.append(Token(IDENT, text[b:end]))
            b = end
            continue

        # --- Operators ---
        if current_char == "*" and b + 1 < len(text) and text[b + 1] == "*":
            tokens.append(Token(OP, "^"))
            b += 2
        elif current_char == "|" and b + 1 < len(text) and text[b + 1] == "|":
            tokens.append(Token(PARALLEL, "||"))
            b += 2
        elif current_char in Operations:
            tokens.append(Token(OP, current_char))
            b += 1

        # --- Parentheses / argument separator ---
        elif current_char == "(":
            tokens.append(Token(LPAREN, "("))
            b += 1
        elif current_char == ")":
            tokens.append(Token(RPAREN, ")"))
            b += 1
        elif current_char == ",":
            tokens.append(Token(COMMA, ","))
            b += 1

        else:
            tokens.append(Token(UNKNOWN, current_char))
            b += 1

    return tokens


# -----------------------------
# Step 3: bare trig arguments
# -----------------------------

def wrap_bare_arguments(tokens):
    """'sin 30' -> 'sin(30)', 'tan 45 deg' -> 'tan(45 deg)'."""
    result = []
    b = 0
    while b < len(tokens):
        token = tokens[b]
        if (token.kind == IDENT and token.text in BARE_ARGUMENT_FUNCTIONS
                and b + 1 < len(tokens) and tokens[b + 1].kind == NUMBER):
            end = b + 2
            if end < len(tokens) and tokens[end].kind == IDENT and UnitEngine.is_unit_name(tokens[end].text):
                end += 1
            result.append(token)
            result.append(Token(LPAREN, "("))
            result.extend(tokens[b + 1:end])
            result.append(Token(RPAREN, ")"))
            b = end
            continue
        result.append(token)
        b += 1
    return result


# -----------------------------
# Step 4: parallel operator
# -----------------------------

def _left_operand_start(tokens, index):
    """Start of the operand that ends at index: number, identifier, (group) or call(...)."""
    token = tokens[index]
    if token.kind in (NUMBER, IDENT):
        return index
    if token.kind == RPAREN:
        start = _matching_open(tokens, index)
        if start is None:
            return None
        if start > 0 and tokens[start - 1].kind == IDENT:
            return start - 1
        return start
    return None


def _right_operand_end(tokens, index):
    """End (exclusive) of the operand starting at index; a leading sign is allowed."""
    k = index
    if k < len(tokens) and tokens[k].kind == OP and tokens[k].text in ("+", "-"):
        k += 1
    if k >= len(tokens):
        return None

    token = tokens[k]
    if token.kind == NUMBER:
        return k + 1
    if token.kind == IDENT:
        if k + 1 < len(tokens) and tokens[k + 1].kind == LPAREN:
            close = _matching_close(tokens, k + 1)
            return None if close is None else close + 1
        return k + 1
    if token.kind == LPAREN:
        close = _matching_close(tokens, k)
        return None if close is None else close + 1
    return None


def rewrite_parallel(tokens):
    """Rewrite 'a || b' into 'parallel(a, b)' until no rewritable '||' is left.

    'a || b || c' becomes 'parallel(parallel(a, b), c)'. An occurrence with a missing
    operand stops the rewrite and is left for the parser to reject.
    """
    tokens = list(tokens)
    while True:
        index = next((k for k, token in enumerate(tokens) if token.kind == PARALLEL), None)
        if index is None or index == 0:
            break

        start = _left_operand_start(tokens, index - 1)
        end = _right_operand_end(tokens, index + 1)
        if start is None or end is None:
            break

        tokens = (tokens[:start]
                  + [Token(IDENT, "parallel"), Token(LPAREN, "(")]
                  + tokens[start:index]
                  + [Token(COMMA, ",")]
                  + tokens[index + 1:end]
                  + [Token(RPAREN, ")")]
                  + tokens[end:])
    return tokens


# -----------------------------
# Steps 5 + 6: implied multiplication
# -----------------------------

def insert_imaginary_products(tokens):
    """A number directly followed by the imaginary unit: '3i' -> '3 * i'."""
    result = []
    for token in tokens:
        if result and result[-1].kind == NUMBER and token.kind == IDENT and token.text == "i":
            result.append(Token(OP, "*"))
        result.append(token)
    return result


def _implies_product(previous, current):
    if previous.kind == NUMBER:
        return current.kind == LPAREN or (current.kind == IDENT and not _is_suffix_word(current.text))
    if previous.kind == RPAREN:
        if current.kind in (LPAREN, NUMBER):
            return True
        return current.kind == IDENT and not _is_suffix_word(current.text)
    # Never between two identifiers: 'sin' must stay one name
    return False


def insert_implicit_products(tokens):
    """Insert '*' after a number or ')' when a value follows: '2x', '2(3)', '(a)(b)', '(a)2'."""
    result = []
    for token in tokens:
        if result and _implies_product(result[-1], token):
            result.append(Token(OP, "*"))
        result.append(token)
    return result


# -----------------------------
# Rendering / public entry points
# -----------------------------

def _needs_space(previous, current):
    if previous.kind == LPAREN:
        return False
    if current.kind in (RPAREN, COMMA):
        return False
    if previous.kind == IDENT and current.kind == LPAREN:
        return False
    return True


def render(tokens):
    """Canonical text for a token list; tokenize(render(t)) == t."""
    parts = []
    previous = None
    for token in tokens:
        if previous is not None and _needs_space(previous, token):
            parts.append(" ")
        parts.append(token.text)
        previous = token
    return "".join(parts)


def normalize_tokens(text):
    """Run the full pipeline and return the canonical token list ([] for an empty line)."""
    source = strip_comment(text)
    if not source:
        return []

    tokens = tokenize(source)
    tokens = wrap_bare_arguments(tokens)
    tokens = rewrite_parallel(tokens)
    tokens = insert_imaginary_products(tokens)
    tokens = insert_implicit_products(tokens)

    logger.debug("Normalized %r -> %s", text, tokens)
    return tokens


def normalize(text):
    """Canonical text of a line; '' means the line is empty."""
    return render(normalize_tokens(text))


def is_empty(text):
    return strip_comment(text) == ""
