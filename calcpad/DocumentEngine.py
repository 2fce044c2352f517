# DocumentEngine.py
"""""
Line-evaluation driver.

One pass = the whole document, line by line, against a fresh Environment:
    raw text -> Line -> (Empty | incomplete | MathEngine.calculate) -> EvaluationResult
Successful assignments are committed before the next line, so later lines see them.
A failing line only produces an error result for itself.

DocumentSession wraps this for the editor: a generation counter makes sure that only the
pass for the latest text is ever published.
"""""

import logging
import threading
from dataclasses import dataclass, field

from . import Formatter
from . import MathEngine
from . import Normalizer
from . import ScientificEngine
from . import UnitEngine
from . import error as E
from .Environment import Environment
from .Normalizer import IDENT, OP, COMMA, PARALLEL, LPAREN, RPAREN

logger = logging.getLogger(__name__)


VALUE = "value"
ERROR = "error"
EMPTY = "empty"


@dataclass(frozen=True)
class Line:
    index: int
    raw_text: str
    source_text: str


@dataclass(frozen=True)
class EvaluationResult:
    kind: str
    value: object = None
    error_kind: str = None
    message: str = None
    code: str = None
    assigned_name: str = None

    @classmethod
    def of_value(cls, value, assigned_name=None):
        return cls(VALUE, value=value, assigned_name=assigned_name)

    @classmethod
    def of_error(cls, error):
        return cls(ERROR, error_kind=error.kind, message=error.message, code=error.code)

    @classmethod
    def empty(cls):
        return cls(EMPTY)

    @property
    def is_value(self):
        return self.kind == VALUE

    @property
    def is_error(self):
        return self.kind == ERROR

    @property
    def is_empty(self):
        return self.kind == EMPTY


@dataclass
class DocumentResult:
    results: list
    lines: list
    display: list = field(default_factory=list)
    environment: Environment = field(default_factory=Environment)

    @property
    def variable_count(self):
        return self.environment.variable_count


# -----------------------------
# Incomplete-line heuristics
# -----------------------------

_DANGLING_OPERATORS = ("+", "-", "*", "/", "^", "=")


def split_lines(text):
    """Split on newlines; blank lines stay as placeholders so indices match the editor."""
    lines = []
    for index, raw_text in enumerate(text.split("\n")):
        raw_text = raw_text.rstrip("\r")
        lines.append(Line(index, raw_text, Normalizer.strip_comment(raw_text)))
    return lines


def is_incomplete(source_text):
    """Hard signals that the user is still typing: unbalanced '()' or a dangling operator/'to'."""
    tokens = Normalizer.tokenize(source_text)
    if not tokens:
        return False

    depth = 0
    for token in tokens:
        if token.kind == LPAREN:
            depth += 1
        elif token.kind == RPAREN:
            depth -= 1
    if depth != 0:
        return True

    last = tokens[-1]
    if last.kind == OP and last.text in _DANGLING_OPERATORS:
        return True
    if last.kind in (COMMA, PARALLEL):
        return True
    return last.kind == IDENT and last.text == Normalizer.CONVERSION_KEYWORD


def _is_partial_word(word):
    candidates = UnitEngine.unit_prefixes() + list(ScientificEngine.FUNCTION_NAMES)
    return any(candidate != word and candidate.startswith(word) for candidate in candidates)


def looks_unfinished(line, error):
    """Soft signals: only used to hide an error, never to hide a value."""
    # Trailing whitespace counts as unfinished only when the line failed; "1 + 2 " still shows 3
    if Normalizer.COMMENT_MARKER not in line.raw_text and line.raw_text != line.raw_text.rstrip():
        return True

    if isinstance(error, E.UnknownIdentifierError):
        tokens = Normalizer.tokenize(line.source_text)
        if tokens and tokens[-1].kind == IDENT and _is_partial_word(tokens[-1].text):
            return True
    return False


# -----------------------------
# Evaluation
# -----------------------------

def evaluate_line(line, scope):
    """Evaluate one line against scope.environment without modifying it."""
    if not line.source_text:
        return EvaluationResult.empty()
    if is_incomplete(line.source_text):
        logger.debug("Line %d looks incomplete: %r", line.index, line.source_text)
        return EvaluationResult.empty()

    try:
        value, assigned_name = MathEngine.calculate(line.raw_text, scope=scope)
    except E.MathError as e:
        if looks_unfinished(line, e):
            logger.debug("Line %d suppressed while typing: %s", line.index, e.message)
            return EvaluationResult.empty()
        logger.debug("Line %d failed: %s (%s)", line.index, e.message, e.code)
        return EvaluationResult.of_error(e)

    return EvaluationResult.of_value(value, assigned_name)


def evaluate(text, angle_mode=ScientificEngine.DEG):
    """Run one pass over text and return a DocumentResult without display strings."""
    scope = MathEngine.Scope(Environment(), angle_mode)
    lines = split_lines(text)
    results = []

    for line in lines:
        result = evaluate_line(line, scope)
        if result.is_value and result.assigned_name is not None:
            scope.environment.assign(result.assigned_name, result.value)
        results.append(result)

    return DocumentResult(results=results, lines=lines, environment=scope.environment)


def evaluate_document(text, angle_mode=ScientificEngine.DEG, precision=5, show_errors=True):
    """Public entry point: evaluate the document and format every line.

    Raises ConfigurationError for an unknown angle mode or a precision outside 0..10.
    """
    angle_mode = ScientificEngine.normalize_angle_mode(angle_mode)
    precision = Formatter.validate_precision(precision)

    document = evaluate(text, angle_mode)
    document.display = [Formatter.format_result(result, precision, show_errors) for result in document.results]
    return document


# -----------------------------
# Session (latest pass wins)
# -----------------------------

class DocumentSession:
    """One open document: text, settings, the last published pass and its Environment."""
    def __init__(self, text="", angle_mode=ScientificEngine.DEG, precision=5, show_errors=True):
        self.text = text
        self.angle_mode = ScientificEngine.normalize_angle_mode(angle_mode)
        self.precision = Formatter.validate_precision(precision)
        self.show_errors = show_errors
        self.environment = Environment()
        self.result = None
        self.generation = 0
        self._lock = threading.Lock()

    def schedule(self, text):
        """Register new text and return the generation its pass must publish under."""
        with self._lock:
            self.generation += 1
            self.text = text
            return self.generation

    def run(self, generation, text):
        logger.debug("Running pass %d", generation)
        return evaluate_document(text, self.angle_mode, self.precision, self.show_errors)

    def is_current(self, generation):
        with self._lock:
            return generation == self.generation

    def publish(self, generation, result):
        """Accept result only if no newer pass was scheduled meanwhile."""
        with self._lock:
            if generation != self.generation:
                logger.debug("Discarding stale pass %d (latest is %d)", generation, self.generation)
                return False
            self.result = result
            self.environment = result.environment
        logger.info("Published pass %d: %d lines, %d variables",
                    generation, len(result.results), result.variable_count)
        return True

    def update(self, text):
        generation = self.schedule(text)
        result = self.run(generation, text)
        self.publish(generation, result)
        return result

    def refresh(self):
        """Re-run the current text, e.g. after a settings change."""
        return self.update(self.text)

    def clear(self):
        """Empty the document and its Environment; any pass still in flight becomes stale."""
        with self._lock:
            self.generation += 1
            self.text = ""
            self.environment = Environment()
            self.result = None
        logger.info("Document cleared")

    def set_angle_mode(self, angle_mode):
        self.angle_mode = ScientificEngine.normalize_angle_mode(angle_mode)
        return self.angle_mode

    def toggle_angle_mode(self):
        if self.angle_mode == ScientificEngine.DEG:
            return self.set_angle_mode(ScientificEngine.RAD)
        return self.set_angle_mode(ScientificEngine.DEG)

    def set_precision(self, precision):
        self.precision = Formatter.validate_precision(precision)
        return self.precision

    @property
    def variable_count(self):
        return self.environment.variable_count
