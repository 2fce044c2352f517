# error.py
"""""
Error types for CalcPad.

Every failure inside one line is raised as a MathError subclass and turned into an
error result by the DocumentEngine, so a broken line never stops the rest of the document.
"""""


class MathError(Exception):
    kind = "MathError"

    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class ParseError(MathError):
    kind = "ParseError"

    def __init__(self, message, code="3011", equation=None):
        super().__init__(message, code, equation)

class UnknownIdentifierError(MathError):
    kind = "UnknownIdentifierError"

    def __init__(self, message, code="3012", equation=None):
        super().__init__(message, code, equation)

class UnitMismatchError(MathError):
    kind = "UnitMismatchError"

    def __init__(self, message, code="3014", equation=None):
        super().__init__(message, code, equation)

class AssignmentError(MathError):
    kind = "AssignmentError"

    def __init__(self, message, code="3015", equation=None):
        super().__init__(message, code, equation)

class EvaluationError(MathError):
    kind = "EvaluationError"

    def __init__(self, message, code="3018", equation=None):
        super().__init__(message, code, equation)

class ConfigurationError(MathError):
    kind = "ConfigurationError"

    def __init__(self, message, code="5000", equation=None):
        super().__init__(message, code, equation)

class StorageError(MathError):
    kind = "StorageError"

    def __init__(self, message, code="6000", equation=None):
        super().__init__(message, code, equation)



Error_Dictionary = {

    "1" : "Missing Files",
    "2" : "Scientific Calculation Error",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "6" : "Storage Error",
    "9" : "Unexpected Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "1000" : "Required files are missing: ", # + file names

    "2000" : "Unknown function: ", # + function name
    "2001" : "Logarithm of a non-positive number.",
    "2002" : "Invalid base in logarithm.",
    "2003" : "Square root of a negative number.",
    "2004" : "Tangent undefined.",
    "2005" : "Wrong number of arguments: ", # + function name
    "2006" : "Argument outside the domain of: ", # + function name
    "2007" : "Complex arguments are not supported in DEG mode.",
    "2008" : "Function does not accept complex arguments: ", # + function name

    "3003" : "Division by Zero",
    "3004" : "Invalid Operator: ", # + operator
    "3009" : "Missing ')'. ",
    "3011" : "Unexpected Token: ", # + Token
    "3012" : "Unknown identifier: ", # + name
    "3013" : "Unknown unit: ", # + unit name
    "3014" : "Incompatible units: ", # + units
    "3015" : "Cannot assign to a reserved name: ", # + name
    "3016" : "Parallel combination with a zero operand.",
    "3017" : "Negative base with a fractional exponent.",
    "3018" : "Calculation error.",
    "3019" : "Expression nested too deeply.",
    "3026" : "Number too big.",
    "3027" : "Missing Number.",
    "3028" : "Complex values cannot carry units.",

    "4003" : "Export could not be written: ", # + path
    "4501" : "Not all Settings could be saved: ", # + Error raising setting

    "5000" : "Invalid configuration value: ", # + setting

    "6000" : "Session not found: ", # + session id
    "6001" : "Session file could not be read.",
    "6002" : "Session file could not be written.",

    "9999" : "Unexpected Error: " #+error
}
