"""ParsecEngine exception hierarchy with structured diagnostics.

Parsing never raises: a failed parse is an ordinary ParseOutcome. These
exceptions report programming errors in grammar construction and errors
raised by collaborators that consume parse results.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class ParsecEngineError(Exception):
    """Base exception for all ParsecEngine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize ParsecEngineError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class GrammarError(ParsecEngineError):
    """Invalid grammar construction.

    Raised while composing parsers, never while running them. Examples:
    - many() with max < min
    - string("") or choice() with no alternatives
    - ForwardRef.define() called twice
    """


class UnresolvedReferenceError(GrammarError):
    """A ForwardRef front was invoked before define() was called.

    The only condition that aborts a running parse: the grammar was used
    before construction finished.
    """


class EvaluationError(ParsecEngineError):
    """Evaluating a parsed tree failed.

    Raised by demo grammar collaborators (calculator), never by the engine.
    Examples:
    - Unknown variable in an expression
    - Division by zero
    """
