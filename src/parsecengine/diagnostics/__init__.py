"""Diagnostic system for ParsecEngine errors.

Provides structured error diagnostics with codes, spans, hints and source
excerpts. Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    EvaluationError,
    GrammarError,
    ParsecEngineError,
    UnresolvedReferenceError,
)
from .formatter import DiagnosticFormatter
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "EvaluationError",
    "GrammarError",
    "ParsecEngineError",
    "SourceSpan",
    "UnresolvedReferenceError",
]
