"""ParsecEngine - parser combinators with furthest-failure diagnostics.

Build recursive-descent parsers by composing small parsers, then run them
over text. A failed parse never raises: it returns a ParseOutcome whose
message lists every alternative that was tried where the parse got
furthest, with a caret under the offending input.

Public API:
    parse - Run a parser over text
    ParserDriver - Reusable driver with a ParseConfig
    ParseOutcome - consumed length, value, message
    ParseConfig - Input limits, nesting depth, message style
    Parser - Composable parser value (<<, >>, |, .map, .bind, ...)
    ForwardRef - Late-bound slot for recursive rules
    Primitives - char, string, satisfy, any_of, none_of, eos, uint, sint, ...
    Combinators - many, many_sep, optional, sequence, record, between,
        sep_fold, choice, either, label, recognize, lookahead, not_followed_by

Exceptions:
    ParsecEngineError - Base exception class
    GrammarError - Invalid grammar construction
    UnresolvedReferenceError - ForwardRef used before define()
    EvaluationError - Demo grammar evaluation errors

Submodules:
    parsecengine.syntax - Source, Result, error tree, session, driver
    parsecengine.diagnostics - Diagnostic codes, templates, formatter
    parsecengine.grammars.calculator - Arithmetic expression demo grammar
    parsecengine.grammars.json - JSON demo grammar and renderer
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .config import ParseConfig
from .diagnostics import (
    EvaluationError,
    GrammarError,
    ParsecEngineError,
    UnresolvedReferenceError,
)
from .enums import OutputFormat
from .syntax import ParseOutcome, ParserDriver, parse
from .syntax.parser import (
    ForwardRef,
    Parser,
    any_of,
    between,
    bind,
    char,
    choice,
    either,
    eos,
    fail,
    keep_left,
    keep_right,
    label,
    lookahead,
    many,
    many_sep,
    none_of,
    not_followed_by,
    optional,
    pmap,
    pure,
    recognize,
    record,
    satisfy,
    satisfy_char,
    sep_fold,
    sequence,
    sint,
    skip_satisfy,
    skip_whitespace,
    string,
    traced,
    uint,
)

# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("parsecengine")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "EvaluationError",
    "ForwardRef",
    "GrammarError",
    "OutputFormat",
    "ParseConfig",
    "ParseOutcome",
    "ParsecEngineError",
    "Parser",
    "ParserDriver",
    "UnresolvedReferenceError",
    "__version__",
    "any_of",
    "between",
    "bind",
    "char",
    "choice",
    "either",
    "eos",
    "fail",
    "keep_left",
    "keep_right",
    "label",
    "lookahead",
    "many",
    "many_sep",
    "none_of",
    "not_followed_by",
    "optional",
    "parse",
    "pmap",
    "pure",
    "recognize",
    "record",
    "satisfy",
    "satisfy_char",
    "sep_fold",
    "sequence",
    "sint",
    "skip_satisfy",
    "skip_whitespace",
    "string",
    "traced",
    "uint",
]
