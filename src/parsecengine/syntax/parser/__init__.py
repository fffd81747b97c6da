"""Parser combinator module.

Module Organization:
- base.py: The Parser value and its operators
- primitives.py: Atomic matchers (characters, strings, runs, integers)
- combinators.py: Sequencing, repetition, choice, lookahead
- forward.py: ForwardRef for recursive grammars
- report.py: Diagnostic construction from collected errors
- core.py: ParserDriver (two-pass execution) and ParseOutcome

Public API:
    ParserDriver: Runs a grammar over text
    ParseOutcome: Result of a top-level parse
    Parser, ForwardRef, and every primitive and combinator
"""

from .base import ParseFn, Parser
from .combinators import (
    between,
    bind,
    choice,
    either,
    keep_left,
    keep_right,
    label,
    lookahead,
    many,
    many_sep,
    not_followed_by,
    optional,
    pmap,
    recognize,
    record,
    sep_fold,
    sequence,
    traced,
)
from .core import ParseOutcome, ParserDriver
from .forward import ForwardRef
from .primitives import (
    any_of,
    char,
    eos,
    fail,
    none_of,
    pure,
    satisfy,
    satisfy_char,
    sint,
    skip_satisfy,
    skip_whitespace,
    string,
    uint,
)

__all__ = [
    "ForwardRef",
    "ParseFn",
    "ParseOutcome",
    "Parser",
    "ParserDriver",
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
