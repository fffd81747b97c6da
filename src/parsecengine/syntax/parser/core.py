"""Parse driver: runs a grammar over a text and reports the outcome.

Architecture:
    A top-level parse has two phases.

    1. Discovery pass. The grammar runs once with no diagnostic target. On
       success the outcome is returned immediately. On failure the furthest
       error position P is taken from the result.
    2. Diagnostic pass. The same grammar runs again with a session whose
       target is P, so every primitive that fails exactly at P records why.
       This recovers the explanation of every alternative tried at P,
       including those an ordered choice discarded in the first pass.

    The second pass is only correct because parsers are pure: running the
    same grammar over the same text twice takes the same path.

Security:
    Includes configurable input size limit and nesting depth limit, both
    taken from ParseConfig.
"""

import logging
from dataclasses import dataclass

from parsecengine.config import ParseConfig
from parsecengine.core.depth_guard import DepthGuard
from parsecengine.diagnostics import Diagnostic, DiagnosticFormatter
from parsecengine.diagnostics.templates import ErrorTemplate
from parsecengine.syntax.result import Result
from parsecengine.syntax.session import ParseSession
from parsecengine.syntax.source import Source

from .base import Parser
from .report import build_diagnostic

__all__ = ["ParseOutcome", "ParserDriver"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ParseOutcome[T]:
    """Result of a top-level parse.

    Attributes:
        consumed: How far the parse got (end of match, or failure position)
        value: Parsed value; None on failure
        message: Empty on success, formatted diagnostic on failure
        ok: Whether the parse succeeded
        error_position: Furthest failure offset, None on success
        diagnostic: Structured diagnostic, None on success
    """

    consumed: int
    value: T | None
    message: str
    ok: bool
    error_position: int | None = None
    diagnostic: Diagnostic | None = None

    def __bool__(self) -> bool:
        return self.ok


class ParserDriver:
    """Runs parsers against input text.

    Stateless apart from its configuration; one driver can serve many
    parses, concurrently if needed, since each parse gets its own session.

    Example:
        >>> driver = ParserDriver()
        >>> outcome = driver.parse(uint(), "1234 + 5678")
        >>> outcome.consumed, outcome.value
        (4, 1234)
    """

    __slots__ = ("_config", "_formatter")

    def __init__(self, config: ParseConfig | None = None) -> None:
        """Initialize driver.

        Args:
            config: Parse configuration (default: ParseConfig())
        """
        self._config = config if config is not None else ParseConfig()
        self._formatter = DiagnosticFormatter(output_format=self._config.output_format)

    @property
    def config(self) -> ParseConfig:
        """Active configuration."""
        return self._config

    def _session(self, source: Source, error_position: int | None) -> ParseSession:
        return ParseSession(
            source=source,
            error_position=error_position,
            depth=DepthGuard(max_depth=self._config.max_nesting_depth),
        )

    def parse[T](self, parser: Parser[T], text: str) -> ParseOutcome[T]:
        """Run parser over text from offset 0.

        The parser is not required to consume all of text; anchor the
        grammar with eos() for that.

        Args:
            parser: Grammar to run
            text: Input text

        Returns:
            ParseOutcome with the value on success, or the diagnostic message

        Raises:
            UnresolvedReferenceError: If the grammar reaches a ForwardRef
                that was never defined
        """
        if len(text) > self._config.max_source_size:
            diagnostic = ErrorTemplate.source_too_large(len(text), self._config.max_source_size)
            logger.warning("Rejected input of %d characters before parsing", len(text))
            return ParseOutcome(
                consumed=0,
                value=None,
                message=self._formatter.format(diagnostic),
                ok=False,
                error_position=0,
                diagnostic=diagnostic,
            )

        source = Source(text)
        result = parser.fn(self._session(source, None), 0)
        if result.ok:
            return ParseOutcome(consumed=result.position, value=result.value, message="", ok=True)

        error_position = max(result.error_position, result.position)
        logger.debug("Discovery pass failed at offset %d", error_position)
        diagnostic = self._diagnose(parser, source, result, error_position)
        return ParseOutcome(
            consumed=result.position,
            value=None,
            message=self._formatter.format(diagnostic),
            ok=False,
            error_position=error_position,
            diagnostic=diagnostic,
        )

    def _diagnose(
        self,
        parser: Parser[object],
        source: Source,
        result: Result[object],
        error_position: int,
    ) -> Diagnostic:
        """Explain a failed discovery pass."""
        nodes = [result.error] if result.error is not None else []
        if self._config.collect_diagnostics:
            session = self._session(source, error_position)
            parser.fn(session, 0)
            logger.debug(
                "Diagnostic pass collected %d error(s) at offset %d",
                len(session.errors),
                error_position,
            )
            if session.errors:
                nodes = session.errors
        return build_diagnostic(source, error_position, nodes, self._config)
