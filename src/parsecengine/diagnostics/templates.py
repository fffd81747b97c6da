"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def unresolved_reference(name: str) -> Diagnostic:
        """Forward reference invoked before definition.

        Args:
            name: The forward reference name

        Returns:
            Diagnostic for UNRESOLVED_REFERENCE
        """
        msg = f"Forward reference '{name}' was used before it was defined"
        return Diagnostic(
            code=DiagnosticCode.UNRESOLVED_REFERENCE,
            message=msg,
            hint="Call define() on the reference once the recursive rule is built",
        )

    @staticmethod
    def reference_already_defined(name: str) -> Diagnostic:
        """Forward reference defined a second time.

        Args:
            name: The forward reference name

        Returns:
            Diagnostic for REFERENCE_ALREADY_DEFINED
        """
        msg = f"Forward reference '{name}' is already defined"
        return Diagnostic(
            code=DiagnosticCode.REFERENCE_ALREADY_DEFINED,
            message=msg,
            hint="A forward reference is populated exactly once",
        )

    @staticmethod
    def invalid_repetition_bounds(combinator: str, at_least: int, at_most: int) -> Diagnostic:
        """Repetition bounds are negative or inverted.

        Args:
            combinator: Name of the combinator being built
            at_least: Requested minimum
            at_most: Requested maximum

        Returns:
            Diagnostic for INVALID_REPETITION_BOUNDS
        """
        msg = f"{combinator}() bounds must satisfy 0 <= min <= max, got min={at_least}, max={at_most}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_REPETITION_BOUNDS,
            message=msg,
        )

    @staticmethod
    def empty_literal(combinator: str) -> Diagnostic:
        """Literal parser built from an empty string.

        Args:
            combinator: Name of the primitive being built

        Returns:
            Diagnostic for INVALID_LITERAL
        """
        msg = f"{combinator}() requires a non-empty literal"
        return Diagnostic(
            code=DiagnosticCode.INVALID_LITERAL,
            message=msg,
            hint="Use pure() for a parser that consumes nothing",
        )

    @staticmethod
    def invalid_char_literal(value: str) -> Diagnostic:
        """char() built from something other than one character.

        Args:
            value: The rejected literal

        Returns:
            Diagnostic for INVALID_LITERAL
        """
        msg = f"char() requires exactly one character, got {value!r}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_LITERAL,
            message=msg,
            hint="Use string() for multi-character literals",
        )

    @staticmethod
    def empty_choice() -> Diagnostic:
        """Choice built with no alternatives.

        Returns:
            Diagnostic for EMPTY_CHOICE
        """
        return Diagnostic(
            code=DiagnosticCode.EMPTY_CHOICE,
            message="choice() requires at least one alternative",
        )

    @staticmethod
    def parse_failed(
        summary: str,
        span: SourceSpan,
        *,
        at_eof: bool,
        expected: tuple[str, ...],
        unexpected: tuple[str, ...],
        found: str,
        context: str | None,
    ) -> Diagnostic:
        """Parse failed at the furthest position reached.

        Args:
            summary: "expected ..." / "unexpected ..." sentence
            span: Failure location
            at_eof: Whether the failure position is the end of input
            expected: Collected expected descriptions
            unexpected: Collected unexpected descriptions
            found: Rendering of the input at the failure site
            context: Source excerpt with caret

        Returns:
            Diagnostic for UNEXPECTED_EOF or UNEXPECTED_INPUT
        """
        code = DiagnosticCode.UNEXPECTED_EOF if at_eof else DiagnosticCode.UNEXPECTED_INPUT
        return Diagnostic(
            code=code,
            message=summary,
            span=span,
            expected=expected,
            unexpected=unexpected,
            found=found,
            context=context,
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int) -> str:
        """Description for the UnexpectedError emitted past the depth limit.

        Args:
            max_depth: The configured nesting limit

        Returns:
            Error description text
        """
        return f"nesting deeper than {max_depth} levels"

    @staticmethod
    def integer_too_long(max_digits: int) -> str:
        """Description for the UnexpectedError of an oversized digit run.

        Args:
            max_digits: Longest accepted digit run

        Returns:
            Error description text
        """
        return f"integer longer than {max_digits} digits"

    @staticmethod
    def expression_depth_exceeded(max_depth: int) -> Diagnostic:
        """DepthGuard entered past its limit.

        Args:
            max_depth: The configured nesting limit

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        msg = f"Maximum nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            hint="Raise ParseConfig.max_nesting_depth or flatten the input",
        )

    @staticmethod
    def source_too_large(size: int, max_size: int) -> Diagnostic:
        """Input longer than ParseConfig.max_source_size.

        Args:
            size: Actual input length
            max_size: Configured limit

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = f"Input of {size} characters exceeds the limit of {max_size}"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Raise ParseConfig.max_source_size if the input is trusted",
        )

    @staticmethod
    def unknown_variable(name: str) -> Diagnostic:
        """Calculator variable missing from the environment.

        Args:
            name: The variable name

        Returns:
            Diagnostic for UNKNOWN_VARIABLE
        """
        msg = f"Variable '{name}' is not defined"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_VARIABLE,
            message=msg,
            hint="Pass a value for it, e.g. --var name=1",
        )

    @staticmethod
    def division_by_zero(op: str) -> Diagnostic:
        """Calculator '/' or '%' with a zero right operand.

        Args:
            op: The operator character

        Returns:
            Diagnostic for DIVISION_BY_ZERO
        """
        msg = f"Division by zero in '{op}'"
        return Diagnostic(
            code=DiagnosticCode.DIVISION_BY_ZERO,
            message=msg,
        )
