"""Core exception hierarchy.

This module defines base error and warning types used across the library
to report example tree compilation failures, broken invocation bindings,
and example failures recorded during execution in a structured way.
"""

from os import linesep
from traceback import extract_tb
from typing import TYPE_CHECKING, Any, TypedDict

from yaml import dump

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import Self

if TYPE_CHECKING:
    from pytest_quickspec.models import RecordedFailure

SNIPPET_ELLIPSIS = f' ...{linesep}'
SNIPPET_INDENT = 2

FORMAT_REPLACER = '<runtime object>'
FORMAT_FILENAME = '<unknown>'
FORMAT_INDENT = 4

SCALARS = (str, bytes, int, float, bool)
SEQUENCES = (list, tuple, set)


class ErrorContext(TypedDict, total=False):
    """Container describing contextual information for error formatting.

    All fields are optional; the formatter adapts output based on
    provided values.
    """

    #: Name of the source file where the error occurred.
    filename: str | None
    #: One-based line number in the source file.
    line_num: int | None

    #: Underlying exception that triggered formatting.
    error: BaseException | None

    #: Runtime element associated with the error.
    element: Any


class ErrorFormatter:
    """Utility class for formatting errors.

    This formatter produces human-readable error messages with an
    optional source location and a YAML snippet describing the
    failing element.
    """

    @classmethod
    def format(cls, message: str, context: ErrorContext | None = None) -> str:
        """Format an error message using contextual information.

        Args:
            message: Base human-readable error message.
            context: Optional error context with location and data.

        Returns:
            A fully formatted error message suitable for display.
        """
        if not context:
            return message

        message += linesep
        message += cls.get_location_string(context, indent=FORMAT_INDENT)
        message += cls.get_snippet_string(context, indent=FORMAT_INDENT * 2)

        return message

    @classmethod
    def get_location_string(cls, context: ErrorContext, *,
                            indent: str | int | None = None) -> str:
        """Format source location information.

        Args:
            context: Error context containing location metadata.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted location string including filename and line.
        """
        indent = cls._ensure_indent(indent)

        filename = context.get('filename')
        if not filename:
            filename = FORMAT_FILENAME

        message = f'{indent}in "{filename}"'
        if (line_num := context.get('line_num')) is not None:
            message += f', line {line_num}'
        message += linesep

        return message

    @classmethod
    def get_snippet_string(cls, context: ErrorContext, *,
                           indent: str | int | None = None) -> str:
        """Generate a formatted snippet illustrating the error element.

        Args:
            context: Error context containing element data.
            indent: Optional indentation (string or number of spaces).

        Returns:
            A formatted multi-line snippet string, or an empty string
            if no snippet data is available.
        """
        indent = cls._ensure_indent(indent)

        if element := context.get('element'):
            snippet = f'{indent}{SNIPPET_ELLIPSIS}'
            snippet += cls._make_yaml(element, indent)
            snippet += linesep
            return snippet

        return ''

    @classmethod
    def _filter_unsafe(cls, value: Any) -> Any:  # noqa: ANN401
        """Recursively sanitize values for safe YAML serialization.

        Args:
            value: Arbitrary value to sanitize.

        Returns:
            A YAML-safe representation of the value.
        """
        if value is None or isinstance(value, SCALARS):
            return value

        if isinstance(value, dict):
            return {
                f'{key}': cls._filter_unsafe(item)
                for key, item in value.items()
            }

        if isinstance(value, SEQUENCES):
            return [cls._filter_unsafe(item) for item in value]

        return FORMAT_REPLACER

    @classmethod
    def _make_yaml(cls, value: Any, indent: str = '') -> str:  # noqa: ANN401
        """Serialize a value to an indented YAML string."""
        data = dump(
            cls._filter_unsafe(value),
            indent=SNIPPET_INDENT,
            sort_keys=False,
            allow_unicode=True,
        )

        return cls._make_indent(data, indent)

    @staticmethod
    def _make_indent(value: str, indent: str) -> str:
        """Apply indentation to a multi-line string, dropping blank lines."""
        if not indent:
            return value

        return linesep.join(
            f'{indent}{line}'
            for line in value.splitlines()
            if line.strip()
        )

    @staticmethod
    def _ensure_indent(indent: str | int | None = None) -> str:
        """Normalize indentation given as a string or a number of spaces."""
        if isinstance(indent, int) and indent > 0:
            return ' ' * indent

        if isinstance(indent, str):
            return indent

        return ''


class SpecWarning(UserWarning):
    """Warning emitted for non-fatal spec declaration issues.

    For example, two examples whose descriptions produce the same
    identifier: both are kept, the second one under a suffixed name.
    """


class QuickError(Exception, ErrorFormatter):
    """Base exception for all pytest-quickspec errors.

    All custom exceptions raised by the library inherit from this class
    to allow unified error handling by callers.
    """

    def __init__(self, message: str, *,
                 context: ErrorContext | None = None) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error description.
            context: Error context containing optional location and data.
        """
        self.message = message
        self.context = context

        super().__init__(message)

    def __str__(self) -> str:
        """String representation."""
        return self.format(self.message, self.context)


class SpecCompilationError(QuickError):
    """Error raised when building the example tree of a spec type fails.

    This error is fatal: the example tree of the spec type is unusable,
    no examples are produced for it and compilation is never retried.
    """

    def __init__(self, message: str, *,
                 spec_type: type | None = None,
                 context: ErrorContext | None = None) -> None:
        """Initialize a compilation error.

        Args:
            message: Human-readable error description.
            spec_type: Spec type whose compilation failed.
            context: Error context containing optional location and data.
        """
        self.spec_type = spec_type

        super().__init__(message, context=context)

    @classmethod
    def from_exception(cls, spec_type: type, error: BaseException) -> 'Self':
        """Wrap an exception raised while building example groups.

        The location points at the innermost frame of the original
        traceback, which is usually the offending expectation.

        Args:
            spec_type: Spec type whose `spec` method raised.
            error: Original exception.

        Returns:
            SpecCompilationError describing the likely cause.
        """
        error_context = ErrorContext(
            error=error,
            element={
                'spec': spec_type.__qualname__,
                'exception': type(error).__name__,
                'args': list(error.args),
            },
        )

        if frames := extract_tb(error.__traceback__):
            error_context['filename'] = frames[-1].filename
            error_context['line_num'] = frames[-1].lineno

        message = (
            f'An exception occurred when building example groups of {spec_type.__name__!r}.'
            f'{linesep}Perhaps an assertion or expectation was evaluated outside of '
            f"an 'it', 'context', or 'describe' block?"
            f"{linesep}Here's the original exception: {type(error).__name__!r}, "
            f'reason: {str(error)!r}'
        )

        return cls(message, spec_type=spec_type, context=error_context)


class InvocationBindingError(QuickError):
    """Error raised when an invocation has no associated example.

    This indicates a defect in the runner integration: the invocation
    was executed or named without being bound by invocation generation.
    """


class ExampleFailed(QuickError):
    """Error raised by a pytest item when its example recorded failures."""

    def __init__(self, message: str, *,
                 failures: 'Sequence[RecordedFailure] | None' = None) -> None:
        """Initialize an example failure.

        Args:
            message: Display name of the failed example.
            failures: Failures recorded while the example was running.
        """
        self.failures = tuple(failures or ())

        super().__init__(message)

    def __str__(self) -> str:
        """Render every recorded failure with its location."""
        return linesep.join((
            self.message,
            *(
                self.format(failure.message, ErrorContext(
                    filename=failure.filename,
                    line_num=failure.line_num,
                )).rstrip()
                for failure in self.failures
            ),
        ))
