"""Base Pydantic models for spec elements.

This module defines the immutable value types shared by the example tree,
the runner bridge, and the pytest integration: source locations, failures
captured from example bodies, and runtime settings.
"""

import sys

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Error attribute holding a `Callsite` attached by a matcher library.
CALLSITE_ATTRIBUTE = 'callsite'

#: Legacy error attributes holding a file name and a line number.
FILENAME_ATTRIBUTE = 'test_filename'
LINE_NUMBER_ATTRIBUTE = 'test_line_number'


class SchemaModel(BaseModel):
    """Base immutable model for all spec value types.

    Design principles enforced by this model:
        - Immutability: values cannot be modified after creation.
        - Strict schema validation: unknown or extra fields are rejected.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        extra='forbid',
    )


class SettingsModel(BaseSettings):
    """Base immutable model for runtime settings.

    Settings are resolved from the environment; unrelated variables
    are ignored.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        extra='ignore',
    )


class QuickSettings(SettingsModel):
    """Naming settings of compiled examples.

    Values are read from `QUICKSPEC_*` environment variables and may be
    overridden by pytest command-line options.
    """

    model_config = SettingsConfigDict(
        env_prefix='QUICKSPEC_',
        frozen=True,
        extra='ignore',
    )

    separator: str = Field(
        default=' ',
        min_length=1,
        title='Description separator',
        description=(
            'String joining ancestor group descriptions and the example '
            'description into the display name of an example.'
        ),
    )

    max_name_length: int = Field(
        default=96,
        ge=8,
        title='Maximum identifier length',
        description=(
            'Maximum length of a generated example identifier, '
            'not counting the suffix added to disambiguate duplicates.'
        ),
    )


class Callsite(SchemaModel):
    """Source location a failure is attributed to."""

    file: str = Field(
        title='File',
        description='Path of the source file.',
    )

    line: int = Field(
        ge=0,
        title='Line',
        description='One-based line number in the source file.',
    )

    def __str__(self) -> str:
        """String representation."""
        return f'{self.file}:{self.line}'

    @classmethod
    def from_frame(cls, depth: int = 0) -> 'Callsite':
        """Resolve the location of a caller.

        Args:
            depth: Number of frames to skip above the direct caller
                of this method.

        Returns:
            Callsite of the selected frame.
        """
        frame = sys._getframe(depth + 1)  # noqa: SLF001

        return cls(file=frame.f_code.co_filename, line=frame.f_lineno)

    @classmethod
    def from_error(cls, error: BaseException) -> 'Callsite | None':
        """Resolve the location attached to an error, if any.

        An error carries its own location either as a `callsite` attribute
        holding a `Callsite`, or as a pair of `test_filename` and
        `test_line_number` attributes.

        Args:
            error: Error raised by an example body.

        Returns:
            The attached callsite, or `None` if the error has no usable
            location metadata.
        """
        callsite = getattr(error, CALLSITE_ATTRIBUTE, None)
        if isinstance(callsite, cls):
            return callsite

        filename = getattr(error, FILENAME_ATTRIBUTE, None)
        line_num = getattr(error, LINE_NUMBER_ATTRIBUTE, None)
        if (
            isinstance(filename, str)
            and isinstance(line_num, int)
            and not isinstance(line_num, bool)
            and line_num >= 0
        ):
            return cls(file=filename, line=line_num)

        return None


def attach_callsite[E: BaseException](error: E, file: str, line: int) -> E:
    """Attach a source location to an error.

    Matcher libraries call this before raising so that the failure is
    attributed to the expectation rather than to the example definition.

    Args:
        error: Error about to be raised.
        file: Path of the source file.
        line: One-based line number.

    Returns:
        The same error, for use in a `raise` statement.
    """
    setattr(error, CALLSITE_ATTRIBUTE, Callsite(file=file, line=line))

    return error


class Failure(SchemaModel):
    """Error raised by an example body, paired with its location."""

    error: Exception = Field(
        title='Error',
        description='Exception raised by the example body.',
    )

    callsite: Callsite = Field(
        title='Callsite',
        description='Location the failure is attributed to.',
    )

    @property
    def message(self) -> str:
        """Human-readable description of the failure."""
        return str(self.error) or type(self.error).__name__


class RecordedFailure(SchemaModel):
    """Failure as received by the host runner."""

    message: str
    filename: str
    line_num: int
    expected: bool = False
