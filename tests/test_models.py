"""Tests for value models and settings."""

import pytest
from pydantic import ValidationError

from pytest_quickspec.models import Callsite, Failure, QuickSettings, attach_callsite


def test_callsite_from_frame() -> None:
    """Resolve the location of the direct caller."""
    callsite = Callsite.from_frame()

    assert callsite.file == __file__
    assert callsite.line == test_callsite_from_frame.__code__.co_firstlineno + 2


def test_callsite_from_frame_depth() -> None:
    """Skip frames above the direct caller."""
    def helper() -> Callsite:
        return Callsite.from_frame(1)

    callsite = helper()

    assert callsite.line == test_callsite_from_frame_depth.__code__.co_firstlineno + 5


def test_callsite_is_immutable() -> None:
    """Callsite fields can not be reassigned."""
    callsite = Callsite(file='calc_spec', line=12)

    with pytest.raises(ValidationError):
        callsite.line = 13  # type: ignore[misc]

    assert str(callsite) == 'calc_spec:12'
    assert callsite == Callsite(file='calc_spec', line=12)


def test_attached_callsite() -> None:
    """Prefer a callsite attached by a matcher library."""
    error = attach_callsite(AssertionError('expected 4, got 5'), 'matcher.py', 7)

    assert Callsite.from_error(error) == Callsite(file='matcher.py', line=7)


def test_legacy_error_location() -> None:
    """Read file and line from legacy error attributes."""
    error = AssertionError('expected 4, got 5')
    error.test_filename = 'legacy.py'  # type: ignore[attr-defined]
    error.test_line_number = 42  # type: ignore[attr-defined]

    assert Callsite.from_error(error) == Callsite(file='legacy.py', line=42)


@pytest.mark.parametrize('attributes', (
    pytest.param({}, id='none'),
    pytest.param({'callsite': ('file.py', 1)}, id='not a callsite'),
    pytest.param({'test_filename': 'file.py'}, id='missing line'),
    pytest.param({'test_filename': 'file.py', 'test_line_number': '1'}, id='string line'),
    pytest.param({'test_filename': 'file.py', 'test_line_number': True}, id='boolean line'),
    pytest.param({'test_filename': 'file.py', 'test_line_number': -1}, id='negative line'),
))
def test_error_without_location(attributes: dict) -> None:
    """Errors without usable metadata have no callsite."""
    error = ValueError('boom')
    for key, value in attributes.items():
        setattr(error, key, value)

    assert Callsite.from_error(error) is None


@pytest.mark.parametrize('error, expect_message', (
    pytest.param(ValueError('expected 4, got 5'), 'expected 4, got 5', id='message'),
    pytest.param(AssertionError(), 'AssertionError', id='empty message'),
))
def test_failure_message(error: Exception, expect_message: str) -> None:
    """Describe a failure by its error message or type."""
    failure = Failure(error=error, callsite=Callsite(file='calc_spec', line=12))

    assert failure.message == expect_message
    assert failure.error is error


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Resolve naming settings from the environment."""
    monkeypatch.setenv('QUICKSPEC_SEPARATOR', ' > ')
    monkeypatch.setenv('QUICKSPEC_MAX_NAME_LENGTH', '32')

    settings = QuickSettings()

    assert settings.separator == ' > '
    assert settings.max_name_length == 32


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use a single space and a bounded identifier length by default."""
    monkeypatch.delenv('QUICKSPEC_SEPARATOR', raising=False)
    monkeypatch.delenv('QUICKSPEC_MAX_NAME_LENGTH', raising=False)

    settings = QuickSettings()

    assert settings.separator == ' '
    assert settings.max_name_length == 96


@pytest.mark.parametrize('values', (
    pytest.param({'separator': ''}, id='empty separator'),
    pytest.param({'max_name_length': 2}, id='short names'),
))
def test_invalid_settings(values: dict) -> None:
    """Reject unusable naming settings."""
    with pytest.raises(ValidationError):
        QuickSettings(**values)
