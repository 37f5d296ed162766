"""Pytest plugin collecting and executing spec types.

This module integrates `pytest-quickspec` with pytest by:
- registering naming command-line options;
- configuring the shared world with the resolved settings;
- collecting `QuickSpec` subclasses of test modules as spec collectors.
"""

from inspect import isclass
from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from pytest_quickspec.core import QuickSpec, world
from pytest_quickspec.models import QuickSettings

from .spec import SpecCollector

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.config.argparsing import Parser
    from _pytest.python import PyCollector

#: Settings of the world before this configuration replaced them.
previous_settings_key = pytest.StashKey[QuickSettings | None]()


def pytest_addoption(parser: 'Parser') -> None:
    """Register pytest command-line options for pytest-quickspec.

    Args:
        parser: Pytest argument parser.
    """
    group = parser.getgroup('quickspec')
    group.addoption(
        '--quick-separator',
        action='store',
        dest='quick_separator',
        default=None,
        help=(
            'String joining group and example descriptions in display names. '
            'Defaults to QUICKSPEC_SEPARATOR or a single space.'
        ),
    )
    group.addoption(
        '--quick-max-name-length',
        action='store',
        type=int,
        dest='quick_max_name_length',
        default=None,
        help=(
            'Maximum length of generated example identifiers. '
            'Defaults to QUICKSPEC_MAX_NAME_LENGTH or 96.'
        ),
    )


def pytest_configure(config: 'Config') -> None:
    """Configure the shared world with resolved naming settings.

    Args:
        config: Pytest configuration object.
    """
    overrides = {
        'separator': config.getoption('quick_separator', default=None),
        'max_name_length': config.getoption('quick_max_name_length', default=None),
    }

    try:
        settings = QuickSettings(**{
            key: value
            for key, value in overrides.items()
            if value is not None
        })
    except ValidationError as error:
        raise pytest.UsageError(f'Invalid pytest-quickspec settings: {error}') from error

    config.stash[previous_settings_key] = world.configure(settings)


def pytest_unconfigure(config: 'Config') -> None:
    """Restore naming settings replaced by `pytest_configure`.

    Args:
        config: Pytest configuration object.
    """
    if previous_settings_key in config.stash:
        world.configure(config.stash[previous_settings_key])


@pytest.hookimpl(tryfirst=True)
def pytest_pycollect_makeitem(collector: 'PyCollector', name: str,
                              obj: object) -> SpecCollector | None:
    """Collect spec types declared in a test module.

    Args:
        collector: Module or class collector being populated.
        name: Attribute name of the object.
        obj: Attribute value.

    Returns:
        A `SpecCollector` for spec types defined in the collected module,
        otherwise ``None``.
    """
    if not isclass(obj) or not issubclass(obj, QuickSpec) or obj is QuickSpec:
        return None

    if obj.__module__ != collector.module.__name__:
        return None

    return SpecCollector.from_parent(
        collector,
        name=name,
        spec_type=obj,
    )
