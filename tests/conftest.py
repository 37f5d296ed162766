"""Tests configurations and fixtures."""

from typing import TYPE_CHECKING

import pytest

from pytest_quickspec.core import QuickSpec, World
from pytest_quickspec.models import QuickSettings

if TYPE_CHECKING:
    from collections.abc import Callable

    from pytest_quickspec.core import ExampleGroupBuilder

pytest_plugins = ('pytester',)


@pytest.fixture
def world() -> World:
    """Provide an isolated world with default naming settings.

    Spec types created by `make_spec` register their trees here, so
    trees built during a test never leak into the process-wide world.

    Returns:
        A fresh `World` instance.
    """
    return World(QuickSettings(separator=' ', max_name_length=96))


@pytest.fixture
def make_spec(world: World) -> 'Callable[..., type[QuickSpec]]':
    """Provide a factory for spec types bound to the isolated world.

    The returned factory creates a new `QuickSpec` subclass whose `spec`
    method delegates to the given build function. Every call creates a
    distinct spec type with its own compilation state.
    """
    def factory(build: 'Callable[[ExampleGroupBuilder], None]', *,
                name: str = 'CalculatorSpec') -> type[QuickSpec]:
        """Create a spec type.

        Args:
            build: Function declaring example groups with the DSL.
            name: Name of the spec type.

        Returns:
            A new `QuickSpec` subclass.
        """
        def spec(self: QuickSpec, dsl: 'ExampleGroupBuilder') -> None:
            build(dsl)

        return type(name, (QuickSpec,), {
            '__module__': __name__,
            'world': world,
            'spec': spec,
        })

    return factory
