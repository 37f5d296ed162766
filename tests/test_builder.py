"""Tests for the DSL registration interface."""

import pytest

from pytest_quickspec.core import ExampleGroup, ExampleGroupBuilder, World
from pytest_quickspec.errors import QuickError
from pytest_quickspec.models import Callsite


@pytest.fixture
def root(world: World) -> ExampleGroup:
    """Provide a root group set as the world's current group."""
    group = world.root_group_for(object)
    world.set_current_group(group)
    return group


@pytest.fixture
def dsl(world: World, root: ExampleGroup) -> ExampleGroupBuilder:
    """Provide a builder over the isolated world."""
    return ExampleGroupBuilder(world)


def test_register_nested_groups(world: World, root: ExampleGroup,
                                dsl: ExampleGroupBuilder) -> None:
    """Swap the current group while building and restore it afterwards."""
    seen = []
    callsite = Callsite(file='calc_spec', line=12)

    def build_addition() -> None:
        seen.append(world.current_group)
        dsl.register_example('adds two positives', callsite, lambda: None)

    def build_calculator() -> None:
        seen.append(world.current_group)
        dsl.register_group('Addition', build_addition)
        seen.append(world.current_group)

    calculator = dsl.register_group('Calculator', build_calculator)

    addition, = calculator.groups
    example, = root.flatten()

    assert seen == [calculator, addition, calculator]
    assert world.current_group is root
    assert example.callsite == callsite
    assert example.name() == 'Calculator Addition adds two positives'


def test_restore_current_group_on_error(world: World, root: ExampleGroup,
                                        dsl: ExampleGroupBuilder) -> None:
    """Restore the previous group when the build function raises."""
    def build() -> None:
        raise ValueError('boom')

    with pytest.raises(ValueError, match=r'^boom$'):
        dsl.register_group('Broken', build)

    assert world.current_group is root


def test_decorator_forms(root: ExampleGroup, dsl: ExampleGroupBuilder) -> None:
    """Declare groups and examples with decorators."""
    @dsl.describe('Calculator')
    def _() -> None:
        @dsl.context('Addition')
        def _() -> None:
            @dsl.it('adds two positives')
            def body() -> None:
                pass

    example, = root.flatten()

    assert example.name() == 'Calculator Addition adds two positives'
    assert example.body.__name__ == 'body'


def test_with_block_forms(world: World, root: ExampleGroup,
                          dsl: ExampleGroupBuilder) -> None:
    """Declare groups as `with` blocks."""
    with dsl.describe('Calculator') as calculator:
        assert world.current_group is calculator
        with dsl.context('Addition'):
            dsl.it('adds two positives', lambda: None)
        dsl.it('is a calculator', lambda: None)

    assert world.current_group is root
    assert [example.name() for example in root.flatten()] == [
        'Calculator Addition adds two positives',
        'Calculator is a calculator',
    ]


def test_with_block_restores_on_error(world: World, root: ExampleGroup,
                                      dsl: ExampleGroupBuilder) -> None:
    """Leave the nested group when a `with` block raises."""
    with pytest.raises(ValueError, match=r'^boom$'), dsl.describe('Broken'):
        raise ValueError('boom')

    assert world.current_group is root


def test_example_callsite(root: ExampleGroup, dsl: ExampleGroupBuilder) -> None:
    """Attribute examples to the line declaring them."""
    line = test_example_callsite.__code__.co_firstlineno

    dsl.it('direct', lambda: None)

    @dsl.it('decorated')
    def _() -> None:
        pass

    direct, decorated = root.flatten()

    assert direct.callsite == Callsite(file=__file__, line=line + 4)
    assert decorated.callsite == Callsite(file=__file__, line=line + 6)


def test_register_without_current_group(world: World) -> None:
    """Refuse declarations outside of spec compilation."""
    dsl = ExampleGroupBuilder(world)

    with pytest.raises(QuickError, match=r'only be declared while a spec is compiled'):
        dsl.it('orphan', lambda: None)

    with pytest.raises(QuickError, match=r'only be declared while a spec is compiled'):
        dsl.describe('orphan', lambda: None)
