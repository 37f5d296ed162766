"""Registration interface of the spec DSL.

`ExampleGroupBuilder` is passed to `QuickSpec.spec` and populates the
tree through the world's current group. Groups are declared with
`describe` or `context` and examples with `it`:

    def spec(self, dsl):
        @dsl.describe('Calculator')
        def _():
            @dsl.it('adds two numbers')
            def _():
                assert add(2, 2) == 4

Group scopes also work as `with` blocks:

    with dsl.describe('Calculator'):
        dsl.it('adds two numbers', lambda: ...)
"""

from typing import TYPE_CHECKING

from pytest_quickspec.errors import QuickError
from pytest_quickspec.models import Callsite

from .groups import Example, ExampleGroup

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from .world import World

type Body = Callable[[], object]
type Build = Callable[[], object]


class GroupScope:
    """Nested group opened as a decorator or a `with` block."""

    def __init__(self, builder: 'ExampleGroupBuilder', description: str) -> None:
        self.builder = builder
        self.description = description

        self._previous: list[ExampleGroup | None] = []

    def __call__(self, build: 'Build') -> 'Build':
        """Build the group immediately using the decorated callable."""
        self.builder.register_group(self.description, build)
        return build

    def __enter__(self) -> ExampleGroup:
        group = self.builder.open_group(self.description)
        self._previous.append(group.parent)
        return group

    def __exit__(self, exc_type: type[BaseException] | None,
                 exc_value: BaseException | None,
                 traceback: 'TracebackType | None') -> None:
        self.builder.world.set_current_group(self._previous.pop())


class ExampleGroupBuilder:
    """DSL entry point operating on the world's current group."""

    def __init__(self, world: 'World') -> None:
        self.world = world

    def _require_current(self) -> ExampleGroup:
        if (group := self.world.current_group) is None:
            raise QuickError('Examples can only be declared while a spec is compiled')
        return group

    def open_group(self, description: str) -> ExampleGroup:
        """Append a child group to the current one and make it current."""
        group = self._require_current().add_group(ExampleGroup(description))
        self.world.set_current_group(group)
        return group

    def register_group(self, description: str, build: 'Build') -> ExampleGroup:
        """Declare a nested group and populate it.

        Args:
            description: Description of the group.
            build: Callable declaring the group contents.

        Returns:
            The populated group.
        """
        previous = self._require_current()
        group = self.open_group(description)

        try:
            build()
        finally:
            self.world.set_current_group(previous)

        return group

    def register_example(self, description: str, callsite: Callsite, body: 'Body') -> Example:
        """Declare an example in the current group.

        Args:
            description: Description of the expected behavior.
            callsite: Location of the declaration.
            body: Callable executed when the example runs.

        Returns:
            The registered example.
        """
        return self._require_current().add_example(Example(description, body, callsite))

    def describe(self, description: str, build: 'Build | None' = None) -> 'GroupScope | ExampleGroup':
        """Declare a group, or return a scope declaring it."""
        if build is None:
            return GroupScope(self, description)

        return self.register_group(description, build)

    context = describe

    def it(self, description: str, body: 'Body | None' = None) -> 'Callable[[Body], Body] | Example':
        """Declare an example, or return a decorator declaring it.

        The example callsite is the line calling `it`.
        """
        callsite = Callsite.from_frame(1)

        if body is not None:
            return self.register_example(description, callsite, body)

        def decorator(function: 'Body') -> 'Body':
            self.register_example(description, callsite, function)
            return function

        return decorator
