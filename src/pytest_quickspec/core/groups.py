"""Example tree nodes.

An `ExampleGroup` owns an ordered list of child groups and examples in
declaration order. `Example` is the leaf: a description, a body to run,
and the callsite where it was declared.
"""

from typing import TYPE_CHECKING

from pytest_quickspec.errors import QuickError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from pytest_quickspec.models import Callsite


class Example:
    """Leaf node of the example tree."""

    __slots__ = ('_generated_name', 'body', 'callsite', 'description', 'group')

    def __init__(self, description: str, body: 'Callable[[], object]',
                 callsite: 'Callsite') -> None:
        """Initialize an example.

        Args:
            description: Human-readable description of the behavior.
            body: Callable executed when the example runs.
            callsite: Location where the example was declared.
        """
        self.description = description
        self.body = body
        self.callsite = callsite

        self.group: ExampleGroup | None = None
        self._generated_name: str | None = None

    def __repr__(self) -> str:
        return f'<Example {self.description!r} at {self.callsite}>'

    @property
    def generated_name(self) -> str | None:
        """Identifier assigned during invocation generation."""
        return self._generated_name

    @generated_name.setter
    def generated_name(self, value: str) -> None:
        if self._generated_name is not None and self._generated_name != value:
            raise QuickError(
                f'Example {self.description!r} is already named '
                f'{self._generated_name!r}, can not rename to {value!r}',
            )

        self._generated_name = value

    def descriptions(self) -> list[str]:
        """Return non-empty descriptions from the root group down to this example."""
        chain = [self.description]

        group = self.group
        while group is not None:
            chain.append(group.description)
            group = group.parent

        return [item for item in reversed(chain) if item]

    def name(self, separator: str = ' ') -> str:
        """Return the description chain joined with `separator`."""
        return separator.join(self.descriptions())

    def run(self) -> None:
        """Execute the example body."""
        self.body()


class ExampleGroup:
    """Tree node holding nested groups and examples in declaration order."""

    __slots__ = ('_children', 'description', 'parent')

    def __init__(self, description: str = '') -> None:
        self.description = description
        self.parent: ExampleGroup | None = None

        self._children: list[ExampleGroup | Example] = []

    def __repr__(self) -> str:
        return f'<ExampleGroup {self.description!r} ({len(self._children)} children)>'

    @property
    def groups(self) -> tuple['ExampleGroup', ...]:
        """Direct child groups in declaration order."""
        return tuple(item for item in self._children if isinstance(item, ExampleGroup))

    @property
    def examples(self) -> tuple[Example, ...]:
        """Direct child examples in declaration order."""
        return tuple(item for item in self._children if isinstance(item, Example))

    def add_group(self, group: 'ExampleGroup') -> 'ExampleGroup':
        """Append a child group.

        Args:
            group: A group without a parent.

        Returns:
            The appended group.

        Raises:
            QuickError: If the group already belongs to a tree or is an
                ancestor of this group.
        """
        if group.parent is not None:
            raise QuickError(f'Group {group.description!r} already has a parent')

        ancestor: ExampleGroup | None = self
        while ancestor is not None:
            if ancestor is group:
                raise QuickError(f'Group {group.description!r} can not contain itself')
            ancestor = ancestor.parent

        group.parent = self
        self._children.append(group)

        return group

    def add_example(self, example: Example) -> Example:
        """Append a child example.

        Raises:
            QuickError: If the example already belongs to a group.
        """
        if example.group is not None:
            raise QuickError(f'Example {example.description!r} already belongs to a group')

        example.group = self
        self._children.append(example)

        return example

    def flatten(self) -> 'Iterator[Example]':
        """Iterate over all contained examples, depth-first, in declaration order."""
        for item in self._children:
            if isinstance(item, ExampleGroup):
                yield from item.flatten()
            else:
                yield item
