"""Pytest collector for spec types.

Each `QuickSpec` subclass found in a test module is collected as a
`SpecCollector`, which compiles the spec type and yields one
`ExampleItem` per generated invocation, in declaration order.
"""

from typing import TYPE_CHECKING

import pytest

from pytest_quickspec.errors import SpecCompilationError

from .case import ExampleItem

if TYPE_CHECKING:
    from collections.abc import Iterable
    from typing import Any

    from _pytest._code.code import ExceptionInfo, TerminalRepr

    from pytest_quickspec.core import QuickSpec


class SpecCollector(pytest.Collector):
    """Pytest collector for a single spec type.

    Compilation errors are reported as collection errors of the spec
    type; no items are produced for it.
    """

    def __init__(self, *, spec_type: type['QuickSpec'], **kwargs: 'Any') -> None:
        """Initialize a collector.

        Args:
            spec_type: Spec type to compile.
            **kwargs: Keyword pytest.Collector arguments.
        """
        super().__init__(**kwargs)

        self.spec_type = spec_type

    def collect(self) -> 'Iterable[ExampleItem]':
        """Collect one pytest item per example of the spec type.

        Raises:
            SpecCompilationError: If the example tree can not be built.
        """
        for invocation in self.spec_type.test_invocations():
            yield ExampleItem.from_parent(
                self,
                name=invocation.identifier,
                invocation=invocation,
            )

    def repr_failure(self, excinfo: 'ExceptionInfo[BaseException]') -> 'str | TerminalRepr':
        """Render compilation errors without the internal traceback."""
        if isinstance(excinfo.value, SpecCompilationError):
            return str(excinfo.value)

        return super().repr_failure(excinfo)
