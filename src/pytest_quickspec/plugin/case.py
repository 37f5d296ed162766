"""Pytest item executing a single example.

The item plays the host runner role for the bridge: it binds a fresh
spec instance to its invocation, runs it, and collects the failures the
bridge reports. Recorded failures fail the item with their locations.
"""

from typing import TYPE_CHECKING

import pytest

from pytest_quickspec.errors import ExampleFailed
from pytest_quickspec.models import RecordedFailure

if TYPE_CHECKING:
    from typing import Any

    from _pytest._code.code import ExceptionInfo, TerminalRepr, TracebackStyle

    from pytest_quickspec.core import Invocation, QuickSpec


class ExampleItem(pytest.Item):
    """Pytest item running one invocation of a spec type."""

    def __init__(self, *, invocation: 'Invocation', **kwargs: 'Any') -> None:
        """Initialize a pytest item bound to an invocation.

        Args:
            invocation: Invocation generated for the example.
            **kwargs: Keyword pytest.Item arguments.
        """
        super().__init__(**kwargs)

        self.invocation = invocation
        self.failures: list[RecordedFailure] = []

    @property
    def spec_type(self) -> type['QuickSpec']:
        """Spec type owning the invocation."""
        return self.parent.spec_type  # type: ignore[union-attr]

    def make_spec(self) -> 'QuickSpec':
        """Create a spec instance bound to this item's invocation."""
        spec = self.spec_type(reporter=self.record_failure)
        spec.set_invocation(self.invocation)
        return spec

    def record_failure(self, message: str, filename: str,
                       line_num: int, expected: bool) -> None:
        """Record a failure reported by the bridge."""
        self.failures.append(RecordedFailure(
            message=message,
            filename=filename,
            line_num=line_num,
            expected=expected,
        ))

    def runtest(self) -> None:
        """Execute the example.

        Raises:
            ExampleFailed: If the example recorded failures.
            InvocationBindingError: If the invocation has no example.
        """
        self.failures.clear()

        spec = self.make_spec()
        spec.invoke()

        if self.failures:
            raise ExampleFailed(spec.name, failures=self.failures)

    def repr_failure(self, excinfo: 'ExceptionInfo[BaseException]',
                     style: 'TracebackStyle | None' = None) -> 'str | TerminalRepr':
        """Render recorded failures with their locations."""
        if isinstance(excinfo.value, ExampleFailed):
            return str(excinfo.value)

        return super().repr_failure(excinfo, style=style)

    def reportinfo(self) -> tuple[str, int | None, str]:
        """Report the example definition line and display name."""
        spec = self.make_spec()
        callsite = spec.example.callsite

        line_num = None
        if callsite.file == str(self.path):
            line_num = callsite.line - 1

        return str(self.path), line_num, spec.name
