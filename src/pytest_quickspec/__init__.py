"""Pytest plugin and runtime for nested behavior-driven specs.

The `pytest_quickspec` package lets developers declare nested groups of
examples ("describe/context/it" style) inside `QuickSpec` subclasses and
runs every example as a separate pytest test item.

Key features:
- lazy, exactly-once compilation of the example tree per spec type;
- one uniquely named pytest item per example, in declaration order;
- failures attributed to the most precise known file and line;
- display names made of the spec type and the description chain.
"""

from pytest_quickspec.core import ExampleGroupBuilder, QuickSpec
from pytest_quickspec.models import Callsite, attach_callsite

__all__ = (
    'Callsite',
    'ExampleGroupBuilder',
    'QuickSpec',
    'attach_callsite',
)
