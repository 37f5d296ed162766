"""Example tree, registry, and runner bridge.

This package defines the core infrastructure compiling declarative
example groups into runnable invocations.

It provides:
- the example tree (`Example`, `ExampleGroup`);
- the process-wide registry of root groups (`World`);
- the DSL registration interface (`ExampleGroupBuilder`);
- the compiler and runner bridge (`QuickSpec`, `Invocation`).
"""

from .builder import ExampleGroupBuilder, GroupScope
from .groups import Example, ExampleGroup
from .spec import Invocation, QuickSpec
from .world import World, world

__all__ = (
    'Example',
    'ExampleGroup',
    'ExampleGroupBuilder',
    'GroupScope',
    'Invocation',
    'QuickSpec',
    'World',
    'world',
)
