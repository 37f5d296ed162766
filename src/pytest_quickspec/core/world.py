"""Process-wide registry of example trees.

The world maps every spec type to its root example group and keeps the
"current group" pointer that DSL registration calls append to while a
spec type is being compiled.
"""

import logging
from threading import Lock, local

from pytest_quickspec.models import QuickSettings

from .groups import ExampleGroup

logger = logging.getLogger(__name__)


class World:
    """Registry of root example groups keyed by spec type.

    Root groups are created lazily, once per spec type, and never
    removed. The current group is stored per thread, so distinct spec
    types compiled concurrently on distinct threads do not interfere.
    """

    def __init__(self, settings: QuickSettings | None = None) -> None:
        self._lock = Lock()
        self._roots: dict[type, ExampleGroup] = {}
        self._state = local()
        self._settings = settings

    @property
    def settings(self) -> QuickSettings:
        """Naming settings, resolved from the environment on first access."""
        if self._settings is None:
            self._settings = QuickSettings()

        return self._settings

    def configure(self, settings: QuickSettings | None) -> QuickSettings | None:
        """Replace naming settings.

        Args:
            settings: New settings, or `None` to resolve them from the
                environment again on next access.

        Returns:
            Settings replaced by this call, as stored and without resolving
            the environment.
        """
        previous, self._settings = self._settings, settings

        return previous

    def root_group_for(self, spec_type: type) -> ExampleGroup:
        """Return the root group of a spec type, creating an empty one if needed.

        Args:
            spec_type: Spec type owning the tree.

        Returns:
            The single root group of `spec_type`.
        """
        with self._lock:
            if (group := self._roots.get(spec_type)) is None:
                logger.debug('Creating root example group for %s', spec_type.__qualname__)
                group = self._roots[spec_type] = ExampleGroup()

        return group

    @property
    def current_group(self) -> ExampleGroup | None:
        """Group that DSL registration calls of this thread append to."""
        return getattr(self._state, 'group', None)

    def set_current_group(self, group: ExampleGroup | None) -> None:
        """Set the group that DSL registration calls append to."""
        self._state.group = group


#: Default process-wide world.
world = World()
