"""Compiler and runner bridge of spec types.

A spec type is a `QuickSpec` subclass overriding `spec`. The bridge
compiles its example tree exactly once, turns every example into an
`Invocation` the runner can execute, runs examples while converting
raised errors into located failures, and names each executed example.
"""

import logging
from threading import RLock
from typing import TYPE_CHECKING, ClassVar
from warnings import warn

from _pytest.outcomes import OutcomeException

from pytest_quickspec.errors import InvocationBindingError, QuickError, SpecCompilationError, SpecWarning
from pytest_quickspec.models import Callsite, Failure
from pytest_quickspec.names import make_identifier, make_unique

from .builder import ExampleGroupBuilder
from .world import World, world

if TYPE_CHECKING:
    from collections.abc import Callable

    from .groups import Example, ExampleGroup

logger = logging.getLogger(__name__)

#: Reporter signature: message, file name, line number, expected failure flag.
type Reporter = Callable[[str, str, int, bool], None]


class Invocation:
    """Runnable unit generated for a single example.

    The invocation only knows its identifier and how to run; the example
    it stands for is resolved through the spec type's side-table.
    """

    __slots__ = ('identifier', 'runner')

    def __init__(self, identifier: str, runner: 'Callable[[QuickSpec], None]') -> None:
        self.identifier = identifier
        self.runner = runner

    def __repr__(self) -> str:
        return f'<Invocation {self.identifier!r}>'

    def __call__(self, spec: 'QuickSpec') -> None:
        self.runner(spec)


class QuickSpec:
    """Base class of spec types.

    Subclasses override `spec` to declare their example groups. Each
    instance stands for one execution of one invocation.
    """

    __test__ = False

    #: Registry holding the root group of this spec type.
    world: ClassVar[World] = world

    _compile_lock: ClassVar[RLock]
    _compiled: ClassVar[bool]
    _compile_error: ClassVar[SpecCompilationError | None]
    _invocations: ClassVar[tuple[Invocation, ...] | None]
    _examples: ClassVar[dict[str, 'Example']]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)

        cls._compile_lock = RLock()
        cls._compiled = False
        cls._compile_error = None
        cls._invocations = None
        cls._examples = {}

    def __init__(self, reporter: 'Reporter | None' = None) -> None:
        """Initialize a spec instance.

        Args:
            reporter: Host runner callable receiving failures.
        """
        self.reporter = reporter
        self.invocation: Invocation | None = None
        self._example: Example | None = None

    def spec(self, dsl: ExampleGroupBuilder) -> None:
        """Declare example groups of this spec type."""

    @classmethod
    def initialize(cls) -> 'ExampleGroup':
        """Compile the example tree of this spec type once.

        The first call sets the world's current group to the root group
        and runs `spec`. Later calls return the compiled tree, or raise
        the error of the first compilation again.

        Returns:
            Root group of this spec type.

        Raises:
            SpecCompilationError: If `spec` raised an exception.
        """
        root = cls.world.root_group_for(cls)

        with cls._compile_lock:
            if not cls._compiled:
                cls._compiled = True
                cls._compile(root)

            if cls._compile_error is not None:
                raise cls._compile_error

        return root

    @classmethod
    def _compile(cls, root: 'ExampleGroup') -> None:
        logger.debug('Compiling example groups of %s', cls.__qualname__)

        previous = cls.world.current_group
        cls.world.set_current_group(root)

        try:
            cls().spec(ExampleGroupBuilder(cls.world))
        except (Exception, OutcomeException) as error:
            cls._compile_error = SpecCompilationError.from_exception(cls, error)
            cls._compile_error.__cause__ = error
        except BaseException as error:
            cls._compile_error = SpecCompilationError.from_exception(cls, error)
            cls._compile_error.__cause__ = error
            raise
        finally:
            cls.world.set_current_group(previous)

    @classmethod
    def test_invocations(cls) -> tuple[Invocation, ...]:
        """Return one invocation per example, in declaration order.

        Invocations are generated once; later calls return the same tuple.

        Raises:
            SpecCompilationError: If the example tree can not be compiled.
        """
        root = cls.initialize()

        with cls._compile_lock:
            if cls._invocations is None:
                cls._invocations = tuple(
                    cls._make_invocation(example)
                    for example in root.flatten()
                )
                logger.debug('Generated %d invocations for %s',
                             len(cls._invocations), cls.__qualname__)

        return cls._invocations

    @classmethod
    def _make_invocation(cls, example: 'Example') -> Invocation:
        settings = cls.world.settings

        candidate = make_identifier(example.name(settings.separator), settings.max_name_length)
        identifier = make_unique(candidate, cls._examples)
        if identifier != candidate:
            warn(
                f'Example {example.name(settings.separator)!r} of {cls.__qualname__} '
                f'is declared more than once, running it as {identifier!r}',
                SpecWarning,
                stacklevel=2,
            )

        example.generated_name = identifier
        cls._examples[identifier] = example

        def run_example(spec: QuickSpec) -> None:
            try:
                example.run()
            except Exception as error:
                callsite = Callsite.from_error(error) or example.callsite
                spec.record_failure(Failure(error=error, callsite=callsite))

        return Invocation(identifier, run_example)

    @classmethod
    def example_for(cls, invocation: Invocation) -> 'Example | None':
        """Resolve the example an invocation was generated for."""
        return cls._examples.get(invocation.identifier)

    def set_invocation(self, invocation: Invocation) -> None:
        """Bind this instance to the invocation about to run."""
        self.invocation = invocation
        self._example = self.example_for(invocation)

    @property
    def example(self) -> 'Example':
        """Example of the current invocation.

        Raises:
            InvocationBindingError: If no example is bound.
        """
        if self._example is None:
            identifier = self.invocation.identifier if self.invocation else None
            raise InvocationBindingError(
                f'No example is bound to invocation {identifier!r} of {type(self).__qualname__}',
            )

        return self._example

    @property
    def name(self) -> str:
        """Display name: spec type name followed by the example description chain."""
        return f'{type(self).__name__}: {self.example.name(self.world.settings.separator)}'

    def invoke(self) -> None:
        """Run the current invocation.

        Raises:
            InvocationBindingError: If no example is bound.
        """
        example = self.example
        logger.debug('Running %s', example.generated_name)

        self.invocation(self)  # type: ignore[misc]

    def record_failure(self, failure: Failure) -> None:
        """Report a failure raised by the current example."""
        logger.debug('Example failed at %s: %s', failure.callsite, failure.message)

        self.record_failure_with_description(
            failure.message,
            failure.callsite.file,
            failure.callsite.line,
            expected=False,
        )

    def record_failure_with_description(self, message: str, filename: str,
                                        line_num: int, expected: bool) -> None:
        """Forward a failure to the host runner reporter.

        Raises:
            QuickError: If no reporter is attached.
        """
        if self.reporter is None:
            raise QuickError(f'No failure reporter is attached to {type(self).__qualname__}')

        self.reporter(message, filename, line_num, expected)
