"""CLI utilities for inspecting compiled spec types.

Spec types are compiled exactly as pytest would compile them, which makes
the CLI handy to check generated identifiers and display names without
running any example.
"""

from importlib import import_module
from json import dumps

from click import BadParameter, ClickException, argument, echo, group, option

from pytest_quickspec.core import QuickSpec
from pytest_quickspec.errors import SpecCompilationError


def _load_spec_type(reference: str) -> type[QuickSpec]:
    """Import a spec type from a `module:Class` reference.

    Args:
        reference: Dotted module path and class name separated by a colon.

    Returns:
        The referenced spec type.

    Raises:
        BadParameter: If the reference can not be resolved to a spec type.
    """
    module_name, _, class_name = reference.partition(':')
    if not module_name or not class_name:
        raise BadParameter(f'expected MODULE:CLASS, got {reference!r}')

    try:
        obj = getattr(import_module(module_name), class_name)
    except (ImportError, AttributeError) as error:
        raise BadParameter(f'can not import {reference!r}: {error}') from error

    if not isinstance(obj, type) or not issubclass(obj, QuickSpec) or obj is QuickSpec:
        raise BadParameter(f'{reference!r} is not a QuickSpec subclass')

    return obj


@group(help='Command-line utilities for pytest-quickspec.')
def cli() -> None:
    """Root CLI group for pytest-quickspec tools."""
    return None


@cli.command(
    name='examples',
    help='Compile a spec type and list its examples in execution order.',
)
@option(
    '--json', 'as_json',
    is_flag=True,
    default=False,
    help='Print examples as a JSON array.',
)
@argument('reference')
def list_examples(reference: str, as_json: bool) -> None:
    """List examples of a spec type.

    Args:
        reference: Spec type as `module:Class`.
        as_json: Whether to print JSON instead of plain lines.
    """
    spec_type = _load_spec_type(reference)

    try:
        invocations = spec_type.test_invocations()
    except SpecCompilationError as error:
        raise ClickException(str(error)) from error

    rows = []
    for invocation in invocations:
        spec = spec_type()
        spec.set_invocation(invocation)
        rows.append({
            'identifier': invocation.identifier,
            'name': spec.name,
            'file': spec.example.callsite.file,
            'line': spec.example.callsite.line,
        })

    if as_json:
        echo(dumps(rows, ensure_ascii=False, indent=4))
        return

    for row in rows:
        echo(f'{row["identifier"]}\t{row["name"]}\t{row["file"]}:{row["line"]}')


if __name__ == '__main__':
    cli()
