"""Example identifier derivation rules.

Each example of a spec type is exposed to the runner under an identifier
derived from its description chain. Identifiers are ASCII, lower-case,
word-character only, and unique within a spec type.
"""

from re import ASCII
from re import compile as regexp
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Container

#: Runs of characters that are not allowed in identifiers.
INVALID_PATTERN = regexp(r'[^a-z0-9]+', flags=ASCII)

#: Identifier used when a description has no usable characters.
DEFAULT_IDENTIFIER = 'example'

#: Separator between an identifier and its disambiguation counter.
SUFFIX_SEPARATOR = '_'


def make_identifier(description: str, max_length: int) -> str:
    """Derive an identifier from an example description chain.

    Args:
        description: Full description chain of the example.
        max_length: Maximum length of the identifier.

    Returns:
        A non-empty identifier of at most `max_length` characters.
    """
    identifier = INVALID_PATTERN.sub('_', description.lower())
    identifier = identifier[:max_length].strip('_')

    return identifier or DEFAULT_IDENTIFIER


def make_unique(identifier: str, taken: 'Container[str]') -> str:
    """Disambiguate an identifier against already taken ones.

    The first free name among `identifier`, `identifier_2`,
    `identifier_3`, ... is returned, so uniqueness holds even when a
    description itself ends with a counter-like suffix.

    Args:
        identifier: Candidate identifier.
        taken: Identifiers already in use.

    Returns:
        An identifier not contained in `taken`.
    """
    candidate = identifier
    counter = 1

    while candidate in taken:
        counter += 1
        candidate = f'{identifier}{SUFFIX_SEPARATOR}{counter}'

    return candidate
