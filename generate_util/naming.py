"""Alias, fullname and generator object-path formatting."""

import re
from pathlib import Path
from typing import Optional

from generate_util.options import OptionsLike, as_options

GENERATORS = 'generators'
_GENERATORS_PREFIX = f'{GENERATORS}.'
_SEGMENT_SPLIT = re.compile(r'\.generators\.|\.')


class InvalidConfigurationError(ValueError):
    """Raised when options lack a value a formatter requires."""


def to_alias(name: str, options: OptionsLike = None) -> str:
    """Create an alias from `name`, the opposite of `to_fullname`.

    If `options.alias` is a function it is used instead. Otherwise the
    configured prefix (and an optional dash after it) is stripped, or, when
    no prefix is configured, everything up to the first dash of the base
    filename.

    Examples:
        >>> to_alias('generate-foo')
        'foo'
        >>> to_alias('a-b-c', {'prefix': 'a-b'})
        'c'
    """
    opts = as_options(options)
    if opts.alias is not None:
        return opts.alias(name)

    prefix = opts.effective_prefix
    if prefix:
        return re.sub(f'^{re.escape(prefix)}-?', '', name, count=1)

    stem = Path(name).stem
    return stem[stem.find('-') + 1 :]


def to_fullname(alias: str, options: OptionsLike) -> str:
    """Create a module name from `alias`, the opposite of `to_alias`.

    Names already containing the prefix anywhere are returned as-is, as
    are absolute paths.

    Raises:
        InvalidConfigurationError: If no prefix is configured.

    Examples:
        >>> to_fullname('foo', 'generate')
        'generate-foo'
        >>> to_fullname('generate-bar', 'generate')
        'generate-bar'
    """
    prefix = as_options(options).effective_prefix
    if not prefix:
        raise InvalidConfigurationError('expected options.prefix or options.modulename to be a non-empty string')
    if Path(alias).is_absolute():
        return alias
    if prefix in alias:
        return alias
    return f'{prefix}-{alias}'


def to_generator_path(name: str, include_prefix: bool = True) -> Optional[str]:
    """Create an object-path for looking up a nested generator.

    Returns None for filesystem paths.

    Examples:
        >>> to_generator_path('a.b.c')
        'generators.a.generators.b.generators.c'
        >>> to_generator_path('a.b', include_prefix=False)
        'a.generators.b'
    """
    if '/' in name or '\\' in name:
        return None
    if name.startswith(_GENERATORS_PREFIX):
        name = name[len(_GENERATORS_PREFIX) :]
    path = f'.{GENERATORS}.'.join(_SEGMENT_SPLIT.split(name))
    if include_prefix:
        return _GENERATORS_PREFIX + path
    return path
