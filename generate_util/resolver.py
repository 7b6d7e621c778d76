"""Local and global module resolution with memoization."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, TypeVar

from returns.result import Success

from generate_util.loader import Loader, ModuleLoadError, exists, load_module
from generate_util.naming import to_fullname
from generate_util.options import OptionsLike, as_options, get_global_modules_dir

logger = logging.getLogger(__name__)

V = TypeVar('V')


@dataclass
class ResolveCache:
    """Memoized lookups. Entries are never invalidated once written."""

    local: dict[str, Path] = field(default_factory=dict)
    global_: dict[str, Path] = field(default_factory=dict)
    resolved: dict[str, Path] = field(default_factory=dict)
    required: dict[str, Any] = field(default_factory=dict)


def _remember(cache: dict[str, V], key: str, value: V) -> V:
    cache[key] = value
    return value


def _entry_point(candidate: Path) -> Optional[Path]:
    """Return the file that loads `candidate`: itself, or a package's __init__.py."""
    if candidate.is_file():
        return candidate
    init = candidate / '__init__.py'
    if init.is_file():
        return init
    return None


class ModuleResolver:
    """Resolves generator modules locally, then in the global module directory.

    Args:
        cache: Cache to read and populate. A new one is created if not provided.
        loader: Callable used to load modules by name or path.
        global_modules: Global module directory. Defaults to `get_global_modules_dir()`.
    """

    def __init__(
        self,
        cache: Optional[ResolveCache] = None,
        loader: Loader = load_module,
        global_modules: Optional[Path] = None,
    ) -> None:
        self.cache = cache if cache is not None else ResolveCache()
        self.loader = loader
        self.global_modules = get_global_modules_dir(global_modules)

    def resolve_local(self, name: str, options: OptionsLike = None) -> Optional[Path]:
        """Resolve `name` as a path, relative to `cwd`, or under `cwd/node_modules`."""
        if name in self.cache.local:
            logger.debug(f'resolve_local: cache hit for "{name}"')
            return self.cache.local[name]

        opts = as_options(options)
        cwd = opts.base_dir()

        if exists(name):
            return _remember(self.cache.local, name, Path(name).resolve())

        filepath = (cwd / name).resolve()
        if exists(filepath):
            return _remember(self.cache.local, name, filepath)

        fullname = to_fullname(name, opts) if opts.effective_prefix else name
        filepath = (cwd / opts.modules_dirname / fullname).resolve()
        logger.debug(f'resolve_local: checking "{filepath}"')
        if exists(filepath):
            return _remember(self.cache.local, name, filepath)
        return None

    def resolve_global(self, name: str, options: OptionsLike = None) -> Optional[Path]:
        """Resolve `name`, then its prefixed fullname, in the global module directory."""
        if name in self.cache.global_:
            logger.debug(f'resolve_global: cache hit for "{name}"')
            return self.cache.global_[name]

        opts = as_options(options)
        filepath = (self.global_modules / name).resolve()
        logger.debug(f'resolve_global: checking "{filepath}"')
        if exists(filepath):
            return _remember(self.cache.global_, name, filepath)

        if not opts.effective_prefix:
            return None
        fullname = to_fullname(name, opts)
        if fullname == name:
            return None

        filepath = (self.global_modules / fullname).resolve()
        logger.debug(f'resolve_global: checking "{filepath}"')
        if exists(filepath):
            return _remember(self.cache.global_, name, filepath)
        return None

    def resolve_module(self, name: str, options: OptionsLike = None) -> Optional[Path]:
        """Resolve `name` locally, falling back to global modules unless `cwd` was given."""
        opts = as_options(options)
        filepath = self.resolve_local(name, opts)
        if filepath is not None:
            return filepath
        if opts.cwd is None:
            return self.resolve_global(name, opts)
        return None

    def try_resolve(self, name: str, options: OptionsLike = None) -> Optional[Path]:
        """Resolve `name` to a loadable file, failing silently if not found.

        A resolved file is returned as-is and a package directory resolves to
        its `__init__.py`. Other directories resolve to `options.configfile`
        inside them when that file exists.

        Examples:
            >>> try_resolve('generate-foo')
            PosixPath('/path/to/cwd/node_modules/generate-foo/generator.py')
            >>> try_resolve('generator.py', {'cwd': 'fixtures'})
            PosixPath('/path/to/cwd/fixtures/generator.py')
        """
        opts = as_options(options)
        logger.debug(f'try_resolve: "{name}"')

        candidate = self.resolve_module(name, opts)
        if candidate is None or not exists(candidate):
            return None

        key = f'{name}::{opts.configfile}'
        if key in self.cache.resolved:
            return self.cache.resolved[key]

        filepath = _entry_point(candidate)
        if filepath is not None:
            return _remember(self.cache.resolved, key, filepath)

        filepath = candidate / opts.configfile
        if exists(filepath):
            return _remember(self.cache.resolved, key, filepath)
        return None

    def try_require(self, name: str, options: OptionsLike = None) -> Any:
        """Load module `name`, returning None if it cannot be found.

        Raises:
            ModuleLoadError: If the module exists but fails to load. The
                exception raised by the module itself is on `.cause`
                (`__cause__`).
        """
        if not name:
            return None
        if name in self.cache.required:
            return self.cache.required[name]

        opts = as_options(options)
        result = self.loader(name)
        if isinstance(result, Success):
            return _remember(self.cache.required, name, result.unwrap())
        self._raise_if_broken(name, result.failure())

        filepath = self.try_resolve(name, opts)
        if filepath is None:
            logger.debug(f'try_require: "{name}" not found')
            return None

        result = self.loader(str(filepath))
        if isinstance(result, Success):
            return _remember(self.cache.required, name, result.unwrap())
        self._raise_if_broken(name, result.failure())
        return None

    @staticmethod
    def _raise_if_broken(name: str, error: Exception) -> None:
        if isinstance(error, ModuleLoadError):
            logger.error(f'try_require: "{name}" failed to load: {error}')
            raise error


default_resolver = ModuleResolver()


def resolve_local(name: str, options: OptionsLike = None) -> Optional[Path]:
    return default_resolver.resolve_local(name, options)


def resolve_global(name: str, options: OptionsLike = None) -> Optional[Path]:
    return default_resolver.resolve_global(name, options)


def resolve_module(name: str, options: OptionsLike = None) -> Optional[Path]:
    return default_resolver.resolve_module(name, options)


def try_resolve(name: str, options: OptionsLike = None) -> Optional[Path]:
    return default_resolver.try_resolve(name, options)


def try_require(name: str, options: OptionsLike = None) -> Any:
    return default_resolver.try_require(name, options)

