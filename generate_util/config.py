"""Loader for explicitly named generator config files."""

import logging
from pathlib import Path
from typing import Any, Optional

from returns.result import Failure, Result, Success, safe

from generate_util.loader import ModuleLoadError
from generate_util.options import OptionsLike, ResolutionOptions, as_options
from generate_util.resolver import ModuleResolver, default_resolver

logger = logging.getLogger(__name__)


class ConfigLoadError(Exception):
    """Raised when configuration loading fails."""


def _ensure_config_file_exists(config_path: Path) -> Result[Path, ConfigLoadError]:
    """Check that the config file exists and return it wrapped in a Result.

    Args:
        config_path: Path to the config file to check.

    Returns:
        Success containing config_path if the file exists.
        Failure containing ConfigLoadError if the file does not exist.
    """
    if not config_path.exists():
        return Failure(ConfigLoadError(f'Config file not found: {config_path}'))
    return Success(config_path)


def _require_config(
    resolver: ModuleResolver,
    config_path: Path,
    opts: ResolutionOptions,
) -> Result[Any, ConfigLoadError | ModuleLoadError]:
    """Load the config module through the resolver's require cache."""

    @safe(exceptions=(ModuleLoadError,))
    def _require() -> Any:
        return resolver.try_require(str(config_path), opts)

    def _found(value: Any) -> Result[Any, ConfigLoadError | ModuleLoadError]:
        if value is None:
            return Failure(ConfigLoadError(f'Config file could not be loaded: {config_path}'))
        return Success(value)

    return _require().bind(_found)


def load_config(
    configfile: str | Path,
    options: OptionsLike = None,
    resolver: Optional[ModuleResolver] = None,
) -> Result[Any, ConfigLoadError | ModuleLoadError]:
    """Load a generator config file named relative to `options.cwd`.

    Args:
        configfile: File name or path of the config module.
        options: Resolution options. `cwd` defaults to the working directory.
        resolver: Resolver whose caches are used. Defaults to the shared one.

    Returns:
        Success containing the loaded config module.
        Failure containing ConfigLoadError if the file does not exist.
        Failure containing the ModuleLoadError if the file fails to load.

    Note:
        Unlike the resolver functions, a missing file is reported as a
        failure instead of None, since the caller named it explicitly.
    """
    opts = as_options(options)
    resolver = resolver if resolver is not None else default_resolver
    config_path = (opts.base_dir() / configfile).resolve()
    logger.debug(f'Loading config file: {config_path}')

    return _ensure_config_file_exists(config_path).bind(lambda p: _require_config(resolver, p, opts))
