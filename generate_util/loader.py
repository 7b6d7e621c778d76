"""Default module loader for generate-util."""

import importlib
import importlib.util
import logging
import os
import re
import sys
from importlib.machinery import ModuleSpec
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Optional

from returns.result import Failure, Result, Success, safe

from generate_util.result import bind_safe

logger = logging.getLogger(__name__)

MODULE_NAME_PREFIX = 'generate_util_module_'


class ModuleLoadFailure(Exception):
    """Base class for failures reported by a loader."""


class ModuleNotFound(ModuleLoadFailure):
    """The requested module does not exist."""


class ModuleLoadError(ModuleLoadFailure):
    """The requested module exists but could not be loaded."""

    @property
    def cause(self) -> Optional[BaseException]:
        """The exception raised while loading, if any."""
        return self.__cause__


LoadResult = Result[Any, ModuleNotFound | ModuleLoadError]
Loader = Callable[[str], LoadResult]

_load_bind_safe = bind_safe(ModuleLoadError)


def exists(path: str | Path | None) -> bool:
    """Return True if `path` can be opened for reading."""
    return bool(path) and os.access(path, os.R_OK)


def _is_filesystem_path(target: str) -> bool:
    """Determine if a module string refers to a filesystem path."""
    return '/' in target or '\\' in target or target.endswith('.py') or target.startswith('.')


def _module_name_for(path: Path) -> str:
    """Build a unique sys.modules key for a file loaded by path."""
    return MODULE_NAME_PREFIX + re.sub(r'\W', '_', str(path))


def _entry_file(path: Path) -> Optional[Path]:
    """Return the file to execute for `path`, or None for a plain directory."""
    if path.is_dir():
        init = path / '__init__.py'
        return init if init.is_file() else None
    return path


@safe
def _exec_spec(spec: ModuleSpec) -> ModuleType:
    """Execute a module spec, registering it in sys.modules on success.

    Raises:
        Exception: Whatever the module raises while executing.
    """
    module = importlib.util.module_from_spec(spec)
    sys.modules[spec.name] = module
    try:
        spec.loader.exec_module(module)  # type: ignore[union-attr]
    except Exception:
        del sys.modules[spec.name]
        raise
    return module


def _load_module_from_path(path: Path) -> LoadResult:
    """Load a Python module, or a package directory, from a filesystem path."""
    if not exists(path):
        return Failure(ModuleNotFound(f'Module path does not exist: {path}'))

    entry = _entry_file(path)
    if entry is None:
        return Failure(ModuleNotFound(f'Directory is not a package: {path}'))

    search_locations = [str(path)] if entry != path else None
    spec = importlib.util.spec_from_file_location(
        _module_name_for(entry),
        entry,
        submodule_search_locations=search_locations,
    )
    if spec is None or spec.loader is None:
        return Failure(ModuleLoadError(f'failed to create module spec from {entry}'))

    logger.debug(f'Loading module from path: {entry}')
    return Success(spec).bind(_load_bind_safe(_exec_spec, f'failed to execute module {entry}'))


def _is_requested_module(module_path: str, missing: Optional[str]) -> bool:
    """True if `missing` is `module_path` itself or one of its parent packages."""
    if not missing:
        return False
    return module_path == missing or module_path.startswith(f'{missing}.')


def _load_module_from_dotpath(module_path: str) -> LoadResult:
    """Import a Python module from a dotted module path."""
    if not module_path:
        return Failure(ModuleNotFound('empty module name'))

    logger.debug(f'Importing module: {module_path}')
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as e:
        if _is_requested_module(module_path, e.name):
            return Failure(ModuleNotFound(f"module '{module_path}' not found"))
        err = ModuleLoadError(f"module '{module_path}' failed to import: {e}")
        err.__cause__ = e
        return Failure(err)
    except Exception as e:
        err = ModuleLoadError(f"module '{module_path}' failed to import: {e}")
        err.__cause__ = e
        return Failure(err)

    # A plain directory on sys.path imports as a namespace package
    if module.__spec__ is not None and module.__spec__.origin is None:
        return Failure(ModuleNotFound(f"module '{module_path}' is a namespace package"))
    return Success(module)


def load_module(target: str | Path) -> LoadResult:
    """Load `target` as a file path or as a dotted module path.

    Args:
        target: A filesystem path (absolute, relative, or ending in `.py`)
            or an importable module name.

    Returns:
        Success containing the loaded module.
        Failure containing ModuleNotFound if nothing exists under `target`.
        Failure containing ModuleLoadError if it exists but failed to load.
    """
    target = str(target)
    if _is_filesystem_path(target) or Path(target).is_absolute():
        return _load_module_from_path(Path(target).resolve())
    return _load_module_from_dotpath(target)
