"""Resolution options and global module directory lookup."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict
from xdg_base_dirs import xdg_data_home

DEFAULT_CONFIGFILE = 'generator.py'
DEFAULT_MODULES_DIRNAME = 'node_modules'
GLOBAL_MODULES_ENV = 'GENERATE_GLOBAL_MODULES'


class ResolutionOptions(BaseModel):
    """Options shared by the naming and resolution helpers."""

    model_config = ConfigDict(frozen=True)

    prefix: Optional[str] = None
    modulename: Optional[str] = None
    alias: Optional[Callable[[str], str]] = None
    cwd: Optional[Path] = None
    configfile: str = DEFAULT_CONFIGFILE
    modules_dirname: str = DEFAULT_MODULES_DIRNAME

    @property
    def effective_prefix(self) -> Optional[str]:
        """`prefix` if set, otherwise `modulename`."""
        return self.prefix or self.modulename

    def base_dir(self) -> Path:
        """Directory local lookups start from."""
        return self.cwd if self.cwd is not None else Path.cwd()


OptionsLike = ResolutionOptions | Mapping[str, Any] | str | None


def as_options(options: OptionsLike = None) -> ResolutionOptions:
    """Coerce `options` into a ResolutionOptions instance.

    - None gives the defaults
    - A string is shorthand for `prefix`
    - A mapping is validated into the model
    """
    if isinstance(options, ResolutionOptions):
        return options
    if options is None:
        return ResolutionOptions()
    if isinstance(options, str):
        return ResolutionOptions(prefix=options)
    return ResolutionOptions.model_validate(dict(options))


def get_global_modules_dir(path: Optional[Path] = None) -> Path:
    """Returns the `path` passed in the argument or the global module directory.

    - If the argument is not None, return the value of the argument
    - If `$GENERATE_GLOBAL_MODULES` is set, return its value
    - Otherwise return `$XDG_DATA_HOME/generate/modules`
    """
    if path is not None:
        return Path(path)
    env = os.environ.get(GLOBAL_MODULES_ENV)
    if env:
        return Path(env)
    return xdg_data_home() / 'generate' / 'modules'
