"""Shared fixtures and helpers for generate-util tests."""

import sys
from pathlib import Path

import pytest

from generate_util.loader import MODULE_NAME_PREFIX
from generate_util.resolver import ModuleResolver, ResolveCache


# ---------------------------------------------------------------------------
# Module sources
# ---------------------------------------------------------------------------

GENERATOR_SOURCE = """\
def generator(app):
    return app
"""

INDEX_SOURCE = """\
NAME = 'index'


def generator(app):
    return NAME
"""

RAISING_SOURCE = """\
raise RuntimeError('broken on import')
"""

SYNTAX_ERROR_SOURCE = """\
def broken(
    # missing closing paren
"""

MISSING_DEPENDENCY_SOURCE = """\
import generate_util_nonexistent_dependency
"""


def write(path: Path, source: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def project_dir(tmp_path: Path) -> Path:
    """A project with a local install tree.

    project/
        fixtures/generator.py
        node_modules/generate-foo/generator.py
        node_modules/generate-pkg/__init__.py
        node_modules/generate-empty/
    """
    root = tmp_path / 'project'
    write(root / 'fixtures' / 'generator.py', GENERATOR_SOURCE)
    write(root / 'node_modules' / 'generate-foo' / 'generator.py', GENERATOR_SOURCE)
    write(root / 'node_modules' / 'generate-pkg' / '__init__.py', INDEX_SOURCE)
    (root / 'node_modules' / 'generate-empty').mkdir(parents=True)
    return root.resolve()


@pytest.fixture()
def global_dir(tmp_path: Path) -> Path:
    """A global module directory.

    global/
        generate-bar/__init__.py
        generate-bar/generator.py
        baz/generator.py
    """
    root = tmp_path / 'global'
    write(root / 'generate-bar' / '__init__.py', INDEX_SOURCE)
    write(root / 'generate-bar' / 'generator.py', GENERATOR_SOURCE)
    write(root / 'baz' / 'generator.py', GENERATOR_SOURCE)
    return root.resolve()


@pytest.fixture()
def resolver(global_dir: Path) -> ModuleResolver:
    """A resolver with an empty cache, pointed at the test global directory."""
    return ModuleResolver(cache=ResolveCache(), global_modules=global_dir)


@pytest.fixture()
def in_project(project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test with the project directory as the working directory."""
    monkeypatch.chdir(project_dir)
    return project_dir


@pytest.fixture(autouse=True)
def cleanup_sys_modules():
    """Remove modules loaded by path from sys.modules after each test."""
    yield
    to_remove = [k for k in sys.modules if k.startswith(MODULE_NAME_PREFIX)]
    for k in to_remove:
        del sys.modules[k]
