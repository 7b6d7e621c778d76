"""Tests for exists function."""

import os

import pytest

from generate_util.loader import exists


class TestExists:
    def test_existing_file(self, tmp_path):
        f = tmp_path / 'generator.py'
        f.write_text('')
        assert exists(f)
        assert exists(str(f))

    def test_existing_directory(self, tmp_path):
        assert exists(tmp_path)

    def test_missing_path(self, tmp_path):
        assert not exists(tmp_path / 'missing.py')

    @pytest.mark.parametrize('value', [None, ''])
    def test_empty_values(self, value):
        assert not exists(value)

    @pytest.mark.skipif(not hasattr(os, 'geteuid') or os.geteuid() == 0, reason='root can read anything')
    def test_unreadable_file(self, tmp_path):
        f = tmp_path / 'secret.py'
        f.write_text('')
        f.chmod(0o000)
        try:
            assert not exists(f)
        finally:
            f.chmod(0o644)
