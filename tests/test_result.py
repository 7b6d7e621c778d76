"""Tests for bind_safe helper."""

from returns.result import Failure, Success, safe

from generate_util.result import bind_safe


class WrappedError(Exception):
    pass


@safe
def _parse_int(raw: str) -> int:
    return int(raw)


class TestBindSafe:
    def test_success_passes_through(self):
        result = Success('42').bind(bind_safe(WrappedError)(_parse_int, 'not a number'))
        assert result == Success(42)

    def test_failure_is_wrapped(self):
        result = Success('x').bind(bind_safe(WrappedError)(_parse_int, 'not a number'))
        assert isinstance(result, Failure)
        error = result.failure()
        assert isinstance(error, WrappedError)
        assert str(error).startswith('not a number: ')

    def test_original_exception_is_cause(self):
        result = Success('x').bind(bind_safe(WrappedError)(_parse_int, 'not a number'))
        assert isinstance(result.failure().__cause__, ValueError)
