"""A convenient wrapper function to make the `returns` library easier to use."""

from typing import Callable, Type, TypeVar

from returns.result import Result

ExcT = TypeVar('ExcT', bound=Exception)
A = TypeVar('A')
B = TypeVar('B')


def bind_safe(
    error_cls: Type[ExcT],
) -> Callable[[Callable[[A], Result[B, Exception]], str], Callable[[A], Result[B, ExcT]]]:
    """Curry a @safe-decorated function into a bind-compatible form with error mapping.

    Takes an exception class and returns a function that wraps a @safe function
    for use with Result.bind(), converting any Failure to the given error class.
    The original exception is kept as the `__cause__` of the new one.

    Args:
        error_cls: The exception class to wrap failures with.

    Returns:
        A function that accepts a @safe function and an error message string,
        and returns a callable suitable for use with Result.bind().

    Example:
        >>> load_failed = bind_safe(ModuleLoadError)
        >>> Success(spec).bind(load_failed(_exec_spec, f'failed to execute module {entry}'))
        <Failure: failed to execute module /path/to/generator.py: ...>
    """

    def wrap(error_msg: str, exc: Exception) -> ExcT:
        err = error_cls(f'{error_msg}: {exc}')
        err.__cause__ = exc
        return err

    def inner(
        fn: Callable[[A], Result[B, Exception]],
        error_msg: str,
    ) -> Callable[[A], Result[B, ExcT]]:
        return lambda x: fn(x).alt(lambda e: wrap(error_msg, e))

    return inner
