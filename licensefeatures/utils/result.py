# Copyright 2026 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
A small `Result` type inspired by Rust.

Only what the decode boundary needs is implemented: a result can be inspected, unwrapped or turned back into a raised
exception. See https://doc.rust-lang.org/std/result/enum.Result.html for the full API this is modeled after.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Generic, Literal, NoReturn, ParamSpec, TypeAlias, TypeVar

from typing_extensions import TypeIs

T = TypeVar('T', covariant=True)  # Success type
E = TypeVar('E', covariant=True)  # Error type
U = TypeVar('U')
P = ParamSpec('P')
TE = TypeVar('TE', bound=Exception)


class _Outcome(Generic[T]):
    __slots__ = ('_value',)
    __match_args__ = ('_value',)

    def __init__(self, value: T) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._value!r})'

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self) and self._value == other._value

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._value))


class Ok(_Outcome[T]):
    """The successful outcome, holding the returned value."""

    __slots__ = ()

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    def ok(self) -> T:
        return self._value

    def err(self) -> None:
        return None

    def unwrap(self) -> T:
        return self._value

    def unwrap_err(self) -> NoReturn:
        raise UnwrapError(self, 'called `unwrap_err()` on an `Ok` value')

    def unwrap_or(self, _default: U) -> T:
        return self._value

    def unwrap_or_raise(self) -> T:
        return self._value


class Err(_Outcome[E]):
    """The failed outcome, usually holding the exception that caused it."""

    __slots__ = ()

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    def ok(self) -> None:
        return None

    def err(self) -> E:
        return self._value

    def unwrap(self) -> NoReturn:
        exc = UnwrapError(self, f'called `unwrap()` on an `Err` value: {self._value!r}')
        if isinstance(self._value, BaseException):
            raise exc from self._value
        raise exc

    def unwrap_err(self) -> E:
        return self._value

    def unwrap_or(self, default: U) -> U:
        return default

    def unwrap_or_raise(self) -> NoReturn:
        """Raise the held exception as if the call that produced this result had never been wrapped."""
        assert isinstance(self._value, Exception), f'`unwrap_or_raise()` on a non-exception value: {self._value!r}'
        raise self._value


Result: TypeAlias = Ok[T] | Err[E]


class UnwrapError(Exception):
    """Raised when a result is unwrapped on the wrong side, the offending result is kept in `result`."""

    def __init__(self, result: Result[Any, Any], message: str) -> None:
        super().__init__(message)
        self.result = result


def as_result(*exceptions: type[TE]) -> Callable[[Callable[P, T]], Callable[P, Result[T, TE]]]:
    """
    Make a decorator that turns a function into one that returns a `Result`.

    Return values become `Ok(value)`, exceptions of the given types become `Err(exc)` and any other exception is
    propagated.

    >>> @as_result(ZeroDivisionError)
    ... def ratio(a: int, b: int) -> float:
    ...     return a / b
    >>> ratio(1, 4)
    Ok(0.25)
    >>> ratio(1, 0)
    Err(ZeroDivisionError('division by zero'))
    """
    if not exceptions or not all(inspect.isclass(exc) and issubclass(exc, BaseException) for exc in exceptions):
        raise TypeError('as_result() requires one or more exception types')

    def decorator(f: Callable[P, T]) -> Callable[P, Result[T, TE]]:
        @functools.wraps(f)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, TE]:
            try:
                return Ok(f(*args, **kwargs))
            except exceptions as exc:
                return Err(exc)

        return wrapper

    return decorator


def is_ok(result: Result[T, E]) -> TypeIs[Ok[T]]:
    """A type guard to check if a result is an Ok"""
    return result.is_ok()


def is_err(result: Result[T, E]) -> TypeIs[Err[E]]:
    """A type guard to check if a result is an Err"""
    return result.is_err()
