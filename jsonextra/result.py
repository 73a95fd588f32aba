"""Ok/Err tagged union used for decode outcomes and for encoded domain results."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never


class UnwrapError(ValueError):
    """Raised when unwrapping an Err."""


@dataclass(frozen=True)
class Ok[A]:
    """Successful outcome carrying a value."""

    value: A

    def is_ok(self) -> bool:
        return True

    def map[B](self, fn: Callable[[A], B]) -> Ok[B]:
        return Ok(fn(self.value))

    def map_error(self, fn: Callable[[Any], Any]) -> Ok[A]:
        return self

    def unwrap(self) -> A:
        return self.value

    def unwrap_or(self, default: object) -> A:
        return self.value


@dataclass(frozen=True)
class Err[E]:
    """Failed outcome carrying an error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def map_error[F](self, fn: Callable[[E], F]) -> Err[F]:
        return Err(fn(self.error))

    def unwrap(self) -> Never:
        msg = f"called unwrap on Err: {self.error}"
        raise UnwrapError(msg)

    def unwrap_or[A](self, default: A) -> A:
        return default


type Result[E, A] = Ok[A] | Err[E]
