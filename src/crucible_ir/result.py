# Copyright (c) Syntropy Systems
"""Result values returned by validation and decoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from typing_extensions import TypeAlias

from crucible_ir.errors import UnwrapError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    def is_ok(self) -> bool:
        """Return True."""
        return True

    def unwrap(self) -> T:
        """Return the carried value."""
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying an error (a list of messages or a DecodeError)."""

    error: E

    def is_ok(self) -> bool:
        """Return False."""
        return False

    def unwrap(self) -> NoReturn:
        """Raise UnwrapError, since there is no value."""
        msg = f"called unwrap() on an error result: {self.error!r}"
        raise UnwrapError(msg)


Result: TypeAlias = Union[Ok[T], Err[E]]
