# Copyright (c) Syntropy Systems
"""Exception types for crucible_ir.

Validation never raises; it returns a list of messages. Decoding never
raises either; a :class:`DecodeError` is returned inside an ``Err``.
"""

from __future__ import annotations

from typing import Literal

from typing_extensions import TypeAlias

DecodeReason: TypeAlias = Literal[
    "malformed_json",
    "not_an_object",
    "unsupported_kind",
    "invalid_payload",
    "fallback_too_deep",
]


class CrucibleIRError(Exception):
    """Base class for crucible_ir errors."""


class DecodeError(CrucibleIRError):
    """A payload could not be turned into an entity."""

    def __init__(
        self,
        reason: DecodeReason,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.reason: DecodeReason = reason
        self.message: str = message
        self.cause: BaseException | None = cause

    def __repr__(self) -> str:
        return f"DecodeError(reason={self.reason!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecodeError):
            return NotImplemented
        return (self.reason, self.message) == (other.reason, other.message)

    def __hash__(self) -> int:
        return hash((self.reason, self.message))


class UnwrapError(CrucibleIRError):
    """``unwrap()`` was called on an error result."""


class ConfigError(CrucibleIRError):
    """A configuration file could not be read."""
