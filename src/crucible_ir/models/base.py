# Copyright (c) Syntropy Systems
"""Shared Pydantic model helpers for crucible_ir entities."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, JsonValue
from typing_extensions import TypeAlias

JSONValue: TypeAlias = JsonValue
JSONObject: TypeAlias = dict[str, JSONValue]


class IRModel(BaseModel):
    """Base model with shared config for IR entities.

    Entities are immutable values. Use ``model_copy(update=...)`` to derive
    a modified copy. Unknown keys are ignored when building from a mapping.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=(),
    )


class Vocabulary(str, Enum):
    """A documented set of symbolic values.

    Members compare equal to their wire string, so ``Role.USER == "user"``.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Return the wire strings of every member, in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def lookup(cls, value: str) -> Vocabulary | None:
        """Return the member for ``value`` or None when it is not known."""
        try:
            return cls(value)
        except ValueError:
            return None
