"""Per-call parse state and low-level parse results.

A ``ParseContext`` lives for exactly one ``safe_parse``/``safe_parse_async``
call. Validators never own it; they receive it through ``ParseInput.parent``
and derive per-level views of it with ``dataclasses.replace``. The views copy
the reference to ``issues``, never the list itself, so every nested validator
appends to the same list.
"""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from .issues import ErrorMap, Issue, PathSegment

T = TypeVar("T")


@dataclass(frozen=True)
class ParseContext:
    """Mutable issue list plus flags fixed at the entry point."""
    issues: list[Issue] = field(default_factory=list)
    async_: bool = False
    parse_to_bson: bool = False
    contextual_error_map: ErrorMap | None = None
    path: tuple[PathSegment, ...] = ()
    parent: "ParseContext | None" = None
    schema_error_map: ErrorMap | None = None
    data: Any = None


@dataclass(frozen=True)
class ParseInput:
    """Value handed to one ``_parse`` step."""
    data: Any
    path: tuple[PathSegment, ...]
    parent: ParseContext


class ParseStatus(str, Enum):
    """Outcome of a low-level parse step."""
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class ParseReturn(Generic[T]):
    """Low-level result of a ``_parse`` step."""
    status: ParseStatus
    value: T | None = None


INVALID: ParseReturn[Any] = ParseReturn(ParseStatus.INVALID)


def valid(value: T) -> ParseReturn[T]:
    return ParseReturn(ParseStatus.VALID, value)


def is_valid(result: ParseReturn[Any]) -> bool:
    return result.status == ParseStatus.VALID


def is_async(result: Any) -> bool:
    """True when a parse step handed back an awaitable instead of a result."""
    return inspect.isawaitable(result)


def get_unknown_type(data: Any) -> str:
    """Display name of a value's type for ``received`` descriptors."""
    if data is None:
        return "None"
    return type(data).__name__
