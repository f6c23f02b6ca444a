"""Validator base type and entry points.

``JamfType`` is the abstract base every validator derives from. Subclasses
implement ``_parse``; the base class provides the synchronous and asynchronous
entry points which build the per-call ``ParseContext``, run the parse step and
resolve its low-level result.

Basic usage:
    from jamf import objectid

    result = objectid().safe_parse("64b7f1c2a1b2c3d4e5f60718", parse_to_bson=True)
    if result.success:
        print(result.data)
    else:
        print(result.error.flatten())
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Generic, TypeVar

from .config import ParseParams, resolve_params
from .validation.context import ParseContext, ParseInput, ParseReturn, is_async
from .validation.errors import JamfInternalError
from .validation.issues import ErrorMap
from .validation.result import SafeParseFailure, SafeParseSuccess, handle_result

logger = logging.getLogger(__name__)

Output = TypeVar("Output")


class JamfFirstPartyTypeKind(str, Enum):
    """Discriminant of validator definitions."""
    OBJECT_ID = "ObjectID"
    DBREF = "DBRef"
    INSTANCE_OF = "InstanceOf"


@dataclass(frozen=True)
class JamfTypeDef:
    """Definition record of a validator."""
    type_name: JamfFirstPartyTypeKind
    error_map: ErrorMap | None = None
    description: str | None = None


class JamfType(ABC, Generic[Output]):
    """Abstract validator with optional output as native BSON values."""

    def __init__(self, definition: JamfTypeDef):
        self._def = definition

    @property
    def description(self) -> str | None:
        return self._def.description

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._def.type_name.value})"

    @abstractmethod
    def _parse(self, input: ParseInput) -> ParseReturn[Output] | Awaitable[ParseReturn[Output]]:
        """Validate ``input.data``.

        Must append at least one issue before returning an invalid result.
        """

    def _process_input_params(self, input: ParseInput) -> ParseContext:
        """Context view for this level: path, data and schema error map."""
        return replace(
            input.parent,
            path=input.path,
            data=input.data,
            parent=input.parent,
            schema_error_map=self._def.error_map,
        )

    def _parse_sync(self, input: ParseInput) -> ParseReturn[Output]:
        result = self._parse(input)
        if is_async(result):
            close = getattr(result, "close", None)
            if close is not None:
                close()
            raise JamfInternalError("Synchronous parse encountered an awaitable.")
        return result

    async def _parse_async(self, input: ParseInput) -> ParseReturn[Output]:
        result = self._parse(input)
        if is_async(result):
            result = await result
        return result

    def _new_context(self, data: Any, params: ParseParams, async_: bool) -> ParseContext:
        return ParseContext(
            issues=[],
            async_=async_,
            parse_to_bson=params.parse_to_bson,
            contextual_error_map=params.error_map,
            path=tuple(params.path),
            parent=None,
            schema_error_map=self._def.error_map,
            data=data,
        )

    def safe_parse(
        self,
        data: Any,
        params: ParseParams | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> SafeParseSuccess[Output] | SafeParseFailure:
        """Validate ``data`` synchronously.

        A caller-supplied ``async`` flag is ignored; this entry point always
        runs synchronously.

        Args:
            data: Value to validate
            params: Optional ParseParams or mapping of parameters
            **overrides: Individual parameters (``parse_to_bson``, ``path``, ...)

        Returns:
            SafeParseSuccess or SafeParseFailure
        """
        resolved = resolve_params(params, **overrides)
        if resolved.async_:
            logger.debug(f"{self!r}: async flag ignored by synchronous safe_parse")

        ctx = self._new_context(data, resolved, async_=False)
        logger.debug(f"{self!r}: safe_parse parse_to_bson={ctx.parse_to_bson} path={list(ctx.path)}")
        result = self._parse_sync(ParseInput(data=data, path=ctx.path, parent=ctx))
        return handle_result(ctx, result)

    async def safe_parse_async(
        self,
        data: Any,
        params: ParseParams | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> SafeParseSuccess[Output] | SafeParseFailure:
        """Validate ``data`` in asynchronous mode.

        Nested delegations are awaited instead of being run inline.
        """
        resolved = resolve_params(params, **overrides)
        ctx = self._new_context(data, resolved, async_=True)
        logger.debug(f"{self!r}: safe_parse_async parse_to_bson={ctx.parse_to_bson} path={list(ctx.path)}")

        result = self._parse(ParseInput(data=data, path=ctx.path, parent=ctx))
        if is_async(result):
            result = await result
        return handle_result(ctx, result)

    def parse(
        self,
        data: Any,
        params: ParseParams | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> Output:
        """Validate ``data`` and return the value, raising JamfError on failure."""
        result = self.safe_parse(data, params, **overrides)
        if result.success:
            return result.data
        raise result.error

    async def parse_async(
        self,
        data: Any,
        params: ParseParams | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> Output:
        result = await self.safe_parse_async(data, params, **overrides)
        if result.success:
            return result.data
        raise result.error
