"""Delegation of part of a validation to a nested validator."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

from .context import ParseInput, ParseReturn, is_async
from .issues import PathSegment

if TYPE_CHECKING:
    from ..types import JamfType

logger = logging.getLogger(__name__)

T = TypeVar("T")

MaybeAsyncReturn = ParseReturn[T] | Awaitable[ParseReturn[T]]
NestedParsingHandler = Callable[[ParseReturn[Any]], MaybeAsyncReturn[T]]


def handle_nested_parsing(
    schema: "JamfType[Any]",
    path: PathSegment | Sequence[PathSegment],
    input: ParseInput,
    data: Any,
    logic: NestedParsingHandler[T],
) -> MaybeAsyncReturn[T]:
    """Run ``schema`` on ``data`` below ``input`` and feed its result to ``logic``.

    The nested input shares ``input.parent``, so issues raised by ``schema``
    land in the caller's issue list. In asynchronous mode the returned value
    is a coroutine that the entry point awaits.

    Args:
        schema: Validator to delegate to
        path: Segment (or segments) appended to the caller's path
        input: Caller's parse input
        data: Value handed to ``schema``
        logic: Continuation mapping the nested result to the caller's result

    Returns:
        The caller's result, or an awaitable of it in asynchronous mode
    """
    if isinstance(path, (str, int)):
        segments: tuple[PathSegment, ...] = (path,)
    else:
        segments = tuple(path)

    nested_input = ParseInput(data=data, path=input.path + segments, parent=input.parent)
    logger.debug(f"Delegating {list(nested_input.path)} to {type(schema).__name__}")

    if input.parent.async_:
        return _chain_async(schema, nested_input, logic)
    return logic(schema._parse_sync(nested_input))


async def _chain_async(
    schema: "JamfType[Any]",
    nested_input: ParseInput,
    logic: NestedParsingHandler[T],
) -> ParseReturn[T]:
    result = logic(await schema._parse_async(nested_input))
    if is_async(result):
        result = await result
    return result
