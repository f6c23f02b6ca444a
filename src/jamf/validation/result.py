"""Resolution of low-level parse results into safe-parse results."""

import logging
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Generic, Literal, TypeVar

from .context import ParseContext, ParseReturn, is_valid
from .errors import JamfError, JamfInternalError
from .issues import Issue

logger = logging.getLogger(__name__)

Output = TypeVar("Output")


@dataclass
class SafeParseSuccess(Generic[Output]):
    """Successful parse carrying the validated value."""
    data: Output
    success: Literal[True] = field(default=True, init=False)


@dataclass
class SafeParseFailure:
    """Failed parse carrying every issue recorded during the call.

    ``error`` is built from ``issues`` on first access and cached for the
    lifetime of this result.
    """
    issues: list[Issue]
    success: Literal[False] = field(default=False, init=False)

    @cached_property
    def error(self) -> JamfError:
        return JamfError(self.issues)


SafeParseResult = SafeParseSuccess[Output] | SafeParseFailure


def handle_result(ctx: ParseContext, result: ParseReturn[Any]) -> SafeParseSuccess[Any] | SafeParseFailure:
    """Turn a low-level result into a safe-parse result.

    Args:
        ctx: Top-level context of the call
        result: Resolved result of the validator's parse step

    Returns:
        SafeParseSuccess or SafeParseFailure

    Raises:
        JamfInternalError: If the result is invalid but no issue was recorded
    """
    if is_valid(result):
        return SafeParseSuccess(result.value)

    if not ctx.issues:
        raise JamfInternalError("Validation failed but no issues detected.")

    logger.debug(f"Validation failed with {len(ctx.issues)} issue(s)")
    return SafeParseFailure(ctx.issues)
