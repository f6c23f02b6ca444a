"""Issue records, issue codes and error map resolution.

Every expected validation failure is reported by appending an ``Issue`` to the
issue list shared by one top-level parse call. The user-facing message of an
issue is resolved through a chain of error maps:

    explicit message > contextual map > schema map > global map > default map
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .context import ParseContext

logger = logging.getLogger(__name__)

PathSegment = str | int


class IssueCode(str, Enum):
    """Issue codes understood by the error maps."""
    INVALID_TYPE = "invalid_type"
    CUSTOM = "custom"


@dataclass
class Issue:
    """A single validation failure at one position of the input."""
    code: IssueCode
    path: list[PathSegment] = field(default_factory=list)
    message: str = ""
    expected: str | None = None
    received: str | None = None

    def __str__(self) -> str:
        location = ".".join(str(segment) for segment in self.path)
        if location:
            return f"[{self.code.value}] {location}: {self.message}"
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        data: dict[str, Any] = {
            "code": self.code.value,
            "path": list(self.path),
            "message": self.message,
        }
        if self.expected is not None:
            data["expected"] = self.expected
        if self.received is not None:
            data["received"] = self.received
        return data


@dataclass(frozen=True)
class ErrorMapContext:
    """Context handed to an error map alongside the issue."""
    data: Any
    default_error: str


ErrorMap = Callable[[Issue, ErrorMapContext], str | None]


def default_error_map(issue: Issue, ctx: ErrorMapContext) -> str:
    """Built-in English messages, the last resort of every lookup."""
    if issue.code == IssueCode.INVALID_TYPE:
        return f"Expected {issue.expected}, received {issue.received}"
    if issue.code == IssueCode.CUSTOM:
        return "Invalid input"
    return ctx.default_error


_override_map: ErrorMap = default_error_map


def set_error_map(error_map: ErrorMap | None) -> None:
    """Install a process-wide error map (``None`` restores the default)."""
    global _override_map
    _override_map = error_map or default_error_map


def get_error_map() -> ErrorMap:
    """Return the process-wide error map."""
    return _override_map


def make_issue(
    data: Any,
    path: tuple[PathSegment, ...] | list[PathSegment],
    error_maps: list[ErrorMap | None],
    code: IssueCode,
    *,
    message: str | None = None,
    expected: str | None = None,
    received: str | None = None,
    extra_path: tuple[PathSegment, ...] | list[PathSegment] = (),
) -> Issue:
    """Build an issue and resolve its message.

    Args:
        data: Value being validated where the issue was raised
        path: Path of that value
        error_maps: Error maps ordered from highest to lowest precedence
        code: Issue code
        message: Explicit message, bypasses the error maps when given
        expected: Expected type descriptor (invalid_type only)
        received: Received type descriptor (invalid_type only)
        extra_path: Segments appended to ``path``

    Returns:
        Issue with its final message
    """
    issue = Issue(
        code=code,
        path=[*path, *extra_path],
        expected=expected,
        received=received,
    )

    if message is not None:
        issue.message = message
        return issue

    resolved = ""
    for error_map in reversed([m for m in error_maps if m is not None]):
        candidate = error_map(issue, ErrorMapContext(data=data, default_error=resolved))
        if candidate is not None:
            resolved = candidate

    issue.message = resolved
    return issue


def add_issue_to_context(
    ctx: "ParseContext",
    code: IssueCode,
    *,
    message: str | None = None,
    expected: str | None = None,
    received: str | None = None,
    path: tuple[PathSegment, ...] | list[PathSegment] = (),
) -> Issue:
    """Append an issue at the context's current path.

    The issue list is shared by every view of the top-level context, so the
    issue is visible to the entry point without further plumbing.
    """
    override_map = get_error_map()
    issue = make_issue(
        ctx.data,
        ctx.path,
        [
            ctx.contextual_error_map,
            ctx.schema_error_map,
            override_map,
            None if override_map is default_error_map else default_error_map,
        ],
        code,
        message=message,
        expected=expected,
        received=received,
        extra_path=path,
    )
    ctx.issues.append(issue)
    logger.debug(f"Recorded {issue.code.value} issue at {issue.path}: {issue.message}")
    return issue


def issues_to_json(issues: list[Issue]) -> str:
    """Render issues as indented JSON."""
    return json.dumps([issue.to_dict() for issue in issues], indent=2)
