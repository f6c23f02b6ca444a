"""Parsing core shared by every jamf validator.

Provides the per-call parse context, issue reporting with error maps,
low-level parse results, safe-parse result resolution and nested delegation.
"""

from .context import (
    INVALID,
    ParseContext,
    ParseInput,
    ParseReturn,
    ParseStatus,
    get_unknown_type,
    is_async,
    is_valid,
    valid,
)
from .errors import JamfError, JamfInternalError
from .issues import (
    ErrorMap,
    ErrorMapContext,
    Issue,
    IssueCode,
    add_issue_to_context,
    default_error_map,
    get_error_map,
    make_issue,
    set_error_map,
)
from .nested import handle_nested_parsing
from .result import SafeParseFailure, SafeParseResult, SafeParseSuccess, handle_result

__all__ = [
    # Context and low-level results
    "INVALID",
    "ParseContext",
    "ParseInput",
    "ParseReturn",
    "ParseStatus",
    "get_unknown_type",
    "is_async",
    "is_valid",
    "valid",
    # Issues
    "ErrorMap",
    "ErrorMapContext",
    "Issue",
    "IssueCode",
    "add_issue_to_context",
    "default_error_map",
    "get_error_map",
    "make_issue",
    "set_error_map",
    # Errors
    "JamfError",
    "JamfInternalError",
    # Results
    "SafeParseFailure",
    "SafeParseResult",
    "SafeParseSuccess",
    "handle_result",
    # Composition
    "handle_nested_parsing",
]
