"""Exceptions raised by jamf validators."""

from typing import Any

from .issues import Issue, issues_to_json


class JamfError(ValueError):
    """Aggregate of every issue recorded during one failed parse call."""

    def __init__(self, issues: list[Issue]):
        self.issues = issues
        super().__init__(issues_to_json(issues))

    @property
    def errors(self) -> list[Issue]:
        return self.issues

    @property
    def is_empty(self) -> bool:
        return len(self.issues) == 0

    def __str__(self) -> str:
        return issues_to_json(self.issues)

    def flatten(self) -> dict[str, Any]:
        """Group messages by the first path segment.

        Issues raised at the root of the input end up in ``form_errors``.
        """
        form_errors: list[str] = []
        field_errors: dict[str, list[str]] = {}
        for issue in self.issues:
            if issue.path:
                field_errors.setdefault(str(issue.path[0]), []).append(issue.message)
            else:
                form_errors.append(issue.message)
        return {"form_errors": form_errors, "field_errors": field_errors}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {"issues": [issue.to_dict() for issue in self.issues]}


class JamfInternalError(RuntimeError):
    """A validator broke the issue-recording contract.

    Raised for programming errors only, never for invalid input.
    """
