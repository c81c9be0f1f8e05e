"""
Validation Result Models

Produced by `networthview.validation.InputValidator`.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from networthview.errors import ISSUE_EXCEPTIONS, InputValidationError


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'invalid_amount', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Result of semantic validation of one input.

    Warnings never block; any error-level issue does.
    """

    entity_type: str = Field(
        ...,
        pattern="^(transaction|category|budget)$",
    )
    validated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]

    def raise_for_errors(self) -> None:
        """
        Raise the first error-level issue as a typed exception.

        Raises:
            InputValidationError: (or a subclass matching the issue type)
        """
        for issue in self.issues:
            if issue.severity != "error":
                continue
            exc_class = ISSUE_EXCEPTIONS.get(issue.issue_type, InputValidationError)
            raise exc_class(issue.message, field=issue.field)
