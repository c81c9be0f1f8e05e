"""
Audit Models for NetworthView

Significant actions at the edges of the system (accepting or rejecting
user input, producing reports, raising budget alerts) are recorded as
audit events so a user's history can be reconstructed and debugged.

DESIGN DECISION: The calculation core never emits audit events.
Only the validation and reporting layers do.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Input validation
    TRANSACTION_ACCEPTED = "transaction_accepted"
    CATEGORY_ACCEPTED = "category_accepted"
    BUDGET_ACCEPTED = "budget_accepted"
    VALIDATION_FAILED = "validation_failed"

    # Reporting
    REPORT_GENERATED = "report_generated"
    BUDGET_OVER_LIMIT = "budget_over_limit"
    BUDGET_AT_RISK = "budget_at_risk"

    # Data access
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """A single audit event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # What is this about?
    user_id: Optional[str] = None
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'budget', 'report')"
    )
    entity_id: Optional[str] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "user_id": self.user_id,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_accepted("transaction", tx.id, user_id)
        event = AuditEventBuilder.budget_over_limit(user_id, budget_id, spent, limit)
    """

    @staticmethod
    def record_accepted(
        entity_type: str,
        entity_id: str,
        user_id: Optional[str],
        details: Optional[dict] = None,
    ) -> AuditEvent:
        event_type = {
            "transaction": AuditEventType.TRANSACTION_ACCEPTED,
            "category": AuditEventType.CATEGORY_ACCEPTED,
            "budget": AuditEventType.BUDGET_ACCEPTED,
        }[entity_type]
        return AuditEvent(
            event_type=event_type,
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            description=f"{entity_type.capitalize()} accepted",
            details=details or {},
        )

    @staticmethod
    def validation_failed(
        entity_type: str,
        user_id: Optional[str],
        issues: list[dict],
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            user_id=user_id,
            entity_type=entity_type,
            description=f"{entity_type.capitalize()} input rejected",
            details={"issues": issues},
        )

    @staticmethod
    def report_generated(
        report: str,
        user_id: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REPORT_GENERATED,
            severity=AuditSeverity.DEBUG,
            user_id=user_id,
            entity_type="report",
            entity_id=report,
            description=f"Report generated: {report}",
            details=details or {},
        )

    @staticmethod
    def budget_over_limit(
        user_id: str,
        budget_id: str,
        spent: str,
        limit: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_OVER_LIMIT,
            severity=AuditSeverity.WARNING,
            user_id=user_id,
            entity_type="budget",
            entity_id=budget_id,
            description="Budget exceeded",
            details={"spent": spent, "limit": limit},
        )

    @staticmethod
    def budget_at_risk(
        user_id: str,
        budget_id: str,
        percentage: float,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_AT_RISK,
            user_id=user_id,
            entity_type="budget",
            entity_id=budget_id,
            description=f"Budget at {percentage:.1f}% of limit",
            details={"percentage": percentage},
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        user_id: Optional[str] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            user_id=user_id,
            description=f"Storage operation failed: {operation}",
            error_message=error_message,
        )
