"""
Audit Logger

DESIGN DECISION: Every significant action at the edges of the system is
logged: accepted and rejected input, generated reports, budget alerts and
storage failures.

The audit logger:
- Writes structured logs through structlog
- Optionally forwards events to a sink (e.g. a persistence layer)
- Gracefully handles sink failures (never breaks the caller)
"""

import logging
from collections.abc import Callable
from typing import Optional

import structlog

from networthview.config import AppSettings, get_settings
from networthview.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


_configured = False


def configure_logging(settings: Optional[AppSettings] = None, force: bool = False) -> None:
    """
    Configure structlog on top of the standard logging module.

    Safe to call repeatedly; only the first call has an effect unless
    `force` is set.
    """
    global _configured
    if _configured and not force:
        return

    settings = settings or get_settings()
    level = "DEBUG" if settings.debug_mode else settings.log_level
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("networthview").setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = "networthview"):
    """Get a structlog logger, configuring logging on first use."""
    configure_logging()
    return structlog.get_logger(name)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional sink callable (for persistence and user visibility)
    """

    def __init__(
        self,
        sink: Optional[Callable[[AuditEvent], None]] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Callable receiving every event.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = get_logger("networthview.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Forwards to the sink if configured.

        Returns True if the sink accepted the event (or no sink is configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                self._sink(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_accepted(
        self,
        entity_type: str,
        entity_id: str,
        user_id: Optional[str],
        details: Optional[dict] = None,
    ) -> None:
        """Log an accepted transaction, category or budget."""
        self.log(AuditEventBuilder.record_accepted(entity_type, entity_id, user_id, details))

    def log_validation_failed(
        self,
        entity_type: str,
        user_id: Optional[str],
        issues: list[dict],
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(entity_type, user_id, issues))

    def log_report_generated(
        self,
        report: str,
        user_id: str,
        details: Optional[dict] = None,
    ) -> None:
        self.log(AuditEventBuilder.report_generated(report, user_id, details))

    def log_budget_over_limit(
        self,
        user_id: str,
        budget_id: str,
        spent: str,
        limit: str,
    ) -> None:
        self.log(AuditEventBuilder.budget_over_limit(user_id, budget_id, spent, limit))

    def log_budget_at_risk(
        self,
        user_id: str,
        budget_id: str,
        percentage: float,
    ) -> None:
        self.log(AuditEventBuilder.budget_at_risk(user_id, budget_id, percentage))

    def log_storage_error(
        self,
        operation: str,
        error_message: str,
        user_id: Optional[str] = None,
    ) -> None:
        """Log a failed storage operation."""
        self.log(AuditEventBuilder.storage_error(operation, error_message, user_id))
