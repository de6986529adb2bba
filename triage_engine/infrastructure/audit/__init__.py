"""
Audit trail infrastructure for priority scoring decisions.

This module keeps the per-job history of scores shown to technicians so
the ranked views and the recorded scores never diverge.
"""

from triage_engine.infrastructure.audit.priority_audit_log import (
    PriorityAuditLog,
    PriorityLogEntry,
    priority_audit_log,
)

__all__ = ["PriorityAuditLog", "PriorityLogEntry", "priority_audit_log"]
