"""
PriorityAuditLog - in-memory trail of scoring decisions per repair job.

The scorer never writes here; whoever acts on a score records it, so the
ranking functions stay pure.

Usage:
    from triage_engine.infrastructure.audit import priority_audit_log

    priority_audit_log.record_score(
        job_id="rep-42",
        score=0.7315,
        note="inventory-aware ranking",
    )

    history = priority_audit_log.for_job("rep-42")  # newest first

Design Principles:
- Append-only: entries are never edited or evicted
- Every append also goes to the structured logs
- One lock guards the list so concurrent callers can share an instance
"""

import threading
from dataclasses import dataclass
from datetime import UTC, datetime

from triage_engine.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class PriorityLogEntry:
    """One scoring decision, written by the caller after scoring."""

    repair_job_id: str
    timestamp: datetime
    score: float | None = None
    note: str | None = None

    @property
    def timestamp_utc(self) -> datetime:
        """Naive timestamps are read as UTC."""
        if self.timestamp.tzinfo is None:
            return self.timestamp.replace(tzinfo=UTC)
        return self.timestamp


class PriorityAuditLog:
    """
    Process-lifetime audit trail of priority scores.

    Ordering is resolved at read time, so writers only append.
    """

    def __init__(self) -> None:
        self._entries: list[PriorityLogEntry] = []
        self._lock = threading.Lock()

    def record(self, entry: PriorityLogEntry) -> None:
        logger.info(
            "Priority audit event",
            repair_job_id=entry.repair_job_id,
            score=entry.score,
            note=entry.note,
            timestamp=entry.timestamp.isoformat(),
        )
        with self._lock:
            self._entries.append(entry)

    def record_score(
        self,
        job_id: str,
        score: float | None,
        note: str | None = None,
        timestamp: datetime | None = None,
    ) -> PriorityLogEntry:
        """
        Convenience wrapper that builds and records an entry.

        Args:
            job_id: Repair job the score belongs to
            score: Score handed to the presentation layer
            note: Optional free-text context (e.g. which pass produced it)
            timestamp: When the decision was made (defaults to now, UTC)

        Returns:
            The recorded entry
        """
        entry = PriorityLogEntry(
            repair_job_id=job_id,
            timestamp=timestamp or datetime.now(UTC),
            score=score,
            note=note,
        )
        self.record(entry)
        return entry

    def for_job(self, job_id: str) -> list[PriorityLogEntry]:
        with self._lock:
            entries = [entry for entry in self._entries if entry.repair_job_id == job_id]
        return sorted(entries, key=lambda entry: entry.timestamp_utc, reverse=True)

    def all(self) -> list[PriorityLogEntry]:
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Global singleton instance
priority_audit_log = PriorityAuditLog()
