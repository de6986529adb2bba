"""
Triage service - runs a ranking pass over a job snapshot and records
the resulting scores in the audit trail.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from datetime import UTC, datetime

from triage_engine.features.repair_triage.domain.models import (
    PriorityConfig,
    ProductStock,
    RankedJob,
    RepairJob,
)
from triage_engine.features.repair_triage.pipeline.scoring.rules import find_catch_all_rules
from triage_engine.features.repair_triage.pipeline.scoring.service import (
    PriorityScorer,
    default_priority_config,
    priority_scorer,
)
from triage_engine.infrastructure.audit import PriorityAuditLog, priority_audit_log
from triage_engine.infrastructure.observability.logging import get_logger, log_triage_pass

logger = get_logger(__name__)


class TriageService:
    BASE_NOTE = "priority ranking"
    INVENTORY_NOTE = "inventory-aware ranking"

    def __init__(
        self,
        scorer: PriorityScorer | None = None,
        audit_log: PriorityAuditLog | None = None,
    ):
        self.scorer = scorer or priority_scorer
        self.audit_log = audit_log if audit_log is not None else priority_audit_log

    def rank(
        self,
        jobs: Sequence[RepairJob],
        config: PriorityConfig | None = None,
        catalog: Sequence[ProductStock] | None = None,
        now: datetime | None = None,
    ) -> list[RankedJob]:
        """
        Score, order and audit a batch of repair jobs.

        Args:
            jobs: Job snapshot to rank
            config: Weights and rules (defaults to default_priority_config())
            catalog: Parts catalog snapshot; enables inventory-aware scoring
            now: Reference time for wait-time and audit timestamps

        Returns:
            Ranked jobs, highest score first
        """
        started = time.perf_counter()
        config = config or default_priority_config()
        current = now or datetime.now(UTC)
        catch_all = find_catch_all_rules(config)
        inventory_aware = catalog is not None
        parts = tuple(catalog) if catalog is not None else ()

        ranked = [self._rank_job(job, config, parts, inventory_aware, current) for job in jobs]
        ranked.sort(key=lambda item: (-item.score, item.job.created_at_utc, item.job.id))

        note = self.INVENTORY_NOTE if inventory_aware else self.BASE_NOTE
        for position, item in enumerate(ranked, start=1):
            self.audit_log.record_score(
                item.job.id,
                item.score,
                note=f"{note} #{position}",
                timestamp=current,
            )

        log_triage_pass(
            job_count=len(ranked),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
            inventory_aware=inventory_aware,
            catch_all_rules=len(catch_all),
            top_job_id=ranked[0].job.id if ranked else None,
        )
        return ranked

    def _rank_job(
        self,
        job: RepairJob,
        config: PriorityConfig,
        catalog: Sequence[ProductStock],
        inventory_aware: bool,
        now: datetime,
    ) -> RankedJob:
        if not inventory_aware:
            return RankedJob(job=job, score=self.scorer.calculate_score(job, config, now))

        ranked = self.scorer.rank_with_inventory(job, config, catalog, now)
        availability = ranked.availability
        if not availability.available:
            logger.debug(
                "Required part unavailable",
                job_id=job.id,
                product_id=availability.product.id if availability.product else None,
            )
        return ranked


triage_service = TriageService()
