"""
Inventory reservation planning - proposes one part per job and raises
stock alerts for the inventory views.

Planning never decrements stock. Two jobs competing for the last unit of
a part both get a reservation proposal; committing stock belongs to the
inventory system.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from triage_engine.config import settings
from triage_engine.features.repair_triage.domain.models import (
    UNKNOWN_PRODUCT_ID,
    CostReport,
    InventoryAlert,
    InventoryReservation,
    ProductStock,
    RepairJob,
    ReservationPlan,
    SupplierSuggestion,
)
from triage_engine.features.repair_triage.pipeline.components.service import (
    ComponentMatcher,
    component_matcher,
)
from triage_engine.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class InventoryReservationPlanner:
    OTHER_FAILURE = "otros"

    def __init__(self, matcher: ComponentMatcher | None = None):
        self.matcher = matcher or component_matcher

    def suggest_reservations(
        self,
        jobs: Sequence[RepairJob],
        catalog: Iterable[ProductStock],
        now: datetime | None = None,
    ) -> ReservationPlan:
        """
        Propose one reservation per job from a catalog snapshot.

        Args:
            jobs: Jobs to plan for, in the order they should be served
            catalog: Parts catalog (copied on entry)
            now: Timestamp for reservations and alerts (defaults to current UTC time)

        Returns:
            ReservationPlan with reservations for stocked parts and alerts for the rest
        """
        snapshot = tuple(catalog)
        timestamp = now or datetime.now(UTC)
        plan = ReservationPlan()

        for job in jobs:
            candidate = self._best_candidate(job, snapshot)
            if candidate is None:
                plan.alerts.append(
                    InventoryAlert(
                        id=f"alert-{job.id}-{UNKNOWN_PRODUCT_ID}",
                        product_id=UNKNOWN_PRODUCT_ID,
                        severity="warning",
                        message=f"No compatible part found for repair {job.id}",
                        created_at=timestamp,
                        supplier_suggestion=SupplierSuggestion(
                            name=settings.GENERIC_SUPPLIER_NAME,
                            lead_time_days=settings.GENERIC_LEAD_TIME_DAYS,
                        ),
                    )
                )
                continue

            if candidate.stock <= 0:
                plan.alerts.append(
                    InventoryAlert(
                        id=f"alert-{job.id}-{candidate.id}",
                        product_id=candidate.id,
                        severity="critical",
                        message=(
                            f"Part {candidate.name or candidate.id} is out of stock "
                            f"for repair {job.id}"
                        ),
                        created_at=timestamp,
                        supplier_suggestion=SupplierSuggestion(
                            name=candidate.supplier_name or settings.GENERIC_SUPPLIER_NAME,
                            lead_time_days=settings.FALLBACK_LEAD_TIME_DAYS,
                        ),
                    )
                )
                continue

            plan.reservations.append(
                InventoryReservation(
                    id=f"res-{job.id}-{candidate.id}",
                    repair_job_id=job.id,
                    product_id=candidate.id,
                    reserved_at=timestamp,
                )
            )

        logger.info(
            "Reservation plan built",
            job_count=len(jobs),
            reservations=len(plan.reservations),
            alerts=len(plan.alerts),
        )
        return plan

    def generate_reorder_alerts(
        self,
        catalog: Iterable[ProductStock],
        threshold: int | None = None,
        now: datetime | None = None,
    ) -> list[InventoryAlert]:
        limit = settings.REORDER_THRESHOLD if threshold is None else threshold
        timestamp = now or datetime.now(UTC)
        alerts = []
        for product in catalog:
            if product.stock > limit:
                continue
            severity = "critical" if product.stock == 0 else "warning"
            suggestion = None
            if product.supplier_name:
                suggestion = SupplierSuggestion(
                    name=product.supplier_name,
                    lead_time_days=settings.GENERIC_LEAD_TIME_DAYS,
                )
            alerts.append(
                InventoryAlert(
                    id=f"reorder-{product.id}",
                    product_id=product.id,
                    severity=severity,
                    message=(
                        f"Stock for {product.name or product.id} is {product.stock} "
                        f"(threshold {limit})"
                    ),
                    created_at=timestamp,
                    supplier_suggestion=suggestion,
                )
            )
        return alerts

    def cost_report(
        self,
        reservations: Iterable[InventoryReservation],
        catalog: Iterable[ProductStock],
        jobs: Iterable[RepairJob],
    ) -> CostReport:
        products = {product.id: product for product in catalog}
        jobs_by_id = {job.id: job for job in jobs}
        by_model: dict[str, float] = {}
        by_failure: dict[str, float] = {}

        for reservation in reservations:
            product = products.get(reservation.product_id)
            job = jobs_by_id.get(reservation.repair_job_id)
            if product is None or job is None:
                continue
            cost = product.effective_price * reservation.quantity
            category = self.matcher.infer_component_type(job.issue_description)
            failure = category.value if category else self.OTHER_FAILURE
            by_model[job.device_model] = by_model.get(job.device_model, 0.0) + cost
            by_failure[failure] = by_failure.get(failure, 0.0) + cost

        return CostReport(by_model=by_model, by_failure=by_failure)

    def _best_candidate(
        self, job: RepairJob, catalog: Sequence[ProductStock]
    ) -> ProductStock | None:
        category = self.matcher.infer_component_type(job.issue_description)
        if category is None:
            candidates = list(catalog)
        else:
            candidates = [product for product in catalog if product.matches(category)]
        if not candidates:
            return None
        return max(candidates, key=lambda product: (product.stock, -product.effective_price))


inventory_reservation_planner = InventoryReservationPlanner()
