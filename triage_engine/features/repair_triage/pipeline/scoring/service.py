"""
Priority scoring service - ranks repair jobs for technician attention.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from triage_engine.features.repair_triage.domain.models import (
    AvailabilityResult,
    DurationPrediction,
    PriorityConfig,
    PriorityWeights,
    ProductStock,
    RankedJob,
    RepairJob,
)
from triage_engine.features.repair_triage.pipeline.components.service import (
    ComponentMatcher,
    component_matcher,
)
from triage_engine.features.repair_triage.pipeline.duration.service import (
    DurationPredictor,
    duration_predictor,
)

from .rules import apply_rules


def default_priority_config() -> PriorityConfig:
    """Fresh default configuration; callers may mutate it freely."""
    return PriorityConfig(
        weights=PriorityWeights(
            urgency=0.4,
            wait_time=0.3,
            historical_value=0.2,
            technical_complexity=0.1,
        ),
        rules=[],
    )


def _normalize(value: float, low: float, high: float) -> float:
    return min(max((value - low) / (high - low), 0.0), 1.0)


def _utc(moment: datetime | None) -> datetime:
    if moment is None:
        return datetime.now(UTC)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


class PriorityScorer:
    URGENCY_RANGE = (1, 5)
    WAIT_HOURS_RANGE = (0, 240)
    HISTORICAL_VALUE_RANGE = (0, 10_000)
    COMPLEXITY_RANGE = (1, 5)
    DURATION_NUDGE = 0.15
    DURATION_SATURATION_HOURS = 24
    MISSING_PART_PENALTY = 0.1
    OUT_OF_STOCK_PENALTY = 0.3

    def __init__(
        self,
        predictor: DurationPredictor | None = None,
        matcher: ComponentMatcher | None = None,
    ):
        self.predictor = predictor or duration_predictor
        self.matcher = matcher or component_matcher

    def calculate_score(
        self, job: RepairJob, config: PriorityConfig, now: datetime | None = None
    ) -> float:
        components = self.component_scores(job, now)
        weights = config.weights
        score = (
            weights.urgency * components["urgency"]
            + weights.wait_time * components["wait_time"]
            + weights.historical_value * components["historical_value"]
            + weights.technical_complexity * components["technical_complexity"]
        )
        return apply_rules(job, config.rules, score)

    def component_scores(self, job: RepairJob, now: datetime | None = None) -> dict[str, float]:
        """Normalized [0, 1] inputs to the weighted sum."""
        current = _utc(now)
        wait_hours = max((current - job.created_at_utc).total_seconds() / 3600, 0.0)
        return {
            "urgency": _normalize(job.effective_urgency, *self.URGENCY_RANGE),
            "wait_time": _normalize(wait_hours, *self.WAIT_HOURS_RANGE),
            "historical_value": _normalize(
                job.effective_historical_value, *self.HISTORICAL_VALUE_RANGE
            ),
            "technical_complexity": _normalize(
                job.effective_complexity, *self.COMPLEXITY_RANGE
            ),
        }

    def sort_by_priority(
        self,
        jobs: Sequence[RepairJob],
        config: PriorityConfig,
        now: datetime | None = None,
    ) -> list[RepairJob]:
        """
        Order jobs by descending score.

        Equal scores go to the older job first, then to the lower id, so
        repeated calls on the same snapshot return the same order.
        """
        current = _utc(now)
        scored = [(self.calculate_score(job, config, current), job) for job in jobs]
        scored.sort(key=lambda item: (-item[0], item[1].created_at_utc, item[1].id))
        return [job for _, job in scored]

    def calculate_score_with_inventory(
        self,
        job: RepairJob,
        config: PriorityConfig,
        catalog: Iterable[ProductStock],
        now: datetime | None = None,
    ) -> float:
        return self.rank_with_inventory(job, config, catalog, now).score

    def rank_with_inventory(
        self,
        job: RepairJob,
        config: PriorityConfig,
        catalog: Iterable[ProductStock],
        now: datetime | None = None,
    ) -> RankedJob:
        """
        Inventory-aware score together with the inputs that shaped it.

        The prediction and availability are computed once and reused for
        the score adjustment.
        """
        prediction = self.predictor.predict(job)
        availability = self.matcher.check_availability(job, catalog)
        score = self.calculate_score(job, config, now)
        score += self.duration_nudge(prediction)
        score -= self.availability_penalty(availability)
        return RankedJob(
            job=job,
            score=round(score, 4),
            prediction=prediction,
            availability=availability,
        )

    def duration_nudge(self, prediction: DurationPrediction) -> float:
        return min(prediction.hours / self.DURATION_SATURATION_HOURS, 1.0) * self.DURATION_NUDGE

    def availability_penalty(self, availability: AvailabilityResult) -> float:
        if availability.available:
            return 0.0
        if availability.product is None:
            return self.MISSING_PART_PENALTY
        return self.OUT_OF_STOCK_PENALTY


priority_scorer = PriorityScorer()
