"""
Duration prediction service - estimates repair effort and derives
per-model service-time statistics from a batch of jobs.
"""

from __future__ import annotations

import statistics
from collections.abc import Sequence

from triage_engine.features.repair_triage.domain.models import (
    ComponentType,
    DeviceModelStatistics,
    DurationPrediction,
    RepairJob,
    SymptomCorrelation,
    TrainingResult,
)
from triage_engine.features.repair_triage.pipeline.components.service import text_mentions
from triage_engine.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class DurationPredictor:
    BASE_HOURS = 4.0
    COMPLEXITY_HOURS = 0.5
    # Placeholder: not derived from data.
    CONFIDENCE = 0.6
    Z_95 = 1.96
    COMPONENT_HOURS: dict[ComponentType, tuple[float, str]] = {
        ComponentType.SCREEN: (2.0, "Screen damage"),
        ComponentType.BATTERY: (1.5, "Battery issue"),
        ComponentType.PORT: (2.5, "Charging port issue"),
    }
    SYMPTOMS = ("pantalla", "batería", "puerto", "no enciende", "agua")
    TOP_SYMPTOMS = 5
    UNKNOWN_MODEL = "unknown"

    def predict(self, job: RepairJob) -> DurationPrediction:
        hours = self.BASE_HOURS
        rationale = [f"Base diagnostic and handling time ({self.BASE_HOURS:g}h)"]

        for component, (extra, label) in self.COMPONENT_HOURS.items():
            if text_mentions(job.issue_description, component):
                hours += extra
                rationale.append(f"{label} detected (+{extra:g}h)")

        complexity_hours = self.COMPLEXITY_HOURS * job.effective_complexity
        hours += complexity_hours
        if job.technical_complexity is not None:
            rationale.append(
                f"Technical complexity {job.technical_complexity} (+{complexity_hours:g}h)"
            )

        return DurationPrediction(
            hours=round(hours, 1),
            confidence=self.CONFIDENCE,
            rationale=rationale,
        )

    def estimate_duration_statistics(
        self, jobs: Sequence[RepairJob]
    ) -> list[DeviceModelStatistics]:
        samples: dict[str, list[float]] = {}
        for job in jobs:
            model = job.device_model or self.UNKNOWN_MODEL
            hours = job.estimated_duration_hours
            if hours is None:
                hours = self.predict(job).hours
            samples.setdefault(model, []).append(hours)

        results = []
        for model, values in samples.items():
            mean = statistics.fmean(values)
            std_dev = statistics.pstdev(values) if len(values) > 1 else 0.0
            margin = self.Z_95 * std_dev
            results.append(
                DeviceModelStatistics(
                    device_model=model,
                    mean_hours=round(mean, 2),
                    std_dev_hours=round(std_dev, 2),
                    confidence_interval=(
                        round(max(0.0, mean - margin), 2),
                        round(mean + margin, 2),
                    ),
                )
            )
        return results

    def correlate_symptoms(self, jobs: Sequence[RepairJob]) -> list[SymptomCorrelation]:
        total = len(jobs)
        issues = [(job.issue_description or "").lower() for job in jobs]
        correlations = [
            SymptomCorrelation(
                symptom=symptom,
                correlation=(
                    round(sum(1 for issue in issues if symptom in issue) / total, 2)
                    if total
                    else 0.0
                ),
            )
            for symptom in self.SYMPTOMS
        ]
        correlations.sort(key=lambda item: item.correlation, reverse=True)
        return correlations[: self.TOP_SYMPTOMS]

    def suggest_diagnosis(
        self, issue_text: str | None, jobs: Sequence[RepairJob]
    ) -> list[SymptomCorrelation]:
        """
        Best-effort symptom suggestions for a new issue.

        Symptoms literally present in the issue text win. With no match the
        population correlations come back halved as a weak prior.
        """
        correlations = self.correlate_symptoms(jobs)
        lowered = (issue_text or "").lower()
        matched = [item for item in correlations if item.symptom in lowered]
        if matched:
            return matched
        return [
            SymptomCorrelation(symptom=item.symptom, correlation=round(item.correlation / 2, 2))
            for item in correlations
        ]

    def train_predictive_model(self, jobs: Sequence[RepairJob]) -> TrainingResult:
        """Placeholder hook. No model is trained and predictions do not change."""
        logger.info("Predictive model training is a placeholder", samples=len(jobs))
        return TrainingResult(status="ok", samples=len(jobs))


duration_predictor = DurationPredictor()
