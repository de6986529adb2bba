"""
Component matching service - maps issue text to spare-part categories.
"""

from __future__ import annotations

from collections.abc import Iterable

from triage_engine.features.repair_triage.domain.models import (
    AvailabilityResult,
    ComponentType,
    ProductStock,
    RepairJob,
)
from triage_engine.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

# Checked in this order; the first family with a hit wins.
COMPONENT_KEYWORDS: dict[ComponentType, tuple[str, ...]] = {
    ComponentType.SCREEN: ("pantalla", "screen", "display"),
    ComponentType.BATTERY: ("batería", "bateria", "battery"),
    ComponentType.PORT: ("puerto", "conector de carga", "charging port"),
}


def text_mentions(text: str | None, component: ComponentType) -> bool:
    """Plain substring check; words that merely contain a keyword also match."""
    lowered = (text or "").lower()
    return any(keyword in lowered for keyword in COMPONENT_KEYWORDS[component])


class ComponentMatcher:
    def infer_component_type(self, issue_text: str | None) -> ComponentType | None:
        for component in COMPONENT_KEYWORDS:
            if text_mentions(issue_text, component):
                return component
        return None

    def find_product(
        self, category: ComponentType, catalog: Iterable[ProductStock]
    ) -> ProductStock | None:
        return next((product for product in catalog if product.matches(category)), None)

    def check_availability(
        self, job: RepairJob, catalog: Iterable[ProductStock]
    ) -> AvailabilityResult:
        category = self.infer_component_type(job.issue_description)
        if category is None:
            # No specific part needed, the job can proceed.
            return AvailabilityResult(available=True)

        product = self.find_product(category, catalog)
        if product is None:
            logger.debug(
                "No catalog product for inferred component",
                job_id=job.id,
                component=category.value,
            )
            return AvailabilityResult(available=False)

        return AvailabilityResult(available=product.stock > 0, product=product)


component_matcher = ComponentMatcher()
