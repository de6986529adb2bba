"""
Domain models for the repair triage feature.

These lightweight dataclasses describe the snapshot of repair jobs and
parts stock a ranking pass works on, plus the values the pipeline hands
back. They carry defaults for absent fields but no ranking logic, so the
scorer, predictor and planner can share them freely.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Literal

AlertSeverity = Literal["info", "warning", "critical"]
ReservationStatus = Literal["reserved", "expired", "consumed"]

UNKNOWN_PRODUCT_ID = "unknown"


class ComponentType(StrEnum):
    """Coarse spare-part categories inferred from issue descriptions."""

    SCREEN = "screen"
    BATTERY = "battery"
    PORT = "port"


@dataclass(slots=True)
class RepairJob:
    """One repair order as supplied by the repair data source."""

    id: str
    created_at: datetime
    device_model: str = ""
    device_type: str = ""
    issue_description: str = ""
    urgency: int | None = None
    historical_value: float | None = None
    technical_complexity: int | None = None
    stage: str | None = None
    estimated_duration_hours: float | None = None
    customer_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    technician_id: str | None = None
    technician_name: str | None = None

    @property
    def effective_urgency(self) -> int:
        return self.urgency if self.urgency is not None else 1

    @property
    def effective_complexity(self) -> int:
        return self.technical_complexity if self.technical_complexity is not None else 1

    @property
    def effective_historical_value(self) -> float:
        return self.historical_value if self.historical_value is not None else 0.0

    @property
    def created_at_utc(self) -> datetime:
        if self.created_at.tzinfo is None:
            return self.created_at.replace(tzinfo=UTC)
        return self.created_at


@dataclass(slots=True)
class ProductStock:
    """A catalog entry from the parts/inventory data source."""

    id: str
    name: str = ""
    stock: int = 0
    component_type: str | None = None
    supplier_name: str | None = None
    price: float | None = None

    @property
    def effective_price(self) -> float:
        return self.price if self.price is not None else 0.0

    def matches(self, category: ComponentType) -> bool:
        """Untagged products are treated as fitting any category."""
        if self.component_type is None:
            return True
        return self.component_type.strip().lower() == category.value


@dataclass(slots=True)
class PriorityWeights:
    urgency: float
    wait_time: float
    historical_value: float
    technical_complexity: float


@dataclass(slots=True)
class RuleCondition:
    """Optional, ANDed match criteria. An empty condition matches every job."""

    stage: str | None = None
    device_model_includes: str | None = None
    issue_includes: str | None = None
    min_urgency: int | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.stage is None
            and self.device_model_includes is None
            and self.issue_includes is None
            and self.min_urgency is None
        )


@dataclass(slots=True)
class RuleEffect:
    bonus: float | None = None
    multiplier: float | None = None


@dataclass(slots=True)
class PriorityRule:
    id: str
    name: str
    condition: RuleCondition = field(default_factory=RuleCondition)
    effect: RuleEffect = field(default_factory=RuleEffect)


@dataclass(slots=True)
class PriorityConfig:
    weights: PriorityWeights
    rules: list[PriorityRule] = field(default_factory=list)


@dataclass(slots=True)
class DurationPrediction:
    hours: float
    confidence: float
    rationale: list[str]


@dataclass(slots=True)
class DeviceModelStatistics:
    device_model: str
    mean_hours: float
    std_dev_hours: float
    confidence_interval: tuple[float, float]


@dataclass(slots=True)
class SymptomCorrelation:
    symptom: str
    correlation: float


@dataclass(slots=True)
class TrainingResult:
    """Outcome of the placeholder training hook. Nothing is learned."""

    status: str
    samples: int


@dataclass(slots=True)
class AvailabilityResult:
    available: bool
    product: ProductStock | None = None


@dataclass(slots=True)
class SupplierSuggestion:
    name: str
    lead_time_days: int


@dataclass(slots=True)
class InventoryReservation:
    id: str
    repair_job_id: str
    product_id: str
    reserved_at: datetime
    quantity: int = 1
    status: ReservationStatus = "reserved"


@dataclass(slots=True)
class InventoryAlert:
    id: str
    product_id: str
    severity: AlertSeverity
    message: str
    created_at: datetime
    supplier_suggestion: SupplierSuggestion | None = None


@dataclass(slots=True)
class ReservationPlan:
    reservations: list[InventoryReservation] = field(default_factory=list)
    alerts: list[InventoryAlert] = field(default_factory=list)


@dataclass(slots=True)
class CostReport:
    by_model: Mapping[str, float]
    by_failure: Mapping[str, float]


@dataclass(slots=True)
class RankedJob:
    job: RepairJob
    score: float
    prediction: DurationPrediction | None = None
    availability: AvailabilityResult | None = None
