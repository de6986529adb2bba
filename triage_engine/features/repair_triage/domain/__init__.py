"""
Domain subpackage for the repair triage feature.
"""

from .config_document import PriorityConfigError, load_priority_config
from .models import (
    UNKNOWN_PRODUCT_ID,
    AvailabilityResult,
    ComponentType,
    CostReport,
    DeviceModelStatistics,
    DurationPrediction,
    InventoryAlert,
    InventoryReservation,
    PriorityConfig,
    PriorityRule,
    PriorityWeights,
    ProductStock,
    RankedJob,
    RepairJob,
    ReservationPlan,
    RuleCondition,
    RuleEffect,
    SupplierSuggestion,
    SymptomCorrelation,
    TrainingResult,
)
from .records import product_from_row, repair_job_from_row

__all__ = [
    "UNKNOWN_PRODUCT_ID",
    "AvailabilityResult",
    "ComponentType",
    "CostReport",
    "DeviceModelStatistics",
    "DurationPrediction",
    "InventoryAlert",
    "InventoryReservation",
    "PriorityConfig",
    "PriorityConfigError",
    "PriorityRule",
    "PriorityWeights",
    "ProductStock",
    "RankedJob",
    "RepairJob",
    "ReservationPlan",
    "RuleCondition",
    "RuleEffect",
    "SupplierSuggestion",
    "SymptomCorrelation",
    "TrainingResult",
    "load_priority_config",
    "product_from_row",
    "repair_job_from_row",
]
