"""
Repair triage feature package.

This vertical slice keeps every layer of the triage engine co-located
(domain models, record adapters, pipeline stages and the caller-side
ranking service) so contributors can follow a ranking pass end to end.
"""

# Re-export the primary building blocks for easy access.
from .domain import PriorityConfig, ProductStock, RepairJob, load_priority_config  # noqa: F401
from .pipeline.components import ComponentMatcher, component_matcher  # noqa: F401
from .pipeline.duration import DurationPredictor, duration_predictor  # noqa: F401
from .pipeline.reservations import (  # noqa: F401
    InventoryReservationPlanner,
    inventory_reservation_planner,
)
from .pipeline.scoring import PriorityScorer, default_priority_config, priority_scorer  # noqa: F401
from .services import TriageService, triage_service  # noqa: F401
