"""
Duration prediction package.

Estimates repair hours per job and summarizes service times per device
model.
"""

from .service import DurationPredictor, duration_predictor

__all__ = ["DurationPredictor", "duration_predictor"]
