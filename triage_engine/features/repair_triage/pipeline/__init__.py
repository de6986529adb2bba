"""
Pipeline components for repair triage.

Pure, synchronous stages: duration prediction, component matching,
reservation planning and priority scoring.
"""

__all__ = ["components", "duration", "reservations", "scoring"]
