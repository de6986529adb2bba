"""
Caller-side services for the repair triage feature.
"""

from .triage_service import TriageService, triage_service

__all__ = ["TriageService", "triage_service"]
