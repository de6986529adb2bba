"""
Priority scoring package.

Provides the weighted, rule-adjusted scorer that orders pending repairs
and the inventory-aware variant used by the ranked views.
"""

from .rules import apply_rules, compile_condition, find_catch_all_rules, rule_matches
from .service import PriorityScorer, default_priority_config, priority_scorer

__all__ = [
    "PriorityScorer",
    "apply_rules",
    "compile_condition",
    "default_priority_config",
    "find_catch_all_rules",
    "priority_scorer",
    "rule_matches",
]
