"""
Operator rule matching and application.

A rule condition compiles into a list of predicates; a job matches when
every predicate holds. Unset condition fields contribute no predicate, so
an empty condition matches everything.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from triage_engine.features.repair_triage.domain.models import (
    PriorityConfig,
    PriorityRule,
    RepairJob,
    RuleCondition,
)
from triage_engine.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

JobPredicate = Callable[[RepairJob], bool]


def stage_is(stage: str) -> JobPredicate:
    return lambda job: job.stage == stage


def device_model_contains(fragment: str) -> JobPredicate:
    needle = fragment.lower()
    return lambda job: needle in (job.device_model or "").lower()


def issue_contains(fragment: str) -> JobPredicate:
    needle = fragment.lower()
    return lambda job: needle in (job.issue_description or "").lower()


def urgency_at_least(threshold: int) -> JobPredicate:
    return lambda job: job.effective_urgency >= threshold


def compile_condition(condition: RuleCondition) -> list[JobPredicate]:
    predicates: list[JobPredicate] = []
    if condition.stage is not None:
        predicates.append(stage_is(condition.stage))
    if condition.device_model_includes is not None:
        predicates.append(device_model_contains(condition.device_model_includes))
    if condition.issue_includes is not None:
        predicates.append(issue_contains(condition.issue_includes))
    if condition.min_urgency is not None:
        predicates.append(urgency_at_least(condition.min_urgency))
    return predicates


def rule_matches(rule: PriorityRule, job: RepairJob) -> bool:
    return all(predicate(job) for predicate in compile_condition(rule.condition))


def apply_rules(job: RepairJob, rules: Iterable[PriorityRule], score: float) -> float:
    """Apply matching rules in order: bonus first, then multiplier, per rule."""
    for rule in rules:
        if not rule_matches(rule, job):
            continue
        if rule.effect.bonus is not None:
            score += rule.effect.bonus
        if rule.effect.multiplier is not None:
            score *= rule.effect.multiplier
        logger.debug("Priority rule applied", rule_id=rule.id, job_id=job.id, score=score)
    return score


def find_catch_all_rules(config: PriorityConfig) -> list[PriorityRule]:
    """Rules without any condition field; they fire for every job."""
    catch_all = [rule for rule in config.rules if rule.condition.is_empty]
    for rule in catch_all:
        logger.warning(
            "Priority rule has no condition and matches every job",
            rule_id=rule.id,
            rule_name=rule.name,
        )
    return catch_all
