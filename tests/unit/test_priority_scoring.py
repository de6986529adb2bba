"""
Priority scoring quality tests.

Checks the weighted sum against hand-computed values and the ordering
guarantees the Kanban board relies on.
"""

from datetime import timedelta

import pytest

from triage_engine.features.repair_triage.domain.models import (
    PriorityWeights,
    ProductStock,
    RepairJob,
)
from triage_engine.features.repair_triage.pipeline.scoring.service import (
    PriorityScorer,
    default_priority_config,
)


def _build_job(now, **overrides):
    job = RepairJob(
        id="rep-1",
        created_at=now,
        device_model="iPhone 13",
        issue_description="",
        urgency=1,
        historical_value=0.0,
        technical_complexity=1,
    )
    for key, value in overrides.items():
        setattr(job, key, value)
    return job


def test_weighted_sum_matches_hand_computed_value(now):
    scorer = PriorityScorer()
    job = _build_job(
        now,
        urgency=3,
        created_at=now - timedelta(hours=24),
        historical_value=5000.0,
        technical_complexity=3,
    )

    score = scorer.calculate_score(job, default_priority_config(), now)

    assert score == pytest.approx(0.38)


def test_minimum_inputs_score_zero(now):
    scorer = PriorityScorer()

    assert scorer.calculate_score(_build_job(now), default_priority_config(), now) == 0.0


def test_urgency_is_monotonic(now):
    scorer = PriorityScorer()
    config = default_priority_config()

    scores = [
        scorer.calculate_score(_build_job(now, urgency=level), config, now) for level in range(1, 6)
    ]

    assert scores == sorted(scores)
    assert len(set(scores)) == 5


def test_out_of_range_inputs_are_clamped(now):
    scorer = PriorityScorer()
    config = default_priority_config()

    capped = scorer.calculate_score(_build_job(now, urgency=10), config, now)
    top = scorer.calculate_score(_build_job(now, urgency=5), config, now)
    floored = scorer.calculate_score(_build_job(now, urgency=-3), config, now)

    assert capped == top
    assert floored == 0.0


def test_wait_time_saturates_after_ten_days(now):
    scorer = PriorityScorer()
    config = default_priority_config()

    ten_days = scorer.calculate_score(
        _build_job(now, created_at=now - timedelta(days=10)), config, now
    )
    thirty_days = scorer.calculate_score(
        _build_job(now, created_at=now - timedelta(days=30)), config, now
    )

    assert ten_days == pytest.approx(0.3)
    assert thirty_days == ten_days


def test_future_created_at_counts_as_no_wait(now):
    scorer = PriorityScorer()

    score = scorer.calculate_score(
        _build_job(now, created_at=now + timedelta(hours=5)), default_priority_config(), now
    )

    assert score == 0.0


def test_naive_created_at_is_treated_as_utc(now):
    scorer = PriorityScorer()
    naive = (now - timedelta(hours=24)).replace(tzinfo=None)

    score = scorer.calculate_score(
        _build_job(now, created_at=naive), default_priority_config(), now
    )

    assert score == pytest.approx(0.03)


def test_missing_fields_use_defaults(now):
    scorer = PriorityScorer()
    job = RepairJob(id="rep-bare", created_at=now)

    assert scorer.calculate_score(job, default_priority_config(), now) == 0.0


def test_custom_weights_are_used_as_given(now):
    scorer = PriorityScorer()
    config = default_priority_config()
    config.weights = PriorityWeights(
        urgency=1.0, wait_time=0.0, historical_value=0.0, technical_complexity=0.0
    )

    assert scorer.calculate_score(_build_job(now, urgency=5), config, now) == 1.0


def test_default_config_is_a_fresh_instance():
    first = default_priority_config()
    first.weights.urgency = 0.9
    first.rules.append(None)

    second = default_priority_config()

    assert second.weights.urgency == 0.4
    assert second.rules == []


def test_sort_by_priority_orders_descending(now):
    scorer = PriorityScorer()
    jobs = [
        _build_job(now, id="low", urgency=1),
        _build_job(now, id="high", urgency=5),
        _build_job(now, id="mid", urgency=3),
    ]

    ordered = scorer.sort_by_priority(jobs, default_priority_config(), now)

    assert [job.id for job in ordered] == ["high", "mid", "low"]
    assert [job.id for job in jobs] == ["low", "high", "mid"]


def test_sort_by_priority_breaks_ties_by_age_then_id(now):
    scorer = PriorityScorer()
    config = default_priority_config()
    config.weights = PriorityWeights(
        urgency=1.0, wait_time=0.0, historical_value=0.0, technical_complexity=0.0
    )
    jobs = [
        _build_job(now, id="b", created_at=now - timedelta(hours=1)),
        _build_job(now, id="newer", created_at=now),
        _build_job(now, id="a", created_at=now - timedelta(hours=1)),
    ]

    ordered = scorer.sort_by_priority(jobs, config, now)

    assert [job.id for job in ordered] == ["a", "b", "newer"]


def test_sort_by_priority_is_repeatable(now):
    scorer = PriorityScorer()
    config = default_priority_config()
    jobs = [_build_job(now, id=f"rep-{index}", urgency=index % 3 + 1) for index in range(8)]

    first = scorer.sort_by_priority(jobs, config, now)
    second = scorer.sort_by_priority(list(reversed(jobs)), config, now)

    assert [job.id for job in first] == [job.id for job in second]


def test_sort_by_priority_empty_input(now):
    assert PriorityScorer().sort_by_priority([], default_priority_config(), now) == []


def test_inventory_score_with_part_in_stock(now, catalog):
    scorer = PriorityScorer()
    job = _build_job(now, issue_description="pantalla rota")

    score = scorer.calculate_score_with_inventory(job, default_priority_config(), catalog, now)

    assert score == pytest.approx(0.0406, abs=1e-4)


def test_inventory_score_penalizes_out_of_stock_part(now):
    scorer = PriorityScorer()
    job = _build_job(now, issue_description="pantalla rota")
    catalog = [ProductStock(id="scr", stock=0, component_type="screen")]

    score = scorer.calculate_score_with_inventory(job, default_priority_config(), catalog, now)

    assert score == pytest.approx(-0.2594, abs=1e-4)


def test_inventory_score_penalizes_missing_part(now):
    scorer = PriorityScorer()
    job = _build_job(now, issue_description="pantalla rota")
    catalog = [ProductStock(id="bat", stock=5, component_type="battery")]

    score = scorer.calculate_score_with_inventory(job, default_priority_config(), catalog, now)

    assert score == pytest.approx(-0.0594, abs=1e-4)


def test_inventory_score_is_rounded_to_four_decimals(now, catalog):
    scorer = PriorityScorer()
    job = _build_job(now, issue_description="pantalla rota", urgency=4)

    score = scorer.calculate_score_with_inventory(job, default_priority_config(), catalog, now)

    assert score == round(score, 4)
