from datetime import UTC, datetime

from triage_engine.config import settings
from triage_engine.features.repair_triage.domain.models import (
    UNKNOWN_PRODUCT_ID,
    InventoryReservation,
    ProductStock,
    RepairJob,
)
from triage_engine.features.repair_triage.pipeline.reservations.service import (
    InventoryReservationPlanner,
)


def _job(job_id: str, issue: str, model: str = "iPhone 13") -> RepairJob:
    return RepairJob(
        id=job_id,
        created_at=datetime(2025, 3, 1, tzinfo=UTC),
        device_model=model,
        issue_description=issue,
    )


def test_zero_stock_candidate_raises_critical_alert(now):
    planner = InventoryReservationPlanner()
    catalog = [
        ProductStock(
            id="scr-1", name="Pantalla", stock=0, component_type="screen", supplier_name="Norte"
        )
    ]

    plan = planner.suggest_reservations([_job("rep-1", "pantalla rota")], catalog, now=now)

    assert plan.reservations == []
    assert len(plan.alerts) == 1
    alert = plan.alerts[0]
    assert alert.severity == "critical"
    assert alert.product_id == "scr-1"
    assert alert.supplier_suggestion.name == "Norte"
    assert alert.supplier_suggestion.lead_time_days == 7


def test_missing_category_raises_warning_with_unknown_product(now):
    planner = InventoryReservationPlanner()
    catalog = [ProductStock(id="bat-1", stock=5, component_type="battery")]

    plan = planner.suggest_reservations([_job("rep-9", "pantalla rota")], catalog, now=now)

    assert plan.reservations == []
    assert len(plan.alerts) == 1
    alert = plan.alerts[0]
    assert alert.severity == "warning"
    assert alert.product_id == UNKNOWN_PRODUCT_ID
    assert "rep-9" in alert.message
    assert alert.supplier_suggestion.name == settings.GENERIC_SUPPLIER_NAME
    assert alert.supplier_suggestion.lead_time_days == 3


def test_picks_highest_stock_then_lowest_price(now):
    planner = InventoryReservationPlanner()
    catalog = [
        ProductStock(id="scr-a", stock=3, component_type="screen", price=50.0),
        ProductStock(id="scr-b", stock=5, component_type="screen", price=90.0),
        ProductStock(id="scr-c", stock=5, component_type="screen", price=70.0),
    ]

    plan = planner.suggest_reservations([_job("rep-1", "pantalla rota")], catalog, now=now)

    assert plan.alerts == []
    reservation = plan.reservations[0]
    assert reservation.product_id == "scr-c"
    assert reservation.repair_job_id == "rep-1"
    assert reservation.quantity == 1
    assert reservation.status == "reserved"
    assert reservation.reserved_at == now


def test_no_cross_job_stock_decrement(now):
    planner = InventoryReservationPlanner()
    catalog = [ProductStock(id="scr-1", stock=1, component_type="screen")]
    jobs = [_job("rep-1", "pantalla rota"), _job("rep-2", "pantalla astillada")]

    plan = planner.suggest_reservations(jobs, catalog, now=now)

    assert [r.product_id for r in plan.reservations] == ["scr-1", "scr-1"]
    assert catalog[0].stock == 1


def test_plan_is_repeatable_for_same_inputs(catalog, now):
    planner = InventoryReservationPlanner()
    jobs = [_job("rep-1", "pantalla rota"), _job("rep-2", "batería"), _job("rep-3", "no enciende")]

    first = planner.suggest_reservations(jobs, catalog, now=now)
    second = planner.suggest_reservations(jobs, catalog, now=now)

    assert first == second


def test_job_without_category_uses_whole_catalog(catalog, now):
    planner = InventoryReservationPlanner()

    plan = planner.suggest_reservations([_job("rep-1", "no enciende")], catalog, now=now)

    assert plan.reservations[0].product_id == "scr-ip13"


def test_reorder_alerts_threshold_boundaries(now):
    planner = InventoryReservationPlanner()
    catalog = [
        ProductStock(id="at-threshold", stock=3),
        ProductStock(id="empty", stock=0),
        ProductStock(id="healthy", stock=4),
    ]

    alerts = planner.generate_reorder_alerts(catalog, threshold=3, now=now)

    severities = {alert.product_id: alert.severity for alert in alerts}
    assert severities == {"at-threshold": "warning", "empty": "critical"}


def test_reorder_threshold_defaults_to_settings(monkeypatch, now):
    planner = InventoryReservationPlanner()
    monkeypatch.setattr(settings, "REORDER_THRESHOLD", 1)
    catalog = [ProductStock(id="two", stock=2), ProductStock(id="one", stock=1)]

    alerts = planner.generate_reorder_alerts(catalog, now=now)

    assert [alert.product_id for alert in alerts] == ["one"]


def test_cost_report_groups_by_model_and_failure(catalog, now):
    planner = InventoryReservationPlanner()
    jobs = [
        _job("rep-1", "pantalla rota", model="iPhone 13"),
        _job("rep-2", "puerto flojo", model="iPhone 13"),
        _job("rep-3", "no enciende", model="Galaxy S21"),
    ]
    reservations = [
        InventoryReservation(id="r1", repair_job_id="rep-1", product_id="scr-ip13", reserved_at=now),
        InventoryReservation(id="r2", repair_job_id="rep-2", product_id="prt-usb-c", reserved_at=now),
        InventoryReservation(id="r3", repair_job_id="rep-3", product_id="prt-usb-c", reserved_at=now),
        InventoryReservation(id="r4", repair_job_id="gone", product_id="scr-ip13", reserved_at=now),
        InventoryReservation(id="r5", repair_job_id="rep-1", product_id="gone", reserved_at=now),
    ]

    report = planner.cost_report(reservations, catalog, jobs)

    assert report.by_model == {"iPhone 13": 68.5, "Galaxy S21": 8.5}
    assert report.by_failure == {"screen": 60.0, "port": 8.5, "otros": 8.5}
