from datetime import UTC, datetime

import pytest

from triage_engine.features.repair_triage.domain.models import ProductStock
from triage_engine.infrastructure.audit import PriorityAuditLog

FIXED_NOW = datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def audit_log():
    return PriorityAuditLog()


@pytest.fixture
def catalog():
    return [
        ProductStock(
            id="scr-ip13",
            name="Pantalla iPhone 13",
            stock=4,
            component_type="screen",
            supplier_name="Repuestos Norte",
            price=60.0,
        ),
        ProductStock(
            id="bat-ip11",
            name="Batería iPhone 11",
            stock=0,
            component_type="battery",
            supplier_name="Baterías SA",
            price=15.0,
        ),
        ProductStock(
            id="prt-usb-c",
            name="Puerto USB-C",
            stock=2,
            component_type="port",
            price=8.5,
        ),
    ]
