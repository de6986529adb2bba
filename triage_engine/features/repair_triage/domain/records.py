"""
Row adapters for the repair and parts data sources.

Rows arrive as loosely-typed mappings: either the ranked-list shape the
Kanban board already uses, or the raw repair shape straight from storage.
Missing fields fall back to the domain defaults instead of failing.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from .models import ProductStock, RepairJob

PRIORITY_TO_URGENCY = {"high": 5, "medium": 3, "low": 1}


def repair_job_from_row(row: Mapping[str, Any]) -> RepairJob:
    technician = _as_mapping(row.get("technician"))
    customer = _as_mapping(row.get("customer"))

    device_model = row.get("deviceModel") or row.get("device_model")
    if not device_model:
        parts = [str(row[key]).strip() for key in ("brand", "model") if row.get(key)]
        device_model = " ".join(parts)

    urgency = _as_int(row.get("urgency"))
    if urgency is None and row.get("priority"):
        urgency = PRIORITY_TO_URGENCY.get(str(row["priority"]).lower())

    historical_value = _as_float(row.get("historicalValue", row.get("historical_value")))
    if historical_value is None:
        historical_value = _as_float(row.get("finalCost"))
    if historical_value is None:
        historical_value = _as_float(row.get("estimatedCost"))

    return RepairJob(
        id=str(row.get("id", "")),
        created_at=_as_datetime(row.get("createdAt") or row.get("created_at")),
        device_model=device_model or "",
        device_type=row.get("deviceType") or row.get("device_type") or "",
        issue_description=(
            row.get("issueDescription") or row.get("issue_description") or row.get("issue") or ""
        ),
        urgency=urgency,
        historical_value=historical_value,
        technical_complexity=_as_int(
            row.get("technicalComplexity", row.get("technical_complexity"))
        ),
        stage=row.get("stage") or row.get("dbStatus"),
        estimated_duration_hours=_as_float(
            row.get("estimatedDurationHours", row.get("estimated_duration_hours"))
        ),
        customer_name=row.get("customerName") or customer.get("name"),
        customer_phone=row.get("customerPhone") or customer.get("phone"),
        customer_email=row.get("customerEmail") or customer.get("email"),
        technician_id=_as_str(technician.get("id")),
        technician_name=technician.get("name"),
    )


def product_from_row(row: Mapping[str, Any]) -> ProductStock:
    supplier = _as_mapping(row.get("supplier"))
    stock = _as_int(row.get("stock_quantity", row.get("stock")))
    price = _as_float(row.get("sale_price"))
    if price is None:
        price = _as_float(row.get("price"))

    return ProductStock(
        id=str(row.get("id", "")),
        name=row.get("name") or "",
        stock=stock if stock is not None else 0,
        component_type=row.get("component_type") or row.get("componentType"),
        supplier_name=row.get("supplier_name") or supplier.get("name"),
        price=price,
    )


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
    # Unknown creation time reads as "just created" so it never inflates wait time.
    return datetime.now(UTC)


def _as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    # Some sources send a bare name instead of a nested object.
    if isinstance(value, str) and value.strip():
        return {"name": value.strip()}
    return {}


def _as_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _as_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_str(value: Any) -> str | None:
    return str(value) if value is not None else None
