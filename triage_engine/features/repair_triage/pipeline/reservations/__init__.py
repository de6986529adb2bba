"""
Inventory reservation package.

Suggests part reservations for pending repairs, reorder alerts for the
catalog and reservation cost summaries.
"""

from .service import InventoryReservationPlanner, inventory_reservation_planner

__all__ = ["InventoryReservationPlanner", "inventory_reservation_planner"]
