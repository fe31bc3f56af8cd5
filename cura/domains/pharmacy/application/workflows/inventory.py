"""
Inventory Workflow

Medicine list with search, stock and expiry filters, plus add, edit,
refill and delete. Every successful mutation re-fetches the list.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any

from cura.clients.hospital_api_client import HospitalAPIError
from cura.config.settings import get_settings
from cura.domains.pharmacy.application.ports import IPharmacyAPIPort
from cura.domains.pharmacy.domain.entities import Medicine, parse_backend_date
from cura.domains.pharmacy.domain.services import InventoryCounters, InventoryFilterService
from cura.domains.pharmacy.domain.value_objects import ExpiryStatus, StockStatus
from cura.domains.shared.application.mutation_coordinator import MutationCoordinator, MutationOperation
from cura.domains.shared.domain.errors import InvalidMutationError
from cura.domains.shared.domain.services import FILTER_ALL, PaginationState

logger = logging.getLogger(__name__)

STOCK_FILTER = "stock"
EXPIRY_FILTER = "expiry"


def _to_number(value: Any) -> float | None:
    """Finite float from a number or numeric string, else None."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)) and not (isinstance(value, str) and value.strip()):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _to_date(value: str | date | None) -> date | None:
    if not value:
        return None
    try:
        return parse_backend_date(value)
    except ValueError:
        return None


class InventoryWorkflow:
    """
    State and actions of the Inventory screen.

    Filters: free-text search on the name, stock status
    (all/in_stock/low_stock) and expiry (all/expired/expiring_soon/valid).
    Rows are sorted by name.
    """

    def __init__(self, api: IPharmacyAPIPort, today: date | None = None):
        self._api = api
        settings = get_settings()
        self.filters = InventoryFilterService(warning_days=settings.EXPIRY_WARNING_DAYS, today=today)
        self.coordinator = MutationCoordinator(api, refresh=self.load, name="inventory")
        self.state: PaginationState[Medicine] = PaginationState.from_settings(
            search_fields=lambda m: (m.name,),
            filters={
                STOCK_FILTER: self.filters.matches_stock,
                EXPIRY_FILTER: self.filters.matches_expiry,
            },
            sort_key=lambda m: m.name.lower(),
        )
        self.error: str | None = None
        self.is_loading = False

    @property
    def medicines(self) -> list[Medicine]:
        return self.state.items

    @property
    def counters(self) -> InventoryCounters:
        return self.filters.counters(self.state.items)

    async def load(self) -> list[Medicine]:
        self.is_loading = True
        self.error = None
        try:
            medicines = Medicine.parse_list(await self._api.get_medicines())
        except HospitalAPIError as e:
            logger.error(f"Failed to fetch medicines: {e}")
            self.error = "Failed to fetch medicines"
            return self.state.items
        finally:
            self.is_loading = False
        self.state.set_items(medicines)
        return medicines

    def set_search(self, term: str) -> None:
        self.state.set_search(term)

    def set_stock_filter(self, value: str) -> None:
        if value != FILTER_ALL:
            StockStatus(value)
        self.state.set_filter(STOCK_FILTER, value)

    def set_expiry_filter(self, value: str) -> None:
        if value != FILTER_ALL:
            ExpiryStatus(value)
        self.state.set_filter(EXPIRY_FILTER, value)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def add_medicine(self, name: str, price: Any, quantity: Any, expiry_date: str | date | None) -> Any:
        """
        Add a medicine. Name, price > 0, quantity >= 0 and expiry are required.

        Raises:
            InvalidMutationError: Missing or invalid field; nothing is sent
            MutationError: Backend rejected the medicine
        """
        price_value = _to_number(price)
        quantity_value = _to_number(quantity)
        expiry = _to_date(expiry_date)
        if (
            not name
            or not name.strip()
            or price_value is None
            or price_value <= 0
            or quantity_value is None
            or quantity_value < 0
            or quantity_value != int(quantity_value)
            or expiry is None
        ):
            raise InvalidMutationError("add-medicine", "Please fill all fields with valid values")

        return await self.coordinator.run(
            "add-medicine",
            lambda: self._api.add_medicine(name.strip(), price_value, int(quantity_value), expiry.isoformat()),
            item_key=("add", name.strip().lower()),
        )

    async def update_medicine(self, medicine: Medicine, name: str, price: Any, expiry_date: str | date | None) -> Any:
        expiry = _to_date(expiry_date)
        price_value = _to_number(price)
        return await self.coordinator.mutate(
            MutationOperation.UPDATE_MEDICINE,
            medicine.id,
            name,
            price_value if price_value is not None else price,
            expiry.isoformat() if expiry else None,
        )

    async def refill(self, medicine: Medicine, quantity: Any) -> Any:
        """
        Add units to a medicine's stock.

        Raises:
            InvalidMutationError: Quantity missing, zero or negative
        """
        value = _to_number(quantity)
        if value is not None and value == int(value):
            value = int(value)
        return await self.coordinator.mutate(
            MutationOperation.REFILL_STOCK, medicine.id, value if value is not None else quantity
        )

    async def delete_medicine(self, medicine: Medicine) -> Any:
        return await self.coordinator.mutate(MutationOperation.DELETE_MEDICINE, medicine.id, medicine.name)

    def export_rows(self) -> list[dict[str, Any]]:
        """Rows of the current filtered view, ready for CSV/XLSX formatting."""
        return [
            {
                "Name": m.name,
                "Price": m.price,
                "Quantity": m.quantity,
                "Stock Status": "Low Stock" if m.stock_status is StockStatus.LOW_STOCK else "In Stock",
                "Expiry Date": m.expiry_date.isoformat() if m.expiry_date else "Not set",
            }
            for m in self.state.filtered
        ]
