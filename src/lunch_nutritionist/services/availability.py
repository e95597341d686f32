"""Per-employee view of the daily menu."""

import logging
from datetime import date

from lunch_nutritionist.models import MenuItem
from lunch_nutritionist.persistence import NutritionistRepository

logger = logging.getLogger(__name__)


def filter_available_items(menu_items: list[MenuItem], unavailable_ids: set[int]) -> list[MenuItem]:
    """Items not marked stock-empty, in original menu order."""
    return [item for item in menu_items if item.id not in unavailable_ids]


class AvailabilityFilter:
    """Resolves which menu items an employee can currently receive."""

    def __init__(self, repository: NutritionistRepository) -> None:
        self._repo = repository

    def unavailable_item_ids(self, employee_id: int, menu_date: date) -> set[int]:
        """Stock-empty item ids for this employee. Lookup failure means no filtering."""
        try:
            return set(self._repo.get_stock_empty_items_for_user(employee_id, menu_date))
        except Exception as e:
            logger.warning(
                "Failed to get stock empty items for employee %s, continuing without filtering: %s",
                employee_id,
                e,
            )
            return set()

    def resolve(
        self,
        menu_items: list[MenuItem],
        employee_id: int,
        menu_date: date,
    ) -> tuple[set[int], list[MenuItem]]:
        """Unavailable ids and the remaining items, in menu order."""
        unavailable_ids = self.unavailable_item_ids(employee_id, menu_date)
        return unavailable_ids, filter_available_items(menu_items, unavailable_ids)
