"""Repository interface consumed by the nutritionist engine."""

from abc import ABC, abstractmethod
from datetime import date

from lunch_nutritionist.models import DailyMenu, SelectionCacheEntry, UserSelection


class DuplicateSelectionError(ValueError):
    """A selection already exists for the date. One row per date."""


class NutritionistRepository(ABC):
    """Narrow persistence contract: daily menu, stock constraints, reset flag, cache, tracking."""

    # Daily menu
    @abstractmethod
    def save_daily_menu(self, menu_date: date, menu_item_ids: list[int]) -> DailyMenu:
        """Create or replace the menu for a date. Always arms the reset flag."""

    @abstractmethod
    def get_daily_menu(self, menu_date: date) -> DailyMenu | None:
        ...

    # Per-employee stock constraints
    @abstractmethod
    def get_stock_empty_items_for_user(self, employee_id: int, menu_date: date) -> list[int]:
        """Item ids currently unavailable to this employee on this date."""

    @abstractmethod
    def mark_items_stock_empty(self, employee_id: int, menu_date: date, item_ids: list[int]) -> None:
        ...

    @abstractmethod
    def unmark_item_stock_empty(self, employee_id: int, menu_date: date, item_id: int) -> None:
        ...

    # Reset flag
    @abstractmethod
    def get_reset_flag(self, menu_date: date) -> bool:
        """False when no menu exists for the date."""

    @abstractmethod
    def set_reset_flag(self, menu_date: date, value: bool) -> None:
        """No-op when no menu exists for the date."""

    # Selection cache
    @abstractmethod
    def get_selection(self, selection_date: date) -> SelectionCacheEntry | None:
        ...

    @abstractmethod
    def create_selection(self, entry: SelectionCacheEntry) -> SelectionCacheEntry:
        """Insert. Raises DuplicateSelectionError if the date already has a row."""

    @abstractmethod
    def delete_selection(self, selection_date: date) -> None:
        ...

    # Selection tracking
    @abstractmethod
    def create_user_selection(
        self,
        selection_date: date,
        employee_id: int,
        order_id: int | None = None,
    ) -> UserSelection:
        """Idempotent per (employee, date). Attaches order_id if the row has none yet."""

    @abstractmethod
    def get_user_selection(self, employee_id: int, selection_date: date) -> UserSelection | None:
        ...

    @abstractmethod
    def get_users_by_date_and_unpaid(self, selection_date: date) -> list[UserSelection]:
        """Tracked employees whose linked order is not paid yet."""

    @abstractmethod
    def mark_order_paid(self, order_id: int, paid: bool = True) -> None:
        ...
