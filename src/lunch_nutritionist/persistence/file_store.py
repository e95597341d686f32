"""Nutritionist persistence - JSON file storage."""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any

from lunch_nutritionist.models import DailyMenu, SelectionCacheEntry, UserSelection
from lunch_nutritionist.persistence.base import DuplicateSelectionError, NutritionistRepository

logger = logging.getLogger(__name__)


def _user_key(employee_id: int, day: date) -> str:
    return f"{employee_id}:{day.isoformat()}"


class FileNutritionistRepository(NutritionistRepository):
    """File-based store. One JSON document per table under data_dir/nutritionist."""

    def __init__(self, data_dir: Path) -> None:
        self._dir = Path(data_dir) / "nutritionist"
        self._dir.mkdir(parents=True, exist_ok=True)

    def _path(self, table: str) -> Path:
        return self._dir / f"{table}.json"

    def _load(self, table: str) -> dict[str, Any]:
        path = self._path(table)
        if not path.exists():
            return {}
        try:
            with path.open() as f:
                return json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load %s: %s", path, e)
            return {}

    def _save(self, table: str, data: dict[str, Any]) -> None:
        path = self._path(table)
        try:
            with path.open("w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error("Could not save %s: %s", path, e)
            raise

    # Daily menu

    def save_daily_menu(self, menu_date: date, menu_item_ids: list[int]) -> DailyMenu:
        menu = DailyMenu(menu_date=menu_date, menu_item_ids=list(menu_item_ids), nutritionist_reset=True)
        menus = self._load("daily_menus")
        menus[menu_date.isoformat()] = menu.model_dump(mode="json")
        self._save("daily_menus", menus)
        return menu

    def get_daily_menu(self, menu_date: date) -> DailyMenu | None:
        data = self._load("daily_menus").get(menu_date.isoformat())
        if not data:
            return None
        return DailyMenu.model_validate(data)

    # Stock constraints

    def get_stock_empty_items_for_user(self, employee_id: int, menu_date: date) -> list[int]:
        return list(self._load("stock_empty").get(_user_key(employee_id, menu_date), []))

    def mark_items_stock_empty(self, employee_id: int, menu_date: date, item_ids: list[int]) -> None:
        table = self._load("stock_empty")
        key = _user_key(employee_id, menu_date)
        current = table.get(key, [])
        current.extend(i for i in item_ids if i not in current)
        table[key] = current
        self._save("stock_empty", table)

    def unmark_item_stock_empty(self, employee_id: int, menu_date: date, item_id: int) -> None:
        table = self._load("stock_empty")
        key = _user_key(employee_id, menu_date)
        if key not in table:
            return
        table[key] = [i for i in table[key] if i != item_id]
        self._save("stock_empty", table)

    # Reset flag

    def get_reset_flag(self, menu_date: date) -> bool:
        menu = self.get_daily_menu(menu_date)
        return bool(menu and menu.nutritionist_reset)

    def set_reset_flag(self, menu_date: date, value: bool) -> None:
        menus = self._load("daily_menus")
        key = menu_date.isoformat()
        if key not in menus:
            return
        menus[key]["nutritionist_reset"] = value
        self._save("daily_menus", menus)

    # Selection cache

    def get_selection(self, selection_date: date) -> SelectionCacheEntry | None:
        data = self._load("selections").get(selection_date.isoformat())
        if not data:
            return None
        return SelectionCacheEntry.model_validate(data)

    def create_selection(self, entry: SelectionCacheEntry) -> SelectionCacheEntry:
        selections = self._load("selections")
        key = entry.selection_date.isoformat()
        if key in selections:
            raise DuplicateSelectionError(f"Selection already exists for {key}")
        selections[key] = entry.model_dump(mode="json")
        self._save("selections", selections)
        return entry

    def delete_selection(self, selection_date: date) -> None:
        selections = self._load("selections")
        if selections.pop(selection_date.isoformat(), None) is not None:
            self._save("selections", selections)

    # Selection tracking

    def create_user_selection(
        self,
        selection_date: date,
        employee_id: int,
        order_id: int | None = None,
    ) -> UserSelection:
        table = self._load("user_selections")
        key = _user_key(employee_id, selection_date)
        if key in table:
            existing = UserSelection.model_validate(table[key])
            if existing.order_id is not None or order_id is None:
                return existing
            selection = existing.model_copy(update={"order_id": order_id})
        else:
            selection = UserSelection(
                employee_id=employee_id,
                selection_date=selection_date,
                order_id=order_id,
            )
        table[key] = selection.model_dump(mode="json")
        self._save("user_selections", table)
        return selection

    def get_user_selection(self, employee_id: int, selection_date: date) -> UserSelection | None:
        data = self._load("user_selections").get(_user_key(employee_id, selection_date))
        if not data:
            return None
        return UserSelection.model_validate(data)

    def get_users_by_date_and_unpaid(self, selection_date: date) -> list[UserSelection]:
        paid = self._load("orders")
        selections = [UserSelection.model_validate(v) for v in self._load("user_selections").values()]
        unpaid = [
            s
            for s in selections
            if s.selection_date == selection_date
            and s.order_id is not None
            and not paid.get(str(s.order_id), False)
        ]
        return sorted(unpaid, key=lambda s: s.employee_id)

    def mark_order_paid(self, order_id: int, paid: bool = True) -> None:
        orders = self._load("orders")
        orders[str(order_id)] = paid
        self._save("orders", orders)
