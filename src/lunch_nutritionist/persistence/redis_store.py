"""Redis-backed nutritionist store. Use when REDIS_URL is set."""

import logging
from datetime import date

import redis

from lunch_nutritionist.models import DailyMenu, SelectionCacheEntry, UserSelection
from lunch_nutritionist.persistence.base import DuplicateSelectionError, NutritionistRepository

logger = logging.getLogger(__name__)

KEY_PREFIX = "lunch_nutritionist"


class RedisNutritionistRepository(NutritionistRepository):
    """Redis-backed store. Selection rows are keyed by date, written with SET NX."""

    def __init__(self, redis_url: str) -> None:
        self._redis_url = redis_url
        self._client = None

    def _get_client(self):
        """Lazy-init Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self._redis_url,
                decode_responses=True,
            )
        return self._client

    def _menu_key(self, menu_date: date) -> str:
        return f"{KEY_PREFIX}:menu:{menu_date.isoformat()}"

    def _stock_key(self, employee_id: int, menu_date: date) -> str:
        return f"{KEY_PREFIX}:stock_empty:{employee_id}:{menu_date.isoformat()}"

    def _selection_key(self, selection_date: date) -> str:
        return f"{KEY_PREFIX}:selection:{selection_date.isoformat()}"

    def _user_selection_key(self, selection_date: date) -> str:
        return f"{KEY_PREFIX}:user_selection:{selection_date.isoformat()}"

    def _orders_key(self) -> str:
        return f"{KEY_PREFIX}:order_paid"

    # Daily menu

    def save_daily_menu(self, menu_date: date, menu_item_ids: list[int]) -> DailyMenu:
        menu = DailyMenu(menu_date=menu_date, menu_item_ids=list(menu_item_ids), nutritionist_reset=True)
        self._get_client().set(self._menu_key(menu_date), menu.model_dump_json())
        return menu

    def get_daily_menu(self, menu_date: date) -> DailyMenu | None:
        data = self._get_client().get(self._menu_key(menu_date))
        if not data:
            return None
        return DailyMenu.model_validate_json(data)

    # Stock constraints

    def get_stock_empty_items_for_user(self, employee_id: int, menu_date: date) -> list[int]:
        members = self._get_client().smembers(self._stock_key(employee_id, menu_date))
        return sorted(int(m) for m in members)

    def mark_items_stock_empty(self, employee_id: int, menu_date: date, item_ids: list[int]) -> None:
        if item_ids:
            self._get_client().sadd(self._stock_key(employee_id, menu_date), *item_ids)

    def unmark_item_stock_empty(self, employee_id: int, menu_date: date, item_id: int) -> None:
        self._get_client().srem(self._stock_key(employee_id, menu_date), item_id)

    # Reset flag

    def get_reset_flag(self, menu_date: date) -> bool:
        menu = self.get_daily_menu(menu_date)
        return bool(menu and menu.nutritionist_reset)

    def set_reset_flag(self, menu_date: date, value: bool) -> None:
        menu = self.get_daily_menu(menu_date)
        if menu is None:
            return
        menu.nutritionist_reset = value
        self._get_client().set(self._menu_key(menu_date), menu.model_dump_json())

    # Selection cache

    def get_selection(self, selection_date: date) -> SelectionCacheEntry | None:
        data = self._get_client().get(self._selection_key(selection_date))
        if not data:
            return None
        return SelectionCacheEntry.model_validate_json(data)

    def create_selection(self, entry: SelectionCacheEntry) -> SelectionCacheEntry:
        created = self._get_client().set(
            self._selection_key(entry.selection_date),
            entry.model_dump_json(),
            nx=True,
        )
        if not created:
            raise DuplicateSelectionError(f"Selection already exists for {entry.selection_date}")
        return entry

    def delete_selection(self, selection_date: date) -> None:
        self._get_client().delete(self._selection_key(selection_date))

    # Selection tracking

    def create_user_selection(
        self,
        selection_date: date,
        employee_id: int,
        order_id: int | None = None,
    ) -> UserSelection:
        r = self._get_client()
        key = self._user_selection_key(selection_date)
        selection = UserSelection(employee_id=employee_id, selection_date=selection_date, order_id=order_id)
        if r.hsetnx(key, str(employee_id), selection.model_dump_json()):
            return selection
        existing = UserSelection.model_validate_json(r.hget(key, str(employee_id)))
        if existing.order_id is not None or order_id is None:
            return existing
        updated = existing.model_copy(update={"order_id": order_id})
        r.hset(key, str(employee_id), updated.model_dump_json())
        return updated

    def get_user_selection(self, employee_id: int, selection_date: date) -> UserSelection | None:
        data = self._get_client().hget(self._user_selection_key(selection_date), str(employee_id))
        if not data:
            return None
        return UserSelection.model_validate_json(data)

    def get_users_by_date_and_unpaid(self, selection_date: date) -> list[UserSelection]:
        r = self._get_client()
        rows = r.hgetall(self._user_selection_key(selection_date))
        paid = r.hgetall(self._orders_key())
        selections = [UserSelection.model_validate_json(v) for v in rows.values()]
        unpaid = [
            s
            for s in selections
            if s.order_id is not None and paid.get(str(s.order_id)) != "1"
        ]
        return sorted(unpaid, key=lambda s: s.employee_id)

    def mark_order_paid(self, order_id: int, paid: bool = True) -> None:
        self._get_client().hset(self._orders_key(), str(order_id), "1" if paid else "0")
