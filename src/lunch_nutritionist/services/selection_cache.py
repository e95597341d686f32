"""Date-keyed recommendation cache over the repository."""

import logging
from datetime import date
from typing import Any

from pydantic import ValidationError

from lunch_nutritionist.config import get_selection_rules
from lunch_nutritionist.errors import CacheWriteError
from lunch_nutritionist.models import (
    MenuItem,
    NutritionalSummary,
    NutritionistResponse,
    SelectionCacheEntry,
)
from lunch_nutritionist.persistence import NutritionistRepository
from lunch_nutritionist.services.index_mapper import remap_indices

logger = logging.getLogger(__name__)

UNKNOWN_SUMMARY = {
    "protein": "unknown",
    "vegetables": "unknown",
    "carbohydrates": "unknown",
    "overall_rating": "balanced",
}


class SelectionCache:
    """
    One shared entry per date. Entries are deleted and rewritten, never updated in place.
    Concurrent writers for the same date race; the last write wins.
    """

    def __init__(
        self,
        repository: NutritionistRepository,
        rules: dict[str, Any] | None = None,
    ) -> None:
        self._repo = repository
        self._rules = rules if rules is not None else get_selection_rules()

    def read(self, selection_date: date) -> SelectionCacheEntry | None:
        """Cached entry for the date. Read failures count as a miss."""
        try:
            return self._repo.get_selection(selection_date)
        except Exception as e:
            logger.warning("Failed to read nutritionist selection for %s: %s", selection_date, e)
            return None

    @staticmethod
    def identity_matches(entry: SelectionCacheEntry, menu_items: list[MenuItem]) -> bool:
        """True iff the entry snapshot holds exactly the current menu's ids, in any order."""
        if len(entry.menu_item_ids) != len(menu_items):
            return False
        return set(entry.menu_item_ids) == {item.id for item in menu_items}

    def write(
        self,
        selection_date: date,
        menu_items: list[MenuItem],
        response: NutritionistResponse,
    ) -> bool:
        """Best-effort persist. Failures are logged, never raised."""
        try:
            self._persist(selection_date, menu_items, response)
        except CacheWriteError as e:
            logger.error("Failed to save nutritionist selection for %s: %s", selection_date, e)
            return False
        return True

    def _persist(
        self,
        selection_date: date,
        menu_items: list[MenuItem],
        response: NutritionistResponse,
    ) -> None:
        indices = list(response.selected_indices)
        if not indices or any(not 0 <= idx < len(menu_items) for idx in indices):
            raise CacheWriteError(f"Refusing to cache indices {indices} for {len(menu_items)} menu items")
        entry = SelectionCacheEntry(
            selection_date=selection_date,
            menu_item_ids=[item.id for item in menu_items],
            selected_indices=indices,
            reasoning=response.reasoning,
            nutritional_summary=response.nutritional_summary.model_dump_json(),
        )
        try:
            self._repo.create_selection(entry)
        except Exception as e:
            raise CacheWriteError(str(e)) from e

    def invalidate(self, selection_date: date) -> None:
        try:
            self._repo.delete_selection(selection_date)
        except Exception as e:
            logger.warning("Failed to delete nutritionist selection for %s: %s", selection_date, e)

    def consume_reset_flag(self, selection_date: date) -> bool:
        """If the menu-changed flag is set, drop the cache and clear the flag. Returns whether it was set."""
        try:
            reset = self._repo.get_reset_flag(selection_date)
        except Exception as e:
            logger.warning("Failed to read daily menu reset flag for %s: %s", selection_date, e)
            return False
        if not reset:
            return False
        logger.info("Reset flag detected for %s - invalidating cache and clearing flag", selection_date)
        self.invalidate(selection_date)
        try:
            self._repo.set_reset_flag(selection_date, False)
        except Exception as e:
            logger.warning("Failed to clear daily menu reset flag for %s: %s", selection_date, e)
        return True

    def to_response(self, entry: SelectionCacheEntry, menu_items: list[MenuItem]) -> NutritionistResponse:
        """
        Decode a cached entry with its indices re-expressed against menu_items by id.
        An undecodable summary degrades to a generic one.
        """
        try:
            summary = NutritionalSummary.model_validate_json(entry.nutritional_summary)
        except ValidationError as e:
            logger.warning("Failed to parse cached nutritional summary (%d errors)", e.error_count())
            summary = NutritionalSummary(**self._rules.get("unknown_summary", UNKNOWN_SUMMARY))
        return NutritionistResponse(
            selected_indices=remap_indices(entry.selected_indices, entry.menu_item_ids, menu_items),
            reasoning=entry.reasoning,
            nutritional_summary=summary,
        )
