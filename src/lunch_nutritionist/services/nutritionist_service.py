"""Nutritionist service - cached, per-employee balanced meal selection."""

import logging
from datetime import date
from typing import Any

from lunch_nutritionist.errors import GenerationError, NoAvailableItemsError, NoMenuItemsError
from lunch_nutritionist.llm.base import GenerationClient
from lunch_nutritionist.models import MenuItem, NutritionistResponse, UserSelection
from lunch_nutritionist.persistence import NutritionistRepository
from lunch_nutritionist.services.availability import AvailabilityFilter
from lunch_nutritionist.services.index_mapper import map_indices_to_menu
from lunch_nutritionist.services.response_parser import ResponseParser
from lunch_nutritionist.services.selection_cache import SelectionCache

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a highly experienced nutritionist. Your task is to select the most healthy and balanced meal combination from the available menu items.

CRITICAL REQUIREMENTS:
1. You MUST respond with ONLY a valid JSON object in this exact format:
{
  "selected_menu_items": [0, 2, 4],
  "reasoning": "Brief explanation of why these items provide balanced nutrition",
  "nutritional_summary": {
    "protein": "high|moderate|low",
    "vegetables": "high|moderate|low|none",
    "carbohydrates": "high|moderate|low",
    "overall_rating": "excellent|good|balanced|adequate"
  }
}

2. The "selected_menu_items" array MUST contain INDICES (0-based) of menu items, not IDs
3. Select 2-4 items that provide the most balanced nutrition
4. Prioritize: protein sources, vegetables, whole grains, balanced portions
5. Avoid: excessive fried foods, too much sugar, unbalanced combinations

Available menu items (with their indices):"""


def build_menu_description(menu_items: list[MenuItem]) -> str:
    """One line per item, indexed in list order."""
    return "".join(f"\nIndex {i}: {item.name} (Rp {item.price})" for i, item in enumerate(menu_items))


def selection_has_unavailable_items(
    response: NutritionistResponse,
    menu_items: list[MenuItem],
    unavailable_ids: set[int],
) -> bool:
    """Whether any selected index (against menu_items) names an unavailable item."""
    return any(
        0 <= idx < len(menu_items) and menu_items[idx].id in unavailable_ids
        for idx in response.selected_indices
    )


class NutritionistService:
    """
    Picks a balanced subset of the day's menu.

    The recommendation is cached per date and shared across employees, while stock
    availability is per employee: every read re-checks the cached pick against the
    caller's own constraints. The model only ever sees the caller's available items;
    its indices are mapped back to the full menu before caching or returning.
    """

    def __init__(
        self,
        llm: GenerationClient,
        repository: NutritionistRepository,
        *,
        rules: dict[str, Any] | None = None,
        temperature: str = "0.7",
    ) -> None:
        self._llm = llm
        self._repo = repository
        self._availability = AvailabilityFilter(repository)
        self._cache = SelectionCache(repository, rules)
        self._parser = ResponseParser(rules)
        self._temperature = temperature

    async def get_nutritionist_selection(
        self,
        selection_date: date,
        menu_items: list[MenuItem],
        employee_id: int,
    ) -> NutritionistResponse:
        """
        Recommendation for the date, with indices into menu_items.
        Raises NoMenuItemsError, NoAvailableItemsError, GenerationError or ParsingError.
        """
        if not menu_items:
            raise NoMenuItemsError("No menu items available")

        unavailable_ids, available_items = self._availability.resolve(
            menu_items, employee_id, selection_date
        )
        if not available_items:
            raise NoAvailableItemsError(
                "No menu items available for this user (all items are out of stock)"
            )

        self._cache.consume_reset_flag(selection_date)

        cached = self._cache.read(selection_date)
        if cached is not None:
            if self._cache.identity_matches(cached, menu_items):
                response = self._cache.to_response(cached, menu_items)
                if not selection_has_unavailable_items(response, menu_items, unavailable_ids):
                    logger.info("Cache hit - returning cached nutritionist selection for %s", selection_date)
                    return response
                logger.info(
                    "Cached selection for %s contains stock empty items for employee %s - "
                    "calling LLM with available items only",
                    selection_date,
                    employee_id,
                )
                return await self._recommend(selection_date, available_items, menu_items, replace=True)

            logger.info("Menu items changed for %s - invalidating cache", selection_date)
            self._cache.invalidate(selection_date)

        logger.info("Cache miss or menu changed - calling LLM for nutritionist selection")
        return await self._recommend(selection_date, available_items, menu_items)

    async def _recommend(
        self,
        selection_date: date,
        available_items: list[MenuItem],
        menu_items: list[MenuItem],
        *,
        replace: bool = False,
    ) -> NutritionistResponse:
        response = await self._call_llm_for_selection(available_items)
        mapped = map_indices_to_menu(response, available_items, menu_items)
        if replace:
            self._cache.invalidate(selection_date)
        self._cache.write(selection_date, menu_items, mapped)
        return mapped

    async def _call_llm_for_selection(self, menu_items: list[MenuItem]) -> NutritionistResponse:
        """Ask the model about exactly these items; indices come back relative to them."""
        try:
            content = await self._llm.generate(
                SYSTEM_PROMPT,
                build_menu_description(menu_items),
                self._temperature,
            )
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(f"LLM call failed: {e}") from e
        logger.info("LLM raw response: %s", content[:500])
        return self._parser.parse(content, len(menu_items))

    def track_user_selection(
        self,
        employee_id: int,
        selection_date: date,
        order_id: int | None = None,
    ) -> UserSelection:
        """Record that the employee used the recommendation on this date."""
        return self._repo.create_user_selection(selection_date, employee_id, order_id)

    def get_users_needing_notification(self, selection_date: date) -> list[UserSelection]:
        """Tracked employees whose order is still unpaid, so a menu reset may affect them."""
        return self._repo.get_users_by_date_and_unpaid(selection_date)
