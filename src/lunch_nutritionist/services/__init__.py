"""Nutritionist recommendation services."""

from lunch_nutritionist.services.availability import AvailabilityFilter, filter_available_items
from lunch_nutritionist.services.factory import create_nutritionist_service
from lunch_nutritionist.services.index_mapper import map_indices_to_menu
from lunch_nutritionist.services.nutritionist_service import NutritionistService
from lunch_nutritionist.services.response_parser import ResponseParser
from lunch_nutritionist.services.selection_cache import SelectionCache

__all__ = [
    "AvailabilityFilter",
    "NutritionistService",
    "ResponseParser",
    "SelectionCache",
    "create_nutritionist_service",
    "filter_available_items",
    "map_indices_to_menu",
]
