"""Data models."""

from lunch_nutritionist.models.menu import DailyMenu, MenuItem
from lunch_nutritionist.models.selection import (
    NutritionalSummary,
    NutritionistResponse,
    SelectionCacheEntry,
    UserSelection,
)

__all__ = [
    "DailyMenu",
    "MenuItem",
    "NutritionalSummary",
    "NutritionistResponse",
    "SelectionCacheEntry",
    "UserSelection",
]
