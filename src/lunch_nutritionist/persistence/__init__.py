"""Persistence layer."""

from lunch_nutritionist.persistence.base import DuplicateSelectionError, NutritionistRepository
from lunch_nutritionist.persistence.factory import create_repository
from lunch_nutritionist.persistence.file_store import FileNutritionistRepository
from lunch_nutritionist.persistence.redis_store import RedisNutritionistRepository

__all__ = [
    "DuplicateSelectionError",
    "FileNutritionistRepository",
    "NutritionistRepository",
    "RedisNutritionistRepository",
    "create_repository",
]
