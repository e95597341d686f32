"""Repository factory - creates file or Redis store based on config."""

from pathlib import Path

from lunch_nutritionist.config import get_settings
from lunch_nutritionist.persistence.base import NutritionistRepository
from lunch_nutritionist.persistence.file_store import FileNutritionistRepository
from lunch_nutritionist.persistence.redis_store import RedisNutritionistRepository


def create_repository() -> NutritionistRepository:
    """
    Create the nutritionist repository based on REDIS_URL.
    Uses Redis when REDIS_URL is set; otherwise file-based.
    """
    settings = get_settings()
    if settings.redis_url:
        return RedisNutritionistRepository(settings.redis_url)
    data_dir = Path(settings.data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    return FileNutritionistRepository(data_dir)
