"""Wires settings, the generation client and the repository into a NutritionistService."""

from lunch_nutritionist.config import configure_logging, get_selection_rules, get_settings
from lunch_nutritionist.llm import GenerationClient, OpenAIClient
from lunch_nutritionist.persistence import NutritionistRepository, create_repository
from lunch_nutritionist.services.nutritionist_service import NutritionistService


def create_nutritionist_service(
    repository: NutritionistRepository | None = None,
    llm: GenerationClient | None = None,
) -> NutritionistService:
    """Defaults: OpenAI-compatible client and the configured store."""
    settings = get_settings()
    configure_logging(settings.log_level)
    return NutritionistService(
        llm=llm or OpenAIClient(),
        repository=repository or create_repository(),
        rules=get_selection_rules(),
        temperature=settings.llm_temperature,
    )
