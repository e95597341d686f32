"""Errors raised by the nutritionist engine."""


class NutritionistError(Exception):
    """Base class for recommendation failures."""


class NoMenuItemsError(NutritionistError):
    """The menu for the date is empty."""


class NoAvailableItemsError(NutritionistError):
    """Every menu item is out of stock for the requesting employee."""


class GenerationError(NutritionistError):
    """The text generation backend failed, errored or timed out."""


class ParsingError(NutritionistError):
    """No valid menu indices could be extracted from the model output."""


class CacheWriteError(NutritionistError):
    """Persisting a selection failed. Never surfaced to callers."""
