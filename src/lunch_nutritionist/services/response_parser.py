"""Parse nutritionist model output into a validated selection, with a heuristic fallback."""

import logging
import re
from typing import Any

from pydantic import ValidationError

from lunch_nutritionist.config import get_selection_rules
from lunch_nutritionist.errors import ParsingError
from lunch_nutritionist.models import NutritionalSummary, NutritionistResponse

logger = logging.getLogger(__name__)

MAX_SELECTED = 6
FALLBACK_MAX_SELECTED = 4
FALLBACK_REASONING = "AI-selected balanced combination"
FALLBACK_SUMMARY = {
    "protein": "balanced",
    "vegetables": "adequate",
    "carbohydrates": "balanced",
    "overall_rating": "good",
}

# A line is scanned for indices only if it contains one of these
FALLBACK_TRIGGERS = ("selected", "indices", "[")
TOKEN_PUNCTUATION = "[](),"
INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+")


def clean_markdown_code_blocks(content: str) -> str:
    """Drop ```json / ``` fences and surrounding whitespace."""
    return content.replace("```json", "").replace("```", "").strip()


def extract_numbers(line: str) -> list[int]:
    """Whitespace tokens that are integers once bracket, comma and paren punctuation is stripped."""
    numbers: list[int] = []
    for word in line.split():
        word = word.strip(TOKEN_PUNCTUATION)
        if INTEGER_TOKEN.fullmatch(word):
            numbers.append(int(word))
    return numbers


def _clamp(configured: int, hard_cap: int) -> int:
    return max(1, min(int(configured), hard_cap))


class ResponseParser:
    """Strict JSON decoding first; line-scanning fallback when that yields nothing usable."""

    def __init__(self, rules: dict[str, Any] | None = None) -> None:
        self._rules = rules if rules is not None else get_selection_rules()

    @property
    def max_selected(self) -> int:
        return _clamp(self._rules.get("max_selected", MAX_SELECTED), MAX_SELECTED)

    @property
    def fallback_max_selected(self) -> int:
        return _clamp(self._rules.get("fallback_max_selected", FALLBACK_MAX_SELECTED), FALLBACK_MAX_SELECTED)

    def parse(self, content: str, max_index: int) -> NutritionistResponse:
        """
        Return a response whose indices are all in [0, max_index) and whose count
        is between 1 and max_selected. Raises ParsingError otherwise.
        """
        cleaned = clean_markdown_code_blocks(content)
        try:
            response = NutritionistResponse.model_validate_json(cleaned)
        except ValidationError as e:
            logger.warning("JSON parsing failed (%d errors), attempting fallback parsing", e.error_count())
        else:
            if self.validate_indices(response.selected_indices, max_index):
                return response
            logger.warning(
                "Invalid indices in JSON response: %s (max_index=%d)",
                response.selected_indices,
                max_index,
            )
        return self.fallback_parse(cleaned, max_index)

    def validate_indices(self, indices: list[int], max_index: int) -> bool:
        if not 1 <= len(indices) <= self.max_selected:
            return False
        return all(0 <= idx < max_index for idx in indices)

    def fallback_parse(self, content: str, max_index: int) -> NutritionistResponse:
        """Scan trigger lines for in-range integers. Deduplicated, capped, generic reasoning."""
        indices: list[int] = []
        for line in content.split("\n"):
            line = line.strip()
            if not any(trigger in line for trigger in FALLBACK_TRIGGERS):
                continue
            indices.extend(n for n in extract_numbers(line) if 0 <= n < max_index)

        if not indices:
            raise ParsingError("Could not extract valid indices from LLM response")

        unique = list(dict.fromkeys(indices))[: self.fallback_max_selected]
        return NutritionistResponse(
            selected_indices=unique,
            reasoning=self._rules.get("fallback_reasoning", FALLBACK_REASONING),
            nutritional_summary=NutritionalSummary(
                **self._rules.get("fallback_summary", FALLBACK_SUMMARY)
            ),
        )
