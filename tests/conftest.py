"""
Pytest configuration and fixtures for nutritionist engine tests.
"""

import json
from datetime import date

import pytest

from lunch_nutritionist.llm.base import GenerationClient
from lunch_nutritionist.models import MenuItem
from lunch_nutritionist.persistence import FileNutritionistRepository

MENU_DATE = date(2025, 3, 14)


class ScriptedGenerationClient(GenerationClient):
    """Returns queued replies in order; a queued exception is raised instead."""

    def __init__(self, *replies) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, str]] = []

    async def generate(self, system_prompt: str, user_prompt: str, temperature: str = "") -> str:
        self.calls.append(
            {"system": system_prompt, "user": user_prompt, "temperature": temperature}
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def selection_json(indices, reasoning="balanced", **summary) -> str:
    nutritional_summary = {
        "protein": "high",
        "vegetables": "high",
        "carbohydrates": "moderate",
        "overall_rating": "excellent",
    }
    nutritional_summary.update(summary)
    return json.dumps(
        {
            "selected_menu_items": indices,
            "reasoning": reasoning,
            "nutritional_summary": nutritional_summary,
        }
    )


@pytest.fixture
def menu_date():
    return MENU_DATE


@pytest.fixture
def menu_items():
    """Rice, Chicken, Salad, Tofu, Tea - ids 1..5 in canonical order."""
    return [
        MenuItem(id=1, name="Rice", price=5000),
        MenuItem(id=2, name="Chicken", price=30000),
        MenuItem(id=3, name="Salad", price=15000),
        MenuItem(id=4, name="Tofu", price=10000),
        MenuItem(id=5, name="Tea", price=5000),
    ]


@pytest.fixture
def repo(tmp_path):
    """File repository on a throwaway directory."""
    return FileNutritionistRepository(tmp_path)


@pytest.fixture
def scripted_llm():
    """Factory: scripted_llm(reply, ...) -> ScriptedGenerationClient."""
    return ScriptedGenerationClient


@pytest.fixture
def make_selection_json():
    return selection_json
