"""
Tests for the OpenAI-compatible generation client.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError

from lunch_nutritionist.errors import GenerationError
from lunch_nutritionist.llm.openai_client import OpenAIClient, parse_temperature


def _completion(content):
    completion = MagicMock()
    completion.choices = [MagicMock(message=MagicMock(content=content))]
    return completion


def _mock_openai(create):
    mock_client = MagicMock()
    mock_client.chat.completions.create = create
    return mock_client


@pytest.mark.parametrize(
    "text,expected",
    [("0.2", 0.2), ("", 0.7), ("warm", 0.7), ("1", 1.0)],
)
def test_parse_temperature(text, expected):
    assert parse_temperature(text) == expected


def test_missing_api_key_is_rejected():
    with pytest.raises(GenerationError):
        OpenAIClient(api_key="", model="m")


async def test_generate_sends_system_and_user_messages():
    create = AsyncMock(return_value=_completion('{"selected_menu_items": [0]}'))
    client = OpenAIClient(model="deepseek-v3", client=_mock_openai(create))

    content = await client.generate("be a nutritionist", "\nIndex 0: Rice (Rp 5000)", "0.3")

    assert content == '{"selected_menu_items": [0]}'
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "deepseek-v3"
    assert kwargs["temperature"] == 0.3
    assert kwargs["messages"] == [
        {"role": "system", "content": "be a nutritionist"},
        {"role": "user", "content": "\nIndex 0: Rice (Rp 5000)"},
    ]


async def test_no_choices_returns_empty_string():
    create = AsyncMock(return_value=MagicMock(choices=[]))
    client = OpenAIClient(client=_mock_openai(create))

    assert await client.generate("s", "u") == ""


async def test_backend_error_becomes_generation_error():
    create = AsyncMock(side_effect=OpenAIError("rate limited"))
    client = OpenAIClient(client=_mock_openai(create))

    with pytest.raises(GenerationError, match="rate limited"):
        await client.generate("s", "u")


async def test_timeout_becomes_generation_error():
    async def slow(**kwargs):
        await asyncio.sleep(1)

    client = OpenAIClient(client=_mock_openai(slow), timeout=0.01)

    with pytest.raises(GenerationError, match="timed out"):
        await client.generate("s", "u")
