"""LLM abstraction - OpenAI-compatible."""

from lunch_nutritionist.llm.base import GenerationClient
from lunch_nutritionist.llm.openai_client import OpenAIClient

__all__ = ["GenerationClient", "OpenAIClient"]
