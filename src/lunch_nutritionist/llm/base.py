"""Text generation client abstract interface."""

from abc import ABC, abstractmethod


class GenerationClient(ABC):
    """Sends a system instruction and a user prompt, returns raw model text."""

    @abstractmethod
    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: str = "",
    ) -> str:
        """
        Return the assistant message content.
        temperature is text (e.g. "0.7"); empty means the backend default.
        Raises GenerationError on any backend failure.
        """
        ...
