"""
LLM provider interface.

Defines the contract for the completion gateway.
Implementations: OpenAI-compatible chat-completion endpoints.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from crola.models.chat import ChatMessage


class ILLMProvider(ABC):
    """Abstract interface for LLM providers."""

    @abstractmethod
    async def complete(
        self,
        user_message: str,
        history: Sequence[ChatMessage] = (),
        model_id: Optional[str] = None,
    ) -> str:
        """
        Generate an assistant reply.

        Args:
            user_message: The new user message
            history: Prior turns of the conversation, oldest-first, not
                including user_message
            model_id: Model to use; the provider default when omitted

        Returns:
            Reply text (stripped, non-empty)

        Raises:
            LLMError: If the provider is unconfigured, the call fails, or the
                response carries no text
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the human-readable provider/model name.

        Returns:
            Model name string for logging/display
        """
        pass

    @abstractmethod
    def get_default_model(self) -> str:
        """Get the model identifier used when none is requested."""
        pass

    @abstractmethod
    def get_available_models(self) -> list[dict]:
        """
        Get list of selectable models.

        Returns:
            List of {"id", "name", "is_reasoning"} dicts
        """
        pass
