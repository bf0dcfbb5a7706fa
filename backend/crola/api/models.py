"""
Available models endpoint.

Returns the selectable AI models of the provider profile chosen at startup.
"""

from fastapi import APIRouter

from crola.api.deps import CurrentUser, LLMProvider
from crola.core.config import get_settings

router = APIRouter()


@router.get("")
async def list_available_models(
    user: CurrentUser,
    llm_provider: LLMProvider,
):
    """List available AI models for model selection."""
    settings = get_settings()
    return {
        "provider": settings.LLM_PROVIDER,
        "default_model_id": llm_provider.get_default_model(),
        "models": llm_provider.get_available_models(),
    }
