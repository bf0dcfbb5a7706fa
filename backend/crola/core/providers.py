"""
Completion provider profiles.

The set of supported providers is closed; one profile is selected at startup
from the LLM_PROVIDER setting and reused for every request.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from crola.core.config import Settings


class ProviderKind(str, Enum):
    REQUESTY = "requesty"
    DEEPSEEK = "deepseek"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ModelOption:
    id: str
    name: str
    is_reasoning: bool = False


@dataclass(frozen=True)
class ProviderProfile:
    """Static description of an OpenAI-compatible completion provider."""

    kind: ProviderKind
    display_name: str
    endpoint: str
    default_model: str
    models: tuple[ModelOption, ...] = ()
    extra_headers: dict[str, str] = field(default_factory=dict)

    def model_ids(self) -> list[str]:
        return [m.id for m in self.models]


_PROFILES: dict[ProviderKind, ProviderProfile] = {
    ProviderKind.REQUESTY: ProviderProfile(
        kind=ProviderKind.REQUESTY,
        display_name="Requesty",
        endpoint="https://router.requesty.ai/v1/chat/completions",
        default_model="openai/gpt-4o",
        models=(
            ModelOption("openai/gpt-4o", "GPT-4o"),
            ModelOption("deepseek/deepseek-reasoner", "Deepseek R1", is_reasoning=True),
            ModelOption("deepseek/deepseek-chat", "Deepseek V3"),
        ),
    ),
    ProviderKind.DEEPSEEK: ProviderProfile(
        kind=ProviderKind.DEEPSEEK,
        display_name="Deepseek",
        endpoint="https://api.deepseek.com/v1/chat/completions",
        default_model="deepseek-chat",
        models=(
            ModelOption("deepseek-chat", "Deepseek V3"),
            ModelOption("deepseek-reasoner", "Deepseek R1", is_reasoning=True),
        ),
    ),
    ProviderKind.CUSTOM: ProviderProfile(
        kind=ProviderKind.CUSTOM,
        display_name="Custom",
        endpoint="",
        default_model="openai/gpt-3.5-turbo",
    ),
}


def resolve_profile(settings: Settings) -> ProviderProfile:
    """
    Build the active provider profile from settings.

    AI_API_ENDPOINT and AI_MODEL_NAME override the profile defaults.
    """
    kind = ProviderKind(settings.LLM_PROVIDER)
    profile = _PROFILES[kind]

    overrides: dict = {}
    if settings.AI_API_ENDPOINT:
        overrides["endpoint"] = settings.AI_API_ENDPOINT
    if settings.AI_MODEL_NAME:
        overrides["default_model"] = settings.AI_MODEL_NAME
    if kind == ProviderKind.REQUESTY:
        overrides["extra_headers"] = {
            "HTTP-Referer": settings.AI_APP_REFERER,
            "X-Title": settings.AI_APP_TITLE,
        }

    profile = replace(profile, **overrides) if overrides else profile
    if profile.default_model not in profile.model_ids():
        profile = replace(
            profile,
            models=(ModelOption(profile.default_model, profile.default_model),) + profile.models,
        )
    return profile
