# -*- coding: utf-8 -*-
"""Built-in provider definitions and registry."""

from __future__ import annotations

from typing import List, Optional

from ..constant import DEFAULT_API_BASE
from .models import ProviderDefinition

# ---------------------------------------------------------------------------
# Provider definitions
# ---------------------------------------------------------------------------

PROVIDER_OPENAI = ProviderDefinition(
    id="openai",
    name="OpenAI",
    default_api_base=DEFAULT_API_BASE,
)

# Azure endpoints are per resource; there is no usable default.
PROVIDER_AZURE = ProviderDefinition(
    id="azure",
    name="Azure OpenAI",
)

PROVIDER_OPENROUTER = ProviderDefinition(
    id="openrouter",
    name="OpenRouter",
    default_api_base="https://openrouter.ai/api",
)

PROVIDER_OLLAMA = ProviderDefinition(
    id="ollama",
    name="Ollama",
    default_api_base="http://localhost:11434",
)

PROVIDER_DEEPSEEK = ProviderDefinition(
    id="deepseek",
    name="Deepseek",
    default_api_base="https://api.deepseek.com",
)

PROVIDER_GOOGLE = ProviderDefinition(
    id="google",
    name="Google / Vertex",
    default_api_base=(
        "https://generativelanguage.googleapis.com/v1beta/openai"
    ),
)

PROVIDER_QWEN = ProviderDefinition(
    id="qwen",
    name="Qwen",
    default_api_base="https://dashscope.aliyuncs.com/compatible-mode/v1",
)

PROVIDER_ZHIPU = ProviderDefinition(
    id="zhipu",
    name="Zhipu",
    default_api_base="https://open.bigmodel.cn/api/paas/v4",
)

PROVIDER_LM_STUDIO = ProviderDefinition(
    id="lm_studio",
    name="LM Studio",
    default_api_base="http://localhost:1234/v1",
)

PROVIDER_CUSTOM = ProviderDefinition(
    id="custom",
    name="Custom",
)

# Registry: provider_id -> ProviderDefinition
PROVIDERS: dict[str, ProviderDefinition] = {
    p.id: p
    for p in (
        PROVIDER_OPENAI,
        PROVIDER_AZURE,
        PROVIDER_OPENROUTER,
        PROVIDER_OLLAMA,
        PROVIDER_DEEPSEEK,
        PROVIDER_GOOGLE,
        PROVIDER_QWEN,
        PROVIDER_ZHIPU,
        PROVIDER_LM_STUDIO,
        PROVIDER_CUSTOM,
    )
}


def get_provider(provider_id: str) -> Optional[ProviderDefinition]:
    """Return a provider definition by id (case-insensitive), or None."""
    return PROVIDERS.get((provider_id or "").strip().lower())


def list_providers() -> List[ProviderDefinition]:
    """Return all registered provider definitions."""
    return list(PROVIDERS.values())


def default_api_base(provider_id: Optional[str]) -> str:
    """Return the provider's default API base, or the OpenAI one."""
    defn = get_provider(provider_id or "")
    if defn is not None and defn.default_api_base:
        return defn.default_api_base
    return DEFAULT_API_BASE
