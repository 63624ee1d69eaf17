# -*- coding: utf-8 -*-
"""Pydantic data models for LLM config entries and operation results."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

LLM_TYPE = "llm"

# Field names that carry a raw API key in an update payload.
RAW_KEY_FIELDS = ("api_key", "apiKey")


class ModelSpec(BaseModel):
    """One model offered by the configured provider."""

    model_config = ConfigDict(extra="allow")

    model: str = Field(..., description="Model identifier used in API calls")
    kwargs: Dict[str, Any] = Field(
        default_factory=dict,
        description="Opaque per-model call arguments",
    )


class LLMConfigEntry(BaseModel):
    """The ``type: llm`` entry of the config document set.

    Unknown fields are kept so that they survive a merge into the
    persisted document.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = Field(default=LLM_TYPE, description="Entry type tag")
    provider: Optional[str] = Field(
        default=None,
        description="Provider identifier, e.g. openai / azure / ollama",
    )
    api_base: Optional[str] = Field(default=None, description="API base URL")
    api_version: Optional[str] = Field(
        default=None,
        description="API version (Azure only)",
    )
    models: Optional[List[ModelSpec]] = Field(default=None)
    active_model: Optional[str] = Field(default=None)
    api_key: Optional[str] = Field(
        default=None,
        description="Raw API key (request only, never persisted)",
    )
    api_key_env: Optional[str] = Field(
        default=None,
        description="Name of the secrets entry holding the API key",
    )
    persist_key: Optional[bool] = Field(
        default=None,
        alias="persistKey",
        description="Whether a provided api_key is written to the "
        "secrets file (default true)",
    )

    def to_update(self) -> Dict[str, Any]:
        """Return only the fields the caller actually set."""
        return self.model_dump(
            mode="json",
            exclude_unset=True,
            by_alias=True,
        )


class ProviderTestResult(BaseModel):
    """Uniform outcome of a connectivity probe."""

    ok: bool
    status: Optional[int] = None
    data: Optional[Any] = None
    error: Optional[str] = None


class SwitchResult(BaseModel):
    """Outcome of a live model switch."""

    ok: bool
    error: Optional[str] = None
    entry: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Live entry handed to the runtime (masked)",
    )
