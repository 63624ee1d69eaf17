# -*- coding: utf-8 -*-
"""Pydantic data models for providers."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ProviderDefinition(BaseModel):
    """Static definition of a provider offered for configuration."""

    id: str = Field(..., description="Provider identifier")
    name: str = Field(..., description="Human-readable provider name")
    default_api_base: str = Field(
        default="",
        description="API base used when the entry leaves api_base empty",
    )