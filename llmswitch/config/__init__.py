# -*- coding: utf-8 -*-
"""LLM config — document store, secrets store, masking and updates."""

from .errors import (
    ConfigNotFoundError,
    ConfigValidationError,
    LLMConfigError,
    SecretPersistenceError,
    UnauthorizedError,
)
from .manager import ConfigManager
from .masking import MASK, mask_secrets
from .models import (
    LLMConfigEntry,
    ModelSpec,
    ProviderTestResult,
    SwitchResult,
)
from .secrets import SecretStore, choose_env_var_name
from .store import ConfigStore, default_document, find_llm_entry

__all__ = [
    # errors
    "ConfigNotFoundError",
    "ConfigValidationError",
    "LLMConfigError",
    "SecretPersistenceError",
    "UnauthorizedError",
    # models
    "LLMConfigEntry",
    "ModelSpec",
    "ProviderTestResult",
    "SwitchResult",
    # stores
    "ConfigStore",
    "SecretStore",
    "choose_env_var_name",
    "default_document",
    "find_llm_entry",
    # manager
    "ConfigManager",
    "MASK",
    "mask_secrets",
]
