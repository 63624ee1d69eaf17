# -*- coding: utf-8 -*-
"""Errors raised by the LLM configuration layer.

Probe and runtime-switch failures are not represented here: those are
always returned as structured results, never raised.
"""


class LLMConfigError(Exception):
    """Base class for configuration errors."""


class UnauthorizedError(LLMConfigError):
    """Caller is not an administrator."""


class ConfigNotFoundError(LLMConfigError):
    """No readable config at any location and no default could be made."""


class ConfigValidationError(LLMConfigError, ValueError):
    """Document set rejected before it reached the disk."""


class SecretPersistenceError(LLMConfigError):
    """An API key could not be written to the secrets file."""
