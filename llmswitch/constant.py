# -*- coding: utf-8 -*-
import os
from pathlib import Path

WORKING_DIR = (
    Path(os.environ.get("LLMSWITCH_WORKING_DIR", "~/.llmswitch"))
    .expanduser()
    .resolve()
)

CONFIG_FILE = os.environ.get("LLMSWITCH_CONFIG_FILE", "config.yaml")

SECRETS_FILE = os.environ.get("LLMSWITCH_SECRETS_FILE", ".env")

# Explicit config path; probed before every other location.
CONFIG_PATH_ENV = "LLMSWITCH_CONFIG_PATH"

# Env key for app log level (used by CLI).
LOG_LEVEL_ENV = "LLMSWITCH_LOG_LEVEL"

# Document written when no config exists at any candidate location.
DEFAULT_PROVIDER = "openai"
DEFAULT_API_BASE = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"

AZURE_DEFAULT_API_VERSION = "2024-02-15-preview"

# ---------------------------------------------------------------------------
# Key fallback for connectivity tests — controlled by
# LLMSWITCH_FALLBACK_KEY_ENVS. When unset / empty the built-in list is
# used. Set to a comma-separated list to replace it, e.g.
#   LLMSWITCH_FALLBACK_KEY_ENVS=OPENAI_API_KEY,GOOGLE_API_KEY
# ---------------------------------------------------------------------------
DEFAULT_FALLBACK_KEY_ENVS = (
    "AZURE_OPENAI_API_KEY",
    "OPENAI_API_KEY",
    "DEEPSEEK_API_KEY",
    "OPENROUTER_API_KEY",
)


def get_user_config_path() -> Path:
    """Return the canonical per-user config path."""
    return WORKING_DIR / CONFIG_FILE


def get_secrets_path() -> Path:
    """Return the per-user secrets (.env) path."""
    return WORKING_DIR / SECRETS_FILE


def get_fallback_key_envs() -> tuple[str, ...]:
    """Return env var names probed when a test payload carries no key.

    Reads ``LLMSWITCH_FALLBACK_KEY_ENVS``. If unset or empty, the
    built-in list is returned.
    """
    raw = os.environ.get("LLMSWITCH_FALLBACK_KEY_ENVS", "").strip()
    if not raw:
        return DEFAULT_FALLBACK_KEY_ENVS
    names = tuple(n.strip() for n in raw.split(",") if n.strip())
    return names or DEFAULT_FALLBACK_KEY_ENVS
