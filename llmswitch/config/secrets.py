# -*- coding: utf-8 -*-
"""Flat ``KEY=VALUE`` secrets file kept next to config.yaml."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import dotenv_values

from ..constant import get_secrets_path

logger = logging.getLogger(__name__)

AZURE_OPENAI_DOMAIN = ".openai.azure.com"

# (provider substring, env var name); first match wins.
_PROVIDER_KEY_ENVS = (
    ("deepseek", "DEEPSEEK_API_KEY"),
    ("openrouter", "OPENROUTER_API_KEY"),
    ("ollama", "OLLAMA_API_KEY"),
    ("google", "GOOGLE_API_KEY"),
    ("vertex", "GOOGLE_API_KEY"),
)


def is_azure_like(entry: Mapping[str, Any]) -> bool:
    """True for Azure OpenAI entries (provider, api_version or domain)."""
    provider = str(entry.get("provider") or "").lower()
    api_base = str(entry.get("api_base") or "")
    return (
        "azure" in provider
        or bool(entry.get("api_version"))
        or AZURE_OPENAI_DOMAIN in api_base
    )


def choose_env_var_name(entry: Mapping[str, Any]) -> str:
    """Pick the secrets key under which *entry*'s API key is stored."""
    if is_azure_like(entry):
        return "AZURE_OPENAI_API_KEY"
    provider = str(entry.get("provider") or "").lower()
    for marker, name in _PROVIDER_KEY_ENVS:
        if marker in provider:
            return name
    return "OPENAI_API_KEY"


def _format_value(value: str) -> str:
    """Quote values that an unquoted .env line would not round-trip."""
    if not value or not any(c in value for c in " \t\r\n#\"'\\"):
        return value
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f'"{escaped}"'


class SecretStore:
    """Reads and upserts entries of the secrets file.

    There is no delete: keys are only ever added or overwritten.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else get_secrets_path()

    def read_all(self) -> Dict[str, str]:
        """Return every key in the file; a missing file reads as empty."""
        if not self.path.is_file():
            return {}
        values = dotenv_values(self.path, interpolate=False)
        return {k: v for k, v in values.items() if v is not None}

    def read_env_var(self, name: str) -> Optional[str]:
        """Look *name* up in the file first, then in the process env."""
        value = self.read_all().get(name)
        if value:
            return value
        return os.environ.get(name) or None

    def write_env_var(self, name: str, value: str) -> None:
        """Upsert ``name=value``, preserving all other keys.

        The whole file is rewritten through a temp file, so a failed
        write never leaves it truncated. ``OSError`` propagates.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        values = self.read_all()
        values[name] = value
        content = "\n".join(
            f"{k}={_format_value(v)}" for k, v in values.items()
        )
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as fh:
            fh.write(content + "\n")
        os.replace(tmp_path, self.path)
        logger.info("Stored secret %s in %s", name, self.path)
