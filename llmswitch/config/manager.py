# -*- coding: utf-8 -*-
"""Read / update orchestration for the LLM config entry.

Updates run as a read-merge-write transaction per call, serialized per
file; file I/O runs in worker threads. Raw API keys are either moved
into the secrets file (replaced by an ``api_key_env`` reference) or
dropped; they never reach config.yaml.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import SecretPersistenceError, UnauthorizedError
from .masking import mask_secrets
from .models import LLM_TYPE, RAW_KEY_FIELDS, LLMConfigEntry
from .secrets import SecretStore, choose_env_var_name
from .store import ConfigStore, is_llm_entry

logger = logging.getLogger(__name__)

# loop -> {file path -> lock}; one mutual-exclusion point per file.
_FILE_LOCKS: weakref.WeakKeyDictionary = weakref.WeakKeyDictionary()


def file_lock(path: Any) -> asyncio.Lock:
    """Return the lock guarding writes to *path* on the running loop."""
    loop = asyncio.get_running_loop()
    locks = _FILE_LOCKS.setdefault(loop, {})
    return locks.setdefault(str(path), asyncio.Lock())


def _pop_raw_key(update: Dict[str, Any]) -> Optional[str]:
    """Remove every raw-key field; return the first non-empty value."""
    value = None
    for k in RAW_KEY_FIELDS:
        v = update.pop(k, None)
        if v and value is None:
            value = v
    return value


class ConfigManager:
    """Masked reads and sanitized, persisted updates of the llm entry."""

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        secrets: Optional[SecretStore] = None,
    ) -> None:
        self.store = store or ConfigStore()
        self.secrets = secrets or SecretStore()

    async def get_config(self) -> List[Any]:
        """Return the ``llm`` entries (or every entry if none), masked."""
        docs = self.store.read()
        llm_docs = [d for d in docs if is_llm_entry(d)]
        return [mask_secrets(d) for d in (llm_docs or docs)]

    async def update_config(
        self,
        update: Union[LLMConfigEntry, Mapping[str, Any]],
        is_admin: bool,
    ) -> Dict[str, Any]:
        """Merge *update* into the llm entry and persist it.

        Returns the sanitized update: no raw key, no ``persistKey``.

        Raises:
            UnauthorizedError: *is_admin* is false.
            SecretPersistenceError: a key was supplied for persistence
                but could not be written; nothing is persisted then.
            ConfigValidationError / ConfigNotFoundError: from the store.
        """
        if not is_admin:
            logger.warning("Unauthorized LLM config update attempt")
            raise UnauthorizedError(
                "Unauthorized: admin required to update LLM configuration",
            )
        if isinstance(update, LLMConfigEntry):
            incoming = update.to_update()
        else:
            incoming = dict(update)

        persist = incoming.pop("persistKey", None)
        persist = incoming.pop("persist_key", persist)
        wants_persist = persist is not False

        raw_key = _pop_raw_key(incoming)
        if not wants_persist:
            # Nothing key-related is recorded when persistence is declined.
            incoming.pop("api_key_env", None)
        elif raw_key:
            env_name = choose_env_var_name(incoming)
            try:
                async with file_lock(self.secrets.path):
                    await asyncio.to_thread(
                        self.secrets.write_env_var,
                        env_name,
                        raw_key,
                    )
            except OSError as e:
                raise SecretPersistenceError(
                    f"Failed to persist API key to {self.secrets.path}: {e}",
                ) from e
            incoming["api_key_env"] = env_name

        async with file_lock(self.store.user_path):
            docs = await asyncio.to_thread(self.store.read)
            replaced = False
            new_docs: List[Any] = []
            for doc in docs:
                if is_llm_entry(doc) and not replaced:
                    replaced = True
                    merged = {**doc, **incoming}
                    if "active_model" not in incoming and doc.get(
                        "active_model",
                    ):
                        merged["active_model"] = doc["active_model"]
                    if _pop_raw_key(merged):
                        logger.warning(
                            "Dropped raw API key found in %s",
                            self.store.user_path,
                        )
                    new_docs.append(merged)
                else:
                    new_docs.append(doc)
            if not replaced:
                new_docs.append({"type": LLM_TYPE, **incoming})
            await asyncio.to_thread(self.store.write, new_docs)

        logger.info(
            "Updated LLM config: provider=%s active_model=%s",
            incoming.get("provider"),
            incoming.get("active_model"),
        )
        return incoming
