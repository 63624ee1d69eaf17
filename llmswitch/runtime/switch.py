# -*- coding: utf-8 -*-
"""Live switching of the running LLM runtime.

A switch merges the requested fields onto the current llm entry in
memory and hands the result to the runtime adaptor. Nothing is written
to config.yaml or to the secrets file.
"""

from __future__ import annotations

import inspect
import logging
from typing import (
    Any,
    Dict,
    Mapping,
    Optional,
    Protocol,
    Union,
    runtime_checkable,
)

from ..config.errors import UnauthorizedError
from ..config.masking import mask_secrets
from ..config.models import LLM_TYPE, LLMConfigEntry, SwitchResult
from ..config.store import ConfigStore, find_llm_entry

logger = logging.getLogger(__name__)


@runtime_checkable
class RuntimeAdaptor(Protocol):
    """Runtime that can rebuild its LLM client from an llm entry."""

    def reinitialize_from_llm(self, entry: Dict[str, Any]) -> Any:
        """Rebuild the client. May be a coroutine function; may raise."""


class RuntimeSwitchCoordinator:
    """Applies in-memory llm entry changes to the runtime adaptor."""

    def __init__(
        self,
        store: Optional[ConfigStore] = None,
        adaptor: Optional[RuntimeAdaptor] = None,
    ) -> None:
        self.store = store or ConfigStore()
        self.adaptor = adaptor

    async def switch_now(
        self,
        update: Union[LLMConfigEntry, Mapping[str, Any]],
        is_admin: bool,
    ) -> SwitchResult:
        """Merge *update* onto the current entry and reinitialize.

        Only an unauthorized caller raises; every other failure is
        returned as ``SwitchResult(ok=False)``.
        """
        logger.info("switch_now called, is_admin=%s", bool(is_admin))
        if not is_admin:
            logger.warning("Unauthorized switch_now attempt")
            raise UnauthorizedError(
                "Unauthorized: admin required to switch LLM now",
            )
        if isinstance(update, LLMConfigEntry):
            incoming = update.to_update()
        else:
            incoming = dict(update)
        incoming.pop("persistKey", None)

        try:
            docs = self.store.read()
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("switch_now could not read config: %s", e)
            return SwitchResult(ok=False, error=str(e))

        current = find_llm_entry(docs)
        entry = dict(current) if current is not None else {"type": LLM_TYPE}
        entry.update(incoming)
        masked = mask_secrets(entry)

        if not isinstance(self.adaptor, RuntimeAdaptor):
            logger.warning("Adaptor does not support reinitialization")
            return SwitchResult(
                ok=False,
                error="Adaptor does not support reinitialization",
                entry=masked,
            )
        try:
            result = self.adaptor.reinitialize_from_llm(entry)
            if inspect.isawaitable(result):
                await result
        except Exception as e:  # pylint: disable=broad-except
            logger.exception("switch_now error: %s", e)
            return SwitchResult(
                ok=False,
                error=str(e) or repr(e),
                entry=masked,
            )

        logger.info(
            "Runtime reinitialized with active_model=%s",
            entry.get("active_model"),
        )
        return SwitchResult(ok=True, entry=masked)
