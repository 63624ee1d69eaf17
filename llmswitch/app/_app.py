# -*- coding: utf-8 -*-
"""FastAPI application wiring for the LLM configuration routes."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from ..config import ConfigManager, ConfigStore, SecretStore
from ..providers import ProviderConnectivityTester
from ..runtime import RuntimeAdaptor, RuntimeSwitchCoordinator
from .routers import llm_router

logger = logging.getLogger(__name__)


def create_app(
    adaptor: Optional[RuntimeAdaptor] = None,
    store: Optional[ConfigStore] = None,
    secrets: Optional[SecretStore] = None,
    tester: Optional[ProviderConnectivityTester] = None,
) -> FastAPI:
    """Build the app; collaborators are created here unless injected.

    *adaptor* is the running LLM runtime notified by live switches.
    """
    store = store or ConfigStore()
    secrets = secrets or SecretStore()

    app = FastAPI(title="llmswitch")
    app.state.config_manager = ConfigManager(store=store, secrets=secrets)
    app.state.connectivity_tester = tester or ProviderConnectivityTester(
        secrets=secrets,
    )
    app.state.switch_coordinator = RuntimeSwitchCoordinator(
        store=store,
        adaptor=adaptor,
    )
    app.include_router(llm_router)
    logger.debug(
        "llmswitch app created: config=%s secrets=%s",
        store.user_path,
        secrets.path,
    )
    return app
