# -*- coding: utf-8 -*-
"""API routes for the LLM configuration."""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from ...config import (
    ConfigManager,
    ConfigNotFoundError,
    ConfigValidationError,
    LLMConfigEntry,
    ProviderTestResult,
    SecretPersistenceError,
    SwitchResult,
    UnauthorizedError,
)
from ...providers import ProviderConnectivityTester
from ...runtime import RuntimeSwitchCoordinator

router = APIRouter(prefix="/llm", tags=["llm"])


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def is_admin(request: Request) -> bool:
    """Admin flag set on ``request.state`` by upstream auth middleware.

    Override this dependency to plug in another authorization source.
    """
    return bool(getattr(request.state, "is_admin", False))


def get_config_manager(request: Request) -> ConfigManager:
    return request.app.state.config_manager


def get_tester(request: Request) -> ProviderConnectivityTester:
    return request.app.state.connectivity_tester


def get_switcher(request: Request) -> RuntimeSwitchCoordinator:
    return request.app.state.switch_coordinator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _http_error(exc: Exception) -> HTTPException:
    """Map a configuration error to an HTTP error."""
    if isinstance(exc, UnauthorizedError):
        return HTTPException(status_code=403, detail=str(exc))
    if isinstance(exc, ConfigValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/config",
    summary="Get LLM configuration",
    description="Return the llm entries with secret fields masked.",
)
async def get_llm_config(
    manager: ConfigManager = Depends(get_config_manager),
) -> List[Any]:
    try:
        return await manager.get_config()
    except ConfigNotFoundError as e:
        raise _http_error(e) from e


@router.put(
    "/config",
    summary="Update LLM configuration",
    description="Merge fields into the llm entry and persist it. "
    "A provided api_key is moved to the secrets file unless "
    "persistKey is false, in which case it is dropped.",
)
async def update_llm_config(
    body: LLMConfigEntry = Body(..., description="Fields to update"),
    admin: bool = Depends(is_admin),
    manager: ConfigManager = Depends(get_config_manager),
) -> Dict[str, Any]:
    try:
        return await manager.update_config(body, is_admin=admin)
    except (
        UnauthorizedError,
        ConfigValidationError,
        ConfigNotFoundError,
        SecretPersistenceError,
    ) as e:
        raise _http_error(e) from e


@router.post(
    "/test",
    response_model=ProviderTestResult,
    response_model_exclude_none=True,
    summary="Test provider connectivity",
    description="Probe the provider described by the payload. "
    "Nothing is persisted.",
)
async def test_llm_connection(
    body: LLMConfigEntry = Body(..., description="Provider to test"),
    tester: ProviderConnectivityTester = Depends(get_tester),
) -> ProviderTestResult:
    return await tester.test(body)


@router.post(
    "/switch",
    response_model=SwitchResult,
    response_model_exclude_none=True,
    summary="Switch the running LLM now",
    description="Apply fields to the running runtime without persisting.",
)
async def switch_llm_now(
    body: LLMConfigEntry = Body(..., description="Fields to apply"),
    admin: bool = Depends(is_admin),
    switcher: RuntimeSwitchCoordinator = Depends(get_switcher),
) -> SwitchResult:
    try:
        return await switcher.switch_now(body, is_admin=admin)
    except UnauthorizedError as e:
        raise _http_error(e) from e
