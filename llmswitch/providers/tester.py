# -*- coding: utf-8 -*-
"""Stateless provider connectivity tests.

A test never reads or writes config.yaml. The payload is probed exactly
once; transport errors and non-2xx answers come back as a failed
``ProviderTestResult`` instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import httpx

from ..config.models import RAW_KEY_FIELDS, LLMConfigEntry, ProviderTestResult
from ..config.secrets import SecretStore
from ..constant import get_fallback_key_envs
from .probes import select_probe
from .registry import default_api_base

logger = logging.getLogger(__name__)


def _response_data(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


class ProviderConnectivityTester:
    """Resolves a key for a payload and runs one provider probe."""

    def __init__(
        self,
        secrets: Optional[SecretStore] = None,
        fallback_env_names: Optional[Sequence[str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.secrets = secrets or SecretStore()
        self.fallback_env_names = (
            tuple(fallback_env_names)
            if fallback_env_names is not None
            else get_fallback_key_envs()
        )
        self._transport = transport

    def resolve_api_key(self, entry: Mapping[str, Any]) -> Optional[str]:
        """Payload key, then its ``api_key_env`` reference, then fallbacks."""
        for k in RAW_KEY_FIELDS:
            if entry.get(k):
                return entry[k]
        env_name = entry.get("api_key_env")
        if env_name:
            value = self.secrets.read_env_var(env_name)
            if value:
                return value
        for name in self.fallback_env_names:
            value = self.secrets.read_env_var(name)
            if value:
                return value
        return None

    async def test(
        self,
        payload: Union[LLMConfigEntry, Mapping[str, Any]],
    ) -> ProviderTestResult:
        if isinstance(payload, LLMConfigEntry):
            entry: Dict[str, Any] = payload.model_dump(mode="json")
        else:
            entry = dict(payload)
        try:
            return await self._test(entry)
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("Connectivity test failed: %s", e)
            return ProviderTestResult(ok=False, error=str(e) or repr(e))

    async def _test(self, entry: Dict[str, Any]) -> ProviderTestResult:
        api_key = self.resolve_api_key(entry)
        if not api_key:
            return ProviderTestResult(ok=False, error="no key")

        api_base = entry.get("api_base") or default_api_base(
            entry.get("provider"),
        )
        probe = select_probe(entry, api_base)
        request = probe.build(entry, api_base, api_key)
        if request.error:
            return ProviderTestResult(ok=False, error=request.error)

        logger.debug(
            "Probing %s provider: %s %s",
            probe.name,
            request.method,
            request.url,
        )
        try:
            async with httpx.AsyncClient(
                timeout=request.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    json=request.json_body,
                )
        except httpx.HTTPError as e:
            logger.warning(
                "%s probe to %s failed: %s",
                probe.name,
                request.url,
                e,
            )
            return ProviderTestResult(ok=False, error=str(e) or repr(e))

        if 200 <= resp.status_code < 300:
            logger.info("%s probe ok (%s)", probe.name, resp.status_code)
            return ProviderTestResult(
                ok=True,
                status=resp.status_code,
                data=_response_data(resp),
            )
        logger.info("%s probe returned %s", probe.name, resp.status_code)
        return ProviderTestResult(ok=False, status=resp.status_code)
