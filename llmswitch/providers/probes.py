# -*- coding: utf-8 -*-
"""Provider-specific connectivity probes.

Each probe knows how to recognise its provider family and how to build
one cheap request against it. ``select_probe`` walks ``PROBES`` in
priority order; the generic OpenAI-compatible probe matches everything,
so selection is total.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from ..config.secrets import is_azure_like
from ..constant import AZURE_DEFAULT_API_VERSION


class ProbeRequest(BaseModel):
    """A single HTTP request to issue, or the reason none can be built."""

    method: str = "GET"
    url: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    json_body: Optional[Dict[str, Any]] = None
    timeout: float = 5.0
    error: Optional[str] = None


def join_url(api_base: str, path: str) -> str:
    """Append *path* to *api_base*, tolerating a trailing slash."""
    return api_base.rstrip("/") + "/" + path.lstrip("/")


def _marker_in(entry: Mapping[str, Any], api_base: str, marker: str) -> bool:
    provider = str(entry.get("provider") or "").lower()
    return marker in provider or marker in api_base.lower()


def _bearer(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


class Probe:
    """Base probe: ``GET {api_base}/{path}`` with a bearer token."""

    name = "openai"
    path = "models"
    timeout = 5.0

    def matches(self, entry: Mapping[str, Any], api_base: str) -> bool:
        return True

    def build(
        self,
        entry: Mapping[str, Any],
        api_base: str,
        api_key: str,
    ) -> ProbeRequest:
        return ProbeRequest(
            url=join_url(api_base, self.path),
            headers=_bearer(api_key),
            timeout=self.timeout,
        )


class MarkerProbe(Probe):
    """Matches when provider or api_base contains ``name``."""

    def matches(self, entry: Mapping[str, Any], api_base: str) -> bool:
        return _marker_in(entry, api_base, self.name)


class AzureProbe(Probe):
    """Minimal completion against a deployment-scoped endpoint."""

    name = "azure"
    timeout = 7.0

    def matches(self, entry: Mapping[str, Any], api_base: str) -> bool:
        return is_azure_like({**entry, "api_base": api_base})

    @staticmethod
    def deployment(entry: Mapping[str, Any]) -> Optional[str]:
        """Last path segment of the first model, e.g. azure/<deployment>."""
        models = entry.get("models") or []
        first = models[0] if models else None
        model = first.get("model") if isinstance(first, Mapping) else first
        if not model:
            return None
        return str(model).split("/")[-1] or None

    def build(
        self,
        entry: Mapping[str, Any],
        api_base: str,
        api_key: str,
    ) -> ProbeRequest:
        deployment = self.deployment(entry)
        if not deployment:
            return ProbeRequest(error="no deployment specified")
        # The OpenAI fallback base is meaningless for Azure.
        api_base = str(entry.get("api_base") or "")
        if not api_base:
            return ProbeRequest(error="no api_base specified")
        api_version = entry.get("api_version") or AZURE_DEFAULT_API_VERSION
        url = join_url(
            api_base,
            f"openai/deployments/{deployment}/completions",
        )
        return ProbeRequest(
            method="POST",
            url=f"{url}?api-version={api_version}",
            headers={"api-key": api_key, "Content-Type": "application/json"},
            json_body={"prompt": "hello", "max_tokens": 1},
            timeout=self.timeout,
        )


class OpenRouterProbe(MarkerProbe):
    name = "openrouter"
    path = "v1/models"


class OllamaProbe(MarkerProbe):
    """Unauthenticated health ping."""

    name = "ollama"
    path = "api/ping"
    timeout = 4.0

    def build(
        self,
        entry: Mapping[str, Any],
        api_base: str,
        api_key: str,
    ) -> ProbeRequest:
        return ProbeRequest(
            url=join_url(api_base, self.path),
            timeout=self.timeout,
        )


class DeepseekProbe(MarkerProbe):
    name = "deepseek"
    path = "v1/models"


# Priority order; the last entry matches anything.
PROBES = (
    AzureProbe(),
    OpenRouterProbe(),
    OllamaProbe(),
    DeepseekProbe(),
    Probe(),
)


def select_probe(entry: Mapping[str, Any], api_base: str) -> Probe:
    for probe in PROBES:
        if probe.matches(entry, api_base):
            return probe
    return PROBES[-1]
