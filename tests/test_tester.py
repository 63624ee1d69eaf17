# -*- coding: utf-8 -*-
import json

import httpx
import pytest

from llmswitch.providers import ProviderConnectivityTester


class _Recorder:
    """httpx.MockTransport handler that records every request."""

    def __init__(self, status_code=200, payload=None, exc=None):
        self.requests = []
        self.status_code = status_code
        self.payload = {"data": []} if payload is None else payload
        self.exc = exc

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def recorder():
    return _Recorder()


@pytest.fixture
def tester(secrets, recorder):
    return ProviderConnectivityTester(
        secrets=secrets,
        transport=httpx.MockTransport(recorder),
    )


@pytest.mark.asyncio
async def test_no_key_makes_no_request(tester, recorder):
    result = await tester.test({"provider": "openai"})

    assert result.ok is False
    assert result.error == "no key"
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_azure_without_model_reports_missing_deployment(
    tester,
    recorder,
):
    result = await tester.test(
        {
            "provider": "azure",
            "api_base": "https://acme.openai.azure.com",
            "api_key": "az",
        },
    )

    assert result.ok is False
    assert result.error == "no deployment specified"
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_azure_without_api_base_makes_no_request(tester, recorder):
    result = await tester.test(
        {"provider": "azure", "models": [{"model": "gpt4"}], "api_key": "az"},
    )

    assert result.ok is False
    assert result.error == "no api_base specified"
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_azure_probe_targets_deployment(tester, recorder):
    result = await tester.test(
        {
            "provider": "openai",
            "api_base": "https://acme.openai.azure.com/",
            "models": [{"model": "azure/my-deployment"}],
            "api_key": "az-key",
        },
    )

    assert result.ok is True
    assert result.status == 200
    (request,) = recorder.requests
    assert request.method == "POST"
    assert str(request.url) == (
        "https://acme.openai.azure.com/openai/deployments/my-deployment/"
        "completions?api-version=2024-02-15-preview"
    )
    assert request.headers["api-key"] == "az-key"
    assert "authorization" not in request.headers
    assert json.loads(request.content) == {"prompt": "hello", "max_tokens": 1}
    assert request.extensions["timeout"]["read"] == 7.0


@pytest.mark.asyncio
async def test_azure_api_version_is_honoured(tester, recorder):
    await tester.test(
        {
            "provider": "azure",
            "api_base": "https://acme.openai.azure.com",
            "api_version": "2025-01-01",
            "models": [{"model": "dep"}],
            "api_key": "az",
        },
    )

    assert recorder.requests[0].url.params["api-version"] == "2025-01-01"


@pytest.mark.asyncio
async def test_openrouter_uses_default_base_and_bearer(tester, recorder):
    result = await tester.test({"provider": "OpenRouter", "api_key": "or"})

    assert result.ok is True
    assert result.data == {"data": []}
    (request,) = recorder.requests
    assert request.method == "GET"
    assert str(request.url) == "https://openrouter.ai/api/v1/models"
    assert request.headers["authorization"] == "Bearer or"
    assert request.extensions["timeout"]["read"] == 5.0


@pytest.mark.asyncio
async def test_ollama_ping_is_unauthenticated(tester, recorder):
    await tester.test(
        {"provider": "ollama", "api_base": "http://gpu:11434", "api_key": "x"},
    )

    (request,) = recorder.requests
    assert str(request.url) == "http://gpu:11434/api/ping"
    assert "authorization" not in request.headers
    assert request.extensions["timeout"]["read"] == 4.0


@pytest.mark.asyncio
async def test_deepseek_matched_by_api_base(tester, recorder):
    await tester.test(
        {"provider": "custom", "api_base": "https://api.deepseek.com", "api_key": "d"},
    )

    assert str(recorder.requests[0].url) == "https://api.deepseek.com/v1/models"


@pytest.mark.asyncio
async def test_generic_probe_tolerates_trailing_slash(tester, recorder):
    await tester.test(
        {"provider": "lm_studio", "api_base": "http://host:1234/v1/", "api_key": "k"},
    )

    assert str(recorder.requests[0].url) == "http://host:1234/v1/models"


@pytest.mark.asyncio
async def test_generic_probe_defaults_to_openai(tester, recorder):
    await tester.test({"api_key": "sk"})

    assert str(recorder.requests[0].url) == "https://api.openai.com/v1/models"


@pytest.mark.asyncio
async def test_non_2xx_is_a_failed_result(secrets):
    recorder = _Recorder(status_code=401, payload={"error": "bad key"})
    tester = ProviderConnectivityTester(
        secrets=secrets,
        transport=httpx.MockTransport(recorder),
    )

    result = await tester.test({"provider": "openai", "api_key": "sk"})

    assert result.ok is False
    assert result.status == 401
    assert result.data is None
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_transport_error_is_a_failed_result(secrets):
    recorder = _Recorder(exc=httpx.ConnectError("connection refused"))
    tester = ProviderConnectivityTester(
        secrets=secrets,
        transport=httpx.MockTransport(recorder),
    )

    result = await tester.test({"provider": "deepseek", "api_key": "sk"})

    assert result.ok is False
    assert result.error == "connection refused"
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_key_from_api_key_env_reference(tester, recorder, secrets):
    secrets.write_env_var("MY_KEY", "from-secrets")

    await tester.test({"provider": "openai", "api_key_env": "MY_KEY"})

    assert recorder.requests[0].headers["authorization"] == "Bearer from-secrets"


@pytest.mark.asyncio
async def test_fallback_key_order(tester, recorder, monkeypatch):
    monkeypatch.setenv("DEEPSEEK_API_KEY", "ds")
    monkeypatch.setenv("OPENAI_API_KEY", "oa")

    await tester.test({"provider": "openai"})

    assert recorder.requests[0].headers["authorization"] == "Bearer oa"


@pytest.mark.asyncio
async def test_fallback_list_is_configurable(secrets, recorder, monkeypatch):
    monkeypatch.setenv("LLMSWITCH_FALLBACK_KEY_ENVS", "GOOGLE_API_KEY")
    monkeypatch.setenv("GOOGLE_API_KEY", "g")
    monkeypatch.setenv("OPENAI_API_KEY", "oa")
    tester = ProviderConnectivityTester(
        secrets=secrets,
        transport=httpx.MockTransport(recorder),
    )

    await tester.test({"provider": "google"})

    (request,) = recorder.requests
    assert request.headers["authorization"] == "Bearer g"
    assert str(request.url) == (
        "https://generativelanguage.googleapis.com/v1beta/openai/models"
    )


@pytest.mark.asyncio
async def test_tester_never_writes_config(tester, store):
    await tester.test({"provider": "openai", "api_key": "sk"})

    assert not store.user_path.exists()
