# -*- coding: utf-8 -*-
import asyncio

import pytest

from llmswitch.config import MASK, ConfigStore
from llmswitch.config.errors import UnauthorizedError
from llmswitch.runtime import RuntimeAdaptor, RuntimeSwitchCoordinator


class FakeAdaptor:
    def __init__(self):
        self.calls = []

    def reinitialize_from_llm(self, entry):
        self.calls.append(entry)


class AsyncAdaptor(FakeAdaptor):
    async def reinitialize_from_llm(self, entry):
        await asyncio.sleep(0)
        self.calls.append(entry)


class DisabledAdaptor:
    reinitialize_from_llm = None


class BrokenAdaptor:
    def reinitialize_from_llm(self, entry):
        raise RuntimeError("engine unavailable")


@pytest.fixture
def configured_store(store):
    store.write(
        [
            {
                "type": "llm",
                "provider": "openai",
                "models": [{"model": "m1"}, {"model": "m2"}],
                "active_model": "m1",
                "api_key_env": "OPENAI_API_KEY",
            },
        ],
    )
    return store


@pytest.mark.asyncio
async def test_switch_requires_admin(configured_store):
    adaptor = FakeAdaptor()
    switcher = RuntimeSwitchCoordinator(configured_store, adaptor)

    with pytest.raises(UnauthorizedError):
        await switcher.switch_now({"active_model": "m2"}, is_admin=False)

    assert adaptor.calls == []


@pytest.mark.asyncio
async def test_switch_notifies_adaptor_without_persisting(
    configured_store,
    secrets,
):
    before = configured_store.user_path.read_text()
    adaptor = FakeAdaptor()
    switcher = RuntimeSwitchCoordinator(configured_store, adaptor)

    result = await switcher.switch_now(
        {"active_model": "m2", "api_key": "sk-live"},
        is_admin=True,
    )

    assert result.ok is True
    (entry,) = adaptor.calls
    assert entry["active_model"] == "m2"
    assert entry["provider"] == "openai"
    assert entry["api_key"] == "sk-live"
    assert result.entry["api_key"] == MASK
    assert configured_store.user_path.read_text() == before
    assert not secrets.path.exists()


@pytest.mark.asyncio
async def test_async_adaptor_is_awaited(configured_store):
    adaptor = AsyncAdaptor()
    switcher = RuntimeSwitchCoordinator(configured_store, adaptor)

    result = await switcher.switch_now({"active_model": "m2"}, is_admin=True)

    assert result.ok is True
    assert adaptor.calls[0]["active_model"] == "m2"


@pytest.mark.asyncio
@pytest.mark.parametrize("adaptor", [None, object(), DisabledAdaptor()])
async def test_missing_capability_is_not_fatal(configured_store, adaptor):
    switcher = RuntimeSwitchCoordinator(configured_store, adaptor)

    result = await switcher.switch_now({"active_model": "m2"}, is_admin=True)

    assert result.ok is False
    assert result.error == "Adaptor does not support reinitialization"


@pytest.mark.asyncio
async def test_adaptor_error_is_returned(configured_store):
    switcher = RuntimeSwitchCoordinator(configured_store, BrokenAdaptor())

    result = await switcher.switch_now({"active_model": "m2"}, is_admin=True)

    assert result.ok is False
    assert result.error == "engine unavailable"


@pytest.mark.asyncio
async def test_unreadable_config_is_not_fatal(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = ConfigStore(
        user_path=blocker / "config.yaml",
        project_path=tmp_path / "missing.yaml",
        parent_path=tmp_path / "missing-too.yaml",
    )
    switcher = RuntimeSwitchCoordinator(store, FakeAdaptor())

    result = await switcher.switch_now({"active_model": "m2"}, is_admin=True)

    assert result.ok is False
    assert result.error


@pytest.mark.asyncio
async def test_entry_is_created_when_config_has_no_llm(store):
    store.user_path.parent.mkdir(parents=True)
    store.user_path.write_text("type: engine\n")
    adaptor = FakeAdaptor()

    result = await RuntimeSwitchCoordinator(store, adaptor).switch_now(
        {"provider": "ollama", "active_model": "llama3"},
        is_admin=True,
    )

    assert result.ok is True
    assert adaptor.calls == [
        {"type": "llm", "provider": "ollama", "active_model": "llama3"},
    ]
    assert store.user_path.read_text() == "type: engine\n"


@pytest.mark.asyncio
async def test_repeated_switch_is_idempotent(configured_store):
    adaptor = FakeAdaptor()
    switcher = RuntimeSwitchCoordinator(configured_store, adaptor)

    first, second = await asyncio.gather(
        switcher.switch_now({"active_model": "m2"}, is_admin=True),
        switcher.switch_now({"active_model": "m2"}, is_admin=True),
    )

    assert first.ok is second.ok is True
    assert first.entry == second.entry
    assert adaptor.calls[0] == adaptor.calls[1]


def test_duck_typed_adaptors_satisfy_protocol():
    assert isinstance(FakeAdaptor(), RuntimeAdaptor)
    assert isinstance(AsyncAdaptor(), RuntimeAdaptor)
    assert not isinstance(DisabledAdaptor(), RuntimeAdaptor)
    assert not isinstance(object(), RuntimeAdaptor)
