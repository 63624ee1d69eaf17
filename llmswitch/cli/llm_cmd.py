# -*- coding: utf-8 -*-
"""CLI commands for the LLM configuration."""
from __future__ import annotations

import asyncio
from typing import Any, Optional

import click

from .http import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    client,
    print_json,
    raise_for_api_error,
)
from ..config import (
    ConfigManager,
    ConfigStore,
    LLMConfigError,
    find_llm_entry,
)
from ..providers import ProviderConnectivityTester, list_providers


def _base_url(ctx: click.Context, base_url: Optional[str]) -> str:
    """Resolve base_url with priority:
    1) command --base-url
    2) global --host/--port
    """
    if base_url:
        return base_url.rstrip("/")
    host = (ctx.obj or {}).get("host", DEFAULT_HOST)
    port = (ctx.obj or {}).get("port", DEFAULT_PORT)
    return f"http://{host}:{port}"


def _collect_update(
    provider: Optional[str],
    api_base: Optional[str],
    api_version: Optional[str],
    models: tuple[str, ...],
    active_model: Optional[str],
) -> dict[str, Any]:
    """Build an update from the options that were actually given."""
    update: dict[str, Any] = {}
    if provider is not None:
        update["provider"] = provider
    if api_base is not None:
        update["api_base"] = api_base
    if api_version is not None:
        update["api_version"] = api_version
    if models:
        update["models"] = [{"model": m} for m in models]
    if active_model is not None:
        update["active_model"] = active_model
    return update


def _entry_options(func):
    """Shared options describing (part of) an llm entry."""
    options = [
        click.option("--provider", default=None, help="e.g. openai / azure"),
        click.option("--api-base", default=None, help="API base URL"),
        click.option(
            "--api-version",
            default=None,
            help="API version (Azure only)",
        ),
        click.option(
            "--model",
            "models",
            multiple=True,
            help="Model name; repeat for several models",
        ),
        click.option("--active-model", default=None, help="Active model"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


@click.group("llm")
def llm_group() -> None:
    """Manage the LLM provider configuration.

    \b
    Examples:
      llmswitch llm show
      llmswitch llm set --provider deepseek --model deepseek-chat --api-key
      llmswitch llm test
      llmswitch llm switch gpt-4o
    """


# ---------------------------------------------------------------------------
# show / providers
# ---------------------------------------------------------------------------


@llm_group.command("show")
def show_cmd() -> None:
    """Show the current llm configuration (secrets masked)."""
    try:
        docs = asyncio.run(ConfigManager().get_config())
    except LLMConfigError as e:
        raise click.ClickException(str(e)) from e
    print_json(docs)


@llm_group.command("providers")
def providers_cmd() -> None:
    """List known providers and their default API base."""
    for defn in list_providers():
        base = defn.default_api_base or "(set api_base)"
        click.echo(f"  {defn.id:12s} {defn.name:18s} {base}")


# ---------------------------------------------------------------------------
# set
# ---------------------------------------------------------------------------


@llm_group.command("set")
@_entry_options
@click.option(
    "--api-key",
    "prompt_key",
    is_flag=True,
    default=False,
    help="Prompt for an API key (input hidden)",
)
@click.option(
    "--persist-key/--no-persist-key",
    default=True,
    show_default=True,
    help="Store the API key in the secrets file, or drop it",
)
def set_cmd(
    provider: Optional[str],
    api_base: Optional[str],
    api_version: Optional[str],
    models: tuple[str, ...],
    active_model: Optional[str],
    prompt_key: bool,
    persist_key: bool,
) -> None:
    """Update and persist the llm entry.

    The API key is never written to config.yaml: it goes to the secrets
    file and the entry records only the env var name.
    """
    update = _collect_update(
        provider,
        api_base,
        api_version,
        models,
        active_model,
    )
    if prompt_key:
        update["api_key"] = click.prompt(
            "API key",
            hide_input=True,
            show_default=False,
        )
    update["persistKey"] = persist_key
    try:
        result = asyncio.run(
            ConfigManager().update_config(update, is_admin=True),
        )
    except LLMConfigError as e:
        raise click.ClickException(str(e)) from e
    print_json(result)


# ---------------------------------------------------------------------------
# test
# ---------------------------------------------------------------------------


@llm_group.command("test")
@_entry_options
def test_cmd(
    provider: Optional[str],
    api_base: Optional[str],
    api_version: Optional[str],
    models: tuple[str, ...],
    active_model: Optional[str],
) -> None:
    """Probe the configured provider; options override stored fields."""
    try:
        docs = ConfigStore().read()
    except LLMConfigError as e:
        raise click.ClickException(str(e)) from e
    entry = dict(find_llm_entry(docs) or {})
    entry.update(
        _collect_update(provider, api_base, api_version, models, active_model),
    )
    result = asyncio.run(ProviderConnectivityTester().test(entry))
    print_json(result.model_dump(mode="json", exclude_none=True))
    if not result.ok:
        raise SystemExit(1)


# ---------------------------------------------------------------------------
# switch
# ---------------------------------------------------------------------------


@llm_group.command("switch")
@click.argument("active_model")
@click.option(
    "--base-url",
    default=None,
    help="Override the API address, e.g. http://127.0.0.1:8088",
)
@click.pass_context
def switch_cmd(
    ctx: click.Context,
    active_model: str,
    base_url: Optional[str],
) -> None:
    """Switch the running server to ACTIVE_MODEL without persisting."""
    base_url = _base_url(ctx, base_url)
    with client(base_url) as c:
        r = c.post("/llm/switch", json={"active_model": active_model})
        raise_for_api_error(r)
        data = r.json()
    print_json(data)
    if not data.get("ok"):
        raise SystemExit(1)
