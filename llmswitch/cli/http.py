# -*- coding: utf-8 -*-
from __future__ import annotations

import json
from typing import Any

import click
import httpx


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8088


def client(base_url: str) -> httpx.Client:
    return httpx.Client(base_url=base_url.rstrip("/"), timeout=30.0)


def raise_for_api_error(r: httpx.Response) -> None:
    """Turn an error response into a ClickException with its detail."""
    if r.is_success:
        return
    try:
        body = r.json()
    except ValueError:
        body = r.text
    detail = body.get("detail", body) if isinstance(body, dict) else body
    raise click.ClickException(f"HTTP {r.status_code}: {detail}")


def print_json(data: Any) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))
