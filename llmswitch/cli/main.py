# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import os

import click

from .http import DEFAULT_HOST, DEFAULT_PORT
from .llm_cmd import llm_group
from ..constant import LOG_LEVEL_ENV

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]
DEFAULT_LOG_LEVEL = "warning"

logger = logging.getLogger(__name__)


def _resolve_log_level(log_level: str | None) -> tuple[str, str | None]:
    """Option value, then $LLMSWITCH_LOG_LEVEL, then the default.

    Returns the level and the rejected env value, if any.
    """
    if log_level:
        return log_level.lower(), None
    env_level = os.environ.get(LOG_LEVEL_ENV, "").strip()
    if not env_level:
        return DEFAULT_LOG_LEVEL, None
    if env_level.lower() in LOG_LEVELS:
        return env_level.lower(), None
    return DEFAULT_LOG_LEVEL, env_level


@click.group()
@click.option("--host", default=DEFAULT_HOST, help="API host")
@click.option("--port", default=DEFAULT_PORT, type=int, help="API port")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help=f"Log level (default: ${LOG_LEVEL_ENV} or warning)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    host: str,
    port: int,
    log_level: str | None,
) -> None:
    """llmswitch — LLM provider configuration."""
    level, rejected = _resolve_log_level(log_level)
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if rejected:
        logger.warning(
            "Ignoring invalid $%s=%r; using %s",
            LOG_LEVEL_ENV,
            rejected,
            DEFAULT_LOG_LEVEL,
        )
    ctx.ensure_object(dict)
    ctx.obj["host"] = host
    ctx.obj["port"] = port


cli.add_command(llm_group)


if __name__ == "__main__":
    cli()  # pylint: disable=no-value-for-parameter
