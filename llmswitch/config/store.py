# -*- coding: utf-8 -*-
"""Reading and writing the LLM configuration document set (config.yaml).

The file is a multi-document YAML stream. Candidate locations are probed
in order:

1. the explicit override (``LLMSWITCH_CONFIG_PATH`` or ``override_path``)
2. the canonical per-user path (``~/.llmswitch/config.yaml``)
3. the project-local default (``./config.yaml``)
4. the parent of the project root (``../config.yaml``)

A project-local file is moved to the per-user path the first time it is
read. Writes only ever go to the per-user path.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, List, Optional

import yaml

from ..constant import (
    CONFIG_FILE,
    CONFIG_PATH_ENV,
    DEFAULT_API_BASE,
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    get_user_config_path,
)
from .errors import ConfigNotFoundError, ConfigValidationError
from .models import LLM_TYPE

logger = logging.getLogger(__name__)

ConfigDocument = List[Any]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def default_document() -> ConfigDocument:
    """Return the document set created when no config exists anywhere."""
    return [
        {
            "type": LLM_TYPE,
            "provider": DEFAULT_PROVIDER,
            "api_base": DEFAULT_API_BASE,
            "models": [{"model": DEFAULT_MODEL}],
            "active_model": DEFAULT_MODEL,
        },
    ]


def is_llm_entry(doc: Any) -> bool:
    return isinstance(doc, dict) and doc.get("type") == LLM_TYPE


def find_llm_entry(docs: ConfigDocument) -> Optional[dict]:
    """Return the first (authoritative) ``type: llm`` entry, or None."""
    for doc in docs:
        if is_llm_entry(doc):
            return doc
    return None


def parse_documents(raw: str) -> ConfigDocument:
    """Parse a YAML stream into a flat list of entries.

    Empty documents are dropped; a document whose top level is a
    sequence contributes each of its items.
    """
    docs: ConfigDocument = []
    for doc in yaml.safe_load_all(raw):
        if doc is None:
            continue
        if isinstance(doc, list):
            docs.extend(d for d in doc if d is not None)
        else:
            docs.append(doc)
    return docs


def dump_documents(docs: ConfigDocument) -> str:
    return "---\n".join(
        yaml.safe_dump(
            doc,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
        for doc in docs
    )


def _same_path(a: Path, b: Path) -> bool:
    return a.expanduser().resolve() == b.expanduser().resolve()


def _write_text(path: Path, content: str) -> None:
    """Replace *path* through a sibling temp file."""
    tmp_path = path.with_name(path.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as fh:
        fh.write(content)
    os.replace(tmp_path, path)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ConfigStore:
    """Resolves, reads, migrates and writes the config document set.

    Nothing is cached: every call goes back to the filesystem.
    """

    def __init__(
        self,
        override_path: Optional[Path] = None,
        user_path: Optional[Path] = None,
        project_path: Optional[Path] = None,
        parent_path: Optional[Path] = None,
    ) -> None:
        if override_path is None and os.environ.get(CONFIG_PATH_ENV):
            override_path = Path(os.environ[CONFIG_PATH_ENV])
        cwd = Path.cwd()
        self.override_path = Path(override_path) if override_path else None
        self.user_path = Path(user_path or get_user_config_path())
        self.project_path = Path(project_path or cwd / CONFIG_FILE)
        self.parent_path = Path(parent_path or cwd.parent / CONFIG_FILE)

    def candidates(self) -> List[Path]:
        """Candidate locations in precedence order."""
        paths = [self.user_path, self.project_path, self.parent_path]
        if self.override_path is not None:
            paths.insert(0, self.override_path)
        return paths

    # -- read ---------------------------------------------------------------

    def read(self) -> ConfigDocument:
        """Return the document set from the first readable candidate.

        Falls back to creating the default document at the per-user path.
        Raises ``ConfigNotFoundError`` if even that fails.
        """
        last_err: Optional[Exception] = None
        for path in self.candidates():
            try:
                with open(path, "r", encoding="utf-8") as fh:
                    raw = fh.read()
                docs = parse_documents(raw)
            except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
                logger.debug("Skipping config candidate %s: %s", path, e)
                last_err = e
                continue
            if _same_path(path, self.project_path):
                self._migrate(raw)
            return docs
        return self._create_default(last_err)

    def _migrate(self, raw: str) -> None:
        """Move the project-local config to the per-user path, once.

        Best effort: failures are logged and otherwise ignored.
        """
        if self.user_path.exists():
            return
        try:
            self.user_path.parent.mkdir(parents=True, exist_ok=True)
            _write_text(self.user_path, raw)
            self.project_path.unlink()
            logger.info(
                "Migrated project config %s to %s",
                self.project_path,
                self.user_path,
            )
        except OSError as e:
            logger.warning(
                "Config migration to %s failed: %s",
                self.user_path,
                e,
            )

    def _create_default(
        self,
        last_err: Optional[Exception],
    ) -> ConfigDocument:
        docs = default_document()
        try:
            self.user_path.parent.mkdir(parents=True, exist_ok=True)
            _write_text(self.user_path, dump_documents(docs))
        except OSError as e:
            cause = last_err or e
            raise ConfigNotFoundError(
                f"{CONFIG_FILE} not found and default creation "
                f"at {self.user_path} failed: {cause}",
            ) from cause
        logger.info("Created default config at %s", self.user_path)
        return docs

    # -- write --------------------------------------------------------------

    def write(self, docs: ConfigDocument) -> ConfigDocument:
        """Overwrite the per-user config with *docs*.

        Rejects a document set without a ``type: llm`` entry before
        touching the disk.
        """
        if not any(is_llm_entry(d) for d in docs):
            raise ConfigValidationError("No llm entry in config documents")
        content = dump_documents(docs)
        try:
            self.user_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Could not create %s: %s", self.user_path.parent, e)
        _write_text(self.user_path, content)
        return docs
