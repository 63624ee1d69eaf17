# -*- coding: utf-8 -*-
"""Redaction of secret-shaped fields before config leaves the process."""

from __future__ import annotations

import copy
from typing import Any

MASK = "*****"

SECRET_KEYS = ("api_key", "apiKey", "key", "secret", "password", "token")


def _mask_fields(entry: dict) -> None:
    for k in SECRET_KEYS:
        if entry.get(k):
            entry[k] = MASK


def mask_secrets(doc: Any) -> Any:
    """Return a deep copy of *doc* with secret fields replaced by ``MASK``.

    Applies to top-level fields and to each item of ``models``. The
    input is never modified; non-dict documents are copied unchanged.
    """
    if not isinstance(doc, dict):
        return copy.deepcopy(doc)
    masked = copy.deepcopy(doc)
    _mask_fields(masked)
    models = masked.get("models")
    if isinstance(models, list):
        for m in models:
            if isinstance(m, dict):
                _mask_fields(m)
    return masked
