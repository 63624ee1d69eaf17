# -*- coding: utf-8 -*-
"""Provider management — registry, probes + connectivity tester."""

from .models import ProviderDefinition
from .probes import PROBES, Probe, ProbeRequest, select_probe
from .registry import (
    PROVIDERS,
    default_api_base,
    get_provider,
    list_providers,
)
from .tester import ProviderConnectivityTester

__all__ = [
    # models
    "ProviderDefinition",
    # registry
    "PROVIDERS",
    "default_api_base",
    "get_provider",
    "list_providers",
    # probes
    "PROBES",
    "Probe",
    "ProbeRequest",
    "select_probe",
    # tester
    "ProviderConnectivityTester",
]
