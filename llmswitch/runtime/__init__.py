# -*- coding: utf-8 -*-
from .switch import RuntimeAdaptor, RuntimeSwitchCoordinator

__all__ = [
    "RuntimeAdaptor",
    "RuntimeSwitchCoordinator",
]
