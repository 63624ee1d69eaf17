# -*- coding: utf-8 -*-
"""Model provider configuration with secret isolation and live switching."""

__version__ = "0.1.0"
