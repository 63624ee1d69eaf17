# -*- coding: utf-8 -*-
from .llm import router as llm_router

__all__ = ["llm_router"]
