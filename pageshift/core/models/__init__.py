"""
Domain models — Pydantic types for page transformation.

All models are re-exported here for convenient access:

    from pageshift.core.models import PageModule, Declaration, Shape, ParameterPolicy
"""

from pageshift.core.models.page import (
    Declaration,
    History,
    HistoryBatch,
    Import,
    ModuleHeader,
    PageModule,
    Signature,
    TextBlock,
)
from pageshift.core.models.settings import Settings
from pageshift.core.models.shape import (
    RESERVED_NAMES,
    SHAPE_TOKENS,
    Capability,
    ContextParam,
    ParameterPolicy,
    Shape,
)

__all__ = [
    # page.py
    "Declaration",
    "History",
    "HistoryBatch",
    "Import",
    "ModuleHeader",
    "PageModule",
    "Signature",
    "TextBlock",
    # settings.py
    "Settings",
    # shape.py
    "RESERVED_NAMES",
    "SHAPE_TOKENS",
    "Capability",
    "ContextParam",
    "ParameterPolicy",
    "Shape",
]
