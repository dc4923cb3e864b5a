"""
Data models for the catalog translation workflow
"""

from .unit_state import UnitState, COMPLETED_STATES, is_completed_state
from .catalog import StringCatalog, LocalizationGroup, LocalizationUnit, StringUnit
from .task import TranslationTask, TranslationOutcome

__all__ = [
    # Unit state
    "UnitState",
    "COMPLETED_STATES",
    "is_completed_state",

    # Catalog
    "StringCatalog",
    "LocalizationGroup",
    "LocalizationUnit",
    "StringUnit",

    # Tasks
    "TranslationTask",
    "TranslationOutcome",
]
