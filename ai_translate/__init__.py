"""
AI Translate

LLM-backed translator for Xcode String Catalogs (.xcstrings) with:
- Per-entry fan-out across target languages, bounded by a FIFO concurrency gate
- Ollama (default) and AWS Bedrock backends
- Skipping of already-translated units, unless forced
- Xcode-compatible output with a `.original` backup
"""

__version__ = "0.1.0"

# Re-export key components for convenience
from .models import (
    StringCatalog,
    LocalizationGroup,
    LocalizationUnit,
    StringUnit,
    UnitState,
)
from .utils import (
    BoundedConcurrencyGate,
    load_catalog,
    save_catalog,
    get_settings,
)
from .prompts import (
    load_prompt,
    get_template_loader,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "StringCatalog",
    "LocalizationGroup",
    "LocalizationUnit",
    "StringUnit",
    "UnitState",
    # Utils
    "BoundedConcurrencyGate",
    "load_catalog",
    "save_catalog",
    "get_settings",
    # Prompts
    "load_prompt",
    "get_template_loader",
]
