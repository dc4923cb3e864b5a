"""
Utility modules for the catalog translator
"""

# Concurrency
from .async_gate import BoundedConcurrencyGate

# Catalog IO
from .catalog_io import (
    BACKUP_SUFFIX,
    CatalogError,
    CatalogReadError,
    CatalogWriteError,
    backup_path_for,
    load_catalog,
    encode_catalog,
    save_catalog,
)

# Strands Agent utilities (Bedrock backend)
from .strands_utils import (
    BedrockModelConfig,
    get_model,
    get_agent,
    extract_usage_from_agent,
    run_agent_async,
)

# Observability (OpenTelemetry-based)
from .observability import (
    get_tracer,
    annotate,
    span_event,
    mark_failed,
    run_span,
    entry_span,
    translation_span,
)

# Config loader
from .config import (
    ConfigLoader,
    get_config_loader,
    get_config,
    get_settings,
    deep_merge,
)

# Summary formatting
from .result_formatter import (
    format_duration,
    format_completion_lines,
    format_run_summary,
    save_run_summary,
)

__all__ = [
    # Concurrency
    "BoundedConcurrencyGate",
    # Catalog IO
    "BACKUP_SUFFIX",
    "CatalogError",
    "CatalogReadError",
    "CatalogWriteError",
    "backup_path_for",
    "load_catalog",
    "encode_catalog",
    "save_catalog",
    # Strands Agent utilities
    "BedrockModelConfig",
    "get_model",
    "get_agent",
    "extract_usage_from_agent",
    "run_agent_async",
    # Observability
    "get_tracer",
    "annotate",
    "span_event",
    "mark_failed",
    "run_span",
    "entry_span",
    "translation_span",
    # Config loader
    "ConfigLoader",
    "get_config_loader",
    "get_config",
    "get_settings",
    "deep_merge",
    # Summary formatting
    "format_duration",
    "format_completion_lines",
    "format_run_summary",
    "save_run_summary",
]
