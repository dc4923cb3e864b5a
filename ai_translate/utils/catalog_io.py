"""
Catalog IO - Read and write .xcstrings files

Output matches Xcode's own formatting: sorted keys, two-space indent,
`"key" : value` separators, no ASCII escaping.
"""

import json
import logging
import os
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from ai_translate.models.catalog import StringCatalog

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".original"


class CatalogError(Exception):
    """Fatal catalog-level failure; aborts the run"""


class CatalogReadError(CatalogError):
    """Input file missing, unreadable, or not a valid string catalog"""


class CatalogWriteError(CatalogError):
    """Output could not be encoded or written"""


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def load_catalog(path: Union[str, Path]) -> StringCatalog:
    """
    Load and validate a string catalog.

    Raises:
        CatalogReadError: On IO, JSON, or schema errors
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise CatalogReadError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogReadError(f"Malformed JSON in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise CatalogReadError(f"{path} is not valid UTF-8: {e}") from e

    try:
        catalog = StringCatalog.model_validate(raw)
    except ValidationError as e:
        raise CatalogReadError(f"Invalid string catalog {path}: {e}") from e

    logger.debug(f"Loaded {len(catalog.strings)} entries from {path}")
    return catalog


def encode_catalog(catalog: StringCatalog) -> str:
    """Serialize a catalog the way Xcode writes it"""
    return json.dumps(
        catalog.to_json_dict(),
        ensure_ascii=False,
        indent=2,
        sort_keys=True,
        separators=(",", " : "),
    ) + "\n"


def backup_file(path: Path) -> Path:
    """Move `path` to `<path>.original`, replacing an older backup"""
    backup = backup_path_for(path)
    if backup.exists():
        backup.unlink()
    os.replace(path, backup)
    logger.info(f"Backup created: {backup}")
    return backup


def save_catalog(
    catalog: StringCatalog,
    path: Union[str, Path],
    backup: bool = True
) -> None:
    """
    Write the catalog back to disk.

    The document is encoded before anything on disk is touched, so an encoding
    failure leaves the input untouched.

    Args:
        catalog: Catalog to write
        path: Destination (normally the input file)
        backup: Move the existing file to `<path>.original` first

    Raises:
        CatalogWriteError: On encoding or IO errors
    """
    path = Path(path)
    try:
        data = encode_catalog(catalog)
    except (TypeError, ValueError) as e:
        raise CatalogWriteError(f"Cannot encode catalog: {e}") from e

    try:
        if backup and path.exists():
            backup_file(path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(data)
    except OSError as e:
        raise CatalogWriteError(f"Cannot write {path}: {e}") from e
