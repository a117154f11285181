"""
loader.py - Read and write AppSpec documents on disk.

AppSpecs are persisted as JSON blobs keyed by app id. The loader also reads
YAML (``.yaml`` / ``.yml``), which is handier for hand-written fixtures.
Loading always validates structurally before parsing into the model.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from fastform.validator.errors import ValidationError

from .types import AppSpec
from .validator import validate_app_spec

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class AppSpecLoadError(ValueError):
    """Raised when a file cannot be read as a valid AppSpec."""

    def __init__(self, path: Path, reason: str, errors: Optional[List[ValidationError]] = None):
        self.path = path
        self.reason = reason
        self.errors = errors or []
        msg = f"{path}: {reason}"
        if self.errors:
            msg += ": " + "; ".join(str(e) for e in self.errors)
        super().__init__(msg)


def load_document(path: Union[str, Path]) -> Any:
    """Read the raw JSON or YAML document at `path`.

    Raises:
        FileNotFoundError: If the file does not exist.
        AppSpecLoadError: If the content does not parse.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"AppSpec file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise AppSpecLoadError(path, f"cannot parse document ({e})") from e


def load_app_spec(path: Union[str, Path]) -> AppSpec:
    """Load, validate and parse an AppSpec file.

    Raises:
        FileNotFoundError: If the file does not exist.
        AppSpecLoadError: If the document does not parse or is not a valid AppSpec.
    """
    path = Path(path)
    doc = load_document(path)

    result = validate_app_spec(doc)
    if result.has_errors():
        raise AppSpecLoadError(path, "not a valid AppSpec", result.sorted_errors())

    spec = AppSpec.from_dict(doc)
    logger.debug("Loaded AppSpec %s from %s", spec.id, path)
    return spec


def dump_app_spec(spec: Union[AppSpec, Dict[str, Any]], path: Optional[Union[str, Path]] = None) -> str:
    """Serialize an AppSpec as deterministic JSON (sorted keys, 2-space indent).

    Writes to `path` when given; always returns the text.
    """
    doc = spec.to_dict() if isinstance(spec, AppSpec) else spec
    text = json.dumps(doc, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
        logger.debug("Wrote AppSpec to %s", path)
    return text
