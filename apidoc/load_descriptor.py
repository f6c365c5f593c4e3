"""Logic for loading and validating external *.api.json descriptors."""

import json
import logging
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator

from apidoc.errors import DescriptorValidationError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "schemas" / "api-json-schema.json"


def load_schema(path: Path | None = None) -> dict[str, Any]:
    """Load the descriptor JSON schema, defaulting to the bundled one."""
    schema_path = path or DEFAULT_SCHEMA_PATH
    return json.loads(schema_path.read_text(encoding="utf-8"))


def validate_descriptor(
    descriptor: Any, schema: dict[str, Any], source: Path | str
) -> None:
    """Raise DescriptorValidationError if ``descriptor`` does not match ``schema``."""
    validator = Draft7Validator(schema)
    errors = sorted(
        validator.iter_errors(descriptor), key=lambda e: [str(p) for p in e.path]
    )
    if not errors:
        return

    details = []
    for error in errors:
        where = "/".join(str(p) for p in error.path) or "<root>"
        details.append(f"  {where}: {error.message}")
    msg = (
        "Descriptor validation error - file does not conform to the api-json "
        f"schema:\n{source}\n" + "\n".join(details)
    )
    logger.error("%s", msg)
    raise DescriptorValidationError(msg)


def load_descriptor(path: Path, schema: dict[str, Any]) -> dict[str, Any]:
    """Read, parse and validate one descriptor file."""
    logger.info("Loading API descriptor %s", path)
    try:
        descriptor = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Descriptor {path} is not valid JSON: {exc}"
        raise DescriptorValidationError(msg) from exc
    validate_descriptor(descriptor, schema, path)
    return descriptor
