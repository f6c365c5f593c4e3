"""Logic for loading the declaration tree produced by the language front end.

The tree is a YAML document of the form::

    package:
      name: "@scope/my-package"
      comment: "..."
      exports:
        - name: Guid
          kind: class
          comment: "..."
          members:
            - name: equals
              kind: method
              parameters:
                - name: other
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from apidoc.api_item import ApiItem, ApiItemKind, ApiPackage
from apidoc.errors import DeclarationFormatError


def comment_text(value: Any) -> str:
    """Join a comment given as a string or a list of lines."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return "\n".join(comment_text(x) for x in value)
    return str(value)


def _parse_kind(raw: dict[str, Any], default: ApiItemKind | None) -> ApiItemKind:
    kind = raw.get("kind")
    if kind is None:
        if default is None:
            msg = f'Declaration "{raw.get("name")}" has no kind'
            raise DeclarationFormatError(msg)
        return default
    try:
        return ApiItemKind(str(kind).lower())
    except ValueError as exc:
        msg = f'Declaration "{raw.get("name")}" has an unknown kind: {kind}'
        raise DeclarationFormatError(msg) from exc


def iter_declarations(entries: Any) -> Iterable[dict[str, Any]]:
    """Iterate over the well-formed entries of a declaration list."""
    for entry in entries or []:
        if isinstance(entry, dict) and entry.get("name"):
            yield entry


def build_item(raw: dict[str, Any], default_kind: ApiItemKind | None = None) -> ApiItem:
    """Build one item and its nested members and parameters."""
    item = ApiItem(
        name=str(raw["name"]),
        kind=_parse_kind(raw, default_kind),
        doc_comment=comment_text(raw.get("comment")),
        signature=str(raw.get("signature") or ""),
        location=str(raw.get("location") or ""),
    )
    for member in iter_declarations(raw.get("members")):
        item.add_member(build_item(member))
    for parameter in iter_declarations(raw.get("parameters")):
        item.add_parameter(build_item(parameter, ApiItemKind.PARAMETER))
    return item


def build_package(doc: dict[str, Any]) -> ApiPackage:
    """Build the package tree from an already parsed declaration document."""
    raw = doc.get("package")
    if not isinstance(raw, dict) or not raw.get("name"):
        msg = 'The declaration document must have a "package" entry with a name'
        raise DeclarationFormatError(msg)

    package = ApiPackage(
        name=str(raw["name"]),
        doc_comment=comment_text(raw.get("comment")),
        location=str(raw.get("location") or ""),
    )
    for export in iter_declarations(raw.get("exports")):
        package.add_member(build_item(export))
    return package


def load_declarations(path: Path) -> ApiPackage:
    """Load a declaration YAML file into an ApiPackage."""
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        msg = f"Declaration file {path} is not valid YAML: {exc}"
        raise DeclarationFormatError(msg) from exc
    if not isinstance(doc, dict):
        msg = f"Declaration file {path} is empty or not a mapping"
        raise DeclarationFormatError(msg)
    return build_package(doc)
