"""Orchestration logic for resolving the documentation of a declaration tree."""

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from apidoc.api_item import ApiItem, ApiPackage, iter_items
from apidoc.doc_item_loader import DocItemLoader
from apidoc.doc_elements import elements_to_json
from apidoc.error_reporter import ErrorReporter
from apidoc.load_config import load_config
from apidoc.load_declarations import load_declarations
from apidoc.resolution_engine import ResolutionEngine

logger = logging.getLogger(__name__)


def run_resolution(args: argparse.Namespace) -> int:
    """Execute both resolution phases and report what was found.

    Returns 1 when any error was reported, 0 otherwise.
    """
    if not args.declarations.exists():
        msg = f"Declaration file not found: {args.declarations}"
        raise SystemExit(msg)

    config = load_config(args.config)
    package = load_declarations(args.declarations)
    project_folder = args.project_folder or args.declarations.parent
    reporter = resolve_package(package, project_folder, config)

    if args.json:
        _write_report(package, reporter, args.json)

    for error in reporter.errors:
        print(error)
    items = iter_items(package)
    undocumented = sum(1 for item in items if item.needs_documentation)
    print(
        f"Resolved {len(items)} items of {package.name}: "
        f"{len(reporter)} errors, {undocumented} items need documentation"
    )
    return 1 if reporter.errors else 0


def resolve_package(
    package: ApiPackage, project_folder: Path, config: dict[str, Any]
) -> ErrorReporter:
    """Resolve ``package`` against the npm project in ``project_folder``."""
    loader = DocItemLoader(project_folder, config)
    reporter = ErrorReporter()
    engine = ResolutionEngine(package, loader, reporter, config)
    engine.resolve()
    logger.info(
        "Loaded %d external packages (%d cache hits)",
        len(loader.external.cache),
        loader.external.cache.hits,
    )
    return reporter


def item_to_json(item: ApiItem) -> dict[str, Any]:
    """Serialize the resolved documentation of one item."""
    data: dict[str, Any] = {
        "name": item.full_name,
        "kind": item.kind.value,
        "apiTag": item.inherited_api_tag.value,
        "needsDocumentation": item.needs_documentation,
    }
    doc = item.documentation
    if doc is not None:
        data["summary"] = elements_to_json(doc.summary)
        data["remarks"] = elements_to_json(doc.remarks)
        data["returns"] = elements_to_json(doc.returns)
        data["params"] = {
            name: elements_to_json(param.description)
            for name, param in doc.params.items()
        }
        data["isBeta"] = doc.is_beta
        data["isReadOnly"] = doc.is_read_only
        data["preapproved"] = doc.preapproved
    if item.inherited_deprecated:
        data["deprecatedMessage"] = elements_to_json(item.inherited_deprecated)
    if item.warnings:
        data["warnings"] = list(item.warnings)
    return data


def _write_report(package: ApiPackage, reporter: ErrorReporter, path: Path) -> None:
    """Write the resolved model and the reported errors as JSON."""
    report = {
        "package": package.name,
        "items": [item_to_json(item) for item in iter_items(package)],
        "errors": [
            {"message": error.message, "location": error.location}
            for error in reporter.errors
        ],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)
    logger.info("Wrote resolution report to %s", path)
