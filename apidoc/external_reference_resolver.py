"""Resolution of references into other packages' *.api.json descriptors."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from apidoc.api_item import ApiPackage
from apidoc.deep_merge import deep_merge
from apidoc.load_config import DEFAULT_CONFIG
from apidoc.load_descriptor import load_descriptor, load_schema
from apidoc.package_cache import PackageCache
from apidoc.reference_expression import ReferenceExpression
from apidoc.resolved_item import ResolvedItem

logger = logging.getLogger(__name__)

# Which descriptor key holds the members of each export kind
MEMBER_KEYS = {"class": "members", "interface": "members", "enum": "values"}


class ExternalReferenceResolver:
    """Finds exports of installed dependencies through their API descriptors."""

    def __init__(
        self,
        project_folder: Path,
        config: dict[str, Any] | None = None,
        cache: PackageCache | None = None,
    ) -> None:
        """Resolve packages below ``project_folder``/node_modules."""
        self.project_folder = Path(project_folder)
        self.config = deep_merge(DEFAULT_CONFIG, config or {})
        self.cache = cache if cache is not None else PackageCache()
        self._schema: dict[str, Any] | None = None

    @property
    def schema(self) -> dict[str, Any]:
        """The descriptor schema, loaded on first use."""
        if self._schema is None:
            schema_path = self.config["loader"].get("schema_path")
            self._schema = load_schema(Path(schema_path) if schema_path else None)
        return self._schema

    def resolve(
        self,
        reference: ReferenceExpression,
        local_package: ApiPackage,
        report_error: Callable[[str], None],
    ) -> ResolvedItem | None:
        """Look up ``Export`` or ``Export.member`` in the referenced package."""
        descriptor = self.get_package(reference, report_error)
        if descriptor is None:
            return None

        exports = descriptor.get("exports") or {}
        doc_item = exports.get(reference.export_name)
        if doc_item is None:
            report_error(
                f'Unable to find referenced export "{reference.to_export_string()}"'
            )
            return None

        if reference.member_name:
            member_key = MEMBER_KEYS.get(str(doc_item.get("kind", "")))
            members = (doc_item.get(member_key) or {}) if member_key else {}
            member = members.get(reference.member_name)
            if member is None:
                report_error(
                    f'Unable to find referenced member "{reference.to_member_string()}"'
                )
                return None
            doc_item = member

        return ResolvedItem.from_json(doc_item)

    def package_path(self, reference: ReferenceExpression) -> Path:
        """Path of the descriptor a reference's package would ship."""
        loader = self.config["loader"]
        folder = self.project_folder / loader["node_modules_dir"]
        if reference.scope_name:
            folder = folder / reference.scope_name
        package = reference.package_name
        return folder / package / loader["dist_dir"] / f"{package}.api.json"

    def get_package(
        self, reference: ReferenceExpression, report_error: Callable[[str], None]
    ) -> dict[str, Any] | None:
        """Return the referenced package's descriptor, loading it at most once."""
        package_key = reference.package_key
        descriptor = self.cache.lookup(package_key)
        if descriptor is not None:
            return descriptor

        path = self.package_path(reference)
        if not path.exists():
            report_error(
                "Unable to find referenced package "
                f'"{reference.to_scope_package_string()}"'
            )
            return None

        return self.load_package_into_cache(package_key, path)

    def load_package_into_cache(self, package_key: str, path: Path) -> dict[str, Any]:
        """Validate and cache a descriptor; schema violations raise."""
        descriptor = load_descriptor(path, self.schema)
        self.cache.store(package_key, descriptor)
        return descriptor
