"""Entry point for resolving reference expressions against any package."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from apidoc.api_item import ApiPackage
from apidoc.errors import ProjectNotFoundError
from apidoc.external_reference_resolver import ExternalReferenceResolver
from apidoc.local_reference_resolver import LocalReferenceResolver
from apidoc.reference_expression import ReferenceExpression
from apidoc.resolved_item import ResolvedItem

logger = logging.getLogger(__name__)


class DocItemLoader:
    """Picks the local or the external resolver for each reference.

    References without a scope or package name point into the package being
    analyzed; all others are looked up in the dependency's *.api.json file
    below the project folder.
    """

    def __init__(
        self, project_folder: Path | str, config: dict[str, Any] | None = None
    ) -> None:
        """Create a loader for the npm project rooted at ``project_folder``."""
        folder = Path(project_folder)
        if not (folder / "package.json").exists():
            msg = f"An NPM project was not found in the specified folder: {folder}"
            raise ProjectNotFoundError(msg)
        self.project_folder = folder
        self.local = LocalReferenceResolver()
        self.external = ExternalReferenceResolver(folder, config)

    def resolve(
        self,
        reference: ReferenceExpression,
        local_package: ApiPackage,
        report_error: Callable[[str], None],
    ) -> ResolvedItem | None:
        """Resolve ``reference`` from the point of view of ``local_package``."""
        logger.debug("Resolving reference %s", reference)
        if reference.is_local:
            return self.local.resolve(reference, local_package, report_error)
        return self.external.resolve(reference, local_package, report_error)
