"""The capability Documentation needs to follow cross references."""

from collections.abc import Callable
from typing import Protocol

from apidoc.api_item import ApiPackage
from apidoc.reference_expression import ReferenceExpression
from apidoc.resolved_item import ResolvedItem


class ReferenceResolver(Protocol):
    """Looks up the item a reference expression points at.

    Implementations report misses through ``report_error`` and return None;
    they only raise for problems that must stop the build.
    """

    def resolve(
        self,
        reference: ReferenceExpression,
        local_package: ApiPackage,
        report_error: Callable[[str], None],
    ) -> ResolvedItem | None:
        """Return the referenced item, or None when it cannot be found."""
        ...
