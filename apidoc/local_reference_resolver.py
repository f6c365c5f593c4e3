"""Resolution of references that point into the package being analyzed."""

from collections.abc import Callable

from apidoc.api_item import ApiPackage
from apidoc.reference_expression import ReferenceExpression
from apidoc.resolved_item import ResolvedItem


class LocalReferenceResolver:
    """Finds exports and their members in the local declaration tree."""

    def resolve(
        self,
        reference: ReferenceExpression,
        local_package: ApiPackage,
        report_error: Callable[[str], None],
    ) -> ResolvedItem | None:
        """Look up ``Export`` or ``Export.member`` in ``local_package``."""
        api_item = local_package.get_member_item(reference.export_name)
        if api_item is None:
            report_error(
                f'Unable to find referenced export "{reference.to_export_string()}"'
            )
            return None

        if reference.member_name:
            # Only containers have members, anything else means a bad reference
            member = None
            if api_item.is_container:
                member = api_item.get_member_item(reference.member_name)
            if member is None:
                report_error(
                    f'Unable to find referenced member "{reference.to_member_string()}"'
                )
                return None
            api_item = member

        return ResolvedItem.from_api_item(api_item)
