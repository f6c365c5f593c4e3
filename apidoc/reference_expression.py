"""Parsing and formatting of API reference expressions.

A reference expression names an export, optionally a member of it, and
optionally the package that provides it::

    @microsoft/sp-core-library:Guid.equals
    sp-core-library:Guid
    Guid.equals
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from apidoc.errors import InvalidScopedNameError

EXPORT_NAME_RE = re.compile(r"^\w+")
MEMBER_NAME_RE = re.compile(r"\w+")


@dataclass(frozen=True)
class ScopedPackageName:
    """A package name split into its scope and bare name."""

    scope: str
    package: str


def parse_scoped_package_name(scoped_name: str) -> ScopedPackageName:
    """Split "@scope/package" into its parts; unscoped names have an empty scope."""
    if not scoped_name.startswith("@"):
        return ScopedPackageName(scope="", package=scoped_name)
    scope, slash, package = scoped_name.partition("/")
    if not slash:
        msg = f"Invalid scoped name: {scoped_name}"
        raise InvalidScopedNameError(msg)
    return ScopedPackageName(scope=scope, package=package)


@dataclass(frozen=True)
class ReferenceExpression:
    """The four parts of ``[@scope/package:]export[.member]``."""

    scope_name: str = ""
    package_name: str = ""
    export_name: str = ""
    member_name: str = ""

    @classmethod
    def from_parts(
        cls,
        *,
        scope_name: str = "",
        package_name: str = "",
        export_name: str,
        member_name: str = "",
    ) -> "ReferenceExpression":
        """Build a reference from already-separated parts."""
        return cls(
            scope_name=scope_name,
            package_name=package_name,
            export_name=export_name,
            member_name=member_name,
        )

    @classmethod
    def parse(
        cls, expression: str, report_error: Callable[[str], None]
    ) -> "ReferenceExpression | None":
        """Parse a reference expression, reporting problems and returning None.

        A scope without a "/package" part raises InvalidScopedNameError, since no
        reference can be built from it at all.
        """
        if " " in expression:
            report_error(
                f'The API reference expression "{expression}" must not contain spaces'
            )
            return None

        scope_name = ""
        package_name = ""
        remainder = expression
        package_part, colon, rest = expression.partition(":")
        if colon:
            scoped = parse_scoped_package_name(package_part)
            scope_name = scoped.scope
            package_name = scoped.package
            remainder = rest

        if ":" in remainder:
            report_error(
                f'The API reference expression "{expression}" contains more than '
                'one ":" separator'
            )
            return None

        export_name, _, member_name = remainder.partition(".")
        if not EXPORT_NAME_RE.match(export_name):
            report_error(
                "The API reference expression contains invalid characters: "
                f"{expression}"
            )
            return None
        if member_name and not MEMBER_NAME_RE.fullmatch(member_name):
            report_error(
                "The API reference expression contains an invalid member name: "
                f"{expression}"
            )
            return None

        return cls(
            scope_name=scope_name,
            package_name=package_name,
            export_name=export_name,
            member_name=member_name,
        )

    @property
    def is_local(self) -> bool:
        """True when the reference names no package, i.e. the current one."""
        return not self.scope_name and not self.package_name

    @property
    def package_key(self) -> str:
        """Key under which the referenced package is cached."""
        if self.scope_name:
            return f"{self.scope_name}/{self.package_name}"
        return self.package_name

    def to_scope_package_string(self) -> str:
        """Return "@scope/package" or "package"."""
        return self.package_key

    def to_export_string(self) -> str:
        """Return the package-qualified export, e.g. "@scope/package:Export"."""
        scope_package = self.to_scope_package_string()
        if scope_package:
            return f"{scope_package}:{self.export_name}"
        return self.export_name

    def to_member_string(self) -> str:
        """Return the fully qualified reference including the member."""
        export = self.to_export_string()
        if self.member_name:
            return f"{export}.{self.member_name}"
        return export

    def __str__(self) -> str:
        return self.to_member_string()
