"""Data models for the declaration tree handed over by the language front end."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from apidoc.api_tag import ApiTag

if TYPE_CHECKING:
    from apidoc.documentation import Documentation

_ids = itertools.count(1)


class ApiItemKind(Enum):
    """The type of declaration an ApiItem represents."""

    CLASS = "class"
    ENUM = "enum"
    ENUM_VALUE = "enum_value"
    FUNCTION = "function"
    INTERFACE = "interface"
    METHOD = "method"
    PACKAGE = "package"
    PARAMETER = "parameter"
    PROPERTY = "property"
    TYPE_LITERAL = "type_literal"
    CONSTRUCTOR = "constructor"


CONTAINER_KINDS = frozenset(
    {
        ApiItemKind.CLASS,
        ApiItemKind.ENUM,
        ApiItemKind.INTERFACE,
        ApiItemKind.PACKAGE,
        ApiItemKind.TYPE_LITERAL,
    }
)

# Kinds whose @inheritdoc also copies parameters and the return description
CALLABLE_KINDS = frozenset(
    {ApiItemKind.FUNCTION, ApiItemKind.METHOD, ApiItemKind.CONSTRUCTOR}
)

PREAPPROVABLE_KINDS = frozenset({ApiItemKind.CLASS, ApiItemKind.INTERFACE})


@dataclass(eq=False)
class ApiItem:
    """One exported declaration and its documentation."""

    name: str
    kind: ApiItemKind
    doc_comment: str = ""
    signature: str = ""
    location: str = ""
    members: dict[str, ApiItem] = field(default_factory=dict)
    parameters: list[ApiItem] = field(default_factory=list)
    parent: ApiItem | None = field(default=None, repr=False)
    item_id: int = field(default_factory=lambda: next(_ids))
    documentation: Documentation | None = field(default=None, repr=False)
    needs_documentation: bool = False
    supported_name: bool = True
    # Effective values after falling back to the enclosing containers
    inherited_api_tag: ApiTag = ApiTag.NONE
    inherited_deprecated: list = field(default_factory=list, repr=False)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_container(self) -> bool:
        """True for kinds that own named member items."""
        return self.kind in CONTAINER_KINDS

    @property
    def should_have_documentation(self) -> bool:
        """Parameters are documented through their function's @param tags."""
        return self.kind is not ApiItemKind.PARAMETER

    @property
    def children(self) -> list[ApiItem]:
        """Member items followed by parameters, in declaration order."""
        return [*self.members.values(), *self.parameters]

    @property
    def is_top_level_export(self) -> bool:
        """True for items declared directly in the package."""
        return self.parent is not None and self.parent.kind is ApiItemKind.PACKAGE

    @property
    def full_name(self) -> str:
        """Dotted name below the package, e.g. "Guid.equals"."""
        names = []
        item: ApiItem | None = self
        while item is not None and item.kind is not ApiItemKind.PACKAGE:
            names.append(item.name)
            item = item.parent
        return ".".join(reversed(names)) or self.name

    def add_member(self, member: ApiItem) -> ApiItem:
        """Attach a named member item."""
        member.parent = self
        self.members[member.name] = member
        return member

    def add_parameter(self, parameter: ApiItem) -> ApiItem:
        """Attach a parameter item."""
        parameter.parent = self
        self.parameters.append(parameter)
        return parameter

    def get_member_item(self, name: str) -> ApiItem | None:
        """Return the member with the given name, if any."""
        return self.members.get(name)

    def report_warning(self, message: str) -> None:
        """Attach a non-fatal note that does not count as an error."""
        self.warnings.append(message)


class ApiPackage(ApiItem):
    """The root of the declaration tree; its members are the package exports."""

    def __init__(
        self, name: str, doc_comment: str = "", location: str = ""
    ) -> None:
        """Create an empty package."""
        super().__init__(
            name=name,
            kind=ApiItemKind.PACKAGE,
            doc_comment=doc_comment,
            location=location,
        )


def iter_items(root: ApiItem) -> list[ApiItem]:
    """Return the root and all of its descendants in pre-order."""
    result = []
    stack = [root]
    while stack:
        item = stack.pop()
        result.append(item)
        stack.extend(reversed(item.children))
    return result
