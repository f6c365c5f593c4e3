"""Data models for parsed documentation elements.

``DocElement`` is a closed union of three variants.  Code that walks elements
matches every variant and ends with ``assert_never`` so that adding a variant
is caught by the type checker.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, assert_never

from apidoc.reference_expression import ReferenceExpression


class LinkReferenceType(Enum):
    """Whether a link points at a URL or at an API item."""

    HREF = "href"
    CODE = "code"


@dataclass(frozen=True)
class TextElement:
    """A run of plain text."""

    value: str


@dataclass(frozen=True)
class LinkElement:
    """A {@link} target with optional display text."""

    reference_type: LinkReferenceType
    target_url: str = ""
    scope_name: str = ""
    package_name: str = ""
    export_name: str = ""
    member_name: str = ""
    value: str = ""

    @classmethod
    def href(cls, target_url: str, value: str = "") -> "LinkElement":
        """Create a link to a web address."""
        return cls(LinkReferenceType.HREF, target_url=target_url, value=value)

    @classmethod
    def code(cls, reference: ReferenceExpression, value: str = "") -> "LinkElement":
        """Create a link to an API item."""
        return cls(
            LinkReferenceType.CODE,
            scope_name=reference.scope_name,
            package_name=reference.package_name,
            export_name=reference.export_name,
            member_name=reference.member_name,
            value=value,
        )

    @property
    def reference(self) -> ReferenceExpression:
        """The API item a code link points at."""
        return ReferenceExpression.from_parts(
            scope_name=self.scope_name,
            package_name=self.package_name,
            export_name=self.export_name,
            member_name=self.member_name,
        )


@dataclass(frozen=True)
class SeeElement:
    """An @see group wrapping nested elements."""

    children: tuple["DocElement", ...] = field(default_factory=tuple)


DocElement = TextElement | LinkElement | SeeElement


def iter_code_links(elements: Iterable[DocElement]) -> Iterator[LinkElement]:
    """Yield every code link, including those nested in @see groups."""
    for element in elements:
        if isinstance(element, TextElement):
            continue
        elif isinstance(element, LinkElement):
            if element.reference_type is LinkReferenceType.CODE:
                yield element
        elif isinstance(element, SeeElement):
            yield from iter_code_links(element.children)
        else:
            assert_never(element)


def element_from_json(data: dict[str, Any]) -> DocElement | None:
    """Convert one doc element from an *.api.json descriptor."""
    kind = data.get("kind")
    if kind == "textDocElement":
        return TextElement(str(data.get("value", "")))
    if kind == "linkDocElement":
        if data.get("referenceType") == "href":
            return LinkElement.href(
                str(data.get("targetUrl", "")), str(data.get("value", ""))
            )
        return LinkElement(
            LinkReferenceType.CODE,
            scope_name=str(data.get("scopeName", "")),
            package_name=str(data.get("packageName", "")),
            export_name=str(data.get("exportName", "")),
            member_name=str(data.get("memberName", "")),
            value=str(data.get("value", "")),
        )
    if kind == "seeDocElement":
        return SeeElement(tuple(elements_from_json(data.get("seeElements") or [])))
    return None


def elements_from_json(items: Iterable[dict[str, Any]]) -> list[DocElement]:
    """Convert a descriptor element list, skipping unrecognized kinds."""
    result = []
    for item in items:
        element = element_from_json(item)
        if element is not None:
            result.append(element)
    return result


def element_to_json(element: DocElement) -> dict[str, Any]:
    """Convert one element to the *.api.json representation."""
    if isinstance(element, TextElement):
        return {"kind": "textDocElement", "value": element.value}
    elif isinstance(element, LinkElement):
        data: dict[str, Any] = {
            "kind": "linkDocElement",
            "referenceType": element.reference_type.value,
        }
        if element.reference_type is LinkReferenceType.HREF:
            data["targetUrl"] = element.target_url
        else:
            if element.scope_name:
                data["scopeName"] = element.scope_name
            data["packageName"] = element.package_name
            data["exportName"] = element.export_name
            if element.member_name:
                data["memberName"] = element.member_name
        if element.value:
            data["value"] = element.value
        return data
    elif isinstance(element, SeeElement):
        return {
            "kind": "seeDocElement",
            "seeElements": elements_to_json(element.children),
        }
    else:
        assert_never(element)


def elements_to_json(elements: Iterable[DocElement]) -> list[dict[str, Any]]:
    return [element_to_json(element) for element in elements]


@dataclass
class Param:
    """The documentation for one function parameter."""

    name: str
    description: list[DocElement] = field(default_factory=list)
