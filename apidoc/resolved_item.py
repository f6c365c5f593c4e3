"""A uniform read view over local tree items and external descriptor entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from apidoc.api_item import ApiItem, ApiItemKind
from apidoc.api_tag import ApiTag
from apidoc.doc_elements import DocElement, Param, elements_from_json

if TYPE_CHECKING:
    from apidoc.documentation import Documentation

JSON_KINDS = {
    "class": ApiItemKind.CLASS,
    "interface": ApiItemKind.INTERFACE,
    "enum": ApiItemKind.ENUM,
    "function": ApiItemKind.FUNCTION,
    "package": ApiItemKind.PACKAGE,
    "property": ApiItemKind.PROPERTY,
    "method": ApiItemKind.METHOD,
    "constructor": ApiItemKind.CONSTRUCTOR,
}


@dataclass(frozen=True)
class ResolvedItem:
    """The documentation-relevant state of a referenced API item.

    ``api_item`` is set only when the item lives in the local declaration tree;
    entries loaded from an *.api.json file have no live node behind them.
    """

    kind: ApiItemKind | None
    summary: list[DocElement] = field(default_factory=list)
    remarks: list[DocElement] = field(default_factory=list)
    deprecated: list[DocElement] = field(default_factory=list)
    params: dict[str, Param] = field(default_factory=dict)
    returns: list[DocElement] = field(default_factory=list)
    api_tag: ApiTag = ApiTag.NONE
    api_item: ApiItem | None = None

    @classmethod
    def from_api_item(cls, api_item: ApiItem) -> ResolvedItem:
        """Project a local tree item."""
        doc: Documentation | None = api_item.documentation
        if doc is None:
            return cls(kind=api_item.kind, api_item=api_item)
        # Copies, so the projection does not change with the item's documentation
        return cls(
            kind=api_item.kind,
            summary=list(doc.summary),
            remarks=list(doc.remarks),
            deprecated=list(doc.deprecated),
            params={
                name: Param(name=p.name, description=list(p.description))
                for name, p in doc.params.items()
            },
            returns=list(doc.returns),
            api_tag=doc.api_tag,
            api_item=api_item,
        )

    @classmethod
    def from_json(cls, doc_item: dict[str, Any]) -> ResolvedItem:
        """Project an entry of an external package descriptor.

        Descriptors only ever contain released items, so anything not marked
        beta is public.
        """
        params = {}
        for name, raw in (doc_item.get("parameters") or {}).items():
            description = elements_from_json((raw or {}).get("description") or [])
            params[name] = Param(name=name, description=description)
        return_value = doc_item.get("returnValue") or {}
        return cls(
            kind=JSON_KINDS.get(str(doc_item.get("kind", ""))),
            summary=elements_from_json(doc_item.get("summary") or []),
            remarks=elements_from_json(doc_item.get("remarks") or []),
            deprecated=elements_from_json(doc_item.get("deprecatedMessage") or []),
            params=params,
            returns=elements_from_json(return_value.get("description") or []),
            api_tag=ApiTag.BETA if doc_item.get("isBeta") else ApiTag.PUBLIC,
        )
