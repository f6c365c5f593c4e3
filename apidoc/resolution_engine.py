"""Two-phase resolution of the documentation of a whole declaration tree.

Phase 1 parses every comment, children before their parents.  Phase 2 only
starts once phase 1 has finished for the entire tree; it validates links and
copies inherited documentation, completing local @inheritdoc sources before
the items that inherit from them.
"""

import logging
import re
from collections.abc import Callable
from enum import Enum
from typing import Any

from apidoc import doc_element_parser
from apidoc.api_item import (
    PREAPPROVABLE_KINDS,
    ApiItem,
    ApiItemKind,
    ApiPackage,
    iter_items,
)
from apidoc.api_tag import ApiTag
from apidoc.deep_merge import deep_merge
from apidoc.documentation import Documentation
from apidoc.error_reporter import ErrorReporter
from apidoc.load_config import DEFAULT_CONFIG
from apidoc.local_reference_resolver import LocalReferenceResolver
from apidoc.reference_resolver import ReferenceResolver

logger = logging.getLogger(__name__)

SUPPORTED_NAME_RE = re.compile(r"^[a-zA-Z_]+[a-zA-Z_0-9]*$")


class ResolutionState(Enum):
    """Progress of one item through a resolution phase."""

    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


def _location(item: ApiItem) -> str:
    return item.location or item.full_name


def _ignore(_message: str) -> None:
    pass


class ResolutionEngine:
    """Drives both documentation phases over the tree rooted at ``package``."""

    def __init__(
        self,
        package: ApiPackage,
        reference_resolver: ReferenceResolver,
        reporter: ErrorReporter,
        config: dict[str, Any] | None = None,
    ) -> None:
        """Resolve ``package`` with ``reference_resolver``, reporting to ``reporter``."""
        self.package = package
        self.reference_resolver = reference_resolver
        self.reporter = reporter
        self.config = deep_merge(DEFAULT_CONFIG, config or {})
        self.reference_states: dict[int, ResolutionState] = {}
        self.completion_states: dict[int, ResolutionState] = {}
        self._local = LocalReferenceResolver()

    def resolve(self) -> None:
        """Run phase 1 over the whole tree, then phase 2."""
        self.resolve_references()
        self.complete_initialization()

    # -----------------------------
    # Traversal
    # -----------------------------

    def _walk(
        self,
        root: ApiItem,
        states: dict[int, ResolutionState],
        dependencies: Callable[[ApiItem], list[ApiItem]],
        visit: Callable[[ApiItem], None],
    ) -> None:
        """Visit ``root`` after everything it depends on.

        Each stack entry is ``(item, expanded)``.  An item stays RESOLVING from
        its first pop until its expanded entry is popped again, so meeting it
        unexpanded in that window means it depends on itself.
        """
        stack: list[tuple[ApiItem, bool]] = [(root, False)]
        while stack:
            item, expanded = stack.pop()
            if expanded:
                visit(item)
                states[item.item_id] = ResolutionState.RESOLVED
                continue

            state = states.get(item.item_id, ResolutionState.UNRESOLVED)
            if state is ResolutionState.RESOLVED:
                continue
            if state is ResolutionState.RESOLVING:
                self.reporter.report("circular reference", _location(item))
                continue

            states[item.item_id] = ResolutionState.RESOLVING
            stack.append((item, True))
            stack.extend((dep, False) for dep in reversed(dependencies(item)))

    def state_of(
        self, item: ApiItem, states: dict[int, ResolutionState]
    ) -> ResolutionState:
        return states.get(item.item_id, ResolutionState.UNRESOLVED)

    # -----------------------------
    # Phase 1
    # -----------------------------

    def resolve_references(self) -> None:
        """Build the Documentation of every item, children first."""
        self._walk(
            self.package,
            self.reference_states,
            lambda item: item.children,
            self.on_resolve_references,
        )
        logger.debug("Parsed documentation for %d items", len(self.reference_states))

    def on_resolve_references(self, item: ApiItem) -> None:
        """Parse the comment of one item and apply the per-kind tag rules."""
        report_error = self.reporter.for_location(_location(item))
        doc = Documentation(
            item.doc_comment, self.reference_resolver, self.package, report_error
        )
        item.documentation = doc

        if item is self.package:
            if doc.api_tag is not ApiTag.NONE:
                report_error(
                    f"The {doc.api_tag.tag_name} tag is not allowed on the package, "
                    "which is always public"
                )
            doc.api_tag = ApiTag.PUBLIC
        elif item.is_top_level_export and doc.api_tag is ApiTag.NONE:
            rule = self.config.get("validation", {}).get("missing_release_tags")
            # Items that failed to parse already have an error
            if rule == "error" and not doc.failed_to_parse:
                report_error(
                    "A release tag (@alpha, @beta, @public, @internal) must be "
                    f"specified for {item.name}"
                )
            doc.api_tag = ApiTag.PUBLIC

        if doc.preapproved and item.kind not in PREAPPROVABLE_KINDS:
            report_error(
                "The @preapproved tag may only be applied to classes and interfaces"
            )
            doc.preapproved = False

    # -----------------------------
    # Phase 2
    # -----------------------------

    def complete_initialization(self) -> None:
        """Complete every item, local @inheritdoc sources before their users."""
        for item in iter_items(self.package):
            self._walk(
                item,
                self.completion_states,
                self.inheritdoc_dependencies,
                self.on_complete_initialization,
            )

    def inheritdoc_dependencies(self, item: ApiItem) -> list[ApiItem]:
        """Local items whose documentation ``item`` copies."""
        doc = item.documentation
        if doc is None:
            return []
        dependencies = []
        for reference in doc.inheritdoc_references():
            if not reference.is_local:
                continue
            resolved = self._local.resolve(reference, self.package, _ignore)
            if resolved is not None and resolved.api_item is not None:
                dependencies.append(resolved.api_item)
        return dependencies

    def on_complete_initialization(self, item: ApiItem) -> None:
        """Finish one item's documentation and derive its summary flags."""
        doc = item.documentation
        if doc is None:
            return
        report_error = self.reporter.for_location(_location(item))
        doc.complete_initialization()

        item.inherited_api_tag = self._inherited_api_tag(item)
        item.inherited_deprecated = self._inherited_deprecated(item)

        summary_text = doc_element_parser.get_as_text(doc.summary, report_error)
        summary_text = summary_text.replace("  ", " ")
        min_length = self.config["documentation"]["min_summary_length"]
        item.needs_documentation = (
            item.should_have_documentation and len(summary_text) <= min_length
        )

        self._check_package_documentation(item, doc, report_error)
        self._check_name(item, doc)

    def _check_package_documentation(
        self,
        item: ApiItem,
        doc: Documentation,
        report_error: Callable[[str], None],
    ) -> None:
        if item.kind is ApiItemKind.PACKAGE:
            if item.doc_comment.strip() and not doc.is_package_documentation:
                report_error(
                    "A package comment was found, but it is missing the "
                    "@packagedocumentation tag"
                )
        elif doc.is_package_documentation:
            report_error(
                "The @packagedocumentation tag cannot be used for an item of type "
                f"{item.kind.value}"
            )

    def _check_name(self, item: ApiItem, doc: Documentation) -> None:
        item.supported_name = item.kind is ApiItemKind.PACKAGE or bool(
            SUPPORTED_NAME_RE.match(item.name)
        )
        if not item.supported_name:
            item.report_warning(
                f'The name "{item.name}" contains unsupported characters; '
                "API names should use only letters, numbers, and underscores"
            )

        if item.kind is ApiItemKind.PACKAGE:
            return
        if item.name.startswith("_"):
            if doc.api_tag not in (ApiTag.INTERNAL, ApiTag.NONE):
                item.report_warning(
                    'The underscore prefix ("_") should only be used with '
                    "definitions that are explicitly marked as @internal"
                )
        elif doc.api_tag is ApiTag.INTERNAL:
            item.report_warning(
                "Because this definition is explicitly marked as @internal, an "
                'underscore prefix ("_") should be added to its name'
            )

    def _inherited_api_tag(self, item: ApiItem) -> ApiTag:
        """The item's own API tag, else the nearest enclosing item's."""
        current: ApiItem | None = item
        while current is not None:
            doc = current.documentation
            if doc is not None and doc.api_tag is not ApiTag.NONE:
                return doc.api_tag
            current = current.parent
        return ApiTag.NONE

    def _inherited_deprecated(self, item: ApiItem) -> list:
        current: ApiItem | None = item
        while current is not None:
            doc = current.documentation
            if doc is not None and doc.deprecated:
                return list(doc.deprecated)
            current = current.parent
        return []
