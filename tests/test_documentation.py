"""Tests for parsing doc comments into Documentation objects."""

from collections.abc import Callable

import pytest

from apidoc.api_item import ApiItemKind, ApiPackage
from apidoc.api_tag import ApiTag
from apidoc.doc_elements import LinkElement, LinkReferenceType, Param, TextElement
from apidoc.documentation import Documentation
from apidoc.reference_expression import ReferenceExpression
from apidoc.resolved_item import ResolvedItem


class FakeResolver:
    """Resolver returning canned items keyed by reference string."""

    def __init__(self, items: dict[str, ResolvedItem] | None = None) -> None:
        self.items = items or {}
        self.calls: list[str] = []

    def resolve(
        self,
        reference: ReferenceExpression,
        local_package: ApiPackage,
        report_error: Callable[[str], None],
    ) -> ResolvedItem | None:
        self.calls.append(str(reference))
        item = self.items.get(str(reference))
        if item is None:
            report_error(f'Unable to find referenced export "{reference}"')
        return item


def make_doc(
    comment: str, resolver: FakeResolver | None = None
) -> tuple[Documentation, list[str]]:
    errors: list[str] = []
    doc = Documentation(
        comment, resolver or FakeResolver(), ApiPackage("test-package"), errors.append
    )
    return doc, errors


def test_summary_and_remarks() -> None:
    """Verify that the leading run is the summary and @remarks the remarks."""
    doc, errors = make_doc("This is the summary. @remarks Some remarks.")
    assert doc.summary == [TextElement("This is the summary.")]
    assert doc.remarks == [TextElement("Some remarks.")]
    assert errors == []
    assert not doc.failed_to_parse


def test_returns() -> None:
    """Verify that @returns captures the following run."""
    doc, errors = make_doc("Counts. @returns the number of items")
    assert doc.returns == [TextElement("the number of items")]
    assert errors == []


def test_duplicate_api_tags_last_wins() -> None:
    """Verify that two API tags are reported and the last one is kept."""
    doc, errors = make_doc("Summary text. @public @beta")
    assert doc.api_tag is ApiTag.BETA
    assert errors == ["More than one API tag (@alpha, @beta, etc) was specified"]


@pytest.mark.parametrize(
    ("tag", "expected"),
    [
        ("@public", ApiTag.PUBLIC),
        ("@beta", ApiTag.BETA),
        ("@alpha", ApiTag.ALPHA),
        ("@internal", ApiTag.INTERNAL),
    ],
)
def test_single_api_tag(tag: str, expected: ApiTag) -> None:
    """Verify each API tag maps to its value."""
    doc, errors = make_doc(f"Summary text. {tag}")
    assert doc.api_tag is expected
    assert errors == []


def test_empty_deprecated_is_an_error() -> None:
    """Verify that @deprecated needs a message."""
    doc, errors = make_doc("Summary text. @deprecated")
    assert doc.deprecated == []
    assert errors == ["A deprecation message is required after the @deprecated tag"]
    assert doc.failed_to_parse


def test_deprecated_message() -> None:
    """Verify that the deprecation message is kept."""
    doc, errors = make_doc("Summary text. @deprecated Use Other instead.")
    assert doc.deprecated == [TextElement("Use Other instead.")]
    assert errors == []


def test_param_with_description() -> None:
    """Verify the name and description of an @param block."""
    doc, errors = make_doc("Adds. @param value - the value {@link Foo} to add")
    assert errors == []
    assert doc.params == {
        "value": Param(
            name="value",
            description=[
                TextElement("the value"),
                LinkElement(LinkReferenceType.CODE, export_name="Foo"),
                TextElement("to add"),
            ],
        )
    }
    assert [str(link.reference) for link in doc.incomplete_links] == ["Foo"]


def test_param_without_hyphen() -> None:
    """Verify that a missing hyphen is reported."""
    doc, errors = make_doc("Adds. @param value the value")
    assert doc.params == {}
    assert len(errors) == 1
    assert "missing the hyphen" in errors[0]


def test_param_with_empty_description() -> None:
    """Verify that an empty description is reported separately."""
    doc, errors = make_doc("Adds. @param value -")
    assert doc.params == {}
    assert len(errors) == 1
    assert "empty description" in errors[0]


def test_param_without_text() -> None:
    """Verify that @param at the end of the comment is reported."""
    doc, errors = make_doc("Adds. @param")
    assert errors == ["The @param tag is missing a parameter description"]


def test_preapproved_requires_internal() -> None:
    """Verify that @preapproved is cleared unless the item is @internal."""
    doc, errors = make_doc("Summary text. @preapproved")
    assert not doc.preapproved
    assert errors == [
        "The @preapproved tag may only be applied to @internal definitions"
    ]

    doc, errors = make_doc("Summary text. @internal @preapproved")
    assert doc.preapproved
    assert errors == []


def test_boolean_flags() -> None:
    """Verify @readonly, @betadocumentation and @packagedocumentation."""
    doc, errors = make_doc(
        "Summary text. @readonly @betadocumentation @packagedocumentation"
    )
    assert doc.is_read_only
    assert doc.is_beta
    assert doc.is_package_documentation
    assert errors == []


def test_internalremarks_are_discarded() -> None:
    """Verify that @internalremarks content does not appear anywhere."""
    doc, errors = make_doc("Summary text. @internalremarks secret notes")
    assert doc.summary == [TextElement("Summary text.")]
    assert doc.remarks == []
    assert errors == []


@pytest.mark.parametrize(
    ("comment", "message"),
    [
        ("Summary. @foo", 'The tag "@foo" is not supported'),
        ("Summary. @link", 'The tag "@link" must use the inline tag notation'),
        ("Summary. {@remarks x}", 'The tag "@remarks" must use the block tag notation'),
    ],
)
def test_misused_tags(comment: str, message: str) -> None:
    """Verify the messages for unknown and misplaced tags."""
    _doc, errors = make_doc(comment)
    assert len(errors) == 1
    assert errors[0].startswith(message)


def test_stray_text_is_truncated() -> None:
    """Verify that unexpected text is reported and shortened."""
    stray = "this text does not belong to any tag and is much too long"
    _doc, errors = make_doc(f"Summary. @readonly {stray}")
    assert errors == [f'Unexpected text in doc comment: "{stray[:37].strip()}..."']


def test_inheritdoc_with_summary_is_an_error() -> None:
    """Verify that a summary next to {@inheritdoc} is reported."""
    doc, errors = make_doc("Own summary {@inheritdoc Foo}")
    assert doc.is_doc_inherited
    assert len(errors) == 1
    assert "summary block is not allowed" in errors[0]


def test_remarks_after_inheritdoc_is_an_error() -> None:
    """Verify that @remarks may not follow {@inheritdoc}."""
    _doc, errors = make_doc("{@inheritdoc Foo} @remarks Extra")
    assert len(errors) == 1
    assert "@remarks tag may not be used" in errors[0]


@pytest.mark.parametrize(
    ("comment", "tag"),
    [
        ("@remarks Some remarks here. {@inheritdoc Foo}", "@remarks"),
        ("@returns the value {@inheritdoc Foo}", "@returns"),
        ("@param x - the x {@inheritdoc Foo}", "@param"),
    ],
)
def test_content_before_inheritdoc_is_an_error(comment: str, tag: str) -> None:
    """Verify that content written before {@inheritdoc} is reported."""
    doc, errors = make_doc(comment)
    assert doc.is_doc_inherited
    assert errors == [
        f"The {tag} tag may not be used because this state is provided by "
        "the @inheritdoc target"
    ]


@pytest.mark.parametrize("tag", ["@see", "@summary"])
def test_summary_tags_after_inheritdoc_are_errors(tag: str) -> None:
    """Verify that @see and @summary may not follow {@inheritdoc}."""
    _doc, errors = make_doc(f"{{@inheritdoc Foo}} @public {tag} Bar text")
    assert errors == [
        f"The {tag} tag may not be used because this state is provided by "
        "the @inheritdoc target"
    ]


def test_references_wait_for_second_phase() -> None:
    """Verify that nothing is resolved while the comment is parsed."""
    resolver = FakeResolver()
    doc, errors = make_doc("See {@link Foo}. {@inheritdoc Bar}", resolver)
    assert resolver.calls == []
    assert len(doc.incomplete_links) == 1
    assert len(doc.incomplete_inheritdocs) == 1
    assert [str(r) for r in doc.inheritdoc_references()] == ["Bar"]


def test_link_to_internal_item() -> None:
    """Verify that links to @internal items are reported in phase 2."""
    resolver = FakeResolver(
        {"Foo": ResolvedItem(kind=ApiItemKind.CLASS, api_tag=ApiTag.INTERNAL)}
    )
    doc, errors = make_doc("Uses {@link Foo}.", resolver)
    assert errors == []
    doc.complete_initialization()
    assert len(errors) == 1
    assert 'cannot link to Internal item "Foo"' in errors[0]
    assert doc.incomplete_links == []


def test_link_to_missing_item() -> None:
    """Verify that unresolvable links are reported by the resolver."""
    doc, errors = make_doc("Uses {@link pkg:Missing}.")
    doc.complete_initialization()
    assert errors == ['Unable to find referenced export "pkg:Missing"']


def test_inheritdoc_copies_callable_docs() -> None:
    """Verify that summary, remarks, params and returns are inherited."""
    source = ResolvedItem(
        kind=ApiItemKind.METHOD,
        summary=[TextElement("Inherited summary.")],
        remarks=[TextElement("Inherited remarks.")],
        params={"a": Param(name="a", description=[TextElement("first")])},
        returns=[TextElement("a result")],
        api_tag=ApiTag.PUBLIC,
    )
    doc, errors = make_doc("{@inheritdoc Foo.bar}", FakeResolver({"Foo.bar": source}))
    doc.complete_initialization()
    assert errors == []
    assert doc.summary == [TextElement("Inherited summary.")]
    assert doc.remarks == [TextElement("Inherited remarks.")]
    assert list(doc.params) == ["a"]
    assert doc.returns == [TextElement("a result")]
    assert doc.incomplete_inheritdocs == []

    # The inheriting item owns separate copies
    doc.params["a"].description.append(TextElement("more"))
    assert source.params["a"].description == [TextElement("first")]


def test_inheritdoc_from_class_skips_params() -> None:
    """Verify that only callables pass on params and returns."""
    source = ResolvedItem(
        kind=ApiItemKind.CLASS,
        summary=[TextElement("Class summary.")],
        returns=[TextElement("ignored")],
    )
    doc, _errors = make_doc("{@inheritdoc Foo}", FakeResolver({"Foo": source}))
    doc.complete_initialization()
    assert doc.summary == [TextElement("Class summary.")]
    assert doc.returns == []


def test_unresolved_inheritdoc_points_to_source() -> None:
    """Verify the fallback summary when the source cannot be found."""
    doc, errors = make_doc("{@inheritdoc pkg:Foo}")
    doc.complete_initialization()
    assert doc.summary == [TextElement("See documentation for pkg:Foo")]
    assert errors == ['Unable to find referenced export "pkg:Foo"']


def test_inheritdoc_from_deprecated_source() -> None:
    """Verify that a deprecated source requires an own @deprecated message."""
    source = ResolvedItem(
        kind=ApiItemKind.CLASS,
        summary=[TextElement("Old.")],
        deprecated=[TextElement("Gone.")],
    )
    doc, errors = make_doc("{@inheritdoc Foo}", FakeResolver({"Foo": source}))
    doc.complete_initialization()
    assert doc.is_doc_inherited_deprecated
    assert len(errors) == 1
    assert "source is deprecated" in errors[0]

    doc, errors = make_doc(
        "{@inheritdoc Foo} @deprecated Use Bar.", FakeResolver({"Foo": source})
    )
    doc.complete_initialization()
    assert errors == []


def test_malformed_inheritdoc() -> None:
    """Verify that an {@inheritdoc} without a target is reported in phase 2."""
    doc, errors = make_doc("{@inheritdoc}")
    assert errors == []
    doc.complete_initialization()
    assert len(errors) == 1
    assert "does not match the expected pattern" in errors[0]
