"""Tests for reference expression parsing and formatting."""

import pytest

from apidoc.errors import InvalidScopedNameError
from apidoc.reference_expression import (
    ReferenceExpression,
    parse_scoped_package_name,
)


def test_parse_fully_qualified() -> None:
    """Verify that all four parts are extracted."""
    errors: list[str] = []
    ref = ReferenceExpression.parse(
        "@microsoft/sp-core-library:Guid.equals", errors.append
    )
    assert ref == ReferenceExpression(
        scope_name="@microsoft",
        package_name="sp-core-library",
        export_name="Guid",
        member_name="equals",
    )
    assert errors == []
    assert not ref.is_local
    assert ref.package_key == "@microsoft/sp-core-library"


def test_parse_unscoped_package() -> None:
    """Verify that an unscoped package has an empty scope."""
    ref = ReferenceExpression.parse("sp-core-library:Guid", lambda _m: None)
    assert ref is not None
    assert ref.scope_name == ""
    assert ref.package_name == "sp-core-library"
    assert ref.export_name == "Guid"
    assert ref.member_name == ""


def test_parse_local_reference() -> None:
    """Verify that a reference without a package is local."""
    ref = ReferenceExpression.parse("Guid.equals", lambda _m: None)
    assert ref is not None
    assert ref.is_local
    assert ref.to_export_string() == "Guid"


def test_multiple_colons_rejected() -> None:
    """Verify that a second ':' separator is an error."""
    errors: list[str] = []
    ref = ReferenceExpression.parse("sp-core-library:Guid:equals", errors.append)
    assert ref is None
    assert len(errors) == 1
    assert "more than one" in errors[0]


def test_spaces_rejected() -> None:
    """Verify that spaces are not allowed anywhere in the expression."""
    errors: list[str] = []
    assert ReferenceExpression.parse("Guid equals", errors.append) is None
    assert "must not contain spaces" in errors[0]


@pytest.mark.parametrize("expression", ["-Guid", "pkg:", "Guid.eq-uals"])
def test_invalid_names_rejected(expression: str) -> None:
    """Verify that malformed export and member names are errors."""
    errors: list[str] = []
    assert ReferenceExpression.parse(expression, errors.append) is None
    assert len(errors) == 1


def test_scope_without_package_raises() -> None:
    """Verify that "@scope" alone cannot name a package."""
    with pytest.raises(InvalidScopedNameError, match="Invalid scoped name"):
        ReferenceExpression.parse("@microsoft:Guid", lambda _m: None)


def test_parse_scoped_package_name() -> None:
    """Verify splitting of scoped and unscoped package names."""
    scoped = parse_scoped_package_name("@scope/pkg")
    assert (scoped.scope, scoped.package) == ("@scope", "pkg")
    plain = parse_scoped_package_name("pkg")
    assert (plain.scope, plain.package) == ("", "pkg")


@pytest.mark.parametrize(
    "expression",
    ["Guid", "Guid.equals", "pkg:Guid", "@scope/pkg:Guid.newGuid"],
)
def test_string_form_parses_back(expression: str) -> None:
    """Verify that the string form of a reference parses to the same value."""
    ref = ReferenceExpression.parse(expression, lambda _m: None)
    assert ref is not None
    assert str(ref) == expression
    assert ReferenceExpression.parse(str(ref), lambda _m: None) == ref


def test_from_parts_formatting() -> None:
    """Verify the partial string forms."""
    ref = ReferenceExpression.from_parts(
        scope_name="@scope", package_name="pkg", export_name="Foo", member_name="bar"
    )
    assert ref.to_scope_package_string() == "@scope/pkg"
    assert ref.to_export_string() == "@scope/pkg:Foo"
    assert ref.to_member_string() == "@scope/pkg:Foo.bar"
