"""The parsed documentation of one API item.

Construction runs the first phase: the comment is tokenized and every block
tag is applied.  Cross references ({@link} targets and {@inheritdoc} sources)
are only queued, because their targets may not have been parsed yet.  The
second phase, ``complete_initialization``, runs once the whole declaration tree
has finished the first one and drains those queues.
"""

from collections.abc import Callable

from apidoc import doc_element_parser
from apidoc.api_item import CALLABLE_KINDS, ApiPackage
from apidoc.api_tag import TAGS_BY_NAME, ApiTag
from apidoc.doc_elements import (
    DocElement,
    LinkElement,
    Param,
    TextElement,
    iter_code_links,
)
from apidoc.doc_token import Token, TokenKind
from apidoc.errors import InvalidScopedNameError
from apidoc.reference_expression import ReferenceExpression
from apidoc.reference_resolver import ReferenceResolver
from apidoc.tokenizer import Tokenizer

ALLOWED_BLOCK_TAGS = frozenset(
    {
        # (alphabetical order)
        "@alpha",
        "@beta",
        "@betadocumentation",
        "@deprecated",
        "@internal",
        "@internalremarks",
        "@packagedocumentation",
        "@param",
        "@preapproved",
        "@public",
        "@readonly",
        "@remarks",
        "@returns",
        "@see",
        "@summary",
    }
)

ALLOWED_INLINE_TAGS = frozenset({"@inheritdoc", "@link"})

MAX_PROBLEM_TEXT_LENGTH = 40


def _shorten(text: str) -> str:
    """Shorten "This is too long text" to "This is..."."""
    text = text.strip()
    if len(text) > MAX_PROBLEM_TEXT_LENGTH:
        return text[: MAX_PROBLEM_TEXT_LENGTH - 3].strip() + "..."
    return text


def parse_inheritdoc_reference(
    token: Token, report_error: Callable[[str], None]
) -> ReferenceExpression | None:
    """Parse the target of an {@inheritdoc} token."""
    if not token.text or " " in token.text:
        report_error(
            "The {@inheritdoc} tag does not match the expected pattern "
            '"{@inheritdoc @scopeName/packageName:exportName}"'
        )
        return None
    try:
        reference = ReferenceExpression.parse(token.text, report_error)
    except InvalidScopedNameError as exc:
        report_error(str(exc))
        return None
    if reference is None:
        report_error(f'Incorrectly formatted API item reference: "{token.text}"')
    return reference


class Documentation:
    """Summary, remarks, parameters and flags parsed from one doc comment."""

    def __init__(
        self,
        doc_comment: str,
        reference_resolver: ReferenceResolver,
        package: ApiPackage,
        report_error: Callable[[str], None],
    ) -> None:
        """Parse ``doc_comment`` right away; cross references wait for phase 2."""
        self.doc_comment = doc_comment
        self.reference_resolver = reference_resolver
        self.package = package
        self._report_error = report_error

        self.summary: list[DocElement] = []
        self.remarks: list[DocElement] = []
        self.returns: list[DocElement] = []
        self.deprecated: list[DocElement] = []
        self.params: dict[str, Param] = {}

        self.api_tag = ApiTag.NONE
        self.preapproved = False
        self.is_read_only = False
        self.is_beta = False
        self.is_package_documentation = False
        self.is_doc_inherited = False
        self.is_doc_inherited_deprecated = False

        # True once any problem was reported; lets callers skip follow-up checks
        self.failed_to_parse = False

        self.incomplete_links: list[LinkElement] = []
        self.incomplete_inheritdocs: list[Token] = []

        self._parse_docs()

    def report_error(self, message: str) -> None:
        """Forward a problem to the owner's reporter."""
        self.failed_to_parse = True
        self._report_error(message)

    # -----------------------------
    # Phase 1
    # -----------------------------

    def _parse_docs(self) -> None:
        tokenizer = Tokenizer(self.doc_comment, self.report_error)
        self.summary = self._parse_elements(tokenizer)
        api_tag_count = 0

        while True:
            token = tokenizer.peek_token()
            if token is None:
                break

            if token.kind is TokenKind.TAG:
                api_tag_count += self._apply_block_tag(token, tokenizer)
            elif token.kind is TokenKind.INLINE:
                self._apply_inline_tag(token, tokenizer)
            else:
                tokenizer.get_token()
                if token.text.strip():
                    self.report_error(
                        f'Unexpected text in doc comment: "{_shorten(token.text)}"'
                    )

        if api_tag_count > 1:
            # Reported, but the last tag still wins
            self.report_error(
                "More than one API tag (@alpha, @beta, etc) was specified"
            )

        if self.preapproved and self.api_tag is not ApiTag.INTERNAL:
            self.report_error(
                "The @preapproved tag may only be applied to @internal definitions"
            )
            self.preapproved = False

        self._check_inherited_deprecation()

    def _apply_block_tag(self, token: Token, tokenizer: Tokenizer) -> int:
        """Apply one block tag; returns 1 if it was an API tag."""
        tag = token.tag
        if tag == "@see":
            self._check_inherit_doc_status(tag)
            # The element parser opens the group itself
            self.summary.extend(self._parse_elements(tokenizer))
            return 0

        tokenizer.get_token()
        if tag == "@remarks":
            self._check_inherit_doc_status(tag)
            self.remarks = self._parse_elements(tokenizer)
        elif tag == "@returns":
            self._check_inherit_doc_status(tag)
            self.returns = self._parse_elements(tokenizer)
        elif tag == "@param":
            self._check_inherit_doc_status(tag)
            param = self.parse_param(tokenizer)
            if param is not None:
                self.params[param.name] = param
        elif tag == "@deprecated":
            self.deprecated = self._parse_elements(tokenizer)
            if not self.deprecated:
                self.report_error(
                    "A deprecation message is required after the @deprecated tag"
                )
        elif tag == "@internalremarks":
            # parsed but discarded, links in it are not validated
            doc_element_parser.parse(tokenizer, self.report_error)
        elif tag == "@summary":
            self._check_inherit_doc_status(tag)
            self.summary.extend(self._parse_elements(tokenizer))
        elif tag in TAGS_BY_NAME:
            self.api_tag = TAGS_BY_NAME[tag]
            return 1
        elif tag == "@preapproved":
            self.preapproved = True
        elif tag == "@readonly":
            self.is_read_only = True
        elif tag == "@betadocumentation":
            self.is_beta = True
        elif tag == "@packagedocumentation":
            self.is_package_documentation = True
        else:
            self._report_bad_tag(token)
        return 0

    def _apply_inline_tag(self, token: Token, tokenizer: Tokenizer) -> None:
        if token.tag == "@inheritdoc":
            tokenizer.get_token()
            if self.summary:
                self.report_error(
                    "A summary block is not allowed here, because the @inheritdoc "
                    "target provides the summary"
                )
            # Content written before the tag would be overwritten in phase 2
            for tag, content in (
                ("@remarks", self.remarks),
                ("@returns", self.returns),
                ("@param", self.params),
            ):
                if content:
                    self._report_inherited_state(tag)
            self.incomplete_inheritdocs.append(token)
            self.is_doc_inherited = True
        elif token.tag == "@link":
            # A link after a block tag that takes no content
            elements = self._parse_elements(tokenizer)
            text = doc_element_parser.get_as_text(elements, self.report_error)
            self.report_error(
                f'Unexpected text in doc comment: "{_shorten(text or token.text)}"'
            )
        else:
            tokenizer.get_token()
            self._report_bad_tag(token)

    def _parse_elements(self, tokenizer: Tokenizer) -> list[DocElement]:
        """Parse one element run and queue its code links for phase 2."""
        elements = doc_element_parser.parse(tokenizer, self.report_error)
        self.incomplete_links.extend(iter_code_links(elements))
        return elements

    def parse_param(self, tokenizer: Tokenizer) -> Param | None:
        """Parse the "name - description" that follows an @param tag."""
        token = tokenizer.peek_token()
        if token is None or token.kind is not TokenKind.TEXT:
            self.report_error("The @param tag is missing a parameter description")
            return None
        tokenizer.get_token()

        name, hyphen, comment = token.text.partition("-")
        if not hyphen:
            self.report_error(
                "The @param tag is missing the hyphen that delimits the parameter "
                "name and description"
            )
            return None

        name = name.strip()
        comment = comment.strip()
        if not comment:
            self.report_error(
                f'The @param tag for "{name}" has an empty description after the hyphen'
            )
            return None

        # The description may continue with links and more text
        description: list[DocElement] = [TextElement(comment)]
        description.extend(self._parse_elements(tokenizer))
        return Param(name=name, description=description)

    def _report_bad_tag(self, token: Token) -> None:
        supports_block = token.tag in ALLOWED_BLOCK_TAGS
        supports_inline = token.tag in ALLOWED_INLINE_TAGS

        if not supports_block and not supports_inline:
            self.report_error(f'The tag "{token.tag}" is not supported')
        elif token.kind is TokenKind.TAG and not supports_block:
            self.report_error(
                f'The tag "{token.tag}" must use the inline tag notation '
                "(i.e. with curly braces)"
            )
        elif token.kind is TokenKind.INLINE and not supports_inline:
            self.report_error(
                f'The tag "{token.tag}" must use the block tag notation '
                "(i.e. no curly braces)"
            )
        else:
            self.report_error(f'The tag "{token.tag}" is not supported in this context')

    def _check_inherit_doc_status(self, tag: str) -> None:
        if self.is_doc_inherited:
            self._report_inherited_state(tag)

    def _report_inherited_state(self, tag: str) -> None:
        self.report_error(
            f"The {tag} tag may not be used because this state is provided by "
            "the @inheritdoc target"
        )

    def _check_inherited_deprecation(self) -> None:
        if self.is_doc_inherited_deprecated and not self.deprecated:
            self.report_error(
                "The @inheritdoc source is deprecated. Either include a @deprecated "
                "message on this item or remove the @inheritdoc tag and copy the "
                "documentation."
            )

    def inheritdoc_references(self) -> list[ReferenceExpression]:
        """Targets of the queued {@inheritdoc} tags, parsed without reporting."""
        references = []
        for token in self.incomplete_inheritdocs:
            reference = parse_inheritdoc_reference(token, lambda _message: None)
            if reference is not None:
                references.append(reference)
        return references

    # -----------------------------
    # Phase 2
    # -----------------------------

    def complete_initialization(self) -> None:
        """Validate queued links and copy inherited documentation."""
        self._complete_links()
        self._complete_inheritdocs()

    def _complete_links(self) -> None:
        while self.incomplete_links:
            link = self.incomplete_links.pop(0)
            reference = link.reference
            resolved = self.reference_resolver.resolve(
                reference, self.package, self.report_error
            )
            # A miss was already reported by the resolver
            if resolved is not None and resolved.api_tag is ApiTag.INTERNAL:
                self.report_error(
                    f'The {{@link}} tag cannot link to Internal item "{reference}", '
                    "which will not appear in the generated documentation"
                )

    def _complete_inheritdocs(self) -> None:
        while self.incomplete_inheritdocs:
            token = self.incomplete_inheritdocs.pop(0)
            self._inherit_doc(token)

    def _inherit_doc(self, token: Token) -> None:
        reference = parse_inheritdoc_reference(token, self.report_error)
        if reference is None:
            return

        resolved = self.reference_resolver.resolve(
            reference, self.package, self.report_error
        )
        if resolved is None:
            self.summary = [TextElement(f"See documentation for {token.text}")]
            return

        self.summary = list(resolved.summary)
        self.remarks = list(resolved.remarks)
        if resolved.kind in CALLABLE_KINDS:
            self.params = {
                name: Param(name=p.name, description=list(p.description))
                for name, p in resolved.params.items()
            }
            self.returns = list(resolved.returns)

        if resolved.deprecated:
            self.is_doc_inherited_deprecated = True
            self._check_inherited_deprecation()
