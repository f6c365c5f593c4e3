"""Logic for turning comment tokens into documentation elements."""

import re
from collections.abc import Callable, Iterable

from apidoc.doc_elements import DocElement, LinkElement, SeeElement, TextElement
from apidoc.doc_token import Token, TokenKind
from apidoc.errors import InvalidScopedNameError
from apidoc.reference_expression import ReferenceExpression
from apidoc.tokenizer import Tokenizer

# 'http://', 'https://', ... but not '@scope/pkg:Export' or 'Export.member'
HREF_RE = re.compile(r"^[a-z]+://")
DISPLAY_TEXT_RE = re.compile(r"^[\w\s]*$")


def parse(tokenizer: Tokenizer, report_error: Callable[[str], None]) -> list[DocElement]:
    """Consume one run of text and links.

    Stops at the end of the stream, at any block tag other than @see and at
    any inline tag other than @link.  Each @see opens a nested group that
    collects the run that follows it.
    """
    elements: list[DocElement] = []
    while True:
        token = tokenizer.peek_token()
        if token is None:
            break

        if token.kind is TokenKind.TAG:
            if token.tag != "@see":
                break
            tokenizer.get_token()
            elements.append(SeeElement(tuple(parse(tokenizer, report_error))))
        elif token.kind is TokenKind.INLINE:
            if token.tag != "@link":
                break
            tokenizer.get_token()
            link = parse_link_tag(token, report_error)
            if link is not None:
                elements.append(link)
        elif token.kind is TokenKind.TEXT:
            tokenizer.get_token()
            elements.append(TextElement(token.text))
        else:
            tokenizer.get_token()
            report_error(f'Unidentifiable token {token.kind} {token.tag} "{token.text}"')

    return elements


def parse_link_tag(
    token: Token, report_error: Callable[[str], None]
) -> LinkElement | None:
    """Build a link element from the text of an inline @link token.

    The format is ``{@link URL-or-reference | display text}`` where the pipe and
    display text are optional::

        {@link http://microsoft.com | microsoft home}
        {@link @microsoft/sp-core-library:Guid.newGuid}
    """
    token.require_kind(TokenKind.INLINE)
    if not token.text:
        report_error("The {@link} tag must include a URL or API item reference")
        return None

    pipe_split = [part.strip() for part in token.text.split("|")]
    if len(pipe_split) > 2:
        report_error('The {@link} tag contains more than one pipe character ("|")')
        return None

    address = pipe_split[0]
    value = ""
    if len(pipe_split) > 1:
        match = DISPLAY_TEXT_RE.match(pipe_split[1])
        if not match:
            report_error(
                "The {@link} tag's display text may only contain word characters "
                f'and spaces: "{pipe_split[1]}"'
            )
            return None
        value = match.group(0).strip()

    if HREF_RE.match(address):
        if " " in address:
            report_error(
                "The {@link} tag contains additional spaces after the URL; if the URL "
                'contains spaces, encode them using %20; for display text, use a pipe '
                'delimiter ("|")'
            )
            return None
        return LinkElement.href(address, value)

    try:
        reference = ReferenceExpression.parse(address, report_error)
    except InvalidScopedNameError as exc:
        report_error(str(exc))
        return None
    if reference is None:
        return None
    return LinkElement.code(reference, value)


def get_as_text(
    elements: Iterable[DocElement], report_error: Callable[[str], None]
) -> str:
    """Join the plain text of the top-level elements, ignoring links and @see groups."""
    parts = []
    for element in elements:
        if isinstance(element, TextElement):
            parts.append(element.value)
        elif isinstance(element, (LinkElement, SeeElement)):
            continue
        else:
            report_error("Unexpected item in the doc element collection")
    return " ".join(parts).strip()
