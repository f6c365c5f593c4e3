"""Logic for splitting documentation comments into tokens.

A comment is made of free text, block tags (``@remarks``) and inline tags
(``{@link Foo}``).  The scanner walks the comment with an explicit cursor and
emits one coalesced Text token for every run of text between tags.
"""

import re
from collections import deque
from collections.abc import Callable

from apidoc.doc_token import Token, TokenKind

TAG_NAME_RE = re.compile(r"@[a-z_]+")
INLINE_START_RE = re.compile(r"\{\s*@")
WHITESPACE_RE = re.compile(r"\s+")
ESCAPE_RE = re.compile(r"\\([@{}\\])")


def _collapse(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    return WHITESPACE_RE.sub(" ", text).strip()


def _match_block_tag(docs: str, pos: int) -> re.Match[str] | None:
    """Return the tag match when a block tag starts at ``pos``."""
    if pos > 0 and not docs[pos - 1].isspace():
        return None
    match = TAG_NAME_RE.match(docs, pos)
    if not match:
        return None
    end = match.end()
    if end < len(docs) and not docs[end].isspace():
        return None
    return match


def _find_inline_end(docs: str, pos: int) -> tuple[int, str]:
    """Locate the closing brace of the inline tag opened at ``pos``.

    Returns ``(index, problem)``; index is -1 when the tag is malformed and
    problem describes why.
    """
    i = pos + 1
    n = len(docs)
    while i < n:
        ch = docs[i]
        if ch == "\\" and i + 1 < n:
            i += 2
            continue
        if ch == "{":
            return -1, "Unescaped '{' detected inside an inline tag. Use \\ to escape it."
        if ch == "}":
            return i, ""
        i += 1
    return -1, "The inline tag is missing its closing '}'"


def _make_inline_token(content: str) -> Token:
    """Build an Inline token from the text between the braces."""
    content = content.strip()
    parts = content.split(None, 1)
    tag = parts[0]
    text = parts[1] if len(parts) > 1 else ""
    text = ESCAPE_RE.sub(r"\1", _collapse(text))
    return Token(TokenKind.INLINE, tag=tag, text=text)


def tokenize(docs: str, report_error: Callable[[str], None]) -> list[Token]:
    """Split a raw comment into Text, Tag and Inline tokens."""
    tokens: list[Token] = []
    if not docs:
        return tokens

    text_start = 0
    pos = 0
    n = len(docs)

    def flush_text(end: int) -> None:
        text = _collapse(docs[text_start:end])
        if text:
            tokens.append(Token(TokenKind.TEXT, text=text))

    while pos < n:
        ch = docs[pos]
        if ch == "{" and INLINE_START_RE.match(docs, pos):
            end, problem = _find_inline_end(docs, pos)
            if end < 0:
                report_error(problem)
                if problem.startswith("Unescaped"):
                    pos += 1
                    continue
                # Unterminated: everything that remains is plain text
                break
            token = _make_inline_token(docs[pos + 1 : end])
            if not TAG_NAME_RE.fullmatch(token.tag):
                report_error(
                    f'The inline tag "{token.tag}" has an invalid name; tag names may '
                    "only contain lowercase letters and underscores"
                )
                pos += 1
                continue
            flush_text(pos)
            tokens.append(token)
            pos = end + 1
            text_start = pos
            continue
        if ch == "@":
            match = _match_block_tag(docs, pos)
            if match:
                flush_text(pos)
                tokens.append(Token(TokenKind.TAG, tag=match.group(0)))
                pos = match.end()
                text_start = pos
                continue
        pos += 1

    flush_text(n)
    return tokens


class Tokenizer:
    """Single-pass token stream over one documentation comment."""

    def __init__(self, docs: str, report_error: Callable[[str], None]) -> None:
        """Tokenize ``docs`` up front, reporting lexical problems."""
        self._tokens: deque[Token] = deque(tokenize(docs, report_error))

    def peek_token(self) -> Token | None:
        """Return the next token without consuming it."""
        return self._tokens[0] if self._tokens else None

    def get_token(self) -> Token | None:
        """Consume and return the next token."""
        return self._tokens.popleft() if self._tokens else None

    def __len__(self) -> int:
        return len(self._tokens)
