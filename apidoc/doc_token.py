"""Data model for documentation comment tokens."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Lexical category of a token."""

    TEXT = "text"
    TAG = "tag"
    INLINE = "inline"


@dataclass(frozen=True)
class Token:
    """One lexical unit of a documentation comment."""

    kind: TokenKind
    tag: str = ""
    text: str = ""

    def require_kind(self, kind: TokenKind) -> None:
        """Raise if the token is not of the expected kind."""
        if self.kind is not kind:
            msg = (
                f'Encountered a token of kind "{self.kind.value}" '
                f'when expecting "{kind.value}"'
            )
            raise ValueError(msg)
