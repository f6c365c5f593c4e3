"""Visibility and release stage of an API item."""

from enum import Enum


class ApiTag(Enum):
    """The @public/@beta/@alpha/@internal classification of an item."""

    NONE = "none"
    INTERNAL = "internal"
    ALPHA = "alpha"
    BETA = "beta"
    PUBLIC = "public"

    @property
    def tag_name(self) -> str:
        """The comment tag that selects this value, e.g. "@beta"."""
        return f"@{self.value}"


TAGS_BY_NAME = {tag.tag_name: tag for tag in ApiTag if tag is not ApiTag.NONE}
