from dataclasses import dataclass


@dataclass(frozen=True)
class Provenance:
    """Where an entity was read: screenshot id and line index within it."""

    source_image_id: str
    line_index: int


@dataclass(frozen=True)
class FriendRow:
    """A friend-list card: name plus mutual-connection count."""

    name: str
    provenance: Provenance
    confidence: float = 0.0
    mutual_count: int | None = None
    extra_info: str | None = None
    kind: str = "friend_row"


@dataclass(frozen=True)
class Post:
    """A feed post. ``author`` is None when the header was not readable."""

    text: str
    provenance: Provenance
    confidence: float = 0.0
    author: str | None = None
    timestamp: str | None = None
    reaction_count: int | None = None
    comment_count: int | None = None
    share_count: int | None = None
    kind: str = "post"


@dataclass(frozen=True)
class Comment:
    """A comment line split into author and text."""

    author: str
    text: str
    provenance: Provenance
    confidence: float = 0.0
    timestamp: str | None = None
    kind: str = "comment"


ParsedEntity = FriendRow | Post | Comment


def entity_name(entity: ParsedEntity) -> str | None:
    """Display name of the person behind an entity, if any."""
    if isinstance(entity, FriendRow):
        return entity.name
    return entity.author
