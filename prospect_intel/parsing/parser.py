"""Structured text parser: recognized lines -> friend rows, posts, comments.

Extraction order:
1. Friend rows over the flat line sequence (name, optional second name line,
   mutual-connections count, optional info line).
2. Comments: "<Name> · <text>" lines not already used by a friend row.
3. Posts: one per visual block that holds no friend-row or comment lines.
4. Deduplicate by normalized name, keeping the higher-confidence instance.
"""

from dataclasses import dataclass

from prospect_intel.logging.logger import Log
from prospect_intel.parsing import patterns
from prospect_intel.parsing.models import (
    Comment,
    FriendRow,
    ParsedEntity,
    Post,
    Provenance,
    entity_name,
)
from prospect_intel.parsing.names import NameNormalizer, clean_display_name
from prospect_intel.recognition.layout import group_lines, split_lines
from prospect_intel.recognition.models import RecognizedLine

_COMBINED_SOURCE_ID = "combined"


@dataclass
class _PostFields:
    author: str | None = None
    timestamp: str | None = None
    reaction_count: int | None = None
    comment_count: int | None = None
    share_count: int | None = None


class StructuredTextParser:
    """Parses combined recognition output into typed entities."""

    def __init__(self, name_normalizer: NameNormalizer | None = None) -> None:
        self._names = name_normalizer if name_normalizer is not None else NameNormalizer()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(
        self,
        combined_text: str,
        lines: list[RecognizedLine],
        blocks: list[list[RecognizedLine]],
    ) -> list[ParsedEntity]:
        """Extract entities from recognized text.

        Args:
            combined_text: Full recognized text. Only used to derive lines
                when ``lines`` is empty.
            lines: Provenance-tagged lines in reading order.
            blocks: Contiguous line runs. Derived from ``lines`` when empty.

        Returns:
            Deduplicated entities in discovery order.
        """
        if not lines and combined_text.strip():
            lines = self._lines_from_text(combined_text)
        if not blocks:
            blocks = self._blocks_from_lines(lines)

        used: set[tuple[str, int]] = set()
        friends = self._extract_friend_rows(lines, used)
        comments = self._extract_comments(lines, used)
        posts = self._extract_posts(blocks, used)

        entities = self._deduplicate([*friends, *posts, *comments])
        Log.info(
            f"Parsed {len(friends)} friend row(s), {len(posts)} post(s), "
            f"{len(comments)} comment(s); {len(entities)} after dedup"
        )
        return entities

    def is_name(self, line: str) -> bool:
        """True when a line looks like a person's name and is not chrome."""
        text = line.strip()
        if not text or len(text) > patterns.NAME_MAX_LENGTH:
            return False
        if text[-1] in patterns.TRAILING_PUNCTUATION and not text.endswith(("Jr.", "Sr.")):
            return False
        if self.is_chrome(text) or self._is_count_or_time(text):
            return False
        tokens = text.split()
        if len(tokens) > patterns.NAME_MAX_TOKENS:
            return False
        if not self._is_name_token(tokens[0]) or not self._is_name_token(tokens[-1]):
            return False
        return all(
            self._is_name_token(token) or token.lower() in patterns.NAME_CONNECTORS
            for token in tokens[1:-1]
        )

    def is_chrome(self, line: str) -> bool:
        lowered = line.strip().lower()
        if not lowered:
            return False
        if lowered in patterns.UI_CHROME_PHRASES:
            return True
        if lowered.startswith(patterns.UI_CHROME_PREFIXES):
            return True
        return bool(patterns.ACTION_BAR_RE.match(lowered))

    # ------------------------------------------------------------------
    # Friend rows
    # ------------------------------------------------------------------

    def _extract_friend_rows(
        self, lines: list[RecognizedLine], used: set[tuple[str, int]]
    ) -> list[FriendRow]:
        rows: list[FriendRow] = []
        i = 0
        while i < len(lines):
            line = lines[i]
            if not self.is_name(line.text):
                i += 1
                continue

            name = line.text
            count_index: int | None = None
            info_before: RecognizedLine | None = None
            nxt = self._peek(lines, i + 1, line.source_image_id)
            after = self._peek(lines, i + 2, line.source_image_id)
            if nxt is not None and self._mutual_count(nxt.text) is not None:
                count_index = i + 1
            elif nxt is not None and after is not None and self._mutual_count(after.text) is not None:
                count_index = i + 2
                if self._is_name_fragment(nxt.text):
                    name = f"{name} {nxt.text}"
                elif self._is_info(nxt.text):
                    info_before = nxt

            if count_index is None:
                i += 1
                continue

            count_line = lines[count_index]
            consumed = lines[i : count_index + 1]
            extra_info = info_before.text if info_before is not None else None
            info_after = self._peek(lines, count_index + 1, line.source_image_id)
            if extra_info is None and info_after is not None and self._is_info(info_after.text):
                extra_info = info_after.text
                consumed = [*consumed, info_after]

            rows.append(
                FriendRow(
                    name=clean_display_name(name),
                    provenance=Provenance(line.source_image_id, line.line_index),
                    confidence=line.confidence,
                    mutual_count=self._mutual_count(count_line.text),
                    extra_info=extra_info,
                )
            )
            used.update(self._key(consumed_line) for consumed_line in consumed)
            i += len(consumed)
        return rows

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _extract_comments(
        self, lines: list[RecognizedLine], used: set[tuple[str, int]]
    ) -> list[Comment]:
        comments: list[Comment] = []
        for line in lines:
            if self._key(line) in used:
                continue
            parts = patterns.COMMENT_SEPARATOR_RE.split(line.text.strip(), maxsplit=1)
            if len(parts) != 2:
                continue
            author, remainder = parts
            if not self.is_name(author):
                continue
            timestamp = self._find_timestamp(remainder)
            text = self._strip_timestamps(remainder)
            if not text:
                # "Name · 2h" is a post header, not a comment
                continue
            comments.append(
                Comment(
                    author=clean_display_name(author),
                    text=text,
                    provenance=Provenance(line.source_image_id, line.line_index),
                    confidence=line.confidence,
                    timestamp=timestamp,
                )
            )
            used.add(self._key(line))
        return comments

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def _extract_posts(
        self, blocks: list[list[RecognizedLine]], used: set[tuple[str, int]]
    ) -> list[Post]:
        posts: list[Post] = []
        for block in blocks:
            content = [line for line in block if line.text.strip()]
            if not content:
                continue
            if any(self._key(line) in used for line in content):
                continue
            if any(self._mutual_count(line.text) is not None for line in content):
                continue
            post = self._build_post(content)
            if post is not None:
                posts.append(post)
        return posts

    def _build_post(self, content: list[RecognizedLine]) -> Post | None:
        fields = _PostFields()
        body: list[str] = []
        anchor = content[0]
        author_seen = False

        for position, line in enumerate(content):
            text = line.text.strip()
            if self.is_chrome(text):
                continue
            if not author_seen and not body:
                author_seen = True
                header = self._split_header(text)
                if header is not None:
                    fields.author, fields.timestamp = header
                    anchor = line
                    continue
                if self.is_name(text):
                    fields.author = clean_display_name(text)
                    anchor = line
                    continue
            if fields.timestamp is None and not body and self._is_timestamp_line(text):
                fields.timestamp = self._find_timestamp(text)
                continue
            if self._apply_engagement(text, fields):
                continue
            action = patterns.POST_ACTION_RE.search(text)
            if action is not None and position < patterns.POST_HEADER_LINES and not body:
                actor = text[: action.start()].strip()
                if fields.author is None and self.is_name(actor):
                    fields.author = clean_display_name(actor)
                    anchor = line
                continue
            body.append(text)

        post_text = clean_display_name(" ".join(body))
        if len(post_text) < patterns.POST_MIN_BODY_LENGTH:
            return None
        return Post(
            text=post_text,
            provenance=Provenance(anchor.source_image_id, anchor.line_index),
            confidence=anchor.confidence,
            author=fields.author,
            timestamp=fields.timestamp,
            reaction_count=fields.reaction_count,
            comment_count=fields.comment_count,
            share_count=fields.share_count,
        )

    def _split_header(self, text: str) -> tuple[str, str] | None:
        """Split a "<Name> · <timestamp>" header line."""
        parts = patterns.COMMENT_SEPARATOR_RE.split(text, maxsplit=1)
        if len(parts) != 2 or not self.is_name(parts[0]):
            return None
        if not self._is_timestamp_line(parts[1]):
            return None
        return clean_display_name(parts[0]), self._find_timestamp(parts[1]) or parts[1]

    def _apply_engagement(self, text: str, fields: _PostFields) -> bool:
        """Fill count fields from a counts-only line. False if the line has other text."""
        matches = list(patterns.ENGAGEMENT_RE.finditer(text))
        if not matches:
            return False
        leftover = patterns.ENGAGEMENT_RE.sub("", text)
        if leftover.strip(" ·•|,-"):
            return False
        for match in matches:
            kind = match.group("kind").lower().rstrip("s")
            attr = patterns.ENGAGEMENT_FIELDS[kind]
            setattr(fields, attr, parse_count(match.group("number"), match.group("suffix")))
        return True

    # ------------------------------------------------------------------
    # Deduplication
    # ------------------------------------------------------------------

    def _deduplicate(self, entities: list[ParsedEntity]) -> list[ParsedEntity]:
        kept: list[ParsedEntity] = []
        index_by_name: dict[str, int] = {}
        for entity in entities:
            name = entity_name(entity)
            if name is None:
                kept.append(entity)
                continue
            key = self._names.normalize(name)
            existing = index_by_name.get(key)
            if existing is None:
                index_by_name[key] = len(kept)
                kept.append(entity)
            elif entity.confidence > kept[existing].confidence:
                kept[existing] = entity
        return kept

    # ------------------------------------------------------------------
    # Line helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _peek(
        lines: list[RecognizedLine], index: int, source_image_id: str
    ) -> RecognizedLine | None:
        """Next non-blank line at ``index`` from the same screenshot."""
        if index >= len(lines):
            return None
        line = lines[index]
        if line.source_image_id != source_image_id or not line.text.strip():
            return None
        return line

    def _is_name_fragment(self, text: str) -> bool:
        return len(text) <= patterns.NAME_FRAGMENT_MAX_LENGTH and self.is_name(text)

    def _is_info(self, text: str) -> bool:
        stripped = text.strip()
        return (
            0 < len(stripped) < patterns.EXTRA_INFO_MAX_LENGTH
            and not self.is_name(stripped)
            and not self.is_chrome(stripped)
            and not self._is_count_or_time(stripped)
        )

    def _is_count_or_time(self, text: str) -> bool:
        return (
            self._mutual_count(text) is not None
            or bool(patterns.ENGAGEMENT_RE.search(text))
            or self._is_timestamp_line(text)
        )

    def _is_timestamp_line(self, text: str) -> bool:
        """True when a line is essentially only a timestamp."""
        if self._find_timestamp(text) is None:
            return False
        return not self._strip_timestamps(text).strip(" ·•|,-")

    @staticmethod
    def _find_timestamp(text: str) -> str | None:
        for pattern in patterns.TIMESTAMP_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(0).strip()
        return None

    @staticmethod
    def _strip_timestamps(text: str) -> str:
        for pattern in patterns.TIMESTAMP_PATTERNS:
            text = pattern.sub("", text)
        return clean_display_name(text).strip(" ·•|,-")

    @staticmethod
    def _mutual_count(text: str) -> int | None:
        match = patterns.MUTUAL_COUNT_RE.search(text)
        if match is None:
            return None
        return parse_count(match.group("number"), match.group("suffix"))

    @staticmethod
    def _is_name_token(token: str) -> bool:
        return bool(patterns.NAME_TOKEN_RE.match(token))

    @staticmethod
    def _key(line: RecognizedLine) -> tuple[str, int]:
        return (line.source_image_id, line.line_index)

    @staticmethod
    def _lines_from_text(text: str) -> list[RecognizedLine]:
        return [
            RecognizedLine(text=t, source_image_id=_COMBINED_SOURCE_ID, line_index=i, confidence=0.0)
            for i, t in enumerate(split_lines(text))
        ]

    @staticmethod
    def _blocks_from_lines(lines: list[RecognizedLine]) -> list[list[RecognizedLine]]:
        blocks: list[list[RecognizedLine]] = []
        start = 0
        for end in range(1, len(lines) + 1):
            if end == len(lines) or lines[end].source_image_id != lines[start].source_image_id:
                segment = lines[start:end]
                blocks.extend(
                    segment[s:e] for s, e in group_lines([line.text for line in segment])
                )
                start = end
        return blocks


def parse_count(number: str, suffix: str | None) -> int:
    """Parse "1,234", "1.2" + "k" or "3" + "m" into an integer."""
    value = float(number.replace(",", ""))
    return int(round(value * patterns.COUNT_MULTIPLIERS[(suffix or "").lower()]))
