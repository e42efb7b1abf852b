"""Pattern tables for reading social-network screenshots.

Data only: tune these without touching parser control flow.
"""

import re

# Lines that are interface chrome, never names or post text.
UI_CHROME_PHRASES: frozenset[str] = frozenset(
    {
        "sponsored",
        "suggested for you",
        "people you may know",
        "add friend",
        "add friends",
        "confirm",
        "delete",
        "remove",
        "see more",
        "see all",
        "see translation",
        "view more comments",
        "view previous comments",
        "most relevant",
        "write a comment",
        "write a comment...",
        "like",
        "comment",
        "share",
        "reply",
        "follow",
        "following",
        "message",
        "friends",
        "all friends",
        "recently added",
        "edited",
        "author",
        "top fan",
        "public",
    }
)

UI_CHROME_PREFIXES: tuple[str, ...] = (
    "see more",
    "view more",
    "view previous",
    "view all",
    "write a comment",
    "suggested for you",
    "sponsored",
    "people you may know",
)

ACTION_BAR_RE = re.compile(r"^\s*like\s*[·•|]?\s*comment\s*[·•|]?\s*share\s*$", re.IGNORECASE)

# Lowercase particles allowed between capitalized name tokens.
NAME_CONNECTORS: frozenset[str] = frozenset(
    {
        "de", "del", "dela", "della", "delos", "la", "las", "los", "van", "von",
        "der", "den", "san", "santa", "sta.", "sto.", "di", "da", "dos", "das",
        "y", "bin", "binti", "ng",
    }
)

NAME_TOKEN_RE = re.compile(r"^[A-ZÀ-ÖØ-Þ][A-Za-zÀ-ÖØ-öø-ÿ'’\-]*\.?$")
NAME_MAX_TOKENS = 6
NAME_MAX_LENGTH = 60
NAME_FRAGMENT_MAX_LENGTH = 25
TRAILING_PUNCTUATION = ".,;:!?…"

MUTUAL_COUNT_RE = re.compile(
    r"(?P<number>\d[\d,]*(?:\.\d+)?)\s*(?P<suffix>[km])?\s*mutual\s+(?:friend|connection)s?\b",
    re.IGNORECASE,
)

_MONTHS = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
_UNITS = (
    r"s|secs?|seconds?|m|mins?|minutes?|h|hrs?|hours?|d|days?|"
    r"w|wks?|weeks?|mos?|months?|y|yrs?|years?"
)

TIMESTAMP_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b\d+\s*(?:{_UNITS})\s+ago\b", re.IGNORECASE),
    re.compile(r"\b(?:yesterday|today)(?:\s+at\s+\d{1,2}:\d{2}\s*(?:am|pm)?)?\b|\bjust now\b", re.IGNORECASE),
    re.compile(r"\b\d{1,2}/\d{1,2}/\d{2,4}\b"),
    re.compile(rf"\b(?:{_MONTHS})\.?\s+\d{{1,2}}(?:,?\s+\d{{4}})?(?:\s+at\s+\d{{1,2}}:\d{{2}}\s*(?:am|pm)?)?\b", re.IGNORECASE),
    # compact feed form: "2h", "3d", "1w", "15 mins"
    re.compile(r"\b\d{1,2}\s?(?:h|hrs?|d|w|y|mins?)\b", re.IGNORECASE),
)

ENGAGEMENT_RE = re.compile(
    r"(?P<number>\d[\d,]*(?:\.\d+)?)\s*(?P<suffix>[km])?\s*"
    r"(?P<kind>reactions?|likes?|comments?|shares?)\b",
    re.IGNORECASE,
)

ENGAGEMENT_FIELDS: dict[str, str] = {
    "reaction": "reaction_count",
    "like": "reaction_count",
    "comment": "comment_count",
    "share": "share_count",
}

COUNT_MULTIPLIERS: dict[str, int] = {"": 1, "k": 1_000, "m": 1_000_000}

COMMENT_SEPARATOR_RE = re.compile(r"\s*[·•]\s*")

# Header lines such as "Ana Cruz shared a post" or "updated her cover photo".
POST_ACTION_RE = re.compile(
    r"\b(?:posted|shared|updated|added|commented on|reacted to)\b", re.IGNORECASE
)
POST_HEADER_LINES = 3
POST_MIN_BODY_LENGTH = 10

EXTRA_INFO_MAX_LENGTH = 100
