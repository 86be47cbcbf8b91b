"""
Index catalog for the Heimdall collections

Every index carries an explicit name so that re-running ensure_indexes
converges on the same inventory instead of adding duplicates. The names
are relied upon by query hints in the API layer; do not rename them.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING, TEXT, IndexModel
from pymongo.database import Database

from schemas import PostStatus

logger = logging.getLogger(__name__)

Key = Tuple[str, Any]


@dataclass(frozen=True)
class IndexSpec:
    name: str
    keys: List[Key]
    unique: bool = False
    weights: Optional[Dict[str, int]] = None
    default_language: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError(f"index on {self.keys!r} has no explicit name")
        if not self.keys:
            raise ValueError(f"index {self.name} has no keys")

    @property
    def is_text(self) -> bool:
        return any(direction == TEXT for _, direction in self.keys)

    def options(self) -> Dict[str, Any]:
        opts: Dict[str, Any] = {"name": self.name}
        if self.unique:
            opts["unique"] = True
        if self.weights:
            opts["weights"] = dict(self.weights)
        if self.default_language:
            opts["default_language"] = self.default_language
        return opts

    def to_model(self) -> IndexModel:
        return IndexModel(list(self.keys), **self.options())


# Full-text relevance: a title hit outweighs an excerpt hit, which outweighs a body hit
TEXT_WEIGHTS = {"title": 10, "excerpt": 5, "markdown": 1}

INDEXES: Dict[str, List[IndexSpec]] = {
    "users": [
        IndexSpec("idx_username_unique", [("username", ASCENDING)], unique=True),
        IndexSpec("idx_email_unique", [("email", ASCENDING)], unique=True),
        IndexSpec("idx_role_status", [("role", ASCENDING), ("status", ASCENDING)]),
        # expired locks are swept by lockedUntil
        IndexSpec("idx_locked_until", [("lockedUntil", ASCENDING)]),
        IndexSpec("idx_last_login_at", [("lastLoginAt", DESCENDING)]),
        IndexSpec("idx_users_created_at", [("createdAt", DESCENDING)]),
    ],
    "loginLogs": [
        IndexSpec("idx_user_login_logs", [("userId", ASCENDING), ("createdAt", DESCENDING)]),
        IndexSpec("idx_ip_login_logs", [("ipAddress", ASCENDING), ("createdAt", DESCENDING)]),
        IndexSpec("idx_success_login_logs", [("success", ASCENDING), ("createdAt", DESCENDING)]),
        IndexSpec("idx_username_login_logs", [("username", ASCENDING)]),
    ],
    "posts": [
        IndexSpec("idx_slug_unique", [("slug", ASCENDING)], unique=True),
        IndexSpec("idx_status_published_at", [("status", ASCENDING), ("publishedAt", DESCENDING)]),
        IndexSpec("idx_author_status", [("authorId", ASCENDING), ("status", ASCENDING)]),
        IndexSpec("idx_tags_slug", [("tags.slug", ASCENDING)]),
        IndexSpec("idx_type_status", [("type", ASCENDING), ("status", ASCENDING)]),
        IndexSpec("idx_view_count", [("viewCount", DESCENDING)]),
        IndexSpec(
            "idx_full_text_search",
            [("title", TEXT), ("excerpt", TEXT), ("markdown", TEXT)],
            weights=TEXT_WEIGHTS,
            # "none" disables stemming and stop words
            default_language="none",
        ),
        IndexSpec("idx_posts_created_at", [("createdAt", DESCENDING)]),
        IndexSpec("idx_posts_updated_at", [("updatedAt", DESCENDING)]),
        IndexSpec("idx_visibility_status", [("visibility", ASCENDING), ("status", ASCENDING)]),
    ],
    "comments": [
        IndexSpec(
            "idx_post_comments",
            [("postId", ASCENDING), ("status", ASCENDING), ("createdAt", DESCENDING)],
        ),
        IndexSpec("idx_comment_status", [("status", ASCENDING)]),
        IndexSpec("idx_parent_comments", [("parentId", ASCENDING)]),
        IndexSpec("idx_comment_ip", [("ipAddress", ASCENDING)]),
        IndexSpec("idx_comment_author", [("authorId", ASCENDING)]),
        IndexSpec("idx_comments_created_at", [("createdAt", DESCENDING)]),
        IndexSpec("idx_comment_likes", [("likeCount", DESCENDING)]),
    ],
    "settings": [
        IndexSpec("idx_setting_key_unique", [("key", ASCENDING)], unique=True),
        IndexSpec("idx_setting_group", [("group", ASCENDING)]),
    ],
    "media": [
        IndexSpec("idx_media_type", [("type", ASCENDING)]),
        IndexSpec("idx_media_mime_type", [("mimeType", ASCENDING)]),
        IndexSpec("idx_media_created_at", [("createdAt", DESCENDING)]),
        IndexSpec("idx_media_size", [("size", DESCENDING)]),
        IndexSpec("idx_media_url", [("url", ASCENDING)]),
    ],
}

Inventory = Dict[str, List[Tuple[str, List[Key]]]]


def _selected(collections: Optional[Iterable[str]]) -> List[str]:
    if collections is None:
        return list(INDEXES)
    names = list(collections)
    unknown = [n for n in names if n not in INDEXES]
    if unknown:
        raise ValueError(f"Unknown collections: {', '.join(unknown)}")
    return names


def ensure_indexes(db: Database, collections: Optional[Iterable[str]] = None) -> Inventory:
    """
    Create every catalogued index and return the live inventory.

    Safe to run repeatedly: MongoDB treats an identical, identically named
    index as already present. A unique index over data that already holds
    duplicates raises DuplicateKeyError, and a same-named index with a
    different definition raises OperationFailure; both propagate.
    """
    names = _selected(collections)
    for name in names:
        specs = INDEXES[name]
        logger.info("Creating %d indexes on %s...", len(specs), name)
        db[name].create_indexes([spec.to_model() for spec in specs])
        logger.info("%s indexes done", name)
    return describe_indexes(db, names)


def describe_indexes(db: Database, collections: Optional[Iterable[str]] = None) -> Inventory:
    inventory: Inventory = {}
    for name in _selected(collections):
        info = db[name].index_information()
        inventory[name] = [
            (idx_name, [(f, d) for f, d in meta["key"]]) for idx_name, meta in info.items()
        ]
    return inventory


def format_inventory(inventory: Inventory) -> str:
    lines = []
    for name, indexes in inventory.items():
        lines.append(f"{name}: {len(indexes)} indexes")
        for idx_name, key in indexes:
            spec = ", ".join(f"{f}: {d}" for f, d in key)
            lines.append(f"  - {idx_name}: {{{spec}}}")
    return "\n".join(lines)


def search_posts(db: Database, term: str, limit: int = 10, published_only: bool = True) -> List[dict]:
    """Weighted full-text query over idx_full_text_search, best match first."""
    query: Dict[str, Any] = {"$text": {"$search": term}}
    if published_only:
        query["status"] = PostStatus.PUBLISHED.value
    cursor = (
        db["posts"]
        .find(query, {"score": {"$meta": "textScore"}, "title": 1, "slug": 1})
        .sort([("score", {"$meta": "textScore"})])
        .limit(limit)
    )
    return list(cursor)
