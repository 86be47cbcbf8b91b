"""
Development fixture loader

Loading runs in fixed phases: reset, users, settings, posts, comments,
login logs. Each phase validates its rows against the schemas before
writing, and later phases look up the ids produced by earlier ones
through FixtureBuilder.refs.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from bson import ObjectId
from pymongo.database import Database

import fixtures
from credentials import hash_password
from schemas import COLLECTION_NAMES, Comment, LoginLog, Post, Setting, Tag, User

logger = logging.getLogger(__name__)


class ResetRefused(RuntimeError):
    pass


class UnresolvedReference(KeyError):
    pass


def reset_collections(db: Database, confirm: str) -> Dict[str, int]:
    """
    Delete every document of every Heimdall collection.

    confirm must repeat the target database name; anything else is refused
    before a single document is touched.
    """
    if confirm != db.name:
        raise ResetRefused(
            f"Refusing to reset '{db.name}': confirmation '{confirm}' does not match the database name"
        )
    deleted = {}
    for name in COLLECTION_NAMES:
        deleted[name] = db[name].delete_many({}).deleted_count
        logger.info("Cleared %s (%d documents)", name, deleted[name])
    return deleted


def count_documents(db: Database) -> Dict[str, int]:
    return {name: db[name].count_documents({}) for name in COLLECTION_NAMES}


class FixtureBuilder:
    def __init__(
        self,
        db: Database,
        hasher: Callable[[str], str] = hash_password,
        now: Optional[datetime] = None,
    ):
        self.db = db
        self.hasher = hasher
        self.now = now or datetime.now(timezone.utc)
        self.refs: Dict[str, Dict[str, ObjectId]] = {"users": {}, "posts": {}}

    def at(self, offset: Optional[timedelta]) -> Optional[datetime]:
        if offset is None:
            return None
        return self.now + offset

    def resolve(self, kind: str, name: Optional[str]) -> Optional[ObjectId]:
        if name is None:
            return None
        try:
            return self.refs[kind][name]
        except KeyError:
            raise UnresolvedReference(f"{kind} '{name}' has not been loaded") from None

    def load_users(self, rows: List[dict] = fixtures.USERS) -> List[ObjectId]:
        users = []
        for row in rows:
            data = dict(row)
            password = data.pop("password")
            users.append(User(
                password_hash=self.hasher(password),
                last_login_at=self.now,
                created_at=self.now,
                updated_at=self.now,
                **data,
            ))
        ids = []
        # one at a time so every generated id is captured in roster order
        for user in users:
            user_id = self.db["users"].insert_one(user.to_document()).inserted_id
            self.refs["users"][user.username] = user_id
            ids.append(user_id)
            logger.info("Created user %s (%s): %s", user.username, user.role, user_id)
        return ids

    def load_settings(self, rows: List[tuple] = fixtures.SETTINGS) -> List[ObjectId]:
        docs = [
            Setting(key=key, value=value, group=group, created_at=self.now, updated_at=self.now).to_document()
            for key, value, group in rows
        ]
        result = self.db["settings"].insert_many(docs, ordered=True)
        logger.info("Inserted %d settings", len(result.inserted_ids))
        return result.inserted_ids

    def load_posts(self, rows: List[dict] = fixtures.POSTS) -> List[ObjectId]:
        posts = []
        for row in rows:
            data = dict(row)
            created = self.at(data.pop("created"))
            posts.append(Post(
                author_id=self.resolve("users", data.pop("author")),
                tags=[Tag(**tag) for tag in data.pop("tags", [])],
                published_at=self.at(data.pop("published")),
                created_at=created,
                updated_at=created,
                **data,
            ))
        result = self.db["posts"].insert_many([p.to_document() for p in posts], ordered=True)
        for post, post_id in zip(posts, result.inserted_ids):
            self.refs["posts"][post.slug] = post_id
        logger.info("Inserted %d posts", len(result.inserted_ids))
        return result.inserted_ids

    def load_comments(self, rows: List[dict] = fixtures.COMMENTS) -> List[ObjectId]:
        # ids are assigned up front so replies can point at their parent in the same batch
        ids = [ObjectId() for _ in rows]
        docs = []
        for index, (comment_id, row) in enumerate(zip(ids, rows)):
            data = dict(row)
            post_slug = data.pop("post")
            parent = data.pop("parent", None)
            parent_id = None
            if parent is not None:
                if parent not in range(len(rows)) or parent == index:
                    raise ValueError(f"Comment {index} cannot reply to comment {parent!r}")
                if rows[parent]["post"] != post_slug:
                    raise ValueError(f"Reply to comment {parent} must belong to post '{post_slug}'")
                parent_id = ids[parent]
            created = self.at(data.pop("created"))
            content = data["content"]
            comment = Comment(
                post_id=self.resolve("posts", post_slug),
                author_id=self.resolve("users", data.pop("author")),
                parent_id=parent_id,
                html_content=data.pop("html_content", f"<p>{content}</p>"),
                created_at=created,
                updated_at=created,
                **data,
            )
            docs.append({"_id": comment_id, **comment.to_document()})
        result = self.db["comments"].insert_many(docs, ordered=True)
        logger.info("Inserted %d comments", len(result.inserted_ids))
        return result.inserted_ids

    def load_login_logs(self, rows: List[dict] = fixtures.LOGIN_LOGS) -> List[ObjectId]:
        docs = []
        for row in rows:
            data = dict(row)
            log = LoginLog(
                user_id=self.resolve("users", data.pop("user")),
                created_at=self.at(data.pop("created")),
                **data,
            )
            docs.append(log.to_document())
        result = self.db["loginLogs"].insert_many(docs, ordered=True)
        logger.info("Inserted %d login logs", len(result.inserted_ids))
        return result.inserted_ids

    def run(self) -> Dict[str, Dict[str, ObjectId]]:
        self.load_users()
        self.load_settings()
        self.load_posts()
        self.load_comments()
        self.load_login_logs()
        return self.refs


@dataclass
class SeedReport:
    database: str
    counts: Dict[str, int] = field(default_factory=dict)
    refs: Dict[str, Dict[str, ObjectId]] = field(default_factory=dict)

    def format(self) -> str:
        lines = [f"Seeded {self.database}:"]
        lines += [f"  {name}: {count}" for name, count in self.counts.items()]
        return "\n".join(lines)


def load_fixtures(
    db: Database,
    confirm: str,
    hasher: Callable[[str], str] = hash_password,
    now: Optional[datetime] = None,
) -> SeedReport:
    reset_collections(db, confirm)
    builder = FixtureBuilder(db, hasher=hasher, now=now)
    refs = builder.run()
    counts = count_documents(db)
    for name, count in counts.items():
        logger.info("%s now holds %d documents", name, count)
    return SeedReport(database=db.name, counts=counts, refs=refs)
