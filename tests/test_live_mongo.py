"""
Checks that need a real MongoDB server (text search, index builds).

Set MONGODB_TEST_URL, e.g. mongodb://localhost:27017, to run them.
"""

import os
from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pymongo import MongoClient
from pymongo.errors import DuplicateKeyError, OperationFailure

from indexes import ensure_indexes, search_posts
from seed import load_fixtures
from tests.conftest import NOW, fake_hasher

MONGODB_TEST_URL = os.getenv("MONGODB_TEST_URL")

pytestmark = pytest.mark.skipif(not MONGODB_TEST_URL, reason="MONGODB_TEST_URL not set")


@pytest.fixture
def live_db():
    client = MongoClient(MONGODB_TEST_URL, serverSelectionTimeoutMS=3000)
    name = f"heimdall_test_{ObjectId()}"
    yield client[name]
    client.drop_database(name)
    client.close()


def post(slug, title, excerpt, markdown):
    now = datetime.now(timezone.utc)
    return {
        "title": title,
        "slug": slug,
        "excerpt": excerpt,
        "markdown": markdown,
        "html": "",
        "status": "published",
        "authorId": ObjectId(),
        "createdAt": now,
        "updatedAt": now,
    }


def test_indexing_twice_gives_the_same_inventory(live_db):
    first = ensure_indexes(live_db)
    second = ensure_indexes(live_db)

    assert first == second
    assert len(first["posts"]) == 11
    assert len(first["users"]) == 7


def test_unique_keys_after_indexing(live_db):
    ensure_indexes(live_db)
    load_fixtures(live_db, live_db.name, hasher=fake_hasher, now=NOW)

    admin = live_db["users"].find_one({"username": "admin"})
    admin.pop("_id")
    with pytest.raises(DuplicateKeyError):
        live_db["users"].insert_one(dict(admin, email="again@heimdall.com"))
    with pytest.raises(DuplicateKeyError):
        live_db["users"].insert_one(dict(admin, username="admin2"))
    with pytest.raises(DuplicateKeyError):
        live_db["posts"].insert_one(post("welcome-to-heimdall", "Again", "", ""))


def test_unique_index_over_duplicates_fails(live_db):
    live_db["settings"].insert_many([
        {"key": "title", "value": "a", "group": "general"},
        {"key": "title", "value": "b", "group": "general"},
    ])
    with pytest.raises(OperationFailure):
        ensure_indexes(live_db, ["settings"])


def test_title_match_outranks_body_match(live_db):
    ensure_indexes(live_db, ["posts"])
    live_db["posts"].insert_many([
        post("in-body", "Release notes", "What changed", "The zeppelin module was rewritten."),
        post("in-title", "Zeppelin", "What changed", "The module was rewritten."),
    ])

    results = search_posts(live_db, "zeppelin")

    assert [r["slug"] for r in results] == ["in-title", "in-body"]
    assert results[0]["score"] > results[1]["score"]


def test_text_search_does_not_stem(live_db):
    ensure_indexes(live_db, ["posts"])
    live_db["posts"].insert_one(post("running", "Running", "", ""))

    assert search_posts(live_db, "run") == []
    assert [r["slug"] for r in search_posts(live_db, "running")] == ["running"]
