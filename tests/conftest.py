from datetime import datetime, timezone
from unittest.mock import MagicMock

import mongomock
import pytest

from indexes import INDEXES

NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


def fake_hasher(password: str) -> str:
    return "test$" + password


@pytest.fixture
def db():
    return mongomock.MongoClient()["heimdall_test"]


@pytest.fixture
def constrained_db(db):
    """In-memory database carrying every catalogued index mongomock understands."""
    for name, specs in INDEXES.items():
        for spec in specs:
            if not spec.is_text:
                db[name].create_index(spec.keys, **spec.options())
    return db


@pytest.fixture
def mock_db():
    db = MagicMock(name="db")
    db.name = "heimdall_test"
    collections = {}
    for name in INDEXES:
        coll = MagicMock(name=name)
        coll.index_information.return_value = {"_id_": {"key": [("_id", 1)], "v": 2}}
        collections[name] = coll
    db.__getitem__.side_effect = collections.__getitem__
    db.collections = collections
    return db
