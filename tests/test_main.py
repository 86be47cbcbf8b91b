import io
import json
from functools import partial

import pytest
from pymongo.errors import ServerSelectionTimeoutError

import main
import seed
from tests.conftest import NOW, fake_hasher


@pytest.fixture
def target(monkeypatch, db):
    monkeypatch.setattr(main, "get_database", lambda name=None, url=None: db)
    monkeypatch.setattr(main, "load_fixtures", partial(seed.load_fixtures, hasher=fake_hasher, now=NOW))
    monkeypatch.delenv("APP_ENV", raising=False)
    return db


def unreachable(name=None, url=None):
    raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")


def test_seed_with_confirmation(target, capsys):
    assert main.main(["seed", "--db", "heimdall_test", "--confirm", "heimdall_test"]) == 0

    out = capsys.readouterr().out
    assert "Seeded heimdall_test:" in out
    assert "  settings: 20" in out
    assert target["users"].count_documents({}) == 2


def test_seed_with_wrong_confirmation(target):
    target["media"].insert_one({"url": "/uploads/a.png"})

    assert main.main(["seed", "--db", "heimdall_test", "--confirm", "heimdall"]) == 1
    assert target["media"].count_documents({}) == 1


def test_seed_needs_confirmation_when_not_interactive(target, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main.main(["seed", "--db", "heimdall_test"]) == 1
    assert target["users"].count_documents({}) == 0


def test_seed_refused_in_production(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.setattr(main, "get_database", unreachable)
    assert main.main(["seed", "--db", "heimdall", "--confirm", "heimdall"]) == 1


def test_unreachable_store_fails(monkeypatch):
    monkeypatch.setattr(main, "get_database", unreachable)
    assert main.main(["status"]) == 1


def test_indexes_command_prints_inventory(monkeypatch, mock_db, capsys):
    monkeypatch.setattr(main, "get_database", lambda name=None, url=None: mock_db)

    assert main.main(["indexes", "--collection", "users", "--collection", "posts"]) == 0

    out = capsys.readouterr().out
    assert "users: 1 indexes" in out
    assert "posts: 1 indexes" in out
    mock_db.collections["users"].create_indexes.assert_called_once()
    mock_db.collections["media"].create_indexes.assert_not_called()


def test_status_command(target, capsys):
    main.main(["seed", "--confirm", "heimdall_test"])
    capsys.readouterr()

    assert main.main(["status"]) == 0
    out = capsys.readouterr().out
    assert "Database: heimdall_test" in out
    assert "  posts: 3 documents" in out


def test_schema_command(capsys):
    assert main.main(["schema"]) == 0
    schemas = json.loads(capsys.readouterr().out)
    assert set(schemas) == {"users", "loginLogs", "posts", "comments", "settings", "media"}


def test_default_target_comes_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_NAME", "heimdall_staging")
    args = main.build_parser().parse_args(["status"])
    assert args.db == "heimdall_staging"


class Terminal(io.StringIO):
    def isatty(self):
        return True


def test_seed_aborted_at_the_prompt(target, monkeypatch):
    monkeypatch.setattr("sys.stdin", Terminal(""))

    def closed(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed)
    assert main.main(["seed", "--db", "heimdall_test"]) == 1
    assert target["users"].count_documents({}) == 0


def test_seed_confirmed_at_the_prompt(target, monkeypatch):
    monkeypatch.setattr("sys.stdin", Terminal(""))
    monkeypatch.setattr("builtins.input", lambda prompt: "heimdall_test\n")
    assert main.main(["seed", "--db", "heimdall_test"]) == 0
    assert target["users"].count_documents({}) == 2


def test_quiet_switch():
    assert main.build_parser().parse_args(["-q", "schema"]).quiet is True
    assert main.build_parser().parse_args(["schema"]).quiet is False
