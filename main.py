import argparse
import json
import logging
import sys
from typing import List, Optional

from pymongo.errors import PyMongoError

from database import database_name, get_database, is_production
from indexes import describe_indexes, ensure_indexes, format_inventory
from schemas import model_json_schemas
from seed import ResetRefused, count_documents, load_fixtures

logger = logging.getLogger("heimdall")


def cmd_indexes(args) -> int:
    db = get_database(args.db, args.url)
    inventory = ensure_indexes(db, args.collection or None)
    print(format_inventory(inventory))
    return 0


def confirm_reset(args) -> str:
    if args.confirm:
        return args.confirm
    if not sys.stdin.isatty():
        raise ResetRefused("Reset needs --confirm <database> when not run interactively")
    try:
        return input(f"This deletes every document in '{args.db}'. Type the database name to continue: ").strip()
    except EOFError:
        raise ResetRefused("Reset aborted at the confirmation prompt") from None


def cmd_seed(args) -> int:
    if is_production():
        raise ResetRefused("Fixtures are never loaded with APP_ENV=production")
    confirm = confirm_reset(args)
    db = get_database(args.db, args.url)
    report = load_fixtures(db, confirm)
    print(report.format())
    return 0


def cmd_status(args) -> int:
    db = get_database(args.db, args.url)
    print(f"Database: {db.name}")
    for name, count in count_documents(db).items():
        print(f"  {name}: {count} documents")
    print(format_inventory(describe_indexes(db)))
    return 0


def cmd_schema(args) -> int:
    print(json.dumps(model_json_schemas(), indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="heimdall-db", description="Heimdall database bootstrap tools")
    parser.add_argument("-q", "--quiet", action="store_true", help="Only report warnings and errors")

    target = argparse.ArgumentParser(add_help=False)
    target.add_argument("--db", default=database_name(), help="Target database (default: $DATABASE_NAME)")
    target.add_argument("--url", default=None, help="MongoDB URL (default: $DATABASE_URL)")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("indexes", parents=[target], help="Create indexes and print the inventory")
    p.add_argument("--collection", action="append", help="Limit to a collection (repeatable)")
    p.set_defaults(func=cmd_indexes)

    p = sub.add_parser("seed", parents=[target], help="Reset the database and load development fixtures")
    p.add_argument("--confirm", help="Repeat the database name to allow the reset")
    p.set_defaults(func=cmd_seed)

    p = sub.add_parser("status", parents=[target], help="Show document counts and indexes")
    p.set_defaults(func=cmd_status)

    p = sub.add_parser("schema", help="Print the document JSON schemas")
    p.set_defaults(func=cmd_schema)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.func(args)
    except ResetRefused as e:
        logger.error("%s", e)
        return 1
    except PyMongoError as e:
        logger.error("MongoDB error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
