"""
Database connection for the Heimdall bootstrap tools

The target store is selected from the environment:
- DATABASE_URL: MongoDB connection string
- DATABASE_NAME: database to operate on (e.g. "heimdall_dev")
"""

import os
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

DEFAULT_URL = "mongodb://localhost:27017"
DEFAULT_NAME = "heimdall_dev"


def database_url() -> str:
    return os.getenv("DATABASE_URL", DEFAULT_URL)


def database_name() -> str:
    return os.getenv("DATABASE_NAME", DEFAULT_NAME)


def is_production() -> bool:
    return os.getenv("APP_ENV", "development").lower() in ("prod", "production")


def get_client(url: Optional[str] = None) -> MongoClient:
    timeout_ms = int(os.getenv("DATABASE_TIMEOUT_MS", "5000"))
    return MongoClient(url or database_url(), serverSelectionTimeoutMS=timeout_ms)


def get_database(name: Optional[str] = None, url: Optional[str] = None) -> Database:
    """Connect and ping, so an unreachable store fails before any work starts."""
    client = get_client(url)
    client.admin.command("ping")
    return client[name or database_name()]
