"""
Mongo Client — raw database connection management.
The connection is opened lazily on first use.
"""

from __future__ import annotations

import logging
from typing import Any

from pymongo import MongoClient as PyMongoClient

from printshop_pricing.config import get_settings

logger = logging.getLogger(__name__)


class MongoClient:
    """Thin wrapper around pymongo holding one client per process."""

    def __init__(self, uri: str | None = None, database: str | None = None):
        self.settings = get_settings()
        self._uri = uri or self.settings.mongodb_uri
        self._database = database or self.settings.mongodb_database
        self._client: Any = None
        self._db: Any = None

    def connect(self) -> None:
        """Establish the MongoDB connection."""
        self._client = PyMongoClient(self._uri)
        self._db = self._client[self._database]
        logger.info(f"Connected to MongoDB: {self._database}")

    def get_database(self) -> Any:
        """Return the database handle."""
        if self._db is None:
            self.connect()
        return self._db

    def close(self) -> None:
        """Close the connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")
