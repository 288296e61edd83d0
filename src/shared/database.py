"""
MongoDB job catalog access using Motor (async driver).
"""

import re
from typing import Optional

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from .config import Settings, get_settings
from .models import Job

SEARCH_FIELDS = ("job_title", "company_name", "job_location", "job_description")


class Database:
    """Async MongoDB database wrapper."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Establish database connection."""
        if self._client is not None:
            return

        logger.info(f"Connecting to MongoDB: {self.settings.mongodb_database}")
        self._client = AsyncIOMotorClient(self.settings.mongodb_uri)
        self._db = self._client[self.settings.mongodb_database]

        # Verify connection
        await self._client.admin.command("ping")
        logger.info("MongoDB connection established")

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._client:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """Get database instance."""
        if self._db is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._db

    @property
    def jobs(self) -> AsyncIOMotorCollection:
        return self.db[self.settings.jobs_collection]

    # -------------------------------------------------------------------------
    # Jobs Collection
    # -------------------------------------------------------------------------

    async def find_all_jobs(self) -> list[Job]:
        """Return the whole job catalog. Filtering happens in the matcher."""
        documents = await self.jobs.find({}).to_list(length=None)
        logger.debug(f"Loaded {len(documents)} jobs from catalog")
        return [Job.from_document(doc) for doc in documents]

    async def search_jobs(self, query: str) -> list[Job]:
        """Case-insensitive text search over title, company, location and description."""
        if not query or not query.strip():
            raise ValueError("Search query is required")

        pattern = re.escape(query.strip())
        cursor = self.jobs.find(
            {"$or": [{field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS]}
        )
        documents = await cursor.to_list(length=None)
        logger.info(f"Search '{query}' matched {len(documents)} jobs")
        return [Job.from_document(doc) for doc in documents]
