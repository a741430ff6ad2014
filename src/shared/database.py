"""
MongoDB persistence using Motor (async driver).

One requirement set per job and one match result per (candidate, job).
Writes are whole-document replacements: the last write wins, nothing is merged.
"""

from typing import Any, Optional

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.errors import PyMongoError

from scoring.aggregate import MatchResult

from .config import Settings, get_settings
from .errors import PersistenceError
from .models import RequirementSet


def _match_key(candidate_id: str, job_id: str) -> dict[str, str]:
    return {"candidate_id": candidate_id, "job_id": job_id}


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

        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            raise PersistenceError(f"MongoDB unreachable: {e}") from e
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

    # -------------------------------------------------------------------------
    # Requirement sets
    # -------------------------------------------------------------------------

    async def save_requirement_set(self, requirements: RequirementSet) -> None:
        """Create or replace the requirement set for a job."""
        document = requirements.model_dump(mode="python")
        try:
            await self.db.requirement_sets.replace_one(
                {"job_id": requirements.job_id}, document, upsert=True
            )
        except PyMongoError as e:
            raise PersistenceError(
                f"Failed to save requirements for job {requirements.job_id}: {e}"
            ) from e
        logger.debug(f"Saved requirement set for job {requirements.job_id}")

    async def get_requirement_set(self, job_id: str) -> Optional[RequirementSet]:
        """Get a job's requirement set, or None if the job was never analyzed."""
        try:
            document = await self.db.requirement_sets.find_one({"job_id": job_id}, {"_id": 0})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to load requirements for job {job_id}: {e}") from e
        return RequirementSet(**document) if document else None

    # -------------------------------------------------------------------------
    # Match results
    # -------------------------------------------------------------------------

    async def save_match_result(self, result: MatchResult) -> None:
        """Create or replace the match result for (candidate, job)."""
        key = _match_key(result.candidate_id, result.job_id)
        try:
            await self.db.match_results.replace_one(key, result.to_document(), upsert=True)
        except PyMongoError as e:
            raise PersistenceError(
                f"Failed to save match {result.candidate_id}/{result.job_id}: {e}"
            ) from e
        logger.debug(f"Saved match result {result.candidate_id}/{result.job_id}")

    async def get_match_result(self, candidate_id: str, job_id: str) -> Optional[MatchResult]:
        try:
            document = await self.db.match_results.find_one(
                _match_key(candidate_id, job_id), {"_id": 0}
            )
        except PyMongoError as e:
            raise PersistenceError(f"Failed to load match {candidate_id}/{job_id}: {e}") from e
        return MatchResult(**document) if document else None

    async def _find_results(
        self, query: dict[str, Any], label: str, limit: Optional[int]
    ) -> list[MatchResult]:
        """Results matching query, oldest analysis first. limit=None reads them all."""
        try:
            cursor = self.db.match_results.find(query, {"_id": 0}).sort("analyzed_at", ASCENDING)
            if limit is not None:
                cursor = cursor.limit(limit)
            documents: list[dict[str, Any]] = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise PersistenceError(f"Failed to load matches for {label}: {e}") from e

        if limit is not None and len(documents) >= limit:
            logger.warning(f"Match listing for {label} truncated at {limit} results")
        return [MatchResult(**doc) for doc in documents]

    async def get_match_results_by_job(
        self, job_id: str, limit: Optional[int] = None
    ) -> list[MatchResult]:
        """All results for a job, oldest analysis first."""
        return await self._find_results({"job_id": job_id}, f"job {job_id}", limit)

    async def get_match_results_by_candidate(
        self, candidate_id: str, limit: Optional[int] = None
    ) -> list[MatchResult]:
        """All results for a candidate across jobs, oldest analysis first."""
        return await self._find_results(
            {"candidate_id": candidate_id}, f"candidate {candidate_id}", limit
        )

    async def delete_match_result(self, candidate_id: str, job_id: str) -> bool:
        try:
            result = await self.db.match_results.delete_one(_match_key(candidate_id, job_id))
        except PyMongoError as e:
            raise PersistenceError(f"Failed to delete match {candidate_id}/{job_id}: {e}") from e
        return result.deleted_count > 0

    # -------------------------------------------------------------------------
    # Index Setup
    # -------------------------------------------------------------------------

    async def ensure_indexes(self) -> None:
        """Create database indexes."""
        try:
            await self.db.requirement_sets.create_indexes(
                [IndexModel([("job_id", ASCENDING)], unique=True)]
            )
            await self.db.match_results.create_indexes(
                [
                    IndexModel([("candidate_id", ASCENDING), ("job_id", ASCENDING)], unique=True),
                    IndexModel([("job_id", ASCENDING), ("overall_score", DESCENDING)]),
                    IndexModel([("candidate_id", ASCENDING), ("analyzed_at", ASCENDING)]),
                    IndexModel([("analyzed_at", DESCENDING)]),
                ]
            )
        except PyMongoError as e:
            raise PersistenceError(f"Failed to create indexes: {e}") from e
        logger.info("Database indexes created")
