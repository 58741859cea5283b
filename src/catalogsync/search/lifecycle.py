"""Index lifecycle: startup wait and lazy index creation."""

from __future__ import annotations

import asyncio
import logging

from elasticsearch import BadRequestError

from catalogsync.core.exceptions import IndexSetupError, SearchUnavailableError
from catalogsync.search.client import AsyncSearchClient
from catalogsync.search.mapping import INDEX_MAPPING

logger = logging.getLogger(__name__)


class IndexManager:
    """Makes sure the product index exists with the expected mapping."""

    def __init__(self, client: AsyncSearchClient) -> None:
        self._client = client

    @property
    def index_name(self) -> str:
        return self._client.index_name

    async def ensure_index(self) -> bool:
        """
        Create the index if it does not exist yet.

        Safe to call before every write.

        Returns:
            True if the index was created by this call

        Raises:
            IndexSetupError: If the engine is unreachable or rejects the mapping
        """
        try:
            if await self._client.index_exists():
                return False
            await self._client.create_index(INDEX_MAPPING)
        except Exception as e:
            # Another writer created it between the exists check and create
            if _already_exists(e):
                return False
            raise IndexSetupError(
                f"Could not ensure index {self.index_name}: {e}",
                index_name=self.index_name,
            ) from e

        logger.info(f"Created search index: {self.index_name}")
        return True

    async def wait_for_engine(self, max_attempts: int = 15, delay: float = 2.0) -> int:
        """
        Ping the engine until it answers. Only meant for process start.

        Args:
            max_attempts: Number of pings before giving up
            delay: Seconds to sleep between attempts

        Returns:
            The attempt number that succeeded

        Raises:
            SearchUnavailableError: If every attempt failed
        """
        last_error: str = "no response"

        for attempt in range(1, max_attempts + 1):
            try:
                if await self._client.ping():
                    return attempt
                last_error = "ping returned no response"
            except Exception as e:
                last_error = str(e)

            logger.warning(f"Search engine ping failed ({attempt}/{max_attempts}): {last_error}")
            if attempt < max_attempts:
                await asyncio.sleep(delay)

        raise SearchUnavailableError(
            f"Search engine connection failed after {max_attempts} attempts: {last_error}",
            attempts=max_attempts,
        )


def _already_exists(error: Exception) -> bool:
    if not isinstance(error, BadRequestError):
        return False
    if error.error == "resource_already_exists_exception":
        return True
    body = error.body
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return body["error"].get("type") == "resource_already_exists_exception"
    return False
