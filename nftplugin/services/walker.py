"""
Sequential collection walker.

Visits every token of an enumerable ERC-721 collection in index order,
one index at a time, sleeping a fixed delay after each index so the
chain node and metadata gateway see at most `rpm` requests per minute.

Per-token failures are logged and skipped; the walk always runs to the
end of the collection (or the requested limit).
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from nftplugin.contracts.erc721 import ERC721Collection
from nftplugin.models.failure import NFTPluginError
from nftplugin.models.metadata import Metadata, RateLimit

logger = logging.getLogger(__name__)

# Given a token id, return the metadata to keep or None to skip it
TokenSelector = Callable[[int], Awaitable[Metadata | None]]

Sleeper = Callable[[float], Awaitable[None]]


class CollectionWalker:
    """Walks token indices 0..size-1 and collects selected metadata."""

    def __init__(self, collection: ERC721Collection, sleep: Sleeper = asyncio.sleep) -> None:
        """
        Initialize the walker.

        Args:
            collection: Contract view to enumerate
            sleep: Coroutine used for the inter-call delay
        """
        self.collection = collection
        self.sleep = sleep

    async def walk(
        self,
        select: TokenSelector,
        rate_limit: RateLimit,
        limit: int | None = None,
    ) -> list[Metadata]:
        """
        Walk the collection and keep whatever `select` returns.

        Args:
            select: Per-token coroutine returning metadata to keep, or None
            rate_limit: Delay applied after every index
            limit: Scan at most this many indices (None = whole collection)

        Returns:
            Selected metadata in index order

        Raises:
            ExternalCallError: If the collection size cannot be read
        """
        size = await self.collection.total_supply()
        if limit is not None:
            size = min(size, max(limit, 0))

        delay = rate_limit.delay
        logger.info(
            "Walking %d tokens of %s at %d rpm",
            size,
            self.collection.address,
            rate_limit.requests_per_minute,
        )

        selected: list[Metadata] = []
        index = 0
        while index < size:
            try:
                token_id = await self.collection.token_by_index(index)
                metadata = await select(token_id)
                if metadata is not None:
                    selected.append(metadata)
            except NFTPluginError as e:
                logger.warning("Skipping token at index %d: %s", index, e)

            index += 1

            if delay:
                logger.debug("Sleeping %.3fs before next token", delay)
                await self.sleep(delay)

        logger.info("Walk finished: %d of %d tokens selected", len(selected), size)
        return selected
