"""
NFT plugin for web3.py.

Reads metadata for the tokens of one ERC-721 collection, filters the
collection by attributes or owner, scores trait rarity and enumerates
theoretical trait combinations.

Example:
    >>> w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
    >>> plugin = NFTPlugin(w3, "0xbc4ca0eda7647a8ab7c2061c2e118a18a936f13d")
    >>> await plugin.get_image(38)
    'ipfs://QmZNurocAsqJA6B6MdchnpxxRqy6xAgigSuSTWvY9PmAaQ'
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter
from web3 import Web3

from nftplugin.analysis.combinations import generate_combinations
from nftplugin.analysis.matching import matches_attributes
from nftplugin.analysis.rarity import trait_rarity_score
from nftplugin.config import Settings, settings
from nftplugin.contracts.erc721 import ERC721_ABI, ERC721Collection
from nftplugin.models.failure import InvalidAddressError
from nftplugin.models.metadata import Attribute, Combination, Metadata, RateLimit, TraitCategory
from nftplugin.resolvers.uri import TokenURIResolver, default_resolver, unwrap_metadata
from nftplugin.services.walker import CollectionWalker, Sleeper

logger = logging.getLogger(__name__)

_ATTRIBUTES = TypeAdapter(list[Attribute])


def to_checksum(address: Any) -> str:
    """
    Validate an address and return its checksum form.

    Raises:
        InvalidAddressError: If the value is not a well-formed address
    """
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidAddressError(address)
    return str(Web3.to_checksum_address(address))


class NFTPlugin:
    """
    Metadata reader for a single ERC-721 collection.

    Collection walks (filter_by_attributes, filter_by_owner,
    get_trait_rarity_score) require the Enumerable extension and issue
    one contract call plus one metadata fetch per token, spaced to respect
    `rpm` requests per minute.
    """

    plugin_namespace = "nft_plugin"

    def __init__(
        self,
        w3: Any,
        contract_address: str,
        *,
        abi: list[dict[str, Any]] | None = None,
        uri_resolver: TokenURIResolver | None = None,
        config: Settings | None = None,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        """
        Initialize the plugin.

        Args:
            w3: AsyncWeb3 instance used for contract calls
            contract_address: Address of the ERC-721 collection
            abi: Contract ABI. Defaults to the minimal ERC-721 ABI.
            uri_resolver: Async callable mapping a token URI to metadata.
                Defaults to IPFSResolver on the configured gateway.
            config: Settings override. Defaults to the module settings.
            sleep: Coroutine used for the rate-limit delay

        Raises:
            InvalidAddressError: If contract_address is not a valid address
        """
        self.config = config if config is not None else settings
        self.contract_address = to_checksum(contract_address)
        self.w3 = w3
        self.abi = abi or ERC721_ABI
        self.handle_token_uri: TokenURIResolver = uri_resolver or default_resolver(self.config)
        self.collection = ERC721Collection(
            w3.eth.contract(address=self.contract_address, abi=self.abi)
        )
        self.walker = CollectionWalker(self.collection, sleep=sleep)

    def attach(self, client: Any = None) -> None:
        """
        Expose the plugin on a client as `client.nft_plugin`.

        Args:
            client: Object to attach to. Defaults to the web3 instance the
                plugin was built with.

        Raises:
            ValueError: If the client already has a different `nft_plugin`
        """
        client = self.w3 if client is None else client
        current = getattr(client, self.plugin_namespace, None)
        if current is not None and current is not self:
            raise ValueError(
                f"{type(client).__name__} already has an attribute named {self.plugin_namespace!r}"
            )
        setattr(client, self.plugin_namespace, self)

    def _rate_limit(self, rpm: int | None) -> RateLimit:
        return RateLimit.from_rpm(rpm, default=self.config.default_rpm)

    async def get_metadata(self, token_id: int | str) -> Metadata | None:
        """
        Fetch the metadata of one token.

        Args:
            token_id: Token id (decimal strings are accepted)

        Returns:
            The token's metadata, or None if it could not be fetched
        """
        try:
            uri = await self.collection.token_uri(int(token_id))
            payload = await self.handle_token_uri(uri)
            return unwrap_metadata(payload)
        except Exception as e:
            logger.warning("Error fetching NFT %s: %s", token_id, e)
            return None

    async def get_image(self, token_id: int | str) -> str | None:
        """Image link of one token, or None if unavailable."""
        metadata = await self.get_metadata(token_id)
        if metadata is None:
            return None
        return metadata.get("image")

    async def get_collection_size(self) -> int:
        """
        Number of tokens in the collection (totalSupply).

        Raises:
            ExternalCallError: If the contract call fails
        """
        return await self.collection.total_supply()

    async def filter_by_attributes(
        self,
        desired: Sequence[Attribute],
        rpm: int | None = None,
        limit: int | None = None,
    ) -> list[Metadata]:
        """
        Metadata of every token carrying all desired attributes.

        Args:
            desired: Attributes that must all be present
            rpm: Requests per minute. None uses the configured default, 0 disables.
            limit: Scan only the first `limit` token indices

        Returns:
            Matching metadata in index order

        Raises:
            pydantic.ValidationError: If desired is not a list of attributes
            ExternalCallError: If the collection size cannot be read
        """
        wanted = _ATTRIBUTES.validate_python(list(desired))

        async def select(token_id: int) -> Metadata | None:
            metadata = await self.get_metadata(token_id)
            if metadata is not None and matches_attributes(metadata, wanted):
                return metadata
            return None

        return await self.walker.walk(select, self._rate_limit(rpm), limit)

    async def filter_by_owner(
        self,
        owner: str,
        rpm: int | None = None,
        limit: int | None = None,
    ) -> list[Metadata]:
        """
        Metadata of every token held by `owner`.

        Args:
            owner: Holder address (any casing)
            rpm: Requests per minute. None uses the configured default, 0 disables.
            limit: Scan only the first `limit` token indices

        Returns:
            Owned tokens' metadata in index order

        Raises:
            InvalidAddressError: If owner is not a valid address
            ExternalCallError: If the collection size cannot be read
        """
        target = to_checksum(owner)

        async def select(token_id: int) -> Metadata | None:
            holder = await self.collection.owner_of(token_id)
            if to_checksum(holder) != target:
                return None
            return await self.get_metadata(token_id)

        return await self.walker.walk(select, self._rate_limit(rpm), limit)

    async def get_trait_rarity_score(
        self,
        trait: Attribute,
        rpm: int | None = None,
        limit: int | None = None,
    ) -> int:
        """
        Collection size divided by the number of tokens carrying `trait`.

        The numerator is always the full collection size, even when `limit`
        restricts the scan.

        Returns:
            Integer rarity score, 0 if no token carries the trait
        """
        size = await self.get_collection_size()
        matches = await self.filter_by_attributes([trait], rpm=rpm, limit=limit)
        return trait_rarity_score(size, len(matches))

    def generate_combinations(self, categories: Sequence[TraitCategory]) -> list[Combination]:
        """All theoretical attribute combinations; see analysis.generate_combinations."""
        return generate_combinations(categories)
