from types import SimpleNamespace
from typing import Any

import pytest

from nftplugin.contracts.erc721 import ERC721_ABI, ERC721Collection
from nftplugin.models.failure import ExternalCallError, FailureKind


@pytest.fixture
def collection(ten_token_chain: Any) -> ERC721Collection:
    return ERC721Collection(SimpleNamespace(address="0xabc", functions=ten_token_chain))


class TestERC721Abi:
    def test_declares_enumerable_views(self) -> None:
        names = {entry["name"] for entry in ERC721_ABI}

        assert {"tokenURI", "totalSupply", "tokenByIndex", "ownerOf"} <= names

    def test_entries_are_view_functions(self) -> None:
        for entry in ERC721_ABI:
            assert entry["type"] == "function"
            assert entry["stateMutability"] == "view"


class TestERC721Collection:
    async def test_total_supply(self, collection: ERC721Collection) -> None:
        assert await collection.total_supply() == 10

    async def test_token_by_index(self, collection: ERC721Collection) -> None:
        assert await collection.token_by_index(3) == 103

    async def test_owner_of(self, collection: ERC721Collection) -> None:
        assert await collection.owner_of(100) == "0x0000000000000000000000000000000000000001"

    async def test_token_uri(self, collection: ERC721Collection) -> None:
        uri = await collection.token_uri(100)

        assert uri.startswith("data:application/json;base64,")

    async def test_call_failure_is_wrapped(self, collection: ERC721Collection) -> None:
        with pytest.raises(ExternalCallError) as exc_info:
            await collection.token_uri(999)

        assert exc_info.value.kind == FailureKind.EXTERNAL_CALL_FAILURE
        assert "tokenURI(999)" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)
