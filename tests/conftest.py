import base64
import json
from collections.abc import Callable
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest

from nftplugin.plugin import NFTPlugin
from nftplugin.resolvers.uri import data_uri_resolver

COLLECTION_ADDRESS = "0xbc4ca0eda7647a8ab7c2061c2e118a18a936f13d"
OWNER = "0xf7801b8115f3fe46ac55f8c0fdb5243726bdb66a"
OTHER_OWNER = "0x0000000000000000000000000000000000000001"


def _to_data_uri(payload: Any) -> str:
    encoded = base64.b64encode(json.dumps(payload).encode()).decode()
    return f"data:application/json;base64,{encoded}"


def _make_metadata(index: int, fur: str = "Brown", background: str = "Blue") -> dict[str, Any]:
    return {
        "image": f"ipfs://QmToken{index}",
        "attributes": [
            {"trait_type": "Fur", "value": fur},
            {"trait_type": "Background", "value": background},
        ],
    }


class _Call:
    def __init__(self, chain: "FakeChain", name: str, args: tuple[Any, ...], result: Any) -> None:
        self._chain = chain
        self._name = name
        self._args = args
        self._result = result

    async def call(self) -> Any:
        self._chain.calls.append((self._name, *self._args))
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


@dataclass
class FakeChain:
    """In-memory enumerable ERC-721 collection."""

    token_ids: list[int] = field(default_factory=list)
    owners: dict[int, str] = field(default_factory=dict)
    uris: dict[int, str] = field(default_factory=dict)
    supply: int | None = None
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def totalSupply(self) -> _Call:  # noqa: N802
        size = self.supply if self.supply is not None else len(self.token_ids)
        return _Call(self, "totalSupply", (), size)

    def tokenByIndex(self, index: int) -> _Call:  # noqa: N802
        result: Any
        if index < len(self.token_ids):
            result = self.token_ids[index]
        else:
            result = RuntimeError("execution reverted: index out of bounds")
        return _Call(self, "tokenByIndex", (index,), result)

    def ownerOf(self, token_id: int) -> _Call:  # noqa: N802
        result = self.owners.get(token_id, RuntimeError("execution reverted: nonexistent token"))
        return _Call(self, "ownerOf", (token_id,), result)

    def tokenURI(self, token_id: int) -> _Call:  # noqa: N802
        result = self.uris.get(token_id, RuntimeError("execution reverted: nonexistent token"))
        return _Call(self, "tokenURI", (token_id,), result)


def _make_w3(chain: FakeChain) -> SimpleNamespace:
    """Stand-in for AsyncWeb3 exposing eth.contract(address=..., abi=...)."""

    def contract(address: str, abi: list[dict[str, Any]]) -> SimpleNamespace:
        return SimpleNamespace(address=address, abi=abi, functions=chain)

    return SimpleNamespace(eth=SimpleNamespace(contract=contract))


@pytest.fixture
def ten_token_chain() -> FakeChain:
    """Ten tokens (ids 100..109); indices 3 and 7 are held by OWNER and have Robot fur."""
    chain = FakeChain()
    for index in range(10):
        token_id = 100 + index
        special = index in (3, 7)
        chain.token_ids.append(token_id)
        chain.owners[token_id] = OWNER if special else OTHER_OWNER
        chain.uris[token_id] = _to_data_uri(
            _make_metadata(index, fur="Robot" if special else "Brown")
        )
    return chain


@pytest.fixture
def sleep() -> AsyncMock:
    return AsyncMock(return_value=None)


@pytest.fixture
def plugin(ten_token_chain: FakeChain, sleep: AsyncMock) -> NFTPlugin:
    return NFTPlugin(
        _make_w3(ten_token_chain),
        COLLECTION_ADDRESS,
        uri_resolver=data_uri_resolver,
        sleep=sleep,
    )


@pytest.fixture
def collection_address() -> str:
    return COLLECTION_ADDRESS


@pytest.fixture
def owner() -> str:
    return OWNER


@pytest.fixture
def other_owner() -> str:
    return OTHER_OWNER


@pytest.fixture
def fake_chain() -> Callable[..., FakeChain]:
    """Factory for empty or hand-built chains: fake_chain(token_ids=[...], uris={...})."""
    return FakeChain


@pytest.fixture
def make_w3() -> Callable[[FakeChain], SimpleNamespace]:
    return _make_w3


@pytest.fixture
def to_data_uri() -> Callable[[Any], str]:
    return _to_data_uri


@pytest.fixture
def make_metadata() -> Callable[..., dict[str, Any]]:
    """make_metadata(index, fur="Brown", background="Blue") as stored for token index."""
    return _make_metadata
