"""
ERC-721 contract access.

Wraps the read-only calls the plugin needs (tokenURI, totalSupply,
tokenByIndex, ownerOf) over a web3.py AsyncContract. Walking a collection
requires the optional Enumerable extension (totalSupply, tokenByIndex).
"""

from typing import Any

from nftplugin.models.failure import ExternalCallError


def _view(name: str, inputs: list[tuple[str, str]], output: str) -> dict[str, Any]:
    return {
        "name": name,
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": arg, "type": typ} for arg, typ in inputs],
        "outputs": [{"name": "", "type": output}],
    }


ERC721_ABI: list[dict[str, Any]] = [
    _view("balanceOf", [("owner", "address")], "uint256"),
    _view("name", [], "string"),
    _view("ownerOf", [("tokenId", "uint256")], "address"),
    _view("symbol", [], "string"),
    _view("tokenByIndex", [("index", "uint256")], "uint256"),
    _view("tokenOfOwnerByIndex", [("owner", "address"), ("index", "uint256")], "uint256"),
    _view("tokenURI", [("tokenId", "uint256")], "string"),
    _view("totalSupply", [], "uint256"),
]


class ERC721Collection:
    """
    Read-only view of an ERC-721 collection.

    Every call failure is re-raised as ExternalCallError so callers only
    deal with the plugin's own error taxonomy.
    """

    def __init__(self, contract: Any) -> None:
        """
        Args:
            contract: web3.py AsyncContract (or anything exposing
                `functions.<name>(...).call()` coroutines)
        """
        self.contract = contract

    @property
    def address(self) -> str:
        return str(self.contract.address)

    async def _call(self, name: str, *args: Any) -> Any:
        try:
            function = getattr(self.contract.functions, name)
            return await function(*args).call()
        except Exception as e:
            raise ExternalCallError(
                f"Contract call {name}({', '.join(map(str, args))}) failed",
                detail=f"{type(e).__name__}: {e}",
            ) from e

    async def token_uri(self, token_id: int) -> str:
        return str(await self._call("tokenURI", token_id))

    async def total_supply(self) -> int:
        return int(await self._call("totalSupply"))

    async def token_by_index(self, index: int) -> int:
        return int(await self._call("tokenByIndex", index))

    async def owner_of(self, token_id: int) -> str:
        return str(await self._call("ownerOf", token_id))
