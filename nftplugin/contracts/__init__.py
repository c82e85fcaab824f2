from nftplugin.contracts.erc721 import ERC721_ABI, ERC721Collection

__all__ = [
    "ERC721_ABI",
    "ERC721Collection",
]
