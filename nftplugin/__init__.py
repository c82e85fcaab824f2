from nftplugin.analysis import generate_combinations, matches_attributes, trait_rarity_score
from nftplugin.contracts import ERC721_ABI, ERC721Collection
from nftplugin.models import (
    Attribute,
    ExternalCallError,
    FailureKind,
    InvalidAddressError,
    InvalidDataURIError,
    InvalidJSONError,
    InvalidURISchemeError,
    Metadata,
    NFTPluginError,
    RateLimit,
)
from nftplugin.plugin import NFTPlugin
from nftplugin.resolvers import (
    BlankNetworkResolver,
    IPFSResolver,
    data_uri_resolver,
    unwrap_metadata,
)

__all__ = [
    "ERC721_ABI",
    "Attribute",
    "BlankNetworkResolver",
    "ERC721Collection",
    "ExternalCallError",
    "FailureKind",
    "IPFSResolver",
    "InvalidAddressError",
    "InvalidDataURIError",
    "InvalidJSONError",
    "InvalidURISchemeError",
    "Metadata",
    "NFTPlugin",
    "NFTPluginError",
    "RateLimit",
    "data_uri_resolver",
    "generate_combinations",
    "matches_attributes",
    "trait_rarity_score",
    "unwrap_metadata",
]
